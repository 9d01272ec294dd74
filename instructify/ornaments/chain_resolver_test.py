# Copyright 2022 The Magenta Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for chain_resolver."""

from absl.testing import absltest
from instructify.common import testing_lib
from instructify.ornaments import chain_resolver


def _marker(xml_id, prev=None, next_id=None):
  attributes = ' xml:id="%s"' % xml_id
  if prev:
    attributes += ' prev="#%s"' % prev
  if next_id:
    attributes += ' next="#%s"' % next_id
  return testing_lib.parse_test_element('<mordent%s/>' % attributes)


class ChainResolverTest(absltest.TestCase):

  def testAdmitUnchained(self):
    resolver = chain_resolver.ChainResolver()
    marker = _marker('m1')
    self.assertTrue(resolver.admit(marker))
    self.assertTrue(resolver.is_resolved('m1'))
    # A marker is realized only once.
    self.assertFalse(resolver.admit(marker))

  def testDeferUntilPreviousIsResolved(self):
    resolver = chain_resolver.ChainResolver()
    first = _marker('m1', next_id='m2')
    second = _marker('m2', prev='m1')

    self.assertFalse(resolver.admit(second))
    self.assertFalse(resolver.is_resolved('m2'))
    self.assertEqual(1, resolver.num_pending())

    self.assertTrue(resolver.admit(first))
    released = resolver.release(first)
    self.assertEqual(['m2'], [marker.id for marker in released])
    self.assertEqual(0, resolver.num_pending())
    self.assertTrue(resolver.admit(second))

  def testAdmitWhenPreviousAlreadyResolved(self):
    resolver = chain_resolver.ChainResolver()
    self.assertTrue(resolver.admit(_marker('m1', next_id='m2')))
    self.assertTrue(resolver.admit(_marker('m2', prev='m1')))

  def testForce(self):
    resolver = chain_resolver.ChainResolver()
    orphan = _marker('m2', prev='missing')
    self.assertFalse(resolver.admit(orphan))
    pending = resolver.pop_pending()
    self.assertEqual('m2', pending.id)
    self.assertIsNone(resolver.pop_pending())
    self.assertTrue(resolver.admit(pending, force=True))

  def testPopPendingInOrder(self):
    resolver = chain_resolver.ChainResolver()
    resolver.admit(_marker('b', prev='x'))
    resolver.admit(_marker('c', prev='y'))
    resolver.admit(_marker('d', prev='x'))
    self.assertEqual(['b', 'd', 'c'],
                     [resolver.pop_pending().id for _ in range(3)])

  def testReleaseWithoutWaiting(self):
    resolver = chain_resolver.ChainResolver()
    self.assertEqual([], resolver.release(_marker('m1')))

  def testSelfReference(self):
    resolver = chain_resolver.ChainResolver()
    with self.assertRaises(chain_resolver.MalformedChainError):
      resolver.admit(_marker('m1', prev='m1'))
    with self.assertRaises(chain_resolver.MalformedChainError):
      resolver.admit(_marker('m1', next_id='m1'))


if __name__ == '__main__':
  absltest.main()
