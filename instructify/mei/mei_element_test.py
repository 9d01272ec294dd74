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

"""Tests for mei_element."""

from absl.testing import absltest
from instructify.common import testing_lib
from instructify.mei import constants
from instructify.mei import mei_element

_parse = testing_lib.parse_test_element


class MeiElementTest(absltest.TestCase):

  def testCreate(self):
    note = mei_element.MeiElement.create('note')
    self.assertEqual('note', note.name)
    self.assertEqual(constants.MEI_NAMESPACE, note.namespace)
    self.assertTrue(note.id.startswith(constants.ID_PREFIX))

  def testCreateIdsAreUnique(self):
    ids = set(mei_element.MeiElement.create('note').id for _ in range(100))
    self.assertLen(ids, 100)

  def testGetIdCreatesMissingId(self):
    measure = _parse('<measure/>')
    self.assertIsNone(measure.id)
    new_id = measure.get_id()
    self.assertEqual(new_id, measure.id)
    self.assertEqual(new_id, measure.get_id())

  def testGetPrefersGestural(self):
    measure = _parse('<measure><note accid="f" accid.ges="n"/></measure>')
    note = measure.get_first_child_by_name('note')
    self.assertEqual('n', note.get('accid'))

  def testGetFromChild(self):
    measure = _parse('<measure><note><accid accid="s"/></note></measure>')
    note = measure.get_first_child_by_name('note')
    self.assertFalse(note.has('accid'))
    self.assertEqual('s', note.get('accid'))

  def testGetFromNestedChild(self):
    measure = _parse(
        '<measure><note><verse/><choice><corr><accid accid="ff"/></corr>'
        '</choice></note></measure>')
    note = measure.get_first_child_by_name('note')
    self.assertEqual('ff', note.get('accid'))

  def testGetFromChildSkipsIgnoredWrappers(self):
    for wrapper in constants.IGNORED_WRAPPERS:
      measure = _parse(
          '<measure><note><%s><accid accid="s"/></%s></note></measure>' % (
              wrapper, wrapper))
      note = measure.get_first_child_by_name('note')
      self.assertIsNone(note.get('accid'))

  def testGetMissing(self):
    measure = _parse('<measure/>')
    self.assertIsNone(measure.get('n'))

  def testGetAsInt(self):
    measure = _parse('<measure n="12" label="x"/>')
    self.assertEqual(12, measure.get_as_int('n'))
    self.assertIsNone(measure.get_as_int('staff'))
    with self.assertRaises(mei_element.MalformedAttributeException):
      measure.get_as_int('label')

  def testGetReference(self):
    measure = _parse('<measure><trill startid="#n1" prev="t0"/></measure>')
    trill = measure.get_first_child_by_name('trill')
    self.assertEqual('n1', trill.get_reference('startid'))
    self.assertEqual('t0', trill.get_reference('prev'))
    self.assertIsNone(trill.get_reference('next'))

  def testSetId(self):
    measure = _parse('<measure/>')
    measure.set('id', 'm1')
    self.assertEqual('m1', measure.id)
    self.assertEqual('m1', measure.element.get(constants.XML_ID))

  def testGetChildrenSkipsComments(self):
    measure = _parse('<measure><!-- c --><staff/><?pi x?><staff/></measure>')
    self.assertEqual(['staff', 'staff'],
                     [child.name for child in measure.get_children()])

  def testInsertAfter(self):
    measure = _parse('<measure><note xml:id="a"/><note xml:id="b"/></measure>')
    first = measure.get_first_child_by_name('note')
    first.insert_after(mei_element.MeiElement.create('supplied'))
    self.assertEqual(['note', 'supplied', 'note'],
                     [child.name for child in measure.get_children()])

  def testFindDescendantById(self):
    measure = _parse(
        '<measure><staff><layer><note xml:id="n1"/></layer></staff>'
        '<trill xml:id="t1" startid="#n1"/></measure>')
    trill = measure.get_first_child_by_name('trill')
    note = trill.find_descendant_by_id('n1')
    self.assertEqual('note', note.name)
    self.assertIsNone(trill.find_descendant_by_id('t1'))
    self.assertIsNone(trill.find_descendant_by_id('missing'))

  def testGetParent(self):
    measure = _parse('<measure><staff/></measure>')
    staff = measure.get_first_child_by_name('staff')
    self.assertEqual('measure', staff.get_parent().name)
    self.assertIsNone(measure.get_parent())


if __name__ == '__main__':
  absltest.main()
