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

"""Tests for ornament_catalog."""

import os
import tempfile

from absl.testing import absltest
from instructify.ornaments import ornament_catalog

CATALOG = """
% comment line
# upper mordent
0
1
0

#  double cadence lower prefix  
-1
 0
|:
1
0
:|
"""


class OrnamentCatalogTest(absltest.TestCase):

  def testParseCatalog(self):
    catalog = ornament_catalog.parse_catalog(CATALOG)
    self.assertLen(catalog, 2)
    self.assertEqual(['double cadence lower prefix', 'upper mordent'],
                     catalog.names())
    self.assertEqual((0, 1, 0), catalog['upper mordent'])
    self.assertEqual((-1, 0, '|:', 1, 0, ':|'),
                     catalog['double cadence lower prefix'])
    self.assertNotIn('trill', catalog)
    self.assertIsNone(catalog.get('trill'))

  def testParseAlteration(self):
    self.assertEqual(-2, ornament_catalog.parse_alteration('-2'))
    self.assertEqual(':|:', ornament_catalog.parse_alteration(':|:'))
    with self.assertRaises(ornament_catalog.CatalogParseException):
      ornament_catalog.parse_alteration('up')

  def testAlterationBeforeName(self):
    with self.assertRaises(ornament_catalog.CatalogParseException):
      ornament_catalog.parse_catalog('1\n# trill\n0\n')

  def testEmptyName(self):
    with self.assertRaises(ornament_catalog.CatalogParseException):
      ornament_catalog.parse_catalog('#\n0\n')

  def testLaterNameReplacesEarlier(self):
    catalog = ornament_catalog.parse_catalog('# trill\n0\n# trill\n1\n')
    self.assertEqual((1,), catalog['trill'])

  def testLoadBundledCatalog(self):
    catalog = ornament_catalog.load_catalog()
    self.assertEqual((0, 1, 0, 1), catalog['trill'])
    self.assertEqual((0, -1, 0), catalog['lower mordent'])
    self.assertEqual((1, 0, -1, 0), catalog['turn'])
    self.assertIn('double cadence upper prefix', catalog)
    self.assertIn('slide trill bach', catalog)

  def testLoadMissingCatalog(self):
    catalog = ornament_catalog.load_catalog(
        os.path.join(tempfile.gettempdir(), 'no_such_dir', 'ornaments.dict'))
    self.assertEmpty(catalog.names())

  def testLoadMalformedCatalogKeepsEntriesReadSoFar(self):
    with tempfile.TemporaryDirectory() as temp_dir:
      path = os.path.join(temp_dir, 'ornaments.dict')
      with open(path, 'w') as f:
        f.write('# trill\n0\n1\n# turn\nup\n')
      catalog = ornament_catalog.load_catalog(path)
    self.assertEqual((0, 1), catalog['trill'])
    self.assertEqual((), catalog['turn'])


if __name__ == '__main__':
  absltest.main()
