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

"""Tests for mei_io."""

import os
import tempfile

from absl.testing import absltest
from instructify.common import testing_lib
from instructify.mei import mei_io


class MeiIoTest(absltest.TestCase):

  def testParseString(self):
    document = testing_lib.parse_test_mei('<section/>')
    self.assertEqual('test.mei', document.name)
    self.assertEqual('music', document.music.name)
    self.assertEqual(['body'], [body.name for body in document.bodies()])

  def testParseStringWithoutMusic(self):
    document = mei_io.parse_mei_string(
        '<mei xmlns="http://www.music-encoding.org/ns/mei"><meiHead/></mei>')
    self.assertEqual('MEI data', document.name)
    self.assertIsNone(document.music)
    self.assertEqual([], document.bodies())

  def testParseMalformedString(self):
    with self.assertRaises(mei_io.MeiParseException):
      mei_io.parse_mei_string('<mei><music></mei>')

  def testParseMissingFile(self):
    with self.assertRaises(mei_io.MeiParseException):
      mei_io.parse_mei_file(
          os.path.join(tempfile.gettempdir(), 'no_such_dir', 'missing.mei'))

  def testWriteAndParseFile(self):
    document = testing_lib.parse_test_mei(
        '<section><measure n="1"/></section>')
    with tempfile.TemporaryDirectory() as temp_dir:
      filename = os.path.join(temp_dir, 'score.mei')
      document.write(filename)
      reread = mei_io.parse_mei_file(filename)
    self.assertEqual('score.mei', reread.name)
    self.assertEqual(document.to_string(), reread.to_string())

  def testToString(self):
    document = testing_lib.parse_test_mei('<section/>')
    mei_string = document.to_string()
    self.assertIsInstance(mei_string, bytes)
    self.assertTrue(mei_string.startswith(b"<?xml version='1.0'"))
    self.assertIn(b'<section/>', mei_string)


if __name__ == '__main__':
  absltest.main()
