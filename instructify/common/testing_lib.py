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

"""Testing support code."""

from instructify.mei import constants
from instructify.mei import mei_element
from instructify.mei import mei_io
from lxml import etree

MEI_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<mei xmlns="http://www.music-encoding.org/ns/mei" meiversion="4.0.1">
  <meiHead><fileDesc><titleStmt><title>Test</title></titleStmt>
  <pubStmt/></fileDesc></meiHead>
  <music><body><mdiv><score>
    %s
  </score></mdiv></body></music>
</mei>
"""


def parse_test_mei(score_content):
  """Parses the contents of a `<score>` wrapped in a minimal MEI document."""
  return mei_io.parse_mei_string(MEI_TEMPLATE % score_content, 'test.mei')


def find_by_id(document, identifier):
  """Returns the `MeiElement` with the given xml:id, or None."""
  for element in document.root.iter():
    if (mei_element.is_element(element) and
        element.get(constants.XML_ID) == identifier):
      return mei_element.MeiElement(element)
  return None


def instructions(document):
  """Returns all instruction elements of a document in document order."""
  return [mei_element.MeiElement(element)
          for element in document.root.iter('{*}supplied')
          if element.get('type') == 'instruction']


def instruction_after(document, note_id):
  """Returns the element following the note with the given xml:id."""
  note = find_by_id(document, note_id)
  following = note.element.getnext()
  if following is None:
    return None
  return mei_element.MeiElement(following)


def describe(instruction):
  """Describes the children of an instruction as short strings.

  Notes are described as pitch name, accidental and octave, e.g. 'c4' or
  'fs5', repeat barlines by their form, e.g. 'rptstart'.
  """
  description = []
  for child in instruction.get_children():
    if child.name == 'barLine':
      description.append(child.get('form'))
    else:
      description.append('%s%s%s' % (
          child.element.get('pname'), child.element.get('accid') or '',
          child.element.get('oct')))
  return description


def parse_test_element(xml):
  """Parses an element fragment in the MEI namespace to an `MeiElement`.

  Args:
    xml: The fragment, e.g. '<note pname="c" oct="4"/>'. A default namespace
        declaration is added to its root element.

  Returns:
    The `MeiElement` of the root element.
  """
  tag_end = 1
  while tag_end < len(xml) and xml[tag_end] not in ' />':
    tag_end += 1
  xml = '%s xmlns="%s"%s' % (xml[:tag_end], constants.MEI_NAMESPACE,
                             xml[tag_end:])
  return mei_element.MeiElement(etree.fromstring(xml))
