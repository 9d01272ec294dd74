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

"""Reading and writing MEI documents.

Loads an .mei (or .xml) file into an `lxml.etree` tree and gives access to
the `<music>` element and its `<body>` elements. The tree is modified in
place by the ornament code and can be serialized again afterwards.
"""

import os

from instructify.mei import mei_element
from lxml import etree


class MeiParseException(Exception):
  """Exception thrown when the MEI contents cannot be parsed."""
  pass


class MeiDocument(object):
  """Internal representation of an MEI document.

  Attributes:
    root: The root `lxml.etree` element (usually `<mei>`).
    filename: Path the document was read from, or None.
  """

  def __init__(self, root, filename=None):
    self.root = root
    self.filename = filename

  @property
  def name(self):
    if self.filename:
      return os.path.basename(self.filename)
    return 'MEI data'

  @property
  def music(self):
    """The first `<music>` element as an `MeiElement`, or None."""
    music = next(self.root.iter('{*}music'), None)
    if music is None:
      return None
    return mei_element.MeiElement(music)

  def bodies(self):
    """Returns the `<body>` children of `<music>` as a list of `MeiElement`s."""
    music = self.music
    if music is None:
      return []
    return [child for child in music.get_children() if child.name == 'body']

  def to_string(self):
    """Serializes the document. Returns UTF-8 encoded bytes."""
    return etree.tostring(
        self.root.getroottree(),
        xml_declaration=True,
        encoding='UTF-8')

  def write(self, filename):
    with open(filename, 'wb') as f:
      f.write(self.to_string())


def parse_mei_string(mei_string, filename=None):
  """Parses MEI contents given as a string or bytes.

  Args:
    mei_string: The MEI document.
    filename: Optional name recorded on the document.

  Returns:
    An `MeiDocument`.

  Raises:
    MeiParseException: If the contents are not well-formed XML.
  """
  if isinstance(mei_string, str):
    mei_string = mei_string.encode('utf-8')
  try:
    root = etree.fromstring(mei_string)
  except etree.XMLSyntaxError as exception:
    raise MeiParseException(exception)
  return MeiDocument(root, filename)


def parse_mei_file(filename):
  """Parses an MEI file.

  Args:
    filename: The path of an MEI file.

  Returns:
    An `MeiDocument`.

  Raises:
    MeiParseException: If the file cannot be read or parsed.
  """
  try:
    tree = etree.parse(filename)
  except (IOError, etree.XMLSyntaxError) as exception:
    raise MeiParseException(exception)
  return MeiDocument(tree.getroot(), filename)
