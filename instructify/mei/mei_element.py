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

"""Object-oriented access to MEI elements.

`MeiElement` wraps an `lxml.etree` element and reads attributes the way the
ornament code expects them: a gestural variant (e.g. `accid.ges`) is preferred
over the written attribute, and a missing attribute is looked up on a child
element of the same name (e.g. `<note><accid accid="s"/></note>`). Children
inside editorial wrappers listed in `constants.IGNORED_WRAPPERS` are skipped
during that lookup.
"""

import uuid

from instructify.mei import constants
from lxml import etree


class MalformedAttributeException(ValueError):
  """Exception thrown when an attribute value cannot be parsed."""
  pass


def _attribute_key(name):
  if name == 'id':
    return constants.XML_ID
  return name


def is_element(node):
  """Returns True for elements, False for comments and processing instructions.
  """
  return isinstance(node.tag, str)


class MeiElement(object):
  """Wrapper around an MEI element of an `lxml.etree` tree."""

  def __init__(self, element):
    self.element = element

  @classmethod
  def create(cls, name, namespace=constants.MEI_NAMESPACE):
    """Creates a new detached element with a fresh xml:id.

    Args:
      name: The local name of the element, e.g. 'note'.
      namespace: The namespace URI, or None for an element without namespace.

    Returns:
      A new `MeiElement`.
    """
    tag = '{%s}%s' % (namespace, name) if namespace else name
    mei_element = cls(etree.Element(tag))
    mei_element.create_new_id()
    return mei_element

  @property
  def name(self):
    return etree.QName(self.element).localname

  @property
  def namespace(self):
    return etree.QName(self.element).namespace

  @property
  def id(self):
    """The xml:id of this element, or None."""
    return self.element.get(constants.XML_ID)

  def get_id(self):
    """Returns the xml:id of this element, creating one if it is missing."""
    if self.id is None:
      return self.create_new_id()
    return self.id

  def create_new_id(self):
    new_id = constants.ID_PREFIX + uuid.uuid4().hex
    self.element.set(constants.XML_ID, new_id)
    return new_id

  def has(self, name):
    """Returns True if the attribute is set on this element itself."""
    return _attribute_key(name) in self.element.attrib

  def get(self, name):
    """Returns the value of an attribute.

    The gestural variant `<name>.ges` is preferred over `<name>`. If neither is
    set, the first child element called `name` is searched (depth first,
    skipping ignored editorial wrappers) and its value is returned.

    Args:
      name: The attribute name, e.g. 'accid'.

    Returns:
      The attribute value as a string, or None if it is not set.
    """
    gestural = name + constants.GESTURAL_SUFFIX
    if self.has(gestural):
      return self.element.get(gestural)
    if self.has(name):
      return self.element.get(_attribute_key(name))
    return self.get_from_child(name, constants.IGNORED_WRAPPERS)

  def get_as_int(self, name):
    """Returns the value of an attribute as an integer, or None if not set.

    Raises:
      MalformedAttributeException: If the value is not an integer.
    """
    value = self.get(name)
    if value is None:
      return None
    try:
      return int(value)
    except ValueError:
      raise MalformedAttributeException(
          'Attribute %s of <%s> is not an integer: %r' % (
              name, self.name, value))

  def get_reference(self, name):
    """Returns the identifier an URI attribute such as `startid` points to."""
    value = self.get(name)
    if value is None:
      return None
    return value[1:] if value.startswith('#') else value

  def get_from_child(self, name, ignored_names=()):
    """Reads an attribute from a child element with the same name.

    Example: `name = 'accid'` finds `<accid accid="n"/>` inside a note.

    Args:
      name: The attribute and element name.
      ignored_names: Names of wrapper elements not to search in, e.g. 'del'.

    Returns:
      The value, or None if no such child carries it.
    """
    for child in self.get_children():
      if child.name == name:
        return child.get(name)
      if child.name not in ignored_names:
        value = child.get_from_child(name, ignored_names)
        if value is not None:
          return value
    return None

  def set(self, name, value):
    self.element.set(_attribute_key(name), str(value))

  def get_parent(self):
    parent = self.element.getparent()
    if parent is None:
      return None
    return MeiElement(parent)

  def get_children(self):
    """Returns a list of all child elements, skipping comments."""
    return [MeiElement(child) for child in self.element if is_element(child)]

  def get_first_child_by_name(self, name):
    for child in self.get_children():
      if child.name == name:
        return child
    return None

  def append_child(self, child):
    self.element.append(child.element)

  def insert_after(self, sibling):
    """Inserts `sibling` directly after this element."""
    self.element.addnext(sibling.element)

  def find_descendant_by_id(self, identifier):
    """Finds an element with the given xml:id among the parent's descendants.

    Args:
      identifier: The xml:id to look for, without leading '#'.

    Returns:
      The `MeiElement` found, or None.
    """
    parent = self.element.getparent()
    if parent is None:
      return None
    for candidate in parent.iter():
      if (candidate is not self.element and is_element(candidate) and
          candidate.get(constants.XML_ID) == identifier):
        return MeiElement(candidate)
    return None

  def __repr__(self):
    return '<MeiElement %s id=%s>' % (self.name, self.id)
