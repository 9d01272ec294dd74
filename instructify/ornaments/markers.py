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

"""Ornament markers and their full names.

An ornament marker is one of the MEI control events `<trill>`, `<turn>`,
`<mordent>` and `<ornam>`. Its full name selects the realization in the
ornament catalog, e.g. "trill", "lower mordent", "upper turn", or for an
`<ornam>` the words of its symbol's SMuFL glyph name, e.g. "double cadence
lower prefix" for `ornamentPrecompDoubleCadenceLowerPrefix`.
"""

import enum
import re

# Prefix of the SMuFL glyph names of precomposed ornaments.
GLYPH_NAME_PREFIX = 'ornamentPrecomp'

# Form value that does not qualify the marker name.
UNKNOWN_FORM = 'unknown'

_CAMEL_CASE_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


class MarkerKind(enum.Enum):
  """The supported ornament markers, named after their MEI elements."""

  TRILL = 'trill'
  TURN = 'turn'
  MORDENT = 'mordent'
  ORNAM = 'ornam'

  @classmethod
  def from_element_name(cls, name):
    """Returns the `MarkerKind` for an element name, or None."""
    try:
      return cls(name)
    except ValueError:
      return None


def glyph_name_to_full_name(glyph_name):
  """Converts a SMuFL glyph name to an ornament full name.

  Args:
    glyph_name: A glyph name such as 'ornamentPrecompSlideTrillBach'.

  Returns:
    The lower case words of the glyph name without prefix, e.g.
    'slide trill bach', or None if nothing is left.
  """
  if glyph_name.startswith(GLYPH_NAME_PREFIX):
    glyph_name = glyph_name[len(GLYPH_NAME_PREFIX):]
  if not glyph_name:
    return None
  return _CAMEL_CASE_BOUNDARY.sub(' ', glyph_name).lower()


def full_name(marker):
  """Returns the full name of an ornament marker.

  Args:
    marker: An `MeiElement` of a `<trill>`, `<turn>`, `<mordent>` or
        `<ornam>`.

  Returns:
    The full name, or None if the marker is not supported (no marker element,
    or an `<ornam>` without symbol glyph name).
  """
  kind = MarkerKind.from_element_name(marker.name)
  if kind is None:
    return None

  if kind == MarkerKind.ORNAM:
    symbol = marker.get_first_child_by_name('symbol')
    if symbol is None:
      return None
    glyph_name = symbol.get('glyph.name')
    if glyph_name is None:
      return None
    return glyph_name_to_full_name(glyph_name)

  form = marker.get('form')
  if form and form != UNKNOWN_FORM:
    return '%s %s' % (form, kind.value)
  return kind.value
