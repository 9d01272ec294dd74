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

"""Ornament catalog: how each ornament is realized as a sequence of notes.

The catalog is read from a line oriented text file (see `ornaments.dict`):

  % a comment
  # upper mordent
  0
  1
  0

Lines starting with '%' are comments and empty lines are ignored. A line
starting with '#' names an ornament; the name is the full name of a marker as
returned by `markers.full_name`, e.g. "upper mordent" or "double cadence lower
prefix". All further lines up to the next name are alterations: the number of
diatonic steps relative to the principal note (0 is the principal note, 1 the
upper and -1 the lower auxiliary note) or one of the repeat barline tokens
'|:', ':|' and ':|:'.
"""

import os
import re

from absl import logging

DEFAULT_CATALOG_PATH = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), 'ornaments.dict')

COMMENT_MARKER = '%'
NAME_MARKER = '#'

REPEAT_START = '|:'
REPEAT_END = ':|'
REPEAT_BOTH = ':|:'
REPEAT_TOKENS = (REPEAT_START, REPEAT_END, REPEAT_BOTH)


class CatalogParseException(Exception):
  """Exception thrown when the catalog contents cannot be parsed."""
  pass


def parse_alteration(token):
  """Parses a single alteration token.

  Args:
    token: A token with all whitespace removed, e.g. '-1' or ':|'.

  Returns:
    The token as an int, or the repeat token string unchanged.

  Raises:
    CatalogParseException: If the token is neither an integer nor a repeat
        token.
  """
  if token in REPEAT_TOKENS:
    return token
  try:
    return int(token)
  except ValueError:
    raise CatalogParseException('Invalid alteration: %r' % token)


class OrnamentCatalog(object):
  """Read-only mapping from ornament full name to a tuple of alterations."""

  def __init__(self, entries=None):
    self._entries = dict(
        (name, tuple(alterations))
        for name, alterations in (entries or {}).items())

  def __getitem__(self, name):
    return self._entries[name]

  def __contains__(self, name):
    return name in self._entries

  def __len__(self):
    return len(self._entries)

  def get(self, name, default=None):
    return self._entries.get(name, default)

  def names(self):
    return sorted(self._entries)


def parse_catalog_lines(lines, entries):
  """Parses catalog lines into `entries`.

  Entries are added while parsing, so `entries` holds everything read before
  the offending line if an exception is raised.

  Args:
    lines: An iterable of text lines.
    entries: A dict from name to a list of alterations, filled in place.

  Raises:
    CatalogParseException: If a line cannot be parsed.
  """
  alterations = None
  for line_number, line in enumerate(lines, 1):
    line = line.strip()
    if not line or line.startswith(COMMENT_MARKER):
      continue
    if line.startswith(NAME_MARKER):
      name = line[len(NAME_MARKER):].strip()
      if not name:
        raise CatalogParseException(
            'Empty ornament name in line %d' % line_number)
      alterations = []
      entries[name] = alterations
      continue
    if alterations is None:
      raise CatalogParseException(
          'Alteration before the first ornament name in line %d' % line_number)
    alterations.append(parse_alteration(re.sub(r'\s+', '', line)))


def parse_catalog(catalog_string):
  """Parses catalog contents given as a string. Errors are raised."""
  entries = {}
  parse_catalog_lines(catalog_string.splitlines(), entries)
  return OrnamentCatalog(entries)


def load_catalog(path=None):
  """Loads the ornament catalog from a file.

  A missing or malformed file is not fatal: a warning is logged and the
  entries read so far (possibly none) are returned.

  Args:
    path: Path of the catalog file. Defaults to the bundled `ornaments.dict`.

  Returns:
    An `OrnamentCatalog`.
  """
  path = path or DEFAULT_CATALOG_PATH
  entries = {}
  try:
    with open(path, 'r', encoding='utf-8') as f:
      parse_catalog_lines(f, entries)
  except (IOError, CatalogParseException) as e:
    logging.warning(
        'Could not load ornament catalog %s, continuing with %d ornaments. '
        'Error was: %s', path, len(entries), e)
  catalog = OrnamentCatalog(entries)
  logging.debug('Loaded %d ornaments from %s.', len(catalog), path)
  return catalog
