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

"""Expands the ornaments of an MEI document into explicit notes.

`Instructifier` walks the bodies of an MEI document in document order while
tracking the key signature and the accidentals of the current measure. Each
ornament marker (`<trill>`, `<turn>`, `<mordent>`, `<ornam>`) is looked up in
the ornament catalog by its full name, and an instruction holding the
realized notes is inserted directly after the marker's principal note.
Ornaments combined with `prev`/`next` are realized in chain order. The
document is modified in place.
"""

import enum
import time

from absl import logging
from instructify.common import statistics
from instructify.ornaments import accidental_state as accidental_state_lib
from instructify.ornaments import chain_resolver
from instructify.ornaments import configs
from instructify.ornaments import instruction
from instructify.ornaments import instruction_builder
from instructify.ornaments import markers
from instructify.ornaments import ornament_catalog

# Elements whose `n` is copied to a marker that names neither staff nor part.
_SCOPE_ELEMENT_NAMES = ('staff', 'part')

_SCORE_DEFINITION_NAMES = ('scoreDef', 'staffDef')


class ElementKind(enum.Enum):
  ORNAMENT = 1
  KEY_SIGNATURE = 2
  KEY_ACCIDENTAL = 3
  MEASURE = 4
  NOTE = 5
  SCORE_DEFINITION = 6
  INSTRUCTION = 7
  OTHER = 8


def classify(element):
  """Returns the `ElementKind` of an `MeiElement`."""
  name = element.name
  if markers.MarkerKind.from_element_name(name) is not None:
    return ElementKind.ORNAMENT
  if name == 'keySig':
    return ElementKind.KEY_SIGNATURE
  if name == 'keyAccid':
    return ElementKind.KEY_ACCIDENTAL
  if name == 'measure':
    return ElementKind.MEASURE
  if name == 'note':
    return ElementKind.NOTE
  if name in _SCORE_DEFINITION_NAMES:
    return ElementKind.SCORE_DEFINITION
  if (name == instruction.INSTRUCTION_ELEMENT_NAME and
      element.get('type') == instruction.INSTRUCTION_TYPE):
    return ElementKind.INSTRUCTION
  return ElementKind.OTHER


class _InstructificationRun(object):
  """State of a single pass over one document."""

  def __init__(self, catalog, config):
    self.catalog = catalog
    self.accidental_state = accidental_state_lib.AccidentalState(
        inherit=config.track_accidentals)
    self.chains = chain_resolver.ChainResolver()
    self.instructions = instruction.InstructionIndex()
    # Deferred marker to the accidentals in effect where it was met.
    self.deferred_states = {}
    self.builder = instruction_builder.InstructionBuilder(
        catalog, self.accidental_state,
        note_duration=config.note_duration,
        correspond_to_marker=config.correspond_to_marker)
    self.stats = dict((name, statistics.Counter(name)) for name in [
        'instructions_created',
        'instructions_merged',
        'notes_synthesized',
        'markers_unsupported',
        'markers_unresolved_target',
        'markers_deferred',
        'chains_forced',
    ])
    self.stats['notes_per_instruction'] = statistics.Histogram(
        'notes_per_instruction', [0, 1, 2, 4, 8, 16, 32])

  def traverse(self, element):
    # Instructions inserted into children not visited yet are skipped by
    # their handler.
    for child in element.get_children():
      handler = _InstructificationRun.ELEMENT_HANDLERS_[classify(child)]
      if handler(self, child):
        self.traverse(child)

  def finish(self):
    """Realizes markers still waiting for a `prev` that was never realized."""
    marker = self.chains.pop_pending()
    while marker is not None:
      logging.debug('Forcing ornament %s that waits for %s', marker.id,
                    marker.get_reference('prev'))
      self.stats['chains_forced'].increment()
      self.process_marker(marker, force=True)
      marker = self.chains.pop_pending()

  def process_marker(self, marker, force=False):
    """Realizes a marker and then every marker that was waiting for it."""
    work_list = [marker]
    while work_list:
      current = work_list.pop(0)
      if self._realize(current, force) and current.id is not None:
        work_list.extend(self.chains.release(current))
      force = False

  def _realize(self, marker, force):
    """Realizes a single marker. Returns True if an instruction was placed."""
    full_name = markers.full_name(marker)
    if full_name is None or full_name not in self.catalog:
      logging.debug('Skipping unsupported ornament <%s> %s (%s)', marker.name,
                    marker.id, full_name)
      self.stats['markers_unsupported'].increment()
      return False

    if not self.chains.admit(marker, force):
      if marker.id is None or not self.chains.is_resolved(marker.id):
        self.deferred_states[marker] = self.accidental_state.copy()
        self.stats['markers_deferred'].increment()
      return False
    accidental_state = self.deferred_states.pop(marker, None)

    target_id = marker.get_reference('startid')
    principal_note = None
    if target_id is not None:
      principal_note = marker.find_descendant_by_id(target_id)
    if principal_note is None:
      logging.warning('Ornament %s: principal note %s not found', marker.id,
                      target_id)
      self.stats['markers_unresolved_target'].increment()
      return False
    if principal_note.get('pname') is None or principal_note.get(
        'oct') is None:
      logging.warning('Ornament %s: <%s> %s has no pitch', marker.id,
                      principal_note.name, target_id)
      self.stats['markers_unresolved_target'].increment()
      return False

    new_instruction = self.builder.build(
        full_name, principal_note, marker, accidental_state=accidental_state)
    _backfill_scope(marker, principal_note)
    num_notes = len(new_instruction.notes)
    self.stats['notes_synthesized'].increment(num_notes)
    self.stats['notes_per_instruction'].increment(num_notes)
    if self.instructions.attach(principal_note, new_instruction):
      self.stats['instructions_merged'].increment()
    else:
      self.stats['instructions_created'].increment()
    return True

  def _read_ornament(self, marker):
    self.process_marker(marker)
    return False

  def _read_key_signature(self, key_signature):
    self.accidental_state.reset_key()
    has_key_accidentals = any(
        child.name == 'keyAccid' for child in key_signature.get_children())
    if not has_key_accidentals and key_signature.has('sig'):
      self.accidental_state.set_key_signature(key_signature.get('sig'))
    return True

  def _read_key_accidental(self, key_accidental):
    self.accidental_state.set_key_accidental(
        key_accidental.get('pname'), key_accidental.get('accid'))
    return False

  def _read_measure(self, unused_measure):
    self.accidental_state.reset_measure()
    return True

  def _read_note(self, note):
    self.accidental_state.record_note(note)
    return True

  def _read_score_definition(self, score_definition):
    if score_definition.has('key.sig'):
      self.accidental_state.reset_key()
      self.accidental_state.set_key_signature(score_definition.get('key.sig'))
    return True

  def _skip_instruction(self, unused_instruction):
    return False

  def _descend(self, unused_element):
    return True

  # Handlers return True if the children of the element are to be visited.
  ELEMENT_HANDLERS_ = {
      ElementKind.ORNAMENT: _read_ornament,
      ElementKind.KEY_SIGNATURE: _read_key_signature,
      ElementKind.KEY_ACCIDENTAL: _read_key_accidental,
      ElementKind.MEASURE: _read_measure,
      ElementKind.NOTE: _read_note,
      ElementKind.SCORE_DEFINITION: _read_score_definition,
      ElementKind.INSTRUCTION: _skip_instruction,
      ElementKind.OTHER: _descend,
  }


def _backfill_scope(marker, principal_note):
  """Copies the staff or part number of the principal note to the marker."""
  if marker.get('staff') is not None or marker.get('part') is not None:
    return
  ancestor = principal_note.get_parent()
  while ancestor is not None:
    if ancestor.name in _SCOPE_ELEMENT_NAMES and ancestor.has('n'):
      marker.set(ancestor.name, ancestor.get('n'))
      return
    if ancestor.name == 'part':
      return
    ancestor = ancestor.get_parent()


class Instructifier(object):
  """Inserts instructions for all ornaments of MEI documents.

  An `Instructifier` can be used for any number of documents. Each call of
  `run` starts with fresh accidental and chain state.

  Attributes:
    config: The `configs.Config` in use.
    catalog: The `OrnamentCatalog` in use.
    last_run_statistics: The statistics of the latest `run`, a list of
        `statistics.Statistic` objects.
    total_statistics: The statistics of all runs merged together.
  """

  def __init__(self, config=None, catalog=None):
    """Creates an `Instructifier`.

    Args:
      config: A `configs.Config`. Defaults to `configs.CONFIG_MAP['default']`.
      catalog: An `OrnamentCatalog`. If None, it is loaded from the
          configuration's `catalog_path`, or the catalog shipped with this
          package if that is None.
    """
    self.config = config or configs.CONFIG_MAP['default']
    if catalog is None:
      catalog = ornament_catalog.load_catalog(self.config.catalog_path)
    self.catalog = catalog
    self.last_run_statistics = []
    self.total_statistics = []

  def run(self, document):
    """Instructifies an MEI document in place.

    Args:
      document: An `mei_io.MeiDocument`.

    Returns:
      The same document.

    Raises:
      mei_element.MalformedAttributeException: If the octave or duration of a
          principal note cannot be parsed.
      pitch_lib.PitchParseException: If a pitch name, accidental or key
          signature is invalid.
      chain_resolver.MalformedChainError: If an ornament is chained to itself.
    """
    bodies = document.bodies()
    if not bodies:
      logging.warning('%s has no <music><body>, nothing to instructify.',
                      document.name)
      return document

    logging.info('Instructifying %s.', document.name)
    start_time = time.time()
    instructification = _InstructificationRun(self.catalog, self.config)
    for body in bodies:
      instructification.traverse(body)
    instructification.finish()

    self.last_run_statistics = list(instructification.stats.values())
    self.total_statistics = statistics.merge_statistics(
        self.total_statistics + self.last_run_statistics)
    logging.info('Instructified %s in %.3f seconds.', document.name,
                 time.time() - start_time)
    statistics.log_statistics_list(self.last_run_statistics)
    return document
