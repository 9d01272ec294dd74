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

"""Builds the instruction for an ornament marker from the ornament catalog."""

from instructify.mei import constants
from instructify.mei import mei_element
from instructify.mei import pitch_lib
from instructify.ornaments import instruction as instruction_lib
from instructify.ornaments import ornament_catalog

# Duration of the synthesized notes, a 32nd note.
DEFAULT_NOTE_DURATION = 32

REPEAT_BARLINE_FORMS = {
    ornament_catalog.REPEAT_START: 'rptstart',
    ornament_catalog.REPEAT_END: 'rptend',
    ornament_catalog.REPEAT_BOTH: 'rptboth',
}

# Attribute of the marker that overrides the accidental of the notes one step
# above and below the principal note.
_AUXILIARY_ACCIDENTAL_ATTRIBUTES = {
    1: 'accidupper',
    -1: 'accidlower',
}


def _check_duration(note):
  """Raises if the note's duration is set but cannot be parsed."""
  duration = note.get('dur')
  if duration is None or duration in constants.NAMED_DURATIONS:
    return
  note.get_as_int('dur')


class InstructionBuilder(object):
  """Realizes ornaments as sequences of notes.

  Attributes:
    catalog: The `OrnamentCatalog` mapping full names to alterations.
    accidental_state: The `AccidentalState` of the traversal. It provides the
        accidentals in effect at the principal note.
    note_duration: The `dur` of every synthesized note.
    correspond_to_marker: If True, the instruction's `corresp` points to the
        marker instead of the principal note.
  """

  def __init__(self, catalog, accidental_state,
               note_duration=DEFAULT_NOTE_DURATION, correspond_to_marker=False):
    self.catalog = catalog
    self.accidental_state = accidental_state
    self.note_duration = note_duration
    self.correspond_to_marker = correspond_to_marker

  def build(self, full_name, principal_note, marker, accidental_state=None):
    """Creates the instruction for one ornament.

    Every catalog alteration becomes a note shifted by that many diatonic
    steps from the principal note, every repeat token a repeat barline. The
    notes carry their accidental explicitly. Accidentals given on the marker
    (`accidupper`, `accidlower`) and the principal note's accidental govern
    all notes of the corresponding step, but are written only on the first of
    them. Each note records its distance to the principal note in `intm`.

    Args:
      full_name: The full name of the ornament, a key of the catalog.
      principal_note: The `MeiElement` of the note the marker points to. It
          must have `pname` and `oct`.
      marker: The `MeiElement` of the ornament marker.
      accidental_state: The `AccidentalState` to read accidentals from instead
          of `self.accidental_state`, e.g. the state saved when the marker was
          deferred.

    Returns:
      A new `Instruction`, not yet attached to the document.

    Raises:
      KeyError: If the catalog has no entry for `full_name`.
      mei_element.MalformedAttributeException: If the principal note's `oct`
          or `dur` cannot be parsed.
      pitch_lib.PitchParseException: If a pitch name or accidental is
          invalid.
    """
    alterations = self.catalog[full_name]
    if accidental_state is None:
      accidental_state = self.accidental_state
    _check_duration(principal_note)
    principal_pitch_name = principal_note.get('pname')
    principal_octave = principal_note.get_as_int('oct')
    principal_accidental = accidental_state.effective_accidental(
        principal_note)
    namespace = principal_note.namespace

    # Step to the accidental governing it, or None.
    overrides = {
        0: principal_accidental or None,
        1: marker.get(_AUXILIARY_ACCIDENTAL_ATTRIBUTES[1]),
        -1: marker.get(_AUXILIARY_ACCIDENTAL_ATTRIBUTES[-1]),
    }
    written_steps = set()

    if self.correspond_to_marker:
      # A marker without xml:id is left unchanged and gets no correspondence.
      correspondence_id = marker.id
    else:
      correspondence_id = principal_note.get_id()
    instruction = instruction_lib.Instruction(
        full_name, correspondence_id, namespace)

    for alteration in alterations:
      if alteration in REPEAT_BARLINE_FORMS:
        barline = mei_element.MeiElement.create('barLine', namespace)
        barline.set('form', REPEAT_BARLINE_FORMS[alteration])
        instruction.add_element(barline)
        continue

      pitch_name, octave = pitch_lib.shift_diatonically(
          principal_pitch_name, principal_octave, alteration)
      note = mei_element.MeiElement.create('note', namespace)
      note.set('dur', self.note_duration)
      note.set('oct', octave)
      note.set('pname', pitch_name)

      accidental = accidental_state.effective_accidental(note)
      if accidental:
        note.set('accid', accidental)

      override = overrides.get(alteration)
      if override is not None:
        if alteration not in written_steps:
          note.set('accid', override)
          written_steps.add(alteration)
        note.set('accid.ges', override)

      halfsteps = pitch_lib.halfsteps_between(
          (principal_pitch_name, principal_octave, principal_accidental),
          (pitch_name, octave,
           accidental_state.effective_accidental(note)))
      note.set('intm', pitch_lib.format_halfsteps(halfsteps))
      instruction.add_element(note)

    return instruction
