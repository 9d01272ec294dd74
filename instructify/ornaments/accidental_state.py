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

"""Accidentals in effect while a score is traversed.

There are two scopes: the key signature, which applies to a pitch name in all
octaves and is replaced by the next key signature, and the measure, in which an
explicit accidental applies to later notes of the same pitch name and octave
until the barline. The measure scope wins over the key signature.
"""

import copy

from instructify.mei import pitch_lib


class AccidentalState(object):
  """Key signature and measure accidentals of one traversal.

  Attributes:
    inherit: If False, only a note's own accidental is considered and the key
        signature and measure scopes are ignored.
  """

  def __init__(self, inherit=True):
    self.inherit = inherit
    # Pitch name to accidental.
    self._key_accidentals = {}
    # Octave to pitch name to accidental.
    self._measure_accidentals = {}

  def reset_key(self):
    self._key_accidentals = {}

  def reset_measure(self):
    self._measure_accidentals = {}

  def set_key_accidental(self, pitch_name, accidental):
    self._key_accidentals[pitch_name] = accidental

  def set_key_signature(self, signature):
    """Replaces the key accidentals by those of an MEI key signature value.

    Args:
      signature: A value such as '2s' or '4f'.

    Raises:
      pitch_lib.PitchParseException: If the value cannot be parsed.
    """
    self._key_accidentals = pitch_lib.key_signature_accidentals(signature)

  def set_measure_accidental(self, octave, pitch_name, accidental):
    self._measure_accidentals.setdefault(octave, {})[pitch_name] = accidental

  def record_note(self, note):
    """Remembers the explicit accidental of a note for the rest of the measure.
    """
    accidental = note.get('accid')
    if accidental:
      self.set_measure_accidental(
          note.get('oct'), note.get('pname'), accidental)

  def effective_accidental(self, note):
    """Returns the accidental a note is played with.

    The note's own accidental wins, then an accidental given earlier in the
    measure for the same octave and pitch name, then the key signature.

    Args:
      note: An `MeiElement` of a `<note>`.

    Returns:
      The accidental value, '' if the note is not altered.
    """
    accidental = note.get('accid')
    if accidental is not None:
      return accidental
    if not self.inherit:
      return ''

    octave = note.get('oct')
    pitch_name = note.get('pname')
    measure_accidentals = self._measure_accidentals.get(octave, {})
    if pitch_name in measure_accidentals:
      return measure_accidentals[pitch_name]
    return self._key_accidentals.get(pitch_name, '')

  def copy(self):
    """Returns an independent snapshot of the current accidentals."""
    return copy.deepcopy(self)
