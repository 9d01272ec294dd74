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

"""Diatonic and chromatic pitch arithmetic on MEI pitch names.

Pitches are given as pitch name ('c' .. 'b'), octave (C4 is middle C) and an
MEI accidental value ('s', 'f', 'n', ...; '' for no alteration).
"""

from instructify.mei import constants


class PitchParseException(ValueError):
  """Exception thrown when a pitch name or accidental cannot be parsed."""
  pass


def _pitch_name_index(pitch_name):
  index = constants.PITCH_NAMES.find(pitch_name.lower()) if pitch_name else -1
  if index < 0:
    raise PitchParseException('Unknown pitch name: %r' % pitch_name)
  return index


def shift_diatonically(pitch_name, octave, steps):
  """Moves a pitch by a number of scale steps.

  The octave is carried over at the B/C boundary, e.g. one step up from b4 is
  c5 and one step down from c4 is b3.

  Args:
    pitch_name: The pitch name, one of 'cdefgab'.
    octave: The octave as an integer.
    steps: Number of diatonic steps, positive is up.

  Returns:
    A tuple (pitch_name, octave).

  Raises:
    PitchParseException: If the pitch name is unknown.
  """
  index = _pitch_name_index(pitch_name) + steps
  num_names = len(constants.PITCH_NAMES)
  return constants.PITCH_NAMES[index % num_names], octave + index // num_names


def accidental_to_semitones(accidental):
  """Converts an MEI accidental value to a pitch shift in semitones.

  Args:
    accidental: An accidental value such as 's' or 'ff'. None and '' mean no
        alteration.

  Returns:
    The shift as a float.

  Raises:
    PitchParseException: If the accidental value is unknown.
  """
  if accidental is None:
    return 0.0
  if accidental not in constants.ACCIDENTAL_TO_SEMITONES:
    raise PitchParseException('Invalid accidental: %r' % accidental)
  return constants.ACCIDENTAL_TO_SEMITONES[accidental]


def pitch_name_interval(from_pitch_name, to_pitch_name):
  """Semitones between two natural pitch names within the same octave."""
  _pitch_name_index(from_pitch_name)
  _pitch_name_index(to_pitch_name)
  return (constants.PITCH_NAME_TO_SEMITONE[to_pitch_name.lower()] -
          constants.PITCH_NAME_TO_SEMITONE[from_pitch_name.lower()])


def halfsteps_between(from_pitch, to_pitch):
  """Returns the interval in semitones from one pitch to another.

  Args:
    from_pitch: A tuple (pitch_name, octave, accidental).
    to_pitch: A tuple (pitch_name, octave, accidental).

  Returns:
    The interval as a float, positive if `to_pitch` is higher.
  """
  from_name, from_octave, from_accidental = from_pitch
  to_name, to_octave, to_accidental = to_pitch
  halfsteps = pitch_name_interval(from_name, to_name)
  halfsteps += constants.NOTES_PER_OCTAVE * (to_octave - from_octave)
  halfsteps -= accidental_to_semitones(from_accidental)
  halfsteps += accidental_to_semitones(to_accidental)
  return float(halfsteps)


def format_halfsteps(halfsteps):
  """Formats an interval as an MEI melodic interval, e.g. '2hs' or '-0.5hs'."""
  return '%ghs' % halfsteps


def key_signature_accidentals(signature):
  """Expands an MEI key signature value to its accidentals.

  Args:
    signature: A value such as '3f', '2s' or '0'.

  Returns:
    A dict from pitch name to accidental value, e.g. {'b': 'f', 'e': 'f',
    'a': 'f'} for '3f'.

  Raises:
    PitchParseException: If the value cannot be parsed.
  """
  signature = signature.strip()
  if signature == '0':
    return {}
  if len(signature) < 2 or signature[-1] not in ('s', 'f'):
    raise PitchParseException('Invalid key signature: %r' % signature)
  try:
    count = int(signature[:-1])
  except ValueError:
    raise PitchParseException('Invalid key signature: %r' % signature)
  order = (constants.SHARPS_ORDER if signature[-1] == 's'
           else constants.FLATS_ORDER)
  if not 0 <= count <= len(order):
    raise PitchParseException('Invalid key signature: %r' % signature)
  return dict((pitch_name, signature[-1]) for pitch_name in order[:count])
