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

"""Tests for pitch_lib."""

from absl.testing import absltest
from instructify.mei import pitch_lib


class PitchLibTest(absltest.TestCase):

  def testShiftDiatonically(self):
    self.assertEqual(('c', 4), pitch_lib.shift_diatonically('c', 4, 0))
    self.assertEqual(('d', 4), pitch_lib.shift_diatonically('c', 4, 1))
    self.assertEqual(('b', 3), pitch_lib.shift_diatonically('c', 4, -1))
    self.assertEqual(('c', 5), pitch_lib.shift_diatonically('b', 4, 1))
    self.assertEqual(('e', 5), pitch_lib.shift_diatonically('a', 4, 4))
    self.assertEqual(('a', 2), pitch_lib.shift_diatonically('c', 4, -9))

  def testShiftUnknownPitchName(self):
    with self.assertRaises(pitch_lib.PitchParseException):
      pitch_lib.shift_diatonically('h', 4, 1)

  def testAccidentalToSemitones(self):
    self.assertEqual(0.0, pitch_lib.accidental_to_semitones(None))
    self.assertEqual(0.0, pitch_lib.accidental_to_semitones(''))
    self.assertEqual(0.0, pitch_lib.accidental_to_semitones('n'))
    self.assertEqual(1.0, pitch_lib.accidental_to_semitones('s'))
    self.assertEqual(-2.0, pitch_lib.accidental_to_semitones('ff'))
    self.assertEqual(0.5, pitch_lib.accidental_to_semitones('1qs'))
    with self.assertRaises(pitch_lib.PitchParseException):
      pitch_lib.accidental_to_semitones('q')

  def testHalfstepsBetween(self):
    self.assertEqual(2.0, pitch_lib.halfsteps_between(('c', 4, ''),
                                                      ('d', 4, '')))
    self.assertEqual(1.0, pitch_lib.halfsteps_between(('e', 4, ''),
                                                      ('f', 4, '')))
    self.assertEqual(1.0, pitch_lib.halfsteps_between(('b', 4, ''),
                                                      ('c', 5, '')))
    self.assertEqual(-1.0, pitch_lib.halfsteps_between(('c', 4, ''),
                                                       ('b', 3, '')))
    self.assertEqual(1.0, pitch_lib.halfsteps_between(('c', 4, 's'),
                                                      ('d', 4, '')))
    self.assertEqual(3.0, pitch_lib.halfsteps_between(('c', 4, ''),
                                                      ('d', 4, 's')))

  def testHalfstepsBetweenIsAntisymmetric(self):
    pitches = [('c', 4, ''), ('d', 4, 'f'), ('b', 3, 's'), ('g', 5, 'n'),
               ('e', 2, '1qf')]
    for a in pitches:
      for b in pitches:
        self.assertEqual(pitch_lib.halfsteps_between(a, b),
                         -pitch_lib.halfsteps_between(b, a))

  def testFormatHalfsteps(self):
    self.assertEqual('0hs', pitch_lib.format_halfsteps(0.0))
    self.assertEqual('2hs', pitch_lib.format_halfsteps(2.0))
    self.assertEqual('-1hs', pitch_lib.format_halfsteps(-1.0))
    self.assertEqual('-0.5hs', pitch_lib.format_halfsteps(-0.5))

  def testKeySignatureAccidentals(self):
    self.assertEqual({}, pitch_lib.key_signature_accidentals('0'))
    self.assertEqual({'f': 's', 'c': 's'},
                     pitch_lib.key_signature_accidentals('2s'))
    self.assertEqual({'b': 'f', 'e': 'f', 'a': 'f'},
                     pitch_lib.key_signature_accidentals('3f'))
    self.assertLen(pitch_lib.key_signature_accidentals('7s'), 7)

  def testKeySignatureAccidentalsInvalid(self):
    for signature in ('', 's', '8f', 'xf', '3', 'mixed'):
      with self.assertRaises(pitch_lib.PitchParseException):
        pitch_lib.key_signature_accidentals(signature)


if __name__ == '__main__':
  absltest.main()
