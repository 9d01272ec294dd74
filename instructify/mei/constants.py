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

"""Constants for MEI processing."""

MEI_NAMESPACE = 'http://www.music-encoding.org/ns/mei'
XML_NAMESPACE = 'http://www.w3.org/XML/1998/namespace'

# Qualified name of the xml:id attribute.
XML_ID = '{%s}id' % XML_NAMESPACE

# Prefix of generated identifiers. xml:id values must not start with a digit.
ID_PREFIX = 'instructify_'

# Suffix of gestural (performed) attribute variants, e.g. accid.ges.
GESTURAL_SUFFIX = '.ges'

# Editorial wrappers whose content is not looked into when an attribute is
# read from a child element (damaged, deleted and erroneous text).
IGNORED_WRAPPERS = ('damage', 'del', 'sic')

# Diatonic pitch names in ascending order within an octave.
PITCH_NAMES = 'cdefgab'
NOTES_PER_OCTAVE = 12

PITCH_NAME_TO_SEMITONE = {
    'c': 0,
    'd': 2,
    'e': 4,
    'f': 5,
    'g': 7,
    'a': 9,
    'b': 11,
}

# Written and gestural accidental values and their pitch shift in semitones.
# Quarter tone accidentals shift by half a semitone.
ACCIDENTAL_TO_SEMITONES = {
    '': 0.0,
    'n': 0.0,
    's': 1.0,
    'f': -1.0,
    'ss': 2.0,
    'x': 2.0,
    'ff': -2.0,
    'xs': 3.0,
    'sx': 3.0,
    'ts': 3.0,
    'tf': -3.0,
    'nf': -1.0,
    'ns': 1.0,
    'su': 1.5,
    'sd': 0.5,
    'fu': -0.5,
    'fd': -1.5,
    'nu': 0.5,
    'nd': -0.5,
    '1qf': -0.5,
    '3qf': -1.5,
    '1qs': 0.5,
    '3qs': 1.5,
}

# Order in which sharps and flats are added to a key signature.
SHARPS_ORDER = 'fcgdaeb'
FLATS_ORDER = 'beadgcf'

# Duration values which are not powers of two.
NAMED_DURATIONS = ('maxima', 'long', 'breve')
