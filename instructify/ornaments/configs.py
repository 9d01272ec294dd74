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

"""Configurations for ornament instructification."""

import collections

from instructify.ornaments import instruction_builder


class Config(collections.namedtuple(
    'Config',
    ['note_duration', 'track_accidentals', 'correspond_to_marker',
     'catalog_path'])):

  def values(self):
    return self._asdict()


def update_config(config, update_dict):
  config_dict = config.values()
  config_dict.update(update_dict)
  return Config(**config_dict)


CONFIG_MAP = {}


# Accidentals inherited from the measure and key signature, instructions
# correspond to the principal note.
CONFIG_MAP['default'] = Config(
    note_duration=instruction_builder.DEFAULT_NOTE_DURATION,
    track_accidentals=True,
    correspond_to_marker=False,
    catalog_path=None,  # The catalog shipped with the package.
)

# Only accidentals written on the note itself, instructions correspond to the
# marker.
CONFIG_MAP['simplified'] = update_config(
    CONFIG_MAP['default'],
    dict(track_accidentals=False, correspond_to_marker=True))
