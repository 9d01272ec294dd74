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

"""Instructions: the realized notes of an ornament.

An instruction is a `<supplied type="instruction">` element inserted directly
after the principal note of an ornament. It holds the substitute notes and
repeat barlines in playing order and points back to the principal note (or,
in the simplified configuration, to the marker) with `corresp`.
"""

from instructify.mei import constants
from instructify.mei import mei_element

INSTRUCTION_ELEMENT_NAME = 'supplied'
INSTRUCTION_TYPE = 'instruction'


class Instruction(object):
  """A new instruction element and the elements realized into it."""

  def __init__(self, label, correspondence_id,
               namespace=constants.MEI_NAMESPACE):
    self._element = mei_element.MeiElement.create(
        INSTRUCTION_ELEMENT_NAME, namespace)
    self._element.set('type', INSTRUCTION_TYPE)
    self._element.set('label', label)
    if correspondence_id is not None:
      self._element.set('corresp', '#' + correspondence_id)

  @property
  def element(self):
    return self._element

  @property
  def label(self):
    return self._element.get('label')

  @property
  def elements(self):
    return self._element.get_children()

  @property
  def notes(self):
    return [child for child in self.elements if child.name == 'note']

  def add_element(self, child):
    self._element.append_child(child)

  def append(self, other):
    """Moves all elements of another instruction to the end of this one."""
    for child in other.elements:
      self.add_element(child)


class InstructionIndex(object):
  """Instructions of one traversal, keyed by principal note identifier."""

  def __init__(self):
    self._instructions = {}

  def get(self, note_id):
    return self._instructions.get(note_id)

  def __len__(self):
    return len(self._instructions)

  def attach(self, principal_note, instruction):
    """Places an instruction after its principal note.

    If the note already has an instruction, the new elements are appended to
    it and the new instruction element is discarded. The label of the first
    instruction is kept.

    Args:
      principal_note: The `MeiElement` of the principal note.
      instruction: The `Instruction` to place.

    Returns:
      True if the instruction was merged into an existing one, False if it
      was inserted.
    """
    note_id = principal_note.get_id()
    existing = self._instructions.get(note_id)
    if existing is not None:
      existing.append(instruction)
      return True
    self._instructions[note_id] = instruction
    principal_note.insert_after(instruction.element)
    return False
