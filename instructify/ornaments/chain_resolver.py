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

"""Ordering of combined ornaments.

Ornaments written on top of each other are encoded as separate markers that
point to each other with `prev` and `next`. Their notes must be realized in
chain order, which need not be the document order. A marker whose `prev` has
not been realized yet is deferred under the identifier it waits for and is
released as soon as that marker has been realized.
"""

import collections


class MalformedChainError(Exception):
  """Exception thrown when a marker's `prev` or `next` points to itself."""
  pass


class ChainResolver(object):
  """Ledger of realized and deferred markers of one traversal."""

  def __init__(self):
    # Identifiers of markers already admitted.
    self._resolved = set()
    # Awaited marker identifier to the list of markers waiting for it.
    self._waiting = collections.OrderedDict()

  def is_resolved(self, identifier):
    return identifier in self._resolved

  def admit(self, marker, force=False):
    """Decides whether a marker is realized now.

    Args:
      marker: An `MeiElement` of an ornament marker.
      force: If True, a `prev` dependency is treated as satisfied.

    Returns:
      True if the marker should be realized now. False if it has been handled
      already or is deferred until its `prev` marker has been realized.

    Raises:
      MalformedChainError: If `prev` or `next` names the marker itself.
    """
    marker_id = marker.id
    previous_id = marker.get_reference('prev')
    next_id = marker.get_reference('next')
    if marker_id is not None and marker_id in (previous_id, next_id):
      raise MalformedChainError(
          'Ornament %s is chained to itself' % marker_id)

    if marker_id is not None and marker_id in self._resolved:
      return False
    if (previous_id is not None and previous_id not in self._resolved and
        not force):
      self._waiting.setdefault(previous_id, []).append(marker)
      return False

    if marker_id is not None:
      self._resolved.add(marker_id)
    return True

  def release(self, marker):
    """Returns the deferred markers that were waiting for `marker`."""
    if marker.id is None:
      return []
    return self._waiting.pop(marker.id, [])

  def pop_pending(self):
    """Removes and returns the oldest deferred marker, or None."""
    if not self._waiting:
      return None
    awaited_id, markers = next(iter(self._waiting.items()))
    marker = markers.pop(0)
    if not markers:
      del self._waiting[awaited_id]
    return marker

  def num_pending(self):
    return sum(len(markers) for markers in self._waiting.values())
