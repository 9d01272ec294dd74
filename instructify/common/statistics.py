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

"""Counters and histograms reported by instructification runs.

Each run of an `Instructifier` reports what it did to the ornament markers of
a document as a list of named statistics. Lists from several documents are
combined with `merge_statistics`, which adds up statistics sharing a name.
"""

import abc
import bisect
import copy

from absl import logging


class MergeStatisticsException(Exception):
  pass


class Statistic(abc.ABC):
  """A named measurement of one or more instructification runs.

  Attributes:
    name: Identifies what is measured. Only statistics of the same name and
        kind can be merged.
  """

  def __init__(self, name):
    self.name = name

  def merge_from(self, other):
    """Adds the measurements of `other` to this statistic.

    Raises:
      MergeStatisticsException: If `other` is not a `Statistic` of the same
          name and kind.
    """
    if not isinstance(other, type(self)):
      raise MergeStatisticsException(
          'Cannot merge %s into %s' % (type(other).__name__,
                                       type(self).__name__))
    if other.name != self.name:
      raise MergeStatisticsException(
          'Cannot merge "%s" into "%s"' % (other.name, self.name))
    self._add(other)

  def copy(self):
    return copy.deepcopy(self)

  @abc.abstractmethod
  def _add(self, other):
    pass

  @abc.abstractmethod
  def __str__(self):
    pass


def merge_statistics(stats_list):
  """Sums statistics of the same name.

  Args:
    stats_list: A list of `Statistic` objects. They are not modified.

  Returns:
    A list with one merged `Statistic` per name, in order of first appearance.
  """
  merged = {}
  for stat in stats_list:
    if stat.name in merged:
      merged[stat.name].merge_from(stat)
    else:
      merged[stat.name] = stat.copy()
  return list(merged.values())


def log_statistics_list(stats_list, logger_fn=logging.info):
  """Passes every statistic, sorted by name, to `logger_fn` as a string."""
  for stat in sorted(stats_list, key=lambda stat: stat.name):
    logger_fn(str(stat))


class Counter(Statistic):
  """Counts events such as created instructions or forced chains."""

  def __init__(self, name, start_value=0):
    super(Counter, self).__init__(name)
    self.count = start_value

  def increment(self, inc=1):
    self.count += inc

  def _add(self, other):
    self.count += other.count

  def __str__(self):
    return '%s: %d' % (self.name, self.count)


class Histogram(Statistic):
  """Counts values, such as the notes of each instruction, per range.

  Each bucket covers the values from its lower bound up to, and excluding, the
  lower bound of the next bucket. A bucket starting at negative infinity is
  always present, so every value falls into some bucket. Only non-empty
  buckets are printed.

  Attributes:
    buckets: Sorted lower bounds of the buckets.
    counters: Lower bound of each bucket to the number of values in it.
  """

  def __init__(self, name, buckets):
    super(Histogram, self).__init__(name)
    self.buckets = [float('-inf')] + sorted(set(buckets))
    self.counters = dict((lower, 0) for lower in self.buckets)

  def increment(self, value, inc=1):
    lower = self.buckets[bisect.bisect_right(self.buckets, value) - 1]
    self.counters[lower] += inc

  def _add(self, other):
    if other.buckets != self.buckets:
      raise MergeStatisticsException(
          'Histogram "%s" has buckets %s, expected %s' %
          (other.name, other.buckets, self.buckets))
    for lower, count in other.counters.items():
      self.counters[lower] += count

  def __str__(self):
    upper_bounds = self.buckets[1:] + [float('inf')]
    lines = ['%s:' % self.name]
    for lower, upper in zip(self.buckets, upper_bounds):
      if self.counters[lower]:
        lines.append('  [%s,%s): %d' % (lower, upper, self.counters[lower]))
    return '\n'.join(lines)
