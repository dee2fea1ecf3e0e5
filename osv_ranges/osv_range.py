# Copyright 2021 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Half-open affected version ranges for OSV export.

Exported ranges are always `[start, end)`: the start version is inclusive and
the end version is exclusive. This avoids the ambiguity requirement syntax has
around pre-releases, e.g. whether '< 2.0.0' covers '2.0.0-alpha'.
"""

from dataclasses import dataclass
import functools
import json
import logging
import os
from typing import Any, Dict, Iterable, List, Optional

import jsonschema
import semver

from .bounds import Bound, Inclusive
from .errors import (InvalidRangeError, NothingAffectedError,
                     OverlappingRangesError)
from .semver_index import next_version
from .unaffected import UnaffectedRange

__all__ = [
    'OsvRange', 'next_version', 'osv_affected_range', 'ranges_for_advisory',
    'ranges_for_unaffected'
]

_SCHEMA_PATH = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), 'range_schema.json')

# OSV uses '0' as the introduced version for "all versions before".
INTRODUCED_ZERO = '0'


@functools.total_ordering
@dataclass(frozen=True)
class OsvRange:
  """A range of affected versions.

  A bound of None means ALL versions in that direction are affected.
  """
  # Inclusive.
  start: Optional[semver.Version] = None
  # Exclusive.
  end: Optional[semver.Version] = None

  def __post_init__(self):
    if (self.start is not None and self.end is not None and
        self.start >= self.end):
      raise InvalidRangeError(f'Empty or inverted OSV range: {self}')

  def _sort_key(self):
    # None sorts before any version on both sides.
    return ((self.start is not None, self.start),
            (self.end is not None, self.end))

  def __lt__(self, other):
    if not isinstance(other, OsvRange):
      return NotImplemented
    return self._sort_key() < other._sort_key()

  def to_events(self) -> List[Dict[str, str]]:
    """OSV events for this range."""
    if self.start is None:
      events = [{'introduced': INTRODUCED_ZERO}]
    else:
      events = [{'introduced': str(self.start)}]
    if self.end is not None:
      events.append({'fixed': str(self.end)})

    return events

  def __str__(self) -> str:
    start = '' if self.start is None else self.start
    end = '' if self.end is None else self.end
    return f'[{start}, {end})'


def _start_key(unaffected: UnaffectedRange):
  start = unaffected.start
  if start.version is None:
    return (0,)

  return (1, start.version, 0 if isinstance(start, Inclusive) else 1)


def _first_affected_after(end: Bound) -> semver.Version:
  """First version after the end of an unaffected range."""
  if isinstance(end, Inclusive):
    return next_version(end.version)

  return end.version


def _first_unaffected(start: Bound) -> semver.Version:
  """First version inside an unaffected range."""
  if isinstance(start, Inclusive):
    return start.version

  return next_version(start.version)


def ranges_for_unaffected(
    unaffected: Iterable[UnaffectedRange]) -> List[OsvRange]:
  """Compute affected ranges as the complement of the unaffected ones.

  Args:
    unaffected: valid, pairwise non-overlapping unaffected ranges.

  Returns:
    Sorted affected ranges. With no unaffected ranges, everything is affected.

  Raises:
    OverlappingRangesError: if any two unaffected ranges overlap.
  """
  unaffected = sorted(unaffected, key=_start_key)
  for i, a in enumerate(unaffected):
    for b in unaffected[i + 1:]:
      if a.overlaps(b):
        raise OverlappingRangesError(
            f'Unaffected ranges {a} and {b} overlap')

  result = []
  # None until the first unaffected range, i.e. from the very beginning.
  start = None
  for current in unaffected:
    if current.start.version is not None:
      end = _first_unaffected(current.start)
      if start is None or start < end:
        result.append(OsvRange(start, end))

    if current.end.version is None:
      return result

    start = _first_affected_after(current.end)

  result.append(OsvRange(start, None))
  return result


def ranges_for_advisory(patched: Iterable[str],
                        unaffected: Iterable[str]) -> List[OsvRange]:
  """Affected ranges for an advisory's `patched` and `unaffected` lists."""
  requirements = list(patched) + list(unaffected)
  ranges = [UnaffectedRange.from_requirement(r) for r in requirements]
  result = ranges_for_unaffected(ranges)
  logging.info('Computed %d affected range(s) from %d requirement(s)',
               len(result), len(requirements))
  return result


@functools.lru_cache(maxsize=None)
def load_schema() -> Dict[str, Any]:
  """Load the JSON schema for an OSV range."""
  with open(_SCHEMA_PATH, 'r') as schema_file:
    return json.load(schema_file)


def osv_affected_range(ranges: Iterable[OsvRange]) -> Dict[str, Any]:
  """Serialize affected ranges into a single OSV SEMVER range.

  Raises:
    NothingAffectedError: if no ranges were given.
    jsonschema.exceptions.ValidationError: if the result is not a valid OSV
      range.
  """
  ranges = sorted(ranges)
  if not ranges:
    raise NothingAffectedError('No affected versions to export')

  events = []
  for osv_range in ranges:
    events.extend(osv_range.to_events())

  result = {'type': 'SEMVER', 'events': events}
  jsonschema.validate(result, load_schema())
  return result
