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
"""Unaffected version ranges.

An unaffected range comes from a single `patched` or `unaffected` requirement
of an advisory. Unlike the exported OSV ranges, both of its bounds may be
inclusive or exclusive, because the requirement syntax allows both.

To keep things simple, a requirement may contain at most two predicates, and
at most one lower and one upper bound. Anything else is rejected.
"""

from dataclasses import dataclass
from typing import Iterable

from .bounds import Bound, Exclusive, Inclusive, Unbounded, UNBOUNDED
from .errors import (DuplicateBoundError, InvalidRangeError,
                     TooManyPredicatesError, UnsupportedOperatorError)
from .requirement import Op, Predicate, parse_predicates

_MAX_PREDICATES = 2


def _le_bound(a: Bound, b: Bound) -> bool:
  """Less-or-equal between a start bound and an end bound."""
  if a.version is None or b.version is None:
    return True

  if a.version < b.version:
    return True

  if a.version > b.version:
    return False

  # Same version: it is only shared if neither side excludes it.
  match (a, b):
    case (Inclusive(), Inclusive()):
      return True
    case (Inclusive() | Exclusive(), Inclusive() | Exclusive()):
      return False
    case _:
      raise TypeError(f'Unknown bounds: {a!r}, {b!r}')


@dataclass(frozen=True)
class UnaffectedRange:
  """A range of versions not affected by a vulnerability."""
  start: Bound = UNBOUNDED
  end: Bound = UNBOUNDED

  def is_valid(self) -> bool:
    """Whether the range is non-empty and not inverted."""
    if self.start.version is None or self.end.version is None:
      return True

    if self.start.version < self.end.version:
      return True

    if self.start.version > self.end.version:
      return False

    match (self.start, self.end):
      case (Exclusive(), Exclusive()):
        return False
      case (Exclusive() | Inclusive(), Exclusive() | Inclusive()):
        return True
      case _:
        raise TypeError(f'Unknown bounds: {self.start!r}, {self.end!r}')

  def overlaps(self, other: 'UnaffectedRange') -> bool:
    """Whether the two ranges share at least one version.

    Both ranges must be valid. This is the usual
    `(start1 <= end2) and (start2 <= end1)` check, with inclusive, exclusive
    and unbounded ends taken into account.
    """
    assert self.is_valid(), f'Invalid range: {self}'
    assert other.is_valid(), f'Invalid range: {other}'

    return _le_bound(self.start, other.end) and _le_bound(other.start, self.end)

  @classmethod
  def from_predicates(cls, predicates: Iterable[Predicate]) -> 'UnaffectedRange':
    """Build a range from at most one lower and one upper predicate.

    Raises:
      TooManyPredicatesError: more than two predicates were given.
      DuplicateBoundError: more than one lower or upper bound.
      UnsupportedOperatorError: an '=' predicate was given.
      InvalidRangeError: the resulting range is empty or inverted.
    """
    predicates = list(predicates)
    if len(predicates) > _MAX_PREDICATES:
      raise TooManyPredicatesError(
          'Unsupported version specification: too many predicates '
          f'({len(predicates)})')

    start: Bound = UNBOUNDED
    end: Bound = UNBOUNDED
    for predicate in predicates:
      match predicate.op:
        case Op.GT | Op.GTE:
          if not isinstance(start, Unbounded):
            raise DuplicateBoundError('lower')
          if predicate.op == Op.GT:
            start = Exclusive(predicate.version)
          else:
            start = Inclusive(predicate.version)
        case Op.LT | Op.LTE:
          if not isinstance(end, Unbounded):
            raise DuplicateBoundError('upper')
          if predicate.op == Op.LT:
            end = Exclusive(predicate.version)
          else:
            end = Inclusive(predicate.version)
        case Op.EQ:
          raise UnsupportedOperatorError(
              f'Exact version requirements are not supported: {predicate}')
        case _:
          raise UnsupportedOperatorError(f'Unknown operator: {predicate.op}')

    result = cls(start, end)
    if not result.is_valid():
      raise InvalidRangeError(f'Empty or inverted version range: {result}')

    return result

  @classmethod
  def from_requirement(cls, requirement: str) -> 'UnaffectedRange':
    """Parse requirement text, e.g. '>= 1.2.0, < 1.5.0', into a range."""
    return cls.from_predicates(parse_predicates(requirement))

  def __str__(self) -> str:
    opening = '[' if isinstance(self.start, Inclusive) else '('
    closing = ']' if isinstance(self.end, Inclusive) else ')'
    return f'{opening}{self.start}, {self.end}{closing}'
