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
"""Requirement parsing.

Turns requirement text such as '>= 1.2.0, < 1.5.0' or '^0.3.2' into an
ordered list of comparison predicates. Caret and tilde requirements follow
Cargo's semantics and expand into a lower and an upper predicate.
"""

from dataclasses import dataclass
import enum
import re
from typing import List

import semver

from . import semver_index
from .errors import RequirementParseError


class Op(enum.Enum):
  """Comparison operator."""
  GT = '>'
  GTE = '>='
  LT = '<'
  LTE = '<='
  EQ = '='


@dataclass(frozen=True)
class Predicate:
  """A single comparison, e.g. '>= 1.2.0'."""
  op: Op
  version: semver.Version

  def __str__(self) -> str:
    return f'{self.op.value} {self.version}'


# Longer operators must come first so '>=' is not read as '>'.
_COMPARATOR_PATTERN = re.compile(r'^(>=|<=|>|<|=|\^|~)?\s*(\S+)$')
_PARTIAL_VERSION_PATTERN = re.compile(
    r'^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?([-+].*)?$')
_WILDCARD = '*'


def _parse_version(text: str, requirement: str) -> semver.Version:
  try:
    return semver_index.parse(text)
  except ValueError as e:
    raise RequirementParseError(
        f'Invalid version {text!r} in requirement {requirement!r}') from e


def _expand(op: str, text: str, requirement: str) -> List[Predicate]:
  """Expand a caret or tilde comparator into a pair of predicates."""
  match = _PARTIAL_VERSION_PATTERN.match(text)
  if not match:
    raise RequirementParseError(
        f'Invalid version {text!r} in requirement {requirement!r}')

  lower = _parse_version(text, requirement)
  given = 1 + (match.group(2) is not None) + (match.group(3) is not None)

  if op == '~':
    if given == 1:
      upper = lower.bump_major()
    else:
      upper = lower.bump_minor()
  elif lower.major > 0 or given == 1:
    upper = lower.bump_major()
  elif lower.minor > 0 or given == 2:
    upper = lower.bump_minor()
  else:
    upper = lower.bump_patch()

  return [Predicate(Op.GTE, lower), Predicate(Op.LT, upper)]


def parse_predicates(requirement: str) -> List[Predicate]:
  """Parse a comma separated requirement into predicates.

  Args:
    requirement: the requirement text, e.g. '>= 1.2.0, < 1.5.0'.

  Returns:
    The predicates, in the order they appear. '*' yields no predicates.

  Raises:
    RequirementParseError: if the requirement is empty or malformed.
  """
  text = requirement.strip()
  if not text:
    raise RequirementParseError('Empty version requirement')

  if text == _WILDCARD:
    return []

  predicates = []
  for comparator in text.split(','):
    comparator = comparator.strip()
    match = _COMPARATOR_PATTERN.match(comparator)
    if not match:
      raise RequirementParseError(
          f'Invalid comparator {comparator!r} in requirement {requirement!r}')

    op, version = match.group(1), match.group(2)
    if op is None or op in ('^', '~'):
      # A bare version means the same as a caret requirement.
      predicates.extend(_expand(op or '^', version, requirement))
    else:
      predicates.append(
          Predicate(Op(op), _parse_version(version, requirement)))

  return predicates
