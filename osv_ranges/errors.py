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
"""Version range errors."""


class RangeError(ValueError):
  """Malformed or self-contradictory version range."""


class RequirementParseError(RangeError):
  """Requirement text could not be parsed into predicates."""


class TooManyPredicatesError(RangeError):
  """More than two predicates in a single requirement."""


class DuplicateBoundError(RangeError):
  """More than one lower bound, or more than one upper bound."""

  def __init__(self, side: str):
    super().__init__(f'More than one {side} bound in the same range')
    self.side = side


class UnsupportedOperatorError(RangeError):
  """Operator with no range conversion."""


class InvalidRangeError(RangeError):
  """Range is empty or inverted."""


class OverlappingRangesError(RangeError):
  """Unaffected ranges overlap, so their complement is ambiguous."""


class NothingAffectedError(RangeError):
  """Unaffected ranges cover every version, so nothing can be exported."""
