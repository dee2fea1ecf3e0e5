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
"""Advisory version range helpers."""
from .bounds import Bound, Exclusive, Inclusive, Unbounded, UNBOUNDED
from .errors import (DuplicateBoundError, InvalidRangeError,
                     NothingAffectedError, OverlappingRangesError, RangeError,
                     RequirementParseError, TooManyPredicatesError,
                     UnsupportedOperatorError)
from .requirement import Op, Predicate, parse_predicates
from .unaffected import UnaffectedRange
from .osv_range import (OsvRange, next_version, osv_affected_range,
                        ranges_for_advisory, ranges_for_unaffected)
from .consistency import (Finding, FindingType, check_advisory,
                          check_unaffected)
