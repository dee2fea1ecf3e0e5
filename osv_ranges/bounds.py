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
"""Interval bounds."""

from dataclasses import dataclass
from typing import Optional, Union

import semver

__all__ = ['Bound', 'Exclusive', 'Inclusive', 'Unbounded', 'UNBOUNDED']


@dataclass(frozen=True)
class Unbounded:
  """No constraint on this side of the range."""

  @property
  def version(self) -> Optional[semver.Version]:
    return None

  def __str__(self) -> str:
    return ''


@dataclass(frozen=True)
class Exclusive:
  """Constrained to versions strictly beyond `version`."""
  version: semver.Version

  def __str__(self) -> str:
    return str(self.version)


@dataclass(frozen=True)
class Inclusive:
  """Constrained to versions at or beyond `version`."""
  version: semver.Version

  def __str__(self) -> str:
    return str(self.version)


Bound = Union[Unbounded, Exclusive, Inclusive]

UNBOUNDED = Unbounded()
