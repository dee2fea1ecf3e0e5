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
"""Advisory version consistency checks."""

from dataclasses import dataclass
import enum
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from . import logs
from .errors import RangeError
from .unaffected import UnaffectedRange


class FindingType(enum.IntEnum):
  """Kinds of consistency findings."""
  INVALID_RANGE = 1
  OVERLAPPING_RANGES = 2
  INVALID_ADVISORY = 3


@dataclass(frozen=True)
class Finding:
  """A problem with an advisory's version statements."""
  type: FindingType
  message: str
  advisory_id: Optional[str] = None
  requirements: Tuple[str, ...] = ()

  def __str__(self) -> str:
    prefix = f'{self.advisory_id}: ' if self.advisory_id else ''
    return f'{prefix}{self.type.name}: {self.message}'


def check_unaffected(requirements: Iterable[str],
                     advisory_id: Optional[str] = None) -> List[Finding]:
  """Check that unaffected requirements parse and do not overlap."""
  findings = []
  ranges = []
  for requirement in requirements:
    try:
      ranges.append((requirement, UnaffectedRange.from_requirement(requirement)))
    except RangeError as e:
      findings.append(
          Finding(
              FindingType.INVALID_RANGE,
              f'Unparseable or self-contradictory version range '
              f'{requirement!r}: {e}',
              advisory_id=advisory_id,
              requirements=(requirement,)))

  for i, (a_requirement, a) in enumerate(ranges):
    for b_requirement, b in ranges[i + 1:]:
      if a.overlaps(b):
        findings.append(
            Finding(
                FindingType.OVERLAPPING_RANGES,
                f'Version ranges {a_requirement!r} and {b_requirement!r} '
                'overlap',
                advisory_id=advisory_id,
                requirements=(a_requirement, b_requirement)))

  for finding in findings:
    logging.warning(
        '%s', finding, extra=logs.advisory_context(advisory_id=advisory_id))

  return findings


def _requirement_list(versions: Dict[str, Any], key: str) -> List[str]:
  value = versions.get(key) or []
  if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
    raise ValueError(f'versions.{key} must be a list of strings')

  return value


def advisory_versions(advisory: Dict[str, Any]) -> Tuple[List[str], List[str]]:
  """Get the (patched, unaffected) requirement lists of an advisory.

  Raises:
    ValueError: if the versions table is malformed.
  """
  versions = advisory.get('versions') or {}
  if not isinstance(versions, dict):
    raise ValueError('versions must be a table')

  return (_requirement_list(versions, 'patched'),
          _requirement_list(versions, 'unaffected'))


def advisory_id(advisory: Dict[str, Any]) -> Optional[str]:
  """Get the advisory ID, if any."""
  details = advisory.get('advisory')
  if not isinstance(details, dict) or not details.get('id'):
    return None

  return str(details['id'])


def check_advisory(advisory: Dict[str, Any]) -> List[Finding]:
  """Check the `patched` and `unaffected` statements of an advisory."""
  vuln_id = advisory_id(advisory)
  try:
    patched, unaffected = advisory_versions(advisory)
  except ValueError as e:
    finding = Finding(FindingType.INVALID_ADVISORY, str(e), advisory_id=vuln_id)
    logging.warning(
        '%s', finding, extra=logs.advisory_context(advisory_id=vuln_id))
    return [finding]

  return check_unaffected(patched + unaffected, advisory_id=vuln_id)
