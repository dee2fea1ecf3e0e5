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
"""SemVer parsing helpers."""

import re

import semver

_VERSION_PATTERN = re.compile(r'^(\d+)(\.\d+)?(\.\d+)?(.*)$')
_SUFFIX_PATTERN = re.compile(r'^(-[^+]*)?(\+.*)?$')


def _strip_leading_v(version: str) -> str:
  """Strip leading v from the version, if any."""
  # Versions starting with "v" aren't valid SemVer, but advisories sometimes
  # carry them.
  if version.startswith('v'):
    return version[1:]

  return version


def _remove_leading_zero(component: str) -> str:
  """Remove leading zeros from a numeric component."""
  if component.startswith('.') and component[1:].isdigit():
    return '.' + str(int(component[1:]))

  if component.isdigit():
    return str(int(component))

  return component


def _coerce_suffix(suffix: str) -> str:
  """Coerce a pre-release/build suffix into a valid SemVer suffix.

  Leading zeros are removed from numeric pre-release identifiers and empty
  identifiers are replaced with '-' (i.e 1.0.0-a..0 -> 1.0.0-a.-.0), which
  mostly preserves ordering."""
  if not suffix:
    return suffix

  match = _SUFFIX_PATTERN.match(suffix)
  if not match:
    return suffix

  pre, build = match.group(1), match.group(2)
  result = ''
  if pre:
    components = []
    for component in pre[1:].split('.'):
      if not component:
        components.append('-')
      else:
        components.append(_remove_leading_zero(component))
    result += '-' + '.'.join(components)

  if build:
    result += '+' + '.'.join(c or '-' for c in build[1:].split('.'))

  return result


def coerce(version: str) -> str:
  """Coerce a potentially invalid semver into valid semver.

  Missing minor and patch components are filled with zeros, so '1.5' becomes
  '1.5.0'."""
  version = _strip_leading_v(version.strip())
  match = _VERSION_PATTERN.match(version)
  if not match:
    return version

  return (_remove_leading_zero(match.group(1)) +
          _remove_leading_zero(match.group(2) or '.0') +
          _remove_leading_zero(match.group(3) or '.0') +
          _coerce_suffix(match.group(4)))


def parse(version: str) -> semver.Version:
  """Parse a SemVer. Raises ValueError for invalid versions."""
  return semver.Version.parse(coerce(version))


def next_version(version: semver.Version) -> semver.Version:
  """Get the smallest version that sorts strictly after the given version.

  Build metadata does not figure into precedence, so it is dropped."""
  if version.prerelease:
    return version.replace(prerelease=version.prerelease + '.0', build=None)

  return version.bump_patch().replace(prerelease='0')
