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
"""Check advisories and export their affected version ranges for OSV."""

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Type

import jsonschema
import yaml

from . import logs
from .consistency import check_advisory, advisory_id, advisory_versions
from .errors import NothingAffectedError, RangeError
from .osv_range import osv_affected_range, ranges_for_advisory

YAML_EXTENSIONS = ('.yaml', '.yml')
JSON_EXTENSIONS = ('.json',)

DEFAULT_ECOSYSTEM = 'crates.io'


class NoDatesSafeLoader(yaml.SafeLoader):
  """Safe YAML loader that does not turn date strings into datetimes."""

  @classmethod
  def remove_implicit_resolver(cls: Type['NoDatesSafeLoader'],
                               tag_to_remove: str) -> None:
    """Remove implicit resolvers for a tag, leaving super classes alone."""
    if 'yaml_implicit_resolvers' not in cls.__dict__:
      cls.yaml_implicit_resolvers = cls.yaml_implicit_resolvers.copy()

    for first_letter, mappings in list(cls.yaml_implicit_resolvers.items()):
      cls.yaml_implicit_resolvers[first_letter] = [
          (tag, regexp) for tag, regexp in mappings if tag != tag_to_remove
      ]


NoDatesSafeLoader.remove_implicit_resolver('tag:yaml.org,2002:timestamp')


def load_advisory(path: str) -> Dict[str, Any]:
  """Load an advisory file into a dict."""
  ext = os.path.splitext(path)[1]
  try:
    with open(path) as f:
      if ext in YAML_EXTENSIONS:
        data = yaml.load(f, Loader=NoDatesSafeLoader)
      elif ext in JSON_EXTENSIONS:
        data = json.load(f)
      else:
        raise ValueError('Unknown format ' + ext)

    if not isinstance(data, dict):
      raise ValueError('Advisory did not parse into a dictionary')
  except (OSError, ValueError, yaml.YAMLError) as e:
    logging.error(
        'Failed to load advisory: %s', e, extra=logs.advisory_context(path))
    raise

  return data


def export_advisory(advisory: Dict[str, Any],
                    ecosystem: str = DEFAULT_ECOSYSTEM) -> Dict[str, Any]:
  """Export a consistent advisory as a partial OSV record.

  Raises:
    NothingAffectedError: if the advisory affects no versions.
    RangeError: if the advisory version statements are malformed.
  """
  patched, unaffected = advisory_versions(advisory)
  ranges = ranges_for_advisory(patched, unaffected)
  details = advisory.get('advisory')
  if not isinstance(details, dict):
    details = {}
  return {
      'id': advisory_id(advisory),
      'affected': [{
          'package': {
              'ecosystem': ecosystem,
              'name': details.get('package'),
          },
          'ranges': [osv_affected_range(ranges)],
      }],
  }


def process(paths: List[str], ecosystem: str, strict: bool):
  """Check and export advisories.

  Returns:
    A (records, ok) tuple.
  """
  records = []
  ok = True
  for path in paths:
    try:
      advisory = load_advisory(path)
    except (OSError, ValueError, yaml.YAMLError):
      if strict:
        ok = False
      continue

    context = logs.advisory_context(path, advisory_id(advisory))
    findings = check_advisory(advisory)
    if findings:
      logging.warning(
          'Skipping export: %d finding(s)', len(findings), extra=context)
      ok = False
      continue

    try:
      records.append(export_advisory(advisory, ecosystem))
    except NothingAffectedError:
      logging.warning(
          'Skipping export: patched and unaffected versions cover every '
          'version',
          extra=context)
      ok = False
    except (RangeError, jsonschema.exceptions.ValidationError) as e:
      logging.warning('Failed to export: %s', e, extra=context)
      ok = False

  logging.info('Exported %d of %d advisories', len(records), len(paths))
  return records, ok


def main(argv=None):
  """Run the exporter."""
  parser = argparse.ArgumentParser(
      description='Check advisory version ranges and export them for OSV')
  parser.add_argument('paths', nargs='+', help='Advisory YAML or JSON files')
  parser.add_argument('--output', help='Output file (default: stdout)')
  parser.add_argument(
      '--ecosystem', default=DEFAULT_ECOSYSTEM, help='OSV package ecosystem')
  parser.add_argument(
      '--strict',
      action='store_true',
      help='Fail if any advisory file cannot be loaded')
  parser.add_argument(
      '--gcp_logging',
      action='store_true',
      help='Log to GCP logging instead of stderr')
  args = parser.parse_args(argv)

  if args.gcp_logging:
    logs.setup_gcp_logging('osv-ranges-export')
  else:
    logs.setup_local_logging()

  records, ok = process(args.paths, args.ecosystem, args.strict)
  output = json.dumps(records, indent=2)
  if args.output:
    with open(args.output, 'w') as f:
      f.write(output + '\n')
  else:
    print(output)

  return 0 if ok else 1


if __name__ == '__main__':
  sys.exit(main())
