# Copyright 2023 Google LLC
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
"""Logging helpers.

Log calls about a specific advisory pass `extra=advisory_context(...)`, so the
advisory file and ID end up in Cloud Logging's jsonPayload and in the local
log prefix.
"""

import logging
from typing import Any, Dict, Optional

from google.cloud import logging as google_logging

_LOCAL_FORMAT = ('%(asctime)s %(levelname)s %(name)s: '
                 '%(advisory_label)s%(message)s')


def advisory_context(path: Optional[str] = None,
                     advisory_id: Optional[str] = None) -> Dict[str, Any]:
  """`extra` for log calls about a single advisory."""
  advisory = {}
  if path:
    advisory['path'] = path
  if advisory_id:
    advisory['id'] = advisory_id

  return {'advisory': advisory}


def _advisory_label(record: logging.LogRecord) -> str:
  advisory = getattr(record, 'advisory', None) or {}
  parts = [str(advisory[key]) for key in ('id', 'path') if key in advisory]
  if not parts:
    return ''

  return '[' + ' '.join(parts) + '] '


class _AdvisoryLabelFilter:
  """Adds the `advisory_label` attribute used by the local format."""

  def filter(self, record: logging.LogRecord) -> bool:
    record.advisory_label = _advisory_label(record)
    return True


class _ErrorReportingFilter:
  """
  A logging filter that adds the advisory being processed to json_fields, and
  the fields Error Reporting needs to pick up error logs.

  https://cloud.google.com/error-reporting/docs/formatting-error-messages#log-text
  """

  def __init__(self, service_name: str) -> None:
    self.service_name = service_name

  def filter(self, record: logging.LogRecord) -> bool:
    """Add the advisory and error reporting fields to json_fields."""
    if not hasattr(record, 'json_fields'):
      record.json_fields = {}

    advisory = getattr(record, 'advisory', None)
    if advisory:
      record.json_fields['advisory'] = advisory

    if record.levelno >= logging.ERROR and not record.exc_info:
      context = {
          'reportLocation': {
              'filePath': record.pathname,
              'lineNumber': record.lineno,
              'functionName': record.funcName,
          }
      }
      if advisory:
        # Groups errors in Error Reporting by the advisory that caused them.
        context['user'] = advisory.get('id') or advisory.get('path')

      record.json_fields.update({
          '@type':
              'type.googleapis.com/google.devtools.clouderrorreporting.v1beta1.ReportedErrorEvent',  # pylint: disable=line-too-long
          'serviceContext': {
              'service': self.service_name,
          },
          'context': context,
      })

    return True


def setup_gcp_logging(service_name):
  """Set up GCP logging and error reporting."""
  logging_client = google_logging.Client()
  logging_client.setup_logging()

  logging.getLogger().addFilter(_ErrorReportingFilter(service_name))
  logging.getLogger().setLevel(logging.INFO)


def setup_local_logging(verbose=False):
  """Set up logging to stderr for command line use."""
  handler = logging.StreamHandler()
  handler.setFormatter(logging.Formatter(_LOCAL_FORMAT))
  handler.addFilter(_AdvisoryLabelFilter())
  logging.basicConfig(
      handlers=[handler], level=logging.DEBUG if verbose else logging.INFO)
