"""JSON log formatter."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else came from extra=...
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}

# Set by JobContextFilter and emitted under their own names
_JOB_ATTRS = ("job_id", "job_input")
_FILTER_ATTRS = frozenset({*_JOB_ATTRS, "job_tag"})


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Keys: timestamp (ISO-8601 UTC), level, message, logger (omitted for the
    root logger), context (extra attributes plus the batch job, when any)
    and exception.
    """

    @staticmethod
    def _context(record: logging.LogRecord) -> dict[str, Any]:
        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
            and key not in _FILTER_ATTRS
            and not key.startswith("_")
        }
        for name in _JOB_ATTRS:
            if value := getattr(record, name, None):
                context[name] = value
        return context

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name != "root":
            entry["logger"] = record.name
        if context := self._context(record):
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)
