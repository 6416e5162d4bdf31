"""JSON log output for burner.

One JSON object per line, suitable for collecting the logs of unattended
batch runs.
"""

from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else was added through
# ``extra`` or by a filter
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {
    "message",
    "asctime",
    "taskName",
}

# Text-only rendering of the file context, structured fields carry the same data
_TEXT_ONLY_ATTRS = frozenset({"file_tag"})


class JSONFormatter(logging.Formatter):
    """Format log records as JSON objects.

    Keys:
    - timestamp: ISO-8601 UTC time of the record
    - level: level name
    - message: formatted message
    - logger: logger name, omitted for the root logger
    - thread: thread name, only for records from ffmpeg drain threads
    - context: extra attributes such as the file position
    - exception: formatted traceback, if any
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name and record.name != "root":
            entry["logger"] = record.name
        if record.threadName and record.threadName != threading.main_thread().name:
            entry["thread"] = record.threadName

        context = _extra_attributes(record)
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _extra_attributes(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS
        and key not in _TEXT_ONLY_ATTRS
        and not key.startswith("_")
        and value is not None
    }
