"""JSON log formatter."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord has, plus those set by formatters and by
# AssetContextFilter. Anything else on a record came from ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
    "asset_tag",
    "file_id",
    "file_path",
}

# Included in context when a file block is active
_FILE_CONTEXT = ("file_id", "file_path")


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Each entry carries:
    - timestamp: ISO-8601 UTC
    - level: Log level name
    - message: Rendered message
    - logger: Logger name (omitted for root)
    - context: Attributes passed via ``extra`` plus the current file
    - exception: Formatted traceback, when present
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name and record.name != "root":
            entry["logger"] = record.name

        context = _extra_fields(record)
        context.update(
            (name, getattr(record, name))
            for name in _FILE_CONTEXT
            if getattr(record, name, None)
        )
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }
