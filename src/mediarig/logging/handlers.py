"""Custom logging handlers for mediarig.

Provides JSONFormatter for structured log output.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord has; anything else came in through extra= or a
# filter and belongs in the "context" object.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "container_tag"}


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Keys:
    - timestamp: ISO-8601 UTC
    - level: Log level name
    - logger: Logger name (omitted for root)
    - message: Log message
    - container: {"image", "id"} when a container context is active
    - context: Remaining extra attributes
    - exception: Formatted traceback when present
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        record_time = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": record_time.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        if record.name and record.name != "root":
            entry["logger"] = record.name

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }

        image = extra.pop("image", None)
        container_id = extra.pop("container_id", None)
        if image or container_id:
            entry["container"] = {"image": image, "id": container_id}

        if extra:
            entry["context"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
