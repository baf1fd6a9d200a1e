"""Single-line JSON logs on stdout."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from app.config import get_settings

# ``extra=`` keys the app attaches to recommendation log records.
STRUCTURED_FIELDS = ("email", "job_count", "recommendation_count")


class JSONFormatter(logging.Formatter):
    """Formats a record as one JSON object, including known extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            {key: getattr(record, key) for key in STRUCTURED_FIELDS if hasattr(record, key)}
        )
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging() -> None:
    """Send every logger through one stdout handler at ``LOG_LEVEL``."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    logging.basicConfig(level=get_settings().log_level.upper(), handlers=[handler], force=True)
