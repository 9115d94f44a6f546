"""Structured Logging: one JSON object per line for game, save slot and request events.

Invariants:
    - Every line carries timestamp (UTC, ISO-8601), level, logger and message
    - Game context travels in `extra=`: slot (save slot name), command (machine
      command), error_code (rejection or error code), position (catalog
      position), path (HTTP path), backend (storage backend)
    - Only those keys are lifted from a record; anything else passed in extra stays out
    - log_format "json" selects JSONFormatter, any other value a plain text line

Design Decisions:
    - setup_logging runs once from the FastAPI lifespan with settings.log_level
      and settings.log_format
"""

import json
import logging
from datetime import datetime, timezone

GAME_LOG_FIELDS = ("slot", "command", "error_code", "position", "path", "backend")

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """Render a record and its game context fields as a JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (name, getattr(record, name))
            for name in GAME_LOG_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Attach a stream handler to the root logger."""
    formatter = JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
