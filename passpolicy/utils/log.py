"""Logging for passpolicy.

Records go to stderr, one JSON object per line unless plain text is asked
for. Anything passed through ``extra=`` lands in the JSON payload next to
the standard keys. Candidate passwords are never logged.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

PACKAGE_LOGGER = "passpolicy"
PLAIN_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# attributes every LogRecord carries; whatever else is on a record came from extra=
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line with a UTC timestamp."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value) for key, value in vars(record).items() if key not in _STANDARD_ATTRS
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def _stderr_handler(structured_json: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if structured_json else logging.Formatter(PLAIN_FORMAT))
    return handler


def get_logger(
    name: str = PACKAGE_LOGGER, level: str | int = "INFO", structured_json: bool = True
) -> logging.Logger:
    """Return the named logger, attaching a stderr handler the first time.

    A logger that already has handlers is returned untouched.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(_stderr_handler(structured_json))
        logger.setLevel(_level(level))
        logger.propagate = False
    return logger


def configure(level: str | int = "INFO", structured_json: bool = True) -> logging.Logger:
    """Replace the package logger's handler.

    Module loggers (``passpolicy.core.settings`` and friends) propagate up
    to it, so this is the only logger the CLI has to set up.
    """
    logging.getLogger(PACKAGE_LOGGER).handlers.clear()
    return get_logger(PACKAGE_LOGGER, level=level, structured_json=structured_json)
