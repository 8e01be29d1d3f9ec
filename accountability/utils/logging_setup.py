"""Logging configuration for the CLI and embedding applications.

The engine itself only calls ``logging.getLogger(__name__)``; handlers are
installed here, once, by whoever owns the process.
"""

import json
import logging
import sys
from datetime import datetime, timezone

LOGGER_NAME = "accountability"


def _format_timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z')


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": _format_timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class PrettyFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = _format_timestamp(record)
        line = f"{ts} {record.levelname} [{record.name}] {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(level: str = "WARNING", fmt: str = "pretty") -> logging.Logger:
    """Install a single stderr handler on the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    formatter: logging.Formatter
    if fmt.lower() == "json":
        formatter = JsonFormatter()
    else:
        formatter = PrettyFormatter()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logger.handlers = [handler]
    logger.propagate = False
    return logger
