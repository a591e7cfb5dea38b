"""Structured logging configuration.

Uses standard library logging with a JSON formatter. Logs go to stderr (or a
file) so they never mix with the ticket key printed on stdout.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_BLANK_RECORD = logging.LogRecord("", logging.NOTSET, "", 0, "", (), None)
_STANDARD_ATTRS = frozenset(vars(_BLANK_RECORD)) | {"message", "asctime"}


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per record: when, where, what, plus any `extra=` context."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        created = datetime.fromtimestamp(record.created, tz=UTC)
        payload: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "source": f"{record.module}:{record.lineno}",
            "message": record.getMessage(),
        }

        if context := _context(record):
            payload["extra"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str, *, log_file: Path | None = None) -> None:
    """Send JSON log lines to `log_file`, or to stderr when no file is given."""

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())

    # urllib3 logs each connection at DEBUG.
    logging.getLogger("urllib3").setLevel(max(root.level, logging.INFO))
