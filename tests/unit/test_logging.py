"""Unit tests for structured logging."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from lazyjira.logging import JsonFormatter, configure_logging


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord(
        name="lazyjira.jira.client",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Jira issue created",
        args=(),
        exc_info=None,
    )
    record.key = "OPS-7"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "lazyjira.jira.client"
    assert payload["message"] == "Jira issue created"
    assert payload["extra"] == {"key": "OPS-7"}


def test_configure_logging_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "lazyjira.log"

    configure_logging("info", log_file=log_file)
    logging.getLogger("lazyjira.test").info("hello", extra={"n": 1})
    for handler in logging.getLogger().handlers:
        handler.flush()
        handler.close()

    line = log_file.read_text(encoding="utf-8").strip()
    assert json.loads(line)["message"] == "hello"
    assert logging.getLogger("urllib3").level == logging.INFO


def test_json_formatter_keeps_record_internals_out_of_extra() -> None:
    logger = logging.getLogger("lazyjira.test.internals")
    captured: list[logging.LogRecord] = []
    handler = logging.Handler()
    handler.emit = captured.append  # type: ignore[method-assign]
    logger.addHandler(handler)
    try:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logger.exception("Jira request failed", extra={"status": 502})
    finally:
        logger.removeHandler(handler)

    payload = json.loads(JsonFormatter().format(captured[0]))

    assert payload["extra"] == {"status": 502}
    assert payload["source"].startswith("test_logging:")
    assert "RuntimeError: boom" in payload["exception"]
