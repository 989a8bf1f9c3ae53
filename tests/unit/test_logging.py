from __future__ import annotations

import json
import logging
import sys

from idbench.utils.logging import JsonFormatter, _json_formatter

EXPECTED_INSERTED = 10_001
EXPECTED_INTERVAL = 10_000


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.inserted = EXPECTED_INSERTED
    record.mode = "ulid"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["inserted"] == EXPECTED_INSERTED
    assert payload["mode"] == "ulid"
    assert "lineno" not in payload


def test_json_formatter_supports_nested_extra_field() -> None:
    record = _record()
    record.extra = {"progress_interval": EXPECTED_INTERVAL}

    payload = json.loads(_json_formatter(record))

    assert payload["progress_interval"] == EXPECTED_INTERVAL
    assert "extra" not in payload


def test_json_formatter_includes_exception_text() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord(
            "test.logger", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
        )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "ERROR"
    assert "RuntimeError: boom" in payload["exc_info"]
