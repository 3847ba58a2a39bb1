from __future__ import annotations

import json
import logging

from app.core.logging import JsonFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.suggestions",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Suggestion failed",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_tolerates_missing_extra_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record()))
    assert payload["message"] == "Suggestion failed"
    assert payload["logger"] == "app.suggestions"
    assert payload["request_id"] is None
    assert "field" not in payload


def test_formatter_includes_suggestion_metadata() -> None:
    payload = json.loads(
        JsonFormatter().format(
            _record(
                request_id="req-1",
                field="reasonForApplying",
                language="ar",
                outcome="timeout",
                status_code=504,
                success=False,
            )
        )
    )
    assert payload["request_id"] == "req-1"
    assert payload["field"] == "reasonForApplying"
    assert payload["language"] == "ar"
    assert payload["outcome"] == "timeout"
    assert payload["status_code"] == 504
    assert payload["success"] is False
