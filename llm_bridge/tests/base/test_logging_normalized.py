"""Focused tests for llm_bridge.base.logging.

Covers:
- _parse_level string parsing
- logger namespacing under ``llm_bridge``
- normalized_log_event emits required keys without clobbering them
- JsonFormatter flattens structured events
- configure_logger attaches and removes the managed file handler
"""
from __future__ import annotations

import json
import logging

from llm_bridge.base.logging import (
    BASE_LOGGER_NAME,
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    configure_logger,
    get_logger,
    normalized_log_event,
)
from llm_bridge.base.log_support import JsonFormatter, LogContext


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_get_logger_nests_foreign_names():
    assert get_logger("adapters.custom").name == f"{BASE_LOGGER_NAME}.adapters.custom"  # nosec B101
    assert get_logger("llm_bridge.retry").name == "llm_bridge.retry"  # nosec B101
    assert logging.getLogger(BASE_LOGGER_NAME).propagate is False  # nosec B101


def test_normalized_log_event_required_keys(log_events):
    logger = get_logger("llm_bridge.test.logging")
    ctx = LogContext(provider="p", model="m", operation="chat")
    normalized_log_event(
        logger,
        "stream.end",
        ctx,
        phase="finalize",
        error_code="http",
        emitted=True,
        tokens={"prompt": 10, "completion": 5},
        attempt_extra=None,
    )
    event = log_events.named("stream.end")[0]
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in event  # nosec B101
    assert event["provider"] == "p" and event["operation"] == "chat"  # nosec B101
    assert event["tokens"] == {"prompt": 10, "completion": 5}  # nosec B101
    assert "attempt_extra" not in event  # nosec B101


def test_error_code_omitted_when_absent(log_events):
    normalized_log_event(get_logger("llm_bridge.test"), "chat.end", None, phase="finalize")
    event = log_events.named("chat.end")[0]
    assert "error_code" not in event  # nosec B101
    assert event["attempt"] is None  # nosec B101


def test_extra_fields_never_overwrite_normalized_values(log_events):
    normalized_log_event(get_logger("llm_bridge.test"), "x", None, phase="start", emitted=True, **{"emitted_count": 3})
    event = log_events.named("x")[0]
    assert event["emitted"] is True and event["emitted_count"] == 3  # nosec B101


def test_json_formatter_flattens_event():
    record = logging.LogRecord("llm_bridge.t", logging.INFO, __file__, 1, json.dumps({"event": "e", "a": 1}), None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "e" and out["a"] == 1  # nosec B101
    assert out["level"] == "INFO" and out["logger"] == "llm_bridge.t"  # nosec B101


def test_configure_logger_file_handler(tmp_path):
    path = tmp_path / "logs" / "bridge.log"
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        assert path.parent.exists()  # nosec B101
        managed = [h for h in logger.handlers if getattr(h, "baseFilename", None) == str(path)]
        assert len(managed) == 1  # nosec B101
    finally:
        configure_logger(level="INFO", file_path=None)
    assert not [h for h in logger.handlers if getattr(h, "baseFilename", None) == str(path)]  # nosec B101
