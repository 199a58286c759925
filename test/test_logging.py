"""Tests for structured logging helpers."""

import json
import logging

from spirolink.shared.logging import StructuredFormatter, correlation_id_var, mask_secret


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="spirolink.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Email sent",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_extra_fields() -> None:
    data = json.loads(StructuredFormatter().format(_record(provider="resend")))

    assert data["level"] == "INFO"
    assert data["logger"] == "spirolink.test"
    assert data["message"] == "Email sent"
    assert data["provider"] == "resend"
    assert "correlation_id" not in data


def test_formatter_includes_correlation_id() -> None:
    token = correlation_id_var.set("corr-1")
    try:
        data = json.loads(StructuredFormatter().format(_record()))
    finally:
        correlation_id_var.reset(token)

    assert data["correlation_id"] == "corr-1"


def test_formatter_does_not_overwrite_base_keys() -> None:
    data = json.loads(StructuredFormatter().format(_record(level="custom")))

    assert data["level"] == "INFO"
    assert data["extra_level"] == "custom"


def test_mask_secret() -> None:
    assert mask_secret("") == ""
    assert mask_secret("abc") == "***"
    assert mask_secret("re_1234567890") == "re_1***"
