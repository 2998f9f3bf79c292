"""Tests for sensitive data filtering in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

from slide_limiter.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    SensitiveDataFilter,
    clear_request_id,
    hash_identifier,
    set_request_id,
)


def _capture_logger(name: str) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger, stream


def test_redacts_redis_credentials_and_api_keys():
    logger, stream = _capture_logger("test_redaction")

    logger.info(
        "redis.client_initialized",
        extra={
            "redis_url": "redis://:hunter2@cache:6379/0",
            "x-api-key": "sk-secret-123",
            "bucket": "login-attempts",
        },
    )

    output = stream.getvalue()
    assert "hunter2" not in output
    assert "sk-secret-123" not in output
    assert "[REDACTED]" in output
    assert "login-attempts" in output


def test_redacts_nested_fields():
    logger, stream = _capture_logger("test_nested")

    logger.info(
        "nested_event",
        extra={"headers": {"Authorization": "Bearer abc", "user-agent": "pytest"}},
    )

    output = stream.getvalue()
    assert "Bearer abc" not in output
    assert "pytest" in output


def test_safe_rate_limit_fields_pass_through():
    logger, stream = _capture_logger("test_safe_fields")

    logger.warning(
        "rate_limit.exceeded",
        extra={"key_hash": hash_identifier("ip:203.0.113.7"), "remaining": 0, "limit": 5},
    )

    payload = json.loads(stream.getvalue())
    assert payload["message"] == "rate_limit.exceeded"
    assert payload["level"] == "warning"
    assert payload["limit"] == 5
    assert "203.0.113.7" not in stream.getvalue()
    assert "[REDACTED]" not in stream.getvalue()


def test_request_id_from_context_is_attached():
    logger, stream = _capture_logger("test_request_id")

    set_request_id("req-123")
    try:
        logger.info("rate_limit.allowed")
    finally:
        clear_request_id()

    assert json.loads(stream.getvalue())["request_id"] == "req-123"


def test_hash_identifier_is_stable_and_short():
    assert hash_identifier("api_key:abc") == hash_identifier("api_key:abc")
    assert hash_identifier("api_key:abc") != hash_identifier("api_key:abd")
    assert len(hash_identifier("api_key:abc")) == 16
