"""Tests for pyvalidation.utils.logging_config module."""

from __future__ import annotations

import json
import logging

import pytest

from pyvalidation.utils.logging_config import (
    JsonFormatter,
    LogFormat,
    LogLevel,
    StructuredFormatter,
    ValidationLogger,
    configure_logging,
    disable_logging,
    enable_debug_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    configure_logging(level=LogLevel.WARNING)


def _record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("pyvalidation", logging.INFO, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestValidationLogger:
    def test_defaults(self):
        logger = ValidationLogger()
        assert logger.name == "pyvalidation"
        assert logger.level is LogLevel.WARNING
        assert logger.logger.level == logging.WARNING

    def test_get_logger_is_shared(self):
        assert get_logger() is get_logger()

    def test_configure_replaces_global(self):
        logger = configure_logging(level=LogLevel.DEBUG, format_type=LogFormat.JSON)
        assert get_logger() is logger
        assert logger.logger.level == logging.DEBUG

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "validation.log"
        logger = configure_logging(
            level=LogLevel.INFO, log_file=log_file, enable_file=True, enable_console=False
        )
        logger.log_cache_configured("validation", 100, 30.0)
        for handler in logger.logger.handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "Cache configured: cache=validation, max_size=100, ttl=30.0s" in content

    def test_helpers_emit_records(self, caplog):
        logger = configure_logging(level=LogLevel.INFO)
        logger.logger.propagate = True
        with caplog.at_level(logging.INFO, logger="pyvalidation"):
            logger.log_pattern_error("(bad", "missing )")
            logger.log_warmup(7, 1, 1.5)
        messages = [r.getMessage() for r in caplog.records]
        assert "Failed to precompile pattern: (bad - missing )" in messages
        assert "Cache warm-up: compiled=7, failed=1, time=1.50ms" in messages
        assert caplog.records[0].pattern == "(bad"

    def test_disable_and_enable_debug(self):
        configure_logging(level=LogLevel.INFO)
        disable_logging()
        assert get_logger().logger.level > logging.CRITICAL
        enable_debug_logging()
        assert get_logger().logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in get_logger().logger.handlers)


class TestFormatters:
    def test_json_formatter_includes_extras(self):
        data = json.loads(JsonFormatter().format(_record(cache="validation", max_size=5)))
        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["cache"] == "validation"
        assert data["max_size"] == 5
        assert "msg" not in data

    def test_json_formatter_keeps_unicode(self):
        output = JsonFormatter().format(_record("必须是有效的手机号码"))
        assert "必须是有效的手机号码" in output

    def test_structured_formatter(self):
        line = StructuredFormatter().format(_record(operation="warmup", compiled=3))
        assert "[INFO] pyvalidation: hello" in line
        assert line.endswith("| operation=warmup compiled=3")

    def test_structured_formatter_without_extras(self):
        line = StructuredFormatter().format(_record())
        assert "|" not in line
