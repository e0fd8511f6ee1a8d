"""Unit tests for core.logger module.

Tests the structlog-based logging configuration:
- configure_logging() sets up a single stdout handler on the root logger
- JSON vs console rendering is chosen from LOG_FORMAT / ENVIRONMENT
- stdlib `extra=` fields come out as structured keys
- Noisy third-party loggers are quieted
"""

import json
import logging
import os
from unittest.mock import patch

import pytest
import structlog

from core.logger import _is_json_format, configure_logging, get_logger


@pytest.fixture(autouse=True)
def _clean_root_logger():
    """Save and restore root logger state around each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    structlog.reset_defaults()


def _stream_handler() -> logging.StreamHandler:
    (handler,) = logging.getLogger().handlers
    assert isinstance(handler, logging.StreamHandler)
    return handler


@pytest.mark.unit
class TestIsJsonFormat:
    @pytest.mark.parametrize(
        ("env", "expected"),
        [
            ({"LOG_FORMAT": "json"}, True),
            ({"LOG_FORMAT": "JSON"}, True),
            ({"LOG_FORMAT": "console", "ENVIRONMENT": "production"}, False),
            ({"LOG_FORMAT": "", "ENVIRONMENT": "production"}, True),
            ({"LOG_FORMAT": "", "ENVIRONMENT": "development"}, False),
        ],
    )
    def test_format_selection(self, env, expected):
        with patch.dict(os.environ, env):
            assert _is_json_format() is expected


@pytest.mark.unit
class TestConfigureLogging:
    """Test that configure_logging sets up handlers correctly."""

    def test_replaces_handlers_with_one_stream_handler(self):
        logging.getLogger().addHandler(logging.NullHandler())

        configure_logging()

        handler = _stream_handler()
        assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)

    def test_json_output_includes_extra_fields(self):
        with patch.dict(os.environ, {"LOG_FORMAT": "json"}):
            configure_logging()

        record = logging.LogRecord(
            name="services.certificates_service",
            level=logging.INFO,
            pathname="",
            lineno=0,
            msg="certificate.generated",
            args=(),
            exc_info=None,
        )
        record.certificate_id = "intro-ruby-jane"
        record.size_bytes = 4242

        parsed = json.loads(_stream_handler().formatter.format(record))

        assert parsed["event"] == "certificate.generated"
        assert parsed["level"] == "info"
        assert parsed["logger"] == "services.certificates_service"
        assert parsed["certificate_id"] == "intro-ruby-jane"
        assert parsed["size_bytes"] == 4242
        assert "timestamp" in parsed

    def test_json_output_includes_exception(self):
        with patch.dict(os.environ, {"LOG_FORMAT": "json"}):
            configure_logging()

        try:
            raise ValueError("boom")
        except ValueError:
            import sys

            exc_info = sys.exc_info()

        record = logging.LogRecord(
            name="test",
            level=logging.ERROR,
            pathname="",
            lineno=0,
            msg="certificate.render_failed",
            args=(),
            exc_info=exc_info,
        )

        parsed = json.loads(_stream_handler().formatter.format(record))

        assert "ValueError" in parsed["exception"]
        assert "boom" in parsed["exception"]

    def test_quiets_noisy_loggers(self):
        configure_logging()
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
        assert logging.getLogger("reportlab").level == logging.WARNING

    def test_respects_log_level_env(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "DEBUG"}):
            configure_logging()
            assert logging.getLogger().level == logging.DEBUG

    def test_unknown_log_level_falls_back_to_info(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "CHATTY"}):
            configure_logging()
            assert logging.getLogger().level == logging.INFO


@pytest.mark.unit
class TestGetLogger:
    def test_supports_key_value_logging(self, capsys):
        with patch.dict(os.environ, {"LOG_FORMAT": "json"}):
            configure_logging()

        get_logger("rendering.test").warning(
            "certificate.invalid_input", missing=["course_title"]
        )

        line = capsys.readouterr().out.strip().splitlines()[-1]
        parsed = json.loads(line)
        assert parsed["event"] == "certificate.invalid_input"
        assert parsed["missing"] == ["course_title"]
