"""Tests for the logging service."""

import json
import logging
import logging.handlers
import os
import tempfile
from io import StringIO
from pathlib import Path
from unittest.mock import patch

from hypothesis import given, settings, strategies as st

from yts_browser.services.logging import LoggingService, setup_logging


def parse_first_line(output: str) -> dict[str, object] | None:
    lines = [line for line in output.strip().split("\n") if line.strip()]
    return json.loads(lines[0]) if lines else None


class TestLoggingService:
    """Test cases for LoggingService."""

    def test_development_console_is_human_readable(self) -> None:
        with patch.dict(os.environ, {"ENVIRONMENT": "development"}):
            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                service = LoggingService(log_level="INFO")
                service.configure()
                service.get_logger("test").info("movies listed", page=2)
                output = mock_stdout.getvalue()

        assert "movies listed" in output
        assert not output.strip().startswith("{")

    def test_production_console_is_json(self) -> None:
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            service = LoggingService(log_level="INFO")
            service.configure()
            logger = service.get_logger("test")

            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                logger.info("movies listed", page=2)
                output = mock_stdout.getvalue()

        parsed = parse_first_line(output)
        if parsed is not None:
            assert parsed["event"] == "movies listed"
            assert parsed["page"] == 2
            assert "timestamp" in parsed
            assert "level" in parsed

    def test_tui_mode_has_no_console_handler(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            service = LoggingService(log_level="INFO", log_dir=Path(temp_dir), tui_mode=True)
            service.configure()

            handlers = logging.getLogger().handlers
            assert handlers
            assert all(
                isinstance(handler, logging.handlers.RotatingFileHandler)
                for handler in handlers
            )

    def test_file_logging_is_json_even_in_development(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            log_dir = Path(temp_dir)
            with patch.dict(os.environ, {"ENVIRONMENT": "development"}):
                service = LoggingService(log_level="INFO", log_dir=log_dir, tui_mode=True)
                service.configure()
                service.get_logger("test").info("catalog request", url="https://yts.example")

            app_log = log_dir / "app.log"
            assert app_log.exists()
            assert (log_dir / "error.log").exists()

            parsed = json.loads(app_log.read_text().strip())
            assert parsed["event"] == "catalog request"
            assert parsed["url"] == "https://yts.example"

    def test_errors_go_to_error_log(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            log_dir = Path(temp_dir)
            with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
                service = LoggingService(log_level="DEBUG", log_dir=log_dir, tui_mode=True)
                service.configure()
                logger = service.get_logger("test")
                logger.info("not an error")
                logger.error("catalog unavailable", status_code=503)

            lines = (log_dir / "error.log").read_text().strip().split("\n")
            assert len(lines) == 1
            parsed = json.loads(lines[0])
            assert parsed["event"] == "catalog unavailable"
            assert parsed["status_code"] == 503
            assert parsed["level"] == "error"

    def test_httpx_request_logging_is_quieted(self) -> None:
        service = LoggingService(log_level="DEBUG", tui_mode=True)
        service.configure()
        assert logging.getLogger("httpx").level == logging.WARNING

        service = LoggingService(log_level="ERROR", tui_mode=True)
        service.configure()
        assert logging.getLogger("httpx").level == logging.ERROR


class TestStructuredLoggingProperties:
    """Property-based tests for structured log records."""

    @given(
        log_level=st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
        logger_name=st.text(min_size=1, max_size=30).filter(lambda x: x.isidentifier()),
        message=st.text(min_size=1, max_size=100),
        context_data=st.dictionaries(
            keys=st.text(min_size=1, max_size=20).filter(lambda x: x.isidentifier()),
            values=st.one_of(
                st.text(max_size=50),
                st.integers(),
                st.booleans(),
            ),
            max_size=5,
        ),
    )
    @settings(max_examples=50)
    def test_records_keep_level_logger_and_context(
        self,
        log_level: str,
        logger_name: str,
        message: str,
        context_data: dict[str, str | int | bool],
    ) -> None:
        """Every record carries its event, level, logger name and all context keys."""
        reserved = {"event", "level", "logger", "timestamp"}
        context_data = {k: v for k, v in context_data.items() if k not in reserved}

        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            service = LoggingService(log_level="DEBUG")
            service.configure()
            logger = service.get_logger(logger_name)

            with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                getattr(logger, log_level.lower())(message, **context_data)
                output = mock_stdout.getvalue()

        parsed = parse_first_line(output)
        if parsed is None:
            return
        assert parsed["event"] == message
        assert str(parsed["level"]).upper() == log_level
        assert parsed["logger"] == logger_name
        assert "T" in str(parsed["timestamp"])
        for key, value in context_data.items():
            assert parsed[key] == value

    @given(
        error_message=st.text(min_size=1, max_size=100),
        exception_type=st.sampled_from([ValueError, RuntimeError, TypeError, OSError]),
    )
    @settings(max_examples=30)
    def test_exception_records_include_traceback(
        self,
        error_message: str,
        exception_type: type[Exception],
    ) -> None:
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            service = LoggingService(log_level="DEBUG")
            service.configure()
            logger = service.get_logger("errors")

            try:
                raise exception_type(error_message)
            except exception_type:
                with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
                    logger.error("Unexpected movie fetch error", exc_info=True)
                    output = mock_stdout.getvalue()

        parsed = parse_first_line(output)
        if parsed is None:
            return
        assert parsed["level"] == "error"
        exception_info = str(parsed["exception"])
        assert "Traceback" in exception_info
        assert exception_type.__name__ in exception_info


def test_setup_logging_function() -> None:
    """setup_logging records the environment and returns a configured service."""
    with tempfile.TemporaryDirectory() as temp_dir:
        with patch.dict(os.environ, {}):
            service = setup_logging(
                log_level="DEBUG",
                log_dir=Path(temp_dir),
                environment="production",
                tui_mode=True,
            )

            assert isinstance(service, LoggingService)
            assert os.environ["ENVIRONMENT"] == "production"
            assert service.tui_mode is True
            assert service.log_level == "DEBUG"
