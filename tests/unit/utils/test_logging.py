"""Tests for logging configuration utilities."""

from io import StringIO
import json
import logging
from pathlib import Path
import sys

import pytest

from wavr.core.utils.logging import (
    PERF_LOGGER_NAME,
    StructuredJSONFormatter,
    configure_logging,
    get_logger,
    log_performance,
)


class TestStructuredJSONFormatter:
    """Test suite for StructuredJSONFormatter."""

    def test_basic_log_format(self):
        """Test basic log record formatting to JSON."""
        formatter = StructuredJSONFormatter()
        record = logging.LogRecord(
            name="wavr.test",
            level=logging.INFO,
            pathname="/path/to/file.py",
            lineno=42,
            msg="Computed %d values",
            args=(5,),
            exc_info=None,
        )
        record.funcName = "compute_values"

        data = json.loads(formatter.format(record))

        assert data["level"] == "INFO"
        assert data["message"] == "Computed 5 values"
        assert "timestamp" in data
        assert data["context"]["logger_name"] == "wavr.test"
        assert data["context"]["function"] == "compute_values"
        assert data["context"]["line"] == 42

    def test_log_with_extra_fields(self):
        """Test that extra fields are included in context."""
        formatter = StructuredJSONFormatter()
        record = logging.LogRecord("wavr.test", logging.DEBUG, __file__, 1, "msg", (), None)
        record.source = "song.flac"
        record.resolution = 4

        data = json.loads(formatter.format(record))

        assert data["context"]["source"] == "song.flac"
        assert data["context"]["resolution"] == 4
        assert "msg" not in data["context"]
        assert "args" not in data["context"]

    def test_log_with_exception(self):
        """Test exception info is captured."""
        formatter = StructuredJSONFormatter()
        try:
            raise ValueError("bad block")
        except ValueError:
            record = logging.LogRecord(
                "wavr.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        data = json.loads(formatter.format(record))

        assert data["context"]["error_type"] == "ValueError"
        assert data["context"]["error_message"] == "bad block"
        assert "Traceback" in data["context"]["stack_trace"]


class TestConfigureLogging:
    """Test suite for configure_logging."""

    @pytest.fixture(autouse=True)
    def _restore(self, restore_logging):
        yield

    def test_stream_output(self):
        stream = StringIO()
        configure_logging(level="DEBUG", stream=stream)

        logging.getLogger("wavr.test").debug("hello")

        assert "wavr.test - DEBUG - hello" in stream.getvalue()

    def test_level_case_insensitive(self):
        configure_logging(level="error", stream=StringIO())
        assert logging.getLogger().level == logging.ERROR

    def test_structured_output(self):
        stream = StringIO()
        configure_logging(level="INFO", structured=True, stream=stream)

        logging.getLogger("wavr.test").info("structured")

        data = json.loads(stream.getvalue().strip())
        assert data["message"] == "structured"

    def test_file_output(self, tmp_path: Path):
        log_file = tmp_path / "wavr.log"
        configure_logging(level="INFO", filename=str(log_file))

        logging.getLogger("wavr.test").info("to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "to file" in log_file.read_text()

    def test_custom_format(self):
        stream = StringIO()
        configure_logging(level="INFO", format_string="%(levelname)s|%(message)s", stream=stream)

        logging.getLogger("wavr.test").info("formatted")

        assert stream.getvalue().strip() == "INFO|formatted"

    def test_noisy_loggers_suppressed(self):
        configure_logging(level="DEBUG", stream=StringIO())
        assert logging.getLogger("PIL").level == logging.WARNING


class TestGetLogger:
    """Test suite for get_logger."""

    def test_plain_logger(self):
        logger = get_logger("wavr.test")
        assert isinstance(logger, logging.Logger)

    def test_adapter_with_context(self):
        logger = get_logger("wavr.test", source="song.wav")

        assert isinstance(logger, logging.LoggerAdapter)
        assert logger.extra == {"source": "song.wav"}


class TestLogPerformance:
    """Test suite for log_performance."""

    def test_logs_timing(self, caplog):
        @log_performance
        def work(x):
            return x * 2

        with caplog.at_level(logging.DEBUG, logger=PERF_LOGGER_NAME):
            assert work(21) == 42

        assert any("'work' took" in r.getMessage() for r in caplog.records)

    def test_preserves_metadata(self):
        @log_performance
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."
