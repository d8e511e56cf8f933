"""Unit tests for structured logging utilities."""

import json
import logging
import sys
from io import StringIO

import pytest

from authorship.utils.logging import (
    get_logger,
    get_analysis_id,
    analysis_context,
    setup_logging,
    log_llm_call,
    StructuredFormatter,
    HumanFormatter,
    ContextLogger,
)


def make_record(msg="Test", level=logging.INFO, name="test", exc_info=None):
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=exc_info
    )


def capture(name: str):
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())

    base_logger = logging.getLogger(name)
    base_logger.handlers.clear()
    base_logger.addHandler(handler)
    base_logger.setLevel(logging.DEBUG)
    base_logger.propagate = False
    return stream


class TestAnalysisId:
    """Test per-analysis id management."""

    def test_bound_inside_block(self):
        with analysis_context("abc-123") as analysis_id:
            assert analysis_id == "abc-123"
            assert get_analysis_id() == "abc-123"

    def test_generate(self):
        with analysis_context() as generated:
            assert len(generated) == 8
            assert get_analysis_id() == generated

    def test_restored_on_exit(self):
        with analysis_context("outer"):
            with analysis_context("inner"):
                assert get_analysis_id() == "inner"
            assert get_analysis_id() == "outer"
        assert get_analysis_id() is None

    def test_restored_after_exception(self):
        with pytest.raises(RuntimeError):
            with analysis_context("failing"):
                raise RuntimeError("boom")
        assert get_analysis_id() is None


class TestStructuredFormatter:
    """Test JSON log formatter."""

    def test_basic_format(self):
        data = json.loads(StructuredFormatter().format(make_record("Test message", name="test.logger")))

        assert data["level"] == "INFO"
        assert data["logger"] == "test.logger"
        assert data["message"] == "Test message"
        assert "timestamp" in data

    def test_includes_analysis_id(self):
        with analysis_context("run-456"):
            data = json.loads(StructuredFormatter().format(make_record()))
        assert data["analysis_id"] == "run-456"

    def test_includes_extra_data(self):
        record = make_record()
        record.extra_data = {"attempt": 2, "next_delay": 4.0}

        data = json.loads(StructuredFormatter().format(record))

        assert data["attempt"] == 2
        assert data["next_delay"] == 4.0

    def test_includes_exception(self):
        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(StructuredFormatter().format(make_record(level=logging.ERROR, exc_info=exc_info)))
        assert "ValueError" in data["exception"]


class TestHumanFormatter:
    """Test human-readable log formatter."""

    def test_basic_format(self):
        output = HumanFormatter().format(make_record("Test message", name="test.logger"))
        assert "INFO" in output
        assert "test.logger: Test message" in output

    def test_includes_extra_data(self):
        record = make_record()
        record.extra_data = {"key": "value"}
        assert "key=value" in HumanFormatter().format(record)


class TestContextLogger:
    """Test context-aware logger."""

    def test_get_logger(self):
        assert isinstance(get_logger("test.module"), ContextLogger)

    def test_context_merged_into_extra_data(self):
        stream = capture("test_context_merge")
        logger = get_logger("test_context_merge").with_context(analysis_id="x1")

        logger.info("hello", extra_data={"attempt": 3})

        data = json.loads(stream.getvalue())
        assert data["analysis_id"] == "x1"
        assert data["attempt"] == 3


class TestLogLLMCall:
    def test_failure_logged_as_warning(self):
        stream = capture("test_llm_call")
        logger = get_logger("test_llm_call")

        log_llm_call(logger, "openrouter", "m", attempt=2, duration_ms=15,
                     success=False, error="boom", status=502)

        data = json.loads(stream.getvalue())
        assert data["level"] == "WARNING"
        assert data["attempt"] == 2
        assert data["status"] == 502
        assert data["error"] == "boom"


class TestSetupLogging:
    def test_configures_root(self, tmp_path):
        log_file = tmp_path / "run.log"
        root = logging.getLogger()
        saved = (root.level, list(root.handlers))
        try:
            setup_logging(level="DEBUG", json_format=True, log_file=str(log_file))
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 2
            assert all(isinstance(h.formatter, StructuredFormatter) for h in root.handlers)
        finally:
            for handler in root.handlers:
                handler.close()
            root.setLevel(saved[0])
            root.handlers[:] = saved[1]
