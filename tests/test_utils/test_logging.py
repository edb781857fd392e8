"""Tests for the structured logging utilities."""

import logging
from unittest.mock import MagicMock, patch

from workforce_report.utils.logging import (
    LogContext,
    PerformanceMetrics,
    StructuredLogFormatter,
    StructuredLogger,
    clear_context,
    configure_logging,
    get_extra_context,
    get_logger,
    get_request_id,
    get_run_id,
    set_extra_context,
    set_request_id,
    set_run_id,
    timed_operation,
)


def _record(message: str = "Test message") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestContextVariables:
    """Tests for context variable management."""

    def setup_method(self) -> None:
        """Clear context before each test."""
        clear_context()

    def teardown_method(self) -> None:
        """Clear context after each test."""
        clear_context()

    def test_request_id_default_none(self) -> None:
        """Request ID should default to None."""
        assert get_request_id() is None

    def test_set_and_get_request_id(self) -> None:
        """Should be able to set and get request ID."""
        set_request_id("req-123")
        assert get_request_id() == "req-123"

    def test_run_id_default_none(self) -> None:
        """Run ID should default to None."""
        assert get_run_id() is None

    def test_set_and_get_run_id(self) -> None:
        """Should be able to set and get run ID."""
        set_run_id("run-456")
        assert get_run_id() == "run-456"

    def test_extra_context_default_empty(self) -> None:
        """Extra context should default to empty dict."""
        assert get_extra_context() == {}

    def test_set_and_get_extra_context(self) -> None:
        """Should be able to set and get extra context."""
        set_extra_context({"report_type": "audit"})
        assert get_extra_context() == {"report_type": "audit"}

    def test_clear_context(self) -> None:
        """clear_context should reset all context variables."""
        set_request_id("req-123")
        set_run_id("run-456")
        set_extra_context({"key": "value"})

        clear_context()

        assert get_request_id() is None
        assert get_run_id() is None
        assert get_extra_context() == {}


class TestPerformanceMetrics:
    """Tests for PerformanceMetrics dataclass."""

    def test_initialization(self) -> None:
        """PerformanceMetrics should initialize with defaults."""
        metrics = PerformanceMetrics(operation="decode")
        assert metrics.operation == "decode"
        assert metrics.end_time is None
        assert metrics.sheets_processed == 0
        assert metrics.rows_processed == 0
        assert metrics.custom_metrics == {}

    def test_finish_calculates_duration(self) -> None:
        """finish should set end time and a non-negative duration."""
        metrics = PerformanceMetrics(operation="decode")
        metrics.finish()
        assert metrics.end_time is not None
        assert metrics.duration_seconds >= 0

    def test_to_dict_excludes_zero_values(self) -> None:
        """to_dict should leave out counters that were never set."""
        metrics = PerformanceMetrics(operation="decode")
        result = metrics.to_dict()
        assert set(result) == {"operation", "duration_seconds"}

    def test_to_dict_with_all_fields(self) -> None:
        """to_dict should include every populated counter."""
        metrics = PerformanceMetrics(operation="process_report")
        metrics.sheets_processed = 4
        metrics.rows_processed = 120
        metrics.custom_metrics["sections"] = 3

        result = metrics.to_dict()

        assert result["sheets_processed"] == 4
        assert result["rows_processed"] == 120
        assert result["custom_metrics"] == {"sections": 3}


class TestStructuredLogger:
    """Tests for StructuredLogger class."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.logger = get_logger("test_logger")

    def test_get_logger_returns_structured_logger(self) -> None:
        """get_logger should return StructuredLogger."""
        assert isinstance(get_logger(__name__), StructuredLogger)

    def test_logger_property(self) -> None:
        """Logger property should return underlying Python logger."""
        assert isinstance(self.logger.logger, logging.Logger)
        assert self.logger.logger.name == "test_logger"

    def test_build_message_without_kwargs(self) -> None:
        """_build_message without kwargs should return original message."""
        assert self.logger._build_message("Workbook decoded") == "Workbook decoded"

    def test_build_message_with_kwargs(self) -> None:
        """_build_message should append key=value pairs in order."""
        msg = self.logger._build_message("Workbook decoded", sheets=3, rows=42)
        assert msg == "Workbook decoded | sheets=3, rows=42"

    @patch.object(logging.Logger, "info")
    def test_info_logging(self, mock_info: MagicMock) -> None:
        """Info method should log at INFO level."""
        self.logger.info("Report assembled", sections=2)
        mock_info.assert_called_once_with("Report assembled | sections=2")

    @patch.object(logging.Logger, "debug")
    def test_debug_logging(self, mock_debug: MagicMock) -> None:
        """Debug method should log at DEBUG level."""
        self.logger.debug("Sheet decoded")
        mock_debug.assert_called_once()

    @patch.object(logging.Logger, "warning")
    def test_warning_logging(self, mock_warning: MagicMock) -> None:
        """Warning method should log at WARNING level."""
        self.logger.warning("Workbook could not be opened")
        mock_warning.assert_called_once()

    @patch.object(logging.Logger, "error")
    def test_error_logging(self, mock_error: MagicMock) -> None:
        """Error method should pass exc_info through."""
        self.logger.error("Export failed", exc_info=True, format="pdf")
        mock_error.assert_called_once_with("Export failed | format=pdf", exc_info=True)

    @patch.object(logging.Logger, "exception")
    def test_exception_logging(self, mock_exception: MagicMock) -> None:
        """Exception method should log with traceback."""
        self.logger.exception("Unexpected error")
        mock_exception.assert_called_once()

    @patch.object(logging.Logger, "info")
    def test_log_performance(self, mock_info: MagicMock) -> None:
        """log_performance should log the operation and its metrics."""
        metrics = PerformanceMetrics(operation="decode")
        metrics.duration_seconds = 1.5
        metrics.rows_processed = 10

        self.logger.log_performance(metrics)

        message = mock_info.call_args[0][0]
        assert message.startswith("Performance: decode")
        assert "duration_seconds=1.5" in message
        assert "rows_processed=10" in message


class TestLogContext:
    """Tests for LogContext context manager."""

    def setup_method(self) -> None:
        """Clear context before each test."""
        clear_context()

    def teardown_method(self) -> None:
        """Clear context after each test."""
        clear_context()

    def test_context_sets_values(self) -> None:
        """LogContext should set context values within block."""
        with LogContext(run_id="run-123", report_type="audit"):
            assert get_run_id() == "run-123"
            assert get_extra_context() == {"report_type": "audit"}

    def test_context_restores_values(self) -> None:
        """LogContext should restore original values after block."""
        set_run_id("original-run")
        set_extra_context({"original": "value"})

        with LogContext(run_id="new-run", report_type="vacation"):
            assert get_run_id() == "new-run"
            assert get_extra_context() == {
                "original": "value",
                "report_type": "vacation",
            }

        assert get_run_id() == "original-run"
        assert get_extra_context() == {"original": "value"}

    def test_context_with_request_id(self) -> None:
        """LogContext should handle request_id."""
        with LogContext(request_id="req-456", run_id="run-789"):
            assert get_request_id() == "req-456"
            assert get_run_id() == "run-789"

        assert get_request_id() is None
        assert get_run_id() is None

    def test_nested_contexts(self) -> None:
        """Nested LogContext should work correctly."""
        with LogContext(run_id="outer"):
            with LogContext(run_id="inner"):
                assert get_run_id() == "inner"
            assert get_run_id() == "outer"


class TestTimedOperation:
    """Tests for timed_operation context manager."""

    @patch.object(StructuredLogger, "log_performance")
    def test_timed_operation_logs_metrics(self, mock_log: MagicMock) -> None:
        """timed_operation should log metrics on exit."""
        logger = get_logger("test")
        with timed_operation(logger, "decode") as metrics:
            metrics.sheets_processed = 2

        mock_log.assert_called_once()
        logged = mock_log.call_args[0][0]
        assert logged.operation == "decode"
        assert logged.sheets_processed == 2
        assert logged.end_time is not None

    @patch.object(StructuredLogger, "log_performance")
    def test_timed_operation_logs_on_error(self, mock_log: MagicMock) -> None:
        """timed_operation should still log when the block raises."""
        logger = get_logger("test")
        try:
            with timed_operation(logger, "decode"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        mock_log.assert_called_once()


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_with_string_level(self) -> None:
        """configure_logging should accept string level."""
        configure_logging(level="debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_with_int_level(self) -> None:
        """configure_logging should accept int level."""
        configure_logging(level=logging.WARNING)
        assert logging.getLogger().level == logging.WARNING

    def test_configure_with_structured_formatter(self) -> None:
        """configure_logging should use StructuredLogFormatter by default."""
        configure_logging()
        handler = logging.getLogger().handlers[0]
        assert isinstance(handler.formatter, StructuredLogFormatter)

    def test_configure_without_structured_formatter(self) -> None:
        """configure_logging can use standard formatter."""
        configure_logging(use_structured_formatter=False)
        handler = logging.getLogger().handlers[0]
        assert not isinstance(handler.formatter, StructuredLogFormatter)


class TestStructuredLogFormatter:
    """Tests for StructuredLogFormatter class."""

    def setup_method(self) -> None:
        """Clear context before each test."""
        clear_context()

    def teardown_method(self) -> None:
        """Clear context after each test."""
        clear_context()

    def test_format_without_context(self) -> None:
        """Formatter should leave the message alone without context."""
        formatter = StructuredLogFormatter("%(message)s")
        assert formatter.format(_record()) == "Test message"

    def test_format_with_ids(self) -> None:
        """Formatter should prefix request and run IDs."""
        set_request_id("req-123")
        set_run_id("run-456")
        formatter = StructuredLogFormatter("%(message)s")

        result = formatter.format(_record())

        assert result == "[request_id=req-123 run_id=run-456] Test message"

    def test_format_with_extra_context(self) -> None:
        """Formatter should include extra context."""
        set_extra_context({"report_type": "vacation"})
        formatter = StructuredLogFormatter("%(message)s")
        assert "report_type=vacation" in formatter.format(_record())

    def test_format_restores_record(self) -> None:
        """Formatter should not leave the prefix on the record."""
        set_run_id("run-1")
        record = _record()
        StructuredLogFormatter("%(message)s").format(record)
        assert record.msg == "Test message"
