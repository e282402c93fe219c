"""Tests for the structured logging utilities."""

import logging
from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest

from xlsx2sql.utils.logging import (
    LogContext,
    PerformanceMetrics,
    ProgressTracker,
    StructuredLogFormatter,
    StructuredLogger,
    configure_logging,
    get_log_context,
    get_logger,
    get_run_id,
    timed_operation,
)


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, message, None, None)


class TestPerformanceMetrics:
    def test_finish_sets_end_time(self) -> None:
        metrics = PerformanceMetrics(operation="conversion")
        metrics.finish()
        assert metrics.end_time is not None
        assert metrics.duration_seconds >= 0

    def test_to_dict_with_all_counters(self) -> None:
        metrics = PerformanceMetrics(operation="conversion")
        metrics.duration_seconds = 2.0
        metrics.sheets_processed = 3
        metrics.sheets_skipped = 1
        metrics.rows_converted = 40
        metrics.statements_generated = 2
        metrics.bytes_written = 512

        assert metrics.to_dict() == {
            "operation": "conversion",
            "duration_seconds": 2.0,
            "sheets_processed": 3,
            "sheets_skipped": 1,
            "rows_converted": 40,
            "statements_generated": 2,
            "bytes_written": 512,
        }

    def test_to_dict_excludes_zero_counters(self) -> None:
        assert PerformanceMetrics(operation="conversion").to_dict() == {
            "operation": "conversion",
            "duration_seconds": 0.0,
        }


class TestStructuredLogFormatter:
    def test_prefixes_context(self) -> None:
        formatter = StructuredLogFormatter("%(context)s%(message)s")
        with LogContext(run_id="abc", workbook="data.xlsx"):
            output = formatter.format(_record("Reading workbook"))
        assert output == "[run_id=abc workbook=data.xlsx] Reading workbook"

    def test_no_prefix_without_context(self) -> None:
        formatter = StructuredLogFormatter("%(context)s%(message)s")
        assert formatter.format(_record("plain")) == "plain"

    def test_default_format_includes_level(self) -> None:
        output = StructuredLogFormatter().format(_record("plain"))
        assert " - test - INFO - plain" in output


class TestStructuredLogger:
    """Tests for StructuredLogger class."""

    def setup_method(self) -> None:
        self.logger = get_logger("test_logger")

    def test_get_logger_returns_structured_logger(self) -> None:
        assert isinstance(get_logger(__name__), StructuredLogger)

    def test_build_message_without_kwargs(self) -> None:
        assert StructuredLogger._build_message("Test message") == "Test message"

    def test_build_message_with_kwargs(self) -> None:
        msg = StructuredLogger._build_message("Sheet read", sheet="people", rows=2)
        assert msg == "Sheet read | sheet=people, rows=2"

    @patch.object(logging.Logger, "info")
    def test_info_logging(self, mock_info: MagicMock) -> None:
        self.logger.info("SQL written", chars=10)
        assert mock_info.call_args[0][0] == "SQL written | chars=10"

    @patch.object(logging.Logger, "warning")
    def test_warning_logging(self, mock_warning: MagicMock) -> None:
        self.logger.warning("Sheet skipped", sheet="blank")
        mock_warning.assert_called_once_with("Sheet skipped | sheet=blank")

    @patch.object(logging.Logger, "exception")
    def test_exception_logging(self, mock_exception: MagicMock) -> None:
        self.logger.exception("Conversion failed", error_code="E3001")
        mock_exception.assert_called_once_with("Conversion failed | error_code=E3001")

    @patch.object(logging.Logger, "info")
    def test_log_performance(self, mock_info: MagicMock) -> None:
        metrics = PerformanceMetrics(operation="conversion")
        metrics.rows_converted = 10
        self.logger.log_performance(metrics)
        call_args = mock_info.call_args[0][0]
        assert call_args.startswith("Performance: conversion | ")
        assert "rows_converted=10" in call_args

    @patch.object(logging.Logger, "debug")
    def test_log_progress(self, mock_debug: MagicMock) -> None:
        self.logger.log_progress("Reading sheets", current=1, total=4, details="people")
        assert mock_debug.call_args[0][0] == (
            "Progress: Reading sheets | current=1, total=4, percentage=25.0%, "
            "details=people"
        )

    @patch.object(logging.Logger, "log")
    def test_log_conversion_result_success(self, mock_log: MagicMock) -> None:
        self.logger.log_conversion_result(
            source="data.xlsx",
            success=True,
            duration_seconds=0.25,
            statements=2,
            rows=10,
            skipped_sheets=["blank", "notes"],
        )
        level, message = mock_log.call_args[0]
        assert level == logging.INFO
        assert "Conversion completed" in message
        assert "skipped_sheets=blank,notes" in message
        assert "duration_seconds=0.250" in message

    @patch.object(logging.Logger, "log")
    def test_log_conversion_result_failure(self, mock_log: MagicMock) -> None:
        self.logger.log_conversion_result(
            source="data.xlsx",
            success=False,
            duration_seconds=0.1,
            statements=0,
            rows=0,
            error_code="E3001",
        )
        level, message = mock_log.call_args[0]
        assert level == logging.ERROR
        assert "error_code=E3001" in message


class TestLogContext:
    """Tests for LogContext context manager."""

    def test_context_sets_values(self) -> None:
        with LogContext(run_id="run-1", workbook="data.xlsx"):
            assert get_run_id() == "run-1"
            assert get_log_context() == {"workbook": "data.xlsx"}
        assert get_run_id() is None
        assert get_log_context() == {}

    def test_nested_contexts_merge_and_restore(self) -> None:
        with LogContext(run_id="outer", workbook="data.xlsx"):
            with LogContext(run_id="inner", sheet="people"):
                assert get_run_id() == "inner"
                assert get_log_context() == {
                    "workbook": "data.xlsx",
                    "sheet": "people",
                }
            assert get_run_id() == "outer"
            assert get_log_context() == {"workbook": "data.xlsx"}

    def test_inner_context_without_run_id_keeps_outer(self) -> None:
        with LogContext(run_id="outer"):
            with LogContext(sheet="people"):
                assert get_run_id() == "outer"

    def test_restores_after_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with LogContext(run_id="run-1"):
                raise RuntimeError("boom")
        assert get_run_id() is None


class TestTimedOperation:
    @patch.object(StructuredLogger, "log_performance")
    def test_logs_metrics_on_exit(self, mock_log: MagicMock) -> None:
        with timed_operation(get_logger("test"), "conversion") as metrics:
            metrics.rows_converted = 100

        logged = mock_log.call_args[0][0]
        assert logged.operation == "conversion"
        assert logged.rows_converted == 100
        assert logged.end_time is not None

    @patch.object(StructuredLogger, "log_performance")
    def test_logs_metrics_when_body_raises(self, mock_log: MagicMock) -> None:
        with pytest.raises(RuntimeError):
            with timed_operation(get_logger("test"), "conversion"):
                raise RuntimeError("boom")
        mock_log.assert_called_once()


class TestProgressTracker:
    @patch.object(StructuredLogger, "log_progress")
    def test_update_logs_each_item(self, mock_log: MagicMock) -> None:
        tracker = ProgressTracker(get_logger("test"), "Reading sheets", total=2)
        tracker.update(details="people")
        tracker.update()
        assert mock_log.call_args_list[0][0] == ("Reading sheets", 1, 2, "people")
        assert mock_log.call_args_list[1][0] == ("Reading sheets", 2, 2, None)

    @patch.object(StructuredLogger, "debug")
    def test_complete_returns_duration(self, mock_debug: MagicMock) -> None:
        tracker = ProgressTracker(get_logger("test"), "Reading", total=1)
        assert tracker.complete() >= 0
        assert mock_debug.call_args[0][0] == "Completed: Reading"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_root(self) -> Iterator[None]:
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_configure_with_string_level(self) -> None:
        configure_logging(level="debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_with_int_level(self) -> None:
        configure_logging(level=logging.WARNING)
        assert logging.getLogger().level == logging.WARNING

    def test_replaces_handlers_with_structured_formatter(self) -> None:
        configure_logging()
        configure_logging()
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, StructuredLogFormatter)

    def test_writes_context_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("INFO")
        with LogContext(run_id="abc"):
            get_logger("xlsx2sql.test").info("Reading workbook")
        captured = capsys.readouterr()
        assert "[run_id=abc] Reading workbook" in captured.err
        assert captured.out == ""
