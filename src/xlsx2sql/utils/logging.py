"""Structured logging for xlsx2sql.

Messages carry ``key=value`` fields after a ``|`` separator, and every
record emitted inside a :class:`LogContext` is prefixed with that
context (``[run_id=1a2b3c4d workbook=people.xlsx]``).

Usage:
    logger = get_logger(__name__)

    with LogContext(run_id="1a2b3c4d", workbook="people.xlsx"):
        with timed_operation(logger, "conversion") as metrics:
            metrics.statements_generated = 3
"""

import logging
import time
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from typing import Any

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(context)s%(message)s"

_run_id_var: ContextVar[str | None] = ContextVar("run_id", default=None)
_context_var: ContextVar[dict[str, Any] | None] = ContextVar(
    "log_context", default=None
)


def get_run_id() -> str | None:
    """Return the id of the conversion currently being logged, if any."""
    return _run_id_var.get()


def get_log_context() -> dict[str, Any]:
    """Return the fields added by enclosing LogContext blocks."""
    return dict(_context_var.get() or {})


@dataclass
class PerformanceMetrics:
    """Timing and counters for one conversion.

    Counters left at zero are omitted from :meth:`to_dict`.
    """

    operation: str
    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    end_time: datetime | None = None
    duration_seconds: float = 0.0
    sheets_processed: int = 0
    sheets_skipped: int = 0
    rows_converted: int = 0
    statements_generated: int = 0
    bytes_written: int = 0

    def finish(self) -> None:
        self.end_time = datetime.now(UTC)
        self.duration_seconds = (self.end_time - self.start_time).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "operation": self.operation,
            "duration_seconds": self.duration_seconds,
        }
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, int) and value:
                result[f.name] = value
        return result


class StructuredLogFormatter(logging.Formatter):
    """Formatter that fills ``%(context)s`` from the active LogContext."""

    def __init__(self, fmt: str = DEFAULT_FORMAT) -> None:
        super().__init__(fmt)

    def format(self, record: logging.LogRecord) -> str:
        parts = []
        run_id = get_run_id()
        if run_id:
            parts.append(f"run_id={run_id}")
        parts.extend(f"{key}={value}" for key, value in get_log_context().items())
        record.context = f"[{' '.join(parts)}] " if parts else ""
        return super().format(record)


class StructuredLogger:
    """Wrapper around a stdlib logger that appends ``key=value`` fields."""

    def __init__(self, name: str) -> None:
        self._logger = logging.getLogger(name)

    @staticmethod
    def _build_message(message: str, **kwargs: Any) -> str:
        if not kwargs:
            return message
        pairs = ", ".join(f"{key}={value}" for key, value in kwargs.items())
        return f"{message} | {pairs}"

    def debug(self, message: str, **kwargs: Any) -> None:
        self._logger.debug(self._build_message(message, **kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.info(self._build_message(message, **kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(self._build_message(message, **kwargs))

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log at ERROR level with the active exception's traceback."""
        self._logger.exception(self._build_message(message, **kwargs))

    def log_performance(self, metrics: PerformanceMetrics) -> None:
        self.info(f"Performance: {metrics.operation}", **metrics.to_dict())

    def log_progress(
        self, stage: str, current: int, total: int, details: str | None = None
    ) -> None:
        percentage = current / total * 100 if total else 0.0
        extra = {"details": details} if details else {}
        self.debug(
            f"Progress: {stage}",
            current=current,
            total=total,
            percentage=f"{percentage:.1f}%",
            **extra,
        )

    def log_conversion_result(
        self,
        source: str,
        success: bool,
        duration_seconds: float,
        statements: int,
        rows: int,
        skipped_sheets: list[str] | None = None,
        error_code: str | None = None,
    ) -> None:
        """Log the outcome of one workbook conversion.

        Successful runs log at INFO, failed runs at ERROR.
        """
        details: dict[str, Any] = {
            "source": source,
            "success": success,
            "duration_seconds": f"{duration_seconds:.3f}",
            "statements": statements,
            "rows": rows,
        }
        if skipped_sheets:
            details["skipped_sheets"] = ",".join(skipped_sheets)
        if error_code:
            details["error_code"] = error_code
        level = logging.INFO if success else logging.ERROR
        self._logger.log(level, self._build_message("Conversion completed", **details))


class LogContext:
    """Attach ``run_id`` and other fields to every record logged in a block.

    Nested blocks add to the enclosing fields; leaving a block restores
    whatever was active before it.
    """

    def __init__(self, run_id: str | None = None, **extra: Any) -> None:
        self._run_id = run_id
        self._extra = extra
        self._run_id_token: Token[str | None] | None = None
        self._context_token: Token[dict[str, Any] | None] | None = None

    def __enter__(self) -> "LogContext":
        if self._run_id is not None:
            self._run_id_token = _run_id_var.set(self._run_id)
        self._context_token = _context_var.set({**get_log_context(), **self._extra})
        return self

    def __exit__(self, *args: Any) -> None:
        if self._context_token is not None:
            _context_var.reset(self._context_token)
        if self._run_id_token is not None:
            _run_id_var.reset(self._run_id_token)


@contextmanager
def timed_operation(
    logger: StructuredLogger, operation: str
) -> Generator[PerformanceMetrics, None, None]:
    """Yield metrics for ``operation`` and log them when the block exits."""
    metrics = PerformanceMetrics(operation=operation)
    try:
        yield metrics
    finally:
        metrics.finish()
        logger.log_performance(metrics)


def configure_logging(level: int | str = logging.INFO) -> None:
    """Route all logging to stderr through the structured formatter.

    stdout is left alone so SQL printed there stays clean. Handlers from a
    previous call are replaced.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(StructuredLogFormatter())

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: str) -> StructuredLogger:
    return StructuredLogger(name)


class ProgressTracker:
    """Log a debug line per finished item of a multi-item stage."""

    def __init__(self, logger: StructuredLogger, stage: str, total: int) -> None:
        self._logger = logger
        self._stage = stage
        self._total = total
        self._done = 0
        self._started = time.monotonic()

    def update(self, details: str | None = None) -> None:
        self._done += 1
        self._logger.log_progress(self._stage, self._done, self._total, details)

    def complete(self) -> float:
        """Log the end of the stage and return its duration in seconds."""
        duration = time.monotonic() - self._started
        self._logger.debug(
            f"Completed: {self._stage}",
            total_items=self._total,
            duration_seconds=f"{duration:.2f}",
        )
        return duration
