"""Utilities package for xlsx2sql.

This package provides:
- Centralized exception classes (exceptions.py)
- Structured logging utilities (logging.py)
"""

from xlsx2sql.utils.exceptions import (
    EmptySheetError,
    ErrorCode,
    ExitCodeMixin,
    GeneratorError,
    InputError,
    InputFileNotFoundError,
    InputSelectionError,
    MissingHeadersError,
    NoDataError,
    NoInputFilesError,
    OutputError,
    OutputWriteError,
    ParseError,
    UnsupportedFormatError,
    WorkbookReadError,
    Xlsx2SqlError,
)
from xlsx2sql.utils.logging import (
    LogContext,
    StructuredLogger,
    get_logger,
    get_run_id,
)

__all__ = [
    # Exceptions
    "EmptySheetError",
    "ErrorCode",
    "ExitCodeMixin",
    "GeneratorError",
    "InputError",
    "InputFileNotFoundError",
    "InputSelectionError",
    "MissingHeadersError",
    "NoDataError",
    "NoInputFilesError",
    "OutputError",
    "OutputWriteError",
    "ParseError",
    "UnsupportedFormatError",
    "WorkbookReadError",
    "Xlsx2SqlError",
    # Logging
    "LogContext",
    "StructuredLogger",
    "get_logger",
    "get_run_id",
]
