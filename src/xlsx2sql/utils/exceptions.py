"""Centralized exception classes for xlsx2sql.

This module provides a hierarchy of custom exceptions with error codes,
process exit code mapping, and structured error details for consistent
error handling throughout the converter.

Exception Hierarchy:
    Xlsx2SqlError (base)
    ├── InputError
    │   ├── InputFileNotFoundError
    │   ├── UnsupportedFormatError
    │   ├── NoInputFilesError
    │   └── InputSelectionError
    ├── ParseError
    │   ├── WorkbookReadError
    │   ├── EmptySheetError
    │   └── MissingHeadersError
    ├── GeneratorError
    │   └── NoDataError
    └── OutputError
        └── OutputWriteError

Error Codes:
    All errors have a unique error code (e.g., "E1001") that can be used
    for programmatic error handling and documentation.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Enumeration of all error codes used in the application.

    Error codes are grouped by category:
    - E1xxx: Input file errors
    - E2xxx: Workbook parsing errors
    - E3xxx: SQL generation errors
    - E4xxx: Output errors
    - E9xxx: Internal/unexpected errors
    """

    # Input errors (E1xxx)
    FILE_NOT_FOUND = "E1001"
    UNSUPPORTED_FORMAT = "E1003"
    NO_INPUT_FILES = "E1007"
    INPUT_SELECTION_FAILED = "E1008"

    # Parse errors (E2xxx)
    WORKBOOK_READ_FAILED = "E2001"
    EMPTY_SHEET = "E2002"
    MISSING_HEADERS = "E2003"

    # Generation errors (E3xxx)
    NO_DATA = "E3001"

    # Output errors (E4xxx)
    OUTPUT_WRITE_FAILED = "E4001"

    # Internal errors (E9xxx)
    INTERNAL_ERROR = "E9001"
    CONFIGURATION_ERROR = "E9002"


class ExitCodeMixin:
    """Mixin that provides a process exit code for exceptions.

    The command line exits with this code when the exception reaches it.
    Subclasses should set the `exit_code` class attribute.
    """

    exit_code: int = 1

    def get_exit_code(self) -> int:
        """Get the process exit code for this exception.

        Returns:
            Exit code appropriate for this error.
        """
        return self.exit_code


class Xlsx2SqlError(Exception, ExitCodeMixin):
    """Base exception for all xlsx2sql errors.

    Attributes:
        message: Human-readable error message.
        error_code: Unique error code from ErrorCode enum.
        details: Optional dictionary with additional error details.
        exit_code: Process exit code (default 1).
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Error code from ErrorCode enum.
            details: Optional additional details about the error.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert the exception to a dictionary for structured logging.

        Returns:
            Dictionary with error information.
        """
        result: dict[str, Any] = {
            "error_code": self.error_code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code.value}] {self.message}"


# =============================================================================
# Input Errors (E1xxx)
# =============================================================================


class InputError(Xlsx2SqlError):
    """Base class for input file errors."""

    exit_code: int = 2

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.FILE_NOT_FOUND,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with file path information.

        Args:
            message: Error message.
            error_code: Error code.
            file_path: Path to the problematic file.
            details: Additional details.
        """
        details = details or {}
        if file_path:
            details["file_path"] = file_path
        super().__init__(message, error_code, details)
        self.file_path = file_path


class InputFileNotFoundError(InputError):
    """Raised when the input workbook does not exist.

    Note: Named InputFileNotFoundError to avoid shadowing built-in FileNotFoundError.
    """

    def __init__(
        self,
        file_path: str,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = message or f"File not found: {file_path}"
        super().__init__(
            message=message,
            error_code=ErrorCode.FILE_NOT_FOUND,
            file_path=file_path,
            details=details,
        )


class UnsupportedFormatError(InputError):
    """Raised when the input file extension is not a supported workbook format."""

    def __init__(
        self,
        message: str,
        extension: str | None = None,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with format information.

        Args:
            message: Error message.
            extension: Extension that was rejected.
            file_path: Optional file path.
            details: Additional details.
        """
        details = details or {}
        if extension is not None:
            details["extension"] = extension
        super().__init__(
            message=message,
            error_code=ErrorCode.UNSUPPORTED_FORMAT,
            file_path=file_path,
            details=details,
        )
        self.extension = extension


class NoInputFilesError(InputError):
    """Raised when no workbook was given and none was found to choose from."""

    def __init__(
        self,
        directory: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["directory"] = directory
        super().__init__(
            message=f"No Excel files found in {directory}",
            error_code=ErrorCode.NO_INPUT_FILES,
            details=details,
        )
        self.directory = directory


class InputSelectionError(InputError):
    """Raised when interactive workbook selection fails or is aborted."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.INPUT_SELECTION_FAILED,
            details=details,
        )


# =============================================================================
# Parse Errors (E2xxx)
# =============================================================================


class ParseError(Xlsx2SqlError):
    """Base class for workbook parsing errors."""

    exit_code: int = 3

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.WORKBOOK_READ_FAILED,
        sheet_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with sheet information.

        Args:
            message: Error message.
            error_code: Error code.
            sheet_name: Name of the sheet that failed, if any.
            details: Additional details.
        """
        details = details or {}
        if sheet_name is not None:
            details["sheet_name"] = sheet_name
        super().__init__(message, error_code, details)
        self.sheet_name = sheet_name


class WorkbookReadError(ParseError):
    """Raised when the workbook container cannot be opened or decoded."""

    def __init__(
        self,
        file_path: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["file_path"] = file_path
        super().__init__(
            message=f"Failed to read workbook {file_path}: {reason}",
            error_code=ErrorCode.WORKBOOK_READ_FAILED,
            details=details,
        )
        self.file_path = file_path
        self.reason = reason


class EmptySheetError(ParseError):
    """Raised when a sheet has no rows at all."""

    def __init__(
        self,
        sheet_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = "Sheet has no data"
        if sheet_name is not None:
            message = f"Sheet '{sheet_name}' has no data"
        super().__init__(
            message=message,
            error_code=ErrorCode.EMPTY_SHEET,
            sheet_name=sheet_name,
            details=details,
        )


class MissingHeadersError(ParseError):
    """Raised when the first row of a sheet is entirely blank."""

    def __init__(
        self,
        sheet_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = "Missing column headers"
        if sheet_name is not None:
            message = f"Missing column headers in sheet '{sheet_name}'"
        super().__init__(
            message=message,
            error_code=ErrorCode.MISSING_HEADERS,
            sheet_name=sheet_name,
            details=details,
        )


# =============================================================================
# Generation Errors (E3xxx)
# =============================================================================


class GeneratorError(Xlsx2SqlError):
    """Base class for SQL generation errors."""

    exit_code: int = 4

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.NO_DATA,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


class NoDataError(GeneratorError):
    """Raised when no sheet in the workbook produced a statement."""

    def __init__(
        self,
        sheet_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the number of sheets examined.

        Args:
            sheet_count: Number of sheets that were examined.
            details: Additional details.
        """
        details = details or {}
        if sheet_count is not None:
            details["sheet_count"] = sheet_count
        super().__init__(
            message="No data to generate SQL from",
            error_code=ErrorCode.NO_DATA,
            details=details,
        )
        self.sheet_count = sheet_count


# =============================================================================
# Output Errors (E4xxx)
# =============================================================================


class OutputError(Xlsx2SqlError):
    """Base class for output errors."""

    exit_code: int = 5

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.OUTPUT_WRITE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


class OutputWriteError(OutputError):
    """Raised when the generated SQL cannot be written."""

    def __init__(
        self,
        destination: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with destination information.

        Args:
            destination: Where the output was being written.
            reason: Description of the underlying failure.
            details: Additional details.
        """
        details = details or {}
        details["destination"] = destination
        super().__init__(
            message=f"Failed to write to {destination}: {reason}",
            error_code=ErrorCode.OUTPUT_WRITE_FAILED,
            details=details,
        )
        self.destination = destination
        self.reason = reason
