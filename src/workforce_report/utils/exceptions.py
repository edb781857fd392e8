"""Centralized exception classes for the workforce report builder.

This module provides a hierarchy of custom exceptions with error codes,
HTTP status code mapping, and structured error details for consistent
error handling from the workbook decoder up to the API layer.

Exception Hierarchy:
    ReportError (base)
    ├── InputFileError
    │   ├── DecodeError
    │   ├── FileTooLargeError
    │   └── UnsupportedFormatError
    ├── ReportStateError
    │   └── ReportNotFoundError
    ├── ProcessingError
    │   └── NoVacationDataError
    ├── ExportError
    ├── ValidationError
    └── UnexpectedError

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
    - E2xxx: Report state errors
    - E4xxx: Processing errors
    - E5xxx: Export errors
    - E9xxx: Internal/unexpected errors
    """

    # Input file errors (E1xxx)
    FILE_READ_ERROR = "E1001"
    INVALID_WORKBOOK = "E1002"
    FILE_TOO_LARGE = "E1003"
    UNSUPPORTED_FORMAT = "E1004"

    # Report state errors (E2xxx)
    REPORT_NOT_FOUND = "E2001"
    INVALID_REQUEST = "E2002"

    # Processing errors (E4xxx)
    PROCESSING_FAILED = "E4001"
    NO_VACATION_DATA = "E4002"

    # Export errors (E5xxx)
    EXPORT_FAILED = "E5001"
    UNSUPPORTED_EXPORT_FORMAT = "E5002"

    # Internal errors (E9xxx)
    INTERNAL_ERROR = "E9001"
    UNEXPECTED_ERROR = "E9999"


class HTTPStatusMixin:
    """Mixin that provides HTTP status code for exceptions.

    Subclasses should set the `http_status` class attribute.
    """

    http_status: int = 500

    def get_http_status(self) -> int:
        """Get the HTTP status code for this exception.

        Returns:
            HTTP status code appropriate for this error.
        """
        return self.http_status


class ReportError(Exception, HTTPStatusMixin):
    """Base exception for all workforce report errors.

    It provides:
    - Unique error codes for programmatic handling
    - HTTP status code mapping for API responses
    - Structured error details for logging and debugging

    Attributes:
        message: Human-readable error message, safe to show to the user.
        error_code: Unique error code from ErrorCode enum.
        details: Optional dictionary with additional error details.
        http_status: HTTP status code for API responses (default 500).
    """

    http_status: int = 500

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
        """Convert the exception to a dictionary for API responses.

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
# Input File Errors (E1xxx)
# =============================================================================


class InputFileError(ReportError):
    """Base class for errors about the uploaded spreadsheet."""

    http_status: int = 400

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.FILE_READ_ERROR,
        file_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with file name information.

        Args:
            message: Error message.
            error_code: Error code.
            file_name: Name of the problematic file.
            details: Additional details.
        """
        details = details or {}
        if file_name:
            details["file_name"] = file_name
        super().__init__(message, error_code, details)
        self.file_name = file_name


class DecodeError(InputFileError):
    """Raised when the input cannot be read or is not a valid workbook."""

    http_status: int = 422

    def __init__(
        self,
        message: str,
        file_name: str | None = None,
        reason: str | None = None,
        error_code: ErrorCode = ErrorCode.INVALID_WORKBOOK,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the underlying reason.

        Args:
            message: User-facing error message.
            file_name: Optional file name.
            reason: Low-level reason reported by the reader.
            error_code: FILE_READ_ERROR when the bytes could not be read.
            details: Additional details.
        """
        details = details or {}
        if reason:
            details["reason"] = reason
        super().__init__(
            message=message,
            error_code=error_code,
            file_name=file_name,
            details=details,
        )
        self.reason = reason


class FileTooLargeError(InputFileError):
    """Raised when a file exceeds the maximum allowed size."""

    http_status: int = 413

    def __init__(
        self,
        file_size: int,
        max_size: int,
        file_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with size information.

        Args:
            file_size: Actual file size in bytes.
            max_size: Maximum allowed size in bytes.
            file_name: Optional file name.
            details: Additional details.
        """
        details = details or {}
        details["file_size_bytes"] = file_size
        details["max_size_bytes"] = max_size
        message = (
            f"File size ({file_size} bytes) exceeds maximum "
            f"allowed size ({max_size} bytes)"
        )
        super().__init__(
            message=message,
            error_code=ErrorCode.FILE_TOO_LARGE,
            file_name=file_name,
            details=details,
        )
        self.file_size = file_size
        self.max_size = max_size


class UnsupportedFormatError(InputFileError):
    """Raised when the uploaded file is not a supported spreadsheet type."""

    http_status: int = 415

    def __init__(
        self,
        message: str,
        extension: str | None = None,
        file_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with format information.

        Args:
            message: Error message.
            extension: File extension that was rejected.
            file_name: Optional file name.
            details: Additional details.
        """
        details = details or {}
        if extension:
            details["extension"] = extension
        super().__init__(
            message=message,
            error_code=ErrorCode.UNSUPPORTED_FORMAT,
            file_name=file_name,
            details=details,
        )
        self.extension = extension


# =============================================================================
# Report State Errors (E2xxx)
# =============================================================================


class ReportStateError(ReportError):
    """Base class for errors about the in-memory report session."""

    http_status: int = 409

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INVALID_REQUEST,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


class ReportNotFoundError(ReportStateError):
    """Raised when a report is requested but none has been generated."""

    http_status: int = 404

    def __init__(
        self,
        message: str = "No report has been generated yet",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.REPORT_NOT_FOUND,
            details=details,
        )


# =============================================================================
# Processing Errors (E4xxx)
# =============================================================================


class ProcessingError(ReportError):
    """Base class for errors raised while building a report."""

    http_status: int = 422

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.PROCESSING_FAILED,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the pipeline stage.

        Args:
            message: Error message.
            error_code: Error code.
            stage: The pipeline stage where the error occurred.
            details: Additional details.
        """
        details = details or {}
        if stage:
            details["stage"] = stage
        super().__init__(message, error_code, details)
        self.stage = stage


class NoVacationDataError(ProcessingError):
    """Raised when a vacation report is requested for a workbook without
    a leave/vacation sheet holding data."""

    def __init__(
        self,
        message: str = (
            "The uploaded file does not appear to contain valid vacation "
            "or leave records."
        ),
        sheet_names: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the sheet names that were inspected.

        Args:
            message: User-facing error message.
            sheet_names: Names of the sheets found in the workbook.
            details: Additional details.
        """
        details = details or {}
        if sheet_names is not None:
            details["sheet_names"] = sheet_names
        super().__init__(
            message=message,
            error_code=ErrorCode.NO_VACATION_DATA,
            stage="vacation_metrics",
            details=details,
        )


# =============================================================================
# Export Errors (E5xxx)
# =============================================================================


class ExportError(ReportError):
    """Raised when a report cannot be rendered to an output format."""

    http_status: int = 500

    def __init__(
        self,
        message: str,
        export_format: str | None = None,
        error_code: ErrorCode = ErrorCode.EXPORT_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the export format.

        Args:
            message: Error message.
            export_format: Output format that failed (pdf, docx, ...).
            error_code: Error code.
            details: Additional details.
        """
        details = details or {}
        if export_format:
            details["format"] = export_format
        super().__init__(message, error_code, details)
        self.export_format = export_format
        if error_code is ErrorCode.UNSUPPORTED_EXPORT_FORMAT:
            self.http_status = 400


# =============================================================================
# Validation / Internal Errors
# =============================================================================


class ValidationError(ReportError):
    """General validation error for request input."""

    http_status: int = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        errors: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with validation details.

        Args:
            message: Main error message.
            field: Field that failed validation.
            errors: List of validation errors.
            details: Additional details.
        """
        details = details or {}
        if field:
            details["field"] = field
        if errors:
            details["validation_errors"] = errors
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_REQUEST,
            details=details,
        )


class UnexpectedError(ReportError):
    """Wraps any failure that is not part of the known taxonomy.

    The message is always the generic fallback; the original exception
    type is kept in the details for logging.
    """

    http_status: int = 500

    def __init__(
        self,
        message: str = "An internal error occurred while processing the file.",
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if cause is not None:
            details["error_type"] = type(cause).__name__
        super().__init__(
            message=message,
            error_code=ErrorCode.UNEXPECTED_ERROR,
            details=details,
        )
        self.cause = cause
