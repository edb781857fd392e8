"""Utilities package for the workforce report builder.

This package provides:
- Centralized exception classes (exceptions.py)
- Structured logging utilities (logging.py)
"""

from workforce_report.utils.exceptions import (
    DecodeError,
    ErrorCode,
    ExportError,
    HTTPStatusMixin,
    NoVacationDataError,
    ReportError,
    ReportNotFoundError,
    UnexpectedError,
    ValidationError,
)
from workforce_report.utils.logging import (
    LogContext,
    StructuredLogger,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Exceptions
    "DecodeError",
    "ErrorCode",
    "ExportError",
    "HTTPStatusMixin",
    "NoVacationDataError",
    "ReportError",
    "ReportNotFoundError",
    "UnexpectedError",
    "ValidationError",
    # Logging
    "LogContext",
    "StructuredLogger",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
