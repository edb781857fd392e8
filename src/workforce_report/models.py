"""Pydantic models for API requests and responses."""

from typing import Any

from pydantic import BaseModel, Field

from workforce_report.utils.exceptions import ErrorCode


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    timestamp: str
    version: str
    has_report: bool = Field(
        default=False, description="Whether a report is held in the session"
    )


class SummaryUpdateRequest(BaseModel):
    """Request body for editing the executive summary."""

    executive_summary: str = Field(
        ..., description="New executive summary text for the current report"
    )


class ReportResponse(BaseModel):
    """Response model carrying the current report payload."""

    report: dict[str, Any] = Field(..., description="Serialised report document")
    validation: dict[str, Any] = Field(
        ..., description="Schema validation result of the payload"
    )
    pages: int = Field(..., description="Number of pages in the print preview")
    updated_at: str | None = Field(
        default=None, description="When the report was last generated or edited"
    )


class ClearResponse(BaseModel):
    """Response model for clearing the session."""

    message: str


class ErrorDetail(BaseModel):
    """Error detail model for API error responses.

    This model provides structured error responses with:
    - Human-readable error message
    - Machine-readable error code
    - Optional additional details for debugging
    - Optional request ID for correlation
    """

    detail: str = Field(..., description="Human-readable error message")
    error_code: str | None = Field(
        default=None,
        description="Machine-readable error code (e.g., 'E1002')",
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error details for debugging",
    )
    request_id: str | None = Field(
        default=None,
        description="Request ID for error correlation",
    )

    @classmethod
    def from_error_code(
        cls,
        error_code: ErrorCode,
        detail: str,
        details: dict[str, Any] | None = None,
        request_id: str | None = None,
    ) -> "ErrorDetail":
        """Create an ErrorDetail from an ErrorCode enum value.

        Args:
            error_code: The error code enum.
            detail: Human-readable error message.
            details: Optional additional details.
            request_id: Optional request ID.

        Returns:
            ErrorDetail instance.
        """
        return cls(
            detail=detail,
            error_code=error_code.value,
            details=details,
            request_id=request_id,
        )
