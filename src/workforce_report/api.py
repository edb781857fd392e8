"""FastAPI application for the workforce report builder.

The app is a local, single-session host: it keeps one report in memory,
replaced by every successful upload and shared by all requests.
"""

import uuid
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import FastAPI, File, HTTPException, Request, Response, UploadFile, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from workforce_report.config import settings, validate_settings_on_startup
from workforce_report.models import (
    ClearResponse,
    ErrorDetail,
    HealthResponse,
    ReportResponse,
    SummaryUpdateRequest,
)
from workforce_report.output.export_service import ExportService
from workforce_report.output.json_generator import JsonGenerator
from workforce_report.output.page_layout import build_page_layout
from workforce_report.services.report_processor import process_report
from workforce_report.services.report_session import ReportSession
from workforce_report.utils.exceptions import ErrorCode, ReportError
from workforce_report.utils.logging import (
    clear_context,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

API_VERSION = "0.1.0"

# Configure structured logging using settings
configure_logging(
    level=settings.log_level_int,
    use_structured_formatter=True,
)
logger = get_logger(__name__)


def _report_payload(session: ReportSession) -> dict[str, Any]:
    """Build the API payload for the current report."""
    document = session.current
    json_result = JsonGenerator().generate(document)
    updated_at = session.updated_at
    return {
        "report": json_result.data,
        "validation": json_result.validation_result.to_dict(),
        "pages": len(build_page_layout(document)),
        "updated_at": updated_at.isoformat() if updated_at else None,
    }


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Workforce Report Builder API",
        description=(
            "Turns workforce spreadsheet exports into paginated audit and "
            "vacation reports."
        ),
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.session = ReportSession()
    app.state.export_service = ExportService()

    # Configure CORS using settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Validate settings on startup
    validate_settings_on_startup(settings)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next: Any) -> Any:
        """Assign a request ID, expose it in logs and the response headers."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        set_request_id(request_id)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_context()

    @app.exception_handler(ReportError)
    async def report_exception_handler(
        request: Request, exc: ReportError
    ) -> JSONResponse:
        """Return coded, structured responses for known report errors."""
        request_id = getattr(request.state, "request_id", get_request_id())
        logger.error(
            f"Report Error: {exc.message}",
            error_code=exc.error_code.value,
            http_status=exc.http_status,
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=ErrorDetail.from_error_code(
                exc.error_code,
                exc.message,
                details=exc.details if exc.details else None,
                request_id=request_id,
            ).model_dump(exclude_none=True),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request, exc: HTTPException
    ) -> JSONResponse:
        """Custom exception handler for HTTP exceptions."""
        request_id = getattr(request.state, "request_id", get_request_id())
        logger.warning(
            f"HTTP Error: {exc.detail}",
            status_code=exc.status_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorDetail(
                detail=str(exc.detail),
                request_id=request_id,
            ).model_dump(exclude_none=True),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all handler returning a generic message for unknown errors."""
        request_id = getattr(request.state, "request_id", get_request_id())
        logger.exception(
            f"Unexpected error: {type(exc).__name__}",
            error_type=type(exc).__name__,
        )
        if settings.debug:
            detail = f"Internal server error: {type(exc).__name__}: {exc}"
        else:
            detail = "An internal error occurred while processing the file."

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorDetail(
                detail=detail,
                error_code=ErrorCode.INTERNAL_ERROR.value,
                request_id=request_id,
            ).model_dump(exclude_none=True),
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request) -> dict[str, Any]:
        """Check the health status of the service."""
        logger.debug("Health check requested")
        return {
            "status": "healthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "version": API_VERSION,
            "has_report": request.app.state.session.has_report,
        }

    @app.post(
        "/reports/{report_type}",
        response_model=ReportResponse,
        status_code=status.HTTP_201_CREATED,
        tags=["Reports"],
        responses={
            400: {"model": ErrorDetail, "description": "Unknown report type"},
            413: {"model": ErrorDetail, "description": "File too large"},
            415: {"model": ErrorDetail, "description": "Not a workbook"},
            422: {"model": ErrorDetail, "description": "Unreadable or unusable workbook"},
        },
    )
    async def create_report(
        request: Request,
        report_type: str,
        file: Annotated[UploadFile, File(description="Workforce .xlsx export")],
    ) -> dict[str, Any]:
        """Generate a report from an uploaded workbook.

        The new report replaces the current one only when processing
        succeeds; on failure the previous report is kept.
        """
        session: ReportSession = request.app.state.session
        document = await process_report(
            file, report_type, file_name=file.filename, app_settings=settings
        )
        session.replace(document)
        return _report_payload(session)

    @app.get(
        "/reports/current",
        response_model=ReportResponse,
        tags=["Reports"],
        responses={404: {"model": ErrorDetail, "description": "No report yet"}},
    )
    async def get_current_report(request: Request) -> dict[str, Any]:
        """Return the current report payload."""
        return _report_payload(request.app.state.session)

    @app.patch(
        "/reports/current/summary",
        response_model=ReportResponse,
        tags=["Reports"],
        responses={404: {"model": ErrorDetail, "description": "No report yet"}},
    )
    async def update_summary(
        request: Request, body: SummaryUpdateRequest
    ) -> dict[str, Any]:
        """Replace the executive summary of the current report."""
        session: ReportSession = request.app.state.session
        session.update_executive_summary(body.executive_summary)
        return _report_payload(session)

    @app.get(
        "/reports/current/export/{fmt}",
        tags=["Reports"],
        responses={
            404: {"model": ErrorDetail, "description": "No report yet"},
            400: {"model": ErrorDetail, "description": "Unsupported format"},
            500: {"model": ErrorDetail, "description": "Rendering failed"},
        },
    )
    async def export_report(request: Request, fmt: str) -> Response:
        """Download the current report as PDF, DOCX, JSON or Markdown."""
        document = request.app.state.session.current
        export_service: ExportService = request.app.state.export_service
        artifact = export_service.export(document, fmt)
        logger.info(
            "Report exported",
            file_name=artifact.file_name,
            size_bytes=artifact.size_bytes,
        )
        return Response(
            content=artifact.content,
            media_type=artifact.media_type,
            headers={
                "Content-Disposition": f'attachment; filename="{artifact.file_name}"'
            },
        )

    @app.delete("/reports/current", response_model=ClearResponse, tags=["Reports"])
    async def clear_report(request: Request) -> dict[str, Any]:
        """Discard the current report."""
        request.app.state.session.clear()
        return {"message": "Report cleared"}

    logger.info("FastAPI application created successfully")
    return app


# Create the application instance
app = create_app()
