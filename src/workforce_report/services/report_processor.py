"""Report processor orchestrating one processing run.

This module provides the top-level pipeline that:
1. Reads the uploaded workbook bytes (the only await)
2. Decodes the workbook into sheets of row records
3. Extracts the reporting period from the file name
4. Computes audit or vacation metrics
5. Assembles the immutable ReportDocument

The processor is the error boundary of the pipeline: known failures
surface as their ReportError subclass, anything else is wrapped in
UnexpectedError. No partial document is ever returned.
"""

import uuid
from datetime import date
from pathlib import PurePath

from workforce_report.config import Settings, settings
from workforce_report.report_document import ReportDocument, ReportType
from workforce_report.services.metrics import (
    calculate_quantitative_stats,
    calculate_vacation_stats,
)
from workforce_report.services.period_extractor import extract_period
from workforce_report.services.report_assembler import assemble
from workforce_report.services.sheet_classifier import classify_workbook
from workforce_report.services.workbook_decoder import (
    WorkbookDecoder,
    WorkbookSource,
    read_source,
)
from workforce_report.utils.exceptions import (
    FileTooLargeError,
    NoVacationDataError,
    ReportError,
    UnexpectedError,
    UnsupportedFormatError,
    ValidationError,
)
from workforce_report.utils.logging import LogContext, get_logger, timed_operation
from workforce_report.workbook import Workbook

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = frozenset({".xlsx", ".xlsm"})


def parse_report_type(value: ReportType | str) -> ReportType:
    """Coerce a report type name, raising ValidationError when unknown."""
    if isinstance(value, ReportType):
        return value
    try:
        return ReportType(str(value).lower())
    except ValueError as e:
        raise ValidationError(
            f"Unknown report type: {value}",
            field="report_type",
            errors=[f"must be one of: {', '.join(t.value for t in ReportType)}"],
        ) from e


def check_upload(data: bytes, file_name: str | None, app_settings: Settings) -> None:
    """Validate the size and extension of an uploaded workbook.

    Raises:
        FileTooLargeError: If the content exceeds the configured limit.
        UnsupportedFormatError: If the file name has a non-workbook extension.
    """
    if len(data) > app_settings.max_file_size_bytes:
        raise FileTooLargeError(
            file_size=len(data),
            max_size=app_settings.max_file_size_bytes,
            file_name=file_name,
        )

    if file_name:
        extension = PurePath(file_name).suffix.lower()
        if extension and extension not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFormatError(
                f"Unsupported file type '{extension}'. Please upload an .xlsx workbook.",
                extension=extension,
                file_name=file_name,
            )


def build_report(
    workbook: Workbook,
    file_name: str,
    report_type: ReportType,
    app_settings: Settings | None = None,
    today: date | None = None,
) -> ReportDocument:
    """Build a report document from an already decoded workbook.

    Args:
        workbook: Decoded workbook.
        file_name: Uploaded file name, used for the reporting period.
        report_type: Audit or vacation.
        app_settings: Settings to use (module settings if None).
        today: Reference date for period defaults.

    Returns:
        The assembled ReportDocument.

    Raises:
        NoVacationDataError: If a vacation report has no leave sheet with rows.
    """
    cfg = app_settings or settings
    period = extract_period(file_name, today=today)

    logger.debug(
        "Sheets classified",
        **{role.value: name for role, name in classify_workbook(workbook).items()},
    )

    if report_type is ReportType.VACATION:
        vacation_stats = calculate_vacation_stats(
            workbook, contract_base=cfg.contract_base
        )
        if vacation_stats is None:
            raise NoVacationDataError(sheet_names=workbook.sheet_names)
        return assemble(
            workbook,
            period,
            report_type,
            file_name,
            vacation_stats=vacation_stats,
            app_settings=cfg,
        )

    stats = calculate_quantitative_stats(workbook)
    return assemble(
        workbook,
        period,
        report_type,
        file_name,
        stats=stats,
        app_settings=cfg,
    )


async def process_report(
    source: WorkbookSource,
    report_type: ReportType | str,
    file_name: str | None = None,
    app_settings: Settings | None = None,
    today: date | None = None,
) -> ReportDocument:
    """Process one uploaded workbook into a report document.

    Args:
        source: Workbook bytes, a path, or an uploaded file.
        report_type: Audit or vacation (enum or its name).
        file_name: Original file name (defaults to the path/upload name).
        app_settings: Settings to use (module settings if None).
        today: Reference date for period defaults.

    Returns:
        The new ReportDocument.

    Raises:
        ReportError: A known failure (DecodeError, NoVacationDataError, ...).
        UnexpectedError: Any other failure.
    """
    cfg = app_settings or settings
    run_id = str(uuid.uuid4())

    with LogContext(run_id=run_id):
        try:
            kind = parse_report_type(report_type)
            with timed_operation(logger, "process_report") as metrics:
                data, name = await read_source(source, file_name=file_name)
                name = name or "workbook.xlsx"
                check_upload(data, name, cfg)

                logger.info(
                    "Processing report",
                    report_type=kind.value,
                    file_name=name,
                    size_bytes=len(data),
                )

                workbook = WorkbookDecoder().decode(data, file_name=name)
                metrics.sheets_processed = len(workbook)
                metrics.rows_processed = workbook.total_rows

                document = build_report(
                    workbook, name, kind, app_settings=cfg, today=today
                )
                metrics.custom_metrics["sections"] = len(document.sections)
        except ReportError as e:
            logger.warning(
                "Report processing failed",
                error_code=e.error_code.value,
                error=e.message,
            )
            raise
        except Exception as e:
            logger.error(
                "Unexpected error while processing report",
                error=f"{type(e).__name__}: {e}",
                error_type=type(e).__name__,
                exc_info=True,
            )
            raise UnexpectedError(cause=e) from e

    return document
