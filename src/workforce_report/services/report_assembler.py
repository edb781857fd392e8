"""Assembly of report documents from a decoded workbook."""

from __future__ import annotations

from workforce_report.config import Settings, settings
from workforce_report.report_document import (
    QuantitativeSummary,
    ReportDocument,
    ReportPeriod,
    ReportSection,
    ReportType,
    VacationStats,
)
from workforce_report.utils.logging import get_logger
from workforce_report.workbook import Workbook

logger = get_logger(__name__)


def map_sheets_to_sections(workbook: Workbook) -> list[ReportSection]:
    """Project every non-empty sheet onto a report section.

    Headers are the keys of the first row; columns that only appear on
    later rows are not added.

    Args:
        workbook: Decoded workbook.

    Returns:
        Sections in sheet order.
    """
    sections = [
        ReportSection(
            title=sheet.name,
            original_sheet_name=sheet.name,
            headers=tuple(sheet.headers),
            rows=tuple(sheet.rows),
        )
        for sheet in workbook.sheets
        if not sheet.is_empty
    ]
    logger.debug(
        "Sheets mapped to sections",
        sections=len(sections),
        skipped=len(workbook) - len(sections),
    )
    return sections


def assemble(
    workbook: Workbook,
    period: ReportPeriod,
    report_type: ReportType,
    file_name: str,
    stats: QuantitativeSummary | None = None,
    vacation_stats: VacationStats | None = None,
    app_settings: Settings | None = None,
    is_comparison: bool = False,
) -> ReportDocument:
    """Build a report document.

    The executive summary starts as the configured disclaimer and the
    preparer is the configured name.

    Args:
        workbook: Decoded workbook supplying the sections.
        period: Reporting month and year.
        report_type: Audit or vacation.
        file_name: Name of the uploaded file.
        stats: Workforce counts (audit reports).
        vacation_stats: Participation metrics (vacation reports).
        app_settings: Settings to read report defaults from.
        is_comparison: Whether the audit compares several periods.

    Returns:
        The new ReportDocument.
    """
    cfg = app_settings or settings
    document = ReportDocument(
        type=report_type,
        file_name=file_name,
        report_month=period.month,
        report_year=period.year,
        executive_summary=cfg.disclaimer_text,
        sections=tuple(map_sheets_to_sections(workbook)),
        prepared_by=cfg.prepared_by,
        is_comparison=is_comparison,
        stats=stats,
        vacation_stats=vacation_stats,
        metadata={
            "sheet_names": workbook.sheet_names,
            "total_rows": workbook.total_rows,
        },
    )
    logger.info(
        "Report assembled",
        report_type=report_type.value,
        file_name=file_name,
        period=document.period_label,
        sections=len(document.sections),
    )
    return document
