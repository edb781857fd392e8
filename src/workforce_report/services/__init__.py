"""Services for turning workforce workbooks into report documents."""

from workforce_report.services.field_resolver import resolve
from workforce_report.services.metrics import (
    calculate_quantitative_stats,
    calculate_vacation_stats,
)
from workforce_report.services.months import month_index, normalize_month, sort_months
from workforce_report.services.period_extractor import extract_period
from workforce_report.services.report_assembler import assemble, map_sheets_to_sections
from workforce_report.services.report_processor import build_report, process_report
from workforce_report.services.report_session import ReportSession
from workforce_report.services.sheet_classifier import (
    SheetRole,
    classify_by_keyword,
    classify_workbook,
    find_sheet,
    row_count,
)
from workforce_report.services.workbook_decoder import (
    DecoderOptions,
    WorkbookDecoder,
    decode_workbook,
    read_workbook,
)

__all__ = [
    "DecoderOptions",
    "ReportSession",
    "SheetRole",
    "WorkbookDecoder",
    "assemble",
    "build_report",
    "calculate_quantitative_stats",
    "calculate_vacation_stats",
    "classify_by_keyword",
    "classify_workbook",
    "decode_workbook",
    "extract_period",
    "find_sheet",
    "map_sheets_to_sections",
    "month_index",
    "normalize_month",
    "process_report",
    "read_workbook",
    "resolve",
    "row_count",
    "sort_months",
]
