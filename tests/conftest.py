from __future__ import annotations

import io
from collections.abc import Callable
from typing import Any

import pytest
from openpyxl import Workbook as OpenpyxlWorkbook

from workforce_report.report_document import (
    MonthlyParticipation,
    QuantitativeSummary,
    ReportDocument,
    ReportSection,
    ReportType,
    VacationStats,
)
from workforce_report.utils.logging import clear_context
from workforce_report.workbook import Sheet, Workbook

SheetSpec = dict[str, list[list[Any]]]
"""Sheet name -> rows (first row is the header row)."""


def build_xlsx(sheets: SheetSpec) -> bytes:
    """Write an .xlsx workbook in memory, sheets in the given order."""
    wb = OpenpyxlWorkbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(name)
        for row in rows:
            ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def _reset_log_context() -> None:
    clear_context()


@pytest.fixture
def make_xlsx() -> Callable[[SheetSpec], bytes]:
    """Factory turning sheet rows into workbook bytes."""
    return build_xlsx


@pytest.fixture
def audit_sheets() -> SheetSpec:
    """A typical monthly audit export."""
    return {
        "Stats Summary": [
            ["Category", "Count"],
            ["Male", 300],
            ["Female", 231],
            ["New Joiners", 12],
            ["Leavers", "5 staff"],
            ["Site Transfers", 3],
            ["Total", 531],
        ],
        "Job Roles": [
            ["Role", "Headcount"],
            ["Cleaner", 400],
            ["Supervisor", 100],
            ["Manager", 31],
        ],
        "Joiners Report": [
            ["Name", "Start Date"],
            ["Ali", "2024-03-02"],
        ],
        "Notes": [
            ["Remark"],
            ["Internal use"],
        ],
        "Blank": [],
    }


@pytest.fixture
def audit_xlsx(audit_sheets: SheetSpec) -> bytes:
    return build_xlsx(audit_sheets)


@pytest.fixture
def vacation_sheets() -> SheetSpec:
    """Leave records: 12 distinct employees on leave in June."""
    rows: list[list[Any]] = [["MRN", "Staff Name", "Month", "Days"]]
    rows.extend([f"MRN-{i:03d}", f"Employee {i}", "June", 14] for i in range(12))
    return {"Individual Leave": rows}


@pytest.fixture
def vacation_xlsx(vacation_sheets: SheetSpec) -> bytes:
    return build_xlsx(vacation_sheets)


@pytest.fixture
def sample_workbook() -> Workbook:
    """An already decoded workbook."""
    return Workbook(
        sheets=[
            Sheet(
                name="Stats Summary",
                rows=[
                    {"Category": "Male", "Count": 10},
                    {"Category": "Female", "Count": 5},
                ],
            ),
            Sheet(
                name="Leavers Report",
                rows=[{"Name": "Sara", "Exit Date": "2024-03-10"}],
            ),
            Sheet(name="Empty", rows=[]),
        ]
    )


@pytest.fixture
def audit_document() -> ReportDocument:
    return ReportDocument(
        type=ReportType.AUDIT,
        file_name="Audit_March_2024.xlsx",
        report_month="March",
        report_year="2024",
        executive_summary="Executive Summary\n\nFigures are provisional.",
        sections=(
            ReportSection(
                title="Stats Summary",
                original_sheet_name="Stats Summary",
                headers=("Category", "Count"),
                rows=({"Category": "Male", "Count": 300},),
            ),
            ReportSection(
                title="Notes",
                original_sheet_name="Notes",
                headers=("Remark",),
                rows=({"Remark": "Internal use"},),
            ),
        ),
        prepared_by="Layla Alotaibi",
        stats=QuantitativeSummary(
            total_employees=531,
            job_roles_count=3,
            joiners_count=12,
            leavers_count=5,
            transfers_count=3,
        ),
    )


@pytest.fixture
def vacation_document() -> ReportDocument:
    return ReportDocument(
        type=ReportType.VACATION,
        file_name="Leave_June_2024.xlsx",
        report_month="June",
        report_year="2024",
        executive_summary="Executive Summary",
        sections=(
            ReportSection(
                title="Individual Leave",
                original_sheet_name="Individual Leave",
                headers=("MRN", "Month"),
                rows=({"MRN": "MRN-001", "Month": "June"},),
            ),
        ),
        prepared_by="Layla Alotaibi",
        vacation_stats=VacationStats(
            total_unique_employees=12,
            avg_monthly_participation="12 Staff/Month",
            data_integrity_score="100%",
            monthly_participation=(
                MonthlyParticipation(month="JUNE", count=12, percentage="2.3%"),
            ),
            contract_base=531,
        ),
    )
