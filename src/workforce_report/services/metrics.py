"""Metrics engine for audit and vacation reports.

Two independent computations run over a decoded workbook:

- :func:`calculate_quantitative_stats` reads the statistics sheet (label in
  the first column, count in the second) and falls back to row counts of
  the category sheets when a statistic is missing.
- :func:`calculate_vacation_stats` builds the unique-employee count and the
  monthly participation histogram from the leave sheet.

Neither function raises on malformed content; absent data yields zeros or
``None``.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from workforce_report.config import settings
from workforce_report.report_document import (
    MonthlyParticipation,
    QuantitativeSummary,
    VacationStats,
)
from workforce_report.services.field_resolver import resolve
from workforce_report.services.months import normalize_month, sort_months
from workforce_report.services.sheet_classifier import SheetRole, find_sheet, row_count
from workforce_report.utils.logging import get_logger
from workforce_report.workbook import Workbook

logger = get_logger(__name__)

EMPLOYEE_ID_ALIASES: tuple[str, ...] = ("MRN", "Staff Name", "Name")
MONTH_ALIASES: tuple[str, ...] = ("Month", "الشهر")
DATA_INTEGRITY_SCORE = "100%"

MALE_LABELS = frozenset({"male", "ذكر"})
FEMALE_LABELS = frozenset({"female", "أنثى"})
JOINER_MARKERS = ("joiner", "جديد")
LEAVER_MARKERS = ("leaver", "مغادر")
TRANSFER_MARKERS = ("transfer", "نقل")
TOTAL_MARKERS = ("total", "إجمالي")

_NON_NUMERIC_RE = re.compile(r"[^0-9.]")
_LEADING_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_count(value: Any) -> float:
    """Parse a statistics cell into a number.

    Every character other than digits and ``.`` is removed and the longest
    leading decimal is read, so ``"1,234 staff"`` gives 1234 and
    ``"1.2.3"`` gives 1.2. Unparseable values give 0.
    """
    cleaned = _NON_NUMERIC_RE.sub("", str(value or "0"))
    match = _LEADING_NUMBER_RE.match(cleaned)
    if not match:
        return 0.0
    return float(match.group(0))


def format_fixed(value: float, digits: int) -> str:
    """Format ``value`` with ``digits`` decimals, rounding half away from zero.

    The exact binary value is rounded, so ``1.005`` formats as ``"1.00"``
    at two digits.
    """
    exponent = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def _contains_any(label: str, markers: tuple[str, ...]) -> bool:
    return any(marker in label for marker in markers)


def calculate_quantitative_stats(workbook: Workbook) -> QuantitativeSummary:
    """Compute workforce counts for an audit report.

    Args:
        workbook: Decoded workbook.

    Returns:
        QuantitativeSummary; statistics are truncated to whole staff, and
        any that come out as zero fall back to sheet row counts.
    """
    male = female = joiners = leavers = transfers = summary_total = 0.0

    stats_sheet = find_sheet(workbook, SheetRole.STATISTICS)
    if stats_sheet is not None and stats_sheet.rows:
        for row in stats_sheet.rows:
            values = list(row.values())
            if len(values) < 2:
                continue

            label = str(values[0] or "").lower().strip()
            count = parse_count(values[1])

            if label in MALE_LABELS:
                male = count
            if label in FEMALE_LABELS:
                female = count
            if _contains_any(label, JOINER_MARKERS):
                joiners = count
            if _contains_any(label, LEAVER_MARKERS):
                leavers = count
            if _contains_any(label, TRANSFER_MARKERS):
                transfers = count
            if _contains_any(label, TOTAL_MARKERS):
                summary_total = count

    gender_total = male + female
    if gender_total > 0:
        total_employees = gender_total
        total_source = "gender"
    elif summary_total > 0:
        total_employees = summary_total
        total_source = "summary_total"
    else:
        total_employees = row_count(workbook, SheetRole.WORKFORCE)
        total_source = "row_count"

    summary = QuantitativeSummary(
        total_employees=int(total_employees),
        job_roles_count=row_count(workbook, SheetRole.JOB_ROLES),
        joiners_count=int(joiners) or row_count(workbook, SheetRole.JOINERS),
        leavers_count=int(leavers) or row_count(workbook, SheetRole.LEAVERS),
        transfers_count=int(transfers) or row_count(workbook, SheetRole.TRANSFERS),
    )
    logger.info(
        "Quantitative stats calculated",
        stats_sheet=stats_sheet.name if stats_sheet else None,
        total_source=total_source,
        total_employees=summary.total_employees,
        joiners=summary.joiners_count,
        leavers=summary.leavers_count,
        transfers=summary.transfers_count,
    )
    return summary


def calculate_vacation_stats(
    workbook: Workbook, contract_base: int | None = None
) -> VacationStats | None:
    """Compute vacation participation from the leave sheet.

    Args:
        workbook: Decoded workbook.
        contract_base: Contracted headcount used as the percentage
            denominator (defaults to ``settings.contract_base``).

    Returns:
        VacationStats, or None when there is no leave sheet with rows.
    """
    base = contract_base if contract_base is not None else settings.contract_base

    leave_sheet = find_sheet(workbook, SheetRole.LEAVE)
    if leave_sheet is None or not leave_sheet.rows:
        logger.info(
            "No leave sheet with rows found",
            sheet_names=workbook.sheet_names,
        )
        return None

    rows = leave_sheet.rows
    employees = set()
    monthly: dict[str, int] = {}
    for row in rows:
        employee = resolve(row, EMPLOYEE_ID_ALIASES)
        if employee:
            employees.add(employee)

        month = normalize_month(resolve(row, MONTH_ALIASES) or "")
        if month and "TOTAL" not in month:
            monthly[month] = monthly.get(month, 0) + 1

    months = sort_months(monthly)
    average = format_fixed(len(rows) / len(months), 0) if months else "0"

    stats = VacationStats(
        total_unique_employees=len(employees),
        avg_monthly_participation=f"{average} Staff/Month",
        data_integrity_score=DATA_INTEGRITY_SCORE,
        monthly_participation=tuple(
            MonthlyParticipation(
                month=month,
                count=monthly[month],
                percentage=f"{format_fixed(monthly[month] / base * 100, 1)}%",
            )
            for month in months
        ),
        contract_base=base,
    )
    logger.info(
        "Vacation stats calculated",
        leave_sheet=leave_sheet.name,
        leave_rows=len(rows),
        unique_employees=stats.total_unique_employees,
        months=len(months),
        contract_base=base,
    )
    return stats
