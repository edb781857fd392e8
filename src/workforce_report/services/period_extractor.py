"""Reporting period extraction from uploaded file names."""

from __future__ import annotations

import re
from datetime import date

from workforce_report.report_document import ReportPeriod
from workforce_report.services.months import MONTH_NAMES

_YEAR_RE = re.compile(r"20\d{2}")


def extract_period(file_name: str, today: date | None = None) -> ReportPeriod:
    """Derive the reporting month and year from a file name.

    Every English month name is searched case-insensitively; when several
    occur, the one latest in the calendar wins. The year is the first
    four-digit token starting with ``20``. Missing parts default to the
    current date.

    Args:
        file_name: Name of the uploaded workbook.
        today: Reference date for defaults (current date if None).

    Returns:
        ReportPeriod with month name (title case) and year.
    """
    today = today or date.today()
    month = MONTH_NAMES[today.month - 1]
    year = str(today.year)

    lowered = file_name.lower()
    for name in MONTH_NAMES:
        if name.lower() in lowered:
            month = name

    year_match = _YEAR_RE.search(file_name)
    if year_match:
        year = year_match.group(0)

    return ReportPeriod(month=month, year=year)
