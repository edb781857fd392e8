"""Keyword classification of workbook sheets by semantic role.

Sheets are classified by name only. The first sheet in workbook order whose
lower-cased name contains any keyword wins; a workbook with several
candidate sheets silently resolves to the earliest one. This is a
heuristic, not a best-match search.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from workforce_report.workbook import Sheet, Workbook


class SheetRole(str, Enum):
    """Semantic roles a sheet can play in a workforce export."""

    STATISTICS = "statistics"
    LEAVE = "leave"
    WORKFORCE = "workforce"
    JOB_ROLES = "job_roles"
    JOINERS = "joiners"
    LEAVERS = "leavers"
    TRANSFERS = "transfers"


ROLE_KEYWORDS: dict[SheetRole, tuple[str, ...]] = {
    SheetRole.STATISTICS: ("stats", "summary", "statistics"),
    SheetRole.LEAVE: ("leave", "vacation", "individual"),
    SheetRole.WORKFORCE: ("stats summary", "workforce", "table 1"),
    SheetRole.JOB_ROLES: ("job roles", "roles", "designation"),
    SheetRole.JOINERS: ("joiners report", "joiner", "new staff"),
    SheetRole.LEAVERS: ("leavers report", "leaver", "exit"),
    SheetRole.TRANSFERS: ("site transfers", "transfer", "movement"),
}


def classify_by_keyword(workbook: Workbook, keywords: Iterable[str]) -> Sheet | None:
    """Return the first sheet whose name contains any of the keywords.

    Args:
        workbook: Decoded workbook.
        keywords: Keywords matched case-insensitively as substrings.

    Returns:
        The earliest matching sheet, or None.
    """
    lowered = [keyword.lower() for keyword in keywords]
    for sheet in workbook.sheets:
        name = sheet.name.lower()
        if any(keyword in name for keyword in lowered):
            return sheet
    return None


def find_sheet(workbook: Workbook, role: SheetRole) -> Sheet | None:
    """Classify the sheet playing ``role`` using the standard keyword set."""
    return classify_by_keyword(workbook, ROLE_KEYWORDS[role])


def row_count(workbook: Workbook, keywords: SheetRole | Iterable[str]) -> int:
    """Row count of the classified sheet, 0 when there is none.

    ``keywords`` is either a role (using its standard keyword set) or an
    explicit keyword list.
    """
    if isinstance(keywords, SheetRole):
        sheet = find_sheet(workbook, keywords)
    else:
        sheet = classify_by_keyword(workbook, keywords)
    return sheet.row_count if sheet else 0


def classify_workbook(workbook: Workbook) -> dict[SheetRole, str | None]:
    """Map every role to the name of the sheet that plays it.

    Useful for logging and diagnostics; metric routines call
    :func:`find_sheet` directly.
    """
    classification: dict[SheetRole, str | None] = {}
    for role in SheetRole:
        sheet = find_sheet(workbook, role)
        classification[role] = sheet.name if sheet else None
    return classification
