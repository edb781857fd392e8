"""Tests for keyword sheet classification."""

from workforce_report.services.sheet_classifier import (
    SheetRole,
    classify_by_keyword,
    classify_workbook,
    find_sheet,
    row_count,
)
from workforce_report.workbook import Sheet, Workbook


def _workbook(*names: str, rows: int = 1) -> Workbook:
    return Workbook(
        sheets=[Sheet(name=n, rows=[{"A": i + 1} for i in range(rows)]) for n in names]
    )


class TestClassifyByKeyword:
    """Tests for classify_by_keyword."""

    def test_case_insensitive_substring(self) -> None:
        """Sheet names match keywords as case-insensitive substrings."""
        workbook = _workbook("Cover", "INDIVIDUAL LEAVE 2024")
        sheet = classify_by_keyword(workbook, ["leave"])
        assert sheet is not None
        assert sheet.name == "INDIVIDUAL LEAVE 2024"

    def test_first_sheet_wins(self) -> None:
        """The earliest matching sheet in workbook order wins."""
        workbook = _workbook("Leave Q1", "Leave Q2")
        sheet = classify_by_keyword(workbook, ["q2", "leave"])
        assert sheet is not None
        assert sheet.name == "Leave Q1"

    def test_no_match(self) -> None:
        """No matching sheet gives None."""
        assert classify_by_keyword(_workbook("Cover"), ["leave"]) is None


class TestFindSheet:
    """Tests for role-based lookup."""

    def test_roles(self) -> None:
        """Standard keyword sets map sheets onto roles."""
        workbook = _workbook(
            "Stats Summary",
            "Designation List",
            "New Staff",
            "Exit Interviews",
            "Site Movement",
            "Vacation Plan",
        )
        assert find_sheet(workbook, SheetRole.STATISTICS).name == "Stats Summary"
        assert find_sheet(workbook, SheetRole.WORKFORCE).name == "Stats Summary"
        assert find_sheet(workbook, SheetRole.JOB_ROLES).name == "Designation List"
        assert find_sheet(workbook, SheetRole.JOINERS).name == "New Staff"
        assert find_sheet(workbook, SheetRole.LEAVERS).name == "Exit Interviews"
        assert find_sheet(workbook, SheetRole.TRANSFERS).name == "Site Movement"
        assert find_sheet(workbook, SheetRole.LEAVE).name == "Vacation Plan"

    def test_classify_workbook(self) -> None:
        """Every role is reported, None when unmatched."""
        classification = classify_workbook(_workbook("Job Roles"))
        assert classification[SheetRole.JOB_ROLES] == "Job Roles"
        assert classification[SheetRole.LEAVE] is None
        assert set(classification) == set(SheetRole)


class TestRowCount:
    """Tests for row_count."""

    def test_role(self) -> None:
        """A role counts rows of its classified sheet."""
        assert row_count(_workbook("Joiners Report", rows=4), SheetRole.JOINERS) == 4

    def test_keywords(self) -> None:
        """Explicit keywords count rows of the matching sheet."""
        assert row_count(_workbook("Roster", rows=7), ["roster"]) == 7

    def test_missing_sheet(self) -> None:
        """No matching sheet counts as zero."""
        assert row_count(_workbook("Cover"), SheetRole.TRANSFERS) == 0
