"""Tests for the paginated page layout."""

import dataclasses
from datetime import date, datetime, time

import pytest

from workforce_report.output.page_layout import (
    CONFIDENTIAL_LABEL,
    NARRATIVE_TITLE,
    PageKind,
    build_page_layout,
    footer_text,
    format_cell,
    is_displayable_section,
    section_table,
)
from workforce_report.report_document import ReportDocument, ReportSection


class TestFormatCell:
    """Tests for format_cell."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            ("", ""),
            ("Ali", "Ali"),
            (0, "0"),
            (12, "12"),
            (12.0, "12"),
            (2.5, "2.5"),
            (True, "TRUE"),
            (datetime(2024, 3, 2), "2024-03-02"),
            (datetime(2024, 3, 2, 8, 30), "2024-03-02 08:30:00"),
            (date(2024, 3, 2), "2024-03-02"),
            (time(8, 30), "08:30:00"),
        ],
    )
    def test_format(self, value: object, expected: str) -> None:
        """Raw cells render as display text."""
        assert format_cell(value) == expected


class TestDisplayableSections:
    """Tests for is_displayable_section."""

    @pytest.mark.parametrize(
        "name",
        ["Stats Summary", "Job Roles", "Joiners Report", "Leavers", "Site Transfers",
         "Vacation Plan", "إجازات الموظفين"],
    )
    def test_displayable(self, name: str) -> None:
        """Report content sheets are displayed."""
        assert is_displayable_section(name)

    @pytest.mark.parametrize("name", ["Notes", "Sheet1", "Lookup"])
    def test_not_displayable(self, name: str) -> None:
        """Working sheets are hidden from the preview."""
        assert not is_displayable_section(name)


class TestSectionTable:
    """Tests for section_table."""

    def test_projects_rows_on_headers(self) -> None:
        """Cells follow header order; missing cells render empty."""
        section = ReportSection(
            title="Data",
            original_sheet_name="Data",
            headers=("A", "B"),
            rows=({"B": 2.0, "A": "x"}, {"A": None}),
        )
        table = section_table(section)

        assert table.headers == ("A", "B")
        assert table.rows == (("x", "2"), ("", ""))


class TestAuditLayout:
    """Tests for audit report layouts."""

    def test_page_order(self, audit_document: ReportDocument) -> None:
        """Cover, metrics, displayable sections, then the narrative."""
        pages = build_page_layout(audit_document)

        assert [p.kind for p in pages] == [
            PageKind.COVER,
            PageKind.METRICS,
            PageKind.SECTION,
            PageKind.NARRATIVE,
        ]
        assert pages[2].title == "STATS SUMMARY"

    def test_all_sections(self, audit_document: ReportDocument) -> None:
        """Every section gets a page when not filtering."""
        pages = build_page_layout(audit_document, displayable_only=False)
        titles = [p.title for p in pages if p.kind is PageKind.SECTION]
        assert titles == ["STATS SUMMARY", "NOTES"]

    def test_cover(self, audit_document: ReportDocument) -> None:
        """The audit cover shows the period and the preparer."""
        cover = build_page_layout(audit_document)[0]

        assert cover.title == "Monthly Workforce Audit Report"
        assert cover.subtitle == "March 2024"
        assert cover.lines == (CONFIDENTIAL_LABEL, "Layla Alotaibi")

    def test_metrics(self, audit_document: ReportDocument) -> None:
        """The metrics page shows four cards and the quantitative summary."""
        metrics = build_page_layout(audit_document)[1]

        assert metrics.title == "Workforce Metrics Overview"
        assert [(c.label, c.value) for c in metrics.cards] == [
            ("Total Workforce", "531"),
            ("New Joiners", "12"),
            ("Staff Leavers", "5"),
            ("Site Transfers", "3"),
        ]
        (summary,) = metrics.tables
        assert summary.title == "Executive Quantitative Summary"
        assert ("Job Roles Identified", "3") in summary.rows
        assert metrics.note is not None

    def test_no_stats(self, audit_document: ReportDocument) -> None:
        """Without stats the metrics page is omitted."""
        document = dataclasses.replace(audit_document, stats=None)
        kinds = [p.kind for p in build_page_layout(document)]
        assert PageKind.METRICS not in kinds

    def test_narrative(self, audit_document: ReportDocument) -> None:
        """The last page holds the executive summary."""
        narrative = build_page_layout(audit_document)[-1]
        assert narrative.title == NARRATIVE_TITLE
        assert narrative.text == audit_document.executive_summary


class TestVacationLayout:
    """Tests for vacation report layouts."""

    def test_cover(self, vacation_document: ReportDocument) -> None:
        """The vacation cover names the department and fiscal year."""
        cover = build_page_layout(vacation_document, department_name="HR")[0]

        assert cover.title == "Annual Vacation Report"
        assert cover.subtitle == "Prepared for: HR"
        assert cover.lines == ("FISCAL YEAR 2024", CONFIDENTIAL_LABEL)

    def test_default_department(self, vacation_document: ReportDocument) -> None:
        """The department defaults to the configured name."""
        cover = build_page_layout(vacation_document)[0]
        assert cover.subtitle == "Prepared for: Environmental Services Department"

    def test_kpis(self, vacation_document: ReportDocument) -> None:
        """The metrics page lists the KPIs and monthly participation."""
        metrics = build_page_layout(vacation_document)[1]
        kpis, monthly = metrics.tables

        assert metrics.title == "Executive Summary & KPIs"
        assert kpis.rows == (
            ("Total Unique Employees with Leave", "12"),
            ("Average Monthly Participation", "12 Staff/Month"),
            ("Data Integrity Score", "100%"),
        )
        assert monthly.headers[-1] == "Percentage of Contract (531)"
        assert monthly.rows == (("JUNE", "12 Employees", "2.3%"),)

    def test_sections_keep_titles(self, vacation_document: ReportDocument) -> None:
        """Vacation sections keep their sheet names as titles."""
        pages = build_page_layout(vacation_document)
        sections = [p for p in pages if p.kind is PageKind.SECTION]

        assert [p.title for p in sections] == ["Individual Leave"]
        assert sections[0].metadata == {"original_sheet_name": "Individual Leave"}


class TestFooterText:
    """Tests for footer_text."""

    def test_footer(self, audit_document: ReportDocument) -> None:
        """Footers carry the page position and the preparer."""
        assert footer_text(audit_document, 2, 5) == (
            "Page 2 of 5 | This report was prepared by Layla Alotaibi. | Confidential"
        )
