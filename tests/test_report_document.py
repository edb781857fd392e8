"""Tests for the report document model."""

import dataclasses

import pytest

from workforce_report.report_document import ReportDocument, ReportType
from workforce_report.workbook import Sheet, Workbook


class TestReportType:
    """Tests for the ReportType enum."""

    def test_values(self) -> None:
        """Test enum values used on the wire."""
        assert ReportType("audit") is ReportType.AUDIT
        assert ReportType("vacation") is ReportType.VACATION

    def test_label(self) -> None:
        """Test capitalised labels for file names."""
        assert ReportType.AUDIT.label == "Audit"
        assert ReportType.VACATION.label == "Vacation"


class TestReportDocument:
    """Tests for ReportDocument."""

    def test_is_immutable(self, audit_document: ReportDocument) -> None:
        """Test fields cannot be reassigned."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            audit_document.executive_summary = "edited"  # type: ignore[misc]

    def test_with_executive_summary(self, audit_document: ReportDocument) -> None:
        """Test editing the summary returns a patched copy."""
        patched = audit_document.with_executive_summary("New analysis")

        assert patched is not audit_document
        assert patched.executive_summary == "New analysis"
        assert audit_document.executive_summary.startswith("Executive Summary")
        assert patched.sections is audit_document.sections
        assert patched.stats is audit_document.stats

    def test_audit_title(self, audit_document: ReportDocument) -> None:
        """Test audit cover titles."""
        assert audit_document.title == "Monthly Workforce Audit Report"
        comparison = dataclasses.replace(audit_document, is_comparison=True)
        assert comparison.title == "Comparative Workforce Audit Report"

    def test_vacation_title(self, vacation_document: ReportDocument) -> None:
        """Test vacation cover title."""
        assert vacation_document.title == "Annual Vacation Report"

    def test_period_label(self, audit_document: ReportDocument) -> None:
        """Test period label joins month and year."""
        assert audit_document.period_label == "March 2024"

    @pytest.mark.parametrize(
        ("extension", "expected"),
        [
            ("pdf", "Audit_Report_March_2024.pdf"),
            (".docx", "Audit_Report_March_2024.docx"),
        ],
    )
    def test_export_file_name(
        self, audit_document: ReportDocument, extension: str, expected: str
    ) -> None:
        """Test export names follow the type and period."""
        assert audit_document.export_file_name(extension) == expected

    def test_to_dict(self, vacation_document: ReportDocument) -> None:
        """Test dictionary representation."""
        data = vacation_document.to_dict()

        assert data["type"] == "vacation"
        assert data["report_month"] == "June"
        assert data["report_year"] == "2024"
        assert data["stats"] is None
        assert data["vacation_stats"]["total_unique_employees"] == 12
        assert data["vacation_stats"]["monthly_participation"] == [
            {"month": "JUNE", "count": 12, "percentage": "2.3%"}
        ]
        assert data["sections"][0]["headers"] == ["MRN", "Month"]

    def test_metadata_ignored_in_equality(
        self, audit_document: ReportDocument
    ) -> None:
        """Test metadata does not affect equality."""
        other = dataclasses.replace(audit_document, metadata={"total_rows": 99})
        assert other == audit_document


class TestWorkbook:
    """Tests for the decoded workbook model."""

    def test_sheet_properties(self) -> None:
        """Test row count and headers of a sheet."""
        sheet = Sheet(name="Roles", rows=[{"Role": "Cleaner", "Count": 3}])

        assert sheet.row_count == 1
        assert sheet.headers == ["Role", "Count"]
        assert not sheet.is_empty

    def test_empty_sheet(self) -> None:
        """Test an empty sheet has no headers."""
        sheet = Sheet(name="Blank")

        assert sheet.is_empty
        assert sheet.headers == []

    def test_workbook_properties(self, sample_workbook: Workbook) -> None:
        """Test sheet names, row totals and iteration."""
        assert sample_workbook.sheet_names == ["Stats Summary", "Leavers Report", "Empty"]
        assert sample_workbook.total_rows == 3
        assert len(sample_workbook) == 3
        assert [s.name for s in sample_workbook] == sample_workbook.sheet_names
