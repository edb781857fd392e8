"""Dataclasses describing a generated workforce report.

A :class:`ReportDocument` is created once per processing run and is
immutable. The executive summary is the only field that may change after
generation; :meth:`ReportDocument.with_executive_summary` returns a patched
copy instead of mutating the document in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from workforce_report.workbook import RowRecord


class ReportType(str, Enum):
    """Kind of report produced from a workbook."""

    AUDIT = "audit"
    VACATION = "vacation"

    @property
    def label(self) -> str:
        """Capitalised label used in export file names."""
        return self.value.capitalize()


@dataclass(frozen=True)
class ReportPeriod:
    """Reporting month and year extracted from a file name."""

    month: str
    year: str


@dataclass(frozen=True)
class ReportSection:
    """Direct projection of one non-empty sheet for display."""

    title: str
    original_sheet_name: str
    headers: tuple[str, ...]
    rows: tuple[RowRecord, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "original_sheet_name": self.original_sheet_name,
            "headers": list(self.headers),
            "rows": [dict(row) for row in self.rows],
        }


@dataclass(frozen=True)
class QuantitativeSummary:
    """Workforce counts for an audit report."""

    total_employees: int = 0
    job_roles_count: int = 0
    joiners_count: int = 0
    leavers_count: int = 0
    transfers_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_employees": self.total_employees,
            "job_roles_count": self.job_roles_count,
            "joiners_count": self.joiners_count,
            "leavers_count": self.leavers_count,
            "transfers_count": self.transfers_count,
        }


@dataclass(frozen=True)
class MonthlyParticipation:
    """Leave-row count for one calendar month."""

    month: str
    count: int
    percentage: str

    def to_dict(self) -> dict[str, Any]:
        return {"month": self.month, "count": self.count, "percentage": self.percentage}


@dataclass(frozen=True)
class VacationStats:
    """Vacation participation summary for a vacation report."""

    total_unique_employees: int
    avg_monthly_participation: str
    data_integrity_score: str
    monthly_participation: tuple[MonthlyParticipation, ...]
    contract_base: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_unique_employees": self.total_unique_employees,
            "avg_monthly_participation": self.avg_monthly_participation,
            "data_integrity_score": self.data_integrity_score,
            "monthly_participation": [m.to_dict() for m in self.monthly_participation],
            "contract_base": self.contract_base,
        }


@dataclass(frozen=True)
class ReportDocument:
    """The single unit of output state of a processing run."""

    type: ReportType
    file_name: str
    report_month: str
    report_year: str
    executive_summary: str
    sections: tuple[ReportSection, ...]
    prepared_by: str
    is_comparison: bool = False
    stats: QuantitativeSummary | None = None
    vacation_stats: VacationStats | None = None
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    def with_executive_summary(self, text: str) -> ReportDocument:
        """Return a copy of this document with a new executive summary.

        Args:
            text: The edited executive summary.

        Returns:
            A new document; every other field is shared with this one.
        """
        return replace(self, executive_summary=text)

    @property
    def title(self) -> str:
        """Cover title for the report type."""
        if self.type is ReportType.VACATION:
            return "Annual Vacation Report"
        if self.is_comparison:
            return "Comparative Workforce Audit Report"
        return "Monthly Workforce Audit Report"

    @property
    def period_label(self) -> str:
        return f"{self.report_month} {self.report_year}"

    def export_file_name(self, extension: str) -> str:
        """File name used when exporting, e.g. ``Audit_Report_March_2024.pdf``."""
        return (
            f"{self.type.label}_Report_{self.report_month}_{self.report_year}"
            f".{extension.lstrip('.')}"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation.

        Returns:
            Dictionary with the complete document. Cell values are left
            as decoded; use the JSON generator for a serialisable payload.
        """
        return {
            "type": self.type.value,
            "file_name": self.file_name,
            "report_month": self.report_month,
            "report_year": self.report_year,
            "executive_summary": self.executive_summary,
            "sections": [section.to_dict() for section in self.sections],
            "prepared_by": self.prepared_by,
            "is_comparison": self.is_comparison,
            "stats": self.stats.to_dict() if self.stats else None,
            "vacation_stats": (
                self.vacation_stats.to_dict() if self.vacation_stats else None
            ),
        }
