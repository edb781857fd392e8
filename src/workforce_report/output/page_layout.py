"""Paginated print model of a report document.

The layout is the single source for what each exported page shows. Pages
come in four kinds, always in this order: one cover page, at most one
metrics page, one page per displayed section, and a closing narrative page
holding the executive summary.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any

from workforce_report.config import settings
from workforce_report.report_document import ReportDocument, ReportSection, ReportType

DISPLAYABLE_SECTION_MARKERS: tuple[str, ...] = (
    "stats",
    "summary",
    "roles",
    "joiner",
    "leaver",
    "transfer",
    "leave",
    "vacation",
    "إجازات",
    "اجازات",
)

NARRATIVE_TITLE = "Executive Summary & Auditor Analysis"
CONFIDENTIAL_LABEL = "Official Document | Confidential"


class PageKind(str, Enum):
    """Kinds of pages in a report layout."""

    COVER = "cover"
    METRICS = "metrics"
    SECTION = "section"
    NARRATIVE = "narrative"


@dataclass(frozen=True)
class MetricCard:
    """A headline figure with its caption."""

    label: str
    value: str
    caption: str = ""


@dataclass(frozen=True)
class TableBlock:
    """A titled table with display-ready cell text."""

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    title: str | None = None


@dataclass(frozen=True)
class ReportPage:
    """One printed page of a report."""

    kind: PageKind
    title: str
    subtitle: str | None = None
    lines: tuple[str, ...] = ()
    cards: tuple[MetricCard, ...] = ()
    tables: tuple[TableBlock, ...] = ()
    text: str | None = None
    note: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)


def format_cell(value: Any) -> str:
    """Render a raw cell as display text.

    Empty cells render as ``""``; whole floats drop their ``.0``; dates
    render as ISO dates and midnight datetimes drop their time part.
    """
    if value is None or value == "":
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def is_displayable_section(name: str) -> bool:
    """Whether an audit section gets its own page in the preview."""
    lowered = name.lower()
    return any(marker in lowered for marker in DISPLAYABLE_SECTION_MARKERS)


def section_table(section: ReportSection) -> TableBlock:
    """Project a section's rows onto its headers as display text."""
    return TableBlock(
        headers=section.headers,
        rows=tuple(
            tuple(format_cell(row.get(header, "")) for header in section.headers)
            for row in section.rows
        ),
    )


def _cover_page(document: ReportDocument, department_name: str) -> ReportPage:
    if document.type is ReportType.VACATION:
        return ReportPage(
            kind=PageKind.COVER,
            title=document.title,
            subtitle=f"Prepared for: {department_name}",
            lines=(
                f"FISCAL YEAR {document.report_year}",
                CONFIDENTIAL_LABEL,
            ),
        )
    return ReportPage(
        kind=PageKind.COVER,
        title=document.title,
        subtitle=document.period_label,
        lines=(CONFIDENTIAL_LABEL, document.prepared_by),
    )


def _metrics_page(document: ReportDocument) -> ReportPage | None:
    if document.type is ReportType.VACATION:
        stats = document.vacation_stats
        if stats is None:
            return None
        kpis = TableBlock(
            title="Key Performance Indicators",
            headers=("Key Performance Indicator", "Value"),
            rows=(
                ("Total Unique Employees with Leave", str(stats.total_unique_employees)),
                ("Average Monthly Participation", stats.avg_monthly_participation),
                ("Data Integrity Score", stats.data_integrity_score),
            ),
        )
        monthly = TableBlock(
            title="Monthly Leave Participation",
            headers=(
                "Reporting Month",
                "Employee Count",
                f"Percentage of Contract ({stats.contract_base})",
            ),
            rows=tuple(
                (item.month, f"{item.count} Employees", item.percentage)
                for item in stats.monthly_participation
            ),
        )
        return ReportPage(
            kind=PageKind.METRICS,
            title="Executive Summary & KPIs",
            tables=(kpis, monthly),
        )

    stats = document.stats
    if stats is None:
        return None
    return ReportPage(
        kind=PageKind.METRICS,
        title="Workforce Metrics Overview",
        cards=(
            MetricCard("Total Workforce", str(stats.total_employees), "Male + Female Count"),
            MetricCard("New Joiners", str(stats.joiners_count), "Current Month Arrivals"),
            MetricCard("Staff Leavers", str(stats.leavers_count), "Current Month Exits"),
            MetricCard("Site Transfers", str(stats.transfers_count), "Internal Movements"),
        ),
        tables=(
            TableBlock(
                title="Executive Quantitative Summary",
                headers=("Metric", "Value"),
                rows=(
                    ("Total Workforce", str(stats.total_employees)),
                    ("Job Roles Identified", str(stats.job_roles_count)),
                    ("New Joiners", str(stats.joiners_count)),
                    ("Staff Leavers", str(stats.leavers_count)),
                    ("Internal Site Transfers", str(stats.transfers_count)),
                ),
            ),
        ),
        note="* This summary is derived from combined male and female reporting data.",
    )


def _section_pages(
    document: ReportDocument, displayable_only: bool
) -> list[ReportPage]:
    pages = []
    for section in document.sections:
        if document.type is ReportType.AUDIT:
            if displayable_only and not is_displayable_section(
                section.original_sheet_name
            ):
                continue
            title = section.title.upper()
        else:
            title = section.title
        pages.append(
            ReportPage(
                kind=PageKind.SECTION,
                title=title,
                tables=(section_table(section),),
                metadata={"original_sheet_name": section.original_sheet_name},
            )
        )
    return pages


def build_page_layout(
    document: ReportDocument,
    displayable_only: bool = True,
    department_name: str | None = None,
) -> list[ReportPage]:
    """Lay out a report document as printed pages.

    Args:
        document: The report to lay out.
        displayable_only: For audit reports, keep only sections whose sheet
            name marks them as report content (vacation reports always show
            every section).
        department_name: Recipient department on the vacation cover
            (defaults to ``settings.department_name``).

    Returns:
        Pages in print order.
    """
    pages = [_cover_page(document, department_name or settings.department_name)]

    metrics_page = _metrics_page(document)
    if metrics_page is not None:
        pages.append(metrics_page)

    pages.extend(_section_pages(document, displayable_only))

    pages.append(
        ReportPage(
            kind=PageKind.NARRATIVE,
            title=NARRATIVE_TITLE,
            text=document.executive_summary,
        )
    )
    return pages


def footer_text(document: ReportDocument, page_number: int, page_count: int) -> str:
    """Footer printed on every exported page."""
    return (
        f"Page {page_number} of {page_count} | "
        f"This report was prepared by {document.prepared_by}. | Confidential"
    )
