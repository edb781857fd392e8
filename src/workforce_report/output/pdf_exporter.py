"""PDF rendering of report documents with reportlab."""

import io
from collections.abc import Callable
from functools import partial
from typing import Any
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    Flowable,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from workforce_report.output.page_layout import (
    MetricCard,
    PageKind,
    ReportPage,
    TableBlock,
    build_page_layout,
    footer_text,
)
from workforce_report.report_document import ReportDocument
from workforce_report.utils.logging import get_logger

logger = get_logger(__name__)

MARGIN = 20 * mm
HEADER_FILL = colors.HexColor("#1e293b")
MONTHLY_HEADER_FILL = colors.HexColor("#1e40af")
KPI_HEADER_FILL = colors.HexColor("#334155")
ALTERNATE_ROW_FILL = colors.HexColor("#fafafa")


class FooterCanvas(canvas.Canvas):
    """Canvas that defers page output so every footer knows the page count."""

    def __init__(
        self, *args: Any, footer: Callable[[int, int], str], **kwargs: Any
    ) -> None:
        super().__init__(*args, **kwargs)
        self._footer = footer
        self._saved_page_states: list[dict[str, Any]] = []

    def showPage(self) -> None:  # noqa: N802
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        page_count = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(page_count)
            super().showPage()
        super().save()

    def _draw_footer(self, page_count: int) -> None:
        width, _ = self._pagesize
        self.saveState()
        self.setFont("Helvetica", 8)
        self.setFillColor(colors.HexColor("#969696"))
        self.drawCentredString(
            width / 2, 12 * mm, self._footer(self._pageNumber, page_count)
        )
        self.restoreState()


class PdfExporter:
    """Renders a report document as a paginated A4 PDF.

    Every section is exported, displayable or not; the cover, metrics and
    narrative pages follow the shared page layout.
    """

    def __init__(self, pagesize: tuple[float, float] = A4) -> None:
        self.pagesize = pagesize
        styles = getSampleStyleSheet()
        self.styles = {
            "cover_title": ParagraphStyle(
                "CoverTitle",
                parent=styles["Title"],
                fontSize=26,
                leading=32,
                alignment=TA_CENTER,
            ),
            "cover_subtitle": ParagraphStyle(
                "CoverSubtitle",
                parent=styles["Normal"],
                fontSize=18,
                leading=24,
                alignment=TA_CENTER,
            ),
            "cover_line": ParagraphStyle(
                "CoverLine",
                parent=styles["Normal"],
                fontSize=13,
                leading=18,
                alignment=TA_CENTER,
                textColor=colors.HexColor("#646464"),
            ),
            "heading": ParagraphStyle(
                "PageHeading",
                parent=styles["Heading1"],
                fontSize=18,
                leading=22,
                spaceAfter=12,
            ),
            "subheading": ParagraphStyle(
                "TableHeading",
                parent=styles["Heading2"],
                fontSize=14,
                leading=18,
                spaceBefore=12,
                spaceAfter=8,
            ),
            "body": ParagraphStyle(
                "Body", parent=styles["Normal"], fontSize=11, leading=15
            ),
            "note": ParagraphStyle(
                "Note",
                parent=styles["Italic"],
                fontSize=8,
                alignment=TA_CENTER,
                textColor=colors.HexColor("#969696"),
            ),
            "card_label": ParagraphStyle(
                "CardLabel",
                parent=styles["Normal"],
                fontSize=8,
                alignment=TA_CENTER,
                textColor=colors.HexColor("#6b7280"),
            ),
            "card_value": ParagraphStyle(
                "CardValue",
                parent=styles["Normal"],
                fontName="Helvetica-Bold",
                fontSize=30,
                leading=36,
                alignment=TA_CENTER,
            ),
            "cell": ParagraphStyle(
                "Cell", parent=styles["Normal"], fontSize=7, leading=8.5
            ),
            "header_cell": ParagraphStyle(
                "HeaderCell",
                parent=styles["Normal"],
                fontName="Helvetica-Bold",
                fontSize=7,
                leading=8.5,
                textColor=colors.white,
            ),
        }

    @property
    def frame_width(self) -> float:
        return self.pagesize[0] - 2 * MARGIN

    def render(self, document: ReportDocument) -> bytes:
        """Render the document to PDF bytes.

        Args:
            document: Report to render.

        Returns:
            The PDF file content.
        """
        pages = build_page_layout(document, displayable_only=False)
        story: list[Flowable] = []
        for index, page in enumerate(pages):
            if index:
                story.append(PageBreak())
            story.extend(self._page_flowables(page))

        buffer = io.BytesIO()
        template = SimpleDocTemplate(
            buffer,
            pagesize=self.pagesize,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=MARGIN + 5 * mm,
            title=document.title,
            author=document.prepared_by,
        )
        template.build(
            story,
            canvasmaker=partial(
                FooterCanvas,
                footer=partial(footer_text, document),
            ),
        )
        content = buffer.getvalue()
        logger.info(
            "PDF rendered",
            file_name=document.export_file_name("pdf"),
            layout_pages=len(pages),
            size_bytes=len(content),
        )
        return content

    # ------------------------------------------------------------------ #
    # Page builders
    # ------------------------------------------------------------------ #

    def _page_flowables(self, page: ReportPage) -> list[Flowable]:
        if page.kind is PageKind.COVER:
            return self._cover(page)
        if page.kind is PageKind.NARRATIVE:
            return self._narrative(page)

        flowables: list[Flowable] = [Paragraph(escape(page.title), self.styles["heading"])]
        if page.cards:
            flowables.append(self._cards(page.cards))
            flowables.append(Spacer(1, 8 * mm))
        for block in page.tables:
            if block.title:
                flowables.append(Paragraph(escape(block.title), self.styles["subheading"]))
            flowables.append(self._table(block, page.kind))
        if page.note:
            flowables.append(Spacer(1, 6 * mm))
            flowables.append(Paragraph(escape(page.note), self.styles["note"]))
        return flowables

    def _cover(self, page: ReportPage) -> list[Flowable]:
        flowables: list[Flowable] = [
            Spacer(1, 70 * mm),
            Paragraph(escape(page.title), self.styles["cover_title"]),
            Spacer(1, 6 * mm),
        ]
        if page.subtitle:
            flowables.append(Paragraph(escape(page.subtitle), self.styles["cover_subtitle"]))
            flowables.append(Spacer(1, 6 * mm))
        for line in page.lines:
            flowables.append(Paragraph(escape(line), self.styles["cover_line"]))
        return flowables

    def _narrative(self, page: ReportPage) -> list[Flowable]:
        flowables: list[Flowable] = [Paragraph(escape(page.title), self.styles["heading"])]
        for paragraph in (page.text or "").split("\n"):
            if paragraph.strip():
                flowables.append(Paragraph(escape(paragraph), self.styles["body"]))
            else:
                flowables.append(Spacer(1, 4 * mm))
        return flowables

    def _cards(self, cards: tuple[MetricCard, ...]) -> Table:
        cells = [
            [
                Paragraph(escape(card.label.upper()), self.styles["card_label"]),
                Paragraph(escape(card.value), self.styles["card_value"]),
                Paragraph(escape(card.caption.upper()), self.styles["card_label"]),
            ]
            for card in cards
        ]
        grid = [cells[i : i + 2] for i in range(0, len(cells), 2)]
        if grid and len(grid[-1]) == 1:
            grid[-1].append("")
        table = Table(grid, colWidths=[self.frame_width / 2] * 2)
        table.setStyle(
            TableStyle(
                [
                    ("BOX", (0, 0), (-1, -1), 1.5, colors.black),
                    ("INNERGRID", (0, 0), (-1, -1), 1.5, colors.black),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("TOPPADDING", (0, 0), (-1, -1), 14),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 14),
                ]
            )
        )
        return table

    def _table(self, block: TableBlock, kind: PageKind) -> Table:
        header = [Paragraph(escape(h), self.styles["header_cell"]) for h in block.headers]
        body = [
            [Paragraph(escape(cell), self.styles["cell"]) for cell in row]
            for row in block.rows
        ]
        column_width = self.frame_width / max(len(block.headers), 1)
        table = Table(
            [header, *body],
            colWidths=[column_width] * len(block.headers),
            repeatRows=1,
        )

        if kind is PageKind.METRICS:
            fill = (
                MONTHLY_HEADER_FILL
                if block.title == "Monthly Leave Participation"
                else KPI_HEADER_FILL
            )
        else:
            fill = HEADER_FILL
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), fill),
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#cbd5e1")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, ALTERNATE_ROW_FILL]),
                    ("TOPPADDING", (0, 0), (-1, -1), 2),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
                ]
            )
        )
        return table