"""Markdown print preview of report documents.

Renders the on-screen page layout (audit reports limited to displayable
sections) as Markdown, one horizontal rule between pages.
"""

from dataclasses import dataclass

from workforce_report.output.page_layout import (
    PageKind,
    ReportPage,
    TableBlock,
    build_page_layout,
    footer_text,
)
from workforce_report.report_document import ReportDocument

PAGE_SEPARATOR = "\n\n---\n\n"


@dataclass
class MarkdownOutputResult:
    """Result of Markdown generation."""

    markdown: str
    """The rendered Markdown."""

    page_count: int
    """Number of layout pages rendered."""


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def render_table(block: TableBlock) -> str:
    """Render a table block as a GitHub-flavoured Markdown table."""
    lines = []
    if block.title:
        lines.append(f"### {block.title}")
        lines.append("")
    lines.append("| " + " | ".join(_escape_cell(h) for h in block.headers) + " |")
    lines.append("|" + "|".join(" --- " for _ in block.headers) + "|")
    for row in block.rows:
        lines.append("| " + " | ".join(_escape_cell(cell) for cell in row) + " |")
    return "\n".join(lines)


class MarkdownGenerator:
    """Generates a Markdown preview from the page layout."""

    def generate(self, document: ReportDocument) -> MarkdownOutputResult:
        """Render a report document as Markdown.

        Args:
            document: Report to render.

        Returns:
            MarkdownOutputResult with the preview text.
        """
        pages = build_page_layout(document)
        rendered = [
            self._render_page(page)
            + f"\n\n*{footer_text(document, number, len(pages))}*"
            for number, page in enumerate(pages, start=1)
        ]
        return MarkdownOutputResult(
            markdown=PAGE_SEPARATOR.join(rendered) + "\n",
            page_count=len(pages),
        )

    def _render_page(self, page: ReportPage) -> str:
        if page.kind is PageKind.COVER:
            parts = [f"# {page.title}"]
            if page.subtitle:
                parts.append(f"## {page.subtitle}")
            parts.extend(f"**{line}**" for line in page.lines)
            return "\n\n".join(parts)

        parts = [f"## {page.title}"]
        if page.cards:
            parts.append(
                "\n".join(
                    f"- **{card.label}:** {card.value}"
                    + (f" ({card.caption})" if card.caption else "")
                    for card in page.cards
                )
            )
        parts.extend(render_table(block) for block in page.tables)
        if page.note:
            parts.append(f"_{page.note}_")
        if page.text:
            parts.append(page.text)
        return "\n\n".join(parts)
