"""Word rendering of report documents with python-docx.

The Word export is a cover-only companion to the PDF: the report title, its
period and the preparer line.
"""

import io

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt

from workforce_report.report_document import ReportDocument
from workforce_report.utils.logging import get_logger

logger = get_logger(__name__)


class DocxExporter:
    """Renders the cover of a report document as a ``.docx`` file."""

    def render(self, document: ReportDocument) -> bytes:
        """Render the document to DOCX bytes.

        Args:
            document: Report to render.

        Returns:
            The DOCX file content.
        """
        doc = Document()

        # Push the title down the cover page
        for _ in range(4):
            doc.add_paragraph()

        title = doc.add_heading(document.title, 0)
        title.alignment = WD_ALIGN_PARAGRAPH.CENTER

        period = doc.add_heading(document.period_label, level=1)
        period.alignment = WD_ALIGN_PARAGRAPH.CENTER

        preparer = doc.add_paragraph()
        preparer.alignment = WD_ALIGN_PARAGRAPH.CENTER
        run = preparer.add_run(f"This report was prepared by {document.prepared_by}.")
        run.font.size = Pt(10)

        buffer = io.BytesIO()
        doc.save(buffer)
        content = buffer.getvalue()
        logger.info(
            "DOCX rendered",
            file_name=document.export_file_name("docx"),
            size_bytes=len(content),
        )
        return content
