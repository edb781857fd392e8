"""Export service producing downloadable report files.

Dispatches a report document to the renderer for the requested format and
wraps the result as a named artifact. Rendering failures surface as
ExportError.
"""

import json
from dataclasses import dataclass
from enum import Enum

from workforce_report.output.docx_exporter import DocxExporter
from workforce_report.output.json_generator import JsonGenerator
from workforce_report.output.markdown_generator import MarkdownGenerator
from workforce_report.output.pdf_exporter import PdfExporter
from workforce_report.report_document import ReportDocument
from workforce_report.utils.exceptions import ErrorCode, ExportError
from workforce_report.utils.logging import get_logger, timed_operation

logger = get_logger(__name__)


class ExportFormat(str, Enum):
    """Supported download formats."""

    PDF = "pdf"
    DOCX = "docx"
    JSON = "json"
    MARKDOWN = "md"

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]


_MEDIA_TYPES: dict[ExportFormat, str] = {
    ExportFormat.PDF: "application/pdf",
    ExportFormat.DOCX: (
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    ),
    ExportFormat.JSON: "application/json",
    ExportFormat.MARKDOWN: "text/markdown; charset=utf-8",
}


@dataclass(frozen=True)
class ExportArtifact:
    """A rendered report file ready for download or saving."""

    file_name: str
    media_type: str
    content: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.content)


def parse_export_format(value: ExportFormat | str) -> ExportFormat:
    """Coerce a format name, raising ExportError when unsupported."""
    if isinstance(value, ExportFormat):
        return value
    normalized = str(value).lower().lstrip(".")
    if normalized == "markdown":
        normalized = "md"
    try:
        return ExportFormat(normalized)
    except ValueError as e:
        supported = ", ".join(f.value for f in ExportFormat)
        raise ExportError(
            f"Unsupported export format: {value}. Supported formats: {supported}",
            export_format=str(value),
            error_code=ErrorCode.UNSUPPORTED_EXPORT_FORMAT,
        ) from e


class ExportService:
    """Renders report documents to every supported download format."""

    def __init__(
        self,
        pdf_exporter: PdfExporter | None = None,
        docx_exporter: DocxExporter | None = None,
        json_generator: JsonGenerator | None = None,
        markdown_generator: MarkdownGenerator | None = None,
    ) -> None:
        self.pdf_exporter = pdf_exporter or PdfExporter()
        self.docx_exporter = docx_exporter or DocxExporter()
        self.json_generator = json_generator or JsonGenerator()
        self.markdown_generator = markdown_generator or MarkdownGenerator()

    def export(
        self, document: ReportDocument, export_format: ExportFormat | str
    ) -> ExportArtifact:
        """Render a document in the requested format.

        Args:
            document: Report to export.
            export_format: Target format (enum or its name).

        Returns:
            ExportArtifact named after the report type and period.

        Raises:
            ExportError: If the format is unsupported or rendering fails.
        """
        fmt = parse_export_format(export_format)
        try:
            with timed_operation(logger, f"export_{fmt.value}"):
                content = self._render(document, fmt)
        except ExportError:
            raise
        except Exception as e:
            logger.error(
                "Export failed",
                format=fmt.value,
                error=f"{type(e).__name__}: {e}",
                exc_info=True,
            )
            raise ExportError(
                f"The report could not be exported as {fmt.value.upper()}.",
                export_format=fmt.value,
                details={"error_type": type(e).__name__},
            ) from e

        return ExportArtifact(
            file_name=document.export_file_name(fmt.value),
            media_type=fmt.media_type,
            content=content,
        )

    def _render(self, document: ReportDocument, fmt: ExportFormat) -> bytes:
        if fmt is ExportFormat.PDF:
            return self.pdf_exporter.render(document)
        if fmt is ExportFormat.DOCX:
            return self.docx_exporter.render(document)
        if fmt is ExportFormat.JSON:
            result = self.json_generator.generate(document)
            return json.dumps(result.data, ensure_ascii=False, indent=2).encode("utf-8")
        return self.markdown_generator.generate(document).markdown.encode("utf-8")
