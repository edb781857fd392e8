"""Output generation for report documents.

This package provides:
- Paginated page layout shared by every renderer (page_layout.py)
- PDF rendering with reportlab (pdf_exporter.py)
- Word rendering with python-docx (docx_exporter.py)
- Schema-validated JSON payloads (json_generator.py)
- Markdown print preview (markdown_generator.py)
- Format dispatch and file naming (export_service.py)
"""

from workforce_report.output.docx_exporter import DocxExporter
from workforce_report.output.export_service import (
    ExportArtifact,
    ExportFormat,
    ExportService,
    parse_export_format,
)
from workforce_report.output.json_generator import (
    REPORT_SCHEMA,
    JsonGenerator,
    JsonOutputResult,
    ValidationResult,
)
from workforce_report.output.markdown_generator import (
    MarkdownGenerator,
    MarkdownOutputResult,
)
from workforce_report.output.page_layout import (
    MetricCard,
    PageKind,
    ReportPage,
    TableBlock,
    build_page_layout,
)
from workforce_report.output.pdf_exporter import PdfExporter

__all__ = [
    "REPORT_SCHEMA",
    "DocxExporter",
    "ExportArtifact",
    "ExportFormat",
    "ExportService",
    "JsonGenerator",
    "JsonOutputResult",
    "MarkdownGenerator",
    "MarkdownOutputResult",
    "MetricCard",
    "PageKind",
    "PdfExporter",
    "ReportPage",
    "TableBlock",
    "ValidationResult",
    "build_page_layout",
    "parse_export_format",
]
