import argparse
import asyncio
import sys
from pathlib import Path

from workforce_report.config import settings
from workforce_report.output.export_service import ExportFormat, ExportService
from workforce_report.report_document import ReportType
from workforce_report.services.report_processor import process_report
from workforce_report.utils.exceptions import ReportError
from workforce_report.utils.logging import configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="workforce-report",
        description="Generate an audit or vacation report from a workforce .xlsx export.",
    )
    parser.add_argument(
        "report_type",
        choices=[t.value for t in ReportType],
        help="Kind of report to generate.",
    )
    parser.add_argument("file", help="Path to the .xlsx workbook.")
    parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory to write the exported files to.",
    )
    parser.add_argument(
        "--format",
        dest="formats",
        nargs="+",
        choices=[f.value for f in ExportFormat],
        default=[ExportFormat.PDF.value],
        help="Export formats (default: pdf).",
    )
    parser.add_argument(
        "--summary",
        default=None,
        help="Executive summary text replacing the standard disclaimer.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: WFR_LOG_LEVEL or WARNING).",
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> list[Path]:
    """Process the workbook and write every requested export.

    Returns:
        Paths of the written files.
    """
    document = asyncio.run(process_report(Path(args.file), args.report_type))
    if args.summary is not None:
        document = document.with_executive_summary(args.summary)

    output_dir = Path(args.output_dir).expanduser()
    output_dir.mkdir(parents=True, exist_ok=True)

    export_service = ExportService()
    written: list[Path] = []
    for fmt in args.formats:
        artifact = export_service.export(document, fmt)
        path = output_dir / artifact.file_name
        path.write_bytes(artifact.content)
        written.append(path)
    return written


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(level=args.log_level or ("DEBUG" if settings.debug else "WARNING"))

    source = Path(args.file).expanduser()
    if not source.is_file():
        print(f"[error] input not found: {args.file}", file=sys.stderr)
        return 1
    args.file = str(source)

    try:
        written = run(args)
    except ReportError as e:
        print(f"[error] {e.message}", file=sys.stderr)
        return 1

    for path in written:
        print(path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
