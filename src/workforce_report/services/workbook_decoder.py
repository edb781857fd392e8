"""Workbook decoder turning spreadsheet bytes into row records."""

from __future__ import annotations

import asyncio
import io
import zipfile
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

import pandas as pd
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from workforce_report.utils.exceptions import DecodeError, ErrorCode
from workforce_report.utils.logging import get_logger
from workforce_report.workbook import RowRecord, Sheet, Workbook

logger = get_logger(__name__)

EMPTY_HEADER = "__EMPTY"
INVALID_WORKBOOK_MESSAGE = (
    "The selected file could not be read as an Excel workbook. "
    "Please upload a valid .xlsx file."
)


@dataclass
class DecoderOptions:
    """Options controlling which rows survive decoding."""

    total_labels: tuple[str, ...] = ("total", "إجمالي")
    """First-cell substrings that mark a totals row."""

    max_rows: int | None = None
    """Optional cap on rows read per sheet (header row included)."""


class WorkbookDecoder:
    """Decode ``.xlsx`` bytes into a :class:`Workbook` using openpyxl."""

    def __init__(self, options: DecoderOptions | None = None) -> None:
        self.options = options or DecoderOptions()

    def decode(self, data: bytes, file_name: str | None = None) -> Workbook:
        """Decode workbook bytes.

        Args:
            data: Raw spreadsheet file content.
            file_name: Original file name, for error details only.

        Returns:
            Workbook with one Sheet per tab, in tab order.

        Raises:
            DecodeError: If the bytes are not a readable workbook.
        """
        if not data:
            raise DecodeError(
                INVALID_WORKBOOK_MESSAGE, file_name=file_name, reason="empty file"
            )
        try:
            wb = load_workbook(
                filename=io.BytesIO(data), read_only=False, data_only=True
            )
        except (
            InvalidFileException,
            zipfile.BadZipFile,
            KeyError,
            ValueError,
            OSError,
        ) as e:
            logger.warning(
                "Workbook could not be opened",
                file_name=file_name,
                error=str(e),
            )
            raise DecodeError(
                INVALID_WORKBOOK_MESSAGE, file_name=file_name, reason=str(e)
            ) from e

        try:
            sheets = [self._decode_sheet(ws) for ws in wb.worksheets]
        finally:
            wb.close()

        workbook = Workbook(
            sheets=sheets,
            metadata={"file_name": file_name, "sheet_names": [s.name for s in sheets]},
        )
        logger.info(
            "Workbook decoded",
            file_name=file_name,
            sheets=len(sheets),
            rows=workbook.total_rows,
        )
        return workbook

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _decode_sheet(self, ws: Worksheet) -> Sheet:
        """Convert one worksheet into a filtered Sheet.

        Reading starts at the top-left corner of the used range, so tables
        placed below row 1 or right of column A keep their header row.
        """
        max_row = None
        if self.options.max_rows is not None:
            max_row = ws.min_row + self.options.max_rows - 1
        values = list(
            ws.iter_rows(
                min_row=ws.min_row,
                min_col=ws.min_column,
                max_row=max_row,
                values_only=True,
            )
        )
        if not values:
            return Sheet(name=ws.title, rows=[])

        headers = build_headers(values[0])
        width = len(headers)
        body = [self._pad(row, width) for row in values[1:]]

        frame = pd.DataFrame(body, columns=headers, dtype=object)
        frame = frame.where(frame.notna(), "")
        records: list[RowRecord] = frame.to_dict(orient="records")

        rows = [row for row in records if self.keep_row(row)]
        logger.debug(
            "Sheet decoded",
            sheet=ws.title,
            columns=width,
            rows=len(rows),
            dropped=len(records) - len(rows),
        )
        return Sheet(name=ws.title, rows=rows)

    def keep_row(self, row: RowRecord) -> bool:
        """Whether a row record survives the blank/total filter."""
        if not row:
            return False
        first = next(iter(row.values()))
        label = str(first or "").lower()
        if label == "":
            return False
        return not any(total in label for total in self.options.total_labels)

    @staticmethod
    def _pad(row: Sequence[Any], width: int) -> list[Any]:
        cells = list(row[:width])
        cells.extend([None] * (width - len(cells)))
        return cells


def build_headers(cells: Iterable[Any]) -> list[str]:
    """Name columns from the header row.

    Blank header cells become ``__EMPTY``, ``__EMPTY_1``...; repeated names
    get ``_1``, ``_2``... suffixes in column order.
    """
    headers: list[str] = []
    seen: dict[str, int] = {}
    for cell in cells:
        text = "" if cell is None else str(cell).strip()
        base = text or EMPTY_HEADER
        name = base
        if name in seen:
            seen[base] += 1
            name = f"{base}_{seen[base]}"
            while name in seen:
                seen[base] += 1
                name = f"{base}_{seen[base]}"
        seen.setdefault(name, 0)
        headers.append(name)
    return headers


def decode_workbook(data: bytes, file_name: str | None = None) -> Workbook:
    """Decode workbook bytes with the default options."""
    return WorkbookDecoder().decode(data, file_name=file_name)


class _AsyncReadable(Protocol):
    filename: str | None

    async def read(self) -> bytes: ...


WorkbookSource = bytes | Path | str | _AsyncReadable
"""Anything a workbook can be read from: raw bytes, a path or an upload."""


async def read_source(
    source: WorkbookSource, file_name: str | None = None
) -> tuple[bytes, str | None]:
    """Read the raw bytes of a workbook source.

    This is the only suspension point of a processing run.

    Args:
        source: Raw bytes, a filesystem path, or an object with an async
            ``read()`` and a ``filename`` attribute (such as ``UploadFile``).
        file_name: Name to report; defaults to the path or upload name.

    Returns:
        Tuple of (content, file name).

    Raises:
        DecodeError: If the source cannot be read.
    """
    if isinstance(source, bytes):
        return source, file_name

    if isinstance(source, (str, Path)):
        path = Path(source)
        name = file_name or path.name
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise DecodeError(
                f"The file '{name}' could not be read.",
                file_name=name,
                reason=str(e),
                error_code=ErrorCode.FILE_READ_ERROR,
            ) from e
        return data, name

    name = file_name or getattr(source, "filename", None)
    try:
        data = await source.read()
    except OSError as e:
        raise DecodeError(
            "The uploaded file could not be read.",
            file_name=name,
            reason=str(e),
            error_code=ErrorCode.FILE_READ_ERROR,
        ) from e
    return data, name


async def read_workbook(
    source: WorkbookSource,
    decoder: WorkbookDecoder | None = None,
) -> Workbook:
    """Read and decode a workbook from bytes, a path or an uploaded file."""
    data, name = await read_source(source)
    return (decoder or WorkbookDecoder()).decode(data, file_name=name)
