"""Dataclasses representing a decoded workforce workbook."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any

RawCell = str | int | float | bool | date | datetime | time | None
"""A single cell value as typed by the spreadsheet; ``""`` when absent."""

RowRecord = dict[str, Any]
"""One row keyed by column header, in sheet column order."""


@dataclass
class Sheet:
    """A named worksheet holding its row records after filtering."""

    name: str
    rows: list[RowRecord] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def headers(self) -> list[str]:
        """Column headers as found on the first row."""
        return list(self.rows[0].keys()) if self.rows else []


@dataclass
class Workbook:
    """Ordered sheets of a workbook, in source tab order."""

    sheets: list[Sheet]
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def sheet_names(self) -> list[str]:
        return [sheet.name for sheet in self.sheets]

    @property
    def total_rows(self) -> int:
        return sum(sheet.row_count for sheet in self.sheets)

    def __iter__(self) -> Iterator[Sheet]:
        return iter(self.sheets)

    def __len__(self) -> int:
        return len(self.sheets)
