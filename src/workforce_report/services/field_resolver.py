"""Prioritized alias lookup on row records.

Real-world exports name the same column differently ("MRN", "Staff MRN",
"Staff Name (MRN)"). Every metric routine resolves fields through
:func:`resolve` so the matching and tie-break rules live in one place:

* aliases are tried in priority order;
* for each alias, headers are scanned in column order;
* a header matches when, case-insensitively and ignoring surrounding
  whitespace, it equals the alias or contains it;
* a matching header whose value is ``None`` is skipped.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def _header_matches(header: str, alias: str) -> bool:
    normalized_header = str(header).lower().strip()
    normalized_alias = alias.lower().strip()
    return normalized_header == normalized_alias or normalized_alias in normalized_header


def resolve(row: Mapping[str, Any], aliases: Sequence[str]) -> Any:
    """Return the value of the first header matching an alias.

    Args:
        row: Row record keyed by column header.
        aliases: Candidate header names, highest priority first.

    Returns:
        The matched cell value, or None when no alias matches.
    """
    for alias in aliases:
        for header, value in row.items():
            if value is None:
                continue
            if _header_matches(header, alias):
                return value
    return None

