"""Bilingual month normalization and calendar ordering.

Month labels in leave sheets arrive in English (full or abbreviated, any
case) or in Arabic. Labels are normalized to the upper-case English name
and ordered January..December; anything unrecognised sorts last.
"""

from __future__ import annotations

from collections.abc import Iterable

MONTH_ORDER: tuple[str, ...] = (
    "JANUARY",
    "FEBRUARY",
    "MARCH",
    "APRIL",
    "MAY",
    "JUNE",
    "JULY",
    "AUGUST",
    "SEPTEMBER",
    "OCTOBER",
    "NOVEMBER",
    "DECEMBER",
)

MONTH_NAMES: tuple[str, ...] = tuple(m.capitalize() for m in MONTH_ORDER)
"""English month names in title case, as used for report periods."""

ARABIC_MONTHS: dict[str, str] = {
    "يناير": "JANUARY",
    "فبراير": "FEBRUARY",
    "مارس": "MARCH",
    "أبريل": "APRIL",
    "مايو": "MAY",
    "يونيو": "JUNE",
    "يوليو": "JULY",
    "أغسطس": "AUGUST",
    "سبتمبر": "SEPTEMBER",
    "أكتوبر": "OCTOBER",
    "نوفمبر": "NOVEMBER",
    "ديسمبر": "DECEMBER",
}

UNKNOWN_MONTH_INDEX = 999


def normalize_month(label: object) -> str:
    """Normalize a month label to its canonical upper-case form.

    Arabic month names map to their English equivalent; any other label is
    returned upper-cased and trimmed. ``None`` and empty values give ``""``.

    Args:
        label: Raw month value from a cell.

    Returns:
        The normalized label.
    """
    if label is None:
        return ""
    normalized = str(label).upper().strip()
    return ARABIC_MONTHS.get(normalized, normalized)


def month_index(label: object) -> int:
    """Return the calendar position (0-11) of a month label.

    Matching is a case-insensitive prefix comparison in either direction, so
    ``"Sep"`` and ``"SEPTEMBER 2024"`` both resolve to September.

    Args:
        label: Month label in English or Arabic.

    Returns:
        Index into :data:`MONTH_ORDER`, or ``UNKNOWN_MONTH_INDEX``.
    """
    normalized = normalize_month(label)
    for index, month in enumerate(MONTH_ORDER):
        if normalized.startswith(month) or month.startswith(normalized):
            return index
    return UNKNOWN_MONTH_INDEX


def sort_months(labels: Iterable[str]) -> list[str]:
    """Sort month labels chronologically.

    The sort is stable: unmatched labels keep their relative order at the end.
    """
    return sorted(labels, key=month_index)
