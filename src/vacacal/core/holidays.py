"""
Korean public holidays (ISO date -> name) shown on the calendar.

Notes:
- The table is static; add a block here when a new year needs support.
- Substitute holidays are listed explicitly, nothing is derived from the lunar calendar.
"""

from typing import Iterable

from .vacation import Holiday

HOLIDAYS: tuple[Holiday, ...] = (
    # ---------- 2025 ----------
    Holiday("2025-01-01", "New Year's Day"),
    Holiday("2025-01-28", "Seollal Holiday"),
    Holiday("2025-01-29", "Seollal"),
    Holiday("2025-01-30", "Seollal Holiday"),
    Holiday("2025-03-01", "Independence Movement Day"),
    Holiday("2025-03-03", "Substitute Holiday (Independence Movement Day)"),
    Holiday("2025-05-05", "Children's Day"),
    Holiday("2025-05-06", "Buddha's Birthday"),
    Holiday("2025-06-06", "Memorial Day"),
    Holiday("2025-08-15", "Liberation Day"),
    Holiday("2025-10-03", "National Foundation Day"),
    Holiday("2025-10-05", "Chuseok Holiday"),
    Holiday("2025-10-06", "Chuseok"),
    Holiday("2025-10-07", "Chuseok Holiday"),
    Holiday("2025-10-08", "Substitute Holiday (Chuseok)"),
    Holiday("2025-10-09", "Hangul Day"),
    Holiday("2025-12-25", "Christmas Day"),
    # ---------- 2026 ----------
    Holiday("2026-01-01", "New Year's Day"),
    Holiday("2026-02-16", "Seollal Holiday"),
    Holiday("2026-02-17", "Seollal"),
    Holiday("2026-02-18", "Seollal Holiday"),
    Holiday("2026-03-01", "Independence Movement Day"),
    Holiday("2026-03-02", "Substitute Holiday (Independence Movement Day)"),
    Holiday("2026-05-05", "Children's Day"),
    Holiday("2026-05-24", "Buddha's Birthday"),
    Holiday("2026-05-25", "Substitute Holiday (Buddha's Birthday)"),
    Holiday("2026-06-03", "Local Election Day"),
    Holiday("2026-06-06", "Memorial Day"),
    Holiday("2026-08-15", "Liberation Day"),
    Holiday("2026-08-17", "Substitute Holiday (Liberation Day)"),
    Holiday("2026-09-24", "Chuseok Holiday"),
    Holiday("2026-09-25", "Chuseok"),
    Holiday("2026-09-26", "Chuseok Holiday"),
    Holiday("2026-10-03", "National Foundation Day"),
    Holiday("2026-10-05", "Substitute Holiday (National Foundation Day)"),
    Holiday("2026-10-09", "Hangul Day"),
    Holiday("2026-12-25", "Christmas Day"),
)


def list_holidays(year: int | None = None) -> list[Holiday]:
    """Return the holiday table, optionally limited to one year."""
    if year is None:
        return list(HOLIDAYS)
    prefix = f"{year:04d}-"
    return [h for h in HOLIDAYS if h.date.startswith(prefix)]


def holiday_index(holidays: Iterable[Holiday]) -> dict[str, Holiday]:
    """Map date keys to holidays. The first entry for a date wins."""
    index: dict[str, Holiday] = {}
    for holiday in holidays:
        index.setdefault(holiday.date, holiday)
    return index


def find_holiday(date_key: str, holidays: Iterable[Holiday]) -> Holiday | None:
    """Find the holiday on a date. First match wins if the table has duplicates."""
    return next((h for h in holidays if h.date == date_key), None)
