"""Pure month grid logic - no I/O dependencies."""

import calendar
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterator

from .holidays import holiday_index
from .vacation import Employee, Holiday, VacationEntry, VacationType, is_half_day_type

UNKNOWN_EMPLOYEE = "Unknown"

# Sunday-first column headers
WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


class CellStyle(str, Enum):
    """Day styles in increasing display priority."""

    WEEKDAY = "weekday"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"
    TODAY = "today"


class BadgeStyle(str, Enum):
    FULL = "full"
    HALF = "half"
    QUARTER = "quarter"


def date_key(year: int, month: int, day: int) -> str:
    """Fixed YYYY-MM-DD key, independent of locale."""
    return f"{year:04d}-{month:02d}-{day:02d}"


def sunday_weekday(d: date) -> int:
    """Weekday index with 0 = Sunday .. 6 = Saturday."""
    return (d.weekday() + 1) % 7


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Return the (year, month) reached by moving delta months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def badge_style(vacation_type: VacationType | str) -> BadgeStyle:
    """
    Pick the badge style for a vacation type.

    The half-day check runs first and the quarter-day check last, so a
    quarter day (whose name also reads as a half day) ends up QUARTER.
    """
    style = BadgeStyle.FULL
    if is_half_day_type(vacation_type):
        style = BadgeStyle.HALF
    if vacation_type == VacationType.QUARTER_DAY:
        style = BadgeStyle.QUARTER
    return style


@dataclass
class Badge:
    """A vacation entry as shown inside a day cell."""

    vacation: VacationEntry
    employee_name: str
    style: BadgeStyle


@dataclass
class CalendarCell:
    """One day of the month grid."""

    day: int
    date_key: str
    weekday: int
    is_weekend: bool
    is_holiday: bool
    is_today: bool
    holiday_name: str | None = None
    badges: list[Badge] = field(default_factory=list)

    @property
    def style(self) -> CellStyle:
        """Display style; later rules override earlier ones."""
        style = CellStyle.WEEKDAY
        if self.is_weekend:
            style = CellStyle.WEEKEND
        if self.is_holiday:
            style = CellStyle.HOLIDAY
        if self.is_today:
            style = CellStyle.TODAY
        return style


@dataclass
class CalendarGrid:
    """A month laid out in Sunday-first columns."""

    year: int
    month: int
    start_weekday: int
    days_in_month: int
    cells: list[CalendarCell | None]

    @property
    def days(self) -> list[CalendarCell]:
        return [c for c in self.cells if c is not None]

    def cell_for(self, day: int) -> CalendarCell | None:
        if 1 <= day <= self.days_in_month:
            return self.cells[self.start_weekday + day - 1]
        return None

    def weeks(self) -> Iterator[list[CalendarCell | None]]:
        """Rows of 7 cells, the last one padded with None."""
        for i in range(0, len(self.cells), 7):
            row = self.cells[i : i + 7]
            yield row + [None] * (7 - len(row))


def group_vacations_by_date(vacations: list[VacationEntry]) -> dict[str, list[VacationEntry]]:
    """Group entries by their exact date string, keeping input order."""
    grouped: dict[str, list[VacationEntry]] = {}
    for vacation in vacations:
        grouped.setdefault(vacation.date, []).append(vacation)
    return grouped


def build_month_grid(
    year: int,
    month: int,
    employees: list[Employee],
    vacations: list[VacationEntry],
    holidays: list[Holiday],
    today: date,
) -> CalendarGrid:
    """
    Build the day cells for a month.

    Pure function - no I/O. Never raises on dangling references: unknown
    employees render as UNKNOWN_EMPLOYEE.

    Args:
        year: Four digit year
        month: Month (1-12)
        employees: Employees used to resolve badge names
        vacations: Vacation entries, matched to days by their date string
        holidays: Holiday table; the first entry for a date wins
        today: Reference date, compared by calendar components only

    Returns:
        CalendarGrid with start_weekday leading placeholders
    """
    start = sunday_weekday(date(year, month, 1))
    total_days = days_in_month(year, month)
    today_key = date_key(today.year, today.month, today.day)

    names: dict[str, str] = {}
    for employee in employees:
        names.setdefault(employee.id, employee.name)
    holidays_by_date = holiday_index(holidays)
    vacations_by_date = group_vacations_by_date(vacations)

    cells: list[CalendarCell | None] = [None] * start
    for day in range(1, total_days + 1):
        key = date_key(year, month, day)
        weekday = (start + day - 1) % 7
        holiday = holidays_by_date.get(key)

        badges = [
            Badge(
                vacation=v,
                employee_name=names.get(v.employee_id) or UNKNOWN_EMPLOYEE,
                style=badge_style(v.type),
            )
            for v in vacations_by_date.get(key, [])
        ]

        cells.append(
            CalendarCell(
                day=day,
                date_key=key,
                weekday=weekday,
                is_weekend=weekday in (0, 6),
                is_holiday=holiday is not None,
                is_today=key == today_key,
                holiday_name=holiday.name if holiday else None,
                badges=badges,
            )
        )

    return CalendarGrid(
        year=year,
        month=month,
        start_weekday=start,
        days_in_month=total_days,
        cells=cells,
    )
