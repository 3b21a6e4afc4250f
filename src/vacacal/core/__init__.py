"""Functional core - pure business logic with no I/O."""

from .vacation import (
    Employee,
    Holiday,
    VacationEntry,
    VacationType,
    VACATION_COST,
    man_months_between,
    timestamp_token_id,
)
from .holidays import HOLIDAYS, list_holidays, find_holiday
from .grid import (
    BadgeStyle,
    CalendarCell,
    CalendarGrid,
    CellStyle,
    build_month_grid,
    shift_month,
)

__all__ = [
    # Vacations
    "Employee",
    "Holiday",
    "VacationEntry",
    "VacationType",
    "VACATION_COST",
    "man_months_between",
    "timestamp_token_id",
    # Holidays
    "HOLIDAYS",
    "list_holidays",
    "find_holiday",
    # Grid
    "BadgeStyle",
    "CalendarCell",
    "CalendarGrid",
    "CellStyle",
    "build_month_grid",
    "shift_month",
]
