"""Pure vacation domain logic - no I/O dependencies."""

import random
import string
import time
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Callable, Iterable

# Average month length used for man-month reporting
AVERAGE_MONTH_DAYS = Decimal("30.4")

# Marker shared by every half-day type name (the quarter-day name contains it too)
HALF_DAY_MARKER = "반차"

IdFactory = Callable[[str], str]


class VacationType(str, Enum):
    """Vacation categories. Values are the strings stored by the backend."""

    FULL_DAY = "연차"
    HALF_DAY_AM = "오전반차"
    HALF_DAY_PM = "오후반차"
    QUARTER_DAY = "반반차"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def cost(self) -> float:
        return VACATION_COST[self]


VACATION_COST: dict[VacationType, float] = {
    VacationType.FULL_DAY: 1.0,
    VacationType.HALF_DAY_AM: 0.5,
    VacationType.HALF_DAY_PM: 0.5,
    VacationType.QUARTER_DAY: 0.25,
}

_LABELS = {
    VacationType.FULL_DAY: "Full day",
    VacationType.HALF_DAY_AM: "Half day (AM)",
    VacationType.HALF_DAY_PM: "Half day (PM)",
    VacationType.QUARTER_DAY: "Quarter day",
}


def parse_vacation_type(value: str) -> VacationType | str:
    """Map a wire value (or member name) to a VacationType, keeping unknown strings."""
    try:
        return VacationType(value)
    except ValueError:
        pass
    try:
        return VacationType[value.upper()]
    except KeyError:
        return value


def is_half_day_type(value: VacationType | str) -> bool:
    """True for any half-day variant, which includes the quarter-day type."""
    return isinstance(value, str) and HALF_DAY_MARKER in value


def timestamp_token_id(prefix: str) -> str:
    """Client-side id: prefix, epoch milliseconds and a 7 char base36 token."""
    alphabet = string.digits + string.ascii_lowercase
    token = "".join(random.choices(alphabet, k=7))
    return f"{prefix}_{int(time.time() * 1000)}_{token}"


@dataclass
class Employee:
    """An employee as stored in the spreadsheet."""

    id: str
    name: str

    @classmethod
    def from_api(cls, data: dict) -> "Employee":
        """Create Employee from a backend record."""
        return cls(id=str(data["id"]), name=str(data.get("name") or ""))

    def to_payload(self) -> dict:
        return {"id": self.id, "name": self.name}


@dataclass
class VacationEntry:
    """
    A single day (or part of a day) of leave for one employee.

    The cost is fixed when the entry is created and comes from VACATION_COST.
    """

    id: str
    employee_id: str
    date: str
    type: VacationType | str
    cost: float

    @classmethod
    def create(
        cls,
        employee_id: str,
        vacation_date: date | str,
        vacation_type: VacationType | str,
        id_factory: IdFactory = timestamp_token_id,
    ) -> "VacationEntry":
        """Build a new entry with a fresh id and the table cost for its type."""
        vtype = parse_vacation_type(vacation_type)
        if not isinstance(vtype, VacationType):
            raise ValueError(f"Unknown vacation type: {vacation_type}")
        if isinstance(vacation_date, date):
            vacation_date = vacation_date.isoformat()
        return cls(
            id=id_factory("vac"),
            employee_id=employee_id,
            date=vacation_date,
            type=vtype,
            cost=VACATION_COST[vtype],
        )

    @classmethod
    def from_api(cls, data: dict) -> "VacationEntry":
        """Create VacationEntry from a backend record."""
        vtype = parse_vacation_type(str(data.get("type") or ""))
        cost = data.get("cost")
        if cost in (None, ""):
            cost = VACATION_COST.get(vtype, 0.0)
        return cls(
            id=str(data["id"]),
            employee_id=str(data.get("employeeId") or ""),
            date=str(data.get("date") or ""),
            type=vtype,
            cost=float(cost),
        )

    @property
    def type_label(self) -> str:
        if isinstance(self.type, VacationType):
            return self.type.label
        return str(self.type)

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "date": self.date,
            "type": self.type.value if isinstance(self.type, VacationType) else self.type,
            "cost": self.cost,
        }


@dataclass
class Holiday:
    """A public holiday."""

    date: str
    name: str


def _to_date(value: date | str) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    # Full ISO datetimes such as "2025-01-01T09:00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def man_months_between(start: date | str, end: date | str) -> float:
    """
    Inclusive day count between two dates expressed in average months.

    Pure function - no I/O.

    Returns 0.0 when either date can't be parsed or when end precedes start.
    The result is rounded half-up to one decimal place.
    """
    start_date = _to_date(start)
    end_date = _to_date(end)
    if start_date is None or end_date is None:
        return 0.0
    if end_date < start_date:
        return 0.0

    days = (end_date - start_date).days + 1
    months = (Decimal(days) / AVERAGE_MONTH_DAYS).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(months)


def vacation_total_cost(entries: Iterable[VacationEntry], employee_id: str | None = None) -> float:
    """Sum the cost of vacation entries, optionally for one employee."""
    return sum(
        (e.cost for e in entries if employee_id is None or e.employee_id == employee_id),
        0.0,
    )


def cost_by_employee(entries: Iterable[VacationEntry]) -> dict[str, float]:
    """Total vacation cost per employee id, in first-seen order."""
    totals: dict[str, float] = {}
    for entry in entries:
        totals[entry.employee_id] = totals.get(entry.employee_id, 0.0) + entry.cost
    return totals
