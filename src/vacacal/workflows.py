"""Shared workflow layer between the CLI and any other front end.

A CalendarSession holds the transient copies of remote data for the month
being viewed. Mutations go through the repository and then broadcast on the
data changed signal; subscribed sessions re-fetch before their next render.
"""

import logging
from datetime import date
from typing import Callable

from .adapters.apps_script import AppsScriptAdapter
from .config import Config, load_config
from .core.grid import CalendarGrid, build_month_grid, shift_month
from .core.vacation import Employee, Holiday, VacationEntry, VacationType
from .ports.vacation_repo import VacationRepository
from .signals import DataChangedSignal, data_changed

logger = logging.getLogger(__name__)


def get_repository(config: Config | None = None) -> AppsScriptAdapter:
    """Build the remote adapter from config."""
    return AppsScriptAdapter(config or load_config())


class CalendarSession:
    """
    State behind one calendar view.

    Each refresh is tagged with a monotonically increasing sequence number;
    results from anything but the latest refresh are discarded.
    """

    def __init__(
        self,
        repository: VacationRepository,
        signal: DataChangedSignal | None = None,
        today_provider: Callable[[], date] = date.today,
        year: int | None = None,
        month: int | None = None,
    ):
        self.repository = repository
        self.signal = signal if signal is not None else data_changed
        self.today_provider = today_provider

        today = today_provider()
        self.year = year or today.year
        self.month = month or today.month

        self.employees: list[Employee] = []
        self.vacations: list[VacationEntry] = []
        self.holidays: list[Holiday] = []

        self._sequence = 0
        self._loaded = False
        self._stale = True
        self._unsubscribe = self.signal.subscribe(self._on_data_changed)

    def close(self) -> None:
        """Stop listening for data changed notifications."""
        self._unsubscribe()

    def _on_data_changed(self) -> None:
        self._stale = True

    @property
    def is_stale(self) -> bool:
        return self._stale

    # ============== Refresh ==============

    def begin_refresh(self) -> int:
        """Start a refresh and return its ticket."""
        self._sequence += 1
        return self._sequence

    def apply_refresh(
        self,
        ticket: int,
        employees: list[Employee],
        vacations: list[VacationEntry],
    ) -> bool:
        """Store fetched data unless a newer refresh has started since."""
        if ticket != self._sequence:
            logger.debug(f"Discarding stale refresh {ticket} (latest is {self._sequence})")
            return False
        self.employees = employees
        self.vacations = vacations
        self.holidays = self.repository.list_holidays()
        self._loaded = True
        self._stale = False
        return True

    def refresh(self) -> bool:
        """Re-fetch employees and vacations. Returns False if the result was stale."""
        ticket = self.begin_refresh()
        employees = self.repository.fetch_employees()
        vacations = self.repository.fetch_vacations()
        return self.apply_refresh(ticket, employees, vacations)

    def ensure_fresh(self) -> None:
        if self._stale or not self._loaded:
            self.refresh()

    # ============== Navigation ==============

    def change_month(self, delta: int) -> None:
        """Move the view by delta months and re-fetch."""
        self.year, self.month = shift_month(self.year, self.month, delta)
        self.refresh()

    def grid(self) -> CalendarGrid:
        """Build the grid for the current month, re-fetching if needed."""
        self.ensure_fresh()
        return build_month_grid(
            self.year,
            self.month,
            self.employees,
            self.vacations,
            self.holidays,
            self.today_provider(),
        )

    def vacations_on(self, date_key: str) -> list[VacationEntry]:
        """Vacation entries for one day, in fetch order."""
        self.ensure_fresh()
        return [v for v in self.vacations if v.date == date_key]

    def employee_name(self, employee_id: str, default: str = "") -> str:
        return next((e.name for e in self.employees if e.id == employee_id), default)

    # ============== Mutations ==============

    def add_vacation(
        self,
        employee_id: str,
        vacation_date: date | str,
        vacation_type: VacationType | str,
    ) -> VacationEntry:
        entry = self.repository.create_vacation(employee_id, vacation_date, vacation_type)
        self.signal.emit()
        return entry

    def remove_vacation(self, vacation_id: str) -> None:
        self.repository.delete_vacation(vacation_id)
        self.signal.emit()

    def save_employee(self, employee: Employee) -> None:
        self.repository.update_employee(employee)
        self.signal.emit()

    def remove_employee(self, employee_id: str) -> None:
        self.repository.delete_employee(employee_id)
        self.signal.emit()
