"""Vacation repository interface."""

from datetime import date
from typing import Protocol

from vacacal.core.vacation import Employee, Holiday, VacationEntry, VacationType


class VacationRepository(Protocol):
    """Interface for reading and changing employees and vacations on any backend."""

    def fetch_employees(self) -> list[Employee]:
        """Fetch all employees."""
        ...

    def fetch_vacations(self) -> list[VacationEntry]:
        """Fetch all vacation entries."""
        ...

    def list_holidays(self) -> list[Holiday]:
        """Return the holiday table. No network access."""
        ...

    def create_employee(self, employee: Employee) -> None:
        """Save an employee, overwriting any record with the same id."""
        ...

    def update_employee(self, employee: Employee) -> None:
        ...

    def delete_employee(self, employee_id: str) -> None:
        ...

    def create_vacation(
        self, employee_id: str, vacation_date: date | str, vacation_type: VacationType | str
    ) -> VacationEntry:
        """Create a vacation entry. The cost always comes from the type."""
        ...

    def delete_vacation(self, vacation_id: str) -> None:
        ...
