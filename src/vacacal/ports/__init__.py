"""Ports - interfaces/protocols for external dependencies."""

from .vacation_repo import VacationRepository

__all__ = [
    "VacationRepository",
]
