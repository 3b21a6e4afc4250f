"""Tests for terminal month formatting."""

from datetime import date

import click

from vacacal.calendar_format import format_month, grid_to_dict, styled_day
from vacacal.core.grid import build_month_grid
from vacacal.core.vacation import Employee, Holiday, VacationEntry, VacationType


def _may_grid(today=date(2025, 5, 20)):
    employees = [Employee("e1", "Kim"), Employee("e2", "Lee")]
    vacations = [
        VacationEntry("v1", "e1", "2025-05-05", VacationType.FULL_DAY, 1.0),
        VacationEntry("v2", "e2", "2025-05-07", VacationType.QUARTER_DAY, 0.25),
        VacationEntry("v3", "e9", "2025-05-07", VacationType.HALF_DAY_AM, 0.5),
    ]
    holidays = [Holiday("2025-05-05", "Children's Day")]
    return build_month_grid(2025, 5, employees, vacations, holidays, today)


class TestFormatMonth:
    def test_header_and_title(self):
        text = format_month(_may_grid())
        lines = text.splitlines()
        assert lines[0] == "2025-05"
        assert lines[1].split() == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

    def test_contents(self):
        text = format_month(_may_grid())
        assert "Children's …" in text
        assert "● Kim" in text
        assert "◔ Lee" in text
        assert "◐ Unknown" in text
        assert "[20]" in text

    def test_plain_by_default(self):
        assert "\x1b[" not in format_month(_may_grid())

    def test_color(self):
        assert "\x1b[" in format_month(_may_grid(), color=True)


class TestStyledDay:
    def test_today_uses_today_colour(self):
        cell = _may_grid().cell_for(20)
        assert click.unstyle(styled_day(cell)).strip() == "[20]"
        assert styled_day(cell) == click.style(styled_day(cell, color=False), fg="blue", bold=True, underline=True)


class TestGridToDict:
    def test_shape(self):
        data = grid_to_dict(_may_grid())
        assert data["start_weekday"] == 4
        assert len(data["days"]) == 31
        day5 = data["days"][4]
        assert day5["holiday"] == "Children's Day"
        assert day5["style"] == "holiday"
        assert day5["vacations"] == [
            {"id": "v1", "employee": "Kim", "type": "연차", "cost": 1.0, "style": "full"}
        ]
