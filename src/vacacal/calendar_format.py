"""Terminal formatting for month grids."""

import click

from .core.grid import WEEKDAY_NAMES, BadgeStyle, CalendarCell, CalendarGrid, CellStyle

CELL_WIDTH = 12

BADGE_MARKERS = {
    BadgeStyle.FULL: "●",
    BadgeStyle.HALF: "◐",
    BadgeStyle.QUARTER: "◔",
}

DAY_COLORS = {
    CellStyle.WEEKDAY: {},
    CellStyle.WEEKEND: {"fg": "red"},
    CellStyle.HOLIDAY: {"fg": "red", "bold": True},
    CellStyle.TODAY: {"fg": "blue", "bold": True, "underline": True},
}


def _fit(text: str, width: int = CELL_WIDTH) -> str:
    if len(text) > width:
        text = text[: width - 1] + "…"
    return text.ljust(width)


def styled_day(cell: CalendarCell, color: bool = True) -> str:
    """Day number padded to the cell width, coloured by the cell's style."""
    label = _fit(f"[{cell.day}]" if cell.is_today else str(cell.day))
    if not color:
        return label
    return click.style(label, **DAY_COLORS[cell.style])


def _cell_lines(cell: CalendarCell | None, height: int, color: bool) -> list[str]:
    if cell is None:
        return [" " * CELL_WIDTH] * height
    lines = [styled_day(cell, color)]
    if cell.holiday_name:
        lines.append(_fit(cell.holiday_name))
    for badge in cell.badges:
        lines.append(_fit(f"{BADGE_MARKERS[badge.style]} {badge.employee_name}"))
    lines += [" " * CELL_WIDTH] * (height - len(lines))
    return lines


def format_month(grid: CalendarGrid, color: bool = False) -> str:
    """Render a month as a Sunday-first text table."""
    title = f"{grid.year}-{grid.month:02d}"
    header = " ".join(name.ljust(CELL_WIDTH) for name in WEEKDAY_NAMES)
    out = [title, header, "-" * len(header)]

    for week in grid.weeks():
        height = max(
            1 + (1 if c and c.holiday_name else 0) + (len(c.badges) if c else 0)
            for c in week
        )
        columns = [_cell_lines(c, height, color) for c in week]
        for row in zip(*columns):
            out.append(" ".join(row).rstrip())
        out.append("")

    legend = "  ".join(f"{marker} {style.value}" for style, marker in BADGE_MARKERS.items())
    out.append(legend)
    return "\n".join(out)


def grid_to_dict(grid: CalendarGrid) -> dict:
    """JSON-friendly view of a grid."""
    return {
        "year": grid.year,
        "month": grid.month,
        "start_weekday": grid.start_weekday,
        "days_in_month": grid.days_in_month,
        "days": [
            {
                "date": c.date_key,
                "weekday": c.weekday,
                "style": c.style.value,
                "is_weekend": c.is_weekend,
                "is_holiday": c.is_holiday,
                "holiday": c.holiday_name,
                "is_today": c.is_today,
                "vacations": [
                    {
                        "id": b.vacation.id,
                        "employee": b.employee_name,
                        "type": b.vacation.to_payload()["type"],
                        "cost": b.vacation.cost,
                        "style": b.style.value,
                    }
                    for b in c.badges
                ],
            }
            for c in grid.days
        ],
    }
