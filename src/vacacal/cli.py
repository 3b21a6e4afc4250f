"""vacacal CLI - employee vacation calendar."""

import json
import logging
import sys
from datetime import date

import click

from .adapters.apps_script import RemoteDataError
from .calendar_format import format_month, grid_to_dict
from .config import load_config
from .core.grid import UNKNOWN_EMPLOYEE
from .core.holidays import find_holiday, list_holidays
from .core.vacation import Employee, VacationType, cost_by_employee, man_months_between, timestamp_token_id
from .signals import DataChangedSignal
from .workflows import CalendarSession, get_repository

TYPE_CHOICES = [t.name for t in VacationType]


def _parse_month(value: str | None) -> tuple[int, int]:
    if not value:
        today = date.today()
        return today.year, today.month
    try:
        year_str, month_str = value.split("-")
        year, month = int(year_str), int(month_str)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not in YYYY-MM format")
    if not 1 <= year <= 9999:
        raise click.BadParameter(f"year must be between 1 and 9999, got {year}")
    if not 1 <= month <= 12:
        raise click.BadParameter(f"month must be between 1 and 12, got {month}")
    return year, month


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a YYYY-MM-DD date")


def _session(ctx: click.Context, year: int | None = None, month: int | None = None) -> CalendarSession:
    repo = get_repository(ctx.obj["config"])
    return CalendarSession(repo, signal=ctx.obj["signal"], year=year, month=month)


def _fail(e: Exception):
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(package_name="vacacal")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """vacacal - Employee vacation calendar."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.WARNING,
    )
    ctx.ensure_object(dict)
    if "config" not in ctx.obj:
        ctx.obj["config"] = load_config()
    ctx.obj.setdefault("signal", DataChangedSignal())


@main.command()
@click.option("--month", "-m", "month_str", default=None, help="Month to show (YYYY-MM), defaults to this month")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--color/--no-color", default=True, help="Colour weekends, holidays and today")
@click.pass_context
def month(ctx, month_str: str | None, as_json: bool, color: bool):
    """Show the vacation calendar for a month."""
    year, mon = _parse_month(month_str)
    try:
        grid = _session(ctx, year, mon).grid()
    except RemoteDataError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps(grid_to_dict(grid), indent=2, ensure_ascii=False))
    else:
        click.echo(format_month(grid, color=color))


@main.command()
@click.argument("day")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def day(ctx, day: str, as_json: bool):
    """List vacations on a single day (YYYY-MM-DD)."""
    target = _parse_date(day)
    try:
        session = _session(ctx, target.year, target.month)
        entries = session.vacations_on(target.isoformat())
    except RemoteDataError as e:
        _fail(e)
    holiday = find_holiday(target.isoformat(), session.holidays)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "date": target.isoformat(),
                    "holiday": holiday.name if holiday else None,
                    "vacations": [
                        {**v.to_payload(), "employee": session.employee_name(v.employee_id, UNKNOWN_EMPLOYEE)}
                        for v in entries
                    ],
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    click.echo(f"### {target.strftime('%A, %B %d, %Y')}")
    if holiday:
        click.echo(f"Holiday: {holiday.name}")
    if not entries:
        click.echo("No vacations recorded.")
        return
    for v in entries:
        name = session.employee_name(v.employee_id, UNKNOWN_EMPLOYEE)
        click.echo(f"  {name:16} {v.type_label:14} {v.id}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def employees(ctx, as_json: bool):
    """List employees."""
    try:
        emps = get_repository(ctx.obj["config"]).fetch_employees()
    except RemoteDataError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([e.to_payload() for e in emps], indent=2, ensure_ascii=False))
        return
    if not emps:
        click.echo("No employees.")
        return
    for e in emps:
        click.echo(f"  {e.id:28} {e.name}")


@main.group()
def employee():
    """Add, rename or remove employees."""
    pass


@employee.command("add")
@click.argument("name")
@click.option("--id", "employee_id", default=None, help="Employee id (generated if omitted)")
@click.pass_context
def employee_add(ctx, name: str, employee_id: str | None):
    """Add an employee."""
    emp = Employee(id=employee_id or timestamp_token_id("emp"), name=name)
    try:
        _session(ctx).save_employee(emp)
    except RemoteDataError as e:
        _fail(e)
    click.echo(f"✓ Saved {emp.name} ({emp.id})")


@employee.command("rename")
@click.argument("employee_id")
@click.argument("name")
@click.pass_context
def employee_rename(ctx, employee_id: str, name: str):
    """Rename an employee."""
    try:
        _session(ctx).save_employee(Employee(id=employee_id, name=name))
    except RemoteDataError as e:
        _fail(e)
    click.echo(f"✓ Renamed {employee_id} to {name}")


@employee.command("rm")
@click.argument("employee_id")
@click.pass_context
def employee_rm(ctx, employee_id: str):
    """Remove an employee."""
    try:
        _session(ctx).remove_employee(employee_id)
    except RemoteDataError as e:
        _fail(e)
    click.echo(f"✓ Removed {employee_id}")


@main.group()
def vacation():
    """Record or remove vacations."""
    pass


@vacation.command("add")
@click.argument("employee_id")
@click.argument("day")
@click.option(
    "--type",
    "type_name",
    type=click.Choice(TYPE_CHOICES, case_sensitive=False),
    default=VacationType.FULL_DAY.name,
    show_default=True,
    help="Vacation type",
)
@click.pass_context
def vacation_add(ctx, employee_id: str, day: str, type_name: str):
    """Record a vacation day for an employee."""
    target = _parse_date(day)
    vtype = VacationType[type_name.upper()]
    try:
        entry = _session(ctx).add_vacation(employee_id, target, vtype)
    except RemoteDataError as e:
        _fail(e)
    click.echo(f"✓ Added {vtype.label} on {entry.date} (cost {entry.cost:g}, id {entry.id})")


@vacation.command("rm")
@click.argument("vacation_id")
@click.option("--yes", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def vacation_rm(ctx, vacation_id: str, yes: bool):
    """Delete a vacation record."""
    if not yes and not click.confirm(f"Delete vacation record {vacation_id}?"):
        return
    try:
        _session(ctx).remove_vacation(vacation_id)
    except RemoteDataError as e:
        _fail(e)
    click.echo(f"✓ Removed {vacation_id}")


@main.command()
@click.option("--year", type=int, default=None, help="Only show one year")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def holidays(year: int | None, as_json: bool):
    """List public holidays."""
    items = list_holidays(year)
    if as_json:
        click.echo(json.dumps([{"date": h.date, "name": h.name} for h in items], indent=2, ensure_ascii=False))
        return
    if not items:
        click.echo("No holidays listed.")
        return
    for h in items:
        click.echo(f"  {h.date}  {h.name}")


@main.command("man-months")
@click.argument("start")
@click.argument("end")
def man_months(start: str, end: str):
    """Inclusive duration between two dates, in man-months."""
    click.echo(f"{man_months_between(start, end):.1f}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def usage(ctx, as_json: bool):
    """Total vacation cost used per employee."""
    try:
        session = _session(ctx)
        session.ensure_fresh()
    except RemoteDataError as e:
        _fail(e)

    totals = cost_by_employee(session.vacations)
    rows = [(session.employee_name(emp_id, UNKNOWN_EMPLOYEE), emp_id, total) for emp_id, total in totals.items()]

    if as_json:
        click.echo(
            json.dumps(
                [{"employee": name, "id": emp_id, "days": total} for name, emp_id, total in rows],
                indent=2,
                ensure_ascii=False,
            )
        )
        return
    if not rows:
        click.echo("No vacations recorded.")
        return
    for name, emp_id, total in rows:
        click.echo(f"  {name:16} {total:5.2f} days")


if __name__ == "__main__":
    main()
