"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.json_store import JsonScheduleStore
from ..config import AppConfig
from ..domain.availability import describe_day_offset
from ..domain.clock import as_datetime, resolve_now
from ..domain.exceptions import SchedulingError
from ..domain.recurrence import MonthlyRecurrence, WeeklyRecurrence
from ..domain.timeofday import format_time_of_day, parse_slot_date
from ..services.schedule_service import ScheduleService

app = typer.Typer(
    name="doctorslots",
    help="Expand recurring doctor schedules and find the next bookable day",
    add_completion=False
)
expand_app = typer.Typer(help="Preview the dates a recurring schedule expands into")
app.add_typer(expand_app, name="expand")

console = Console()


ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
DataOption = Annotated[Optional[Path], typer.Option("--data", help="Schedule JSON file. Defaults to the configured data_file or the bundled sample.")]
NowOption = Annotated[Optional[str], typer.Option("--now", help="Evaluate as of this ISO-8601 instant instead of the wall clock.")]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Doctor schedule tooling.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _open_store(config: AppConfig, data: Optional[Path]) -> JsonScheduleStore:
    """Open the schedule store from --data, the config, or the bundled sample."""
    path = data or config.data_file
    if path is None:
        return JsonScheduleStore.sample()
    return JsonScheduleStore(path)


def _build_service(config: AppConfig, store: JsonScheduleStore) -> ScheduleService:
    return ScheduleService(
        store=store,
        timezone=config.timezone,
        repeat_weeks=config.scheduling.repeat_weeks,
        repeat_months=config.scheduling.repeat_months,
    )


def _print_dates(dates, title: str) -> None:
    """Print expanded dates as a numbered table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Date", style="bold yellow")
    table.add_column("Weekday")

    for idx, value in enumerate(dates, 1):
        moment = as_datetime(value)
        table.add_row(str(idx), moment.to_iso8601_string(), moment.format("dddd", locale="en"))

    console.print()
    console.print(table)
    console.print(f"[bold green]✓ {len(dates)} date(s)[/bold green]\n")


@expand_app.command("weekly")
def expand_weekly_command(
    days: Annotated[List[str], typer.Argument(help="Weekday names, e.g. 'monday friday'")],
    repeat: Annotated[bool, typer.Option("--repeat", help="Repeat every week for a year.")] = False,
    config_file: ConfigOption = None,
    now: NowOption = None,
):
    """
    Expand weekday names into their next occurrence(s).

    Examples:

        doctorslots expand weekly sunday wednesday

        doctorslots expand weekly monday --repeat
    """
    try:
        config = AppConfig.load_or_default(config_file)
        service = _build_service(config, JsonScheduleStore())
        dates = service.plan_dates(WeeklyRecurrence(days=tuple(days), repeat=repeat), now=now)
    except (SchedulingError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _print_dates(dates, "Weekly schedule dates")


@expand_app.command("monthly")
def expand_monthly_command(
    date: Annotated[str, typer.Argument(help="Start date as an ISO-8601 instant")],
    repeat: Annotated[bool, typer.Option("--repeat", help="Repeat on the same day for twelve months.")] = False,
    config_file: ConfigOption = None,
):
    """
    Expand a single date into its monthly repetitions.
    """
    try:
        config = AppConfig.load_or_default(config_file)
        service = _build_service(config, JsonScheduleStore())
        dates = service.plan_dates(MonthlyRecurrence(start_date=date, repeat=repeat))
    except (SchedulingError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _print_dates(dates, "Monthly schedule dates")


@app.command()
def upcoming(
    doctor_id: Annotated[str, typer.Argument(help="Doctor whose schedules to look up")],
    day: Annotated[Optional[str], typer.Option("--date", help="Only consider this date (YYYY-MM-DD)")] = None,
    config_file: ConfigOption = None,
    data: DataOption = None,
    now: NowOption = None,
):
    """
    Show the slots of the nearest day the doctor can still be booked on.
    """
    if day is not None and parse_slot_date(day) is None:
        console.print(f"[bold red]Error:[/bold red] Could not parse --date '{day}', expected YYYY-MM-DD.")
        raise typer.Exit(1)

    try:
        config = AppConfig.load_or_default(config_file)
        store = _open_store(config, data)
        service = _build_service(config, store)
        current = resolve_now(now, config.timezone)
        slots = asyncio.run(service.upcoming(doctor_id, now=current, day=day))
    except (SchedulingError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print()
    if not slots:
        console.print(f"[yellow]⚠ No upcoming schedules for {doctor_id}.[/yellow]\n")
        return

    slot_day = parse_slot_date(slots[0].date)
    label = describe_day_offset(slots[0].date, slots[0].start_time, slots[0].end_time, now=current)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Time", style="bold yellow")
    table.add_column("Location")
    table.add_column("Address")
    table.add_column("Visit fee", justify="right")
    table.add_column("Serial fee", justify="right")

    for slot in slots:
        table.add_row(
            f"{format_time_of_day(slot.start_time)} - {format_time_of_day(slot.end_time)}",
            slot.location.name if slot.location else "-",
            slot.location.display_address() if slot.location else "-",
            "-" if slot.visit_fee is None else str(slot.visit_fee),
            "-" if slot.serial_fee is None else str(slot.serial_fee),
        )

    console.print(
        f"[bold green]✓ {len(slots)} slot(s) on {slot_day.isoformat()}[/bold green] ({label})"
    )
    console.print(table)
    console.print()


@app.command()
def add(
    doctor_id: Annotated[str, typer.Argument(help="Doctor the schedules belong to")],
    location: Annotated[str, typer.Option("--location", "-l", help="Location id")],
    start: Annotated[str, typer.Option("--start", help="Start time (H:mm)")],
    end: Annotated[str, typer.Option("--end", help="End time (H:mm)")],
    days: Annotated[Optional[List[str]], typer.Option("--day", help="Weekday name; repeat the option for several days")] = None,
    date: Annotated[Optional[str], typer.Option("--date", help="Single start date (ISO-8601)")] = None,
    repeat: Annotated[bool, typer.Option("--repeat", help="Repeat weekly for a year, or monthly for twelve months.")] = False,
    max_appointments: Annotated[Optional[int], typer.Option("--max-appointments", help="Appointments per slot")] = None,
    visit_fee: Annotated[Optional[float], typer.Option("--visit-fee")] = None,
    serial_fee: Annotated[Optional[float], typer.Option("--serial-fee")] = None,
    discount_fee: Annotated[Optional[float], typer.Option("--discount-fee")] = None,
    config_file: ConfigOption = None,
    data: DataOption = None,
    now: NowOption = None,
):
    """
    Create schedule rows from a weekly (--day) or monthly (--date) recurrence.

    Examples:

        doctorslots add dr-rahman -l loc-popular --start 16:00 --end 20:00 --day monday --day friday --repeat --data schedules.json

        doctorslots add dr-rahman -l loc-square --start 9:00 --end 12:00 --date 2030-02-01T00:00:00Z --data schedules.json
    """
    if bool(days) == bool(date):
        console.print("[red]Error: pass either --day or --date, not both.[/red]")
        raise typer.Exit(1)

    try:
        config = AppConfig.load_or_default(config_file)
        path = data or config.data_file
        if path is None:
            console.print("[red]Error: --data or a configured data_file is required to save schedules.[/red]")
            raise typer.Exit(1)

        store = JsonScheduleStore(path)
        service = _build_service(config, store)

        if days:
            recurrence = WeeklyRecurrence(days=tuple(days), repeat=repeat)
        else:
            recurrence = MonthlyRecurrence(start_date=date, repeat=repeat)

        created = asyncio.run(
            service.create_schedules(
                doctor_id=doctor_id,
                location_id=location,
                recurrence=recurrence,
                start_time=start,
                end_time=end,
                max_appointments=max_appointments,
                visit_fee=visit_fee,
                serial_fee=serial_fee,
                discount_fee=discount_fee,
                now=now,
            )
        )
        store.save()
    except (SchedulingError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"\n[bold green]✓ {len(created)} schedule(s) created for {doctor_id}[/bold green]")
    if created:
        first = parse_slot_date(created[0].date)
        last = parse_slot_date(created[-1].date)
        console.print(f"   {first.isoformat()} … {last.isoformat()}\n")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]doctorslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
