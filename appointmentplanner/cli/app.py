"""
Main CLI application using Typer.
"""

import logging
from datetime import time
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..config import PlannerConfig
from ..domain.exceptions import AppointmentPlannerError
from ..domain.local_day import LocalDay
from ..domain.priority import Priority
from ..domain.time_slot import Slot

app = typer.Typer(
    name="appointmentplanner",
    help="Inspect appointment time slots",
    add_completion=False
)

console = Console()

logger = logging.getLogger(__name__)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]
DateOption = Annotated[
    Optional[str],
    typer.Option("--date", help="Day of the slot (YYYY-MM-DD). Defaults to today.")
]


def _parse_time(value: str) -> time:
    """Parse a wall-clock time given as HH:mm."""
    try:
        return pendulum.from_format(value, "HH:mm").time()
    except ValueError as e:
        raise ValueError(f"Invalid time '{value}', expected HH:mm") from e


def _resolve_day(config: PlannerConfig, day_option: Optional[str]) -> LocalDay:
    """Resolve the --date option to a local day in the configured timezone."""
    if day_option:
        try:
            day = pendulum.from_format(day_option, "YYYY-MM-DD").date()
        except ValueError as e:
            raise ValueError(f"Invalid date '{day_option}', expected YYYY-MM-DD") from e
    else:
        day = pendulum.today(config.timezone).date()
    return config.local_day(day)


def _build_slot(local_day: LocalDay, start: str, end: str) -> Slot:
    return local_day.slot(_parse_time(start), _parse_time(end))


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Inspect appointment time slots.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


@app.command()
def show(
    start: Annotated[str, typer.Argument(help="Start time (HH:mm), inclusive")],
    end: Annotated[str, typer.Argument(help="End time (HH:mm), exclusive")],
    day: DateOption = None,
    config_file: ConfigOption = None,
):
    """
    Show a slot with its instants, local times and duration.

    Examples:

        appointmentplanner show 09:00 10:30

        appointmentplanner show 09:00 09:00 --date 2024-11-25
    """
    try:
        config = PlannerConfig.load(config_file)
        local_day = _resolve_day(config, day)
        slot = _build_slot(local_day, start, end)
    except (AppointmentPlannerError, ValueError, FileNotFoundError) as e:
        _fail(e)

    logger.debug("Showing slot %s on %s", slot, local_day)

    table = Table(
        title=f"Slot on {local_day}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Field", style="bold yellow")
    table.add_column("Value")

    table.add_row("Start instant", slot.start.to_iso8601_string())
    table.add_row("End instant", slot.end.to_iso8601_string())
    table.add_row("Start", f"{slot.start_date(local_day)} {slot.start_time(local_day).strftime('%H:%M')}")
    table.add_row("End", f"{slot.end_date(local_day)} {slot.end_time(local_day).strftime('%H:%M')}")
    table.add_row("Duration", f"{slot.duration_minutes()} min")
    table.add_row("Sentinel", "yes" if slot.is_sentinel() else "no")

    console.print()
    console.print(table)
    console.print()


@app.command()
def fits(
    start: Annotated[str, typer.Argument(help="Start time (HH:mm), inclusive")],
    end: Annotated[str, typer.Argument(help="End time (HH:mm), exclusive")],
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Appointment duration in minutes")] = None,
    inside_start: Annotated[Optional[str], typer.Option("--inside-start", help="Start (HH:mm) of a slot to test for containment")] = None,
    inside_end: Annotated[Optional[str], typer.Option("--inside-end", help="End (HH:mm) of a slot to test for containment")] = None,
    day: DateOption = None,
    config_file: ConfigOption = None,
):
    """
    Check whether a duration, or another slot, fits into a slot.

    Examples:

        appointmentplanner fits 09:00 10:30 --duration 60

        appointmentplanner fits 10:00 12:00 --inside-start 10:30 --inside-end 11:30
    """
    if (inside_start is None) != (inside_end is None):
        _fail(ValueError("--inside-start and --inside-end must be given together"))

    try:
        config = PlannerConfig.load(config_file)
        local_day = _resolve_day(config, day)
        slot = _build_slot(local_day, start, end)
        other = _build_slot(local_day, inside_start, inside_end) if inside_start else None
    except (AppointmentPlannerError, ValueError, FileNotFoundError) as e:
        _fail(e)

    minutes = duration if duration is not None else config.defaults.duration_minutes
    if minutes < 0:
        _fail(ValueError("--duration must not be negative"))

    if slot.fits_duration(pendulum.duration(minutes=minutes)):
        console.print(f"[green]✓ {minutes} min fit into {start} - {end}[/green]")
    else:
        console.print(
            f"[yellow]✗ {minutes} min do not fit into {start} - {end} "
            f"({slot.duration_minutes()} min)[/yellow]"
        )

    if other is not None:
        if slot.contains_slot(other):
            console.print(f"[green]✓ {inside_start} - {inside_end} lies within {start} - {end}[/green]")
        else:
            console.print(f"[yellow]✗ {inside_start} - {inside_end} does not lie within {start} - {end}[/yellow]")


@app.command()
def priorities(
    config_file: ConfigOption = None,
):
    """
    List priority levels from lowest to highest.
    """
    try:
        config = PlannerConfig.load(config_file)
    except (ValueError, FileNotFoundError) as e:
        _fail(e)

    table = Table(title="Priorities", show_header=True, header_style="bold cyan")
    table.add_column("Level", style="bold yellow")
    table.add_column("Default", style="dim")

    for priority in sorted(Priority):
        table.add_row(priority.name, "✓" if priority is config.defaults.priority else "")

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]appointmentplanner[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
