"""
Main CLI application using Typer.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import AppConfig
from ..adapters.json_event_source import JsonEventSource
from ..domain.availability_calculator import AvailabilityCalculator
from ..domain.dates import day_of_any
from ..domain.exceptions import EventSourceError
from ..services.availability_service import AvailabilityService

app = typer.Typer(
    name="weekslots",
    help="Show open appointment slots for the week ahead",
    add_completion=False
)

console = Console()
error_console = Console(stderr=True)

WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path], events_file: Optional[Path]) -> AppConfig:
    """Load configuration and apply command-line overrides."""
    try:
        config = AppConfig.load(config_file)
    except (FileNotFoundError, ValueError) as e:
        error_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if events_file is not None:
        config = config.model_copy(update={"events_file": events_file})

    _configure_logging(config.log_level)
    return config


def _build_service(config: AppConfig) -> AvailabilityService:
    source = JsonEventSource(path=config.events_file, timezone=config.timezone)
    calculator = AvailabilityCalculator(
        slot_minutes=config.slots.slot_minutes,
        closed_weekdays=config.recurring_closed_weekdays,
    )
    return AvailabilityService(
        event_source=source,
        calculator=calculator,
    )


def _parse_start_date(value: Optional[str], timezone: str):
    if value is None:
        return pendulum.today(timezone).date()

    try:
        return day_of_any(pendulum.from_format(value, "YYYY-MM-DD"))
    except ValueError as e:
        error_console.print(f"[red]Could not parse start date '{value}': {e}[/red]")
        raise typer.Exit(1)


@app.command()
def show(
    date: Annotated[Optional[str], typer.Option("--date", help="First day of the week (YYYY-MM-DD). Defaults to today.")] = None,
    events_file: Annotated[Optional[Path], typer.Option("--events", "-e", help="JSON file with event records.")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the result as JSON.")] = False,
):
    """
    Show open slots for the seven days starting at a date.

    Examples:

        weekslots show --events events.json

        weekslots show --date 2014-08-10 --events events.json --json
    """
    config = _load_config(config_file, events_file)
    start_date = _parse_start_date(date, config.timezone)

    service = _build_service(config)
    availabilities = asyncio.run(service.get_availabilities(start_date))

    if as_json:
        typer.echo(json.dumps([day.to_dict() for day in availabilities], indent=2))
        return

    table = Table(
        title=f"Open slots from {start_date.isoformat()}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Date", style="bold yellow")
    table.add_column("Day")
    table.add_column("Open", justify="right")
    table.add_column("Slots", style="dim")

    for day in availabilities:
        table.add_row(
            day.date.isoformat(),
            WEEKDAY_NAMES[day.date.weekday()],
            str(len(day.slots)),
            " ".join(day.slot_strings()) or "-",
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def events(
    events_file: Annotated[Optional[Path], typer.Option("--events", "-e", help="JSON file with event records.")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file.")] = None,
):
    """
    List the events of the events file.
    """
    config = _load_config(config_file, events_file)
    source = JsonEventSource(path=config.events_file, timezone=config.timezone)

    try:
        loaded = source.load_events()
    except EventSourceError as e:
        error_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not loaded:
        console.print("[yellow]No events found.[/yellow]")
        return

    table = Table(
        title="Events",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Kind", style="bold yellow")
    table.add_column("Starts")
    table.add_column("Ends")
    table.add_column("Weekly", justify="center")

    for event in sorted(loaded, key=lambda e: e.starts_at):
        table.add_row(
            event.kind.value,
            event.starts_at.format("YYYY-MM-DD HH:mm"),
            event.ends_at.format("YYYY-MM-DD HH:mm"),
            "yes" if event.weekly_recurring else "",
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]weekslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
