"""Command-line interface for cronhound.

Commands:
    cronhound next: List the next firing instants of an expression
    cronhound previous: List the previous firing instants of an expression
    cronhound validate: Check an expression
    cronhound presets: List the predefined schedules
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from cronhound.errors import CronParseError
from cronhound.parser import parse
from cronhound.presets import PRESETS
from cronhound.schedule import Schedule

app = typer.Typer(
    name="cronhound",
    help="Compute the firing instants of cron expressions",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


# =============================================================================
# Type Aliases
# =============================================================================

ExpressionArg = Annotated[
    str,
    typer.Argument(help="Cron expression (6 or 7 fields) or an @alias"),
]

FromOpt = Annotated[
    Optional[str],
    typer.Option(
        "--from",
        help="Reference instant in ISO 8601 (default: now, UTC if no offset)",
    ),
]

CountOpt = Annotated[
    int,
    typer.Option("--count", "-n", min=1, help="Number of instants to list"),
]


# =============================================================================
# Helper Functions
# =============================================================================


def _load_schedule(expression: str) -> Schedule:
    try:
        return parse(expression)
    except CronParseError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)


def _reference(value: str | None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    try:
        reference = datetime.fromisoformat(value)
    except ValueError:
        typer.echo(f"Error: Invalid ISO 8601 instant: {value}", err=True)
        raise typer.Exit(1)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=timezone.utc)
    return reference


def _print_instants(schedule: Schedule, instants: list[datetime], title: str) -> None:
    if not instants:
        console.print(
            f"[yellow]No firing instant for {schedule.expression!r} "
            f"within {schedule.limits.max_search_years} years[/yellow]"
        )
        return

    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Instant", style="cyan")
    table.add_column("Weekday")
    for index, instant in enumerate(instants, start=1):
        table.add_row(str(index), instant.isoformat(), instant.strftime("%A"))
    console.print(table)


# =============================================================================
# Commands
# =============================================================================


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Compute the firing instants of cron expressions."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@app.command(name="next")
def next_cmd(
    expression: ExpressionArg,
    start: FromOpt = None,
    count: CountOpt = 5,
) -> None:
    """List the next firing instants after a reference instant."""
    schedule = _load_schedule(expression)
    instants = schedule.next_n(count, _reference(start))
    _print_instants(schedule, instants, f"Next runs of {schedule.expression}")


@app.command(name="previous")
def previous_cmd(
    expression: ExpressionArg,
    start: FromOpt = None,
    count: CountOpt = 5,
) -> None:
    """List the previous firing instants before a reference instant."""
    schedule = _load_schedule(expression)
    instants = schedule.previous_n(count, _reference(start))
    _print_instants(schedule, instants, f"Previous runs of {schedule.expression}")


@app.command(name="validate")
def validate_cmd(expression: ExpressionArg) -> None:
    """Validate a cron expression."""
    schedule = _load_schedule(expression)
    typer.echo(f"Expression '{schedule.expression}' is valid")


@app.command(name="presets")
def presets_cmd() -> None:
    """List the predefined schedules."""
    table = Table(title="Presets")
    table.add_column("Name", style="cyan")
    table.add_column("Expression")
    for name, schedule in PRESETS.items():
        table.add_row(name, schedule.expression)
    console.print(table)


if __name__ == "__main__":
    app()
