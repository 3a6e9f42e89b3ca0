"""Fixed-width console output around the precipitation report."""

from __future__ import annotations

from rich.console import Console

from .models import Coordinates
from .weather.models import ForecastDocument

LINE_WIDTH = 40
TITLE = "Will you need an umbrella today?"


def print_rule(console: Console) -> None:
    console.print("=" * LINE_WIDTH, highlight=False)


def print_header(console: Console) -> None:
    print_rule(console)
    console.print(TITLE.center(LINE_WIDTH), highlight=False)
    print_rule(console)
    console.print()


def print_footer(console: Console) -> None:
    console.print()
    print_rule(console)


def print_conditions(
    console: Console, coordinates: Coordinates, document: ForecastDocument
) -> None:
    """Print coordinates, current temperature and the optional next-hour summary."""
    console.print(
        f"Your coordinates are {coordinates.latitude}, {coordinates.longitude}.",
        highlight=False,
    )
    temperature = (
        f"{document.current_temperature}°F"
        if document.current_temperature is not None
        else "unknown"
    )
    console.print(f"It is currently {temperature}.", highlight=False)
    if document.next_hour_summary:
        console.print(f"Next hour: {document.next_hour_summary}", markup=False, highlight=False)
