"""Umbrella check CLI: geocode a location, fetch its forecast, report rain risk."""

from __future__ import annotations

import argparse
import sys

from rich.console import Console

from .config import load_settings
from .exceptions import ConfigError, GeocodingError, WeatherProviderError
from .geocoding import GoogleGeocoder
from .log_setup import setup_logger
from .precipitation import check_precipitation
from .report import print_conditions, print_footer, print_header
from .weather.pirate import PirateWeatherProvider

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_CONFIG = 2
EXIT_PROVIDER = 4
EXIT_INTERRUPTED = 130


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse umbrella check CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Check whether you will need an umbrella in the next 12 hours."
    )
    parser.add_argument(
        "-l",
        "--location",
        type=str,
        default=None,
        help="Location to check; prompts interactively when omitted.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override LOG_LEVEL for diagnostics written to stderr.",
    )
    return parser.parse_args(argv)


def _read_location(args: argparse.Namespace, console: Console) -> str:
    if args.location is not None:
        return args.location.strip()
    return console.input("Where are you? ").strip()


def main(argv: list[str] | None = None) -> int:
    """Run the geocode -> forecast -> precipitation pipeline once."""
    args = parse_args(argv)
    # Long locations and summaries must stay on one line.
    console = Console(soft_wrap=True)
    logger = setup_logger()

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        console.print(f"Configuration error: {exc}", markup=False, highlight=False)
        return EXIT_CONFIG

    logger.setLevel(args.log_level or settings.log_level)
    logger.debug("Loaded settings: %s", settings.safe_summary())

    print_header(console)
    try:
        location = _read_location(args, console)
    except (EOFError, KeyboardInterrupt):
        console.print()
        return EXIT_INTERRUPTED
    if not location:
        logger.error("No location given.")
        console.print("No location given. Please try again.", highlight=False)
        return EXIT_CONFIG

    console.print(f"Checking the weather at {location}...", markup=False, highlight=False)

    try:
        with GoogleGeocoder(settings=settings, logger=logger) as geocoder:
            coordinates = geocoder.lookup(location)
        if coordinates is None:
            console.print(
                f"Could not find the location: {location}. Please try again.",
                markup=False,
                highlight=False,
            )
            return EXIT_NOT_FOUND

        with PirateWeatherProvider(settings=settings, logger=logger) as provider:
            result = provider.fetch_forecast(coordinates)

        print_conditions(console, coordinates, result.document)
        console.print()
        umbrella = check_precipitation(result.document.hourly, console=console)
    except (GeocodingError, WeatherProviderError) as exc:
        logger.error("Weather lookup failure: %s", exc)
        return EXIT_PROVIDER

    print_footer(console)
    logger.info(
        "Report complete for %s: umbrella_advised=%s",
        location,
        umbrella,
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
