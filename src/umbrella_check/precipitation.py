"""Precipitation check over the next twelve forecast hours."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict
from rich.console import Console

from .exceptions import WeatherProviderError
from .weather.models import HourlyRecord

PRECIP_PROB_THRESHOLD = 0.10
FORECAST_WINDOW_HOURS = 12

UMBRELLA_ADVISED = "You might want to take an umbrella!"
UMBRELLA_NOT_NEEDED = "You probably won't need an umbrella."


class PrecipitationWarning(BaseModel):
    """A forecast hour whose precipitation probability exceeds the threshold."""

    model_config = ConfigDict(frozen=True)

    hours_from_now: int
    probability_percent: int

    def describe(self) -> str:
        return (
            f"In {self.hours_from_now} hours, there is a "
            f"{self.probability_percent}% chance of precipitation."
        )


def round_half_away(value: float) -> int:
    """Round to the nearest integer with halves going away from zero.

    Python's round() rounds halves to even; 2.5 hours must read as 3.
    """
    rounded = math.floor(abs(value) + 0.5)
    return int(rounded if value >= 0 else -rounded)


def precipitation_window(hourly: Sequence[HourlyRecord]) -> Sequence[HourlyRecord]:
    """Hours 1..12; index 0 is the current, partially elapsed hour."""
    return hourly[1 : FORECAST_WINDOW_HOURS + 1]


def find_precipitation_warnings(
    hourly: Sequence[HourlyRecord],
    now: datetime,
    threshold: float = PRECIP_PROB_THRESHOLD,
) -> list[PrecipitationWarning]:
    """Return one warning per window hour above the threshold, in input order.

    Only hours that trigger a warning need a `time`; one missing there makes
    the forecast unusable and raises WeatherProviderError.
    """
    now_ts = now.timestamp()
    warnings: list[PrecipitationWarning] = []
    for offset, record in enumerate(precipitation_window(hourly), start=1):
        if record.precip_probability <= threshold:
            continue
        if record.time is None:
            raise WeatherProviderError(
                f"Forecast hourly.data[{offset}] exceeds the precipitation threshold "
                "but has no numeric 'time'."
            )
        warnings.append(
            PrecipitationWarning(
                hours_from_now=round_half_away((record.time - now_ts) / 3600),
                probability_percent=round_half_away(record.precip_probability * 100),
            )
        )
    return warnings


def check_precipitation(
    hourly: Sequence[HourlyRecord],
    *,
    console: Console | None = None,
    now: datetime | None = None,
) -> bool:
    """Print per-hour warnings and a single umbrella advice line.

    Returns True when at least one hour in the window triggered a warning.
    """
    console = console or Console(soft_wrap=True)
    warnings = find_precipitation_warnings(hourly, now=now or datetime.now(UTC))
    for warning in warnings:
        console.print(warning.describe(), markup=False, highlight=False)

    console.print(UMBRELLA_ADVISED if warnings else UMBRELLA_NOT_NEEDED, highlight=False)
    return bool(warnings)
