"""Typed models for forecast documents."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HourlyRecord(BaseModel):
    """One entry of the forecast's `hourly.data` list."""

    model_config = ConfigDict(frozen=True)

    time: float | None = Field(
        default=None,
        description="Start of the hour as Unix epoch seconds; None when not reported",
    )
    precip_probability: float = Field(
        default=0.0,
        description="Probability of precipitation in [0, 1]; 0 when not reported",
    )


class ForecastDocument(BaseModel):
    """Lenient view of the fields the report reads from a forecast payload."""

    model_config = ConfigDict(frozen=True)

    current_temperature: int | float | None = None
    next_hour_summary: str | None = None
    hourly: list[HourlyRecord] = Field(default_factory=list)


class ForecastFetchResult(BaseModel):
    """Raw + normalized result returned by weather providers."""

    document: ForecastDocument
    raw_payload: dict[str, Any]
