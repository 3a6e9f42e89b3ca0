"""Pirate Weather (api.pirateweather.net) forecast provider."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import Settings
from ..exceptions import WeatherProviderError
from ..models import Coordinates
from ..redaction import REDACTED, sanitize_text
from .base import WeatherProvider
from .models import ForecastDocument, ForecastFetchResult, HourlyRecord


class PirateWeatherProvider(WeatherProvider):
    """Fetches Dark Sky-compatible forecast documents from Pirate Weather."""

    def __init__(self, settings: Settings, logger: logging.Logger) -> None:
        self.settings = settings
        self.logger = logger
        self._client = httpx.Client(
            timeout=settings.http_timeout_seconds,
            headers={
                "Accept": "application/json",
                "User-Agent": settings.http_user_agent,
            },
        )

    def __enter__(self) -> PirateWeatherProvider:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def forecast_url(self, coordinates: Coordinates, *, redact: bool = False) -> str:
        """Build the forecast URL; the API key is a path segment."""
        base = self.settings.forecast_base_url.rstrip("/")
        key = REDACTED if redact else self.settings.pirate_weather_key
        return f"{base}/{key}/{coordinates.latitude},{coordinates.longitude}"

    def fetch_forecast(self, coordinates: Coordinates) -> ForecastFetchResult:
        """Fetch the forecast once; the raw payload is returned untouched."""
        payload = self._request_json(
            self.forecast_url(coordinates),
            display_url=self.forecast_url(coordinates, redact=True),
        )
        document = self._normalize_document(payload)
        self.logger.info(
            "Fetched forecast for %s,%s with %d hourly records",
            coordinates.latitude,
            coordinates.longitude,
            len(document.hourly),
        )
        return ForecastFetchResult(document=document, raw_payload=payload)

    def _request_json(self, url: str, display_url: str) -> dict[str, Any]:
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise WeatherProviderError(
                f"Forecast request failed with status {exc.response.status_code} "
                f"at {display_url}: {sanitize_text(exc.response.text[:300])}"
            ) from exc
        except httpx.HTTPError as exc:
            raise WeatherProviderError(
                f"Forecast request failed at {display_url}: {type(exc).__name__}"
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise WeatherProviderError(
                f"Forecast request returned non-JSON response at {display_url}."
            ) from exc

        if not isinstance(payload, dict):
            raise WeatherProviderError(
                f"Forecast request returned unexpected payload type "
                f"{type(payload).__name__} at {display_url}."
            )
        return payload

    def _normalize_document(self, payload: dict[str, Any]) -> ForecastDocument:
        currently = payload.get("currently")
        temperature = (
            self._as_number(currently.get("temperature")) if isinstance(currently, dict) else None
        )

        minutely = payload.get("minutely")
        summary = self._as_str(minutely.get("summary")) if isinstance(minutely, dict) else None

        hourly = payload.get("hourly")
        raw_hours = hourly.get("data") if isinstance(hourly, dict) else None
        if not isinstance(raw_hours, list):
            raw_hours = []

        return ForecastDocument(
            current_temperature=temperature,
            next_hour_summary=summary,
            hourly=[self._normalize_hour(item) for item in raw_hours],
        )

    def _normalize_hour(self, item: Any) -> HourlyRecord:
        # Unusable entries keep their slot so the hour window stays aligned.
        if not isinstance(item, dict):
            return HourlyRecord()
        probability = self._as_float(item.get("precipProbability"))
        return HourlyRecord(
            time=self._as_float(item.get("time")),
            precip_probability=probability if probability is not None else 0.0,
        )

    @staticmethod
    def _as_str(value: Any) -> str | None:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @staticmethod
    def _as_number(value: Any) -> int | float | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return value
        return None

    @staticmethod
    def _as_float(value: Any) -> float | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        return None
