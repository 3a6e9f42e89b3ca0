"""Google Maps geocoding: free-text location to coordinates."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .config import Settings
from .exceptions import GeocodingError
from .models import Coordinates
from .redaction import sanitize_text

# Statuses Google reports alongside an empty `results` list that are not "not found".
_FAILURE_STATUSES = frozenset(
    {"REQUEST_DENIED", "INVALID_REQUEST", "OVER_QUERY_LIMIT", "UNKNOWN_ERROR"}
)


class GoogleGeocoder:
    """Resolves a location string with the Google Geocoding API."""

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

    def __enter__(self) -> GoogleGeocoder:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def lookup(self, location: str) -> Coordinates | None:
        """Return the first result's coordinates, or None when nothing matched.

        Transport failures and malformed payloads raise GeocodingError; the
        caller decides what an unresolved location means for the run.
        """
        payload = self._request_json(
            {"address": location, "key": self.settings.gmaps_key},
        )

        status = payload.get("status")
        results = payload.get("results", [])
        if not isinstance(results, list):
            raise GeocodingError("Geocoding payload 'results' is not a list.")

        if not results:
            if status in _FAILURE_STATUSES:
                detail = payload.get("error_message") or "no detail provided"
                raise GeocodingError(
                    f"Geocoding request rejected with status {status}: "
                    f"{sanitize_text(str(detail))}"
                )
            self.logger.info("Geocoding returned no results (status=%s)", status)
            return None

        return self._extract_coordinates(results[0])

    def _request_json(self, params: dict[str, str]) -> dict[str, Any]:
        url = self.settings.geocode_base_url
        try:
            response = self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise GeocodingError(
                f"Geocoding request failed with status {exc.response.status_code} "
                f"at {url}: {sanitize_text(exc.response.text[:300])}"
            ) from exc
        except httpx.HTTPError as exc:
            raise GeocodingError(
                f"Geocoding request failed at {url}: {type(exc).__name__}"
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise GeocodingError(f"Geocoding request returned non-JSON response at {url}.") from exc

        if not isinstance(payload, dict):
            raise GeocodingError(
                f"Geocoding request returned unexpected payload type "
                f"{type(payload).__name__} at {url}."
            )
        return payload

    @staticmethod
    def _extract_coordinates(result: Any) -> Coordinates:
        geometry = result.get("geometry") if isinstance(result, dict) else None
        location = geometry.get("location") if isinstance(geometry, dict) else None
        if not isinstance(location, dict):
            raise GeocodingError("Geocoding result missing 'geometry.location' object.")

        lat = location.get("lat")
        lng = location.get("lng")
        if not all(
            isinstance(value, (int, float)) and not isinstance(value, bool) for value in (lat, lng)
        ):
            raise GeocodingError("Geocoding result 'geometry.location' missing numeric lat/lng.")
        try:
            return Coordinates(latitude=float(lat), longitude=float(lng))
        except ValidationError as exc:
            raise GeocodingError(
                f"Geocoding result coordinates out of range: {lat}, {lng}."
            ) from exc
