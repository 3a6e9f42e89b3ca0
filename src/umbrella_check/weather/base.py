"""Provider-agnostic weather interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import Coordinates
from .models import ForecastFetchResult


class WeatherProvider(ABC):
    """Base contract for forecast providers used by the CLI."""

    @abstractmethod
    def fetch_forecast(self, coordinates: Coordinates) -> ForecastFetchResult:
        """Fetch the forecast document for the given coordinates."""

    @abstractmethod
    def close(self) -> None:
        """Release provider resources."""
