"""Weather provider integrations."""

from .base import WeatherProvider
from .models import ForecastDocument, ForecastFetchResult, HourlyRecord
from .pirate import PirateWeatherProvider

__all__ = [
    "ForecastDocument",
    "ForecastFetchResult",
    "HourlyRecord",
    "PirateWeatherProvider",
    "WeatherProvider",
]
