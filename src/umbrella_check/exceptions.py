"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class GeocodingError(Exception):
    """Raised when geocoding requests fail or return malformed data."""


class WeatherProviderError(Exception):
    """Raised when forecast requests or normalization fail."""
