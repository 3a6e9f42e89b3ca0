"""Typed settings loader for the umbrella check CLI."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError
from .redaction import sanitize_for_logging

DEFAULT_GEOCODE_BASE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
DEFAULT_FORECAST_BASE_URL = "https://api.pirateweather.net/forecast"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    gmaps_key: str = Field(alias="GMAPS_KEY", repr=False)
    pirate_weather_key: str = Field(alias="PIRATE_WEATHER_KEY", repr=False)

    geocode_base_url: str = Field(default=DEFAULT_GEOCODE_BASE_URL, alias="GEOCODE_BASE_URL")
    forecast_base_url: str = Field(default=DEFAULT_FORECAST_BASE_URL, alias="FORECAST_BASE_URL")
    http_timeout_seconds: float = Field(default=15.0, alias="HTTP_TIMEOUT_SECONDS")
    http_user_agent: str = Field(default="umbrella-check/0.1", alias="HTTP_USER_AGENT")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        alias="LOG_LEVEL",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def validate_settings(self) -> Settings:
        """Reject blank keys and unusable endpoints."""
        if not self.gmaps_key.strip():
            raise ValueError("GMAPS_KEY must not be empty.")
        if not self.pirate_weather_key.strip():
            raise ValueError("PIRATE_WEATHER_KEY must not be empty.")
        for name, url in (
            ("GEOCODE_BASE_URL", self.geocode_base_url),
            ("FORECAST_BASE_URL", self.forecast_base_url),
        ):
            if not url.startswith(("http://", "https://")):
                raise ValueError(f"{name} must be an http(s) URL.")
        if self.http_timeout_seconds <= 0:
            raise ValueError("HTTP_TIMEOUT_SECONDS must be > 0.")
        if not self.http_user_agent.strip():
            raise ValueError("HTTP_USER_AGENT must not be empty.")
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (API keys redacted)."""
        return sanitize_for_logging(self.model_dump())


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        # str(exc) echoes input values, which would include the API keys.
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigError(problems) from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
