"""Tests for the geocoding and forecast HTTP providers."""

from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from umbrella_check.exceptions import GeocodingError, WeatherProviderError
from umbrella_check.geocoding import GoogleGeocoder
from umbrella_check.models import Coordinates
from umbrella_check.weather.pirate import PirateWeatherProvider

GMAPS_KEY = "gmaps-secret-123"
PIRATE_KEY = "pirate-secret-456"


def _make_settings(**overrides: Any) -> Any:
    defaults = {
        "gmaps_key": GMAPS_KEY,
        "pirate_weather_key": PIRATE_KEY,
        "geocode_base_url": "https://maps.googleapis.com/maps/api/geocode/json",
        "forecast_base_url": "https://api.pirateweather.net/forecast",
        "http_timeout_seconds": 5.0,
        "http_user_agent": "umbrella-check-tests/0.1",
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


def _with_transport(provider: Any, handler: Any) -> Any:
    provider._client.close()
    provider._client = httpx.Client(transport=httpx.MockTransport(handler))
    return provider


def _geocoder(handler: Any) -> GoogleGeocoder:
    geocoder = GoogleGeocoder(settings=_make_settings(), logger=logging.getLogger("test_geo"))
    return _with_transport(geocoder, handler)


def _weather(handler: Any) -> PirateWeatherProvider:
    provider = PirateWeatherProvider(
        settings=_make_settings(), logger=logging.getLogger("test_weather")
    )
    return _with_transport(provider, handler)


def test_geocoder_sends_address_and_key_and_reads_first_result() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "status": "OK",
                "results": [
                    {"geometry": {"location": {"lat": 41.8781, "lng": -87.6298}}},
                    {"geometry": {"location": {"lat": 1.0, "lng": 2.0}}},
                ],
            },
        )

    with _geocoder(handler) as geocoder:
        coordinates = geocoder.lookup("Chicago, IL")

    assert coordinates == Coordinates(latitude=41.8781, longitude=-87.6298)
    assert len(seen) == 1
    assert seen[0].url.path == "/maps/api/geocode/json"
    assert seen[0].url.params["address"] == "Chicago, IL"
    assert seen[0].url.params["key"] == GMAPS_KEY


def test_geocoder_returns_none_for_empty_results() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []})

    with _geocoder(handler) as geocoder:
        assert geocoder.lookup("Nowhereville") is None


def test_geocoder_missing_results_key_is_not_found() -> None:
    with _geocoder(lambda request: httpx.Response(200, json={})) as geocoder:
        assert geocoder.lookup("Nowhereville") is None


def test_geocoder_request_denied_raises_instead_of_not_found() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "status": "REQUEST_DENIED",
                "error_message": "The provided API key is invalid.",
                "results": [],
            },
        )

    with _geocoder(handler) as geocoder:
        with pytest.raises(GeocodingError, match="REQUEST_DENIED"):
            geocoder.lookup("Chicago")


def test_geocoder_result_without_location_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"results": [{"geometry": {}}]})

    with _geocoder(handler) as geocoder:
        with pytest.raises(GeocodingError, match="geometry.location"):
            geocoder.lookup("Chicago")


def test_geocoder_http_error_raises_without_leaking_key() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text=f"upstream failed for key={GMAPS_KEY}")

    with _geocoder(handler) as geocoder:
        with pytest.raises(GeocodingError, match="status 500") as excinfo:
            geocoder.lookup("Chicago")
    assert GMAPS_KEY not in str(excinfo.value)


def test_geocoder_transport_error_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _geocoder(handler) as geocoder:
        with pytest.raises(GeocodingError, match="ConnectError"):
            geocoder.lookup("Chicago")


def test_weather_url_embeds_key_and_coordinates() -> None:
    seen: list[httpx.Request] = []
    payload = {
        "currently": {"temperature": 54.3},
        "minutely": {"summary": "Light rain starting in 20 min."},
        "hourly": {
            "data": [
                {"time": 1772366400, "precipProbability": 0.02},
                {"time": 1772370000},
                {"time": 1772373600.0, "precipProbability": 0.4, "temperature": 50},
            ]
        },
        "flags": {"units": "us"},
    }

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=payload)

    with _weather(handler) as provider:
        result = provider.fetch_forecast(Coordinates(latitude=41.8781, longitude=-87.6298))

    assert seen[0].url.path == f"/forecast/{PIRATE_KEY}/41.8781,-87.6298"
    assert result.raw_payload == payload
    document = result.document
    assert document.current_temperature == 54.3
    assert document.next_hour_summary == "Light rain starting in 20 min."
    assert [record.time for record in document.hourly] == [1772366400, 1772370000, 1772373600]
    assert [record.precip_probability for record in document.hourly] == [0.02, 0.0, 0.4]


def test_weather_missing_optional_sections_default() -> None:
    with _weather(lambda request: httpx.Response(200, json={})) as provider:
        result = provider.fetch_forecast(Coordinates(latitude=0.0, longitude=0.0))

    assert result.document.current_temperature is None
    assert result.document.next_hour_summary is None
    assert result.document.hourly == []


def test_weather_null_probability_defaults_to_zero() -> None:
    payload = {"hourly": {"data": [{"time": 1772366400, "precipProbability": None}]}}
    with _weather(lambda request: httpx.Response(200, json=payload)) as provider:
        result = provider.fetch_forecast(Coordinates(latitude=0.0, longitude=0.0))
    assert result.document.hourly[0].precip_probability == 0.0


def test_weather_keeps_hours_without_time_or_object_shape() -> None:
    hours: list[Any] = [{"time": 1772366400 + index * 3600} for index in range(13)]
    hours.append({"precipProbability": 0.0})
    hours[4] = "garbage"
    payload = {"hourly": {"data": hours}}
    with _weather(lambda request: httpx.Response(200, json=payload)) as provider:
        result = provider.fetch_forecast(Coordinates(latitude=0.0, longitude=0.0))

    hourly = result.document.hourly
    assert len(hourly) == 14
    assert hourly[4].time is None
    assert hourly[4].precip_probability == 0.0
    assert hourly[13].time is None
    assert result.raw_payload == payload


def test_weather_keeps_fractional_time_and_integer_temperature() -> None:
    payload = {
        "currently": {"temperature": 61},
        "hourly": {"data": [{"time": 1772366400.75, "precipProbability": 0.2}]},
    }
    with _weather(lambda request: httpx.Response(200, json=payload)) as provider:
        result = provider.fetch_forecast(Coordinates(latitude=0.0, longitude=0.0))

    assert result.document.hourly[0].time == 1772366400.75
    assert result.document.current_temperature == 61
    assert isinstance(result.document.current_temperature, int)


def test_weather_non_json_body_raises() -> None:
    with _weather(lambda request: httpx.Response(200, text="<html>oops</html>")) as provider:
        with pytest.raises(WeatherProviderError, match="non-JSON"):
            provider.fetch_forecast(Coordinates(latitude=0.0, longitude=0.0))


def test_weather_error_message_redacts_path_key() -> None:
    with _weather(lambda request: httpx.Response(403, text="Forbidden")) as provider:
        with pytest.raises(WeatherProviderError, match="status 403") as excinfo:
            provider.fetch_forecast(Coordinates(latitude=10.0, longitude=20.0))
    assert PIRATE_KEY not in str(excinfo.value)
    assert "/forecast/[REDACTED]/10.0,20.0" in str(excinfo.value)
