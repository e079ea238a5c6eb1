# ABOUTME: Shared test fixtures for the weather aggregator test suite.
# ABOUTME: Provides canned upstream payloads and a mock HTTP client factory.

from unittest.mock import AsyncMock

import httpx
import pytest

from weatherfusion.config import Settings
from weatherfusion.deps import WeatherDeps

PARIS_SEARCH = [
    {
        "id": 803267,
        "name": "Paris",
        "region": "Ile-de-France",
        "country": "France",
        "lat": 48.87,
        "lon": 2.33,
        "url": "paris-ile-de-france-france",
    }
]

PARIS_CURRENT = {
    "location": {
        "name": "Paris",
        "region": "Ile-de-France",
        "country": "France",
        "lat": 48.87,
        "lon": 2.33,
        "tz_id": "Europe/Paris",
        "localtime_epoch": 1714331246,
        "localtime": "2024-04-28 21:07",
    },
    "current": {
        "last_updated": "2024-04-28 21:00",
        "temp_c": 11.0,
        "temp_f": 51.8,
        "is_day": 0,
        "condition": {"text": "Light rain", "icon": "//cdn.weatherapi.com/weather/64x64/night/296.png", "code": 1183},
        "wind_mph": 5.6,
        "wind_kph": 9.0,
        "wind_degree": 260,
        "wind_dir": "W",
        "precip_mm": 0.0,
        "precip_in": 0.0,
        "humidity": 82,
        "feelslike_c": 8.8,
        "feelslike_f": 47.8,
    },
}

PARIS_SUN = {
    "results": {
        "sunrise": "6:46:12 AM",
        "sunset": "9:01:44 PM",
        "solar_noon": "1:53:58 PM",
        "day_length": "14:15:32",
    },
    "status": "OK",
    "tzid": "Europe/Paris",
}

NOT_FOUND = {"error": {"code": 1006, "message": "No matching location found."}}


def make_response(json_data, status_code: int = 200) -> httpx.Response:
    """Build a real httpx.Response carrying the given JSON body."""
    return httpx.Response(status_code=status_code, json=json_data, request=httpx.Request("GET", "https://test"))


def mock_client(*json_bodies) -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient that returns the given JSON bodies in call order."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    mock.get.side_effect = [make_response(body) for body in json_bodies]
    return mock


@pytest.fixture
def settings() -> Settings:
    return Settings(
        weatherapi_base_url="https://api.weatherapi.test/v1/",
        weatherapi_key="test-key",
        sunapi_base_url="https://sun.test",
    )


@pytest.fixture
def make_deps(settings):
    """Factory for WeatherDeps around a mock client answering with the given bodies."""

    def _make(*json_bodies) -> WeatherDeps:
        return WeatherDeps(http_client=mock_client(*json_bodies), settings=settings)

    return _make
