"""Shared pytest fixtures for ClimaCell client tests."""

from __future__ import annotations

import copy
import json
from typing import Any, Dict, Generator, List, Optional, Tuple, Union

import pytest

from climacell_weather.client import HTTPResponse
from climacell_weather.config import reset_settings


class MockHTTPClient:
    """In-memory transport returning queued responses in order.

    A queued exception is raised instead of returned.
    """

    def __init__(self, responses: Optional[List[Union[HTTPResponse, Exception]]] = None):
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def queue(self, response: Union[HTTPResponse, Exception]) -> None:
        self.responses.append(response)

    def queue_json(self, status_code: int, payload: Any) -> None:
        self.responses.append(json_response(status_code, payload))

    def get(
        self,
        url: str,
        headers: Dict[str, str],
        params: List[Tuple[str, str]],
    ) -> HTTPResponse:
        self.calls.append({"url": url, "headers": headers, "params": params})
        if not self.responses:
            return HTTPResponse(status_code=200, content=b"[]")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


def json_response(status_code: int, payload: Any) -> HTTPResponse:
    return HTTPResponse(
        status_code=status_code,
        content=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture
def mock_http() -> MockHTTPClient:
    return MockHTTPClient()


@pytest.fixture
def clean_env(monkeypatch, tmp_path) -> None:
    """Remove all ClimaCell env vars and run from a directory without a .env file."""
    for var in (
        "CLIMACELL_API_KEY",
        "CLIMACELL_API_URL",
        "CLIMACELL_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset settings cache between tests to ensure isolation."""
    reset_settings()
    yield
    reset_settings()


# A sample carrying every field group, as sent by the hourly endpoint
_EVERY_FIELD_SAMPLE: Dict[str, Any] = {
    "lat": 42.3826,
    "lon": -71.146,
    "observation_time": {"value": "2020-04-12T12:00:00.000Z"},
    "temp": {"value": 15.1, "units": "C"},
    "feels_like": {"value": 14.2, "units": "C"},
    "dewpoint": {"value": 3.5, "units": "C"},
    "humidity": {"value": 45.0, "units": "%"},
    "wind_speed": {"value": 4.2, "units": "m/s"},
    "wind_direction": {"value": 270.5, "units": "degrees"},
    "wind_gust": {"value": 8.8, "units": "m/s"},
    "baro_pressure": {"value": 1013.2, "units": "hPa"},
    "precipitation": {"value": 0.25, "units": "mm/hr"},
    "precipitation_type": {"value": "rain"},
    "precipitation_probability": {"value": 30, "units": "%"},
    "sunrise": {"value": "2020-04-12T10:13:22.789Z"},
    "sunset": {"value": "2020-04-12T23:26:02.100Z"},
    "visibility": {"value": 10, "units": "km"},
    "cloud_cover": {"value": 75, "units": "%"},
    "cloud_base": {"value": 1.2, "units": "km"},
    "cloud_ceiling": {"value": 3.4, "units": "km"},
    "surface_shortwave_radiation": {"value": 410.5, "units": "w/sqm"},
    "moon_phase": {"value": "waning_gibbous"},
    "weather_code": {"value": "rain_light"},
    "pm25": {"value": 7.5, "units": "µg/m3"},
    "pm10": {"value": 12.0, "units": "µg/m3"},
    "o3": {"value": 31.0, "units": "ppb"},
    "no2": {"value": 11.25, "units": "ppb"},
    "co": {"value": 0.3, "units": "ppm"},
    "so2": {"value": 1.5, "units": "ppb"},
    "epa_aqi": {"value": 42},
    "epa_primary_pollutant": {"value": "o3"},
    "epa_health_concern": {"value": "Good"},
    "china_aqi": {"value": 18},
    "china_primary_pollutant": {"value": "pm25"},
    "china_health_concern": {"value": "Excellent"},
    "road_risk": {"value": "low_risk"},
    "road_risk_score": {"value": "moderate"},
    "road_risk_confidence": {"value": 80},
    "road_risk_conditions": {"value": "wet"},
    "fire_index": {"value": 12.5},
}

# One day of the daily forecast; each min/max record carries one side
_DAILY_SAMPLE: Dict[str, Any] = {
    "lat": 91,
    "lon": -181,
    "observation_time": {"value": "2020-05-01"},
    "temp": [
        {"observation_time": "2020-05-01T10:00:00Z", "min": {"value": 11.23, "units": "C"}},
        {"observation_time": "2020-05-01T20:00:00Z", "max": {"value": 23.58, "units": "C"}},
    ],
    "feels_like": [
        {"observation_time": "2020-05-01T10:00:00Z", "min": {"value": 9.8, "units": "C"}},
        {"observation_time": "2020-05-01T20:00:00Z", "max": {"value": 24.1, "units": "C"}},
    ],
    "humidity": [
        {"observation_time": "2020-05-01T20:00:00Z", "min": {"value": 11, "units": "%"}},
        {"observation_time": "2020-05-01T09:00:00Z", "max": {"value": 82, "units": "%"}},
    ],
    "wind_speed": [
        {"observation_time": "2020-05-01T03:00:00Z", "min": {"value": 0.5, "units": "m/s"}},
        {"observation_time": "2020-05-01T15:00:00Z", "max": {"value": 6.7, "units": "m/s"}},
    ],
    "wind_direction": [
        {"observation_time": "2020-05-01T03:00:00Z", "min": {"value": 12, "units": "degrees"}},
        {"observation_time": "2020-05-01T15:00:00Z", "max": {"value": 340, "units": "degrees"}},
    ],
    "baro_pressure": [
        {"observation_time": "2020-05-01T16:00:00Z", "min": {"value": 1005.2, "units": "hPa"}},
        {"observation_time": "2020-05-01T04:00:00Z", "max": {"value": 1011.9, "units": "hPa"}},
    ],
    "precipitation": [
        {"observation_time": "2020-05-01T18:00:00Z", "max": {"value": 1.4, "units": "mm/hr"}},
    ],
    "visibility": [
        {"observation_time": "2020-05-01T06:00:00Z", "min": {"value": 8.1, "units": "km"}},
        {"observation_time": "2020-05-01T13:00:00Z", "max": {"value": 16, "units": "km"}},
    ],
    "precipitation_accumulation": {"value": 3.2, "units": "mm"},
    "precipitation_probability": {"value": 65, "units": "%"},
    "sunrise": {"value": "2020-05-01T09:38:12.123Z"},
    "sunset": {"value": "2020-05-01T23:51:44.456Z"},
    "moon_phase": {"value": "first_quarter"},
    "weather_code": {"value": "rain_light"},
}


@pytest.fixture
def every_field_sample() -> Dict[str, Any]:
    return copy.deepcopy(_EVERY_FIELD_SAMPLE)


@pytest.fixture
def daily_sample() -> Dict[str, Any]:
    return copy.deepcopy(_DAILY_SAMPLE)
