"""ClimaCell weather API client package.

This package provides a typed interface to the ClimaCell v3 weather API
with support for:
- Optional-value wrappers distinguishing absent, null and populated fields
- Pydantic models for every response shape, built from shared field groups
- Dependency injection for the HTTP transport (testability)

Example usage:
    >>> from climacell_weather import ClimaCellClient, ForecastArgs, LatLon
    >>> with ClimaCellClient(api_key="your-key") as client:
    ...     samples = client.hourly_forecast(
    ...         ForecastArgs(location=LatLon(lat=42.3826, lon=-71.146), fields=["temp"])
    ...     )
    >>> temp, ok = samples[0].weather.temp.get_value()
"""

from __future__ import annotations

# Re-export main client class and transport
from .client import (
    ClimaCellClient,
    HTTPClient,
    HTTPResponse,
    RequestsHTTPClient,
    fetch_weather_dataframe,
)

# Re-export errors
from .exceptions import (
    ClimaCellAPIError,
    ClimaCellDecodeError,
    ClimaCellError,
    ClimaCellTransportError,
    ClimaCellUnexpectedStatusError,
)

# Re-export models
from .models import (
    AirQualityFields,
    BaseFields,
    DateValue,
    ErrorResponse,
    FireIndexFields,
    FloatAtTime,
    ForecastDay,
    HistoricalClimaCell,
    HistoricalStation,
    HourlyForecast,
    MinMaxRecord,
    MinMaxSeries,
    NowCastForecast,
    RealTime,
    RoadRiskFields,
    WeatherFields,
    WeatherSample,
    decode_record,
    decode_records,
)

# Re-export request arguments
from .query import ForecastArgs, LatLon, Location, LocationID, encode_location

# Re-export value wrappers
from .values import FloatValue, IntValue, Presence, StringValue, TimeValue

from .frames import records_to_dataframe

__all__ = [
    # Client
    "ClimaCellClient",
    "HTTPClient",
    "HTTPResponse",
    "RequestsHTTPClient",
    "fetch_weather_dataframe",
    # Errors
    "ClimaCellError",
    "ClimaCellTransportError",
    "ClimaCellDecodeError",
    "ClimaCellAPIError",
    "ClimaCellUnexpectedStatusError",
    # Models
    "DateValue",
    "BaseFields",
    "WeatherFields",
    "AirQualityFields",
    "RoadRiskFields",
    "FireIndexFields",
    "WeatherSample",
    "NowCastForecast",
    "HourlyForecast",
    "RealTime",
    "HistoricalClimaCell",
    "HistoricalStation",
    "MinMaxRecord",
    "FloatAtTime",
    "MinMaxSeries",
    "ForecastDay",
    "ErrorResponse",
    "decode_records",
    "decode_record",
    # Request arguments
    "ForecastArgs",
    "LatLon",
    "LocationID",
    "Location",
    "encode_location",
    # Values
    "Presence",
    "StringValue",
    "FloatValue",
    "IntValue",
    "TimeValue",
    # Frames
    "records_to_dataframe",
]
