"""Response models for the ClimaCell weather API.

Field groups are shared between response shapes; a shape holds one
sub-model per group it includes, all decoded from the same flat JSON
object. Keys a shape does not recognize are ignored.
"""

from __future__ import annotations

import datetime as dt
from functools import lru_cache
from typing import Any, Iterator, List, Optional, Tuple, Type, TypeVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    TypeAdapter,
    field_validator,
    model_validator,
)

from .parsers import ZERO_TIME, is_zero_time, parse_time_or_date, parse_timestamp
from .values import FloatValue, IntValue, StringValue, TimeValue

R = TypeVar("R", bound=BaseModel)


def _absent(wrapper_cls: Any) -> Any:
    return Field(default_factory=wrapper_cls.absent)


# ─────────────────────────────────────────────────────────────────────────────
# Observation Time
# ─────────────────────────────────────────────────────────────────────────────

class DateValue(BaseModel):
    """Timestamp of a weather sample, sent as a timestamp or a bare date.

    ``{"value": "2020-04-12T12:00:00Z"}`` and ``{"value": "2020-05-01"}`` are
    both accepted; a date means midnight UTC. A null field or null value
    decodes to the zero instant.
    """

    model_config = ConfigDict(frozen=True)

    value: dt.datetime = ZERO_TIME

    @model_validator(mode="before")
    @classmethod
    def parse_observation_time(cls, data: Any) -> Any:
        if data is None:
            return {"value": ZERO_TIME}
        if isinstance(data, DateValue):
            return data
        if not isinstance(data, dict):
            raise ValueError("observation_time must be an object with a 'value' key")
        raw = data.get("value")
        if raw is None:
            return {"value": ZERO_TIME}
        if isinstance(raw, dt.datetime):
            return {"value": raw}
        if not isinstance(raw, str):
            raise ValueError(f"observation_time value must be a string, got {type(raw).__name__}")
        return {"value": parse_time_or_date(raw)}

    @property
    def is_zero(self) -> bool:
        return is_zero_time(self.value)


# ─────────────────────────────────────────────────────────────────────────────
# Field Groups
# ─────────────────────────────────────────────────────────────────────────────

class BaseFields(BaseModel):
    """Location and time of a weather sample.

    Attributes:
        lat: Latitude in decimal degrees.
        lon: Longitude in decimal degrees.
        location_id: Identifier of a stored location, when queried by ID.
        observation_time: When this sample is from.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    lat: Optional[float] = None
    lon: Optional[float] = None
    location_id: Optional[str] = None
    observation_time: DateValue


class WeatherFields(BaseModel):
    """Core weather readings.

    Attributes:
        temp: Air temperature.
        feels_like: Apparent temperature from wind chill and heat index.
        dewpoint: Dew point temperature.
        humidity: Percent relative humidity.
        wind_speed: Wind speed.
        wind_direction: Wind direction in degrees, 0 meaning due north.
        wind_gust: Wind gust speed.
        baro_pressure: Surface barometric pressure.
        precipitation: Precipitation intensity.
        precipitation_type: One of "none", "rain", "snow", "ice pellets",
            "freezing rain".
        precipitation_probability: Percent chance of precipitation (forecasts).
        sunrise: Sunrise time at the location.
        sunset: Sunset time at the location.
        visibility: Visibility distance.
        cloud_cover: Percent of the sky covered by cloud.
        cloud_base: Lowest cloud height.
        cloud_ceiling: Highest cloud height.
        surface_shortwave_radiation: Solar radiation reaching the surface.
        moon_phase: e.g. "new_moon", "first_quarter", "full".
        weather_code: Text summary, e.g. "rain_light", "mostly_clear".
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    temp: FloatValue = _absent(FloatValue)
    feels_like: FloatValue = _absent(FloatValue)
    dewpoint: FloatValue = _absent(FloatValue)
    humidity: FloatValue = _absent(FloatValue)
    wind_speed: FloatValue = _absent(FloatValue)
    wind_direction: FloatValue = _absent(FloatValue)
    wind_gust: FloatValue = _absent(FloatValue)
    baro_pressure: FloatValue = _absent(FloatValue)
    precipitation: FloatValue = _absent(FloatValue)
    precipitation_type: StringValue = _absent(StringValue)
    precipitation_probability: FloatValue = _absent(FloatValue)
    sunrise: TimeValue = _absent(TimeValue)
    sunset: TimeValue = _absent(TimeValue)
    visibility: FloatValue = _absent(FloatValue)
    cloud_cover: FloatValue = _absent(FloatValue)
    cloud_base: FloatValue = _absent(FloatValue)
    cloud_ceiling: FloatValue = _absent(FloatValue)
    surface_shortwave_radiation: FloatValue = _absent(FloatValue)
    moon_phase: StringValue = _absent(StringValue)
    weather_code: StringValue = _absent(StringValue)


class AirQualityFields(BaseModel):
    """Pollutant concentrations and air quality indices (EPA and China MEE)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    pm25: FloatValue = _absent(FloatValue)
    pm10: FloatValue = _absent(FloatValue)
    o3: FloatValue = _absent(FloatValue)
    no2: FloatValue = _absent(FloatValue)
    co: FloatValue = _absent(FloatValue)
    so2: FloatValue = _absent(FloatValue)
    epa_aqi: IntValue = _absent(IntValue)
    epa_primary_pollutant: StringValue = _absent(StringValue)
    epa_health_concern: StringValue = _absent(StringValue)
    china_aqi: IntValue = _absent(IntValue)
    china_primary_pollutant: StringValue = _absent(StringValue)
    china_health_concern: StringValue = _absent(StringValue)


class RoadRiskFields(BaseModel):
    """Road conditions.

    ``road_risk`` is US-only ("low_risk" .. "extreme_risk"); the score,
    confidence (1-100) and conditions are EU-only.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    road_risk: StringValue = _absent(StringValue)
    road_risk_score: StringValue = _absent(StringValue)
    road_risk_confidence: IntValue = _absent(IntValue)
    road_risk_conditions: StringValue = _absent(StringValue)


class FireIndexFields(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    fire_index: FloatValue = _absent(FloatValue)


# ─────────────────────────────────────────────────────────────────────────────
# Response Shapes
# ─────────────────────────────────────────────────────────────────────────────

class ComposedRecord(BaseModel):
    """A response record made of field groups decoded from one flat object."""

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def split_field_groups(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        groups = cls.model_fields
        # Built from group instances; payload keys such as "road_risk" and
        # "fire_index" share a group's name but hold a value wrapper
        if all(isinstance(data.get(name), info.annotation) for name, info in groups.items()):
            return data
        return {name: data for name in groups}

    @property
    def observation_time(self) -> dt.datetime:
        return self.base.observation_time.value  # type: ignore[attr-defined]


class WeatherSample(ComposedRecord):
    """Record with all field groups: base, weather, air quality, road risk, fire index."""

    base: BaseFields
    weather: WeatherFields
    air_quality: AirQualityFields
    road_risk: RoadRiskFields
    fire_index: FireIndexFields


class NowCastForecast(WeatherSample):
    """Minute-by-minute prediction from /weather/nowcast."""


class HourlyForecast(WeatherSample):
    """Hourly prediction from /weather/forecast/hourly."""


class RealTime(WeatherSample):
    """Present observation from /weather/realtime."""


class HistoricalClimaCell(WeatherSample):
    """Past ClimaCell data from /weather/historical/climacell."""


class HistoricalStation(ComposedRecord):
    """Past weather-station data from /weather/historical/station."""

    base: BaseFields
    weather: WeatherFields


# ─────────────────────────────────────────────────────────────────────────────
# Daily Forecast
# ─────────────────────────────────────────────────────────────────────────────

class MinMaxRecord(BaseModel):
    """One timestamped extremum for a day; usually only one side is sent."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    observation_time: dt.datetime = ZERO_TIME
    min: FloatValue = _absent(FloatValue)
    max: FloatValue = _absent(FloatValue)

    @field_validator("observation_time", mode="before")
    @classmethod
    def parse_observation_time(cls, v: Any) -> Any:
        if v is None:
            return ZERO_TIME
        if isinstance(v, str):
            return parse_timestamp(v)
        return v


class FloatAtTime(BaseModel):
    """A daily minimum or maximum paired with the time it occurs.

    ``observation_time`` is None when the series had no such side.
    """

    model_config = ConfigDict(frozen=True)

    observation_time: Optional[dt.datetime] = None
    value: FloatValue = _absent(FloatValue)

    @property
    def found(self) -> bool:
        return self.observation_time is not None

    def get_value(self) -> Tuple[float, bool]:
        return self.value.get_value()

    def get_units(self) -> Tuple[str, bool]:
        if self.value.is_absent:
            return "", False
        return self.value.units, True


class MinMaxSeries(RootModel[List[MinMaxRecord]]):
    """Per-metric list of single-sided min/max records for one forecast day.

    ``min()`` and ``max()`` each return the first record carrying that side,
    independently of one another.
    """

    model_config = ConfigDict(frozen=True)

    root: List[MinMaxRecord] = Field(default_factory=list)

    @field_validator("root", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def __iter__(self) -> Iterator[MinMaxRecord]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> MinMaxRecord:
        return self.root[index]

    def _first(self, side: str) -> FloatAtTime:
        for record in self.root:
            wrapper: FloatValue = getattr(record, side)
            if not wrapper.is_absent:
                return FloatAtTime(observation_time=record.observation_time, value=wrapper)
        return FloatAtTime()

    def min(self) -> FloatAtTime:
        return self._first("min")

    def max(self) -> FloatAtTime:
        return self._first("max")


class ForecastDay(BaseModel):
    """One day (6AM-6AM) of a daily forecast from /weather/forecast/daily.

    Attributes:
        lat: Latitude in decimal degrees.
        lon: Longitude in decimal degrees.
        observation_time: The forecast date.
        temp, feels_like, humidity, wind_speed, wind_direction,
        baro_pressure, precipitation, visibility: Daily min/max series.
        precipitation_accumulation: Total precipitation for the day.
        precipitation_probability: Percent chance of precipitation.
        sunrise: Sunrise time.
        sunset: Sunset time.
        moon_phase: Phase of the moon.
        weather_code: Text summary of the day's weather.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    lat: Optional[float] = None
    lon: Optional[float] = None
    observation_time: DateValue
    temp: MinMaxSeries = Field(default_factory=MinMaxSeries)
    feels_like: MinMaxSeries = Field(default_factory=MinMaxSeries)
    humidity: MinMaxSeries = Field(default_factory=MinMaxSeries)
    wind_speed: MinMaxSeries = Field(default_factory=MinMaxSeries)
    wind_direction: MinMaxSeries = Field(default_factory=MinMaxSeries)
    baro_pressure: MinMaxSeries = Field(default_factory=MinMaxSeries)
    precipitation: MinMaxSeries = Field(default_factory=MinMaxSeries)
    visibility: MinMaxSeries = Field(default_factory=MinMaxSeries)
    precipitation_accumulation: FloatValue = _absent(FloatValue)
    precipitation_probability: FloatValue = _absent(FloatValue)
    sunrise: TimeValue = _absent(TimeValue)
    sunset: TimeValue = _absent(TimeValue)
    moon_phase: StringValue = _absent(StringValue)
    weather_code: StringValue = _absent(StringValue)


# ─────────────────────────────────────────────────────────────────────────────
# Error Payload
# ─────────────────────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    """Body of a 400, 401, 403, 404 or 500 response.

    Attributes:
        status_code: HTTP status; absent from the body on 401 and 403.
        error_code: API error code; absent on 401 and 403.
        message: Description of the error.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status_code: int = Field(0, alias="statusCode")
    error_code: str = Field("", alias="errorCode")
    message: str = ""

    @field_validator("status_code", mode="before")
    @classmethod
    def null_status(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("error_code", "message", mode="before")
    @classmethod
    def null_text(cls, v: Any) -> Any:
        return "" if v is None else v


# ─────────────────────────────────────────────────────────────────────────────
# Decoding
# ─────────────────────────────────────────────────────────────────────────────

@lru_cache(maxsize=None)
def _list_adapter(shape: Type[BaseModel]) -> TypeAdapter:
    return TypeAdapter(List[shape])  # type: ignore[valid-type]


def decode_records(shape: Type[R], payload: Union[bytes, str, List[Any]]) -> List[R]:
    """Decode a JSON array of records; one bad element fails the batch.

    Raises:
        pydantic.ValidationError: If the payload does not match the shape.
    """
    adapter = _list_adapter(shape)
    if isinstance(payload, (bytes, str)):
        return adapter.validate_json(payload)
    return adapter.validate_python(payload)


def decode_record(shape: Type[R], payload: Union[bytes, str, dict]) -> R:
    """Decode a single JSON object into ``shape``."""
    if isinstance(payload, (bytes, str)):
        return shape.model_validate_json(payload)
    return shape.model_validate(payload)


__all__ = [
    "DateValue",
    "BaseFields",
    "WeatherFields",
    "AirQualityFields",
    "RoadRiskFields",
    "FireIndexFields",
    "ComposedRecord",
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
]
