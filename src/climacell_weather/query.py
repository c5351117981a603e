"""Request arguments and query-parameter encoding for weather endpoints."""

from __future__ import annotations

import datetime as dt
from typing import List, Optional, Tuple, Union
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

from .parsers import format_coordinate, format_timestamp, is_zero_time

QueryParams = List[Tuple[str, str]]


class LatLon(BaseModel):
    """Latitude/longitude pair. Values are sent as-is, without range checks.

    Attributes:
        lat: Latitude in decimal degrees.
        lon: Longitude in decimal degrees.
    """

    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float


class LocationID(BaseModel):
    """Identifier of a location stored with the API."""

    model_config = ConfigDict(frozen=True)

    location_id: str


Location = Union[LatLon, LocationID]


def encode_location(location: Location) -> QueryParams:
    """Convert a location to its query parameters.

    Raises:
        TypeError: If ``location`` is not a LatLon or LocationID.
    """
    if isinstance(location, LatLon):
        return [("lat", format_coordinate(location.lat)), ("lon", format_coordinate(location.lon))]
    if isinstance(location, LocationID):
        return [("location_id", location.location_id)]
    raise TypeError(f"Unsupported location type: {type(location).__name__}")


class ForecastArgs(BaseModel):
    """Arguments shared by every weather endpoint.

    Unset arguments are left out of the query entirely; the API treats an
    empty parameter differently from a missing one.

    Attributes:
        location: Where to get weather for. Required by the API, which
            answers 400 without it; not checked here.
        start: Start of the time range (``start_time``).
        end: End of the time range (``end_time``).
        timestep: Minutes between samples; only the nowcast and historical
            ClimaCell endpoints accept it.
        unit_system: "si" or "us"; the API defaults to SI.
        fields: Field names to request, e.g. ["temp", "humidity"].
    """

    model_config = ConfigDict(frozen=True)

    location: Optional[Location] = None
    start: Optional[dt.datetime] = None
    end: Optional[dt.datetime] = None
    timestep: int = 0
    unit_system: str = ""
    fields: List[str] = Field(default_factory=list)

    def query_params(self) -> QueryParams:
        """Build the ordered ``(name, value)`` query parameters."""
        params: QueryParams = []
        if self.location is not None:
            params.extend(encode_location(self.location))
        if not is_zero_time(self.start):
            params.append(("start_time", format_timestamp(self.start)))  # type: ignore[arg-type]
        if not is_zero_time(self.end):
            params.append(("end_time", format_timestamp(self.end)))  # type: ignore[arg-type]
        if self.timestep > 0:
            params.append(("timestep", str(self.timestep)))
        if self.unit_system:
            params.append(("unit_system", self.unit_system))
        if self.fields:
            params.append(("fields", ",".join(self.fields)))
        return params

    def query_string(self) -> str:
        return urlencode(self.query_params())


__all__ = [
    "QueryParams",
    "LatLon",
    "LocationID",
    "Location",
    "encode_location",
    "ForecastArgs",
]
