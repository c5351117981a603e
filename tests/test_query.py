from __future__ import annotations

import datetime as dt

import pytest

from climacell_weather.parsers import ZERO_TIME
from climacell_weather.query import ForecastArgs, LatLon, LocationID, encode_location

UTC = dt.timezone.utc


class TestEncodeLocation:
    def test_lat_lon(self):
        assert encode_location(LatLon(lat=11.3, lon=52.4)) == [("lat", "11.3"), ("lon", "52.4")]

    def test_location_id(self):
        assert encode_location(LocationID(location_id="5e8f1a")) == [("location_id", "5e8f1a")]

    def test_out_of_range_values_sent_as_is(self):
        assert encode_location(LatLon(lat=91, lon=-181)) == [("lat", "91"), ("lon", "-181")]

    @pytest.mark.parametrize("location", ["Boston", (42.3, -71.1), None])
    def test_unsupported_type(self, location):
        with pytest.raises(TypeError, match="Unsupported location type"):
            encode_location(location)


class TestForecastArgs:
    def test_location_only(self):
        args = ForecastArgs(location=LatLon(lat=11.3, lon=52.4))

        assert args.query_params() == [("lat", "11.3"), ("lon", "52.4")]
        assert args.query_string() == "lat=11.3&lon=52.4"

    def test_all_arguments_in_order(self):
        args = ForecastArgs(
            location=LatLon(lat=42.3826, lon=-71.146),
            start=dt.datetime(2020, 5, 1, tzinfo=UTC),
            end=dt.datetime(2020, 5, 1, 6, tzinfo=UTC),
            timestep=5,
            unit_system="us",
            fields=["temp", "humidity"],
        )

        assert args.query_params() == [
            ("lat", "42.3826"),
            ("lon", "-71.146"),
            ("start_time", "2020-05-01T00:00:00Z"),
            ("end_time", "2020-05-01T06:00:00Z"),
            ("timestep", "5"),
            ("unit_system", "us"),
            ("fields", "temp,humidity"),
        ]
        assert "fields=temp%2Chumidity" in args.query_string()
        assert "start_time=2020-05-01T00%3A00%3A00Z" in args.query_string()

    def test_empty_arguments_omitted(self):
        args = ForecastArgs(
            location=LocationID(location_id="abc"),
            start=ZERO_TIME,
            timestep=0,
            unit_system="",
            fields=[],
        )
        assert args.query_params() == [("location_id", "abc")]

    def test_negative_timestep_omitted(self):
        args = ForecastArgs(location=LatLon(lat=1.5, lon=2.5), timestep=-5)
        assert [name for name, _ in args.query_params()] == ["lat", "lon"]

    def test_no_location(self):
        assert ForecastArgs().query_params() == []
        assert ForecastArgs().query_string() == ""

    def test_end_without_start(self):
        args = ForecastArgs(end=dt.datetime(2020, 5, 2, tzinfo=UTC))
        assert args.query_params() == [("end_time", "2020-05-02T00:00:00Z")]

    def test_location_from_mapping(self):
        args = ForecastArgs(location={"lat": 1.5, "lon": 2.5})

        assert isinstance(args.location, LatLon)
        assert args.query_params() == [("lat", "1.5"), ("lon", "2.5")]

    def test_location_id_from_mapping(self):
        args = ForecastArgs(location={"location_id": "abc"})
        assert isinstance(args.location, LocationID)
