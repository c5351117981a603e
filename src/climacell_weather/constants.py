from __future__ import annotations

# API root, relative endpoint paths are resolved against it
DEFAULT_BASE_URL = "https://api.climacell.co/v3/"

# Weather endpoints
NOWCAST_ENDPOINT = "weather/nowcast"
HOURLY_FORECAST_ENDPOINT = "weather/forecast/hourly"
DAILY_FORECAST_ENDPOINT = "weather/forecast/daily"
HISTORICAL_STATION_ENDPOINT = "weather/historical/station"
HISTORICAL_CLIMACELL_ENDPOINT = "weather/historical/climacell"
REALTIME_ENDPOINT = "weather/realtime"

WEATHER_ENDPOINTS = {
    "nowcast": NOWCAST_ENDPOINT,
    "hourly": HOURLY_FORECAST_ENDPOINT,
    "daily": DAILY_FORECAST_ENDPOINT,
    "historical-station": HISTORICAL_STATION_ENDPOINT,
    "historical-climacell": HISTORICAL_CLIMACELL_ENDPOINT,
    "realtime": REALTIME_ENDPOINT,
}

# Transport timeout used by the default HTTP client
DEFAULT_TIMEOUT_SECONDS = 60

# HTTP status codes
SUCCESS_STATUS_CODE = 200
ERROR_STATUS_CODES = frozenset({400, 401, 403, 404, 500})
# The API omits statusCode from the error body on these
AUTH_ERROR_STATUS_CODES = frozenset({401, 403})

__all__ = [
    "DEFAULT_BASE_URL",
    "NOWCAST_ENDPOINT",
    "HOURLY_FORECAST_ENDPOINT",
    "DAILY_FORECAST_ENDPOINT",
    "HISTORICAL_STATION_ENDPOINT",
    "HISTORICAL_CLIMACELL_ENDPOINT",
    "REALTIME_ENDPOINT",
    "WEATHER_ENDPOINTS",
    "DEFAULT_TIMEOUT_SECONDS",
    "SUCCESS_STATUS_CODE",
    "ERROR_STATUS_CODES",
    "AUTH_ERROR_STATUS_CODES",
]
