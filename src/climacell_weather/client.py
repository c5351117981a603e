from __future__ import annotations
import logging
import threading
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Tuple, TypeVar
from urllib.parse import urljoin

import pandas as pd
import requests
from pydantic import BaseModel, ValidationError

from .config import ClimaCellSettings, get_settings
from .constants import (
    AUTH_ERROR_STATUS_CODES,
    DAILY_FORECAST_ENDPOINT,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    ERROR_STATUS_CODES,
    HISTORICAL_CLIMACELL_ENDPOINT,
    HISTORICAL_STATION_ENDPOINT,
    HOURLY_FORECAST_ENDPOINT,
    NOWCAST_ENDPOINT,
    REALTIME_ENDPOINT,
    SUCCESS_STATUS_CODE,
    WEATHER_ENDPOINTS,
)
from .exceptions import (
    ClimaCellAPIError,
    ClimaCellDecodeError,
    ClimaCellTransportError,
    ClimaCellUnexpectedStatusError,
)
from .frames import records_to_dataframe
from .models import (
    ErrorResponse,
    ForecastDay,
    HistoricalClimaCell,
    HistoricalStation,
    HourlyForecast,
    NowCastForecast,
    RealTime,
    decode_record,
    decode_records,
)
from .query import ForecastArgs

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class HTTPResponse:
    """Status, headers and raw body of one HTTP exchange."""
    status_code: int
    content: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)


# HTTP Client Protocol
class HTTPClient(Protocol):
    def get(
        self,
        url: str,
        headers: Dict[str, str],
        params: List[Tuple[str, str]],
    ) -> HTTPResponse:
        """Send one GET request.

        Transport failures (connection, DNS, timeout) are raised as
        ``requests.RequestException`` or ``OSError``; every HTTP status,
        including errors, is returned as a response.
        """
        ...


class RequestsHTTPClient:
    """Default transport: a pooled ``requests.Session`` with a fixed timeout.

    Requests are sent once; nothing is retried.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.timeout = timeout
        self._session: Optional[requests.Session] = None
        self._lock = threading.Lock()

    def _get_session(self) -> requests.Session:
        with self._lock:
            if self._session is None:
                self._session = requests.Session()
            return self._session

    def close(self) -> None:
        with self._lock:
            if self._session is not None:
                self._session.close()
                self._session = None

    def __enter__(self) -> "RequestsHTTPClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def get(
        self,
        url: str,
        headers: Dict[str, str],
        params: List[Tuple[str, str]],
    ) -> HTTPResponse:
        session = self._get_session()
        response = session.get(url, headers=headers, params=params, timeout=self.timeout)
        try:
            return HTTPResponse(
                status_code=response.status_code,
                content=response.content,
                headers=dict(response.headers),
            )
        finally:
            # Release the connection back to the pool
            response.close()


class ClimaCellClient:
    """Client for the ClimaCell v3 weather endpoints.

    Each endpoint method sends exactly one GET request and either returns
    the decoded records or raises a ``ClimaCellError`` subclass:

    - ``ClimaCellTransportError``: the request could not be completed.
    - ``ClimaCellDecodeError``: a 200 (or error) body had the wrong shape.
    - ``ClimaCellAPIError``: 400, 401, 403, 404 or 500 with an error body.
    - ``ClimaCellUnexpectedStatusError``: any other status code.

    Without ``http_client`` a ``RequestsHTTPClient`` with a one-minute
    timeout is created and closed along with this client. Nothing on the
    client changes after construction, so one instance can be shared
    between threads if its transport allows it.

    Do not hard-code the API key in source code; see ``from_settings``.
    """

    def __init__(
        self,
        api_key: str,
        http_client: Optional[HTTPClient] = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = api_key
        # Track whether we own the transport for cleanup
        self._owns_http_client = http_client is None
        self._http_client: HTTPClient = http_client or RequestsHTTPClient(timeout=timeout)
        self._base_url = base_url.rstrip("/") + "/"

    @classmethod
    def from_settings(
        cls,
        settings: Optional[ClimaCellSettings] = None,
        http_client: Optional[HTTPClient] = None,
    ) -> "ClimaCellClient":
        """Build a client from ``ClimaCellSettings`` (environment / .env)."""
        settings = settings or get_settings()
        return cls(
            settings.climacell_api_key,
            http_client,
            base_url=settings.climacell_api_url,
            timeout=settings.climacell_timeout_seconds,
        )

    def close(self) -> None:
        if self._owns_http_client and hasattr(self._http_client, "close"):
            self._http_client.close()  # type: ignore[attr-defined]

    def __enter__(self) -> "ClimaCellClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "apikey": self._api_key,
        }

    def _send(self, endpoint: str, args: ForecastArgs) -> HTTPResponse:
        url = urljoin(self._base_url, endpoint)
        params = args.query_params()
        LOGGER.debug("GET %s params=%s", url, params)
        try:
            return self._http_client.get(url=url, headers=self._get_headers(), params=params)
        except (requests.RequestException, OSError) as exc:
            LOGGER.warning("Weather data request to %s failed: %s", endpoint, exc)
            raise ClimaCellTransportError(
                f"sending weather data request to {endpoint}: {exc}", endpoint=endpoint
            ) from exc

    def _get_weather_samples(
        self,
        endpoint: str,
        args: ForecastArgs,
        decode: Callable[[bytes], T],
    ) -> T:
        response = self._send(endpoint, args)
        status = response.status_code

        if status == SUCCESS_STATUS_CODE:
            try:
                return decode(response.content)
            except ValidationError as exc:
                LOGGER.warning("Could not decode %s response: %s", endpoint, exc)
                raise ClimaCellDecodeError(
                    f"deserializing weather response data from {endpoint}: {exc}",
                    endpoint=endpoint,
                    status_code=status,
                ) from exc

        if status in ERROR_STATUS_CODES:
            try:
                error = ErrorResponse.model_validate_json(response.content)
            except ValidationError as exc:
                LOGGER.warning("Could not decode %s error response (HTTP %d): %s", endpoint, status, exc)
                raise ClimaCellDecodeError(
                    f"deserializing weather error response from {endpoint}: {exc}",
                    endpoint=endpoint,
                    status_code=status,
                ) from exc
            # 401 and 403 bodies carry no statusCode
            if status in AUTH_ERROR_STATUS_CODES:
                error = error.model_copy(update={"status_code": status})
            api_error = ClimaCellAPIError(error)
            LOGGER.warning("ClimaCell API error from %s: %s", endpoint, api_error)
            raise api_error

        LOGGER.warning("Unexpected HTTP status %d from %s", status, endpoint)
        raise ClimaCellUnexpectedStatusError(status)

    #
    # Weather endpoints
    #

    def nowcast(self, args: ForecastArgs) -> List[NowCastForecast]:
        """Minute-by-minute predictions from /weather/nowcast, up to 6 hours out."""
        return self._get_weather_samples(
            NOWCAST_ENDPOINT, args, partial(decode_records, NowCastForecast)
        )

    def hourly_forecast(self, args: ForecastArgs) -> List[HourlyForecast]:
        """Hourly forecast from /weather/forecast/hourly, up to 96 hours out."""
        return self._get_weather_samples(
            HOURLY_FORECAST_ENDPOINT, args, partial(decode_records, HourlyForecast)
        )

    def daily_forecast(self, args: ForecastArgs) -> List[ForecastDay]:
        """Daily forecast from /weather/forecast/daily, up to 15 days out."""
        return self._get_weather_samples(
            DAILY_FORECAST_ENDPOINT, args, partial(decode_records, ForecastDay)
        )

    def historical_station(self, args: ForecastArgs) -> List[HistoricalStation]:
        """Weather-station observations from /weather/historical/station."""
        return self._get_weather_samples(
            HISTORICAL_STATION_ENDPOINT, args, partial(decode_records, HistoricalStation)
        )

    def historical_climacell(self, args: ForecastArgs) -> List[HistoricalClimaCell]:
        """Past ClimaCell data from /weather/historical/climacell, up to 6 hours back."""
        return self._get_weather_samples(
            HISTORICAL_CLIMACELL_ENDPOINT, args, partial(decode_records, HistoricalClimaCell)
        )

    def realtime(self, args: ForecastArgs) -> RealTime:
        """Observations at the present minute from /weather/realtime."""
        return self._get_weather_samples(
            REALTIME_ENDPOINT, args, partial(decode_record, RealTime)
        )

    def fetch_records(self, endpoint_name: str, args: ForecastArgs) -> List[BaseModel]:
        """Call an endpoint by its short name (see ``WEATHER_ENDPOINTS``).

        The realtime record is returned as a one-element list.

        Raises:
            ValueError: If ``endpoint_name`` is unknown.
        """
        methods: Dict[str, Callable[[ForecastArgs], Any]] = {
            "nowcast": self.nowcast,
            "hourly": self.hourly_forecast,
            "daily": self.daily_forecast,
            "historical-station": self.historical_station,
            "historical-climacell": self.historical_climacell,
            "realtime": self.realtime,
        }
        if endpoint_name not in methods:
            raise ValueError(
                f"Unknown endpoint '{endpoint_name}'. Supported values: {', '.join(WEATHER_ENDPOINTS)}."
            )
        result = methods[endpoint_name](args)
        if isinstance(result, list):
            return result
        return [result]


def fetch_weather_dataframe(
    endpoint_name: str,
    args: ForecastArgs,
    *,
    api_key: Optional[str] = None,
    http_client: Optional[HTTPClient] = None,
) -> pd.DataFrame:
    """Fetch one endpoint and flatten the records into a DataFrame.

    The API key falls back to ``ClimaCellSettings`` when not given.
    """
    if api_key:
        client = ClimaCellClient(api_key, http_client)
    else:
        client = ClimaCellClient.from_settings(http_client=http_client)
    with client:
        return records_to_dataframe(client.fetch_records(endpoint_name, args))


__all__ = [
    "HTTPResponse",
    "HTTPClient",
    "RequestsHTTPClient",
    "ClimaCellClient",
    "fetch_weather_dataframe",
]
