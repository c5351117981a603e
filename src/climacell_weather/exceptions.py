"""Exceptions raised by the ClimaCell client."""

from __future__ import annotations

from typing import Optional

from .models import ErrorResponse


class ClimaCellError(Exception):
    """Base exception for all ClimaCell client errors."""
    pass


class ClimaCellTransportError(ClimaCellError):
    """The request could not be sent or no response was received.

    The underlying transport exception is available as ``__cause__``.
    """

    def __init__(self, message: str, *, endpoint: str) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class ClimaCellDecodeError(ClimaCellError):
    """A response body did not match the expected JSON shape."""

    def __init__(
        self,
        message: str,
        *,
        endpoint: str,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code


class ClimaCellAPIError(ClimaCellError):
    """The API answered 400, 401, 403, 404 or 500 with an error body."""

    def __init__(self, error: ErrorResponse) -> None:
        self.error = error
        super().__init__(str(self))

    @property
    def status_code(self) -> int:
        return self.error.status_code

    @property
    def error_code(self) -> str:
        return self.error.error_code

    @property
    def message(self) -> str:
        return self.error.message

    def __str__(self) -> str:
        if not self.error_code:
            return f"{self.status_code} API error: {self.message}"
        return f"{self.status_code} ({self.error_code}) API error: {self.message}"


class ClimaCellUnexpectedStatusError(ClimaCellError):
    """The API answered with a status code outside the documented set."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"unexpected HTTP response status code: {status_code}")
        self.status_code = status_code


__all__ = [
    "ClimaCellError",
    "ClimaCellTransportError",
    "ClimaCellDecodeError",
    "ClimaCellAPIError",
    "ClimaCellUnexpectedStatusError",
]
