"""Configuration loading using Pydantic Settings.

Settings come from environment variables or a ``.env`` file in the working
directory. The API key should live there rather than in source code: anyone
holding it can make requests under your identity.

Example:
    >>> from climacell_weather.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.climacell_api_url)
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS

LOGGER = logging.getLogger(__name__)


class ClimaCellSettings(BaseSettings):
    """ClimaCell API configuration.

    Example .env file:
        CLIMACELL_API_KEY=your_api_key
        CLIMACELL_TIMEOUT_SECONDS=30
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    climacell_api_key: str = Field(
        ...,
        description="ClimaCell API key (REQUIRED)",
    )
    climacell_api_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="ClimaCell API base URL",
    )
    climacell_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        ge=1,
        description="Transport timeout for each request, in seconds",
    )

    @field_validator("climacell_api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Ensure the URL is http(s) and ends with a slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("ClimaCell API URL must start with http:// or https://")
        return v.rstrip("/") + "/"


_settings: Optional[ClimaCellSettings] = None
_settings_lock = threading.Lock()


def get_settings() -> ClimaCellSettings:
    """Get or create the settings singleton (thread-safe).

    Raises:
        ValidationError: If required configuration is missing.
    """
    global _settings

    if _settings is not None:
        return _settings

    with _settings_lock:
        if _settings is None:
            LOGGER.info("Initializing ClimaCell settings from environment variables and .env file")
            try:
                _settings = ClimaCellSettings()
            except ValidationError as e:
                LOGGER.error("Configuration validation failed: %s", e)
                raise

    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call reloads them."""
    global _settings
    with _settings_lock:
        _settings = None


__all__ = ["ClimaCellSettings", "get_settings", "reset_settings"]
