"""Configuration management for the ClimaCell client."""

from __future__ import annotations

from .settings import ClimaCellSettings, get_settings, reset_settings

__all__ = ["ClimaCellSettings", "get_settings", "reset_settings"]
