"""Shared utilities for the ClimaCell client."""

from __future__ import annotations

from .logging_config import ColoredFormatter, LogColors, configure_logging

__all__ = ["ColoredFormatter", "LogColors", "configure_logging"]
