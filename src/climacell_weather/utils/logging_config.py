"""Console logging setup with colored level names for the CLI."""
from __future__ import annotations
import logging
import os
import sys
from typing import Optional, TextIO


def _supports_ansi(stream: Optional[TextIO] = None) -> bool:
    """Detect whether ANSI escape codes should be written to ``stream``.

    NO_COLOR disables colors (https://no-color.org/), FORCE_COLOR enables
    them; otherwise colors are used only on a TTY.
    """
    stream = stream or sys.stdout
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False
    if sys.platform == "win32":
        return bool(
            os.environ.get("WT_SESSION")  # Windows Terminal
            or os.environ.get("ANSICON")
            or os.environ.get("ConEmuANSI") == "ON"
            or "TERM" in os.environ  # Git Bash, Cygwin
        )
    return True


class LogColors:
    """ANSI color codes for log output."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DEBUG = '\033[36m'      # Cyan
    INFO = '\033[32m'       # Green
    WARNING = '\033[33m'    # Yellow
    ERROR = '\033[31m'      # Red
    CRITICAL = '\033[35m'   # Magenta
    LOGGER = '\033[94m'     # Blue


class ColoredFormatter(logging.Formatter):
    """Formats records as ``[LEVEL] logger - message``, optionally colored."""

    LEVEL_COLORS = {
        'DEBUG': LogColors.DEBUG,
        'INFO': LogColors.INFO,
        'WARNING': LogColors.WARNING,
        'ERROR': LogColors.ERROR,
        'CRITICAL': LogColors.CRITICAL,
    }

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        if not self.use_color:
            return f"[{record.levelname}] {record.name} - {message}"
        level_color = self.LEVEL_COLORS.get(record.levelname, LogColors.RESET)
        levelname = f"{level_color}{LogColors.BOLD}[{record.levelname}]{LogColors.RESET}"
        name = f"{LogColors.LOGGER}{record.name}{LogColors.RESET}"
        return f"{levelname} {name} - {message}"


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Configure root logging for the command line tool.

    Replaces existing root handlers with one stream handler (stderr by
    default) and keeps urllib3 connection chatter at WARNING and above.

    Args:
        level: Logging level (default: logging.INFO).
        stream: Output stream (default: sys.stderr).

    Example:
        >>> from climacell_weather.utils.logging_config import configure_logging
        >>> configure_logging(logging.DEBUG)
    """
    stream = stream or sys.stderr
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(use_color=_supports_ansi(stream)))
    root_logger.addHandler(handler)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


__all__ = ["LogColors", "ColoredFormatter", "configure_logging"]
