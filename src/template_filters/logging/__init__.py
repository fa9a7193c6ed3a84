"""Structured logging for template filters."""

from .colors import LEVEL_COLORS, RESET, level_color
from .logger import (
    ColoredLogFormatter,
    FilterLogger,
    StructuredLogFormatter,
    configure_logging,
    get_logger,
    reset_loggers,
)

__all__ = [
    # Loggers
    "FilterLogger",
    "get_logger",
    "reset_loggers",
    "configure_logging",
    # Formatters
    "StructuredLogFormatter",
    "ColoredLogFormatter",
    # Colors
    "RESET",
    "LEVEL_COLORS",
    "level_color",
]
