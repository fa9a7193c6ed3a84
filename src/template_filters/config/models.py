"""Filter configuration data models."""

import logging
from dataclasses import dataclass, field
from typing import TextIO

from template_filters.logging import configure_logging
from template_filters.types import LogFormat, LogLevel


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.WARN
    format: LogFormat = LogFormat.JSON
    truncate_at: int = 200

    def apply(self, output: TextIO | None = None) -> logging.Handler:
        """Install the package log handler described by this config."""
        return configure_logging(self.level, self.format, output=output, truncate_at=self.truncate_at)


@dataclass
class DateConfig:
    """Defaults for the date filter."""

    format: str = "F j, Y H:i"
    timezone: str = "UTC"  # Applied to naive datetimes and unix timestamps


@dataclass
class NumberFormatConfig:
    """Defaults for the number_format filter."""

    decimals: int = 0
    decimal_point: str = "."
    thousands_separator: str = ","


@dataclass
class FiltersConfig:
    """Root configuration.

    strict_arguments rejects surplus filter arguments even for filters
    that would otherwise ignore them.
    """

    strict_arguments: bool = False
    date: DateConfig = field(default_factory=DateConfig)
    number_format: NumberFormatConfig = field(default_factory=NumberFormatConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
