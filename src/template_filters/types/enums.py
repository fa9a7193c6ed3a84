"""Shared enumerations for template filters."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class RoundMode(str, Enum):
    """Rounding direction for the round filter."""

    COMMON = "common"
    CEIL = "ceil"
    FLOOR = "floor"


class ExtraArgs(str, Enum):
    """What a filter does with arguments beyond its documented set."""

    IGNORE = "ignore"
    REJECT = "reject"


class TrimSide(str, Enum):
    """Which end(s) of a string the trim filter strips."""

    BOTH = "both"
    LEFT = "left"
    RIGHT = "right"
