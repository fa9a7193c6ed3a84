"""Total conversions from a generic value to string, number and boolean."""

import math
import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from .safe import SafeString

# Decimal literal, optionally signed, with optional exponent
NUMBER_PATTERN = re.compile(r"^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?$")


def is_number(value: Any) -> bool:
    """Check if value is a real number (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    """Check if value is an ordered sequence (strings excluded)."""
    return isinstance(value, (list, tuple))


def is_mapping(value: Any) -> bool:
    """Check if value is a key/value mapping."""
    return isinstance(value, Mapping)


def to_string(value: Any) -> str:
    """Coerce a value to string.

    Args:
        value: Any generic value

    Returns:
        String form of the value, never raises
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, SafeString):
        return value.value
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_sequence(value) or is_mapping(value):
        return "Array"
    return str(value)


def to_number(value: Any) -> float | int:
    """Coerce a value to a number.

    Strings must be decimal literals; everything unparseable becomes 0.

    Args:
        value: Any generic value

    Returns:
        int or float
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if is_number(value):
        return value
    if isinstance(value, SafeString):
        value = value.value
    if isinstance(value, str):
        text = value.strip()
        if NUMBER_PATTERN.match(text):
            number = float(text)
            if number.is_integer() and "." not in text and "e" not in text.lower():
                return int(text)
            return number
    return 0


def to_bool(value: Any) -> bool:
    """Coerce a value to boolean."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if is_number(value):
        return value != 0
    if isinstance(value, (str, SafeString)):
        text = to_string(value)
        return text not in ("", "0")
    if is_sequence(value) or is_mapping(value):
        return len(value) > 0
    return True


def to_int(value: Any) -> int:
    """Coerce a value to an integer, truncating toward zero.

    Non-finite numbers become 0.
    """
    number = to_number(value)
    if isinstance(number, float) and not math.isfinite(number):
        return 0
    return int(number)
