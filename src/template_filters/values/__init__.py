"""Generic value model consumed by the filters.

Values are plain Python objects: None, bool, int/float, str, list/tuple,
Mapping, plus SafeString for pre-escaped text.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Union

from .coercion import (
    is_mapping,
    is_number,
    is_sequence,
    to_bool,
    to_int,
    to_number,
    to_string,
)
from .iteration import Loop, is_iterable, iterate, values_of
from .safe import SafeString
from .timezones import resolve_timezone

Value = Union[None, bool, int, float, str, SafeString, Sequence[Any], Mapping[Any, Any]]

__all__ = [
    "Value",
    "SafeString",
    "Loop",
    # Coercion
    "to_string",
    "to_number",
    "to_bool",
    "to_int",
    # Type checks
    "is_number",
    "is_sequence",
    "is_mapping",
    "is_iterable",
    # Timezones
    "resolve_timezone",
    # Iteration
    "iterate",
    "values_of",
]
