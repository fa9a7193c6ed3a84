"""Numeric filters."""

import math
from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from template_filters.errors import create_error
from template_filters.types import RoundMode
from template_filters.values import is_number, to_number, to_string

ROUNDING = {
    RoundMode.COMMON: ROUND_HALF_UP,
    RoundMode.CEIL: ROUND_CEILING,
    RoundMode.FLOOR: ROUND_FLOOR,
}

# Enough digits for any float scaled to a sane precision
DECIMAL_PRECISION = 400


def _quantize(number: float, places: int, rounding: str) -> float:
    """Round number to places decimal digits (negative rounds left of the point).

    Works on the shortest decimal representation of the float, so 3.115
    rounds as written rather than as 3.11499999...
    """
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        exponent = Decimal(1).scaleb(-places)
        rounded = Decimal(repr(float(number))).quantize(exponent, rounding=rounding)
    # + 0.0 turns -0.0 into 0.0
    return float(rounded) + 0.0


def _to_float(value: Any) -> float:
    """Coerce value to a float; ints beyond float range become +/-inf."""
    number = to_number(value)
    try:
        return float(number)
    except OverflowError:
        return math.copysign(math.inf, number)


def _places(filter_name: str, value: Any) -> int:
    """Coerce a precision/decimals argument to an int."""
    if value is None:
        return 0
    number = to_number(value) if isinstance(value, str) else value
    if isinstance(number, bool) or not is_number(number):
        raise create_error(
            "FILTER_INVALID_ARGUMENT",
            filter_name=filter_name,
            detail=f"Precision must be an integer, got {to_string(value)!r}",
        )
    if isinstance(number, float):
        if not number.is_integer():
            raise create_error(
                "FILTER_INVALID_ARGUMENT",
                filter_name=filter_name,
                detail=f"Precision must be an integer, got {to_string(value)}",
            )
        number = int(number)
    return number


def filter_abs(ctx: Any, value: Any) -> float:
    """Absolute value as a float. Non-numeric input counts as 0."""
    return abs(_to_float(value))


def filter_round(ctx: Any, value: Any, precision: Any = 0, mode: Any = RoundMode.COMMON.value) -> float:
    """Round a number to precision decimal places.

    Args:
        ctx: Unused
        value: Number to round (non-numeric input counts as 0)
        precision: Decimal places; negative rounds to tens, hundreds, ...
        mode: "common" (half away from zero), "ceil" or "floor"

    Returns:
        Rounded value as a float

    Raises:
        FilterError(FILTER_INVALID_ARGUMENT): If precision or mode is invalid
    """
    try:
        round_mode = RoundMode(to_string(mode))
    except ValueError as e:
        raise create_error(
            "FILTER_INVALID_ARGUMENT",
            filter_name="round",
            detail=f"Rounding mode must be 'common', 'ceil' or 'floor', got '{to_string(mode)}'",
        ) from e

    places = _places("round", precision)
    number = _to_float(value)

    if not math.isfinite(number):
        return number

    try:
        return _quantize(number, places, ROUNDING[round_mode])
    except ArithmeticError:
        # Precision beyond what a float can hold: nothing to round
        return number


def filter_number_format(
    ctx: Any,
    value: Any,
    decimals: Any = None,
    decimal_point: Any = None,
    thousands_sep: Any = None,
    *,
    default_decimals: int = 0,
    default_decimal_point: str = ".",
    default_thousands_sep: str = ",",
) -> str:
    """Format a number with grouped thousands.

    Omitted arguments fall back to the configured defaults.

    Raises:
        FilterError(FILTER_INVALID_ARGUMENT): If decimals is not an integer
    """
    places = default_decimals if decimals is None else _places("number_format", decimals)
    places = max(places, 0)
    point = default_decimal_point if decimal_point is None else to_string(decimal_point)
    separator = default_thousands_sep if thousands_sep is None else to_string(thousands_sep)

    number = _to_float(value)
    if not math.isfinite(number):
        return to_string(number)

    try:
        rounded = _quantize(number, places, ROUND_HALF_UP)
    except ArithmeticError:
        rounded = number

    formatted = f"{abs(rounded):,.{places}f}"
    integral, _, fraction = formatted.partition(".")
    result = integral.replace(",", separator)
    if fraction:
        result += point + fraction

    return "-" + result if rounded < 0 else result
