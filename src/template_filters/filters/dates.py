"""Date filter."""

from datetime import UTC, date, datetime, time, tzinfo
from typing import Any

from template_filters.errors import create_error
from template_filters.values import SafeString, is_number, resolve_timezone, to_string

from .dateformat import format_date

DEFAULT_DATE_FORMAT = "F j, Y H:i"


def _timezone_arg(name: Any) -> tzinfo:
    try:
        return resolve_timezone(to_string(name))
    except ValueError as e:
        raise create_error(
            "FILTER_INVALID_ARGUMENT",
            filter_name="date",
            detail=str(e),
        ) from e


def to_datetime(value: Any, default_timezone: tzinfo = UTC) -> datetime:
    """Convert a date-like value to a timezone-aware datetime.

    Accepts aware or naive datetimes, dates, unix timestamps, ISO-8601
    strings and "now". Naive values are placed in default_timezone.

    Raises:
        FilterError(FILTER_TYPE): If the value cannot be read as a date
    """
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            return value.replace(tzinfo=default_timezone)
        return value

    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=default_timezone)

    if is_number(value):
        try:
            return datetime.fromtimestamp(value, tz=default_timezone)
        except (OverflowError, OSError, ValueError) as e:
            raise create_error(
                "FILTER_TYPE",
                filter_name="date",
                value_type=type(value).__name__,
                detail=f"Timestamp out of range: {value}",
            ) from e

    if isinstance(value, (str, SafeString)):
        text = to_string(value).strip()
        if text.lower() == "now":
            return datetime.now(default_timezone)
        try:
            return to_datetime(datetime.fromisoformat(text), default_timezone)
        except ValueError as e:
            raise create_error(
                "FILTER_TYPE",
                filter_name="date",
                value_type="str",
                detail=f"Cannot parse date '{text}'",
            ) from e

    raise create_error(
        "FILTER_TYPE",
        filter_name="date",
        value_type=type(value).__name__,
    )


def filter_date(
    ctx: Any,
    value: Any,
    format: Any = None,  # noqa: A002
    timezone: Any = None,
    *,
    default_format: str = DEFAULT_DATE_FORMAT,
    default_timezone: tzinfo = UTC,
) -> str:
    """Format a date with PHP-style tokens.

    Args:
        ctx: Unused
        value: Datetime, date, unix timestamp or ISO-8601 string
        format: Format string, e.g. "Y-m-d"; defaults to default_format
        timezone: Optional IANA zone to convert to before formatting
        default_format: Format used when none is given
        default_timezone: Zone applied to naive values

    Returns:
        Formatted date

    Raises:
        FilterError(FILTER_TYPE): If value is not date-like
        FilterError(FILTER_INVALID_ARGUMENT): If timezone is unknown
    """
    dt = to_datetime(value, default_timezone)
    if timezone is not None:
        dt = dt.astimezone(_timezone_arg(timezone))

    fmt = default_format if format is None else to_string(format)
    return format_date(dt, fmt)
