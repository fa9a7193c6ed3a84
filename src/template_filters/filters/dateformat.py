"""PHP-style date format tokens.

Each recognized letter in a format string is replaced by a component of the
datetime; a backslash emits the next character literally and every other
character passes through unchanged. Names are fixed English forms.
"""

import calendar
from collections.abc import Callable
from datetime import datetime
from types import MappingProxyType

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

ESCAPE = "\\"


def _offset_seconds(dt: datetime) -> int:
    offset = dt.utcoffset()
    return int(offset.total_seconds()) if offset is not None else 0


def _offset(dt: datetime, separator: str) -> str:
    seconds = _offset_seconds(dt)
    sign = "-" if seconds < 0 else "+"
    hours, remainder = divmod(abs(seconds), 3600)
    return f"{sign}{hours:02d}{separator}{remainder // 60:02d}"


def _ordinal_suffix(day: int) -> str:
    if day in (11, 12, 13):
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _hour12(dt: datetime) -> int:
    return dt.hour % 12 or 12


def _zone_abbreviation(dt: datetime) -> str:
    name = dt.tzname()
    # Unnamed fixed offsets render as "UTC+08:00"; show the bare offset instead
    if not name or (name.startswith(("UTC", "GMT")) and len(name) > 3):
        return _offset(dt, ":")
    return name


def _zone_identifier(dt: datetime) -> str:
    key = getattr(dt.tzinfo, "key", None)
    if key:
        return key
    return _zone_abbreviation(dt)


TOKENS: MappingProxyType[str, Callable[[datetime], str]] = MappingProxyType(
    {
        # Day
        "d": lambda dt: f"{dt.day:02d}",
        "D": lambda dt: DAY_NAMES[dt.weekday()][:3],
        "j": lambda dt: str(dt.day),
        "l": lambda dt: DAY_NAMES[dt.weekday()],
        "N": lambda dt: str(dt.isoweekday()),
        "S": lambda dt: _ordinal_suffix(dt.day),
        "w": lambda dt: str(dt.isoweekday() % 7),
        "z": lambda dt: str(dt.timetuple().tm_yday - 1),
        # Week
        "W": lambda dt: f"{dt.isocalendar()[1]:02d}",
        # Month
        "F": lambda dt: MONTH_NAMES[dt.month - 1],
        "m": lambda dt: f"{dt.month:02d}",
        "M": lambda dt: MONTH_NAMES[dt.month - 1][:3],
        "n": lambda dt: str(dt.month),
        "t": lambda dt: str(calendar.monthrange(dt.year, dt.month)[1]),
        # Year
        "L": lambda dt: "1" if calendar.isleap(dt.year) else "0",
        "o": lambda dt: str(dt.isocalendar()[0]),
        "Y": lambda dt: f"{dt.year:04d}",
        "y": lambda dt: f"{dt.year % 100:02d}",
        # Time
        "a": lambda dt: "am" if dt.hour < 12 else "pm",
        "A": lambda dt: "AM" if dt.hour < 12 else "PM",
        "g": lambda dt: str(_hour12(dt)),
        "G": lambda dt: str(dt.hour),
        "h": lambda dt: f"{_hour12(dt):02d}",
        "H": lambda dt: f"{dt.hour:02d}",
        "i": lambda dt: f"{dt.minute:02d}",
        "s": lambda dt: f"{dt.second:02d}",
        "u": lambda dt: f"{dt.microsecond:06d}",
        "v": lambda dt: f"{dt.microsecond // 1000:03d}",
        # Timezone
        "e": _zone_identifier,
        "I": lambda dt: "1" if dt.dst() else "0",
        "O": lambda dt: _offset(dt, ""),
        "P": lambda dt: _offset(dt, ":"),
        "T": _zone_abbreviation,
        "Z": lambda dt: str(_offset_seconds(dt)),
        # Full date/time
        "U": lambda dt: str(int(dt.timestamp())),
    }
)

# Shorthands expanded into other tokens
COMPOSITES: MappingProxyType[str, str] = MappingProxyType(
    {
        "c": "Y-m-d\\TH:i:sP",
        "r": "D, d M Y H:i:s O",
    }
)


def format_date(dt: datetime, fmt: str) -> str:
    """Render a datetime with a PHP-style format string.

    Args:
        dt: Timezone-aware datetime
        fmt: Format string, e.g. "Y-m-d H:i"

    Returns:
        Formatted string
    """
    parts: list[str] = []
    escaped = False

    for char in fmt:
        if escaped:
            parts.append(char)
            escaped = False
        elif char == ESCAPE:
            escaped = True
        elif char in COMPOSITES:
            parts.append(format_date(dt, COMPOSITES[char]))
        elif char in TOKENS:
            parts.append(TOKENS[char](dt))
        else:
            parts.append(char)

    # Trailing backslash is kept as-is
    if escaped:
        parts.append(ESCAPE)

    return "".join(parts)
