"""Timezone lookup by name."""

from datetime import UTC, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def resolve_timezone(name: str) -> tzinfo:
    """Look up an IANA timezone.

    Args:
        name: Zone name such as "Australia/Perth" or "UTC"

    Returns:
        tzinfo instance

    Raises:
        ValueError: If the zone is unknown
    """
    if name.upper() in ("UTC", "Z"):
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e
