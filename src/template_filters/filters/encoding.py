"""Serialization filters."""

import json
from datetime import date, datetime
from typing import Any

from template_filters.errors import create_error
from template_filters.values import SafeString, is_iterable, is_mapping, iterate, to_string


def _to_json_value(value: Any) -> Any:
    """Convert a generic value tree into json-serializable builtins.

    Mapping order is kept as iterated; keys become strings.

    Raises:
        FilterError(FILTER_TYPE): If two keys of a mapping share a string form
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, SafeString):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_mapping(value):
        encoded: dict[str, Any] = {}
        for key, item, _ in iterate(value):
            name = to_string(key)
            if name in encoded:
                raise create_error(
                    "FILTER_TYPE",
                    filter_name="json_encode",
                    value_type=type(value).__name__,
                    detail=f"Keys collide as JSON object key '{name}'",
                )
            encoded[name] = _to_json_value(item)
        return encoded
    if is_iterable(value):
        return [_to_json_value(item) for _, item, _ in iterate(value)]
    return to_string(value)


def filter_json_encode(ctx: Any, value: Any) -> str:
    """Serialize value to compact JSON.

    Args:
        ctx: Unused
        value: Value to serialize

    Returns:
        JSON string, keys in mapping iteration order

    Raises:
        FilterError(FILTER_TYPE): If value holds NaN or infinity
    """
    try:
        return json.dumps(
            _to_json_value(value),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except ValueError as e:
        raise create_error(
            "FILTER_TYPE",
            filter_name="json_encode",
            value_type=type(value).__name__,
            detail=str(e),
        ) from e
