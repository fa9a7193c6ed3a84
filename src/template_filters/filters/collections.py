"""Sequence, mapping and string-slicing filters."""

import math
from typing import Any

from template_filters.errors import create_error
from template_filters.values import (
    SafeString,
    is_iterable,
    is_mapping,
    is_number,
    iterate,
    to_int,
    to_number,
    to_string,
    values_of,
)


def filter_default(ctx: Any, value: Any, fallback: Any = "") -> Any:
    """Return fallback if value is nil or an empty string.

    Zero, false and empty sequences are kept.

    Args:
        ctx: Unused
        value: Value to check
        fallback: Value returned in place of an empty one

    Returns:
        value, or fallback when value is empty
    """
    if value is None:
        return fallback
    if isinstance(value, (str, SafeString)) and to_string(value) == "":
        return fallback
    return value


def filter_length(ctx: Any, value: Any) -> int:
    """Return the number of characters in a string or items in a collection.

    Nil has length 0; other scalars are measured as strings.
    """
    if value is None:
        return 0
    if is_iterable(value):
        if hasattr(value, "__len__"):
            return len(value)
        return len(values_of(value))
    return len(to_string(value))


def filter_join(ctx: Any, value: Any, separator: Any = "") -> str:
    """Concatenate items as strings with separator between them."""
    if not is_iterable(value):
        return to_string(value)
    return to_string(separator).join(to_string(item) for item in values_of(value))


def filter_merge(ctx: Any, value: Any, other: Any) -> list[Any]:
    """Return a new sequence: value's items followed by other's.

    Raises:
        FilterError(FILTER_TYPE): If either side is a mapping or a scalar
    """
    for operand in (value, other):
        if operand is not None and (is_mapping(operand) or not is_iterable(operand)):
            raise create_error(
                "FILTER_TYPE",
                filter_name="merge",
                value_type=type(operand).__name__,
                detail="merge only combines sequences",
            )
    return values_of(value) + values_of(other)


def filter_keys(ctx: Any, value: Any) -> list[Any]:
    """Return the keys of a mapping, or the indexes of a sequence."""
    return [key for key, _, _ in iterate(value)]


def filter_first(ctx: Any, value: Any) -> Any:
    """Return the first item of a collection or first character of a string."""
    if is_iterable(value):
        for _, item, _ in iterate(value):
            return item
        return None

    text = to_string(value)
    return text[0] if text else None


def filter_last(ctx: Any, value: Any) -> Any:
    """Return the last item of a collection or last character of a string."""
    if is_iterable(value):
        items = values_of(value)
        return items[-1] if items else None

    text = to_string(value)
    return text[-1] if text else None


def filter_reverse(ctx: Any, value: Any) -> Any:
    """Reverse a sequence, a mapping's order, or a string's characters."""
    if is_mapping(value):
        return {key: item for key, item in reversed(list(value.items()))}
    if is_iterable(value):
        return values_of(value)[::-1]
    return to_string(value)[::-1]


def _slice_bounds(size: int, start: Any, length: Any) -> tuple[int, int]:
    """Resolve signed start/length to a clamped [begin, end) range."""
    begin = to_int(start)
    if begin < 0:
        begin = max(size + begin, 0)
    begin = min(begin, size)

    if length is None:
        end = size
    else:
        count = to_int(length)
        # A negative length stops that many positions before the end
        end = size + count if count < 0 else begin + count

    end = max(min(end, size), begin)
    return begin, end


def filter_slice(ctx: Any, value: Any, start: Any, length: Any = None) -> Any:
    """Extract a slice of a sequence, mapping or string.

    Args:
        ctx: Unused
        value: Sequence, mapping or string (other scalars are sliced as strings)
        start: Start index; negative counts from the end
        length: Item count; negative stops that many items before the end,
            omitted runs to the end

    Returns:
        Value of the same kind as the input
    """
    if is_mapping(value):
        items = list(value.items())
        begin, end = _slice_bounds(len(items), start, length)
        return dict(items[begin:end])

    if is_iterable(value):
        items = values_of(value)
        begin, end = _slice_bounds(len(items), start, length)
        return items[begin:end]

    text = to_string(value)
    begin, end = _slice_bounds(len(text), start, length)
    return text[begin:end]


def filter_split(ctx: Any, value: Any, delimiter: Any, limit: Any = 0) -> list[str]:
    """Split a string into a list of strings.

    With a delimiter, a positive limit caps the number of segments (the last
    one keeps the rest of the string) and a negative limit drops that many
    segments from the end. With an empty delimiter, a positive limit is the
    size of each chunk; otherwise the string splits into characters.

    Raises:
        FilterError(FILTER_TYPE): If value is not a string
    """
    if value is None:
        return []
    if not isinstance(value, (str, SafeString)):
        raise create_error(
            "FILTER_TYPE",
            filter_name="split",
            value_type=type(value).__name__,
            detail="split only applies to strings",
        )

    text = to_string(value)
    separator = to_string(delimiter)
    count = to_int(limit)

    if not separator:
        if count > 0:
            return [text[i : i + count] for i in range(0, len(text), count)]
        return list(text)

    if count > 0:
        return text.split(separator, count - 1)

    parts = text.split(separator)
    if count < 0:
        return parts[:count]
    return parts


def filter_batch(ctx: Any, value: Any, size: Any, fill: Any = None) -> list[list[Any]]:
    """Split items into groups of size, padding the last one with fill.

    Args:
        ctx: Unused
        value: Sequence or mapping (mapping values are batched)
        size: Items per group, rounded up
        fill: Padding for a short last group; nil leaves it short

    Returns:
        List of groups

    Raises:
        FilterError(FILTER_INVALID_ARGUMENT): If size is not positive
        FilterError(FILTER_TYPE): If value is not iterable
    """
    number = to_number(size)
    group_size = math.ceil(number) if math.isfinite(number) else 0
    if group_size <= 0:
        raise create_error(
            "FILTER_INVALID_ARGUMENT",
            filter_name="batch",
            detail=f"Batch size must be positive, got {to_string(size)}",
        )

    if value is None:
        return []
    if not is_iterable(value):
        raise create_error(
            "FILTER_TYPE",
            filter_name="batch",
            value_type=type(value).__name__,
        )

    items = values_of(value)
    groups = [items[i : i + group_size] for i in range(0, len(items), group_size)]

    if groups and fill is not None:
        last = groups[-1]
        last.extend([fill] * (group_size - len(last)))

    return groups


def _sort_key(item: Any) -> tuple[int, Any]:
    # Numbers before strings; everything else compares by string form
    if item is None or isinstance(item, bool) or is_number(item):
        return (0, to_number(item))
    return (1, to_string(item))


def filter_sort(ctx: Any, value: Any) -> Any:
    """Sort a sequence, or a mapping by its values (keys are kept)."""
    if is_mapping(value):
        return dict(sorted(value.items(), key=lambda pair: _sort_key(pair[1])))
    if is_iterable(value):
        return sorted(values_of(value), key=_sort_key)
    if value is None:
        return []
    raise create_error(
        "FILTER_TYPE",
        filter_name="sort",
        value_type=type(value).__name__,
    )
