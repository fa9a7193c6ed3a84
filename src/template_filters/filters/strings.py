"""String filters."""

import html
import re
from typing import Any
from urllib.parse import quote, urlencode

from template_filters.errors import create_error
from template_filters.types import TrimSide
from template_filters.values import SafeString, is_mapping, iterate, to_string

# First non-space character of each whitespace-delimited word
WORD_START_PATTERN = re.compile(r"(^|\s)(\S)")

TAG_PATTERN = re.compile(r"<!--.*?-->|<[^>]*>", re.DOTALL)


def filter_capitalize(ctx: Any, value: Any) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    text = to_string(value)
    return text[:1].upper() + text[1:]


def filter_lower(ctx: Any, value: Any) -> str:
    return to_string(value).lower()


def filter_upper(ctx: Any, value: Any) -> str:
    return to_string(value).upper()


def filter_title(ctx: Any, value: Any) -> str:
    """Uppercase the first letter of every whitespace-delimited word.

    Unlike str.title(), the remaining letters keep their case.
    """
    return WORD_START_PATTERN.sub(lambda m: m.group(1) + m.group(2).upper(), to_string(value))


def filter_trim(
    ctx: Any,
    value: Any,
    characters: Any = None,
    side: Any = TrimSide.BOTH.value,
) -> str:
    """Strip whitespace (or the given characters) from the ends of a string.

    Args:
        ctx: Unused
        value: Value to trim
        characters: Characters to strip instead of whitespace
        side: "both", "left" or "right"

    Returns:
        Trimmed string

    Raises:
        FilterError(FILTER_INVALID_ARGUMENT): If side is unknown
    """
    text = to_string(value)
    chars = to_string(characters) if characters is not None else None

    try:
        trim_side = TrimSide(to_string(side))
    except ValueError as e:
        raise create_error(
            "FILTER_INVALID_ARGUMENT",
            filter_name="trim",
            detail=f"Trimming side must be 'left', 'right' or 'both', got '{to_string(side)}'",
        ) from e

    if trim_side == TrimSide.LEFT:
        return text.lstrip(chars)
    if trim_side == TrimSide.RIGHT:
        return text.rstrip(chars)
    return text.strip(chars)


def filter_replace(ctx: Any, value: Any, replacements: Any) -> str:
    """Replace every occurrence of each key with its mapped value.

    Keys are applied one after another in iteration order, so later
    replacements see the output of earlier ones. Empty keys are skipped.

    Raises:
        FilterError(FILTER_TYPE): If replacements is not a mapping
    """
    if not is_mapping(replacements):
        raise create_error(
            "FILTER_TYPE",
            filter_name="replace",
            value_type=type(replacements).__name__,
            detail="The replacements argument must be a mapping",
        )

    text = to_string(value)
    for search, _, _ in iterate(replacements):
        needle = to_string(search)
        if needle:
            text = text.replace(needle, to_string(replacements[search]))
    return text


def filter_raw(ctx: Any, value: Any) -> SafeString:
    """Mark the value as safe so it is output unescaped."""
    if isinstance(value, SafeString):
        return value
    return SafeString(to_string(value))


def filter_nl2br(ctx: Any, value: Any) -> SafeString:
    """Insert <br /> in place of every newline."""
    return SafeString(to_string(value).replace("\n", "<br />"))


def filter_escape(ctx: Any, value: Any, strategy: Any = "html") -> Any:
    """Escape a string for the given output context.

    Supported strategies are "html" and "url". Safe strings pass through.

    Raises:
        FilterError(FILTER_INVALID_ARGUMENT): If the strategy is unknown
    """
    if isinstance(value, SafeString):
        return value

    name = to_string(strategy)
    if name == "html":
        return SafeString(html.escape(to_string(value), quote=True))
    if name == "url":
        return quote(to_string(value), safe="")

    raise create_error(
        "FILTER_INVALID_ARGUMENT",
        filter_name="escape",
        detail=f"Unknown escaping strategy '{name}'",
    )


def filter_striptags(ctx: Any, value: Any) -> str:
    """Remove markup tags and HTML comments."""
    return TAG_PATTERN.sub("", to_string(value))


def filter_url_encode(ctx: Any, value: Any) -> str:
    """Percent-encode a string, or a mapping as a query string."""
    if is_mapping(value):
        pairs = [(to_string(key), to_string(item)) for key, item, _ in iterate(value)]
        return urlencode(pairs, quote_via=quote)
    return quote(to_string(value), safe="")


def filter_format(ctx: Any, value: Any, *args: Any) -> str:
    """printf-style formatting: "%s has %d items" | format(name, count).

    Raises:
        FilterError(FILTER_INVALID_ARGUMENT): On a format/argument mismatch
    """
    params = tuple(to_string(arg) if isinstance(arg, SafeString) else arg for arg in args)
    try:
        return to_string(value) % params
    except (TypeError, ValueError) as e:
        raise create_error(
            "FILTER_INVALID_ARGUMENT",
            filter_name="format",
            detail=str(e),
        ) from e
