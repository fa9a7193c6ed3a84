"""Built-in template filters."""

from .dateformat import COMPOSITES, TOKENS, format_date
from .registry import (
    FILTERS,
    FilterFunc,
    FilterRegistry,
    FilterSpec,
    builtin_filters,
    create_default_registry,
)

__all__ = [
    "FILTERS",
    "FilterFunc",
    "FilterRegistry",
    "FilterSpec",
    "builtin_filters",
    "create_default_registry",
    # Date formatting
    "TOKENS",
    "COMPOSITES",
    "format_date",
]
