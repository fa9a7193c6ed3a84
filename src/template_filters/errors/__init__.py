"""Filter error handling - Structured errors with context."""

from .errors import ErrorCategory, ErrorTemplate, FilterError
from .factory import ErrorFactory, create_error, get_error_factory
from .registry import ErrorRegistry

__all__ = [
    # Core error types
    "FilterError",
    "ErrorCategory",
    "ErrorTemplate",
    # Registry and factory
    "ErrorRegistry",
    "ErrorFactory",
    # Convenience functions
    "get_error_factory",
    "create_error",
]
