"""Turns error codes and stray exceptions into FilterErrors."""

from typing import Any

from .errors import FilterError
from .registry import ErrorRegistry


class ErrorFactory:
    """Creates FilterErrors from codes or arbitrary exceptions."""

    def __init__(self, registry: ErrorRegistry | None = None):
        self.registry = registry or ErrorRegistry()

    def from_exception(self, error: Exception, filter_name: str | None = None) -> FilterError:
        """Wrap error as a FilterError attributed to filter_name.

        FilterErrors keep their code and take filter_name when one is given;
        anything else becomes FILTER_FAILED carrying the exception type and text.
        """
        if isinstance(error, FilterError):
            return error.with_context(filter_name=filter_name)

        return self.registry.create(
            "FILTER_FAILED",
            {
                "filter_name": filter_name,
                "error_type": type(error).__name__,
                "error": str(error),
            },
        )

    def create(self, code: str, context: dict[str, Any] | None = None, **kwargs: Any) -> FilterError:
        """Create a FilterError from code; kwargs extend context."""
        return self.registry.create(code, {**(context or {}), **kwargs})


_default_factory: ErrorFactory | None = None


def get_error_factory() -> ErrorFactory:
    """Return the shared ErrorFactory, creating it on first use."""
    global _default_factory  # noqa: PLW0603
    if _default_factory is None:
        _default_factory = ErrorFactory()
    return _default_factory


def create_error(code: str, **context: Any) -> FilterError:
    """Create a FilterError from the shared factory.

    Example:
        raise create_error("FILTER_TYPE", filter_name="split", value_type="int")
    """
    return get_error_factory().create(code, context)
