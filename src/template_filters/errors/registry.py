"""Error templates keyed by code."""

from typing import Any

from .errors import ErrorCategory, ErrorTemplate, FilterError

BUILTIN_TEMPLATES = (
    ErrorTemplate(
        code="FILTER_UNKNOWN",
        category=ErrorCategory.INVOCATION,
        message_template="Filter '{filter_name}' is not defined",
        detail_template="Supported filters: {supported_filters}",
        suggestion_template="Check the filter name for typos",
    ),
    ErrorTemplate(
        code="FILTER_ARGUMENTS",
        category=ErrorCategory.INVOCATION,
        message_template="Filter '{filter_name}' called with {given} argument(s)",
        detail_template="Expected {expected}",
        suggestion_template="Check the filter's documented arguments",
    ),
    ErrorTemplate(
        code="FILTER_INVALID_ARGUMENT",
        category=ErrorCategory.ARGUMENT,
        message_template="Invalid argument for filter '{filter_name}'",
        suggestion_template="Check the argument values passed to the filter",
    ),
    ErrorTemplate(
        code="FILTER_TYPE",
        category=ErrorCategory.TYPE,
        message_template="Filter '{filter_name}' cannot be applied to {value_type}",
    ),
    ErrorTemplate(
        code="FILTER_FAILED",
        category=ErrorCategory.SYSTEM,
        message_template="Filter '{filter_name}' failed",
        detail_template="{error_type}: {error}",
    ),
    ErrorTemplate(
        code="CONFIG_INVALID",
        category=ErrorCategory.CONFIG,
        message_template="Invalid filter configuration",
        suggestion_template="Check the configuration file and environment variables",
    ),
)


def _render(template: str | None, context: dict[str, Any]) -> str | None:
    """Fill {placeholders} from context; a missing key leaves template unchanged."""
    if template is None:
        return None
    try:
        return template.format(**context)
    except KeyError:
        return template


class ErrorRegistry:
    """Builds FilterErrors from registered templates."""

    def __init__(self) -> None:
        self._templates = {template.code: template for template in BUILTIN_TEMPLATES}

    def get_template(self, code: str) -> ErrorTemplate | None:
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        return list(self._templates)

    def register(self, template: ErrorTemplate) -> None:
        """Add a template, replacing any with the same code."""
        self._templates[template.code] = template

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: FilterError | None = None,
    ) -> FilterError:
        """Instantiate the error registered under code.

        Args:
            code: Error code
            context: Placeholder values; ``detail`` and ``filter_name`` are
                also copied onto the error
            cause: Underlying FilterError, if any

        Raises:
            ValueError: If no template is registered for code
        """
        template = self._templates.get(code)
        if template is None:
            raise ValueError(f"Unknown error code: {code}")

        context = context or {}
        return FilterError(
            code=template.code,
            category=template.category,
            message=_render(template.message_template, context) or f"Error {code}",
            # An explicit detail always wins over the template's
            detail=context.get("detail") or _render(template.detail_template, context),
            suggestion=_render(template.suggestion_template, context),
            filter_name=context.get("filter_name"),
            cause=cause,
        )
