"""Filter error types."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error source categories."""

    INVOCATION = "INVOCATION"
    ARGUMENT = "ARGUMENT"
    TYPE = "TYPE"
    CONFIG = "CONFIG"
    SYSTEM = "SYSTEM"


@dataclass
class FilterError(Exception):
    """Raised by filters and the registry.

    ``message`` is a one-line summary, ``detail`` says what was wrong with the
    input and ``suggestion`` how to fix it. ``filter_name`` is the name the
    filter was invoked under, which may be an alias.
    """

    code: str
    category: ErrorCategory
    message: str
    detail: str | None = None
    suggestion: str | None = None
    filter_name: str | None = None
    cause: "FilterError | None" = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for error reporting; cause is nested the same way."""
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
            "suggestion": self.suggestion,
            "filter_name": self.filter_name,
            "timestamp": self.timestamp.isoformat(),
            "cause": self.cause.to_dict() if self.cause else None,
        }

    def with_context(self, filter_name: str | None = None) -> "FilterError":
        """Return a copy attributed to filter_name, keeping the rest."""
        return replace(self, filter_name=filter_name or self.filter_name)


@dataclass
class ErrorTemplate:
    """Message, detail and suggestion patterns for one error code."""

    code: str
    category: ErrorCategory
    message_template: str
    detail_template: str | None = None
    suggestion_template: str | None = None
