"""Structured logging for the filter library.

Provides JSON or colored logging with automatic trace context injection.

Usage:
    from template_filters.logging import get_logger

    logger = get_logger("registry")
    logger.debug("Filter invoked", filter_name="round", arg_count=2)
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

from opentelemetry import trace

from template_filters.logging.colors import COMPONENT, FIELDS, RESET, level_color
from template_filters.types import LogFormat, LogLevel

ROOT_LOGGER_NAME = "template_filters"

# LogRecord attributes that are not user-supplied fields
_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "message", "taskName",
    }
)

_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}


def _component(record: logging.LogRecord) -> str:
    prefix = ROOT_LOGGER_NAME + "."
    return record.name[len(prefix):] if record.name.startswith(prefix) else record.name


class StructuredLogFormatter(logging.Formatter):
    """JSON formatter with trace context injection.

    Formats log records as JSON with:
    - timestamp (ISO 8601)
    - level
    - component (logger name without the package prefix)
    - message
    - trace_id / span_id (if a span is recording)
    - Additional fields from extra
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "component": _component(record),
            "message": record.getMessage(),
        }

        span = trace.get_current_span()
        if span and span.is_recording():
            ctx = span.get_span_context()
            if ctx.is_valid:
                log_data["trace_id"] = format(ctx.trace_id, "032x")
                log_data["span_id"] = format(ctx.span_id, "016x")

        log_data.update(_extra_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ColoredLogFormatter(logging.Formatter):
    """Human-readable formatter: [COMPONENT] message {fields}."""

    def __init__(self, truncate_at: int = 200):
        super().__init__()
        self.truncate_at = truncate_at

    def format(self, record: logging.LogRecord) -> str:
        color = level_color(record.levelno)
        component = _component(record).upper()
        output = f"{COMPONENT}[{component}]{RESET} {color}{record.getMessage()}{RESET}"

        fields = _extra_fields(record)
        if fields:
            fields_str = str(fields)
            if len(fields_str) > self.truncate_at:
                fields_str = fields_str[: self.truncate_at] + "..."
            output += f" {FIELDS}{fields_str}{RESET}"

        if record.exc_info:
            output += "\n" + self.formatException(record.exc_info)

        return output


class FilterLogger:
    """Structured logger wrapper.

    Keyword arguments become structured fields on the record.
    """

    def __init__(self, name: str):
        """Initialize logger.

        Args:
            name: Component name
        """
        self.name = name
        self._logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        self._logger.log(level, message, extra=kwargs)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self._log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self._logger.exception(message, extra=kwargs)


# Logger cache
_loggers: dict[str, FilterLogger] = {}


def get_logger(name: str) -> FilterLogger:
    """Get or create a structured logger.

    Args:
        name: Logger name (component name)

    Returns:
        FilterLogger instance
    """
    if name not in _loggers:
        _loggers[name] = FilterLogger(name)
    return _loggers[name]


def reset_loggers() -> None:
    """Reset logger cache and package handlers (for testing)."""
    global _loggers  # noqa: PLW0603
    _loggers = {}
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)


def configure_logging(
    level: LogLevel = LogLevel.WARN,
    log_format: LogFormat = LogFormat.JSON,
    output: TextIO | None = None,
    truncate_at: int = 200,
) -> logging.Handler:
    """Attach a single handler to the package root logger.

    Replaces any handler installed by a previous call.

    Args:
        level: Minimum level to emit
        log_format: JSON or colored output
        output: Stream to write to (defaults to stderr)
        truncate_at: Max length of the fields suffix in colored output

    Returns:
        The installed handler
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(output or sys.stderr)
    if log_format == LogFormat.JSON:
        handler.setFormatter(StructuredLogFormatter())
    else:
        handler.setFormatter(ColoredLogFormatter(truncate_at=truncate_at))

    root.addHandler(handler)
    root.setLevel(_LEVELS.get(level, logging.WARNING))
    return handler
