"""Filter registry - name to function lookup with arity checking."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import Any

from template_filters.config.models import FiltersConfig
from template_filters.errors import ErrorFactory, FilterError, create_error, get_error_factory
from template_filters.logging import FilterLogger, get_logger
from template_filters.types import ExtraArgs
from template_filters.values import resolve_timezone

from .collections import (
    filter_batch,
    filter_default,
    filter_first,
    filter_join,
    filter_keys,
    filter_last,
    filter_length,
    filter_merge,
    filter_reverse,
    filter_slice,
    filter_sort,
    filter_split,
)
from .dates import filter_date
from .encoding import filter_json_encode
from .numbers import filter_abs, filter_number_format, filter_round
from .strings import (
    filter_capitalize,
    filter_escape,
    filter_format,
    filter_lower,
    filter_nl2br,
    filter_raw,
    filter_replace,
    filter_striptags,
    filter_title,
    filter_trim,
    filter_upper,
    filter_url_encode,
)

FilterFunc = Callable[..., Any]


@dataclass(frozen=True)
class FilterSpec:
    """A registered filter.

    min_args/max_args count the arguments after the primary value;
    max_args=None means variadic.
    """

    name: str
    func: FilterFunc
    min_args: int = 0
    max_args: int | None = 0
    extra_args: ExtraArgs = ExtraArgs.IGNORE
    description: str = ""

    def expected(self) -> str:
        """Human-readable argument count, e.g. "1 to 2 argument(s)"."""
        if self.max_args is None:
            return f"at least {self.min_args} argument(s)"
        if self.min_args == self.max_args:
            return f"{self.min_args} argument(s)"
        return f"{self.min_args} to {self.max_args} argument(s)"


class FilterRegistry:
    """Catalog of filters available to the template evaluator.

    The evaluator resolves a name with lookup() and calls the result as
    ``func(ctx, primary, *args)``; invoke() does both in one step.
    """

    def __init__(
        self,
        config: FiltersConfig | None = None,
        logger: FilterLogger | None = None,
        error_factory: ErrorFactory | None = None,
    ):
        """Initialize an empty registry.

        Args:
            config: Filter configuration
            logger: Optional logger (defaults to the "registry" logger)
            error_factory: Factory used to wrap unexpected exceptions
        """
        self._filters: dict[str, FilterSpec] = {}
        self._config = config or FiltersConfig()
        self._logger = logger or get_logger("registry")
        self._errors = error_factory or get_error_factory()

    @property
    def config(self) -> FiltersConfig:
        return self._config

    def register(self, spec: FilterSpec, replace: bool = False) -> None:
        """Register a filter.

        Args:
            spec: Filter definition
            replace: Allow overriding an existing name

        Raises:
            ValueError: If the name is taken and replace is False
        """
        if spec.name in self._filters and not replace:
            msg = f"Filter already registered: {spec.name}"
            raise ValueError(msg)
        self._filters[spec.name] = spec
        self._logger.debug("Filter registered", filter_name=spec.name)

    def get(self, name: str) -> FilterSpec:
        """Get a filter definition by name.

        Raises:
            FilterError(FILTER_UNKNOWN): If no filter has that name
        """
        spec = self._filters.get(name)
        if spec is None:
            raise create_error(
                "FILTER_UNKNOWN",
                filter_name=name,
                supported_filters=", ".join(self.names()),
            )
        return spec

    def names(self) -> list[str]:
        """Registered filter names, sorted."""
        return sorted(self._filters)

    def __contains__(self, name: object) -> bool:
        return name in self._filters

    def __len__(self) -> int:
        return len(self._filters)

    def lookup(self, name: str) -> FilterFunc:
        """Resolve a name to a callable ``(ctx, primary, *args) -> value``.

        The callable applies the same checks as invoke().

        Raises:
            FilterError(FILTER_UNKNOWN): If no filter has that name
        """
        self.get(name)
        return partial(self.invoke, name)

    def invoke(self, name: str, ctx: Any, value: Any, *args: Any) -> Any:
        """Apply a filter.

        Args:
            name: Filter name
            ctx: Template context, passed through untouched
            value: Primary value
            *args: Filter arguments

        Returns:
            Filtered value

        Raises:
            FilterError: On unknown names, bad arity, or a failing filter
        """
        spec = self.get(name)
        call_args = self._check_arity(spec, args)

        self._logger.debug("Invoking filter", filter_name=name, arg_count=len(call_args))

        try:
            return spec.func(ctx, value, *call_args)
        except FilterError as e:
            error = e if e.filter_name == name else e.with_context(filter_name=name)
            self._logger.warning(str(error), filter_name=name, code=error.code)
            if error is e:
                raise
            raise error from e
        except Exception as e:
            error = self._errors.from_exception(e, filter_name=name)
            self._logger.error(str(error), filter_name=name, code=error.code)
            raise error from e

    def _check_arity(self, spec: FilterSpec, args: tuple[Any, ...]) -> tuple[Any, ...]:
        """Validate the argument count, dropping ignorable extras."""
        given = len(args)
        too_many = spec.max_args is not None and given > spec.max_args

        if given < spec.min_args or (
            too_many and (spec.extra_args == ExtraArgs.REJECT or self._config.strict_arguments)
        ):
            raise create_error(
                "FILTER_ARGUMENTS",
                filter_name=spec.name,
                given=given,
                expected=spec.expected(),
            )

        if too_many:
            self._logger.debug(
                "Ignoring extra filter arguments",
                filter_name=spec.name,
                ignored=given - spec.max_args,  # type: ignore[operator]
            )
            return args[: spec.max_args]
        return args


def builtin_filters(config: FiltersConfig | None = None) -> list[FilterSpec]:
    """Build the specs for every built-in filter.

    Date and number_format defaults are bound from config.

    Raises:
        FilterError(CONFIG_INVALID): If the configured timezone is unknown
    """
    config = config or FiltersConfig()

    try:
        default_timezone = resolve_timezone(config.date.timezone)
    except ValueError as e:
        raise create_error("CONFIG_INVALID", detail=str(e)) from e

    date = partial(
        filter_date,
        default_format=config.date.format,
        default_timezone=default_timezone,
    )
    number_format = partial(
        filter_number_format,
        default_decimals=config.number_format.decimals,
        default_decimal_point=config.number_format.decimal_point,
        default_thousands_sep=config.number_format.thousands_separator,
    )
    reject = ExtraArgs.REJECT

    return [
        FilterSpec("abs", filter_abs, description="Absolute value as a float"),
        FilterSpec("batch", filter_batch, 1, 2, reject, "Group items into fixed-size batches"),
        FilterSpec("capitalize", filter_capitalize, description="Uppercase the first character"),
        FilterSpec("date", date, 0, 2, reject, "Format a date with PHP-style tokens"),
        FilterSpec("default", filter_default, 0, 1, description="Fallback for nil or empty string"),
        FilterSpec("e", filter_escape, 0, 1, reject, "Alias of escape"),
        FilterSpec("escape", filter_escape, 0, 1, reject, "Escape for html or url output"),
        FilterSpec("first", filter_first, description="First item or character"),
        FilterSpec("format", filter_format, 0, None, description="printf-style formatting"),
        FilterSpec("join", filter_join, 0, 1, description="Join items with a separator"),
        FilterSpec("json_encode", filter_json_encode, description="Serialize to JSON"),
        FilterSpec("keys", filter_keys, description="Keys of a mapping or indexes of a sequence"),
        FilterSpec("last", filter_last, description="Last item or character"),
        FilterSpec("length", filter_length, description="Character or item count"),
        FilterSpec("lower", filter_lower, description="Lowercase"),
        FilterSpec("merge", filter_merge, 1, 1, reject, "Concatenate two sequences"),
        FilterSpec("nl2br", filter_nl2br, description="Newlines to <br />, marked safe"),
        FilterSpec("number_format", number_format, 0, 3, reject, "Group thousands"),
        FilterSpec("raw", filter_raw, description="Mark as safe"),
        FilterSpec("replace", filter_replace, 1, 1, reject, "Replace substrings from a mapping"),
        FilterSpec("reverse", filter_reverse, description="Reverse items or characters"),
        FilterSpec("round", filter_round, 0, 2, reject, "Round with common, ceil or floor mode"),
        FilterSpec("slice", filter_slice, 1, 2, reject, "Extract part of a sequence or string"),
        FilterSpec("sort", filter_sort, description="Sort items"),
        FilterSpec("split", filter_split, 1, 2, reject, "Split a string"),
        FilterSpec("striptags", filter_striptags, description="Remove markup tags"),
        FilterSpec("title", filter_title, description="Capitalize every word"),
        FilterSpec("trim", filter_trim, 0, 2, reject, "Strip whitespace or characters"),
        FilterSpec("upper", filter_upper, description="Uppercase"),
        FilterSpec("url_encode", filter_url_encode, description="Percent-encode"),
    ]


def create_default_registry(
    config: FiltersConfig | None = None,
    logger: FilterLogger | None = None,
) -> FilterRegistry:
    """Create a registry holding every built-in filter.

    Args:
        config: Filter configuration (defaults to FiltersConfig())
        logger: Optional logger

    Returns:
        Populated FilterRegistry
    """
    registry = FilterRegistry(config=config, logger=logger)
    for spec in builtin_filters(registry.config):
        registry.register(spec)
    return registry


# Built-in filters under the default configuration
FILTERS: dict[str, FilterFunc] = {spec.name: spec.func for spec in builtin_filters()}
