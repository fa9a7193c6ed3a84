"""Tests for the filter registry."""

import logging
from datetime import datetime

import pytest

from template_filters.config import DateConfig, FiltersConfig, NumberFormatConfig
from template_filters.errors import FilterError
from template_filters.filters import FILTERS, FilterRegistry, FilterSpec, create_default_registry
from template_filters.types import ExtraArgs
from template_filters.values import SafeString

BUILTIN_NAMES = {
    "abs", "batch", "capitalize", "date", "default", "e", "escape", "first",
    "format", "join", "json_encode", "keys", "last", "length", "lower", "merge",
    "nl2br", "number_format", "raw", "replace", "reverse", "round", "slice",
    "sort", "split", "striptags", "title", "trim", "upper", "url_encode",
}


class TestRegistration:
    """Tests for registering and looking up filters."""

    def test_default_registry_has_builtins(self, registry):
        assert set(registry.names()) == BUILTIN_NAMES
        assert len(registry) == len(BUILTIN_NAMES)

    def test_module_level_filters(self):
        assert set(FILTERS) == BUILTIN_NAMES

    def test_contains(self, registry):
        assert "round" in registry
        assert "nope" not in registry

    def test_register_custom_filter(self):
        registry = FilterRegistry()
        registry.register(FilterSpec("shout", lambda ctx, v: f"{v}!"))
        assert registry.invoke("shout", None, "hey") == "hey!"

    def test_duplicate_registration(self):
        registry = FilterRegistry()
        spec = FilterSpec("shout", lambda ctx, v: v)
        registry.register(spec)
        with pytest.raises(ValueError):
            registry.register(spec)

    def test_replace_registration(self):
        registry = FilterRegistry()
        registry.register(FilterSpec("shout", lambda ctx, v: v))
        registry.register(FilterSpec("shout", lambda ctx, v: v.upper()), replace=True)
        assert registry.invoke("shout", None, "hey") == "HEY"

    def test_unknown_filter(self, registry):
        with pytest.raises(FilterError) as exc_info:
            registry.invoke("nope", None, "x")
        error = exc_info.value
        assert error.code == "FILTER_UNKNOWN"
        assert error.filter_name == "nope"
        assert "round" in error.detail

    def test_lookup_returns_callable(self, registry):
        round_filter = registry.lookup("round")
        assert round_filter(None, 3.116, 2) == 3.12

    def test_lookup_unknown(self, registry):
        with pytest.raises(FilterError) as exc_info:
            registry.lookup("nope")
        assert exc_info.value.code == "FILTER_UNKNOWN"


class TestInvocation:
    """Tests for invoking filters through the registry."""

    def test_concrete_cases(self, registry, perth_evening):
        assert registry.invoke("round", None, 3.115, 2) == 3.12
        assert registry.invoke("round", None, 3.123, 2, "floor") == 3.12
        assert registry.invoke("slice", None, ["a", "b", "c", "d", "e"], -3, 2) == ["c", "d"]
        assert registry.invoke("split", None, "a,b,c,d,e", ",", -3) == ["a", "b"]
        assert registry.invoke("batch", None, list(range(1, 9)), 3, "X") == [
            [1, 2, 3],
            [4, 5, 6],
            [7, 8, "X"],
        ]
        assert registry.invoke("first", None, "東京") == "東"
        assert registry.invoke("date", None, perth_evening, "c") == "1980-05-31T22:01:00+08:00"

    def test_context_is_passed_through_untouched(self, registry):
        ctx = object()
        assert registry.invoke("upper", ctx, "a") == "A"

    def test_alias(self, registry):
        assert registry.invoke("e", None, "<") == SafeString("&lt;")

    def test_alias_errors_carry_invoked_name(self, registry):
        with pytest.raises(FilterError) as exc_info:
            registry.invoke("e", None, "<", "js")
        assert exc_info.value.code == "FILTER_INVALID_ARGUMENT"
        assert exc_info.value.filter_name == "e"

    def test_out_of_range_numbers_degrade(self, registry):
        assert registry.invoke("round", None, 10**400) == float("inf")
        assert registry.invoke("abs", None, -(10**400)) == float("inf")
        assert registry.invoke("number_format", None, 10**400) == "inf"

    def test_variadic(self, registry):
        assert registry.invoke("format", None, "%s-%s-%s", 1, 2, 3) == "1-2-3"


class TestArity:
    """Tests for argument count checks."""

    def test_too_few(self, registry):
        with pytest.raises(FilterError) as exc_info:
            registry.invoke("slice", None, "abc")
        error = exc_info.value
        assert error.code == "FILTER_ARGUMENTS"
        assert error.filter_name == "slice"
        assert "1 to 2" in error.detail

    def test_too_many_rejected(self, registry):
        with pytest.raises(FilterError) as exc_info:
            registry.invoke("round", None, 1.0, 2, "common", "extra")
        assert exc_info.value.code == "FILTER_ARGUMENTS"

    def test_too_many_ignored(self, registry):
        assert registry.invoke("upper", None, "abc", "ignored", 42) == "ABC"

    def test_strict_arguments_rejects_ignorable_extras(self, strict_registry):
        with pytest.raises(FilterError) as exc_info:
            strict_registry.invoke("upper", None, "abc", "extra")
        assert exc_info.value.code == "FILTER_ARGUMENTS"

    def test_expected_descriptions(self):
        func = lambda ctx, v, *a: v  # noqa: E731
        assert FilterSpec("x", func, 1, 1).expected() == "1 argument(s)"
        assert FilterSpec("x", func, 0, 2).expected() == "0 to 2 argument(s)"
        assert FilterSpec("x", func, 0, None).expected() == "at least 0 argument(s)"

    def test_reject_policy_on_custom_filter(self):
        registry = FilterRegistry()
        registry.register(FilterSpec("id", lambda ctx, v: v, 0, 0, ExtraArgs.REJECT))
        with pytest.raises(FilterError):
            registry.invoke("id", None, 1, 2)


class TestErrorHandling:
    """Tests for error propagation and wrapping."""

    def test_filter_errors_propagate_unchanged(self, registry):
        with pytest.raises(FilterError) as exc_info:
            registry.invoke("round", None, 1.0, 0, "sideways")
        assert exc_info.value.code == "FILTER_INVALID_ARGUMENT"
        assert exc_info.value.filter_name == "round"

    def test_unexpected_exceptions_are_wrapped(self):
        def broken(ctx, value):
            raise ZeroDivisionError("division by zero")

        registry = FilterRegistry()
        registry.register(FilterSpec("broken", broken))

        with pytest.raises(FilterError) as exc_info:
            registry.invoke("broken", None, 1)
        error = exc_info.value
        assert error.code == "FILTER_FAILED"
        assert error.filter_name == "broken"
        assert "ZeroDivisionError" in error.detail
        assert isinstance(error.__cause__, ZeroDivisionError)

    def test_caller_errors_are_logged(self, registry, caplog):
        with caplog.at_level(logging.WARNING, logger="template_filters"):
            with pytest.raises(FilterError):
                registry.invoke("batch", None, [1], 0)
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.filter_name == "batch"
        assert record.code == "FILTER_INVALID_ARGUMENT"


class TestConfiguredDefaults:
    """Tests for config-bound filter defaults."""

    def test_date_format_and_timezone(self):
        config = FiltersConfig(date=DateConfig(format="Y-m-d H:i T", timezone="UTC"))
        registry = create_default_registry(config)
        assert registry.invoke("date", None, datetime(2020, 5, 1, 9, 30)) == "2020-05-01 09:30 UTC"

    def test_number_format(self):
        config = FiltersConfig(
            number_format=NumberFormatConfig(decimals=2, decimal_point=",", thousands_separator=".")
        )
        registry = create_default_registry(config)
        assert registry.invoke("number_format", None, 1234.5) == "1.234,50"

    def test_unknown_timezone(self):
        config = FiltersConfig(date=DateConfig(timezone="Nowhere/Special"))
        with pytest.raises(FilterError) as exc_info:
            create_default_registry(config)
        assert exc_info.value.code == "CONFIG_INVALID"
