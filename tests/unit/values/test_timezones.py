"""Tests for timezone lookup."""

from datetime import UTC

import pytest

from template_filters.values import resolve_timezone


class TestResolveTimezone:
    """Tests for resolve_timezone."""

    @pytest.mark.parametrize("name", ["UTC", "utc", "Z"])
    def test_utc_aliases(self, name):
        assert resolve_timezone(name) is UTC

    def test_iana_zone(self):
        assert resolve_timezone("Australia/Perth").key == "Australia/Perth"

    @pytest.mark.parametrize("name", ["Nowhere/Special", "../etc/passwd"])
    def test_unknown(self, name):
        with pytest.raises(ValueError):
            resolve_timezone(name)
