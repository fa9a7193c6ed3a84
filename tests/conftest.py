"""
Pytest configuration and shared fixtures for template filter tests.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from template_filters.config import FiltersConfig  # noqa: E402
from template_filters.filters import FilterRegistry, create_default_registry  # noqa: E402
from template_filters.logging import reset_loggers  # noqa: E402

# Fixed +08:00 zone named like Australia/Perth, without needing tz data
AWST = timezone(timedelta(hours=8), "AWST")


# =============================================================================
# Registry Fixtures
# =============================================================================


@pytest.fixture
def registry() -> FilterRegistry:
    """Registry with every built-in filter and default configuration."""
    return create_default_registry()


@pytest.fixture
def strict_registry() -> FilterRegistry:
    """Registry that rejects surplus arguments for every filter."""
    return create_default_registry(FiltersConfig(strict_arguments=True))


# =============================================================================
# Date Fixtures
# =============================================================================


@pytest.fixture
def perth_evening() -> datetime:
    """1980-05-31 22:01:00 +08:00."""
    return datetime(1980, 5, 31, 22, 1, 0, tzinfo=AWST)


@pytest.fixture
def perth_early_morning() -> datetime:
    """2018-02-03 02:01:44.123456 +08:00."""
    return datetime(2018, 2, 3, 2, 1, 44, 123456, tzinfo=AWST)


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_logger_state():
    """Reset logger state before and after each test."""
    reset_loggers()
    yield
    reset_loggers()


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
