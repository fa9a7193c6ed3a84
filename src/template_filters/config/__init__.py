"""Filter configuration."""

from .loader import ConfigLoader, deep_merge, resolve_env_vars
from .models import DateConfig, FiltersConfig, LoggingConfig, NumberFormatConfig

__all__ = [
    "ConfigLoader",
    "FiltersConfig",
    "DateConfig",
    "NumberFormatConfig",
    "LoggingConfig",
    "resolve_env_vars",
    "deep_merge",
]
