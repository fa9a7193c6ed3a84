"""Shared types for template filters."""

from .enums import ExtraArgs, LogFormat, LogLevel, RoundMode, TrimSide
from .validation import ValidationIssue, ValidationResult

__all__ = [
    # Enums
    "ExtraArgs",
    "LogFormat",
    "LogLevel",
    "RoundMode",
    "TrimSide",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
