"""Filter configuration loader."""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from template_filters.errors import create_error
from template_filters.logging import get_logger
from template_filters.types import LogFormat, LogLevel, ValidationIssue, ValidationResult
from template_filters.values.timezones import resolve_timezone

from .models import DateConfig, FiltersConfig, LoggingConfig, NumberFormatConfig

CONFIG_PATH_ENV = "TEMPLATE_FILTERS_CONFIG"
DEFAULT_CONFIG_FILE = "template-filters.yaml"

# ${NAME}, ${NAME:-fallback} or ${NAME:?message}
ENV_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<op>[-?])(?P<arg>[^}]*))?\}")

logger = get_logger("config")


def _substitute(match: re.Match[str]) -> str:
    name = match.group("name")
    value = os.environ.get(name)
    if value is not None:
        return value

    if match.group("op") == "-":
        return match.group("arg")

    message = match.group("arg") if match.group("op") == "?" else None
    raise create_error(
        "CONFIG_INVALID",
        detail=message or f"Environment variable {name} is required but not set",
    )


def resolve_env_vars(value: str) -> str:
    """Replace ${VAR} references in value with environment values.

    ``${VAR:-fallback}`` substitutes fallback when VAR is unset;
    ``${VAR:?message}`` fails with message. A bare ``${VAR}`` must be set.

    Raises:
        FilterError(CONFIG_INVALID): If a required variable is not set
    """
    return ENV_REFERENCE.sub(_substitute, value)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return base updated with override, merging nested dictionaries."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = deep_merge(current, value)
        merged[key] = value
    return merged


def _resolve_tree(data: Any) -> Any:
    if isinstance(data, str):
        return resolve_env_vars(data)
    if isinstance(data, dict):
        return {key: _resolve_tree(item) for key, item in data.items()}
    if isinstance(data, list):
        return [_resolve_tree(item) for item in data]
    return data


class ConfigLoader:
    """Load and validate filter configuration."""

    VALID_KEYS = {"strict_arguments", "date", "number_format", "logging"}

    def __init__(self) -> None:
        self._config: FiltersConfig | None = None
        self._config_path: Path | None = None

    @property
    def config_path(self) -> Path | None:
        return self._config_path

    def load(
        self,
        path: str | Path | None = None,
        use_defaults: bool = True,
        overrides: dict[str, Any] | None = None,
    ) -> FiltersConfig:
        """Load configuration from a YAML file.

        Without a path, TEMPLATE_FILTERS_CONFIG is consulted, then
        ./template-filters.yaml. A missing file yields the defaults unless
        use_defaults is False.

        Args:
            path: Config file path
            use_defaults: Fall back to defaults when no file exists
            overrides: Values merged over the file contents before validation

        Returns:
            Loaded FiltersConfig

        Raises:
            FilterError(CONFIG_INVALID): If the file is missing, malformed or invalid
        """
        if path is None:
            path = os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_FILE

        config_path = Path(path)

        if not config_path.exists():
            if not use_defaults:
                raise create_error(
                    "CONFIG_INVALID",
                    detail=f"Config file {config_path} does not exist",
                )
            logger.info("No config file found, using defaults", path=str(config_path))
            return self.load_from_dict(overrides or {})

        try:
            data = yaml.safe_load(config_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"{config_path} is not valid YAML: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration root must be a mapping",
            )

        data = _resolve_tree(data)
        if overrides:
            data = deep_merge(data, overrides)

        return self.load_from_dict(data, config_path)

    def load_defaults(self) -> FiltersConfig:
        """Build the default configuration."""
        return self.load_from_dict({})

    def load_from_dict(self, data: dict[str, Any], config_path: Path | None = None) -> FiltersConfig:
        """Validate data and build a FiltersConfig from it.

        Unknown keys are logged as warnings and otherwise ignored.

        Raises:
            FilterError(CONFIG_INVALID): Listing every validation error
        """
        result = self.validate(data)
        for issue in result.warnings:
            logger.warning(issue.message, path=issue.path)

        if not result.valid:
            lines = "\n".join(f"- {issue.path}: {issue.message}" for issue in result.errors)
            raise create_error("CONFIG_INVALID", detail=f"Invalid filter configuration:\n{lines}")

        self._config = self._dict_to_config(data)
        self._config_path = config_path
        logger.debug("Configuration loaded", path=str(config_path) if config_path else None)
        return self._config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Check config data without building a config.

        Args:
            data: Raw configuration mapping

        Returns:
            ValidationResult; unknown keys are warnings, everything else errors
        """
        errors: list[ValidationIssue] = []
        warnings = [
            ValidationIssue(path=key, message=f"Unknown configuration key: {key}", severity="warning")
            for key in data
            if key not in self.VALID_KEYS
        ]

        if not isinstance(data.get("strict_arguments", False), bool):
            errors.append(ValidationIssue(path="strict_arguments", message="must be a boolean"))

        for section in ("date", "number_format", "logging"):
            if not isinstance(data.get(section, {}), dict):
                errors.append(ValidationIssue(path=section, message=f"{section} must be a mapping"))

        date = data.get("date")
        if isinstance(date, dict):
            if not isinstance(date.get("format", ""), str):
                errors.append(ValidationIssue(path="date.format", message="format must be a string"))
            if "timezone" in date:
                try:
                    resolve_timezone(str(date["timezone"]))
                except ValueError as e:
                    errors.append(ValidationIssue(path="date.timezone", message=str(e)))

        number_format = data.get("number_format")
        if isinstance(number_format, dict):
            decimals = number_format.get("decimals", 0)
            if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
                errors.append(
                    ValidationIssue(
                        path="number_format.decimals",
                        message="decimals must be a non-negative integer",
                    )
                )
            for key in ("decimal_point", "thousands_separator"):
                if not isinstance(number_format.get(key, ""), str):
                    errors.append(
                        ValidationIssue(path=f"number_format.{key}", message=f"{key} must be a string")
                    )

        logging_data = data.get("logging")
        if isinstance(logging_data, dict):
            level = logging_data.get("level", LogLevel.WARN.value)
            if str(level).upper() not in LogLevel.__members__:
                errors.append(ValidationIssue(path="logging.level", message=f"Unknown log level: {level}"))
            log_format = logging_data.get("format", LogFormat.JSON.value)
            if log_format not in {f.value for f in LogFormat}:
                errors.append(
                    ValidationIssue(path="logging.format", message=f"Unknown log format: {log_format}")
                )

        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

    def get(self) -> FiltersConfig:
        """Return the last loaded configuration.

        Raises:
            FilterError(CONFIG_INVALID): If nothing has been loaded yet
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="No configuration has been loaded")
        return self._config

    def _dict_to_config(self, data: dict[str, Any]) -> FiltersConfig:
        date = data.get("date", {})
        number_format = data.get("number_format", {})
        logging_data = data.get("logging", {})

        return FiltersConfig(
            strict_arguments=data.get("strict_arguments", False),
            date=DateConfig(
                format=date.get("format", DateConfig.format),
                timezone=str(date.get("timezone", DateConfig.timezone)),
            ),
            number_format=NumberFormatConfig(
                decimals=number_format.get("decimals", NumberFormatConfig.decimals),
                decimal_point=number_format.get("decimal_point", NumberFormatConfig.decimal_point),
                thousands_separator=number_format.get(
                    "thousands_separator", NumberFormatConfig.thousands_separator
                ),
            ),
            logging=LoggingConfig(
                level=LogLevel(str(logging_data.get("level", LogLevel.WARN.value)).upper()),
                format=LogFormat(logging_data.get("format", LogFormat.JSON.value)),
                truncate_at=logging_data.get("truncate_at", LoggingConfig.truncate_at),
            ),
        )
