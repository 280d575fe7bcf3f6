"""Quire configuration loader."""

import os
import re
import typing
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from quire_core.errors import QuireError, create_error
from quire_core.output.wrapped_element import ScriptElement, StyleElement
from quire_core.types import FeedType, LogFormat, LogLevel, MachineDataKind, ValidationIssue, ValidationResult

from .models import RenderConfig

# Top-level keys holding wrapped elements, and how to build each entry
_ELEMENT_KEYS = {
    "styles": StyleElement,
    "scripts": ScriptElement,
}

# Top-level keys holding lists of case-insensitive kinds
_KIND_KEYS = {
    "feeds": FeedType,
    "machine_data": MachineDataKind,
}

_STRING_KEYS = ("blog_name", "author", "language", "link", "tag_class")


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        QuireError(CONFIG_INVALID) if a required var is not set
    """
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        if operator == "?":
            raise create_error(
                "CONFIG_INVALID",
                detail=operand or f"Required environment variable {var_name} not set",
            )
        raise create_error(
            "CONFIG_INVALID",
            detail=f"Required environment variable {var_name} not set",
        )

    return re.sub(pattern, replacer, value)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries; override wins on conflicts.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    if isinstance(data, str):
        return resolve_env_vars(data)
    return data


def _error(path: str, message: str) -> ValidationIssue:
    return ValidationIssue(path=path, message=message, severity="error")


class ConfigLoader:
    """Load and validate Quire configuration."""

    def __init__(self, logger: Any = None):
        """Initialize config loader.

        Args:
            logger: Optional QuireLogger instance
        """
        self._config: RenderConfig | None = None
        self._config_path: Path | None = None
        self._logger = logger

    def load(
        self,
        path: str | Path | None = None,
        use_defaults: bool = True,
        overrides: dict[str, Any] | None = None,
    ) -> RenderConfig:
        """Load configuration from file.

        Resolution order if path not specified:
        1. QUIRE_CONFIG_PATH environment variable
        2. ./quire.yaml
        3. ~/.quire/config.yaml
        4. If use_defaults=True and no file found, use default configuration

        Args:
            path: Optional path to config file
            use_defaults: If True, use default config when no file found
            overrides: Values deep-merged over the file's contents

        Returns:
            Loaded RenderConfig instance

        Raises:
            QuireError(CONFIG_INVALID) if the file is missing (when
            use_defaults=False), not valid YAML, or fails validation
        """
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path)

        if not config_path.exists():
            if use_defaults:
                if self._logger:
                    self._logger.info("config", "No config file found, using default configuration")
                return self.load_from_dict(overrides or {})
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
                path=str(config_path),
            )

        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
                path=str(config_path),
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration root must be a mapping, got {type(data).__name__}",
                path=str(config_path),
            )

        data = _resolve_env_vars_recursive(data)
        if overrides:
            data = deep_merge(data, overrides)

        return self.load_from_dict(data, config_path)

    def load_from_dict(self, data: dict[str, Any], config_path: Path | None = None) -> RenderConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded RenderConfig instance

        Raises:
            QuireError(CONFIG_INVALID) if configuration is invalid
        """
        validation = self.validate(data)
        if not validation.valid:
            error_messages = [f"- {issue.path}: {issue.message}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )

        if self._logger:
            for issue in validation.warnings:
                self._logger.warn("config", issue.message, path=issue.path)

        try:
            config = self._dict_to_config(data)
        except (QuireError, TypeError, ValueError) as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Failed to parse configuration: {e}",
            ) from e

        self._config = config
        self._config_path = config_path

        if self._logger:
            self._logger.info("config", "Configuration loaded successfully")

        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        valid_keys = {f.name for f in fields(RenderConfig)}
        for key in data:
            if key not in valid_keys:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )

        for key in _STRING_KEYS:
            if key in data and not isinstance(data[key], str):
                if key == "link" and data[key] is None:
                    continue
                errors.append(_error(key, f"{key} must be a string"))

        if "summary_paragraphs" in data:
            value = data["summary_paragraphs"]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                errors.append(_error("summary_paragraphs", "summary_paragraphs must be a non-negative integer"))

        if "data" in data:
            overlay = data["data"]
            if not isinstance(overlay, dict):
                errors.append(_error("data", "data must be a dictionary"))
            else:
                for key, value in overlay.items():
                    if not isinstance(value, str):
                        errors.append(_error(f"data.{key}", f"value of {key} must be a string"))

        for key, kind in _KIND_KEYS.items():
            if key not in data:
                continue
            if not isinstance(data[key], list):
                errors.append(_error(key, f"{key} must be a list"))
                continue
            accepted = ", ".join(member.value for member in kind)
            for index, value in enumerate(data[key]):
                if not isinstance(value, str) or kind.parse(value) is None:
                    errors.append(_error(f"{key}[{index}]", f"unrecognised {key} kind {value!r} (accepted: {accepted})"))

        for key, factory in _ELEMENT_KEYS.items():
            if key not in data:
                continue
            if not isinstance(data[key], list):
                errors.append(_error(key, f"{key} must be a list"))
                continue
            for index, value in enumerate(data[key]):
                try:
                    factory.deserialize(value)
                except QuireError as e:
                    errors.append(_error(f"{key}[{index}]", e.detail or e.message))

        if "logging" in data:
            errors.extend(self._validate_logging(data["logging"]))

        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

    def _validate_logging(self, logging: Any) -> list[ValidationIssue]:
        if not isinstance(logging, dict):
            return [_error("logging", "logging must be a dictionary")]

        errors: list[ValidationIssue] = []
        if "level" in logging and logging["level"] not in {level.value for level in LogLevel}:
            errors.append(_error("logging.level", f"unknown log level {logging['level']!r}"))
        if "format" in logging and logging["format"] not in {fmt.value for fmt in LogFormat}:
            errors.append(_error("logging.format", f"unknown log format {logging['format']!r}"))
        for section in ("components", "options"):
            if section in logging and not isinstance(logging[section], dict):
                errors.append(_error(f"logging.{section}", f"{section} must be a dictionary"))
        return errors

    def get(self) -> RenderConfig:
        """Get current configuration.

        Raises:
            QuireError(CONFIG_INVALID) if configuration not loaded
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="Configuration not loaded")
        return self._config

    def reload(self) -> RenderConfig:
        """Re-read the file the current configuration came from.

        Raises:
            QuireError(CONFIG_INVALID) if no config path is set or reload fails
        """
        if self._config_path is None:
            raise create_error("CONFIG_INVALID", detail="No config path set, cannot reload")
        return self.load(self._config_path, use_defaults=False)

    def _resolve_config_path(self) -> Path:
        """Resolve config file path using resolution order."""
        env_path = os.environ.get("QUIRE_CONFIG_PATH")
        if env_path:
            return Path(env_path)

        local_path = Path("quire.yaml")
        if local_path.exists():
            return local_path

        home_path = Path.home() / ".quire" / "config.yaml"
        if home_path.exists():
            return home_path

        # Not found - use local path as default
        return local_path

    def _dict_to_config(self, data: dict[str, Any]) -> RenderConfig:
        """Convert dictionary to RenderConfig, defaults for missing keys."""
        kwargs: dict[str, Any] = {}

        for field in fields(RenderConfig):
            if field.name not in data:
                continue
            value = data[field.name]
            factory = _ELEMENT_KEYS.get(field.name)
            if factory is not None:
                kwargs[field.name] = [factory.deserialize(item) for item in value]
            else:
                kwargs[field.name] = self._convert_field(field.type, value)

        return RenderConfig(**kwargs)

    def _convert_field(self, field_type: Any, value: Any) -> Any:
        """Coerce a validated YAML value into field_type.

        Recurses through list[...], dict[str, ...] and nested dataclasses;
        kinds with a case-insensitive parse() use it.
        """
        if value is None:
            return None

        origin = typing.get_origin(field_type)
        args = typing.get_args(field_type)

        if origin is list and isinstance(value, list) and args:
            return [self._convert_field(args[0], item) for item in value]
        if origin is dict and isinstance(value, dict) and len(args) == 2:
            return {key: self._convert_field(args[1], item) for key, item in value.items()}
        if is_dataclass(field_type) and isinstance(value, dict):
            return field_type(
                **{f.name: self._convert_field(f.type, value[f.name]) for f in fields(field_type) if f.name in value}
            )
        if isinstance(field_type, type) and issubclass(field_type, Enum) and isinstance(value, str):
            parse = getattr(field_type, "parse", None)
            return parse(value) if parse is not None else field_type(value)
        return value


# Convenience singleton
_default_loader: ConfigLoader | None = None


def get_config_loader() -> ConfigLoader:
    """Get default config loader singleton."""
    global _default_loader  # noqa: PLW0603
    if _default_loader is None:
        _default_loader = ConfigLoader()
    return _default_loader


def load_config(path: str | Path | None = None) -> RenderConfig:
    """Convenience function to load config.

    Args:
        path: Optional path to config file

    Returns:
        Loaded RenderConfig instance
    """
    return get_config_loader().load(path)
