"""Configuration management for the just-tasks profiler.

This module provides the Settings dataclass and loading/validation functions.
Configuration values are read from config/settings.yaml.

Design Principles:
    - Config-Driven: Profiler output and logging are set from settings.yaml
    - Fail-Fast: Invalid values cause immediate failure
    - Clear Errors: Error messages include field paths (e.g., 'profiler.indent')
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class ProfilerConfig:
    """Task profiler configuration.

    Attributes:
        enabled: Whether tasks are profiled at all
        output_dir: Directory for profile files (None means the working directory)
        file_prefix: Prefix of the profile file name
        source: Source label written to otherData
        manifest_name: Manifest file read for package names
        strict_manifest: Raise on invalid manifests instead of ignoring them
        indent: JSON indent for the profile file (None writes compact JSON)
    """
    enabled: bool = True
    output_dir: str | None = None
    file_prefix: str = "just-tasks-Profile"
    source: str = "just-tasks profiler"
    manifest_name: str = "package.json"
    strict_manifest: bool = False
    indent: int | None = None


@dataclass
class ObservabilityConfig:
    """Logging configuration.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path to a log file
    """
    log_level: str = "INFO"
    log_file: str | None = None


@dataclass
class Settings:
    """Application settings container.

    Attributes:
        profiler: Profiler configuration
        observability: Logging configuration
    """
    profiler: ProfilerConfig = field(default_factory=ProfilerConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)


class SettingsError(Exception):
    """Base exception for settings-related errors."""

    pass


class SettingsFileError(SettingsError):
    """Raised when settings file cannot be read or parsed."""

    pass


class SettingsValidationError(SettingsError):
    """Raised when settings validation fails."""

    def __init__(self, message: str, invalid_fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.invalid_fields = invalid_fields or []


def _flatten_dict(d: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten a nested dictionary to dot-notation keys.

    Args:
        d: Dictionary to flatten
        prefix: Prefix for nested keys

    Returns:
        Flattened dictionary with dot-notation keys
    """
    result: dict[str, Any] = {}
    for key, value in d.items():
        new_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            result.update(_flatten_dict(value, new_key))
        else:
            result[new_key] = value
    return result


def validate_settings(settings: Settings) -> None:
    """Validate settings values.

    Args:
        settings: Settings object to validate

    Raises:
        SettingsValidationError: If any field holds an invalid value
    """
    invalid: list[str] = []
    profiler = settings.profiler

    for name in ("file_prefix", "source", "manifest_name"):
        value = getattr(profiler, name)
        if not isinstance(value, str) or not value:
            invalid.append(f"profiler.{name}")

    if profiler.output_dir is not None and not isinstance(profiler.output_dir, str):
        invalid.append("profiler.output_dir")

    for name in ("enabled", "strict_manifest"):
        if not isinstance(getattr(profiler, name), bool):
            invalid.append(f"profiler.{name}")

    # bool is an int subclass, so rule it out explicitly
    indent = profiler.indent
    if indent is not None and (isinstance(indent, bool) or not isinstance(indent, int) or indent < 0):
        invalid.append("profiler.indent")

    level = settings.observability.log_level
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        invalid.append("observability.log_level")

    if invalid:
        field_list = ", ".join(invalid)
        raise SettingsValidationError(
            f"Invalid configuration fields: {field_list}",
            invalid_fields=invalid
        )


def _yaml_to_settings(data: dict[str, Any]) -> Settings:
    """Convert YAML dictionary to Settings object.

    Args:
        data: Parsed YAML dictionary

    Returns:
        Settings object
    """
    def _build_profiler(data: dict[str, Any]) -> ProfilerConfig:
        return ProfilerConfig(
            enabled=data.get("enabled", True),
            output_dir=data.get("output_dir"),
            file_prefix=data.get("file_prefix", "just-tasks-Profile"),
            source=data.get("source", "just-tasks profiler"),
            manifest_name=data.get("manifest_name", "package.json"),
            strict_manifest=data.get("strict_manifest", False),
            indent=data.get("indent"),
        )

    def _build_observability(data: dict[str, Any]) -> ObservabilityConfig:
        return ObservabilityConfig(
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
        )

    return Settings(
        profiler=_build_profiler(data.get("profiler") or {}),
        observability=_build_observability(data.get("observability") or {}),
    )


def load_settings(path: str | Path = "config/settings.yaml") -> Settings:
    """Load settings from a YAML file.

    Args:
        path: Path to the settings YAML file (default: config/settings.yaml)

    Returns:
        Settings object with all configuration loaded

    Raises:
        SettingsFileError: If the file cannot be read or parsed
        SettingsValidationError: If any field is invalid

    Example:
        >>> settings = load_settings()
        >>> print(settings.profiler.file_prefix)
        just-tasks-Profile
    """
    path = Path(path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise SettingsFileError(f"Settings file not found: {path}") from e
    except yaml.YAMLError as e:
        raise SettingsFileError(f"Invalid YAML in settings file: {e}") from e

    if not isinstance(data, dict):
        raise SettingsFileError(f"Settings file must contain a mapping: {path}")

    settings = _yaml_to_settings(data)
    validate_settings(settings)

    return settings


def get_effective_settings(
    path: str | Path = "config/settings.yaml",
    overrides: dict[str, Any] | None = None
) -> Settings:
    """Load settings with optional runtime overrides.

    Args:
        path: Path to the settings YAML file
        overrides: Optional dictionary of field paths to override.
                   Use dot-notation (e.g., {"profiler.output_dir": "./profiles"})

    Returns:
        Settings object with overrides applied

    Raises:
        SettingsValidationError: If an override names an unknown field or
            leaves an invalid value
    """
    settings = load_settings(path)

    if overrides:
        flat_overrides = _flatten_dict(overrides)
        for field_path, value in flat_overrides.items():
            parts = field_path.split(".")
            obj: Any = settings
            for part in parts[:-1]:
                obj = getattr(obj, part, None)
            if obj is None or not hasattr(obj, parts[-1]):
                raise SettingsValidationError(
                    f"Unknown configuration field: {field_path}",
                    invalid_fields=[field_path]
                )
            setattr(obj, parts[-1], value)
        validate_settings(settings)

    return settings
