"""Configuration system for bigfile.

This module merges user overrides onto the defaults, validates the result,
and loads settings from environment variables and INI files.
"""

from configparser import ConfigParser
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union
import copy
import os

from bigfile.constants import (
    DEFAULT_FEATURES,
    DEFAULT_FILESIZE,
    DEFAULT_FILESIZE_UNIT,
    DEFAULT_PATTERN,
)


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


class FilesizeUnit(str, Enum):
    """Unit the size threshold is expressed in."""

    MIB = "MiB"
    BYTES = "bytes"


# (document_id, size in the configured unit) -> treat as big
PatternPredicate = Callable[[Any, int], bool]
PatternSpec = Union[tuple[str, ...], PatternPredicate]


# Schema: key -> (type, default, min, max, description)
CONFIG_SCHEMA: dict[str, tuple[type, Any, Any, Any, str]] = {
    "filesize": (int, DEFAULT_FILESIZE, 0, None, "Size threshold in filesize_unit"),
    "filesize_unit": (str, DEFAULT_FILESIZE_UNIT, None, None, "Unit of the threshold"),
    "pattern": (tuple, DEFAULT_PATTERN, None, None, "Glob patterns or a predicate"),
    "features": (tuple, DEFAULT_FEATURES, None, None, "Features disabled for big files"),
}


@dataclass(frozen=True)
class Config:
    """Merged, validated configuration.

    Built once by setup() and shared read-only by every detection call.
    """

    filesize: int = DEFAULT_FILESIZE
    filesize_unit: FilesizeUnit = FilesizeUnit(DEFAULT_FILESIZE_UNIT)
    pattern: PatternSpec = DEFAULT_PATTERN
    features: tuple[str, ...] = DEFAULT_FEATURES

    @property
    def has_predicate(self) -> bool:
        """True when the pattern is a callable rather than a set of globs."""
        return callable(self.pattern)

    @property
    def globs(self) -> tuple[str, ...]:
        """Glob patterns the pre-read handler is registered on.

        A predicate pattern applies to every document, so it registers on "*".
        """
        if self.has_predicate:
            return ("*",)
        return self.pattern  # type: ignore[return-value]

    @property
    def description(self) -> str:
        """Human-readable summary of the rule, used as the registration description."""
        return (
            f"[bigfile] Performance rule for handling files over "
            f"{self.filesize} {self.filesize_unit.value}"
        )


def default_values() -> dict[str, Any]:
    """Get a fresh dict of default configuration values."""
    return {key: default for key, (_, default, _, _, _) in CONFIG_SCHEMA.items()}


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Merge overrides onto base, key by key.

    Nested mappings are merged recursively. Any other value in overrides,
    including sequences and callables, replaces the base value wholesale.
    Neither input is mutated.

    Args:
        base: Default values.
        overrides: User-supplied values.

    Returns:
        New merged dictionary.
    """
    result = copy.copy(dict(base))
    for key, value in overrides.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


def _validate_filesize(value: Any) -> int:
    _, _, min_val, _, _ = CONFIG_SCHEMA["filesize"]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"Invalid value for filesize: {value!r} (expected int)")
    if value < min_val:
        raise ConfigError(f"Value for filesize is {value}, but minimum is {min_val}")
    return value


def _validate_unit(value: Any) -> FilesizeUnit:
    try:
        return FilesizeUnit(value)
    except ValueError as e:
        allowed = ", ".join(unit.value for unit in FilesizeUnit)
        raise ConfigError(
            f"Invalid value for filesize_unit: {value!r} (expected one of {allowed})"
        ) from e


def _validate_pattern(value: Any) -> PatternSpec:
    if callable(value):
        return value
    if isinstance(value, str):
        value = (value,)
    if not isinstance(value, (list, tuple)):
        raise ConfigError(
            f"Invalid value for pattern: {value!r} (expected glob string, list or callable)"
        )
    if not value:
        raise ConfigError("Value for pattern is empty; use '*' to match every document")
    for glob in value:
        if not isinstance(glob, str) or not glob:
            raise ConfigError(f"Invalid glob in pattern: {glob!r}")
    return tuple(value)


def _validate_features(value: Any) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigError(f"Invalid value for features: {value!r} (expected list of names)")
    for name in value:
        if not isinstance(name, str) or not name:
            raise ConfigError(f"Invalid feature name in features: {name!r}")
    return tuple(value)


def build_config(overrides: Optional[Mapping[str, Any]] = None) -> Config:
    """Merge overrides onto the defaults and validate the result.

    Args:
        overrides: User-supplied values. None means defaults only.

    Returns:
        Validated Config.

    Raises:
        ConfigError: If an override key is unknown or a value is invalid.
    """
    overrides = overrides or {}
    unknown = sorted(set(overrides) - set(CONFIG_SCHEMA))
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    values = deep_merge(default_values(), overrides)

    return Config(
        filesize=_validate_filesize(values["filesize"]),
        filesize_unit=_validate_unit(values["filesize_unit"]),
        pattern=_validate_pattern(values["pattern"]),
        features=_validate_features(values["features"]),
    )


def _split_list(raw_value: str) -> list[str]:
    """Split a comma-separated INI value into stripped, non-empty items."""
    return [item.strip() for item in raw_value.split(",") if item.strip()]


def load_config_file(config_path: Path, section: str = "bigfile") -> dict[str, Any]:
    """Read overrides from an INI file.

    Lists (pattern, features) are written comma-separated. Only keys present
    in the file are returned, so the result can be merged onto defaults.

    Args:
        config_path: Path to INI file.
        section: Section holding the settings.

    Returns:
        Dictionary of overrides.

    Raises:
        ConfigError: If a value cannot be converted.
    """
    parser = ConfigParser()
    parser.read(config_path)

    result: dict[str, Any] = {}
    if not parser.has_section(section):
        return result

    for key in parser.options(section):
        raw_value = parser.get(section, key)
        if key not in CONFIG_SCHEMA:
            raise ConfigError(f"Unknown key [{section}].{key} in {config_path}")
        typ = CONFIG_SCHEMA[key][0]
        if typ is int:
            try:
                result[key] = int(raw_value)
            except ValueError as e:
                raise ConfigError(
                    f"Invalid value for [{section}].{key}: {raw_value!r} (expected int)"
                ) from e
        elif typ is tuple:
            result[key] = _split_list(raw_value)
        else:
            result[key] = raw_value.strip()

    return result


def _overrides_from_env() -> dict[str, Any]:
    """Collect overrides from BIGFILE_* environment variables."""
    result: dict[str, Any] = {}

    filesize = os.getenv("BIGFILE_FILESIZE")
    if filesize:
        try:
            result["filesize"] = int(filesize)
        except ValueError as e:
            raise ConfigError(
                f"Invalid value for BIGFILE_FILESIZE: {filesize!r} (expected int)"
            ) from e

    unit = os.getenv("BIGFILE_FILESIZE_UNIT")
    if unit:
        result["filesize_unit"] = unit

    pattern = os.getenv("BIGFILE_PATTERN")
    if pattern:
        result["pattern"] = _split_list(pattern)

    features = os.getenv("BIGFILE_FEATURES")
    if features is not None:
        result["features"] = _split_list(features)

    return result


@lru_cache(maxsize=1)
def load_settings() -> Config:
    """Load settings from the config file and environment variables.

    The config file path comes from BIGFILE_CONFIG; environment variables
    take precedence over the file. Settings are cached for the lifetime of
    the process. Use load_settings.cache_clear() to reload settings.

    Returns:
        Validated Config.

    Raises:
        ConfigError: If the file or environment holds invalid values.
    """
    overrides: dict[str, Any] = {}

    config_path_str = os.getenv("BIGFILE_CONFIG")
    if config_path_str:
        config_path = Path(config_path_str)
        try:
            config_exists = config_path.exists()
        except PermissionError:
            config_exists = False
        if config_exists:
            overrides = load_config_file(config_path)

    overrides = deep_merge(overrides, _overrides_from_env())
    return build_config(overrides)
