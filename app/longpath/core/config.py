"""Scan settings and their TOML persistence.

Settings provide the defaults for ``longpath scan``; command-line
options override them for a single run.

Configuration is stored in ~/.config/longpath/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from longpath.core.paths import get_settings_path
from longpath.models.record import LengthUnit

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 240


class ScanSettings(BaseModel):
    """Defaults for path length scans.

    Attributes:
        threshold: Length at or above which a path is flagged.
        unit: Unit in which path lengths are counted.
        sort_entries: List directories by name for a stable output order.
        over_only: Show only paths at or over the threshold by default.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    threshold: Annotated[
        int,
        Field(ge=0, description="Path length threshold"),
    ] = DEFAULT_THRESHOLD
    unit: Annotated[
        LengthUnit,
        Field(description="Length unit: utf16, chars or bytes"),
    ] = LengthUnit.UTF16
    sort_entries: Annotated[
        bool,
        Field(description="Sort directory listings by name"),
    ] = True
    over_only: Annotated[
        bool,
        Field(description="Only report paths over the threshold"),
    ] = True


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file is not valid TOML."""


def load_settings(path: Path | None = None) -> ScanSettings:
    """Load scan settings from a TOML file.

    A missing file yields the default settings.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated ScanSettings object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content doesn't
            match the schema.
    """
    config_path = path or get_settings_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return ScanSettings()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return ScanSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_settings(settings: ScanSettings, path: Path | None = None) -> Path:
    """Save scan settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The settings to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_settings_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(settings_to_dict(settings), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e

    return config_path


def settings_to_dict(settings: ScanSettings) -> dict[str, Any]:
    """Convert settings to a TOML-serializable dictionary."""
    return settings.model_dump(mode="json")


def update_setting(settings: ScanSettings, key: str, value: str) -> ScanSettings:
    """Return a copy of ``settings`` with one field set from a string.

    Args:
        settings: Current settings.
        key: Field name.
        value: New value as typed on the command line.

    Returns:
        Updated, validated settings.

    Raises:
        ConfigError: If the key is unknown or the value is invalid.
    """
    if key not in ScanSettings.model_fields:
        known = ", ".join(sorted(ScanSettings.model_fields))
        raise ConfigError(f"Unknown setting '{key}' (known: {known})")

    data = settings.model_dump()
    data[key] = value
    try:
        return ScanSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for '{key}': {value}") from e
