"""Scan and deletion settings.

This module provides the settings model and I/O functions for the
defaults applied by the CLI: exclusion patterns, depth limit, progress
interval and deletion behaviour.

Settings are stored in ~/.config/diskscope/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from diskscope.core.paths import get_config_path

logger = logging.getLogger(__name__)


class ScanSettings(BaseModel):
    """User settings for scans and deletions.

    Attributes:
        exclude_patterns: Exclusion patterns applied to every scan.
        max_depth: Default depth limit (None = unlimited).
        progress_interval: Visited entries between progress updates.
        use_trash: Move deleted paths to the trash instead of removing them.
        protect_system: Refuse to delete paths classified as system files.
    """

    model_config = ConfigDict(extra="forbid")

    exclude_patterns: Annotated[
        list[str],
        Field(default_factory=list, description="Default exclusion patterns"),
    ]
    max_depth: Annotated[
        int | None,
        Field(ge=0, description="Default depth limit (None = unlimited)"),
    ] = None
    progress_interval: Annotated[
        int,
        Field(ge=1, description="Entries between progress updates"),
    ] = 100
    use_trash: Annotated[
        bool,
        Field(description="Move deleted paths to the trash"),
    ] = True
    protect_system: Annotated[
        bool,
        Field(description="Refuse to delete system files"),
    ] = True


class ConfigError(Exception):
    """Base exception for settings errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the settings file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> ScanSettings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated ScanSettings object.

    Raises:
        ConfigNotFoundError: If the file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Settings file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read settings: {e}") from e

    try:
        return ScanSettings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid settings content: {e}") from e


def get_settings(path: Path | None = None) -> ScanSettings:
    """Load settings, falling back to defaults when no file exists.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Loaded settings, or defaults if the file is missing.

    Raises:
        ConfigError: If the file exists but is invalid.
    """
    try:
        return load_settings(path)
    except ConfigNotFoundError:
        logger.debug("No settings file, using defaults")
        return ScanSettings()


def save_settings(settings: ScanSettings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

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
    config_path = path or get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Failed to create settings directory: {e}") from e

    data = _settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write settings: {e}") from e

    return config_path


def _settings_to_dict(settings: ScanSettings) -> dict[str, object]:
    """Convert settings to a dictionary for TOML serialization.

    TOML has no null, so an unset depth limit is omitted.
    """
    result: dict[str, object] = {
        "exclude_patterns": list(settings.exclude_patterns),
        "progress_interval": settings.progress_interval,
        "use_trash": settings.use_trash,
        "protect_system": settings.protect_system,
    }
    if settings.max_depth is not None:
        result["max_depth"] = settings.max_depth
    return result
