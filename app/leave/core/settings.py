"""User defaults for leave.

Defaults are read from ``~/.config/leave/config.toml``:

    [defaults]
    recursive = false
    dirs = false

Command-line flags can only switch a default on, never off. ``force`` is
intentionally not configurable so the existence check always has to be
skipped explicitly.
"""

import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from leave.core.paths import get_settings_path


class DefaultFlags(BaseModel):
    """Flag defaults applied to every run.

    Attributes:
        recursive: Recursively delete directories.
        dirs: Delete empty directories.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    recursive: Annotated[
        bool,
        Field(description="Recursively delete directories"),
    ] = False
    dirs: Annotated[
        bool,
        Field(description="Delete empty directories"),
    ] = False


class Settings(BaseModel):
    """Top-level structure of config.toml."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    defaults: DefaultFlags = Field(default_factory=DefaultFlags)


class SettingsError(Exception):
    """Base exception for configuration file errors."""


class SettingsParseError(SettingsError):
    """Raised when the configuration file cannot be parsed."""


class SettingsValidationError(SettingsError):
    """Raised when the configuration file content is invalid."""


def load_settings(path: Path | None = None) -> Settings:
    """Load user defaults from a TOML file.

    A missing file is not an error; built-in defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default location.

    Returns:
        Validated Settings object.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsValidationError: If the content doesn't match the schema.
        SettingsError: If the file exists but cannot be read.
    """
    settings_path = path or get_settings_path()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return Settings()
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read {settings_path}: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsValidationError(f"Invalid configuration in {settings_path}: {e}") from e
