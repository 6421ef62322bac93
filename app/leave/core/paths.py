"""XDG-compliant path management for leave.

leave keeps no state between runs; the only files it reads are the
optional user configuration files under the XDG config directory:

- Defaults: ~/.config/leave/config.toml
- Theme: ~/.config/leave/theme.toml
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "leave"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/leave/ (or XDG_CONFIG_HOME/leave/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the defaults file path.

    Returns:
        Path to ~/.config/leave/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme file path.

    Returns:
        Path to ~/.config/leave/theme.toml.
    """
    return get_config_dir() / "theme.toml"
