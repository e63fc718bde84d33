"""Locations of longpath's user files.

Settings and the theme override live in the XDG config directory:
``$XDG_CONFIG_HOME/longpath`` or ``~/.config/longpath``.
"""

import os
from pathlib import Path

APP_NAME = "longpath"

SETTINGS_FILE = "config.toml"
THEME_FILE = "theme.toml"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Resolve an XDG base directory for this application.

    An unset or empty variable falls back to ``~/<default_subdir>``.
    """
    base = os.environ.get(env_var)
    root = Path(base) if base else Path.home() / default_subdir
    return root / APP_NAME


def get_config_dir() -> Path:
    """Directory holding the settings and theme files."""
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Path of the scan settings file."""
    return get_config_dir() / SETTINGS_FILE


def get_user_theme_path() -> Path:
    """Path of the optional theme override file."""
    return get_config_dir() / THEME_FILE


def ensure_config_dir() -> Path:
    """Create the config directory if needed and return it.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_config_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Cannot create config directory {path}: {e.strerror or e}"
        raise RuntimeError(msg) from e
    return path
