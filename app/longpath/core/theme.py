"""Color theme for longpath console output.

Colors come from the bundled ``data/theme.toml``; any subset can be
overridden in ~/.config/longpath/theme.toml. Invalid files never stop the
CLI: they are logged and the defaults are used instead.
"""

import logging
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from longpath.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _check_hex(name: str, value: object) -> str:
    """Return ``value`` stripped if it is a #RGB or #RRGGBB color."""
    if not isinstance(value, str):
        raise ValueError(f"{name}: color must be a string")
    color = value.strip()
    if not color.startswith("#"):
        raise ValueError(f"{name}: color must start with '#'")
    digits = color[1:]
    if len(digits) not in (3, 6):
        raise ValueError(f"{name}: color must be #RGB or #RRGGBB format")
    if any(c not in "0123456789abcdefABCDEF" for c in digits):
        raise ValueError(f"{name}: invalid hex color '{color}'")
    return color


class ThemeColors(BaseModel):
    """Palette used by the CLI, one hex color per role."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Length classification of a record
    over_limit: str = "#f53263"
    near_limit: str = "#faf870"
    within_limit: str = "#03b971"

    directory: str = "#0e8ac8"
    link: str = "#d44ebc"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        return _check_hex(info.field_name, v)

    def to_styles(self) -> dict[str, str]:
        """Map the palette to Rich style definitions."""
        styles = self.model_dump()
        styles.update(
            {
                "error": f"bold {self.error}",
                "over_limit": f"bold {self.over_limit}",
                "link": f"italic {self.link}",
                "bold_header": f"bold {self.header}",
                "dim": self.muted,
                "record.path": self.text,
                "record.length": self.info,
            }
        )
        return styles


def get_bundled_theme_path() -> Path:
    """Path of the default theme shipped inside the package."""
    return Path(str(resources.files("longpath.data").joinpath("theme.toml")))


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Returns:
        Color names mapped to string values (other value types are
        dropped), or None if the file is missing or unreadable.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return None
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Load the palette, applying user overrides on top of the bundled theme.

    Args:
        user_path: Override file. Defaults to the XDG config location.

    Returns:
        Validated colors; the built-in defaults if validation fails.
    """
    colors = _load_toml_colors(get_bundled_theme_path())
    if colors is None:
        logger.error("Bundled theme is missing; the installation may be broken")
        colors = {}

    user_path = user_path or get_user_theme_path()
    overrides = _load_toml_colors(user_path)
    if overrides:
        logger.debug("Applying %d theme overrides from %s", len(overrides), user_path)
        colors = {**colors, **overrides}

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build a Rich theme from a palette (loaded from disk if omitted)."""
    return Theme((colors or load_theme()).to_styles())


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme


def reload_theme() -> Theme:
    """Re-read the theme files and replace the cached theme."""
    global _cached_theme
    _cached_theme = get_rich_theme()
    return _cached_theme
