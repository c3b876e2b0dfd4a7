"""Console colors for cruftctl.

The palette lives in ThemeColors. Any color can be overridden from the
``[colors]`` table of ``<config dir>/theme.toml``; each field becomes the
Rich style of the same name with ``_`` replaced by ``.``.
"""

import functools
import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from cruftctl.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _hex_color(value: str) -> str:
    color = value.strip()
    digits = color.removeprefix("#")
    if digits == color or len(digits) not in (3, 6):
        msg = f"expected #RGB or #RRGGBB, got {value!r}"
        raise ValueError(msg)
    try:
        int(digits, 16)
    except ValueError:
        msg = f"invalid hex color {value!r}"
        raise ValueError(msg) from None
    return color


HexColor = Annotated[str, AfterValidator(_hex_color)]

# Rendered bold on top of their color.
_BOLD_STYLES = frozenset({"header", "error", "match_dir"})


class ThemeColors(BaseModel):
    """Colors for cruftctl output, one per Rich style."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    match_dir: HexColor = "#c1ff62"
    match_file: HexColor = "#0e8ac8"

    def styles(self) -> dict[str, str]:
        """Map Rich style names (``match.dir``) to style definitions."""
        return {
            name.replace("_", "."): f"bold {color}" if name in _BOLD_STYLES else color
            for name, color in self.model_dump().items()
        }


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load the palette with user overrides applied.

    A missing theme file yields the default palette. A file that cannot
    be read or parsed, or that holds an invalid color, is ignored with a
    warning.

    Args:
        path: Theme file. If None, uses the user theme path.
    """
    theme_path = path or get_user_theme_path()
    try:
        with open(theme_path, "rb") as f:
            overrides = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return ThemeColors()
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", theme_path, e)
        return ThemeColors()

    try:
        colors = ThemeColors.model_validate(overrides)
    except ValidationError as e:
        logger.warning("Ignoring invalid theme file %s: %s", theme_path, e)
        return ThemeColors()

    logger.debug("Loaded theme overrides from %s", theme_path)
    return colors


@functools.cache
def get_theme() -> Theme:
    """Rich theme shared by the cruftctl consoles, loaded once."""
    return Theme(load_theme().styles())
