"""Console colors for folder-index.

Each named style used by the CLI maps to one hex color. Users may override
any subset of them in ~/.config/folder-index/theme.toml:

    [colors]
    directory = "#5f87ff"
    error = "#ff005f"

Unknown keys or malformed colors make the whole override file invalid; the
defaults are used instead and a warning is logged.
"""

import logging
import re
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from folder_index.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


def _check_hex(value: str) -> str:
    color = value.strip()
    if not _HEX_COLOR.fullmatch(color):
        msg = f"{value!r} is not a #RGB or #RRGGBB color"
        raise ValueError(msg)
    return color


HexColor = Annotated[str, AfterValidator(_check_hex)]


class ThemeColors(BaseModel):
    """Hex colors for the CLI styles."""

    model_config = ConfigDict(extra="forbid")

    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"
    muted: HexColor = "#b2bec3"
    info: HexColor = "#0ec1c8"
    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    directory: HexColor = "#0e8ac8"
    file: HexColor = "#ffffff"


def load_theme(path: Path | None = None) -> ThemeColors:
    """Read user color overrides.

    Args:
        path: Theme file. Defaults to the user theme path.

    Returns:
        Colors with overrides applied, or the defaults if the file is
        missing or invalid.
    """
    theme_path = path or get_user_theme_path()
    try:
        with open(theme_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return ThemeColors()
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", theme_path, e)
        return ThemeColors()

    overrides = data.get("colors", {})
    if not isinstance(overrides, dict):
        logger.warning("Ignoring theme file %s: [colors] must be a table", theme_path)
        return ThemeColors()

    try:
        return ThemeColors.model_validate(overrides)
    except ValidationError as e:
        logger.warning("Ignoring theme file %s: %s", theme_path, e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for the given colors.

    Besides one style per color, the theme defines ``bold_header`` for
    table headings and ``dim`` for secondary notes.
    """
    colors = colors or load_theme()
    styles = colors.model_dump()
    styles["error"] = f"bold {colors.error}"
    styles["directory"] = f"bold {colors.directory}"
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """Rich theme of the current user, loaded once per process."""
    return get_rich_theme()
