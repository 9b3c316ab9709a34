"""Console colour theme.

Colours come from the bundled ``data/theme.toml``. Any subset of them can
be overridden in ``$XDG_CONFIG_HOME/dirkeeper/theme.toml``; an unreadable
or invalid override falls back to the bundled colours.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from rich.theme import Theme

from dirkeeper.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

HexColor = Annotated[str, Field(pattern=r"^#(?:[0-9a-fA-F]{3}){1,2}$")]

# Rich style name -> (colour field, extra style attributes)
STYLE_MAP: dict[str, tuple[str, str]] = {
    "bold_header": ("header", "bold"),
    "border": ("border", ""),
    "muted": ("muted", ""),
    "success": ("success", ""),
    "warning": ("warning", ""),
    "error": ("error", "bold"),
    "info": ("info", ""),
    "listed": ("listed", ""),
    "removed": ("removed", ""),
    "skipped": ("skipped", ""),
    "archived": ("archived", ""),
}


class ThemeColors(BaseModel):
    """Hex colours (#RGB or #RRGGBB) used by the run and plan output."""

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"
    muted: HexColor = "#b2bec3"
    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"
    listed: HexColor = "#c1ff62"
    removed: HexColor = "#f53263"
    skipped: HexColor = "#faf870"
    archived: HexColor = "#0e8ac8"


def read_theme_file(path: Path) -> dict[str, Any]:
    """Return the ``[colors]`` table of a theme file.

    A missing file yields an empty table; an unreadable or malformed one
    is logged and ignored.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return {}
    return colors


def load_colors() -> ThemeColors:
    """Merge the bundled colours with the user's overrides."""
    bundled = Path(str(resources.files("dirkeeper.data").joinpath("theme.toml")))
    merged = {**read_theme_file(bundled), **read_theme_file(get_user_theme_path())}
    try:
        return ThemeColors.model_validate(merged)
    except ValidationError as e:
        logger.warning("Invalid theme colours, using defaults: %s", e)
        return ThemeColors()


def build_theme(colors: ThemeColors) -> Theme:
    """Map the colours onto the Rich style names used by the CLI."""
    return Theme(
        {
            name: f"{attributes} {getattr(colors, field)}".strip()
            for name, (field, attributes) in STYLE_MAP.items()
        }
    )


@cache
def get_theme() -> Theme:
    """Return the Rich theme, built once per process."""
    return build_theme(load_colors())
