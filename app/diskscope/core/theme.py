"""Console styles for diskscope output.

Every style the display layer refers to comes from here. Style names
follow the domain values they color:

- message kinds: ``info``, ``success``, ``warning``, ``error``
- deletion safety levels: one style per :class:`SafetyLevel` value
- tree entries: one style per :class:`NodeKind` value plus ``inaccessible``
- size shares: ``size.<level>`` for every size level

Colors come from the bundled ``data/theme.toml``; a ``[colors]`` table in
the user's ``theme.toml`` overrides any subset of them.
"""

import functools
import logging
import tomllib
from importlib import resources
from pathlib import Path
from typing import get_args

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.color import Color, ColorParseError
from rich.theme import Theme

from diskscope.core.paths import get_user_theme_path
from diskscope.filesystem.sizes import SizeLevel
from diskscope.safety.models import SafetyLevel
from diskscope.scanner.models import NodeKind

logger = logging.getLogger(__name__)

# Size share buckets borrow the message colors, from most to least alarming
SIZE_LEVEL_COLORS: dict[SizeLevel, str] = {
    "huge": "error",
    "large": "warning",
    "medium": "info",
    "small": "text",
    "tiny": "muted",
}


class ThemeColors(BaseModel):
    """Colors of the diskscope console, by role.

    Values are anything Rich can parse as a color (``#0e8ac8``,
    ``bright_red``, ``rgb(10,20,30)``).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    info: str = "#0ec1c8"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"

    safe: str = "#03b971"
    caution: str = "#faf870"
    danger: str = "#f53263"

    directory: str = "#0e8ac8"
    file: str = "#ffffff"
    inaccessible: str = "#d44ebc"

    @field_validator("*")
    @classmethod
    def check_color(cls, value: str) -> str:
        try:
            Color.parse(value)
        except ColorParseError as e:
            msg = f"not a color: {value!r}"
            raise ValueError(msg) from e
        return value

    def styles(self) -> dict[str, str]:
        """Map every style name used by the display layer to a Rich style."""
        styles = {
            "text": self.text,
            "muted": self.muted,
            "dim": self.muted,
            "border": self.border,
            "header": self.header,
            "bold_header": f"bold {self.header}",
            "info": self.info,
            "success": self.success,
            "warning": self.warning,
            "error": f"bold {self.error}",
            "inaccessible": f"italic {self.inaccessible}",
        }
        for level in SafetyLevel:
            color = getattr(self, level.value)
            styles[level.value] = f"bold {color}" if level == SafetyLevel.DANGER else color
        for kind in NodeKind:
            color = getattr(self, kind.value)
            styles[kind.value] = f"bold {color}" if kind == NodeKind.DIRECTORY else color
        for size in get_args(SizeLevel):
            styles[f"size.{size}"] = getattr(self, SIZE_LEVEL_COLORS[size])
        return styles


def read_colors(text: str, source: str) -> dict[str, str]:
    """Extract the ``[colors]`` table from TOML text.

    Malformed TOML or a non-table ``colors`` entry yields no colors.
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring theme %s: %s", source, e)
        return {}
    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme %s: 'colors' is not a table", source)
        return {}
    return {str(name): value for name, value in colors.items() if isinstance(value, str)}


def load_colors(user_path: Path | None = None) -> ThemeColors:
    """Merge the bundled colors with the user's overrides.

    Args:
        user_path: Override file (default: ``~/.config/diskscope/theme.toml``).

    Returns:
        The merged colors, or the built-in defaults if the merge is invalid.
    """
    bundled = resources.files("diskscope.data").joinpath("theme.toml").read_text()
    colors = read_colors(bundled, "bundled theme")

    user_path = user_path or get_user_theme_path()
    try:
        colors |= read_colors(user_path.read_text(), str(user_path))
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Cannot read theme %s: %s", user_path, e)

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


@functools.cache
def get_theme() -> Theme:
    """Rich theme of the console, loaded once per process."""
    return Theme(load_colors().styles())
