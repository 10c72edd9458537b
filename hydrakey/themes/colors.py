# Hydrakey Transient Menus — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Color palettes and the Rich theme used by Hydrakey.

Palettes are plain classes of hex strings. Every color also exposes a bold variant
through the `_b` suffix (e.g. `OneColors.CYAN_b`), resolved by `ColorsMeta`, so the
same constants work as Rich markup styles and as prompt_toolkit style strings.
"""
from rich.style import Style
from rich.theme import Theme


class ColorsMeta(type):
    """Resolve `<COLOR>_b` attribute lookups to a bold style string."""

    def __getattr__(cls, name: str) -> str:
        if name.endswith("_b"):
            base = name[:-2]
            value = cls.__dict__.get(base)
            if isinstance(value, str):
                return f"bold {value}"
        raise AttributeError(f"'{cls.__name__}' has no color named '{name}'")


class OneColors(metaclass=ColorsMeta):
    """Atom One Dark palette."""

    BLACK = "#282C34"
    GUTTER_GREY = "#4B5263"
    COMMENT_GREY = "#5C6370"
    WHITE = "#ABB2BF"
    DARK_RED = "#BE5046"
    LIGHT_RED = "#E06C75"
    DARK_YELLOW = "#D19A66"
    LIGHT_YELLOW = "#E5C07B"
    GREEN = "#98C379"
    CYAN = "#56B6C2"
    BLUE = "#61AFEF"
    MAGENTA = "#C678DD"


class NordColors(metaclass=ColorsMeta):
    """Nord palette, used for the default console theme."""

    POLAR_NIGHT_ORIGIN = "#2E3440"
    POLAR_NIGHT_BRIGHT = "#434C5E"
    SNOW_STORM_BRIGHTEST = "#ECEFF4"
    SNOW_STORM_BRIGHT = "#D8DEE9"
    FROST_TEAL = "#8FBCBB"
    FROST_ICE = "#88C0D0"
    FROST_BLUE = "#81A1C1"
    FROST_DEEP = "#5E81AC"
    RED = "#BF616A"
    ORANGE = "#D08770"
    YELLOW = "#EBCB8B"
    GREEN = "#A3BE8C"
    PURPLE = "#B48EAD"


def get_nord_theme() -> Theme:
    """Rich theme with Nord colors for log levels, menu keys and notices."""
    return Theme(
        {
            "info": Style(color=NordColors.FROST_ICE),
            "warning": Style(color=NordColors.YELLOW),
            "error": Style(color=NordColors.RED, bold=True),
            "success": Style(color=NordColors.GREEN),
            "logging.level.debug": Style(color=NordColors.FROST_DEEP),
            "logging.level.info": Style(color=NordColors.FROST_ICE),
            "logging.level.warning": Style(color=NordColors.YELLOW),
            "logging.level.error": Style(color=NordColors.RED, bold=True),
            "logging.level.critical": Style(
                color=NordColors.RED, bold=True, reverse=True
            ),
            "menu.key": Style(color=NordColors.FROST_TEAL, bold=True),
            "menu.exit": Style(color=NordColors.ORANGE),
            "menu.notice": Style(color=NordColors.POLAR_NIGHT_BRIGHT, italic=True),
        }
    )
