"""ANSI color composition for query log lines."""

from enum import Enum
from typing import Final, Optional, Union

from sqlglot.errors import TokenError
from sqlglot.tokens import Tokenizer

from sqldevlog.exceptions import ImproperConfigurationError

__all__ = ("PARAMETER_COLOR", "RESET", "Color", "annotate", "resolve_color", "statement_color")

PARAMETER_COLOR: Final = "\x1b[38;5;31m"
RESET: Final = "\x1b[0m"


class Color(str, Enum):
    """Terminal colors a log line can be printed in."""

    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"
    LIGHT_BLACK = "light_black"
    LIGHT_RED = "light_red"
    LIGHT_GREEN = "light_green"
    LIGHT_YELLOW = "light_yellow"
    LIGHT_BLUE = "light_blue"
    LIGHT_MAGENTA = "light_magenta"
    LIGHT_CYAN = "light_cyan"
    LIGHT_WHITE = "light_white"
    DEFAULT = "default"

    def __str__(self) -> str:
        return self.value

    @property
    def escape(self) -> str:
        """ANSI escape sequence selecting this color as foreground."""
        return _ESCAPES[self]


_BASE_ORDER: Final = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")
_ESCAPES: Final[dict[Color, str]] = {
    **{Color(name): f"\x1b[{30 + offset}m" for offset, name in enumerate(_BASE_ORDER)},
    **{Color(f"light_{name}"): f"\x1b[{90 + offset}m" for offset, name in enumerate(_BASE_ORDER)},
    Color.DEFAULT: "\x1b[39m",
}

_STATEMENT_COLORS: Final[dict[str, Color]] = {
    "SELECT": Color.CYAN,
    "INSERT": Color.GREEN,
    "UPDATE": Color.YELLOW,
    "DELETE": Color.RED,
    "BEGIN": Color.MAGENTA,
    "COMMIT": Color.MAGENTA,
    "ROLLBACK": Color.MAGENTA,
}


def resolve_color(color: "Union[Color, str, None]") -> Optional[Color]:
    """Normalize a color given by name.

    Raises:
        ImproperConfigurationError: If the name is not a known color.
    """
    if color is None or isinstance(color, Color):
        return color
    try:
        return Color(color.strip().lower())
    except ValueError:
        msg = f"Unknown color {color!r}. Available: {', '.join(c.value for c in Color)}"
        raise ImproperConfigurationError(msg) from None


def annotate(literal: str, restore_color: "Union[Color, str, None]") -> str:
    """Wrap a rendered literal in the parameter accent color.

    The literal is followed by the escape of ``restore_color`` so the text
    after it continues in the surrounding line's color. ``None`` restores the
    terminal default attributes.

    Args:
        literal: Rendered SQL literal.
        restore_color: Color of the surrounding text.

    Returns:
        The colorized literal.
    """
    color = resolve_color(restore_color)
    suffix = RESET if color is None else color.escape
    return f"{PARAMETER_COLOR}{literal}{suffix}"


def statement_color(sql: str) -> Optional[Color]:
    """Pick a color from the statement's leading keyword.

    Leading comments and whitespace are skipped by the tokenizer. Statements
    the tokenizer cannot read get no color.

    Returns:
        The keyword color, or None for anything else.
    """
    try:
        tokens = Tokenizer().tokenize(sql)
    except TokenError:
        return None
    if not tokens:
        return None
    return _STATEMENT_COLORS.get(tokens[0].text.upper())
