"""Placeholder extraction.

Scanning is lexical over the raw statement text: string literals and comments
are not recognized, so a marker-shaped substring inside a quoted literal is
reported as a placeholder too. Callers already depend on this output, so it
is kept as is.
"""

import re
from functools import lru_cache
from typing import Final, Union

from mypy_extensions import mypyc_attr

from sqldevlog.dialects import Dialect, DialectName, get_dialect

__all__ = ("PlaceholderOccurrence", "PlaceholderScanner", "scan")

_SCANNER_CACHE_SIZE: Final = 64


@mypyc_attr(allow_interpreted_subclasses=False)
class PlaceholderOccurrence:
    """Location of one placeholder and the parameter it binds.

    Attributes:
        start: Offset of the first character of the placeholder.
        end: Offset one past the last character of the placeholder.
        index: Zero-based index of the referenced parameter.
        placeholder_text: The placeholder as written in the statement.
    """

    __slots__ = ("end", "index", "placeholder_text", "start")

    def __init__(self, start: int, end: int, index: int, placeholder_text: str) -> None:
        self.start = start
        self.end = end
        self.index = index
        self.placeholder_text = placeholder_text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return (self.start, self.end, self.index) == (other.start, other.end, other.index)

    def __hash__(self) -> int:
        return hash((self.start, self.end, self.index))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(start={self.start!r}, end={self.end!r}, "
            f"index={self.index!r}, placeholder_text={self.placeholder_text!r})"
        )


@mypyc_attr(allow_interpreted_subclasses=False)
class PlaceholderScanner:
    """Finds the placeholders of one dialect in statement text."""

    __slots__ = ("_pattern", "dialect")

    def __init__(self, dialect: Dialect) -> None:
        self.dialect = dialect
        marker = re.escape(dialect.marker)
        self._pattern = re.compile(rf"{marker}(\d+)" if dialect.is_numbered else marker)

    def scan(self, sql: str) -> list[PlaceholderOccurrence]:
        """Extract placeholder occurrences in left-to-right order.

        Numbered markers bind parameter ``number - 1`` wherever they appear,
        so a marker may repeat or appear out of numeric order. Sequential
        markers bind parameters in the order they appear; digits after a
        sequential marker are ordinary text.

        Args:
            sql: Raw statement text.

        Returns:
            Occurrences sorted by position.
        """
        if self.dialect.is_numbered:
            return [
                PlaceholderOccurrence(match.start(), match.end(), int(match.group(1)) - 1, match.group(0))
                for match in self._pattern.finditer(sql)
                if int(match.group(1)) > 0
            ]
        return [
            PlaceholderOccurrence(match.start(), match.end(), ordinal, match.group(0))
            for ordinal, match in enumerate(self._pattern.finditer(sql))
        ]


@lru_cache(maxsize=_SCANNER_CACHE_SIZE)
def _get_scanner(dialect: Dialect) -> PlaceholderScanner:
    return PlaceholderScanner(dialect)


def scan(sql: str, dialect: "Union[Dialect, DialectName, str]") -> list[PlaceholderOccurrence]:
    """Locate placeholders of ``dialect`` in ``sql``.

    Raises:
        UnsupportedDialectError: If ``dialect`` is not a supported dialect.
    """
    return _get_scanner(get_dialect(dialect)).scan(sql)
