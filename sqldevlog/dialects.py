"""Database placeholder and literal conventions.

A :class:`Dialect` is a plain descriptor. The scanner and renderer read its
fields instead of branching on the dialect name, so supporting another
database means adding a descriptor and registering it here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Union

from sqldevlog.exceptions import UnsupportedDialectError

__all__ = (
    "DIALECTS",
    "DIALECT_ALIASES",
    "MYSQL",
    "POSTGRES",
    "SQLITE",
    "TDS",
    "Dialect",
    "DialectName",
    "MarkerStyle",
    "get_dialect",
)


class MarkerStyle(str, Enum):
    """How placeholders refer to parameters.

    - NUMBERED: marker followed by a 1-based parameter number (``$1``, ``@1``)
    - SEQUENTIAL: bare marker, the n-th marker binds the n-th parameter (``?``)
    """

    NUMBERED = "numbered"
    SEQUENTIAL = "sequential"

    def __str__(self) -> str:
        return self.value


class DialectName(str, Enum):
    """Identifiers of the built-in dialects."""

    POSTGRES_STYLE = "postgres"
    SEQUENCED_STYLE = "tds"
    SEQUENTIAL_STYLE = "mysql"
    SQLITE = "sqlite"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Dialect:
    """Descriptor of one database wire convention.

    Attributes:
        name: Registry name of the dialect.
        marker: Placeholder marker character.
        marker_style: Whether markers carry a parameter number.
        case_sensitive_identifiers: Whether quoted identifiers are case sensitive.
        true_literal: Spelling of boolean true.
        false_literal: Spelling of boolean false.
        binary_prefix: Text preceding hex digits of a binary literal.
        binary_suffix: Text following hex digits of a binary literal.
        binary_uppercase: Emit uppercase hex digits.
        array_prefix: Opening of an array literal.
        array_suffix: Closing of an array literal.
    """

    name: str
    marker: str
    marker_style: MarkerStyle
    case_sensitive_identifiers: bool = True
    true_literal: str = "TRUE"
    false_literal: str = "FALSE"
    binary_prefix: str = "x'"
    binary_suffix: str = "'"
    binary_uppercase: bool = False
    array_prefix: str = "("
    array_suffix: str = ")"

    @property
    def is_numbered(self) -> bool:
        return self.marker_style is MarkerStyle.NUMBERED

    def __str__(self) -> str:
        return self.name


POSTGRES: Final = Dialect(
    name=DialectName.POSTGRES_STYLE.value,
    marker="$",
    marker_style=MarkerStyle.NUMBERED,
    binary_prefix="'\\x",
    array_prefix="ARRAY[",
    array_suffix="]",
)
TDS: Final = Dialect(
    name=DialectName.SEQUENCED_STYLE.value,
    marker="@",
    marker_style=MarkerStyle.NUMBERED,
    case_sensitive_identifiers=False,
    true_literal="1",
    false_literal="0",
    binary_prefix="0x",
    binary_suffix="",
    binary_uppercase=True,
)
MYSQL: Final = Dialect(
    name=DialectName.SEQUENTIAL_STYLE.value,
    marker="?",
    marker_style=MarkerStyle.SEQUENTIAL,
    case_sensitive_identifiers=False,
    array_prefix="JSON_ARRAY(",
)
SQLITE: Final = Dialect(
    name=DialectName.SQLITE.value,
    marker="?",
    marker_style=MarkerStyle.SEQUENTIAL,
    case_sensitive_identifiers=False,
    true_literal="1",
    false_literal="0",
    binary_prefix="X'",
    array_prefix="json_array(",
)

DIALECTS: Final[dict[str, Dialect]] = {dialect.name: dialect for dialect in (POSTGRES, TDS, MYSQL, SQLITE)}

DIALECT_ALIASES: Final[dict[str, str]] = {
    "postgresql": "postgres",
    "pg": "postgres",
    "postgrex": "postgres",
    "asyncpg": "postgres",
    "psycopg": "postgres",
    "mssql": "tds",
    "tsql": "tds",
    "sqlserver": "tds",
    "myxql": "mysql",
    "mariadb": "mysql",
    "asyncmy": "mysql",
    "sqlite3": "sqlite",
    "aiosqlite": "sqlite",
}


def get_dialect(dialect: "Union[Dialect, DialectName, str]") -> Dialect:
    """Resolve a dialect tag to its descriptor.

    Args:
        dialect: A descriptor, a :class:`DialectName`, or a dialect name or alias.

    Raises:
        UnsupportedDialectError: If the tag does not name a supported dialect.

    Returns:
        The dialect descriptor.
    """
    if isinstance(dialect, Dialect):
        return dialect
    if not isinstance(dialect, str):
        raise UnsupportedDialectError(dialect, tuple(DIALECTS))
    key = str(dialect).strip().lower()
    key = DIALECT_ALIASES.get(key, key)
    try:
        return DIALECTS[key]
    except KeyError:
        raise UnsupportedDialectError(dialect, tuple(DIALECTS)) from None
