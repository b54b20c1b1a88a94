"""Literal rendering of bound parameter values.

:func:`render` never raises on unexpected input: anything that is not a
known variant is rendered as its ``repr`` so a log line is still produced.
"""

import uuid
from functools import singledispatch
from typing import Any, Final, Union

from sqldevlog._serialization import encode_json
from sqldevlog.dialects import Dialect, DialectName, get_dialect
from sqldevlog.exceptions import SerializationError
from sqldevlog.values import Array, Binary, Boolean, Composite, DateTime, Decimal, Integer, Json, Null, Text

__all__ = ("UUID_BYTE_LENGTH", "quote_text", "render")

UUID_BYTE_LENGTH: Final = 16


def quote_text(text: str) -> str:
    """Single-quote ``text``, doubling embedded single quotes."""
    return "'" + text.replace("'", "''") + "'"


def render(value: Any, dialect: "Union[Dialect, DialectName, str]") -> str:
    """Render a value as SQL literal text for ``dialect``.

    Args:
        value: A :data:`~sqldevlog.values.Value` variant.
        dialect: Dialect whose literal conventions apply.

    Raises:
        UnsupportedDialectError: If ``dialect`` is not a supported dialect.

    Returns:
        Literal text suitable for display.
    """
    return _render(value, get_dialect(dialect))


@singledispatch
def _render(value: Any, dialect: Dialect) -> str:
    return repr(value)


@_render.register
def _(value: Null, dialect: Dialect) -> str:
    return "NULL"


@_render.register
def _(value: Boolean, dialect: Dialect) -> str:
    return dialect.true_literal if value.value else dialect.false_literal


@_render.register
def _(value: Integer, dialect: Dialect) -> str:
    return format(value.value, "d")


@_render.register
def _(value: Decimal, dialect: Dialect) -> str:
    return value.text


@_render.register
def _(value: Text, dialect: Dialect) -> str:
    return quote_text(value.value)


@_render.register
def _(value: Binary, dialect: Dialect) -> str:
    if len(value.value) == UUID_BYTE_LENGTH:
        return quote_text(str(uuid.UUID(bytes=value.value)))
    digits = value.value.hex()
    if dialect.binary_uppercase:
        digits = digits.upper()
    return f"{dialect.binary_prefix}{digits}{dialect.binary_suffix}"


@_render.register
def _(value: DateTime, dialect: Dialect) -> str:
    return quote_text(value.value.isoformat())


@_render.register
def _(value: Array, dialect: Dialect) -> str:
    return dialect.array_prefix + ", ".join(_render(item, dialect) for item in value.items) + dialect.array_suffix


@_render.register
def _(value: Composite, dialect: Dialect) -> str:
    return "(" + ", ".join(_render(item, dialect) for item in value.items) + ")"


@_render.register
def _(value: Json, dialect: Dialect) -> str:
    try:
        return quote_text(encode_json(value.value))
    except SerializationError:
        return repr(value.value)
