"""Tagged representation of bound parameter values.

Every bound parameter is carried as one of a closed set of variants. Native
Python values are mapped onto the variants by :func:`to_value`; the renderer
dispatches on the variant type.
"""

import datetime
import decimal
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from functools import singledispatch
from typing import Any, Union

from typing_extensions import TypeAlias

__all__ = (
    "Array",
    "Binary",
    "Boolean",
    "Composite",
    "DateTime",
    "Decimal",
    "Integer",
    "Json",
    "Null",
    "Text",
    "Value",
    "to_value",
)


@dataclass(frozen=True, slots=True)
class Null:
    """SQL ``NULL``."""


@dataclass(frozen=True, slots=True)
class Boolean:
    value: bool


@dataclass(frozen=True, slots=True)
class Integer:
    value: int


@dataclass(frozen=True, slots=True)
class Decimal:
    """Numeric value kept as the exact text it was supplied with."""

    text: str


@dataclass(frozen=True, slots=True)
class Text:
    value: str


@dataclass(frozen=True, slots=True)
class Binary:
    value: bytes


@dataclass(frozen=True, slots=True)
class DateTime:
    """Date, datetime or time of day."""

    value: "datetime.date | datetime.time"


@dataclass(frozen=True, slots=True)
class Array:
    items: "tuple[Value, ...]"


@dataclass(frozen=True, slots=True)
class Composite:
    """Row value, rendered as a parenthesized tuple."""

    items: "tuple[Value, ...]"


@dataclass(frozen=True, slots=True)
class Json:
    """Map or document value stored in a JSON column."""

    value: "Mapping[str, Any]"


Value: TypeAlias = Union[Null, Boolean, Integer, Decimal, Text, Binary, DateTime, Array, Composite, Json]

NULL = Null()


@singledispatch
def to_value(obj: Any) -> Any:
    """Convert a native Python value to its :data:`Value` variant.

    Values that are already variants are returned as-is. Objects of an
    unknown type are also returned unchanged so rendering can fall back to a
    diagnostic representation instead of failing.

    Args:
        obj: A bound parameter as received from the driver.

    Returns:
        The matching variant, or ``obj`` itself when no variant applies.
    """
    return obj


@to_value.register(type(None))
def _(obj: None) -> Null:
    return NULL


@to_value.register
def _(obj: bool) -> Boolean:
    return Boolean(obj)


@to_value.register
def _(obj: int) -> Integer:
    return Integer(obj)


@to_value.register
def _(obj: float) -> Decimal:
    return Decimal(repr(obj))


@to_value.register
def _(obj: decimal.Decimal) -> Decimal:
    return Decimal(str(obj))


@to_value.register
def _(obj: str) -> Text:
    return Text(obj)


@to_value.register(bytes)
@to_value.register(bytearray)
@to_value.register(memoryview)
def _(obj: "bytes | bytearray | memoryview") -> Binary:
    return Binary(bytes(obj))


@to_value.register
def _(obj: uuid.UUID) -> Binary:
    return Binary(obj.bytes)


@to_value.register(datetime.date)
@to_value.register(datetime.time)
def _(obj: "datetime.date | datetime.time") -> DateTime:
    return DateTime(obj)


@to_value.register
def _(obj: list) -> Array:  # type: ignore[type-arg]
    return Array(tuple(to_value(item) for item in obj))


@to_value.register
def _(obj: tuple) -> Composite:  # type: ignore[type-arg]
    return Composite(tuple(to_value(item) for item in obj))


@to_value.register
def _(obj: Mapping) -> Json:  # type: ignore[type-arg]
    return Json(obj)
