"""Substitution of rendered parameters into statement text."""

from collections.abc import Sequence
from typing import Any, Union

from sqldevlog.colors import Color, annotate
from sqldevlog.dialects import Dialect, DialectName, get_dialect
from sqldevlog.exceptions import ParameterCountMismatchError
from sqldevlog.render import render
from sqldevlog.scanner import scan
from sqldevlog.values import to_value

__all__ = ("inline_params",)


def inline_params(
    sql: str,
    params: "Sequence[Any]",
    restore_color: "Union[Color, str, None]",
    dialect: "Union[Dialect, DialectName, str]",
) -> str:
    """Replace every placeholder in ``sql`` with its colorized literal.

    The statement is rebuilt in a single left-to-right pass over the scanned
    placeholder spans; text between placeholders is copied verbatim. Each
    literal is followed by the escape for ``restore_color``.

    Args:
        sql: Statement text as sent to the database.
        params: Bound parameters, as native values or Value variants.
        restore_color: Color of the text surrounding the literals.
        dialect: Dialect the statement was written for.

    Raises:
        UnsupportedDialectError: If ``dialect`` is not a supported dialect.
        ParameterCountMismatchError: If a placeholder references a parameter
            beyond the end of ``params``.

    Returns:
        The statement with parameters inlined.
    """
    resolved = get_dialect(dialect)
    occurrences = scan(sql, resolved)
    if not occurrences:
        return sql

    rendered: dict[int, str] = {}
    parts: list[str] = []
    cursor = 0
    for occurrence in occurrences:
        if occurrence.index >= len(params):
            raise ParameterCountMismatchError(occurrence.index, len(params), sql)
        literal = rendered.get(occurrence.index)
        if literal is None:
            literal = annotate(render(to_value(params[occurrence.index]), resolved), restore_color)
            rendered[occurrence.index] = literal
        parts.append(sql[cursor : occurrence.start])
        parts.append(literal)
        cursor = occurrence.end
    parts.append(sql[cursor:])
    return "".join(parts)
