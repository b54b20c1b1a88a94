import sys
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from click import Group

__all__ = ("get_sqldevlog_group", "main")


def get_sqldevlog_group() -> "Group":
    """Get the sqldevlog CLI group.

    Returns:
        The sqldevlog CLI group.
    """
    import rich_click as click
    from rich import get_console

    from sqldevlog.colors import Color
    from sqldevlog.dialects import DIALECT_ALIASES, DIALECTS

    console = get_console()
    dialect_choices = sorted({*DIALECTS, *DIALECT_ALIASES})
    color_choices = [color.value for color in Color]

    @click.group(name="sqldevlog")
    @click.option("--verbose", help="Enable debug logging.", type=bool, default=False, is_flag=True)
    @click.pass_context
    def sqldevlog_group(ctx: "click.Context", verbose: bool) -> None:
        """Render SQL statements the way the development query logger prints them."""
        from sqldevlog.utils.logging import configure_logging

        ctx.ensure_object(dict)
        if verbose:
            configure_logging(level="DEBUG")

    @sqldevlog_group.command(name="inline", help="Inline bound parameters into a statement.")
    @click.argument("sql", type=str)
    @click.option("--params", "params_json", help="Parameters as a JSON array.", type=str, default="[]")
    @click.option(
        "--dialect",
        help="Placeholder dialect.",
        type=click.Choice(dialect_choices),
        default="postgres",
        show_default=True,
    )
    @click.option("--color", help="Color restored after each literal.", type=click.Choice(color_choices), default=None)
    def inline_command(  # pyright: ignore[reportUnusedFunction]
        sql: str, params_json: str, dialect: str, color: Optional[str]
    ) -> None:
        """Print ``sql`` with its parameters inlined."""
        from sqldevlog._serialization import decode_json
        from sqldevlog.exceptions import DevLogError
        from sqldevlog.inline import inline_params

        try:
            params: Any = decode_json(params_json)
            if not isinstance(params, list):
                console.print("[red]--params must be a JSON array[/]")
                sys.exit(2)
            click.echo(inline_params(sql, params, color, dialect))
        except DevLogError as e:
            console.print(f"[red]{e}[/]")
            sys.exit(1)

    @sqldevlog_group.command(name="classify", help="Show the severity color of a query duration.")
    @click.argument("duration", type=float)
    @click.option(
        "--threshold",
        "thresholds",
        help="Threshold as LIMIT=COLOR with LIMIT in seconds. Repeat in ascending order.",
        type=str,
        multiple=True,
    )
    def classify_command(duration: float, thresholds: "tuple[str, ...]") -> None:  # pyright: ignore[reportUnusedFunction]
        """Print the color bucket ``duration`` falls into."""
        from sqldevlog.duration import DEFAULT_THRESHOLDS, classify, normalize_thresholds
        from sqldevlog.exceptions import DevLogError

        try:
            parsed = DEFAULT_THRESHOLDS
            if thresholds:
                parsed = normalize_thresholds(_parse_threshold(raw) for raw in thresholds)
        except (DevLogError, ValueError) as e:
            console.print(f"[red]Invalid threshold: {e}[/]")
            sys.exit(2)
        color = classify(duration, parsed)
        click.echo(color.value if color is not None else "default")

    return sqldevlog_group


def _parse_threshold(raw: str) -> "tuple[float, str]":
    limit, separator, color = raw.partition("=")
    if not separator or not color:
        msg = f"expected LIMIT=COLOR, got {raw!r}"
        raise ValueError(msg)
    return float(limit), color


def main() -> None:
    """Console script entry point."""
    get_sqldevlog_group()()


if __name__ == "__main__":
    main()
