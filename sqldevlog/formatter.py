"""Formatting of completed query events into colorized log lines."""

import os
import traceback
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Final, Optional, cast

from sqldevlog.colors import RESET, Color, statement_color
from sqldevlog.config import DevLoggerConfig
from sqldevlog.dialects import get_dialect
from sqldevlog.duration import classify, format_duration
from sqldevlog.events import QueryEvent
from sqldevlog.inline import inline_params
from sqldevlog.utils.logging import get_correlation_id, get_logger, log_with_context

__all__ = ("QUERY_LOGGER_NAME", "DevLogger", "condense_stacktrace", "create_event_handler", "format_event")

QUERY_LOGGER_NAME: Final = "sqldevlog.query"
STACKTRACE_MARKER: Final = "↳"

_PACKAGE_DIR: Final = str(Path(__file__).resolve().parent)

logger = get_logger(QUERY_LOGGER_NAME)


def _display_path(filename: str) -> str:
    cwd = os.getcwd()
    if filename.startswith(cwd + os.sep):
        return os.path.relpath(filename, cwd)
    return filename


def condense_stacktrace(
    stacktrace: "Optional[Sequence[traceback.FrameSummary]]", exclude: "Sequence[str]" = ()
) -> Optional[str]:
    """Reduce a stack to the innermost frame outside the excluded paths.

    Frames are expected outermost first, as returned by
    :func:`traceback.extract_stack`. Frames inside this package are always
    skipped.

    Args:
        stacktrace: Frames captured when the query was issued.
        exclude: Filename prefixes of driver or framework code to skip.

    Returns:
        ``"↳ function, at: file:line"`` or None when no frame qualifies.
    """
    if not stacktrace:
        return None
    package_prefix = _PACKAGE_DIR + os.sep
    for frame in reversed(stacktrace):
        resolved = str(Path(frame.filename).resolve()) if frame.filename else ""
        if resolved.startswith(package_prefix):
            continue
        if any(resolved.startswith(prefix) or frame.filename.startswith(prefix) for prefix in exclude):
            continue
        return f"{STACKTRACE_MARKER} {frame.name}, at: {_display_path(frame.filename)}:{frame.lineno}"
    return None


def _timings(event: QueryEvent) -> str:
    parts = [f"db={format_duration(event.duration)}"]
    if event.decode_duration is not None:
        parts.append(f"decode={format_duration(event.decode_duration)}")
    if event.queue_duration is not None:
        parts.append(f"queue={format_duration(event.queue_duration)}")
    if event.idle_duration is not None:
        parts.append(f"idle={format_duration(event.idle_duration)}")
    return " ".join(parts)


def format_event(event: QueryEvent, config: "Optional[DevLoggerConfig]" = None) -> Optional[str]:
    """Compose the log line for a completed query.

    The header (status, source and timings) and the inlined statement are
    written on separate lines, both in the color of the event's duration
    bucket; fast statements use their keyword color. Parameters are inlined
    with that color restored after each literal.

    Args:
        event: The completed query.
        config: Logger settings. Defaults apply when omitted.

    Raises:
        UnsupportedDialectError: If neither the event nor the configuration
            names a supported dialect.
        ParameterCountMismatchError: If the statement references more
            parameters than the event carries.

    Returns:
        The formatted line, or None when the event is suppressed.
    """
    config = config or DevLoggerConfig()
    if event.metadata.suppress_logging:
        return None
    if config.ignore_event is not None and config.ignore_event(event):
        return None

    dialect = get_dialect(event.dialect if event.dialect is not None else config.dialect)  # type: ignore[arg-type]
    sql = config.before_inline(event.sql) if config.before_inline is not None else event.sql
    fast_color: Optional[Color] = statement_color(sql) or config.default_color
    color = classify(event.total_duration, config.thresholds, default=fast_color)

    status = "OK" if event.metadata.succeeded else "ERROR"
    header = [f"QUERY {status}"]
    if event.metadata.source:
        header.append(f'source="{event.metadata.source}"')
    if config.include_repo_name and event.metadata.repo:
        header.append(f"repo={event.metadata.repo}")
    header.append(_timings(event))

    statement = inline_params(sql, event.params, color, dialect)
    line = f"{color.escape if color else ''}{' '.join(header)}\n{statement}{RESET}"

    if stack := condense_stacktrace(event.metadata.stacktrace, config.stacktrace_exclude):
        line = f"{line}\n{stack}"
    return line


class DevLogger:
    """Formats query events and hands the lines to a sink.

    Delivery is attempted once; there is no retry and no buffering.
    """

    __slots__ = ("config",)

    def __init__(self, config: "Optional[DevLoggerConfig]" = None) -> None:
        self.config = config or DevLoggerConfig()

    def handle(self, event: QueryEvent) -> Optional[str]:
        """Format ``event`` and deliver it.

        Returns:
            The delivered line, or None when the event was suppressed.
        """
        line = format_event(event, self.config)
        if line is None:
            return None
        if self.config.sink is not None:
            self.config.sink(line)
        else:
            extra_fields: dict[str, Any] = {
                "db.statement": event.sql,
                "db.system": str(event.dialect) if event.dialect is not None else None,
                "duration_ms": round(event.total_duration * 1000, 3),
                "source": event.metadata.source,
            }
            if correlation_id := get_correlation_id():
                extra_fields["correlation_id"] = correlation_id
            log_with_context(logger, cast("int", self.config.log_level), line, **extra_fields)
        return line

    __call__ = handle


def create_event_handler(config: "Optional[DevLoggerConfig]" = None) -> "Callable[[QueryEvent], None]":
    """Build a callable suitable for registering with a query event source."""

    dev_logger = DevLogger(config)

    def handler(event: QueryEvent) -> None:
        dev_logger.handle(event)

    return handler
