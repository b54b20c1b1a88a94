"""Configuration of the development query logger."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from sqldevlog.colors import Color, resolve_color
from sqldevlog.dialects import Dialect, DialectName, get_dialect
from sqldevlog.duration import DEFAULT_THRESHOLDS, DurationThreshold, normalize_thresholds
from sqldevlog.exceptions import ImproperConfigurationError

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from sqldevlog.events import QueryEvent

__all__ = ("DevLoggerConfig", "EventFilter", "LineSink", "StatementRewriter")


EventFilter = Callable[["QueryEvent"], bool]
StatementRewriter = Callable[[str], str]
LineSink = Callable[[str], None]


@dataclass(slots=True)
class DevLoggerConfig:
    """Settings for formatting and delivering query log lines.

    Attributes:
        thresholds: Ascending duration thresholds with their colors.
        default_color: Color for fast statements whose keyword has no color.
        log_level: Level of the default sink.
        include_repo_name: Print ``repo=`` when an event names its repository.
        ignore_event: Returns true for events that must not be logged.
        before_inline: Rewrites statement text before parameters are inlined.
        stacktrace_exclude: Filename prefixes skipped when condensing a stack.
        sink: Receives each formatted line. Defaults to the ``sqldevlog.query`` logger.
        dialect: Dialect for events that do not carry one.
    """

    thresholds: "tuple[DurationThreshold, ...]" = DEFAULT_THRESHOLDS
    default_color: "Color | None" = None
    log_level: "int | str" = logging.DEBUG
    include_repo_name: bool = False
    ignore_event: "EventFilter | None" = None
    before_inline: "StatementRewriter | None" = None
    stacktrace_exclude: "tuple[str, ...]" = field(default_factory=tuple)
    sink: "LineSink | None" = None
    dialect: "Union[Dialect, DialectName, str, None]" = None

    def __post_init__(self) -> None:
        self.thresholds = normalize_thresholds(self.thresholds)
        self.default_color = resolve_color(self.default_color)
        self.stacktrace_exclude = tuple(self.stacktrace_exclude)
        if isinstance(self.log_level, str):
            level = logging.getLevelName(self.log_level.upper())
            if not isinstance(level, int):
                msg = f"Unknown log level {self.log_level!r}"
                raise ImproperConfigurationError(msg)
            self.log_level = level
        if self.dialect is not None:
            self.dialect = get_dialect(self.dialect)

    def copy(self) -> "DevLoggerConfig":
        """Return a copy to avoid sharing mutable state."""

        return DevLoggerConfig(
            thresholds=self.thresholds,
            default_color=self.default_color,
            log_level=self.log_level,
            include_repo_name=self.include_repo_name,
            ignore_event=self.ignore_event,
            before_inline=self.before_inline,
            stacktrace_exclude=tuple(self.stacktrace_exclude),
            sink=self.sink,
            dialect=self.dialect,
        )

    @classmethod
    def merge(
        cls, base_config: "DevLoggerConfig | None", override_config: "DevLoggerConfig | None"
    ) -> "DevLoggerConfig":
        """Merge an application-wide configuration with a per-repository one.

        Fields of the override that differ from the defaults win. Exclusion
        prefixes are concatenated.
        """

        if base_config is None and override_config is None:
            return cls()
        base = base_config.copy() if base_config else cls()
        if override_config is None:
            return base

        defaults = cls()
        merged = base.copy()
        for name in ("thresholds", "default_color", "log_level", "include_repo_name", "sink", "dialect"):
            value = getattr(override_config, name)
            if value != getattr(defaults, name):
                setattr(merged, name, value)
        if override_config.ignore_event is not None:
            merged.ignore_event = override_config.ignore_event
        if override_config.before_inline is not None:
            merged.before_inline = override_config.before_inline
        merged.stacktrace_exclude = _merge_prefixes(base.stacktrace_exclude, override_config.stacktrace_exclude)
        return merged


def _merge_prefixes(base: "Iterable[str]", override: "Iterable[str]") -> "tuple[str, ...]":
    merged = list(base)
    merged.extend(prefix for prefix in override if prefix not in merged)
    return tuple(merged)
