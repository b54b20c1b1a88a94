"""Completion events consumed by the query formatter."""

import traceback
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from sqldevlog.dialects import Dialect, DialectName

__all__ = ("QueryEvent", "QueryMetadata", "create_event")


@dataclass(slots=True)
class QueryMetadata:
    """Free-form context attached to a completed query."""

    source: "str | None" = None
    stacktrace: "Sequence[traceback.FrameSummary] | None" = None
    suppress_logging: bool = False
    repo: "str | None" = None
    succeeded: bool = True
    extra: "Mapping[str, Any]" = field(default_factory=dict)


@dataclass(slots=True)
class QueryEvent:
    """Structured payload describing one completed database operation.

    ``duration`` is the query time in seconds. Queue, decode and idle times
    are reported separately when the driver measures them.
    """

    sql: str
    params: "Sequence[Any]"
    dialect: "Union[Dialect, DialectName, str, None]"
    duration: float
    queue_duration: "float | None" = None
    decode_duration: "float | None" = None
    idle_duration: "float | None" = None
    metadata: QueryMetadata = field(default_factory=QueryMetadata)

    @property
    def total_duration(self) -> float:
        """Time the caller waited: query time plus time spent queued for a connection."""
        return self.duration + (self.queue_duration or 0.0)

    def as_dict(self) -> "dict[str, Any]":
        """Return event payload as a dictionary."""

        return {
            "sql": self.sql,
            "params": list(self.params),
            "dialect": str(self.dialect) if self.dialect is not None else None,
            "duration": self.duration,
            "queue_duration": self.queue_duration,
            "decode_duration": self.decode_duration,
            "idle_duration": self.idle_duration,
            "source": self.metadata.source,
            "repo": self.metadata.repo,
            "succeeded": self.metadata.succeeded,
            "suppress_logging": self.metadata.suppress_logging,
        }


def create_event(
    *,
    sql: str,
    params: "Sequence[Any] | None" = None,
    dialect: "Union[Dialect, DialectName, str, None]" = None,
    duration: float,
    queue_duration: "float | None" = None,
    decode_duration: "float | None" = None,
    idle_duration: "float | None" = None,
    source: "str | None" = None,
    repo: "str | None" = None,
    succeeded: bool = True,
    suppress_logging: bool = False,
    stacktrace: "Sequence[traceback.FrameSummary] | None" = None,
    capture_stack: bool = False,
    **extra: Any,
) -> QueryEvent:
    """Factory helper used by driver integrations to build query events.

    ``capture_stack`` records the caller's stack when no ``stacktrace`` is
    given; the formatter later condenses it to a single application frame.
    """

    if stacktrace is None and capture_stack:
        stacktrace = traceback.extract_stack()[:-1]
    return QueryEvent(
        sql=sql,
        params=params if params is not None else (),
        dialect=dialect,
        duration=duration,
        queue_duration=queue_duration,
        decode_duration=decode_duration,
        idle_duration=idle_duration,
        metadata=QueryMetadata(
            source=source,
            stacktrace=stacktrace,
            suppress_logging=suppress_logging,
            repo=repo,
            succeeded=succeeded,
            extra=extra,
        ),
    )
