"""Severity classification of query durations."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Final, Optional, Union

from sqldevlog.colors import Color, resolve_color
from sqldevlog.exceptions import ImproperConfigurationError

__all__ = ("DEFAULT_THRESHOLDS", "DurationThreshold", "classify", "format_duration", "normalize_thresholds")


@dataclass(frozen=True, slots=True)
class DurationThreshold:
    """Duration in seconds from which a query is printed in ``color``."""

    limit: float
    color: Color


DEFAULT_THRESHOLDS: Final[tuple[DurationThreshold, ...]] = (
    DurationThreshold(0.05, Color.YELLOW),
    DurationThreshold(0.1, Color.RED),
)


def normalize_thresholds(
    thresholds: "Iterable[Union[DurationThreshold, tuple[float, Union[Color, str]]]]",
) -> tuple[DurationThreshold, ...]:
    """Coerce ``(limit, color)`` pairs and check that limits ascend.

    Raises:
        ImproperConfigurationError: If a color is unknown, a limit is negative,
            or limits are not strictly ascending.

    Returns:
        Thresholds as a tuple.
    """
    normalized: list[DurationThreshold] = []
    for threshold in thresholds:
        if not isinstance(threshold, DurationThreshold):
            limit, color = threshold
            resolved = resolve_color(color)
            if resolved is None:
                msg = f"Threshold {limit!r} has no color"
                raise ImproperConfigurationError(msg)
            threshold = DurationThreshold(float(limit), resolved)
        if threshold.limit < 0:
            msg = f"Duration threshold must not be negative, got {threshold.limit!r}"
            raise ImproperConfigurationError(msg)
        if normalized and threshold.limit <= normalized[-1].limit:
            msg = (
                "Duration thresholds must be strictly ascending, "
                f"got {threshold.limit!r} after {normalized[-1].limit!r}"
            )
            raise ImproperConfigurationError(msg)
        normalized.append(threshold)
    return tuple(normalized)


def classify(
    duration: float, thresholds: "Sequence[DurationThreshold]" = DEFAULT_THRESHOLDS, default: Optional[Color] = None
) -> Optional[Color]:
    """Map a duration to its severity color.

    Thresholds are read in ascending order and the color of the last limit
    that ``duration`` meets or exceeds wins, so a longer duration never gets a
    milder color.

    Args:
        duration: Elapsed time in seconds.
        thresholds: Ascending thresholds.
        default: Color for durations below every limit.

    Returns:
        The bucket color, or ``default``.
    """
    color = default
    for threshold in thresholds:
        if duration < threshold.limit:
            break
        color = threshold.color
    return color


def format_duration(seconds: float) -> str:
    """Format seconds as milliseconds rounded to one decimal, e.g. ``12.3ms``."""
    return f"{seconds * 1000:.1f}ms"
