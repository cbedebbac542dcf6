"""
Conditional Downsampler - Early exit, timing and reduction statistics.

Wraps the LTTB core: returns input unchanged when no reduction is needed,
otherwise downsamples and reports how much was removed and how long it
took. The clock is injectable; everything else here is pure.
"""

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable, NamedTuple, Optional

from .lttb import clamp_threshold, downsample
from .points import PointAccessor

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 1000
DEFAULT_STATS_LABEL = "LTTB Downsampling"

Clock = Callable[[], float]


@dataclass(frozen=True)
class DownsamplingStats:
    """Report for a single downsampling call."""

    original_count: int
    downsampled_count: int
    reduction_percent: float  # 0-100
    was_downsampled: bool
    execution_time_ms: float


class DownsampleResult(NamedTuple):
    """Downsampled points together with their statistics."""

    data: list[Any]
    stats: DownsamplingStats


def _elapsed_ms(clock: Clock, start: float) -> float:
    return (clock() - start) * 1000.0


def downsample_if_needed(
    data: Sequence[Any],
    threshold: int = DEFAULT_THRESHOLD,
    accessor: Optional[PointAccessor] = None,
    clock: Clock = time.perf_counter,
) -> DownsampleResult:
    """
    Downsample only when data exceeds threshold, reporting statistics.

    Args:
        data: Sequence of points
        threshold: Target number of points (default 1000)
        accessor: Custom x/y accessor pair
        clock: Monotonic clock returning seconds (default time.perf_counter)

    Returns:
        DownsampleResult(data, stats)

    Raises:
        MalformedPointError: propagated from point resolution
    """
    start = clock()
    original_count = len(data)

    if original_count > 0:
        threshold = clamp_threshold(threshold)

    # No downsampling needed
    if original_count <= threshold:
        return DownsampleResult(
            list(data),
            DownsamplingStats(
                original_count=original_count,
                downsampled_count=original_count,
                reduction_percent=0.0,
                was_downsampled=False,
                execution_time_ms=_elapsed_ms(clock, start),
            ),
        )

    downsampled = downsample(data, threshold, accessor)
    elapsed = _elapsed_ms(clock, start)

    downsampled_count = len(downsampled)
    reduction_percent = (original_count - downsampled_count) / original_count * 100

    stats = DownsamplingStats(
        original_count=original_count,
        downsampled_count=downsampled_count,
        reduction_percent=reduction_percent,
        was_downsampled=True,
        execution_time_ms=elapsed,
    )
    log_downsampling_stats(stats)
    return DownsampleResult(downsampled, stats)


def format_stats(stats: DownsamplingStats, label: str = DEFAULT_STATS_LABEL) -> str:
    """
    Render statistics as a single human-readable line.

    Example:
        [Pressure Graph] Downsampled 50000 -> 1000 points (98.0% reduction) in 12.30ms
    """
    if not stats.was_downsampled:
        return f"[{label}] No downsampling needed ({stats.original_count} points)"

    return (
        f"[{label}] Downsampled {stats.original_count} -> {stats.downsampled_count} points "
        f"({stats.reduction_percent:.1f}% reduction) in {stats.execution_time_ms:.2f}ms"
    )


def log_downsampling_stats(
    stats: DownsamplingStats,
    label: str = DEFAULT_STATS_LABEL,
) -> None:
    """Emit statistics at DEBUG level."""
    logger.debug("%s", format_stats(stats, label))
