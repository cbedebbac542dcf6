"""
Downsampling - Largest-Triangle-Three-Buckets (LTTB) algorithm.

Reduces point density while preserving visual shape of time-series data.
First and last points are always kept; the remaining points are split into
(threshold - 2) buckets and each bucket contributes the point forming the
largest triangle with the previously selected point and the average of the
next bucket.

Greedy single pass: O(n) time, O(threshold) output.

Reference: Sveinn Steinarsson, "Downsampling Time Series for Visual
Representation" (2013), https://github.com/sveinn-steinarsson/flot-downsample
"""

import logging
import math
import warnings
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional, TypeVar

import numpy as np

from .points import PointAccessor, resolve_coordinates

logger = logging.getLogger(__name__)

T = TypeVar("T")

# First point, at least one bucket, last point
MIN_THRESHOLD = 3


class InvalidThresholdWarning(UserWarning):
    """Threshold below MIN_THRESHOLD was corrected."""


@dataclass(frozen=True)
class Bucket:
    """Index ranges for one bucket, half-open over the original sequence."""

    start: int
    end: int
    avg_start: int  # lookahead range used for the third triangle vertex
    avg_end: int
    # Lookahead range is exhausted; the last sample stands in for the mean
    uses_last_point: bool = False


def triangle_area(
    a: tuple[float, float],
    b: tuple[float, float],
    c: tuple[float, float],
) -> float:
    """
    Twice the unsigned area of the triangle (a, b, c).

    Cross-product form: |ax(by - cy) + bx(cy - ay) + cx(ay - by)|.
    Not halved; only relative magnitudes matter to the caller.
    Collinear points yield exactly 0.
    """
    ax, ay = a
    bx, by = b
    cx, cy = c
    return abs(ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))


def _triangle_areas(
    ax: float,
    ay: float,
    bx: np.ndarray,
    by: np.ndarray,
    cx: float,
    cy: float,
) -> np.ndarray:
    # Same expression as triangle_area, evaluated element-wise
    return np.abs(ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))


def clamp_threshold(threshold: int, stacklevel: int = 3) -> int:
    """
    Clamp threshold to MIN_THRESHOLD, warning when a correction is made.

    Args:
        threshold: Requested output length
        stacklevel: Passed to warnings.warn; the default attributes the
            warning to the caller of the function calling clamp_threshold

    Warns:
        InvalidThresholdWarning: if threshold < MIN_THRESHOLD
    """
    if threshold < MIN_THRESHOLD:
        warnings.warn(
            f"LTTB threshold must be >= {MIN_THRESHOLD} (got {threshold}). "
            f"Using minimum threshold of {MIN_THRESHOLD}.",
            InvalidThresholdWarning,
            stacklevel=stacklevel,
        )
        return MIN_THRESHOLD
    return int(threshold)


def bucket_width(n: int, threshold: int) -> float:
    """Floating-point bucket width (n - 2) / (threshold - 2)."""
    return (n - 2) / (threshold - 2)


def partition_buckets(n: int, threshold: int) -> list[Bucket]:
    """
    Compute the (threshold - 2) bucket ranges for a sequence of length n.

    The first and last points are never bucketed. Integer bucket sizes may
    differ because boundaries are floored from a float width.

    Args:
        n: Sequence length, must exceed threshold
        threshold: Target output length, already clamped (>= 3)

    Returns:
        Buckets in left-to-right order

    Raises:
        ValueError: if threshold < 3 or n <= threshold
    """
    if threshold < MIN_THRESHOLD:
        raise ValueError(f"threshold must be >= {MIN_THRESHOLD}")
    if n <= threshold:
        raise ValueError(
            f"sequence length ({n}) must exceed threshold ({threshold})"
        )

    width = bucket_width(n, threshold)
    buckets = []
    for i in range(threshold - 2):
        start = math.floor(i * width) + 1
        end = math.floor((i + 1) * width) + 1
        avg_end = min(math.floor((i + 2) * width) + 1, n)
        buckets.append(Bucket(start, end, end, avg_end, avg_end >= n))
    return buckets


def compute_lttb_indices(
    x: np.ndarray,
    y: np.ndarray,
    threshold: int,
) -> np.ndarray:
    """
    Compute LTTB sampling indices without returning the actual values.

    Public API for obtaining indices when display values differ from
    numeric values.

    Args:
        x: X-axis values (timestamps or indices), 1D
        y: Y-axis values, 1D, same length as x
        threshold: Target number of points (< 3 is clamped to 3)

    Returns:
        Strictly increasing int64 array of min(n, threshold) indices

    Tie-break:
        Within a bucket the first point reaching the maximum area wins.
        NaN areas never win; a bucket of NaN areas yields its first index.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    n = len(x)

    if len(y) != n:
        raise ValueError(f"x length ({n}) must match y length ({len(y)})")

    if n == 0:
        return np.array([], dtype=np.int64)

    threshold = clamp_threshold(threshold)

    # No downsampling needed
    if n <= threshold:
        return np.arange(n, dtype=np.int64)

    buckets = partition_buckets(n, threshold)
    logger.debug(
        "LTTB: %d points -> %d (bucket width %.3f)",
        n,
        threshold,
        bucket_width(n, threshold),
    )

    indices = np.empty(threshold, dtype=np.int64)
    indices[0] = 0
    last_selected = 0

    for i, bucket in enumerate(buckets, start=1):
        if bucket.uses_last_point:
            avg_x = x[n - 1]
            avg_y = y[n - 1]
        else:
            length = bucket.avg_end - bucket.avg_start
            avg_x = x[bucket.avg_start:bucket.avg_end].sum() / length
            avg_y = y[bucket.avg_start:bucket.avg_end].sum() / length

        areas = _triangle_areas(
            x[last_selected],
            y[last_selected],
            x[bucket.start:bucket.end],
            y[bucket.start:bucket.end],
            avg_x,
            avg_y,
        )
        areas[np.isnan(areas)] = -1.0

        # argmax returns the first occurrence of the maximum
        last_selected = bucket.start + int(np.argmax(areas))
        indices[i] = last_selected

    indices[-1] = n - 1
    return indices


def lttb_downsample(
    x: np.ndarray,
    y: np.ndarray,
    threshold: int,
) -> tuple[np.ndarray, np.ndarray]:
    """
    LTTB downsampling of parallel x/y arrays.

    Args:
        x: X-axis values (timestamps or indices), must be 1D
        y: Y-axis values (numeric data), must be 1D
        threshold: Maximum number of points to return (< 3 is clamped to 3)

    Returns:
        Tuple of (downsampled_x, downsampled_y)

    Edge cases:
        - Empty arrays return empty results
        - Arrays with n <= threshold returned unchanged (as copies)
    """
    x = np.asarray(x)
    y = np.asarray(y)

    if len(x) == 0:
        return np.array([]), np.array([])

    threshold = clamp_threshold(threshold)
    indices = compute_lttb_indices(x, y, threshold)
    return x[indices], y[indices]


def downsample(
    data: Sequence[T],
    threshold: int,
    accessor: Optional[PointAccessor] = None,
) -> list[T]:
    """
    Downsample a sequence of points of any supported representation.

    The output is a subsequence of the input, in original order, holding
    the original point objects.

    Args:
        data: Sequence of points (pairs, mappings, objects)
        threshold: Target output length (< 3 is clamped to 3 with a warning)
        accessor: Custom x/y accessor pair (default: structural dispatch)

    Returns:
        List of min(len(data), threshold) points

    Raises:
        MalformedPointError: if any point cannot be resolved; raised
            before any selection is made
    """
    if len(data) == 0:
        return []

    threshold = clamp_threshold(threshold)

    if len(data) <= threshold:
        return list(data)

    x, y = resolve_coordinates(data, accessor)
    indices = compute_lttb_indices(x, y, threshold)
    return [data[i] for i in indices]
