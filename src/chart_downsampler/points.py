"""
Point Accessor - Extract numeric (x, y) coordinates from arbitrary points.

Callers hand in tuples, lists, numpy rows, mappings or plain objects.
The default accessor tries a fixed, ordered chain of shapes:

1. Ordered pair: any non-string sequence of length >= 2 -> point[0], point[1]
2. Named fields: mapping keys or attributes 'x' / 'y'
3. Measurement records: 'timestamp' for x, 'value' then 'pressure' for y

Points matching none of these raise MalformedPointError.
"""

import math
import numbers
from collections.abc import Mapping, Sequence
from datetime import date, datetime, timezone
from typing import Any, Callable, NamedTuple, Optional

import numpy as np
import pandas as pd

_MISSING = object()

_X_FIELDS = ("x", "timestamp")
_Y_FIELDS = ("y", "value", "pressure")


class MalformedPointError(ValueError):
    """Raised when a point does not match any recognized shape."""


class PointAccessor(NamedTuple):
    """Pair of pure functions extracting x and y from a point."""

    x: Callable[[Any], float]
    y: Callable[[Any], float]


def _lookup(point: Any, name: str) -> Any:
    if isinstance(point, Mapping):
        return point.get(name, _MISSING)
    return getattr(point, name, _MISSING)


def _is_pair(point: Any) -> bool:
    if isinstance(point, np.ndarray):
        return point.ndim == 1 and point.shape[0] >= 2
    if isinstance(point, (str, bytes, Mapping)):
        return False
    return isinstance(point, Sequence) and len(point) >= 2


def to_epoch_ms(value: Any) -> Any:
    """
    Convert datetime-like values to epoch milliseconds.

    Naive datetimes are interpreted as UTC. Non-datetime values are
    returned unchanged so the caller can validate them.
    """
    if value is pd.NaT:
        return math.nan
    if isinstance(value, (pd.Timestamp, np.datetime64)):
        ts = pd.Timestamp(value)
        if ts is pd.NaT:
            return math.nan
        if ts.tzinfo is None:
            ts = ts.tz_localize("UTC")
        return ts.value / 1_000_000
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp() * 1000.0
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc).timestamp() * 1000.0
    return value


def as_finite_float(value: Any, role: str, point: Any) -> float:
    # bool is a numbers.Real subclass but never a meaningful coordinate
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise MalformedPointError(
            f"Non-numeric {role} value {value!r} in point {point!r}"
        )
    result = float(value)
    if not math.isfinite(result):
        raise MalformedPointError(
            f"Non-finite {role} value {value!r} in point {point!r}"
        )
    return result


def default_x(point: Any) -> float:
    """Extract x from an ordered pair, an x field, or a timestamp field."""
    if _is_pair(point):
        return as_finite_float(point[0], "x", point)
    for name in _X_FIELDS:
        value = _lookup(point, name)
        if value is not _MISSING:
            return as_finite_float(to_epoch_ms(value), "x", point)
    raise MalformedPointError(
        f"Invalid data point structure: {point!r}. "
        "Expected (x, y) pair or record with x/y fields"
    )


def default_y(point: Any) -> float:
    """Extract y from an ordered pair, a y field, or a value/pressure field."""
    if _is_pair(point):
        return as_finite_float(point[1], "y", point)
    for name in _Y_FIELDS:
        value = _lookup(point, name)
        if value is not _MISSING:
            return as_finite_float(value, "y", point)
    raise MalformedPointError(
        f"Invalid data point structure: {point!r}. "
        "Expected (x, y) pair or record with x/y fields"
    )


DEFAULT_ACCESSOR = PointAccessor(default_x, default_y)


def resolve_coordinates(
    data: Sequence[Any],
    accessor: Optional[PointAccessor] = None,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Resolve every point to numeric coordinates.

    All points are resolved before any selection happens, so a malformed
    point fails the whole call without producing partial output.

    Args:
        data: Sequence of points in any supported representation
        accessor: Custom accessor pair (default: DEFAULT_ACCESSOR)

    Returns:
        Tuple of (x, y) float64 arrays, same length as data

    Raises:
        MalformedPointError: if any point cannot be resolved
    """
    accessor = accessor or DEFAULT_ACCESSOR
    n = len(data)
    x = np.empty(n, dtype=np.float64)
    y = np.empty(n, dtype=np.float64)

    for i, point in enumerate(data):
        try:
            x[i] = as_finite_float(accessor.x(point), "x", point)
            y[i] = as_finite_float(accessor.y(point), "y", point)
        except MalformedPointError as e:
            raise MalformedPointError(f"Point at index {i}: {e}") from e
        except (KeyError, IndexError, AttributeError, TypeError) as e:
            raise MalformedPointError(
                f"Point at index {i} rejected by accessor: {point!r}"
            ) from e

    return x, y
