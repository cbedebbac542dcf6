"""
Measurement Adapter - Downsample timestamped pressure records.

Projects domain records ({timestamp, pressure, ...}) onto
(epoch_ms, pressure) tuples and runs them through the generic
conditional downsampler. Selection decisions are identical to passing the
converted tuples to downsample_if_needed directly.
"""

import logging
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Optional, Union

import pandas as pd

from .lttb import clamp_threshold
from .points import MalformedPointError, as_finite_float, to_epoch_ms
from .stats import DEFAULT_THRESHOLD, Clock, DownsampleResult, downsample_if_needed

logger = logging.getLogger(__name__)

TIMESTAMP_FIELD = "timestamp"
PRESSURE_FIELD = "pressure"


@dataclass(frozen=True)
class Measurement:
    """A single pressure reading."""

    timestamp: Union[datetime, float]
    pressure: float
    temperature: Optional[float] = None


def timestamp_to_ms(value: Any) -> float:
    """
    Convert a timestamp to epoch milliseconds.

    Accepts datetime, date, pandas.Timestamp, numpy.datetime64 (naive
    values are taken as UTC) or a number already in milliseconds.

    Raises:
        MalformedPointError: if the value is not a usable timestamp
    """
    return as_finite_float(to_epoch_ms(value), "timestamp", value)


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        if name in record:
            return record[name]
    elif hasattr(record, name):
        return getattr(record, name)
    raise MalformedPointError(f"Measurement record missing '{name}': {record!r}")


def measurements_to_tuples(records: Iterable[Any]) -> list[tuple[float, float]]:
    """
    Project measurement records onto (timestamp_ms, pressure) tuples.

    Args:
        records: Mappings or objects exposing timestamp and pressure

    Returns:
        One tuple per record, in input order

    Raises:
        MalformedPointError: if a record lacks a field or holds a bad value
    """
    tuples = []
    for i, record in enumerate(records):
        try:
            tuples.append((
                timestamp_to_ms(_field(record, TIMESTAMP_FIELD)),
                as_finite_float(_field(record, PRESSURE_FIELD), "pressure", record),
            ))
        except MalformedPointError as e:
            raise MalformedPointError(f"Measurement at index {i}: {e}") from e
    return tuples


def _with_total_time(result: DownsampleResult, clock: Clock, start: float) -> DownsampleResult:
    # Reported time covers field projection as well as downsampling
    stats = replace(result.stats, execution_time_ms=(clock() - start) * 1000.0)
    return DownsampleResult(result.data, stats)


def downsample_measurements(
    records: Iterable[Any],
    threshold: int = DEFAULT_THRESHOLD,
    clock: Clock = time.perf_counter,
) -> DownsampleResult:
    """
    Downsample measurement records to (timestamp_ms, pressure) tuples.

    Args:
        records: Measurement mappings or objects
        threshold: Target number of points (default 1000)
        clock: Monotonic clock returning seconds

    Returns:
        DownsampleResult whose data is a list of (timestamp_ms, pressure)

    Example:
        >>> data, stats = downsample_measurements(readings, 1000)
        >>> figure.add_scatter(x=[t for t, _ in data], y=[p for _, p in data])
    """
    start = clock()
    tuples = measurements_to_tuples(records)
    if tuples:
        threshold = clamp_threshold(threshold)
    result = downsample_if_needed(tuples, threshold, clock=clock)
    return _with_total_time(result, clock, start)


def _column_to_ms(column: pd.Series) -> pd.Series:
    if pd.api.types.is_datetime64_any_dtype(column):
        if column.dt.tz is None:
            column = column.dt.tz_localize("UTC")
        return (column - pd.Timestamp(0, tz="UTC")) / pd.Timedelta(milliseconds=1)
    if pd.api.types.is_numeric_dtype(column):
        return column.astype("float64")
    return column.map(timestamp_to_ms)


def downsample_measurement_frame(
    df: pd.DataFrame,
    threshold: int = DEFAULT_THRESHOLD,
    timestamp_column: str = TIMESTAMP_FIELD,
    value_column: str = PRESSURE_FIELD,
    clock: Clock = time.perf_counter,
) -> DownsampleResult:
    """
    Downsample a DataFrame of measurements to (timestamp_ms, value) tuples.

    Args:
        df: DataFrame holding timestamp and value columns
        threshold: Target number of points (default 1000)
        timestamp_column: Column with datetimes or epoch milliseconds
        value_column: Column with the measured value

    Returns:
        DownsampleResult whose data is a list of (timestamp_ms, value)

    Raises:
        ValueError: if either column is missing
        MalformedPointError: if a row holds NaT/NaN or non-numeric values
    """
    missing = [c for c in (timestamp_column, value_column) if c not in df.columns]
    if missing:
        raise ValueError(f"DataFrame missing measurement columns: {missing}")

    start = clock()
    x_ms = _column_to_ms(df[timestamp_column])

    tuples = []
    for i, (timestamp, value) in enumerate(zip(x_ms.tolist(), df[value_column].tolist())):
        try:
            tuples.append((
                as_finite_float(timestamp, "timestamp", timestamp),
                as_finite_float(value, "pressure", value),
            ))
        except MalformedPointError as e:
            raise MalformedPointError(f"Measurement at index {i}: {e}") from e

    logger.debug(
        "Measurement frame: %d rows from columns '%s'/'%s'",
        len(tuples),
        timestamp_column,
        value_column,
    )
    if tuples:
        threshold = clamp_threshold(threshold)
    result = downsample_if_needed(tuples, threshold, clock=clock)
    return _with_total_time(result, clock, start)
