"""
Chart Downsampler - Visually-optimal time-series downsampling for charts.

Largest-Triangle-Three-Buckets (LTTB) point selection, a conditional
wrapper reporting statistics, a viewport-driven threshold heuristic and
adapters for measurement records and DataFrames.
"""

from .frames import downsample_dataframe
from .logging_config import configure_logging
from .lttb import (
    MIN_THRESHOLD,
    Bucket,
    InvalidThresholdWarning,
    compute_lttb_indices,
    downsample,
    lttb_downsample,
    partition_buckets,
    triangle_area,
)
from .measurements import (
    Measurement,
    downsample_measurement_frame,
    downsample_measurements,
    measurements_to_tuples,
)
from .points import DEFAULT_ACCESSOR, MalformedPointError, PointAccessor
from .stats import (
    DEFAULT_THRESHOLD,
    DownsampleResult,
    DownsamplingStats,
    downsample_if_needed,
    format_stats,
    log_downsampling_stats,
)
from .viewport import optimal_threshold

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_ACCESSOR",
    "DEFAULT_THRESHOLD",
    "MIN_THRESHOLD",
    "Bucket",
    "DownsampleResult",
    "DownsamplingStats",
    "InvalidThresholdWarning",
    "MalformedPointError",
    "Measurement",
    "PointAccessor",
    "compute_lttb_indices",
    "configure_logging",
    "downsample",
    "downsample_dataframe",
    "downsample_if_needed",
    "downsample_measurement_frame",
    "downsample_measurements",
    "format_stats",
    "log_downsampling_stats",
    "lttb_downsample",
    "measurements_to_tuples",
    "optimal_threshold",
    "partition_buckets",
    "triangle_area",
]
