"""
DataFrame Downsampling - Shared-index downsampling of multi-column frames.

Computes representative indices once and applies them to every column so
all traces of a chart share the same x coordinates.

Methods:
    lttb        exact Largest-Triangle-Three-Buckets (this package)
    minmaxlttb  MinMaxLTTB via tsdownsample: min-max preselection followed
                by LTTB refinement. Faster on very large frames, but bucket
                choices are not guaranteed to match exact LTTB.
                Reference: https://arxiv.org/abs/2305.00332
"""

import logging

import numpy as np
import pandas as pd
from tsdownsample import MinMaxLTTBDownsampler

from .lttb import clamp_threshold, compute_lttb_indices
from .stats import DEFAULT_THRESHOLD

logger = logging.getLogger(__name__)

# Default ratio for min-max preselection phase
# Higher values improve speed but may miss mid-range features
DEFAULT_MINMAX_RATIO = 4

METHODS = ("lttb", "minmaxlttb")


def compute_frame_indices(
    x: np.ndarray,
    y: np.ndarray,
    threshold: int,
    method: str = "lttb",
    minmax_ratio: int = DEFAULT_MINMAX_RATIO,
) -> np.ndarray:
    """
    Compute sampling indices with the requested method.

    Raises:
        ValueError: if method is unknown
    """
    if method not in METHODS:
        raise ValueError(f"Unknown downsampling method '{method}'; expected one of {METHODS}")

    if method == "lttb":
        return compute_lttb_indices(x, y, threshold)

    threshold = clamp_threshold(threshold)
    n = len(x)
    if n <= threshold:
        return np.arange(n, dtype=np.int64)

    downsampler = MinMaxLTTBDownsampler()
    indices = downsampler.downsample(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        n_out=threshold,
        minmax_ratio=minmax_ratio,
    )
    return np.asarray(indices, dtype=np.int64)


def _numeric_x(x_values) -> np.ndarray:
    # Datetimes become epoch nanoseconds; tz-aware values are compared in UTC
    if pd.api.types.is_datetime64_any_dtype(x_values) or (
        pd.api.types.infer_dtype(x_values, skipna=True) in ("datetime64", "datetime", "date")
    ):
        return pd.DatetimeIndex(pd.to_datetime(x_values, utc=True)).asi8
    return np.asarray(x_values)


def downsample_dataframe(
    df: pd.DataFrame,
    x_values: np.ndarray,
    threshold: int = DEFAULT_THRESHOLD,
    method: str = "lttb",
    minmax_ratio: int = DEFAULT_MINMAX_RATIO,
) -> tuple[np.ndarray, pd.DataFrame]:
    """
    Downsample all columns of a DataFrame with a unified index.

    Indices come from the first column and are applied to all columns.
    This maintains alignment across traces.

    Args:
        df: DataFrame with numeric columns
        x_values: X-axis values (same length as df); datetime values
            (naive or tz-aware) are converted to epoch nanoseconds for
            the area computation and returned unchanged
        threshold: Maximum points per trace (default 1000)
        method: 'lttb' (exact) or 'minmaxlttb' (tsdownsample approximation)
        minmax_ratio: Preselection multiplier for 'minmaxlttb'

    Returns:
        Tuple of (downsampled_x, downsampled_df)

    Raises:
        ValueError: if method is unknown or x_values length mismatches df
    """
    if method not in METHODS:
        raise ValueError(f"Unknown downsampling method '{method}'; expected one of {METHODS}")

    numeric_x = _numeric_x(x_values)
    x_values = np.asarray(x_values)
    if len(x_values) != len(df):
        raise ValueError(
            f"x_values length ({len(x_values)}) must match "
            f"DataFrame length ({len(df)})"
        )

    n = len(df)

    # Edge case: empty DataFrame
    if n == 0:
        return np.array([]), pd.DataFrame()

    threshold = clamp_threshold(threshold)

    # No downsampling needed
    if n <= threshold or len(df.columns) == 0:
        return x_values.copy(), df.copy()

    first_col = df.iloc[:, 0].to_numpy(dtype=np.float64)
    sampled_indices = compute_frame_indices(
        numeric_x, first_col, threshold, method, minmax_ratio
    )

    logger.debug(
        "Downsampled frame of %d rows x %d columns to %d rows (%s)",
        n,
        len(df.columns),
        len(sampled_indices),
        method,
    )

    downsampled_df = df.iloc[sampled_indices].reset_index(drop=True)
    return x_values[sampled_indices], downsampled_df
