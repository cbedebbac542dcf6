"""Pytest fixtures for Chart Downsampler tests."""

from datetime import datetime, timedelta, timezone

import numpy as np
import pandas as pd
import pytest


class FakeClock:
    """Deterministic clock advancing a fixed step on every read."""

    def __init__(self, step: float = 0.010):
        self.now = 0.0
        self.step = step
        self.calls = 0

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        self.calls += 1
        return value


@pytest.fixture
def fake_clock():
    """Clock advancing 10 ms per read."""
    return FakeClock()


@pytest.fixture
def zigzag_points():
    """Five points whose middle peaks tie on triangle area."""
    return [[0, 0], [1, 10], [2, 0], [3, 10], [4, 0]]


@pytest.fixture
def sine_wave_points():
    """10,000 (x, y) sine-wave samples."""
    n = 10000
    x = np.arange(n, dtype=np.float64)
    y = np.sin(x / 100)
    return list(zip(x.tolist(), y.tolist()))


@pytest.fixture
def large_numeric_arrays():
    """Generate large arrays for LTTB downsampling tests."""
    n = 10000
    rng = np.random.default_rng(42)
    x = np.arange(n, dtype=np.float64)
    y = np.sin(x / 100) + rng.normal(0, 0.1, n)
    return x, y


@pytest.fixture
def numeric_dataframe():
    """DataFrame with all numeric columns."""
    return pd.DataFrame({
        "col1": [1.0, 2.0, 3.0, 4.0, 5.0],
        "col2": [10, 20, 30, 40, 50],
        "col3": [0.1, 0.2, 0.3, 0.4, 0.5],
    })


@pytest.fixture
def measurement_records():
    """2,000 pressure readings one second apart, as mappings."""
    start = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
    rng = np.random.default_rng(7)
    pressures = 100.0 + np.cumsum(rng.normal(0, 0.5, 2000))
    return [
        {
            "timestamp": start + timedelta(seconds=i),
            "pressure": float(p),
            "temperature": 21.5,
        }
        for i, p in enumerate(pressures)
    ]
