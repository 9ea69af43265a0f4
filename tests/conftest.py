"""
Common pytest fixtures for filter bank tests.
"""

import pytest

from Filter_Bank.config import SimulationSettings
from Filter_Bank.core.highpass import HighpassFilter
from Filter_Bank.core.kalman_filter import KalmanFilter
from Filter_Bank.core.lowpass import LowpassFilter
from Filter_Bank.core.moving_average import MovingAverageFilter


@pytest.fixture
def noisy_samples():
    """Deterministic noisy sine, 300 samples at 100 Hz."""
    import numpy as np

    rng = np.random.default_rng(1234)
    t = np.arange(300) / 100.0
    return list(np.sin(2 * np.pi * 2.0 * t) + 0.2 * rng.standard_normal(t.size))


@pytest.fixture(params=["moving-average", "lowpass", "highpass", "kalman"])
def filter_factory(request):
    """Factory for each filter type with fixed, non-default parameters."""
    factories = {
        "moving-average": lambda: MovingAverageFilter(7),
        "lowpass": lambda: LowpassFilter(3.0, 100.0),
        "highpass": lambda: HighpassFilter(3.0, 100.0),
        "kalman": lambda: KalmanFilter(0.05, 0.2, dt=0.01),
    }
    return factories[request.param]


@pytest.fixture
def settings() -> SimulationSettings:
    return SimulationSettings(seed=42, sample_rate=200.0, noise_level=0.2, display_points=100)
