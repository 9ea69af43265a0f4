"""
Filter Bank
Streaming moving-average, low-pass, high-pass and Kalman filters, plus the
signal source, statistics and session driver that exercise them.
"""

from .core import (FilterBankError, FilterState, FilterType, FrequencyResponse, HighpassFilter,
                   InvalidParameterError, KalmanFilter, LowpassFilter, MovingAverageFilter,
                   NyquistClampWarning, StreamingFilter, create_filter)
from .config import FilterDefaults, SimulationSettings
from .session import FilterSession, TickResult
from .sources.signal_generator import SignalGenerator, SignalType
from .utils.rolling_stats import RollingStatistics, RollingTimeSeries, SignalComparison
