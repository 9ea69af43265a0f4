"""Streaming filter bank."""
from .base import (FilterBankError, FilterState, FrequencyResponse, InvalidParameterError,
                   NyquistClampWarning, StreamingFilter)
from .moving_average import MovingAverageFilter
from .lowpass import LowpassFilter
from .highpass import HighpassFilter
from .kalman_filter import KalmanFilter
from .registry import FilterType, create_filter
