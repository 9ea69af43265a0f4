"""Filter types and construction from session settings."""

from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from .base import InvalidParameterError, StreamingFilter
from .highpass import HighpassFilter
from .kalman_filter import KalmanFilter
from .lowpass import LowpassFilter
from .moving_average import MovingAverageFilter

if TYPE_CHECKING:
    from ..config import SimulationSettings


class FilterType(Enum):
    MOVING_AVERAGE = "moving-average"
    LOWPASS = "lowpass"
    HIGHPASS = "highpass"
    KALMAN = "kalman"

    @property
    def label(self) -> str:
        return {FilterType.MOVING_AVERAGE: "Moving Average", FilterType.LOWPASS: "Lowpass",
                FilterType.HIGHPASS: "Highpass", FilterType.KALMAN: "Kalman"}[self]

    @classmethod
    def parse(cls, value: Union[str, "FilterType"]) -> "FilterType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidParameterError(
                f"Unknown filter type {value!r}; expected one of {[t.value for t in cls]}") from None


# Setter name per tunable parameter, for live updates
PARAMETER_SETTERS = {
    'window_size': 'set_window_size',
    'cutoff_frequency': 'set_cutoff_frequency',
    'sample_rate': 'set_sample_rate',
    'process_noise': 'set_process_noise',
    'measurement_noise': 'set_measurement_noise',
}


def create_filter(filter_type: Union[str, FilterType],
                  settings: Optional["SimulationSettings"] = None) -> StreamingFilter:
    """Build a filter of `filter_type` from settings (defaults when None)."""
    from ..config import SimulationSettings

    filter_type = FilterType.parse(filter_type)
    s = settings or SimulationSettings()

    if filter_type is FilterType.MOVING_AVERAGE:
        return MovingAverageFilter(s.window_size)
    if filter_type is FilterType.LOWPASS:
        return LowpassFilter(s.cutoff_frequency, s.sample_rate)
    if filter_type is FilterType.HIGHPASS:
        return HighpassFilter(s.cutoff_frequency, s.sample_rate)
    return KalmanFilter(s.process_noise, s.measurement_noise, dt=1 / s.sample_rate)
