"""
Moving Average Filter

Uniform-weight FIR filter over the last N samples. A circular buffer and a
running sum keep every update O(1) regardless of N. Until N samples have been
seen, the average divides by the number of samples seen so far.
"""

import math
from typing import Any, Dict, List, Sequence

import numpy as np

from .base import FilterState, FrequencyResponse, validate_window_size


class MovingAverageFilter:
    """Streaming moving average with partial-window averaging during fill."""

    def __init__(self, window_size: int = 10):
        self._window_size = validate_window_size(window_size)
        self._buffer: List[float] = [0.0] * self._window_size
        self._index = 0
        self._full = False
        self._sum = 0.0
        self._seen = 0

    # -------------------------------------------------------------------------
    # Streaming
    # -------------------------------------------------------------------------

    def filter(self, sample: float) -> float:
        """Push one sample and return the current window average."""
        self._sum -= self._buffer[self._index]
        self._buffer[self._index] = sample
        self._sum += sample
        self._index = (self._index + 1) % self._window_size
        self._seen += 1

        if not self._full and self._index == 0:
            self._full = True

        return self._sum / self.current_count

    def filter_batch(self, samples: Sequence[float]) -> List[float]:
        return [self.filter(x) for x in samples]

    def set_window_size(self, window_size: int):
        """
        Resize the window, replaying the newest part of the old window.

        Shrinking keeps the most recent samples; growing keeps all of them and
        continues with partial-window averaging until the new window fills.
        """
        window_size = validate_window_size(window_size)
        old_data = self.get_current_data()

        self._window_size = window_size
        self._buffer = [0.0] * self._window_size
        self._index, self._full, self._sum, self._seen = 0, False, 0.0, 0

        for value in old_data[max(0, len(old_data) - self._window_size):]:
            self.filter(value)

    def reset(self):
        """Drop all samples; the window size is kept."""
        self._buffer = [0.0] * self._window_size
        self._index, self._full, self._sum, self._seen = 0, False, 0.0, 0

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def window_size(self) -> int:
        return self._window_size

    @property
    def current_count(self) -> int:
        """Number of samples in the logical window."""
        return self._window_size if self._full else self._index

    @property
    def state(self) -> FilterState:
        return FilterState.RUNNING if self._seen > 0 else FilterState.UNINITIALIZED

    @property
    def is_initialized(self) -> bool:
        return self._seen > 0

    @property
    def running_sum(self) -> float:
        return self._sum

    def get_current_data(self) -> List[float]:
        """Logical window contents, oldest first."""
        if not self._full:
            return self._buffer[:self._index]
        return self._buffer[self._index:] + self._buffer[:self._index]

    def get_current_average(self) -> float:
        count = self.current_count
        return self._sum / count if count > 0 else 0.0

    def get_current_variance(self) -> float:
        """Population variance of the window."""
        data = self.get_current_data()
        if len(data) < 2:
            return 0.0
        mean = self.get_current_average()
        return sum((v - mean) ** 2 for v in data) / len(data)

    def get_current_standard_deviation(self) -> float:
        return math.sqrt(self.get_current_variance())

    # -------------------------------------------------------------------------
    # Characteristics
    # -------------------------------------------------------------------------

    def get_group_delay(self) -> float:
        """Group delay in samples: (N - 1) / 2."""
        return (self._window_size - 1) / 2

    def get_coefficients(self) -> np.ndarray:
        return np.full(self._window_size, 1 / self._window_size)

    def get_frequency_response(self, frequency: float) -> FrequencyResponse:
        """
        Response at a normalized frequency f in [0, 0.5] (0.5 = Nyquist).

        |H| = |sin(N*pi*f) / (N*sin(pi*f))|, phase = -(N-1)*pi*f.
        """
        if frequency == 0:
            return FrequencyResponse(magnitude=1.0, phase=0.0)
        n = self._window_size
        magnitude = abs(math.sin(n * math.pi * frequency) / (n * math.sin(math.pi * frequency)))
        phase = -(n - 1) * math.pi * frequency
        return FrequencyResponse(magnitude=magnitude, phase=phase)

    def get_step_response(self, samples: int = 50) -> List[float]:
        """Unit step response from a fresh filter of the same size."""
        fresh = MovingAverageFilter(self._window_size)
        return [fresh.filter(1.0) for _ in range(samples)]

    def get_info(self) -> Dict[str, Any]:
        return {
            'type': 'Moving Average',
            'window_size': self._window_size,
            'group_delay': self.get_group_delay(),
            'current_size': self.current_count,
            'state': self.state.value,
            'description': f"{self._window_size}-sample moving average",
        }
