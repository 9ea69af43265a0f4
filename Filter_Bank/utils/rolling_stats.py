"""Rolling window statistics for raw vs. filtered signal comparison."""

import numpy as np
from collections import deque
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple


@dataclass
class StatsSummary:
    mean: float
    std: float
    rms: float
    min: float
    max: float
    median: float
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mean': self.mean, 'std': self.std, 'rms': self.rms,
            'min': self.min, 'max': self.max, 'median': self.median, 'count': self.count
        }


@dataclass
class ComparisonSummary:
    original: StatsSummary
    filtered: StatsSummary
    noise_reduction: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'original': self.original.to_dict(),
            'filtered': self.filtered.to_dict(),
            'noise_reduction': self.noise_reduction
        }


class RollingStatistics:
    """Sliding-window mean/std (Welford add/remove) and RMS (running sum of squares)."""

    def __init__(self, window_size: int = 400):
        self.window_size = window_size
        self._data = deque(maxlen=window_size)
        self._count, self._mean, self._M2 = 0, 0.0, 0.0
        self._sum_sq = 0.0

    def add(self, value: float):
        if len(self._data) == self.window_size:
            self._remove_from_stats(self._data[0])
        self._data.append(value)
        self._add_to_stats(value)

    def _add_to_stats(self, value: float):
        self._count += 1
        delta = value - self._mean
        self._mean += delta / self._count
        self._M2 += delta * (value - self._mean)
        self._sum_sq += value * value

    def _remove_from_stats(self, value: float):
        if self._count <= 1:
            self._count, self._mean, self._M2, self._sum_sq = 0, 0.0, 0.0, 0.0
            return
        self._count -= 1
        delta = value - self._mean
        self._mean -= delta / self._count
        self._M2 = max(0, self._M2 - delta * (value - self._mean))
        self._sum_sq = max(0.0, self._sum_sq - value * value)

    @property
    def count(self) -> int:
        return len(self._data)

    @property
    def mean(self) -> float:
        return self._mean if self._count > 0 else 0.0

    @property
    def std(self) -> float:
        """Population standard deviation of the window."""
        return float(np.sqrt(self._M2 / self._count)) if self._count > 1 else 0.0

    @property
    def rms(self) -> float:
        return float(np.sqrt(self._sum_sq / self._count)) if self._count > 0 else 0.0

    def values(self) -> List[float]:
        return list(self._data)

    def summary(self) -> StatsSummary:
        if not self._data:
            return StatsSummary(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0)
        return StatsSummary(self.mean, self.std, self.rms, min(self._data), max(self._data),
                            float(np.median(list(self._data))), len(self._data))

    def reset(self):
        self._data.clear()
        self._count, self._mean, self._M2 = 0, 0.0, 0.0
        self._sum_sq = 0.0


class SignalComparison:
    """Raw and filtered windows side by side; reads values only."""

    def __init__(self, window_size: int = 400):
        self.original = RollingStatistics(window_size)
        self.filtered = RollingStatistics(window_size)

    def add(self, original: float, filtered: float):
        self.original.add(original)
        self.filtered.add(filtered)

    @property
    def noise_reduction(self) -> float:
        """Percent drop in std from original to filtered, floored at 0."""
        if self.original.rms <= 0 or self.original.std <= 0:
            return 0.0
        reduction = max(0.0, 1 - self.filtered.std / self.original.std) * 100
        return 0.0 if np.isnan(reduction) else reduction

    def summary(self) -> ComparisonSummary:
        return ComparisonSummary(self.original.summary(), self.filtered.summary(), self.noise_reduction)

    def reset(self):
        self.original.reset()
        self.filtered.reset()


class RollingTimeSeries:
    """Rolling (timestamp, value) trace bounded by a time window and a point budget."""

    def __init__(self, window_seconds: float = 2.0, max_points: int = 400):
        self.window_seconds = window_seconds
        self._data: deque = deque(maxlen=max_points)

    def add(self, value: float, timestamp: float):
        self._data.append((timestamp, value))
        cutoff = timestamp - self.window_seconds
        while self._data and self._data[0][0] < cutoff:
            self._data.popleft()

    def get_times(self) -> List[float]:
        return [t for t, _ in self._data]

    def get_values(self) -> List[float]:
        return [v for _, v in self._data]

    def points(self) -> List[Tuple[float, float]]:
        return list(self._data)

    @property
    def max_points(self) -> int:
        return self._data.maxlen

    @property
    def count(self) -> int:
        return len(self._data)

    def reset(self):
        self._data.clear()
