import math

import numpy as np
import pytest

from Filter_Bank.utils.rolling_stats import RollingStatistics, RollingTimeSeries, SignalComparison


class TestRollingStatistics:
    def test_empty(self):
        stats = RollingStatistics(5)
        summary = stats.summary()
        assert summary.count == 0
        assert stats.mean == 0.0 and stats.std == 0.0 and stats.rms == 0.0

    def test_sliding_window(self):
        stats = RollingStatistics(5)
        for v in range(1, 11):
            stats.add(float(v))
        assert stats.values() == [6, 7, 8, 9, 10]
        assert stats.mean == pytest.approx(8.0)
        assert stats.std == pytest.approx(math.sqrt(2.0))
        assert stats.rms == pytest.approx(math.sqrt(66.0))

    def test_matches_numpy_on_random_stream(self):
        rng = np.random.default_rng(3)
        data = rng.normal(1.0, 2.0, size=1000)
        stats = RollingStatistics(100)
        for v in data:
            stats.add(float(v))
        window = data[-100:]
        summary = stats.summary()
        assert summary.mean == pytest.approx(window.mean(), abs=1e-9)
        assert summary.std == pytest.approx(window.std(), rel=1e-6)
        assert summary.rms == pytest.approx(np.sqrt(np.mean(window ** 2)), rel=1e-6)
        assert summary.median == pytest.approx(np.median(window))
        assert summary.min == window.min() and summary.max == window.max()

    def test_reset(self):
        stats = RollingStatistics(3)
        stats.add(1.0)
        stats.reset()
        assert stats.count == 0
        assert stats.summary().to_dict()['count'] == 0


class TestSignalComparison:
    def test_noise_reduction(self):
        comparison = SignalComparison(4)
        for original, filtered in [(1, 0.5), (-1, -0.5), (1, 0.5), (-1, -0.5)]:
            comparison.add(original, filtered)
        assert comparison.noise_reduction == pytest.approx(50.0)

    def test_noise_reduction_is_floored_at_zero(self):
        comparison = SignalComparison(4)
        for original, filtered in [(1, 2), (-1, -2), (1, 2), (-1, -2)]:
            comparison.add(original, filtered)
        assert comparison.noise_reduction == 0.0

    def test_flat_original_gives_zero(self):
        comparison = SignalComparison(4)
        for _ in range(4):
            comparison.add(0.0, 0.0)
        assert comparison.noise_reduction == 0.0

    def test_summary(self):
        comparison = SignalComparison(10)
        comparison.add(2.0, 1.0)
        summary = comparison.summary().to_dict()
        assert summary['original']['mean'] == 2.0
        assert summary['filtered']['mean'] == 1.0


class TestRollingTimeSeries:
    def test_drops_points_older_than_window(self):
        series = RollingTimeSeries(window_seconds=1.0, max_points=100)
        for i in range(30):
            series.add(float(i), i * 0.1)
        times = series.get_times()
        assert times[0] >= times[-1] - 1.0
        assert series.get_values()[-1] == 29.0

    def test_point_budget(self):
        series = RollingTimeSeries(window_seconds=100.0, max_points=10)
        for i in range(50):
            series.add(float(i), i * 0.01)
        assert series.count == 10
        assert series.max_points == 10
        assert series.points()[0] == pytest.approx((0.4, 40.0))

    def test_reset(self):
        series = RollingTimeSeries()
        series.add(1.0, 0.0)
        series.reset()
        assert series.count == 0
