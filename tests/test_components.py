import numpy as np
import pytest

pytest.importorskip("cv2")
pytest.importorskip("plotly")

from Filter_Bank.core.kalman_filter import KalmanFilter
from Filter_Bank.core.lowpass import LowpassFilter
from Filter_Bank.core.moving_average import MovingAverageFilter
from Filter_Bank.utils.rolling_stats import RollingTimeSeries, SignalComparison
from Streamlit_App.components import (TraceRenderer, create_frequency_response_chart,
                                      create_noise_reduction_gauge, create_signal_chart)


def make_series(values, dt=0.01):
    series = RollingTimeSeries(window_seconds=10.0, max_points=500)
    for i, v in enumerate(values):
        series.add(v, i * dt)
    return series


class TestTraceRenderer:
    def test_render_shape(self):
        renderer = TraceRenderer("Original", TraceRenderer.COLORS['original'])
        frame = renderer.render(make_series(np.sin(np.linspace(0, 6, 100))), width=320, height=120)
        assert frame.shape == (120, 320, 3)
        assert frame.dtype == np.uint8

    def test_autoscale_adds_margin(self):
        renderer = TraceRenderer()
        renderer.update_scale([0.0] * 10 + [1.0, 2.0])
        assert renderer.y_min == pytest.approx(-0.4)
        assert renderer.y_max == pytest.approx(2.4)

    def test_flat_trace_uses_unit_range(self):
        renderer = TraceRenderer()
        renderer.update_scale([3.0] * 20)
        assert (renderer.y_min, renderer.y_max) == (-1.0, 1.0)

    def test_short_trace_keeps_range(self):
        renderer = TraceRenderer(y_range=(-5.0, 5.0))
        renderer.update_scale([0.0, 1.0])
        assert (renderer.y_min, renderer.y_max) == (-5.0, 5.0)

    def test_fixed_range_disables_autoscale(self):
        renderer = TraceRenderer()
        renderer.set_y_range(-3.0, 3.0)
        renderer.update_scale(list(range(50)))
        assert (renderer.y_min, renderer.y_max) == (-3.0, 3.0)

    def test_empty_series_renders(self):
        frame = TraceRenderer().render(RollingTimeSeries())
        assert frame.shape == (200, 640, 3)

    def test_render_stats(self):
        comparison = SignalComparison(10)
        for i in range(10):
            comparison.add(float(i % 2), 0.5)
        panel = TraceRenderer.render_stats(comparison.summary(), KalmanFilter().get_info())
        assert panel.shape == (90, 640, 3)


class TestCharts:
    def test_signal_chart(self):
        fig = create_signal_chart([0.0, 0.1, 0.2], [1.0, 2.0, 1.5], [1.0, 1.5, 1.5])
        assert [trace.name for trace in fig.data] == ['Original', 'Filtered']

    @pytest.mark.parametrize("filt", [MovingAverageFilter(8), LowpassFilter(5.0, 100.0)])
    def test_frequency_response_chart(self, filt):
        fig = create_frequency_response_chart(filt, 100.0, points=50)
        x = np.asarray(fig.data[0].x)
        y = np.asarray(fig.data[0].y)
        assert x[-1] == pytest.approx(50.0)
        assert y[0] == pytest.approx(0.0, abs=1e-9)

    def test_gauge(self):
        fig = create_noise_reduction_gauge(42.0)
        assert fig.data[0].value == 42.0
