"""
Trace Renderer

Draws a scrolling signal trace (grid, axes, autoscaled y-range, polyline) and
a statistics panel into numpy images. Uses OpenCV.
"""

import cv2
import numpy as np
from typing import Dict, Optional, Sequence, Tuple

from Filter_Bank.config import DISPLAY_DEFAULTS
from Filter_Bank.utils.rolling_stats import ComparisonSummary, RollingTimeSeries


class TraceRenderer:
    """OpenCV renderer for one signal trace panel."""

    COLORS = {
        'background': (250, 250, 250), 'grid': (240, 240, 240), 'axis': (204, 204, 204),
        'label': (102, 102, 102), 'original': (243, 150, 33), 'filtered': (80, 175, 76),
        'text_bg': (30, 30, 30), 'text': (255, 255, 255), 'accent': (255, 0, 212)
    }
    GRID_SPACING = 40
    LEFT_MARGIN = 40

    def __init__(self, title: str = "", signal_color: Tuple[int, int, int] = (243, 150, 33),
                 auto_scale: bool = True, y_range: Tuple[float, float] = (-2.0, 2.0),
                 time_window: float = DISPLAY_DEFAULTS.TIME_WINDOW):
        self.title = title
        self.signal_color = signal_color
        self.auto_scale = auto_scale
        self.y_min, self.y_max = y_range
        self.time_window = time_window

    def set_y_range(self, y_min: float, y_max: float):
        """Fix the y-range and turn autoscale off."""
        self.y_min, self.y_max = y_min, y_max
        self.auto_scale = False

    def update_scale(self, values: Sequence[float]):
        """Fit the y-range to values with 20% headroom; a flat trace gets +/-1."""
        if not self.auto_scale or len(values) <= 10:
            return
        lo, hi = min(values), max(values)
        spread = hi - lo
        if spread < DISPLAY_DEFAULTS.MIN_Y_RANGE:
            self.y_min, self.y_max = -1.0, 1.0
        else:
            margin = spread * DISPLAY_DEFAULTS.Y_MARGIN
            self.y_min, self.y_max = lo - margin, hi + margin

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def render(self, series: RollingTimeSeries, width: int = 640, height: int = 200) -> np.ndarray:
        frame = np.full((height, width, 3), self.COLORS['background'], dtype=np.uint8)
        self._draw_grid(frame, width, height)
        values = series.get_values()
        self.update_scale(values)
        self._draw_axis(frame, width, height)
        self._draw_signal(frame, series.points(), width, height)
        if self.title:
            cv2.putText(frame, self.title, (self.LEFT_MARGIN + 10, 18), cv2.FONT_HERSHEY_SIMPLEX,
                        0.5, self.signal_color, 1)
        return frame

    def _draw_grid(self, frame, w, h):
        # Dashed lines as short segments
        for x in range(0, w + 1, self.GRID_SPACING):
            for y in range(0, h, 4):
                cv2.line(frame, (x, y), (x, min(y + 2, h)), self.COLORS['grid'], 1)
        for y in range(0, h + 1, self.GRID_SPACING):
            for x in range(0, w, 4):
                cv2.line(frame, (x, y), (min(x + 2, w), y), self.COLORS['grid'], 1)

    def _draw_axis(self, frame, w, h):
        zero_y = self.value_to_y(0.0, h) if self.y_min <= 0 <= self.y_max else h // 2
        cv2.line(frame, (0, zero_y), (w, zero_y), self.COLORS['axis'], 1)
        cv2.line(frame, (self.LEFT_MARGIN, 0), (self.LEFT_MARGIN, h), self.COLORS['axis'], 1)

        font, scale, color = cv2.FONT_HERSHEY_SIMPLEX, 0.35, self.COLORS['label']
        cv2.putText(frame, f"{self.y_max:.1f}", (2, 12), font, scale, color, 1)
        cv2.putText(frame, f"{self.y_min:.1f}", (2, h - 4), font, scale, color, 1)
        cv2.putText(frame, "Time (s)", (w // 2 - 25, h - 4), font, scale, color, 1)

    def _draw_signal(self, frame, points, w, h):
        if len(points) < 2:
            return
        latest = points[-1][0]
        earliest = latest - self.time_window
        pixels = [(self.time_to_x(t, earliest, latest, w), self.value_to_y(v, h))
                  for t, v in points if t >= earliest]
        if len(pixels) < 2:
            return
        cv2.polylines(frame, [np.array(pixels, dtype=np.int32)], False, self.signal_color, 2, cv2.LINE_AA)

    def time_to_x(self, t: float, earliest: float, latest: float, w: int) -> int:
        span = latest - earliest
        normalized = (t - earliest) / span if span > 0 else 1.0
        return int(50 + normalized * (w - 60))

    def value_to_y(self, value: float, h: int) -> int:
        span = self.y_max - self.y_min
        normalized = (value - self.y_min) / span if span > 0 else 0.5
        return int(h - normalized * h)

    # -------------------------------------------------------------------------
    # Statistics panel
    # -------------------------------------------------------------------------

    @classmethod
    def render_stats(cls, summary: ComparisonSummary, filter_info: Optional[Dict] = None,
                     width: int = 640, height: int = 90) -> np.ndarray:
        frame = np.full((height, width, 3), cls.COLORS['text_bg'], dtype=np.uint8)
        cv2.rectangle(frame, (0, 0), (width - 1, height - 1), cls.COLORS['accent'], 1)
        font = cv2.FONT_HERSHEY_SIMPLEX

        cv2.putText(frame, f"Original RMS: {summary.original.rms:.2f}", (10, 25), font, 0.5,
                    cls.COLORS['original'], 1)
        cv2.putText(frame, f"Filtered RMS: {summary.filtered.rms:.2f}", (10, 50), font, 0.5,
                    cls.COLORS['filtered'], 1)
        cv2.putText(frame, f"Noise reduction: {summary.noise_reduction:.0f}%", (10, 75), font, 0.5,
                    cls.COLORS['text'], 1)
        if filter_info:
            cv2.putText(frame, filter_info.get('type', ''), (width // 2, 25), font, 0.45, cls.COLORS['text'], 1)
            detail = ", ".join(f"{k}={v:.3g}" for k, v in filter_info.items()
                               if isinstance(v, (int, float)) and not isinstance(v, bool))
            cv2.putText(frame, detail[:60], (width // 2, 50), font, 0.35, cls.COLORS['text'], 1)
        return frame
