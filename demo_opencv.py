#!/usr/bin/env python3
"""
FilterScope - Standalone OpenCV Demo
Streams a synthetic signal through a filter and draws both traces live.

Usage: python demo_opencv.py --filter kalman --signal square --noise 0.3

Controls:
    SPACE - Play / pause
    1-4   - Moving average / lowpass / highpass / kalman
    + / - - Adjust the active filter's main parameter
    r     - Reset session
    s     - Save settings
    q     - Quit
"""

import argparse
import logging
import time
import warnings
from pathlib import Path

import cv2
import numpy as np

from Filter_Bank.config import SimulationSettings
from Filter_Bank.core.base import InvalidParameterError, NyquistClampWarning
from Filter_Bank.core.registry import FilterType
from Filter_Bank.session import FilterSession
from Filter_Bank.sources.signal_generator import SignalType
from Streamlit_App.components.trace_renderer import TraceRenderer

logger = logging.getLogger("filterscope.demo")

FILTER_KEYS = {ord('1'): FilterType.MOVING_AVERAGE, ord('2'): FilterType.LOWPASS,
               ord('3'): FilterType.HIGHPASS, ord('4'): FilterType.KALMAN}


def parse_args():
    parser = argparse.ArgumentParser(description="FilterScope OpenCV Demo")
    parser.add_argument("--filter", "-f", choices=[t.value for t in FilterType], default=None, help="Filter type")
    parser.add_argument("--signal", "-s", choices=[t.value for t in SignalType], default=None, help="Waveform")
    parser.add_argument("--frequency", type=float, default=None, help="Signal frequency (Hz)")
    parser.add_argument("--noise", type=float, default=None, help="Noise level")
    parser.add_argument("--sample-rate", type=float, default=None, help="Sample rate (Hz)")
    parser.add_argument("--seed", type=int, default=None, help="Noise seed")
    parser.add_argument("--settings", type=Path, default=None, help="Settings JSON to load")
    parser.add_argument("--fps", type=float, default=30.0, help="Display frame rate")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args()


def build_settings(args) -> SimulationSettings:
    settings = SimulationSettings.load(args.settings) or SimulationSettings()
    overrides = {'filter_type': args.filter, 'signal_type': args.signal, 'frequency': args.frequency,
                 'noise_level': args.noise, 'sample_rate': args.sample_rate, 'seed': args.seed}
    for name, value in overrides.items():
        if value is not None:
            setattr(settings, name, value)
    return settings.validate()


class FilterScopeDemo:
    def __init__(self, settings: SimulationSettings, fps: float = 30.0):
        print("FilterScope - Initializing...")
        self.session = FilterSession(settings)
        self.fps = fps
        self.ticks_per_frame = max(1, int(round(settings.sample_rate / fps)))
        self.original_view = TraceRenderer("Original", TraceRenderer.COLORS['original'],
                                           time_window=settings.time_window)
        self.filtered_view = TraceRenderer("Filtered", TraceRenderer.COLORS['filtered'],
                                           time_window=settings.time_window)
        self.is_playing = True
        print(f"   ✓ {self.session.filter_type.label} filter, {settings.sample_rate:g} Hz")
        print("✅ Ready! Press 'q' to quit, SPACE to pause")

    def run(self):
        cv2.namedWindow("FilterScope", cv2.WINDOW_NORMAL)
        frame_delay = 1.0 / self.fps

        while True:
            started = time.time()
            if self.is_playing:
                self.session.run(self.ticks_per_frame)

            cv2.imshow("FilterScope", self.compose_frame())

            wait_ms = max(1, int((frame_delay - (time.time() - started)) * 1000))
            key = cv2.waitKey(wait_ms) & 0xFF
            if key == ord('q'):
                break
            elif key == ord(' '):
                self.is_playing = not self.is_playing
            elif key in FILTER_KEYS:
                self.switch(FILTER_KEYS[key])
            elif key in (ord('+'), ord('=')):
                self.adjust(+1)
            elif key == ord('-'):
                self.adjust(-1)
            elif key == ord('r'):
                self.reset()
            elif key == ord('s'):
                print(f"💾 Settings saved to {self.session.settings.save()}")

        self.cleanup()

    def compose_frame(self) -> np.ndarray:
        original = self.original_view.render(self.session.original_trace)
        filtered = self.filtered_view.render(self.session.filtered_trace)
        stats = TraceRenderer.render_stats(self.session.statistics, self.session.filter_info)
        return np.vstack([original, filtered, stats])

    def switch(self, filter_type: FilterType):
        try:
            self.session.switch_filter(filter_type)
        except InvalidParameterError as e:
            logger.warning("Cannot switch to %s: %s", filter_type.label, e)

    def adjust(self, direction: int):
        """Step the active filter's main parameter up or down."""
        s = self.session.settings
        filter_type = self.session.filter_type
        if filter_type is FilterType.MOVING_AVERAGE:
            change = {'window_size': s.window_size + direction}
        elif filter_type in (FilterType.LOWPASS, FilterType.HIGHPASS):
            change = {'cutoff_frequency': s.cutoff_frequency * (1.25 if direction > 0 else 0.8)}
        else:
            change = {'measurement_noise': s.measurement_noise * (2.0 if direction > 0 else 0.5)}

        with warnings.catch_warnings():
            warnings.simplefilter("ignore", NyquistClampWarning)
            try:
                self.session.update_settings(**change)
            except InvalidParameterError as e:
                logger.warning("Rejected: %s", e)

    def reset(self):
        print("🔄 Resetting...")
        self.session.reset()

    def cleanup(self):
        cv2.destroyAllWindows()
        print("👋 Goodbye!")


def main():
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    print("\n" + "=" * 50)
    print("  FilterScope - Streaming Filter Visualizer")
    print("  Moving average • Lowpass • Highpass • Kalman")
    print("=" * 50 + "\n")

    try:
        settings = build_settings(args)
    except InvalidParameterError as e:
        raise SystemExit(f"❌ Invalid settings: {e}")

    demo = FilterScopeDemo(settings, args.fps)
    demo.run()


if __name__ == "__main__":
    main()
