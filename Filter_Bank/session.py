"""
Filter Session

Owns the signal source, the single active filter and the statistics, and runs
the generate -> filter -> record cycle once per tick.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from .config import SimulationSettings
from .core.base import InvalidParameterError, StreamingFilter
from .core.kalman_filter import KalmanFilter
from .core.registry import PARAMETER_SETTERS, FilterType, create_filter
from .sources.signal_generator import SignalGenerator
from .utils.rolling_stats import ComparisonSummary, RollingTimeSeries, SignalComparison

logger = logging.getLogger(__name__)

_SIGNAL_PARAMETERS = ('signal_type', 'frequency', 'amplitude', 'noise_level')
_FILTER_PARAMETERS = ('window_size', 'cutoff_frequency', 'process_noise', 'measurement_noise')


@dataclass
class TickResult:
    """One processed sample."""
    original: float
    filtered: float
    timestamp: float

    def to_dict(self) -> Dict[str, float]:
        return {'original': self.original, 'filtered': self.filtered, 'timestamp': self.timestamp}


class FilterSession:
    """Single-threaded driver: one source, one active filter, one stats collector."""

    def __init__(self, settings: Optional[SimulationSettings] = None):
        self.settings = replace(settings or SimulationSettings()).validate()
        s = self.settings
        self.source = SignalGenerator(s.sample_rate, s.signal_type, s.frequency, s.amplitude,
                                      s.noise_level, seed=s.seed)
        self.filter_type = FilterType.parse(s.filter_type)
        self.filter: StreamingFilter = create_filter(self.filter_type, s)
        self._sync_cutoff()
        self.comparison = SignalComparison(s.display_points)
        self.original_trace = RollingTimeSeries(s.time_window, s.display_points)
        self.filtered_trace = RollingTimeSeries(s.time_window, s.display_points)
        self.tick_count = 0
        self._statistics = self.comparison.summary()

    # -------------------------------------------------------------------------
    # Loop
    # -------------------------------------------------------------------------

    def tick(self) -> TickResult:
        """Generate one sample, filter it, and record both values."""
        timestamp = self.source.current_time
        original = self.source.next_sample()
        filtered = self.filter.filter(original)

        self.original_trace.add(original, timestamp)
        self.filtered_trace.add(filtered, timestamp)
        self.comparison.add(original, filtered)
        self.tick_count += 1

        if self.tick_count % self.settings.stats_interval == 0:
            self._statistics = self.comparison.summary()
        return TickResult(original, filtered, timestamp)

    def run(self, ticks: int) -> List[TickResult]:
        return [self.tick() for _ in range(ticks)]

    # -------------------------------------------------------------------------
    # Control
    # -------------------------------------------------------------------------

    def switch_filter(self, filter_type) -> StreamingFilter:
        """Replace the active filter with a fresh one built from settings."""
        filter_type = FilterType.parse(filter_type)
        self.filter = create_filter(filter_type, self.settings)
        self.filter_type = filter_type
        self.settings.filter_type = filter_type.value
        self._sync_cutoff()
        self._clear_records()
        logger.info("Switched filter to %s", filter_type.value)
        return self.filter

    def update_settings(self, **changes: Any):
        """
        Apply live parameter changes.

        Signal parameters go to the source; filter parameters go to the active
        filter's setter when it has one. All values are kept in settings so a
        later switch_filter builds with them. The whole change set is validated
        before anything is applied.
        """
        unknown = set(changes) - set(_SIGNAL_PARAMETERS) - set(_FILTER_PARAMETERS) - {'sample_rate'}
        if unknown:
            raise InvalidParameterError(f"Unknown parameter(s): {sorted(unknown)}")
        candidate = replace(self.settings, **changes).validate()

        signal_changes = {k: v for k, v in changes.items() if k in _SIGNAL_PARAMETERS}
        if signal_changes:
            self.source.configure(**signal_changes)
        if 'sample_rate' in changes:
            self._apply_sample_rate(candidate)
        for name in _FILTER_PARAMETERS:
            # cutoff already went in with the sample rate
            if name not in changes or (name == 'cutoff_frequency' and 'sample_rate' in changes):
                continue
            setter = getattr(self.filter, PARAMETER_SETTERS[name], None)
            if setter is not None:
                setter(changes[name])

        for name, value in changes.items():
            setattr(self.settings, name, value)
            logger.info("Set %s = %r", name, value)

        if {'cutoff_frequency', 'sample_rate'} & set(changes):
            self._sync_cutoff()

    def _sync_cutoff(self):
        # A clamped cutoff is what the filter actually runs with
        if hasattr(self.filter, 'cutoff_frequency'):
            self.settings.cutoff_frequency = self.filter.cutoff_frequency

    def _apply_sample_rate(self, settings: SimulationSettings):
        sample_rate = settings.sample_rate
        if isinstance(self.filter, KalmanFilter):
            self.filter.set_time_step(1 / sample_rate)
        elif hasattr(self.filter, 'set_sample_rate'):
            self.filter.set_sample_rate(sample_rate, settings.cutoff_frequency)
        self.source.set_sample_rate(sample_rate)

    def reset(self):
        """Source, filter, statistics and traces back to the start."""
        self.source.reset()
        self.filter.reset()
        self._clear_records()
        logger.info("Session reset")

    def _clear_records(self):
        self.comparison.reset()
        self.original_trace.reset()
        self.filtered_trace.reset()
        self.tick_count = 0
        self._statistics = self.comparison.summary()

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def statistics(self) -> ComparisonSummary:
        """Latest statistics snapshot (refreshed every stats_interval ticks)."""
        return self._statistics

    @property
    def filter_info(self) -> Dict[str, Any]:
        return self.filter.get_info()

    @property
    def current_time(self) -> float:
        return self.source.current_time
