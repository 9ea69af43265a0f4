"""
Configuration

Construction defaults for every filter and the simulation settings shared by
the dashboard and the OpenCV demo. Settings persist as JSON under data/.
"""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .core.base import (InvalidParameterError, validate_cutoff, validate_noise, validate_sample_rate,
                        validate_window_size)
from .core.registry import FilterType
from .sources.signal_generator import SignalType, validate_waveform_parameter

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------

_SETTINGS_FILE = Path(__file__).parent.parent / "data" / "settings.json"


@dataclass(frozen=True)
class FilterDefaults:
    """Per-filter defaults used when a session builds its filter."""
    WINDOW_SIZE: int = 10
    CUTOFF_FREQUENCY: float = 5.0      # Hz
    PROCESS_NOISE: float = 0.01        # q
    MEASUREMENT_NOISE: float = 0.1     # r


@dataclass(frozen=True)
class DisplayDefaults:
    """Trace display defaults."""
    MAX_POINTS: int = 400
    TIME_WINDOW: float = 2.0           # seconds shown per trace
    STATS_INTERVAL: int = 10           # ticks between statistics refreshes
    MIN_Y_RANGE: float = 0.1           # below this, autoscale falls back to +/-1
    Y_MARGIN: float = 0.2              # autoscale headroom fraction


FILTER_DEFAULTS = FilterDefaults()
DISPLAY_DEFAULTS = DisplayDefaults()


# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------

@dataclass
class SimulationSettings:
    """Signal, filter and display settings for one session."""
    signal_type: str = SignalType.SINE.value
    frequency: float = 5.0
    amplitude: float = 1.0
    noise_level: float = 0.1
    sample_rate: float = 1000.0
    seed: Optional[int] = None

    filter_type: str = FilterType.MOVING_AVERAGE.value
    window_size: int = FILTER_DEFAULTS.WINDOW_SIZE
    cutoff_frequency: float = FILTER_DEFAULTS.CUTOFF_FREQUENCY
    process_noise: float = FILTER_DEFAULTS.PROCESS_NOISE
    measurement_noise: float = FILTER_DEFAULTS.MEASUREMENT_NOISE

    display_points: int = DISPLAY_DEFAULTS.MAX_POINTS
    time_window: float = DISPLAY_DEFAULTS.TIME_WINDOW
    stats_interval: int = DISPLAY_DEFAULTS.STATS_INTERVAL

    def validate(self) -> "SimulationSettings":
        """Raise InvalidParameterError for values no component can accept."""
        SignalType.parse(self.signal_type)
        FilterType.parse(self.filter_type)
        for name in ('frequency', 'amplitude', 'noise_level'):
            validate_waveform_parameter(name, getattr(self, name))
        validate_sample_rate(self.sample_rate)
        validate_window_size(self.window_size)
        # Any filter type must be buildable from these, not only the active one
        validate_cutoff(self.cutoff_frequency, self.sample_rate)
        validate_noise("process_noise", self.process_noise)
        validate_noise("measurement_noise", self.measurement_noise)
        if self.display_points < 2:
            raise InvalidParameterError(f"display_points must be >= 2, got {self.display_points!r}")
        if self.time_window <= 0:
            raise InvalidParameterError(f"time_window must be > 0, got {self.time_window!r}")
        if self.stats_interval < 1:
            raise InvalidParameterError(f"stats_interval must be >= 1, got {self.stats_interval!r}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationSettings":
        """Build from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known}).validate()

    def save(self, path: Optional[Path] = None) -> Path:
        p = Path(path) if path else _SETTINGS_FILE
        p.parent.mkdir(parents=True, exist_ok=True)
        with open(p, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info("Saved settings to %s", p)
        return p

    @classmethod
    def load(cls, path: Optional[Path] = None) -> Optional["SimulationSettings"]:
        """Load settings from JSON. Returns None if missing or unreadable."""
        p = Path(path) if path else _SETTINGS_FILE
        if not p.exists():
            return None
        try:
            with open(p) as f:
                data = json.load(f)
            return cls.from_dict(data)
        except (OSError, json.JSONDecodeError, TypeError, InvalidParameterError) as e:
            logger.warning("Could not load settings from %s: %s", p, e)
            return None
