"""
Signal Generator Module

Deterministic test waveforms (sine, square, triangle, Gaussian noise) sampled
on a virtual clock, with additive Gaussian noise from a seeded numpy generator.
"""

import math
import numpy as np
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Union

from ..core.base import InvalidParameterError, require_finite, validate_sample_rate


class SignalType(Enum):
    SINE = "sine"
    SQUARE = "square"
    TRIANGLE = "triangle"
    NOISE = "noise"

    @classmethod
    def parse(cls, value: Union[str, "SignalType"]) -> "SignalType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidParameterError(
                f"Unknown signal type {value!r}; expected one of {[t.value for t in cls]}") from None


def validate_waveform_parameter(name: str, value: float) -> float:
    """Frequency must be > 0; amplitude and noise level must be >= 0."""
    value = require_finite(name, value)
    if name == 'frequency' and value <= 0:
        raise InvalidParameterError(f"frequency must be > 0, got {value!r}")
    if value < 0:
        raise InvalidParameterError(f"{name} must be >= 0, got {value!r}")
    return value


class SignalGenerator:
    """Waveform source advancing one sample period per `next_sample()`."""

    def __init__(self, sample_rate: float = 1000.0, signal_type: Union[str, SignalType] = SignalType.SINE,
                 frequency: float = 5.0, amplitude: float = 1.0, noise_level: float = 0.1,
                 seed: Optional[int] = None):
        self.sample_rate = validate_sample_rate(sample_rate)
        self.time_step = 1 / self.sample_rate
        self.time = 0.0
        self.signal_type = SignalType.parse(signal_type)
        self.frequency = validate_waveform_parameter('frequency', frequency)
        self.amplitude = validate_waveform_parameter('amplitude', amplitude)
        self.noise_level = validate_waveform_parameter('noise_level', noise_level)
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    # -------------------------------------------------------------------------
    # Waveforms
    # -------------------------------------------------------------------------

    def generate_sine(self, frequency: float, amplitude: float = 1.0, phase: float = 0.0) -> float:
        return amplitude * math.sin(2 * math.pi * frequency * self.time + phase)

    def generate_square(self, frequency: float, amplitude: float = 1.0) -> float:
        return amplitude * (1 if math.sin(2 * math.pi * frequency * self.time) >= 0 else -1)

    def generate_triangle(self, frequency: float, amplitude: float = 1.0) -> float:
        """Rises -amp -> +amp over the first half period, falls back over the second."""
        period = 1 / frequency
        phase = (self.time % period) / period
        triangle = 2 * phase if phase < 0.5 else 2 * (1 - phase)
        return amplitude * (2 * triangle - 1)

    def generate_noise(self, amplitude: float = 1.0) -> float:
        """Gaussian white noise with standard deviation `amplitude`."""
        return amplitude * float(self._rng.standard_normal())

    def generate_signal(self, signal_type: Union[str, SignalType], frequency: float,
                        amplitude: float = 1.0, noise_level: float = 0.0) -> float:
        """Base waveform plus additive Gaussian noise."""
        signal_type = SignalType.parse(signal_type)
        if signal_type is SignalType.SQUARE:
            base = self.generate_square(frequency, amplitude)
        elif signal_type is SignalType.TRIANGLE:
            base = self.generate_triangle(frequency, amplitude)
        elif signal_type is SignalType.NOISE:
            base = self.generate_noise(amplitude)
        else:
            base = self.generate_sine(frequency, amplitude)
        return base + self.generate_noise(noise_level)

    def generate_complex_signal(self, frequencies: Sequence[float], amplitudes: Sequence[float],
                                noise_level: float = 0.0) -> float:
        """Sum of sines; a missing or zero amplitude counts as 1."""
        signal = 0.0
        for i, freq in enumerate(frequencies):
            amp = amplitudes[i] if i < len(amplitudes) and amplitudes[i] else 1.0
            signal += self.generate_sine(freq, amp)
        if noise_level > 0:
            signal += self.generate_noise(noise_level)
        return signal

    # -------------------------------------------------------------------------
    # Clock
    # -------------------------------------------------------------------------

    def next_sample(self) -> float:
        """Sample at the current time with the configured waveform, then advance."""
        value = self.generate_signal(self.signal_type, self.frequency, self.amplitude, self.noise_level)
        self.step()
        return value

    def step(self):
        self.time += self.time_step

    def reset(self):
        """Rewind the clock and re-seed so the same stream replays."""
        self.time = 0.0
        self._rng = np.random.default_rng(self.seed)

    @property
    def current_time(self) -> float:
        return self.time

    def set_sample_rate(self, sample_rate: float):
        self.sample_rate = validate_sample_rate(sample_rate)
        self.time_step = 1 / self.sample_rate

    def configure(self, **params: Any):
        """
        Update waveform parameters (signal_type, frequency, amplitude,
        noise_level, sample_rate). All values are checked before any is applied.
        """
        checked = {}
        for name, value in params.items():
            if name == 'signal_type':
                checked[name] = SignalType.parse(value)
            elif name in ('frequency', 'amplitude', 'noise_level'):
                checked[name] = validate_waveform_parameter(name, value)
            elif name == 'sample_rate':
                checked[name] = validate_sample_rate(value)
            else:
                raise InvalidParameterError(f"Unknown signal parameter {name!r}")

        sample_rate = checked.pop('sample_rate', None)
        if sample_rate is not None:
            self.set_sample_rate(sample_rate)
        for name, value in checked.items():
            setattr(self, name, value)

    def get_info(self) -> Dict[str, Any]:
        return {
            'signal_type': self.signal_type.value, 'frequency': self.frequency,
            'amplitude': self.amplitude, 'noise_level': self.noise_level,
            'sample_rate': self.sample_rate, 'time': self.time
        }
