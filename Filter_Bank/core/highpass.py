"""
Highpass Filter (1st order IIR)

Discrete RC high-pass: alpha = RC / (RC + dt), y[n] = alpha * (y[n-1] + x[n] - x[n-1]).
The first sample outputs 0 since there is no difference yet, but it is still
recorded as the previous input.
"""

import cmath
import math
from typing import Any, Dict, Optional

from .base import (FilterState, FrequencyResponse, rc_time_constant, resolve_cutoff,
                   validate_sample_rate)


class HighpassFilter:
    """First-order RC high-pass filter."""

    def __init__(self, cutoff_frequency: float = 5.0, sample_rate: float = 100.0):
        self._sample_rate = validate_sample_rate(sample_rate)
        self._cutoff_frequency, self._cutoff_clamped = resolve_cutoff(cutoff_frequency, self._sample_rate)
        self._alpha = self._calculate_alpha()
        self._previous_input = 0.0
        self._previous_output = 0.0
        self._initialized = False

    def _calculate_alpha(self) -> float:
        dt = 1 / self._sample_rate
        rc = rc_time_constant(self._cutoff_frequency)
        return rc / (rc + dt)

    def filter(self, sample: float) -> float:
        if not self._initialized:
            self._previous_input = sample
            self._previous_output = 0.0
            self._initialized = True
            return 0.0

        output = self._alpha * (self._previous_output + sample - self._previous_input)
        self._previous_input = sample
        self._previous_output = output
        return output

    def set_cutoff_frequency(self, cutoff_frequency: float):
        """Change fc; alpha is recomputed, previous input/output are kept."""
        self._cutoff_frequency, self._cutoff_clamped = resolve_cutoff(cutoff_frequency, self._sample_rate)
        self._alpha = self._calculate_alpha()

    def set_sample_rate(self, sample_rate: float, cutoff_frequency: Optional[float] = None):
        """Change fs (and optionally fc together); the clamp flag reflects this check only."""
        sample_rate = validate_sample_rate(sample_rate)
        if cutoff_frequency is None:
            cutoff_frequency = self._cutoff_frequency
        cutoff, clamped = resolve_cutoff(cutoff_frequency, sample_rate)
        self._sample_rate = sample_rate
        self._cutoff_frequency, self._cutoff_clamped = cutoff, clamped
        self._alpha = self._calculate_alpha()

    def reset(self):
        self._previous_input = 0.0
        self._previous_output = 0.0
        self._initialized = False

    @property
    def cutoff_frequency(self) -> float:
        return self._cutoff_frequency

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def time_constant(self) -> float:
        return rc_time_constant(self._cutoff_frequency)

    @property
    def state(self) -> FilterState:
        return FilterState.RUNNING if self._initialized else FilterState.UNINITIALIZED

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def get_frequency_response(self, frequency: float) -> FrequencyResponse:
        """Response at `frequency` Hz from H(z) = alpha (1 - z^-1) / (1 - alpha z^-1)."""
        omega = 2 * math.pi * frequency / self._sample_rate
        z_inv = cmath.exp(-1j * omega)
        h = self._alpha * (1 - z_inv) / (1 - self._alpha * z_inv)
        return FrequencyResponse(magnitude=abs(h), phase=cmath.phase(h))

    def get_cutoff_attenuation(self) -> float:
        return self.get_frequency_response(self._cutoff_frequency).magnitude

    def get_group_delay(self) -> float:
        """Approximate group delay in seconds."""
        return self._alpha / ((1 - self._alpha) * self._sample_rate)

    def get_info(self) -> Dict[str, Any]:
        return {
            'type': 'Highpass Filter (1st Order IIR)',
            'cutoff_frequency': self._cutoff_frequency,
            'sample_rate': self._sample_rate,
            'alpha': self._alpha,
            'time_constant': self.time_constant,
            'cutoff_clamped': self._cutoff_clamped,
            'state': self.state.value,
        }
