"""
Lowpass Filter (1st order IIR)

Discrete RC low-pass: alpha = dt / (RC + dt), y[n] = alpha*x[n] + (1-alpha)*y[n-1].
The first sample passes straight through.
"""

import cmath
import math
from typing import Any, Dict, Optional

from .base import (FilterState, FrequencyResponse, rc_time_constant, resolve_cutoff,
                   validate_sample_rate)


class LowpassFilter:
    """First-order RC low-pass filter."""

    def __init__(self, cutoff_frequency: float = 5.0, sample_rate: float = 100.0):
        self._sample_rate = validate_sample_rate(sample_rate)
        self._cutoff_frequency, self._cutoff_clamped = resolve_cutoff(cutoff_frequency, self._sample_rate)
        self._alpha = self._calculate_alpha()
        self._previous_output = 0.0
        self._initialized = False

    def _calculate_alpha(self) -> float:
        dt = 1 / self._sample_rate
        rc = rc_time_constant(self._cutoff_frequency)
        return dt / (rc + dt)

    def filter(self, sample: float) -> float:
        if not self._initialized:
            self._previous_output = sample
            self._initialized = True
            return sample

        output = self._alpha * sample + (1 - self._alpha) * self._previous_output
        self._previous_output = output
        return output

    # -------------------------------------------------------------------------
    # Parameters
    # -------------------------------------------------------------------------

    def set_cutoff_frequency(self, cutoff_frequency: float):
        """Change fc; alpha is recomputed, the previous output is kept."""
        self._cutoff_frequency, self._cutoff_clamped = resolve_cutoff(cutoff_frequency, self._sample_rate)
        self._alpha = self._calculate_alpha()

    def set_sample_rate(self, sample_rate: float, cutoff_frequency: Optional[float] = None):
        """
        Change fs, optionally together with fc.

        The cutoff (current one when not given) is re-checked against the new
        Nyquist; `cutoff_clamped` reflects this check only.
        """
        sample_rate = validate_sample_rate(sample_rate)
        if cutoff_frequency is None:
            cutoff_frequency = self._cutoff_frequency
        cutoff, clamped = resolve_cutoff(cutoff_frequency, sample_rate)
        self._sample_rate = sample_rate
        self._cutoff_frequency, self._cutoff_clamped = cutoff, clamped
        self._alpha = self._calculate_alpha()

    def reset(self):
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

    # -------------------------------------------------------------------------
    # Characteristics
    # -------------------------------------------------------------------------

    def get_frequency_response(self, frequency: float) -> FrequencyResponse:
        """Response at `frequency` Hz from H(z) = alpha / (1 - (1-alpha) z^-1)."""
        omega = 2 * math.pi * frequency / self._sample_rate
        h = self._alpha / (1 - (1 - self._alpha) * cmath.exp(-1j * omega))
        return FrequencyResponse(magnitude=abs(h), phase=cmath.phase(h))

    def get_cutoff_attenuation(self) -> float:
        return self.get_frequency_response(self._cutoff_frequency).magnitude

    def get_group_delay(self) -> float:
        """Approximate group delay in seconds."""
        return (1 - self._alpha) / (self._alpha * self._sample_rate)

    def get_info(self) -> Dict[str, Any]:
        return {
            'type': 'Lowpass Filter (1st Order IIR)',
            'cutoff_frequency': self._cutoff_frequency,
            'sample_rate': self._sample_rate,
            'alpha': self._alpha,
            'time_constant': self.time_constant,
            'cutoff_clamped': self._cutoff_clamped,
            'state': self.state.value,
        }
