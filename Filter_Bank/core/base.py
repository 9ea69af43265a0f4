"""
Filter Contract

Streaming filter capability interface, lifecycle states, error taxonomy, and
the parameter validation shared by the filters and the session settings.
"""

import logging
import math
import numbers
import warnings
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Protocol, Tuple, runtime_checkable

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Errors & Warnings
# -----------------------------------------------------------------------------

class FilterBankError(Exception):
    """Base class for filter bank errors."""


class InvalidParameterError(FilterBankError, ValueError):
    """Parameter rejected at a constructor or setter; prior state is untouched."""


class NyquistClampWarning(UserWarning):
    """Cutoff at or above Nyquist was clamped to fs/2 - 1."""


# -----------------------------------------------------------------------------
# Enums & Data Classes
# -----------------------------------------------------------------------------

class FilterState(Enum):
    """Lifecycle shared by every filter."""
    UNINITIALIZED = "uninitialized"
    RUNNING = "running"


@dataclass(frozen=True)
class FrequencyResponse:
    """Magnitude (linear) and phase (radians) at one frequency."""
    magnitude: float
    phase: float

    @property
    def magnitude_db(self) -> float:
        return 20 * math.log10(self.magnitude) if self.magnitude > 0 else float('-inf')

    def to_dict(self) -> Dict[str, float]:
        return {'magnitude': self.magnitude, 'phase': self.phase}


@runtime_checkable
class StreamingFilter(Protocol):
    """One scalar in, one scalar estimate out, state kept between calls."""

    def filter(self, sample: float) -> float:
        ...

    def reset(self) -> None:
        ...

    def get_info(self) -> Dict[str, Any]:
        ...


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------

def require_finite(name: str, value: Any) -> float:
    """Reject anything that is not a finite real number (NaN, inf, bool, str...)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be a finite number, got {value!r}")
    return float(value)


def validate_sample_rate(sample_rate: float) -> float:
    sample_rate = require_finite("Sample rate", sample_rate)
    if sample_rate <= 0:
        raise InvalidParameterError(f"Sample rate must be > 0, got {sample_rate!r}")
    return sample_rate


def validate_window_size(window_size: int) -> int:
    value = require_finite("Window size", window_size)
    if int(value) != value:
        raise InvalidParameterError(f"Window size must be an integer, got {window_size!r}")
    if value < 1:
        raise InvalidParameterError(f"Window size must be >= 1, got {window_size!r}")
    return int(value)


def validate_noise(name: str, value: float) -> float:
    value = require_finite(name, value)
    if value < 0:
        raise InvalidParameterError(f"{name} must be >= 0, got {value!r}")
    return value


def validate_time_step(dt: float) -> float:
    dt = require_finite("Time step", dt)
    if dt <= 0:
        raise InvalidParameterError(f"Time step must be > 0, got {dt!r}")
    return dt


def validate_cutoff(cutoff_frequency: float, sample_rate: float) -> bool:
    """
    Check a cutoff against the sample rate without side effects.

    Returns True when the cutoff is at or above Nyquist and would be clamped.
    Raises for a non-positive or non-finite cutoff, or when the sample rate is
    too low to leave a positive clamp target.
    """
    cutoff_frequency = require_finite("Cutoff frequency", cutoff_frequency)
    if cutoff_frequency <= 0:
        raise InvalidParameterError(f"Cutoff frequency must be > 0, got {cutoff_frequency!r}")
    nyquist = validate_sample_rate(sample_rate) / 2
    if cutoff_frequency < nyquist:
        return False
    if nyquist - 1 <= 0:
        raise InvalidParameterError(
            f"Cutoff {cutoff_frequency} Hz exceeds Nyquist ({nyquist} Hz) and "
            f"sample rate {sample_rate} Hz is too low to clamp")
    return True


def resolve_cutoff(cutoff_frequency: float, sample_rate: float) -> Tuple[float, bool]:
    """
    Validate a cutoff against the sample rate.

    Returns (cutoff, clamped). A cutoff at or above Nyquist is clamped to
    fs/2 - 1 with a NyquistClampWarning.
    """
    if not validate_cutoff(cutoff_frequency, sample_rate):
        return float(cutoff_frequency), False

    nyquist = sample_rate / 2
    clamped = nyquist - 1
    message = (f"Cutoff {cutoff_frequency} Hz is at or above Nyquist ({nyquist} Hz); "
               f"clamped to {clamped} Hz")
    logger.warning(message)
    warnings.warn(message, NyquistClampWarning, stacklevel=3)
    return float(clamped), True


def rc_time_constant(cutoff_frequency: float) -> float:
    """RC = 1 / (2*pi*fc)."""
    return 1 / (2 * math.pi * cutoff_frequency)
