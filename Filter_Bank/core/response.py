"""
Response diagnostics for any streaming filter: batch filtering, step response
and frequency sweeps for plotting.
"""

from typing import Callable, Iterable, List, Sequence, Tuple

import numpy as np

from .base import StreamingFilter


def filter_batch(filt: StreamingFilter, samples: Iterable[float]) -> List[float]:
    """Feed samples in order through `filt` (its state advances)."""
    return [filt.filter(x) for x in samples]


def step_response(factory: Callable[[], StreamingFilter], samples: int = 50,
                  level: float = 1.0) -> np.ndarray:
    """Step response of a freshly built filter."""
    return np.array(filter_batch(factory(), [level] * samples))


def impulse_response(factory: Callable[[], StreamingFilter], samples: int = 50) -> np.ndarray:
    return np.array(filter_batch(factory(), [1.0] + [0.0] * (samples - 1)))


def frequency_sweep(filt, frequencies: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    """Magnitude and phase arrays from filt.get_frequency_response at each frequency."""
    responses = [filt.get_frequency_response(f) for f in frequencies]
    magnitudes = np.array([r.magnitude for r in responses])
    phases = np.array([r.phase for r in responses])
    return magnitudes, phases


def sweep_frequencies(sample_rate: float, points: int = 200, normalized: bool = False) -> np.ndarray:
    """Evenly spaced frequencies from DC to Nyquist (Hz, or cycles/sample when normalized)."""
    nyquist = 0.5 if normalized else sample_rate / 2
    return np.linspace(0.0, nyquist, points)
