"""Kalman Filter for 1-D position/velocity estimation from noisy position samples."""

import logging
from typing import Any, Dict, Tuple

from ..utils.matrix2 import (IDENTITY, Mat2, Vec2, mat_add, mat_mul, mat_vec, outer, scalar_mul, trace,
                            transpose)
from .base import FilterState, validate_noise, validate_time_step

logger = logging.getLogger(__name__)

# Innovation covariance below this is too degenerate to trust
DEGENERACY_EPS = 1e-10


class KalmanFilter:
    """
    Constant-velocity Kalman filter with state [position, velocity].

    Only position is observed (H = [1, 0]). Process noise Q comes from the
    constant-acceleration discretization; R is the scalar measurement noise.
    The first sample initializes the state directly with zero velocity.
    """

    H: Vec2 = (1.0, 0.0)

    def __init__(self, process_noise: float = 0.01, measurement_noise: float = 0.1, dt: float = 0.01):
        self.process_noise = validate_noise("Process noise", process_noise)
        self.measurement_noise = validate_noise("Measurement noise", measurement_noise)
        self.dt = validate_time_step(dt)
        self.R = self.measurement_noise
        self.F, self.Q = self._build_transition(), self._build_process_noise()
        self.x: Vec2 = (0.0, 0.0)
        self.P: Mat2 = IDENTITY
        self._initialized = False
        self.skipped_updates = 0

    def _build_transition(self) -> Mat2:
        return ((1.0, self.dt), (0.0, 1.0))

    def _build_process_noise(self) -> Mat2:
        q, dt = self.process_noise, self.dt
        return (
            (q * dt ** 4 / 4, q * dt ** 3 / 2),
            (q * dt ** 3 / 2, q * dt ** 2),
        )

    # -------------------------------------------------------------------------
    # Predict / Update
    # -------------------------------------------------------------------------

    def predict(self):
        """x = F x;  P = F P F^T + Q."""
        self.x = mat_vec(self.F, self.x)
        fp = mat_mul(self.F, self.P)
        fpft = mat_mul(fp, transpose(self.F))
        self.P = mat_add(fpft, self.Q)

    def update(self, measurement: float) -> bool:
        """Correct with one position measurement. Returns False when skipped."""
        h = self.H
        y = measurement - (h[0] * self.x[0] + h[1] * self.x[1])

        hp = (h[0] * self.P[0][0] + h[1] * self.P[1][0],
              h[0] * self.P[0][1] + h[1] * self.P[1][1])
        s = hp[0] * h[0] + hp[1] * h[1] + self.R
        if abs(s) < DEGENERACY_EPS:
            self.skipped_updates += 1
            logger.debug("Innovation covariance %.3e below threshold, update skipped", s)
            return False

        ph = (self.P[0][0] * h[0] + self.P[0][1] * h[1],
              self.P[1][0] * h[0] + self.P[1][1] * h[1])
        k = (ph[0] / s, ph[1] / s)

        self.x = (self.x[0] + k[0] * y, self.x[1] + k[1] * y)

        i_kh = mat_add(IDENTITY, scalar_mul(-1.0, outer(k, h)))
        self.P = mat_mul(i_kh, self.P)
        return True

    def filter(self, measurement: float) -> float:
        """Return the estimated position after incorporating `measurement`."""
        if not self._initialized:
            self.x = (measurement, 0.0)
            self._initialized = True
            return measurement

        self.predict()
        self.update(measurement)
        return self.x[0]

    # -------------------------------------------------------------------------
    # Parameters
    # -------------------------------------------------------------------------

    def set_process_noise(self, process_noise: float):
        self.process_noise = validate_noise("Process noise", process_noise)
        self.Q = self._build_process_noise()

    def set_measurement_noise(self, measurement_noise: float):
        self.measurement_noise = validate_noise("Measurement noise", measurement_noise)
        self.R = self.measurement_noise

    def set_time_step(self, dt: float):
        """Change dt; F and Q are rebuilt, state and covariance are kept."""
        self.dt = validate_time_step(dt)
        self.F, self.Q = self._build_transition(), self._build_process_noise()

    def reset(self):
        self.x, self.P = (0.0, 0.0), IDENTITY
        self._initialized = False
        self.skipped_updates = 0

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def state(self) -> FilterState:
        return FilterState.RUNNING if self._initialized else FilterState.UNINITIALIZED

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def position(self) -> float:
        return self.x[0]

    @property
    def covariance(self) -> Mat2:
        return self.P

    def get_velocity(self) -> float:
        return self.x[1]

    def get_uncertainty(self) -> float:
        """trace(P), a scalar confidence proxy."""
        return trace(self.P)

    def get_state_vector(self) -> Tuple[float, float]:
        return self.x

    def get_info(self) -> Dict[str, Any]:
        return {
            'type': 'Kalman Filter (1D)',
            'process_noise': self.process_noise,
            'measurement_noise': self.measurement_noise,
            'dt': self.dt,
            'state_vector': list(self.x),
            'estimated_position': self.x[0],
            'estimated_velocity': self.x[1],
            'uncertainty': self.get_uncertainty(),
            'skipped_updates': self.skipped_updates,
            'state': self.state.value,
        }
