import numpy as np
import pytest

from Filter_Bank.core.base import FilterState, InvalidParameterError
from Filter_Bank.core.kalman_filter import KalmanFilter
from Filter_Bank.utils.matrix2 import IDENTITY


class TestKalmanFilter:
    def test_first_sample_initializes_state(self):
        kf = KalmanFilter()
        assert kf.filter(4.2) == 4.2
        assert kf.get_state_vector() == (4.2, 0.0)
        assert kf.covariance == IDENTITY
        assert kf.state is FilterState.RUNNING

    def test_single_step_matches_hand_computation(self):
        kf = KalmanFilter(process_noise=0.0, measurement_noise=1.0, dt=1.0)
        kf.filter(0.0)
        assert kf.filter(1.0) == pytest.approx(2 / 3)
        assert kf.get_velocity() == pytest.approx(1 / 3)
        p = kf.covariance
        assert p[0][0] == pytest.approx(2 / 3)
        assert p[0][1] == pytest.approx(1 / 3)
        assert p[1][0] == pytest.approx(1 / 3)
        assert p[1][1] == pytest.approx(2 / 3)
        assert kf.get_uncertainty() == pytest.approx(4 / 3)

    def test_noise_free_constant_is_exact(self):
        kf = KalmanFilter()
        outputs = [kf.filter(5.0) for _ in range(200)]
        assert all(out == 5.0 for out in outputs)
        assert kf.get_velocity() == 0.0

    def test_tracks_constant_velocity(self):
        kf = KalmanFilter(process_noise=0.01, measurement_noise=0.1, dt=0.01)
        for n in range(500):
            kf.filter(2.0 * n * 0.01)
        assert kf.get_velocity() == pytest.approx(2.0, abs=0.05)
        assert kf.position == pytest.approx(2.0 * 499 * 0.01, abs=0.01)

    def test_covariance_stays_symmetric(self, noisy_samples):
        kf = KalmanFilter(0.05, 0.2, dt=0.01)
        for sample in noisy_samples:
            kf.filter(sample)
            p = kf.covariance
            assert p[0][1] == pytest.approx(p[1][0], rel=1e-6, abs=1e-12)
            assert p[0][0] >= 0 and p[1][1] >= 0

    def test_uncertainty_drops_after_first_update(self):
        kf = KalmanFilter()
        kf.filter(1.0)
        before = kf.get_uncertainty()
        kf.filter(1.1)
        assert kf.get_uncertainty() < before

    def test_smooths_noise(self, noisy_samples):
        kf = KalmanFilter(0.05, 0.2, dt=0.01)
        outputs = np.array([kf.filter(s) for s in noisy_samples])
        assert np.std(np.diff(outputs)) < np.std(np.diff(noisy_samples))

    def test_degenerate_innovation_skips_update(self):
        kf = KalmanFilter(process_noise=0.0, measurement_noise=0.0, dt=1e-6)
        kf.filter(1.0)
        assert kf.filter(2.0) == pytest.approx(2.0)
        assert kf.skipped_updates == 0
        estimate = kf.filter(3.0)
        assert kf.skipped_updates == 1
        assert estimate == pytest.approx(2.0, abs=1e-9)
        assert kf.get_info()['skipped_updates'] == 1


class TestKalmanParameters:
    @pytest.mark.parametrize("kwargs", [
        {'process_noise': -0.1},
        {'measurement_noise': -1.0},
        {'dt': 0.0},
        {'dt': -0.01},
    ])
    def test_constructor_rejects_invalid(self, kwargs):
        with pytest.raises(InvalidParameterError):
            KalmanFilter(**kwargs)

    def test_set_process_noise_rebuilds_q(self):
        kf = KalmanFilter(process_noise=0.01, dt=0.1)
        kf.set_process_noise(2.0)
        assert kf.process_noise == 2.0
        assert kf.Q[1][1] == pytest.approx(2.0 * 0.1 ** 2)
        assert kf.Q[0][1] == kf.Q[1][0] == pytest.approx(2.0 * 0.1 ** 3 / 2)

    def test_set_measurement_noise(self):
        kf = KalmanFilter()
        kf.set_measurement_noise(0.5)
        assert kf.R == 0.5
        with pytest.raises(InvalidParameterError):
            kf.set_measurement_noise(-0.5)
        assert kf.R == 0.5

    def test_set_time_step_keeps_state(self):
        kf = KalmanFilter(dt=0.01)
        kf.filter(1.0)
        kf.filter(1.2)
        state, covariance = kf.get_state_vector(), kf.covariance
        kf.set_time_step(0.02)
        assert kf.F == ((1.0, 0.02), (0.0, 1.0))
        assert kf.get_state_vector() == state
        assert kf.covariance == covariance
        with pytest.raises(InvalidParameterError):
            kf.set_time_step(0)
        assert kf.dt == 0.02

    def test_parameter_change_keeps_running_state(self):
        kf = KalmanFilter()
        kf.filter(1.0)
        kf.set_process_noise(0.5)
        assert kf.state is FilterState.RUNNING

    def test_reset(self):
        kf = KalmanFilter(process_noise=0.2)
        for v in (1.0, 2.0, 3.0):
            kf.filter(v)
        kf.reset()
        assert kf.state is FilterState.UNINITIALIZED
        assert kf.get_state_vector() == (0.0, 0.0)
        assert kf.covariance == IDENTITY
        assert kf.skipped_updates == 0
        assert kf.process_noise == 0.2
