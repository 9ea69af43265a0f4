import json

import pytest

from Filter_Bank.config import FILTER_DEFAULTS, SimulationSettings
from Filter_Bank.core.base import InvalidParameterError
from Filter_Bank.core.highpass import HighpassFilter
from Filter_Bank.core.kalman_filter import KalmanFilter
from Filter_Bank.core.moving_average import MovingAverageFilter
from Filter_Bank.core.registry import FilterType, create_filter


class TestSimulationSettings:
    def test_defaults(self):
        s = SimulationSettings()
        assert s.window_size == FILTER_DEFAULTS.WINDOW_SIZE == 10
        assert s.cutoff_frequency == 5.0
        assert s.process_noise == 0.01
        assert s.measurement_noise == 0.1
        assert s.validate() is s

    @pytest.mark.parametrize("field, value", [
        ('sample_rate', 0),
        ('window_size', 0),
        ('cutoff_frequency', -1.0),
        ('process_noise', -0.1),
        ('signal_type', 'sawtooth'),
        ('filter_type', 'median'),
        ('stats_interval', 0),
        ('frequency', 0.0),
        ('amplitude', -1.0),
        ('noise_level', -0.1),
        ('window_size', 2.5),
        ('cutoff_frequency', float('nan')),
        ('sample_rate', float('inf')),
        ('measurement_noise', float('nan')),
        ('sample_rate', 2.0),
    ])
    def test_validate_rejects(self, field, value):
        s = SimulationSettings(**{field: value})
        with pytest.raises(InvalidParameterError):
            s.validate()

    def test_from_dict_ignores_unknown_keys(self):
        s = SimulationSettings.from_dict({'window_size': 5, 'theme': 'dark'})
        assert s.window_size == 5

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "nested" / "settings.json"
        SimulationSettings(filter_type="kalman", seed=3, noise_level=0.4).save(path)
        loaded = SimulationSettings.load(path)
        assert loaded == SimulationSettings(filter_type="kalman", seed=3, noise_level=0.4)

    def test_load_missing_returns_none(self, tmp_path):
        assert SimulationSettings.load(tmp_path / "absent.json") is None

    def test_load_malformed_returns_none(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        assert SimulationSettings.load(path) is None

    def test_load_invalid_values_returns_none(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({'window_size': -2}))
        assert SimulationSettings.load(path) is None


class TestRegistry:
    def test_parse(self):
        assert FilterType.parse("highpass") is FilterType.HIGHPASS
        assert FilterType.parse(FilterType.KALMAN) is FilterType.KALMAN
        with pytest.raises(InvalidParameterError):
            FilterType.parse("bandpass")

    def test_create_with_defaults(self):
        assert isinstance(create_filter("moving-average"), MovingAverageFilter)
        kf = create_filter(FilterType.KALMAN)
        assert isinstance(kf, KalmanFilter)
        assert kf.dt == pytest.approx(1 / 1000.0)

    def test_create_from_settings(self):
        s = SimulationSettings(cutoff_frequency=20.0, sample_rate=400.0)
        hp = create_filter("highpass", s)
        assert isinstance(hp, HighpassFilter)
        assert hp.cutoff_frequency == 20.0
        assert hp.sample_rate == 400.0
