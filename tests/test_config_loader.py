"""
Tests for the configuration loader.
"""
import json

import pytest
import yaml

from lianasim.config_loader import (
    ConfigLoader,
    get_config_loader,
    load_coefficient_file,
    load_simulation_config,
)
from lianasim.exceptions import ConfigFileNotFoundError, ConfigurationError, InvalidDataError


@pytest.fixture
def loader():
    return ConfigLoader()


class TestPackagedConfig:
    """Tests for the configuration shipped in cfg/."""

    def test_packaged_defaults(self, loader):
        config = loader.simulation_config
        assert config['tree_dbh'] == 40.0
        assert config['trees_per_ha'] == 5
        assert config['global_area_ha'] == pytest.approx(250e6)
        assert len(config['release_schedule']) == 5
        assert config['release_schedule'][-1]['end'] is None

    def test_get_config_loader_is_shared(self):
        assert get_config_loader() is get_config_loader()

    def test_load_simulation_config_returns_copy(self):
        config = load_simulation_config()
        config['years'] = 99
        assert load_simulation_config()['years'] == 30

    def test_loader_requires_parameters_file(self, tmp_path):
        with pytest.raises(ConfigFileNotFoundError):
            ConfigLoader(cfg_dir=tmp_path)


class TestCoefficientFiles:
    """Tests for cached coefficient files."""

    def test_cached(self, loader):
        first = loader.load_coefficient_file('allometric_coefficients.json')
        second = loader.load_coefficient_file('allometric_coefficients.json')
        assert first is second
        assert set(first['forms']) == {'tree', 'liana'}
        loader.clear_coefficient_cache()
        assert loader.load_coefficient_file('allometric_coefficients.json') is not first

    def test_module_level_function(self):
        assert load_coefficient_file('allometric_coefficients.json')['forms']['tree']['a'] == 0.0673


class TestParameterFiles:
    """Tests for loading user parameter files."""

    def test_yaml_under_simulation_key(self, tmp_path, loader):
        path = tmp_path / 'params.yaml'
        path.write_text("simulation:\n  years: 12\n  trees_per_ha: 3\n")
        assert loader.load_parameters_file(path) == {'years': 12, 'trees_per_ha': 3}

    def test_top_level_json(self, tmp_path):
        path = tmp_path / 'params.json'
        path.write_text(json.dumps({'years': 8}))
        assert load_simulation_config(path) == {'years': 8}

    def test_toml(self, tmp_path, loader):
        path = tmp_path / 'params.toml'
        path.write_text(
            "[simulation]\n"
            "years = 20\n"
            "liana_diameters = [1.5, 2.5]\n"
        )
        config = loader.load_parameters_file(path)
        assert config['years'] == 20
        assert config['liana_diameters'] == [1.5, 2.5]

    def test_missing_file(self, tmp_path, loader):
        with pytest.raises(ConfigFileNotFoundError):
            loader.load_parameters_file(tmp_path / 'missing.yaml')

    def test_unsupported_format(self, tmp_path, loader):
        path = tmp_path / 'params.ini'
        path.write_text("[simulation]\nyears = 3\n")
        with pytest.raises(ConfigurationError, match="Unsupported"):
            loader.load_parameters_file(path)

    def test_empty_yaml(self, tmp_path, loader):
        path = tmp_path / 'empty.yaml'
        path.write_text("# nothing here\n")
        with pytest.raises(InvalidDataError):
            loader.load_parameters_file(path)

    def test_malformed_yaml(self, tmp_path, loader):
        path = tmp_path / 'bad.yaml'
        path.write_text("simulation: [unclosed\n")
        with pytest.raises(InvalidDataError, match="parsing error"):
            loader.load_parameters_file(path)

    def test_malformed_json(self, tmp_path, loader):
        path = tmp_path / 'bad.json'
        path.write_text("{not json")
        with pytest.raises(InvalidDataError):
            loader.load_parameters_file(path)

    def test_non_mapping_parameters(self, tmp_path, loader):
        path = tmp_path / 'list.yaml'
        path.write_text("- 1\n- 2\n")
        with pytest.raises(InvalidDataError):
            loader.load_parameters_file(path)


class TestSaveConfig:
    """Tests for writing configuration files."""

    def test_yaml_round_trip(self, tmp_path, loader):
        path = tmp_path / 'out' / 'saved.yaml'
        loader.save_config({'simulation': {'years': 15}}, str(path))
        assert yaml.safe_load(path.read_text()) == {'simulation': {'years': 15}}
        assert loader.load_parameters_file(path) == {'years': 15}

    def test_toml(self, tmp_path, loader):
        pytest.importorskip('tomli_w')
        path = tmp_path / 'saved.toml'
        loader.save_config({'simulation': {'years': 15}}, path)
        assert loader.load_parameters_file(path) == {'years': 15}

    def test_unsupported_format(self, tmp_path, loader):
        with pytest.raises(ConfigurationError):
            loader.save_config({'years': 1}, tmp_path / 'saved.txt')

    def test_unserializable_json(self, tmp_path, loader):
        """A value the writer rejects raises ConfigurationError and leaves no file."""
        path = tmp_path / 'saved.json'
        with pytest.raises(ConfigurationError, match="Cannot write"):
            loader.save_config({'years': object()}, path)
        assert not path.exists()

    def test_toml_rejects_null(self, tmp_path, loader):
        """TOML has no null, so None values cannot be written."""
        pytest.importorskip('tomli_w')
        path = tmp_path / 'saved.toml'
        with pytest.raises(ConfigurationError, match="Cannot write"):
            loader.save_config({'simulation': {'end': None}}, path)
        assert not path.exists()
