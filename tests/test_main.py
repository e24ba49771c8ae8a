"""
Tests for the command line interface.
"""
import pytest

from lianasim.main import build_parser, load_parameters, main


# Parameter files that parse but cannot be turned into a run
BAD_CONFIG_CASES = [
    pytest.param("simulation:\n  unknown_setting: 1\n", id="unknown_key"),
    pytest.param("simulation:\n  years: ten\n", id="word_for_years"),
    pytest.param(
        "simulation:\n"
        "  release_schedule:\n"
        "    start: 1\n"
        "    end: 10\n"
        "    multiplier: 2.0\n",
        id="schedule_as_single_mapping",
    ),
    pytest.param(
        "simulation:\n  release_schedule:\n    - [1, 10, 2.0]\n",
        id="period_as_list",
    ),
    pytest.param("simulation:\n  liana_diameters: thick\n", id="string_diameters"),
]


class TestArguments:
    """Tests for argument parsing."""

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert args.config is None
        assert args.format == 'csv'
        assert not args.no_plot

    def test_load_parameters_overrides(self):
        args = build_parser().parse_args(['--years', '12', '--trees-per-ha', '7'])
        params = load_parameters(args)
        assert params.years == 12
        assert params.trees_per_ha == 7


class TestMain:
    """Tests for complete command line runs."""

    def test_prints_summary(self, capsys):
        assert main([]) == 0
        out = capsys.readouterr().out
        assert 'Additional CO2e' in out
        assert '3.343' in out

    def test_writes_outputs(self, tmp_path):
        out_dir = tmp_path / 'results'
        assert main(['--output-dir', str(out_dir), '--dpi', '50']) == 0
        assert (out_dir / 'carbon_table.csv').exists()
        assert (out_dir / 'liana_table.csv').exists()
        assert (out_dir / 'summary.yaml').exists()
        assert (out_dir / 'sequestration.png').exists()

    def test_no_plot(self, tmp_path):
        out_dir = tmp_path / 'results'
        assert main(['--output-dir', str(out_dir), '--no-plot', '--format', 'json']) == 0
        assert (out_dir / 'carbon_table.json').exists()
        assert not (out_dir / 'sequestration.png').exists()

    def test_rejects_non_positive_years(self):
        assert main(['--years', '0']) == 1


class TestBadConfig:
    """Malformed parameter files end the run with an error message, not a traceback."""

    @pytest.mark.parametrize("content", BAD_CONFIG_CASES)
    def test_reports_error(self, tmp_path, capsys, content):
        path = tmp_path / 'params.yaml'
        path.write_text(content)
        assert main(['--config', str(path)]) == 1
        assert 'Error' in capsys.readouterr().out
