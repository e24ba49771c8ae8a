"""
Smoke tests for the sequestration figure.
"""
import matplotlib.pyplot as plt
import pytest

from lianasim.growth_plots import (
    ADDITIONAL_LABEL,
    additionality_frame,
    plot_sequestration,
)
from lianasim.simulation import CONTROL_LABEL, LIBERATED_LABEL

from tests.reference_values import REFERENCE_CONTROL_HA_FINAL, REFERENCE_TREATED_HA_FINAL


class TestAdditionalityFrame:
    """Tests for the ribbon between the two scenarios."""

    def test_frame(self, default_result):
        """Year 0 has no gap, every later year is additional."""
        frame = additionality_frame(default_result.carbon_table, 5)
        assert frame['yr'].tolist() == list(range(1, 31))
        assert (frame['fill'] == ADDITIONAL_LABEL).all()
        assert (frame['ymax'] >= frame['ymin']).all()
        assert frame['ymax'].iloc[-1] == pytest.approx(REFERENCE_TREATED_HA_FINAL, abs=1e-5)
        assert frame['ymin'].iloc[-1] == pytest.approx(REFERENCE_CONTROL_HA_FINAL, abs=1e-5)


class TestPlotSequestration:
    """Tests for the sequestration chart."""

    def test_returns_figure(self, default_result):
        fig = plot_sequestration(default_result)
        try:
            ax = fig.axes[0]
            labels = [line.get_label() for line in ax.get_lines()]
            assert labels == [LIBERATED_LABEL, CONTROL_LABEL]
            assert ax.get_xlabel() == 'Years After Liana Cutting'
            texts = ' '.join(t.get_text() for t in ax.texts)
            assert 'by year 30' in texts
            assert '3.3 MgCO' in texts
        finally:
            plt.close(fig)

    def test_with_fill(self, default_result):
        fig = plot_sequestration(default_result, show_fill=True)
        try:
            assert len(fig.axes[0].collections) >= 2
        finally:
            plt.close(fig)

    def test_saves_file(self, tmp_path, default_result):
        path = tmp_path / 'figures' / 'sequestration.png'
        plot_sequestration(default_result, save_path=path, dpi=50)
        assert path.exists()
        assert path.stat().st_size > 0
