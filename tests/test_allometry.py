"""
Tests for the tree and liana allometric biomass models.
"""
import numpy as np
import pytest

from lianasim.allometry import (
    ChaveTreeBiomassModel,
    SchnitzerLianaBiomassModel,
    biomass_mg,
    create_biomass_model,
)
from lianasim.exceptions import GrowthModelError
from lianasim.parameters import SimulationParameters


# (diameter in cm, expected liana biomass in Mg)
LIANA_BIOMASS_CASES = [
    pytest.param(2.0, 0.0014300252, id="2cm_liana"),
    pytest.param(3.0, 0.0041996990, id="3cm_liana"),
    pytest.param(4.0, 0.0090194569, id="4cm_liana"),
]

# (DBH in cm, expected tree biomass in Mg) at 25 m height and 0.5 g/cm3
TREE_BIOMASS_CASES = [
    pytest.param(40.0, 1.0612564432, id="40cm_tree"),
    pytest.param(50.0, 1.6405470317, id="50cm_tree"),
]


class TestBiomassMg:
    """Tests for the biomass_mg entry point."""

    @pytest.mark.parametrize("dbh,expected", LIANA_BIOMASS_CASES)
    def test_liana_biomass(self, dbh, expected):
        assert biomass_mg('liana', dbh) == pytest.approx(expected, rel=1e-8)

    @pytest.mark.parametrize("dbh,expected", TREE_BIOMASS_CASES)
    def test_tree_biomass(self, default_params, dbh, expected):
        assert biomass_mg('tree', dbh, default_params) == pytest.approx(expected, rel=1e-8)

    def test_tree_defaults_without_params(self):
        assert biomass_mg('tree', 40.0) == pytest.approx(1.0612564432, rel=1e-8)

    def test_tree_uses_height_and_density(self):
        """Height and density enter the same product, so doubling either is equivalent."""
        taller = SimulationParameters(tree_height=50.0)
        denser = SimulationParameters(tree_density=1.0)
        base = biomass_mg('tree', 40.0)
        assert biomass_mg('tree', 40.0, taller) == pytest.approx(base * 2 ** 0.976)
        assert biomass_mg('tree', 40.0, denser) == pytest.approx(biomass_mg('tree', 40.0, taller))

    def test_vectorised(self):
        dbh = np.array([2.0, 3.0, 4.0])
        result = biomass_mg('liana', dbh)
        assert result.shape == (3,)
        assert np.all(np.diff(result) > 0)

    def test_unknown_form(self):
        with pytest.raises(GrowthModelError, match="unknown form"):
            biomass_mg('shrub', 10.0)


class TestBiomassModels:
    """Tests for coefficient loading in the allometric models."""

    def test_factory(self):
        assert isinstance(create_biomass_model('tree'), ChaveTreeBiomassModel)
        assert isinstance(create_biomass_model('liana'), SchnitzerLianaBiomassModel)

    def test_coefficients_loaded_from_config(self):
        tree = ChaveTreeBiomassModel()
        liana = SchnitzerLianaBiomassModel()
        assert tree.get_coefficient('a') == pytest.approx(0.0673)
        assert tree.get_coefficient('b') == pytest.approx(0.976)
        assert liana.get_coefficient('a') == pytest.approx(-1.484)
        assert liana.get_coefficient('b') == pytest.approx(2.657)
        assert 'source' in tree.get_coefficients()
        assert repr(liana) == "SchnitzerLianaBiomassModel(form='liana')"

    def test_fallback_when_file_missing(self, monkeypatch):
        monkeypatch.setattr(ChaveTreeBiomassModel, 'COEFFICIENT_FILE', 'no_such_file.json')
        model = ChaveTreeBiomassModel()
        assert model.get_coefficients() == {'a': 0.0673, 'b': 0.976}
        assert model.biomass_kg(40.0, 25.0, 0.5) / 1000 == pytest.approx(1.0612564432, rel=1e-8)
