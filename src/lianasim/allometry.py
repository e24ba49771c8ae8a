"""
Allometric biomass equations for trees and lianas.

Tree biomass (Chave et al. 2014, pantropical model):
    AGB = a * (rho * D^2 * H)^b                a = 0.0673, b = 0.976

Liana biomass (Schnitzer et al. 2006):
    AGB = exp(a + b * ln(D))                   a = -1.484, b = 2.657

where:
    - D = diameter (cm); DBH for trees, stem diameter for lianas
    - H = tree height (m)
    - rho = wood density (g/cm3)

Both equations return kg; :func:`biomass_mg` converts to Mg.
"""
from typing import Dict, Type, Union, TYPE_CHECKING

import numpy as np

from .exceptions import GrowthModelError
from .model_base import ParameterizedModel

if TYPE_CHECKING:
    from .parameters import SimulationParameters

ArrayLike = Union[float, np.ndarray]

KG_PER_MG = 1000.0


class ChaveTreeBiomassModel(ParameterizedModel):
    """Tree above-ground biomass from diameter, height and wood density."""

    COEFFICIENT_FILE = 'allometric_coefficients.json'
    FORM = 'tree'
    FALLBACK_PARAMETERS = {'tree': {'a': 0.0673, 'b': 0.976}}

    def biomass_kg(self, dbh: ArrayLike, height: float, density: float) -> ArrayLike:
        a = self.coefficients['a']
        b = self.coefficients['b']
        return a * (density * np.power(dbh, 2) * height) ** b


class SchnitzerLianaBiomassModel(ParameterizedModel):
    """Liana above-ground biomass from stem diameter."""

    COEFFICIENT_FILE = 'allometric_coefficients.json'
    FORM = 'liana'
    FALLBACK_PARAMETERS = {'liana': {'a': -1.484, 'b': 2.657}}

    def biomass_kg(self, dbh: ArrayLike) -> ArrayLike:
        a = self.coefficients['a']
        b = self.coefficients['b']
        return np.exp(a + b * np.log(dbh))


BIOMASS_MODELS: Dict[str, Type[ParameterizedModel]] = {
    'tree': ChaveTreeBiomassModel,
    'liana': SchnitzerLianaBiomassModel,
}


def create_biomass_model(form: str) -> ParameterizedModel:
    """Create the biomass model for a growth form.

    Args:
        form: "tree" or "liana"

    Raises:
        GrowthModelError: If the form is not recognised
    """
    try:
        model_cls = BIOMASS_MODELS[form]
    except KeyError:
        raise GrowthModelError(
            'biomass', f"unknown form '{form}', expected one of {sorted(BIOMASS_MODELS)}"
        ) from None
    return model_cls()


def biomass_mg(form: str, dbh: ArrayLike, params: 'SimulationParameters' = None) -> ArrayLike:
    """Calculate tree or liana biomass in Mg.

    Args:
        form: "tree" (Chave et al. 2014) or "liana" (Schnitzer et al. 2006)
        dbh: Diameter(s) in cm; scalars and numpy arrays are accepted
        params: Simulation parameters supplying tree height and wood density.
            Defaults are used when omitted.

    Returns:
        Biomass in Mg, with the same shape as ``dbh``
    """
    model = create_biomass_model(form)
    if form == 'tree':
        if params is None:
            from .parameters import SimulationParameters
            params = SimulationParameters()
        kg = model.biomass_kg(dbh, params.tree_height, params.tree_density)
    else:
        kg = model.biomass_kg(dbh)
    return kg / KG_PER_MG
