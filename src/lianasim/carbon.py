"""
Biomass to carbon and CO2-equivalent conversions.

Carbon is a fixed fraction of dry biomass (0.47 by default) and CO2e is
carbon scaled by the molecular weight ratio 44/12. Below-ground liana
biomass is a fixed root factor of above-ground biomass (Mokany et al. 2006).
"""
from dataclasses import dataclass
from typing import List, TYPE_CHECKING

import numpy as np
import pandas as pd

from .allometry import biomass_mg
from .diameter_growth import liana_diameter_series
from .exceptions import SimulationError
from .logging_config import get_logger

if TYPE_CHECKING:
    from .parameters import SimulationParameters

# Molecular weight ratio of CO2 to C
CO2_PER_CARBON = 44.0 / 12.0

CARBON_TABLE_COLUMNS = [
    'yr', 'control_BM', 'treated_BM',
    'control_C', 'treated_C',
    'treated_CO2e', 'control_CO2e',
    'additional_CO2e',
]

logger = get_logger(__name__)


def biomass_to_carbon(biomass, carbon_content: float):
    """Carbon mass (Mg C) in a given biomass (Mg)."""
    return biomass * carbon_content


def carbon_to_co2e(carbon):
    """CO2-equivalent mass (Mg CO2e) of a carbon mass (Mg C)."""
    return carbon * CO2_PER_CARBON


@dataclass
class LianaBiomass:
    """Biomass of the lianas on one tree over the simulation period.

    Attributes:
        diameters: One diameter series per liana (cm)
        agb_by_liana: One above-ground biomass series per liana (Mg)
        agb: Total above-ground biomass (Mg)
        bgb: Below-ground biomass (Mg)
        total: AGB + BGB (Mg)
        co2e: CO2-equivalent of the total biomass (Mg CO2e)
    """
    diameters: List[np.ndarray]
    agb_by_liana: List[np.ndarray]
    agb: np.ndarray
    bgb: np.ndarray
    total: np.ndarray
    co2e: np.ndarray

    @property
    def at_cutting(self) -> float:
        """Total liana biomass at year 0, removed when the lianas are cut."""
        return float(self.total[0])


def liana_biomass(params: 'SimulationParameters') -> LianaBiomass:
    """Calculate AGB + BGB of the lianas on one tree for every year."""
    diameters = [liana_diameter_series(d, params) for d in params.liana_diameters]
    agb_by_liana = [biomass_mg('liana', d) for d in diameters]

    if agb_by_liana:
        agb = np.sum(agb_by_liana, axis=0)
    else:
        agb = np.zeros(len(params.year_vector()))
    bgb = agb * params.root_factor
    total = agb + bgb
    co2e = carbon_to_co2e(biomass_to_carbon(total, params.carbon_content))

    logger.debug(f"Liana biomass at cutting: {total[0]:.5f} Mg ({len(diameters)} lianas)")
    return LianaBiomass(
        diameters=diameters,
        agb_by_liana=agb_by_liana,
        agb=agb,
        bgb=bgb,
        total=total,
        co2e=co2e,
    )


def remove_liana_biomass(treated_bm: np.ndarray, liana_bm_at_cut: float) -> np.ndarray:
    """Charge the biomass of cut lianas against the first year of growth.

    The cumulative treated biomass is split into annual increments (year 0
    keeps the total starting biomass), the liana biomass is subtracted from
    the year-1 increment, and the increments are re-accumulated.

    Args:
        treated_bm: Cumulative treated tree biomass by year (Mg)
        liana_bm_at_cut: Liana biomass removed at year 0 (Mg)

    Returns:
        Adjusted cumulative biomass (Mg)

    Raises:
        SimulationError: If fewer than two years are simulated
    """
    treated_bm = np.asarray(treated_bm, dtype=float)
    if treated_bm.size < 2:
        raise SimulationError(
            "At least two simulated years are needed to charge liana removal to year 1"
        )
    increments = np.concatenate(([treated_bm[0]], np.diff(treated_bm)))
    increments[1] -= liana_bm_at_cut
    return np.cumsum(increments)


def build_carbon_table(years: np.ndarray, control_bm: np.ndarray,
                       treated_bm: np.ndarray, carbon_content: float) -> pd.DataFrame:
    """Assemble per-tree biomass, carbon and CO2e by year.

    ``additional_CO2e`` is treated minus control at each year. Its values
    are cumulative through time and must not be summed across years.
    """
    df = pd.DataFrame({
        'yr': years,
        'control_BM': control_bm,
        'treated_BM': treated_bm,
    })
    df['control_C'] = biomass_to_carbon(df['control_BM'], carbon_content)
    df['treated_C'] = biomass_to_carbon(df['treated_BM'], carbon_content)
    df['treated_CO2e'] = carbon_to_co2e(df['treated_C'])
    df['control_CO2e'] = carbon_to_co2e(df['control_C'])
    df['additional_CO2e'] = df['treated_CO2e'] - df['control_CO2e']
    return df[CARBON_TABLE_COLUMNS]
