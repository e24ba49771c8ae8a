"""
Per-hectare, global, annual and cost roll-ups of additional sequestration.

Global figures assume liberation of the same number of trees per hectare
across all selectively logged tropical forest (250 million ha by default).
Treatment cost per tree is adapted from Mills et al. (2019).
"""
from dataclasses import dataclass, asdict
from typing import Dict, TYPE_CHECKING

import pandas as pd

from .exceptions import SimulationError

if TYPE_CHECKING:
    from .parameters import SimulationParameters

# Mg to Pg
MG_PER_PG = 1e9


@dataclass(frozen=True)
class SequestrationSummary:
    """Scalar results of a simulation.

    Attributes:
        per_hectare: Additional CO2e at the final year (Mg CO2e/ha)
        global_pg: Global additional CO2e (Pg CO2e)
        annual_pg: Global additional CO2e per simulated year (Pg CO2e/yr)
        cost_per_mg_co2e: Treatment cost per unit of additional CO2e (USD/Mg CO2e)
    """
    per_hectare: float
    global_pg: float
    annual_pg: float
    cost_per_mg_co2e: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def per_hectare(additional_final: float, trees_per_ha: int) -> float:
    """Additional Mg CO2e per hectare from the final per-tree value."""
    return additional_final * trees_per_ha


def global_potential(per_ha: float, area_ha: float) -> float:
    """Global mitigation potential in Pg CO2e."""
    return (per_ha * area_ha) / MG_PER_PG


def annual_potential(global_pg: float, n_years: int) -> float:
    """Global potential spread over the simulation period (Pg CO2e/yr).

    Args:
        global_pg: Global potential (Pg CO2e)
        n_years: Number of simulated years, i.e. length of the year vector minus one
    """
    if n_years <= 0:
        raise SimulationError("Annual potential needs at least one simulated year")
    return global_pg / n_years


def cost_per_mg_co2e(cost_per_tree: float, trees_per_ha: int,
                     area_ha: float, global_pg: float) -> float:
    """Total treatment cost divided by global additional CO2e (USD/Mg CO2e)."""
    if global_pg == 0:
        raise SimulationError("No additional CO2e; cost per Mg CO2e is undefined")
    total_cost = cost_per_tree * (trees_per_ha * area_ha)
    return total_cost / (global_pg * MG_PER_PG)


def summarize(carbon_table: pd.DataFrame, params: 'SimulationParameters') -> SequestrationSummary:
    """Roll the per-tree carbon table up to the scalar results."""
    # additional_CO2e is cumulative, so only the final year is used
    additional_final = float(carbon_table['additional_CO2e'].iloc[-1])
    per_ha = per_hectare(additional_final, params.trees_per_ha)
    global_pg = global_potential(per_ha, params.global_area_ha)
    return SequestrationSummary(
        per_hectare=per_ha,
        global_pg=global_pg,
        annual_pg=annual_potential(global_pg, len(carbon_table) - 1),
        cost_per_mg_co2e=cost_per_mg_co2e(
            params.cost_per_tree, params.trees_per_ha, params.global_area_ha, global_pg
        ),
    )
