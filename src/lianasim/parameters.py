"""
Simulation parameters for the liana cutting experiment.

Defaults reproduce the published figure: five mature trees per hectare
(40 cm DBH, 25 m tall) each carrying three lianas of 2, 3 and 4 cm
diameter, simulated for 30 years after cutting.
"""
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Sequence, Tuple, Union

import numpy as np

from .config_loader import load_simulation_config
from .diameter_growth import ReleaseSchedule
from .exceptions import ConfigurationError, InvalidParameterError


INTEGER_PARAMETERS = ('years', 'trees_per_ha')


@dataclass(frozen=True)
class SimulationParameters:
    """Constants driving the growth, biomass and scaling calculations.

    Attributes:
        tree_height: Tree height (m)
        tree_dbh: Starting tree DBH (cm)
        tree_density: Wood density (g/cm3)
        tree_growth_rate: Control DBH growth (cm/yr)
        liana_growth_rate: Liana diameter growth (cm/yr)
        root_factor: Below-ground biomass as a fraction of AGB
        trees_per_ha: Number of trees liberated per hectare
        carbon_content: Carbon fraction of dry biomass
        years: Length of the simulation period
        liana_diameters: Starting diameters of the lianas on each tree (cm)
        release_schedule: Growth multipliers following liana cutting
        global_area_ha: Area of selectively logged forest (ha)
        cost_per_tree: Treatment cost per tree (USD)
    """
    tree_height: float = 25.0
    tree_dbh: float = 40.0
    tree_density: float = 0.5
    tree_growth_rate: float = 0.4
    liana_growth_rate: float = 0.14
    root_factor: float = 0.235
    trees_per_ha: int = 5
    carbon_content: float = 0.47
    years: int = 30
    liana_diameters: Tuple[float, ...] = (2.0, 3.0, 4.0)
    release_schedule: ReleaseSchedule = field(default_factory=ReleaseSchedule.default)
    global_area_ha: float = 250e6
    cost_per_tree: float = 0.20

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulationParameters':
        """Create parameters from a plain mapping (e.g. a parsed config file).

        Missing keys keep their defaults.

        Raises:
            ConfigurationError: If the mapping holds unknown keys
            InvalidParameterError: If a value has the wrong type or shape
        """
        return cls(**_coerce_parameters(data))

    @classmethod
    def from_config(cls, path: Union[str, Path, None] = None) -> 'SimulationParameters':
        """Load parameters from a config file, or the packaged defaults."""
        return cls.from_dict(load_simulation_config(path))

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data['liana_diameters'] = list(self.liana_diameters)
        data['release_schedule'] = self.release_schedule.to_records()
        return data

    def with_overrides(self, **overrides) -> 'SimulationParameters':
        """Return a copy with the given fields replaced."""
        return replace(self, **_coerce_parameters(overrides))

    def year_vector(self) -> np.ndarray:
        """Simulation years, 0 through ``years`` inclusive."""
        return np.arange(0, self.years + 1, 1)


def _coerce_parameters(data: Dict[str, Any]) -> Dict[str, Any]:
    """Check names and convert raw values to the field types."""
    known = {f.name for f in fields(SimulationParameters)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown simulation parameter(s): {unknown}. "
            f"Valid parameters: {sorted(known)}"
        )

    kwargs = {}
    for name, value in data.items():
        if name == 'release_schedule':
            if not isinstance(value, ReleaseSchedule):
                if not isinstance(value, (list, tuple)):
                    raise InvalidParameterError(name, value, "expected a list of periods")
                value = ReleaseSchedule.from_records(value)
        elif name == 'liana_diameters':
            if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
                raise InvalidParameterError(name, value, "expected a list of diameters")
            try:
                value = tuple(float(d) for d in value)
            except (TypeError, ValueError) as e:
                raise InvalidParameterError(name, value, "diameters must be numbers") from e
        else:
            cast = int if name in INTEGER_PARAMETERS else float
            try:
                value = cast(value)
            except (TypeError, ValueError) as e:
                raise InvalidParameterError(name, value, f"expected {cast.__name__}") from e
        kwargs[name] = value
    return kwargs
