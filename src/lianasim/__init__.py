"""
LianaSim: carbon gains from liberating trees from lianas

Simulates 30 years of diameter growth, biomass and carbon accumulation in
mature tropical trees after the woody vines (lianas) competing with them
are cut, and compares them with untreated control trees.

Quick Start:
    >>> from lianasim import run_simulation
    >>> result = run_simulation()
    >>> result.summary.per_hectare   # additional Mg CO2e/ha by year 30
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__author__ = "LianaSim Development Team"

# =============================================================================
# Simulation
# =============================================================================
from .parameters import SimulationParameters
from .simulation import LiberationSimulation, SimulationResult, run_simulation

# =============================================================================
# Growth and Biomass Models
# =============================================================================
from .allometry import (
    ChaveTreeBiomassModel,
    SchnitzerLianaBiomassModel,
    biomass_mg,
    create_biomass_model,
)
from .diameter_growth import (
    ReleasePeriod,
    ReleaseSchedule,
    control_diameter_series,
    liana_diameter_series,
    treated_diameter_series,
)

# =============================================================================
# Carbon Accounting
# =============================================================================
from .carbon import (
    CO2_PER_CARBON,
    LianaBiomass,
    biomass_to_carbon,
    build_carbon_table,
    carbon_to_co2e,
    liana_biomass,
    remove_liana_biomass,
)
from .scaling import (
    SequestrationSummary,
    annual_potential,
    cost_per_mg_co2e,
    global_potential,
    per_hectare,
    summarize,
)

# =============================================================================
# Configuration Loading
# =============================================================================
from .config_loader import (
    ConfigLoader,
    get_config_loader,
    load_coefficient_file,
    load_simulation_config,
)

# =============================================================================
# Data Export
# =============================================================================
from .data_export import DataExporter

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    LianaSimError,
    ConfigurationError,
    ConfigFileNotFoundError,
    InvalidParameterError,
    SimulationError,
    GrowthModelError,
    DataError,
    InvalidDataError,
    ExportError,
)

# =============================================================================
# Base Classes (for extension)
# =============================================================================
from .model_base import ParameterizedModel

__all__ = [
    # Package Metadata
    "__version__",
    "__author__",
    # Simulation
    "SimulationParameters",
    "LiberationSimulation",
    "SimulationResult",
    "run_simulation",
    # Growth and Biomass Models
    "ChaveTreeBiomassModel",
    "SchnitzerLianaBiomassModel",
    "biomass_mg",
    "create_biomass_model",
    "ReleasePeriod",
    "ReleaseSchedule",
    "control_diameter_series",
    "liana_diameter_series",
    "treated_diameter_series",
    # Carbon Accounting
    "CO2_PER_CARBON",
    "LianaBiomass",
    "biomass_to_carbon",
    "build_carbon_table",
    "carbon_to_co2e",
    "liana_biomass",
    "remove_liana_biomass",
    "SequestrationSummary",
    "annual_potential",
    "cost_per_mg_co2e",
    "global_potential",
    "per_hectare",
    "summarize",
    # Configuration
    "ConfigLoader",
    "get_config_loader",
    "load_coefficient_file",
    "load_simulation_config",
    # Data Export
    "DataExporter",
    # Exceptions
    "LianaSimError",
    "ConfigurationError",
    "ConfigFileNotFoundError",
    "InvalidParameterError",
    "SimulationError",
    "GrowthModelError",
    "DataError",
    "InvalidDataError",
    "ExportError",
    # Base Classes
    "ParameterizedModel",
]
