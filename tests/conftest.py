"""
Shared pytest fixtures for LianaSim tests.

This module provides the default parameters and a session-wide simulation
result so that tests checking the published numbers share one run.
"""
import matplotlib
matplotlib.use('Agg')

import pytest

from lianasim.parameters import SimulationParameters
from lianasim.simulation import run_simulation


# =============================================================================
# Parameter Fixtures
# =============================================================================

@pytest.fixture
def default_params():
    """Parameters used for the published figure."""
    return SimulationParameters()


@pytest.fixture
def short_params():
    """A ten-year run, ending inside the doubled-growth period."""
    return SimulationParameters(years=10)


# =============================================================================
# Simulation Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def default_result():
    """Simulation result with default parameters.

    Session-scoped; tests must not mutate it.
    """
    return run_simulation(SimulationParameters())
