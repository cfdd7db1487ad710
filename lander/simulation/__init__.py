"""Simulation module for the Mars lander.

Provides the fixed-step simulator, its configuration, the canned
scenarios and the run result container.

Example:
    >>> from lander.simulation import Simulator
    >>>
    >>> sim = Simulator.from_scenario(1, autopilot=True)
    >>> while not sim.landed:
    ...     sim.step()
    >>> print(f"Touchdown at t={sim.time:.1f} s, crashed={sim.crashed}")
"""

from lander.simulation.scenarios import (
    N_SCENARIOS,
    Scenario,
    get_scenario,
    list_scenarios,
)
from lander.simulation.simulator import (
    SimConfig,
    SimulationContext,
    SimulationResult,
    Simulator,
    TrajectoryPoint,
)

__all__ = [
    # Scenarios
    "N_SCENARIOS",
    "Scenario",
    "get_scenario",
    "list_scenarios",
    # Simulator
    "SimConfig",
    "SimulationContext",
    "SimulationResult",
    "Simulator",
    "TrajectoryPoint",
]
