"""Canned initial conditions for the lander simulation.

Ten scenario slots, selected by index:

    0  circular orbit
    1  descent from 10km
    2  elliptical orbit, thrust changes orbital plane
    3  polar launch at escape velocity (but drag prevents escape)
    4  elliptical orbit that clips the atmosphere and decays
    5  descent from 200km
    6-9  unused (same start state as scenario 0, empty description)

Example:
    >>> from lander.simulation.scenarios import get_scenario
    >>>
    >>> scenario = get_scenario(1)
    >>> state = scenario.initial_state()
"""

from dataclasses import dataclass

import numpy as np
from beartype import beartype

from lander.config import DEFAULT_CONFIG, LanderConfig
from lander.dynamics.state import BodyState, ParachuteStatus

N_SCENARIOS = 10

Vector = tuple[float, float, float]


@beartype
@dataclass(frozen=True)
class Scenario:
    """Initial state and flags for one simulation run.

    Attributes:
        index: Scenario slot (0-9)
        description: Short description, empty for unused slots
        position: Initial position [m]
        velocity: Initial velocity [m/s]
        orientation: Initial xyz Euler angles [degrees]
        dt: Time step [s]
        parachute_status: Initial parachute state
        stabilized_attitude: Hold the base pointing down each tick
        autopilot_enabled: Run the descent autopilot each tick
    """
    index: int
    description: str
    position: Vector
    velocity: Vector
    orientation: Vector
    dt: float = 0.1
    parachute_status: ParachuteStatus = ParachuteStatus.NOT_DEPLOYED
    stabilized_attitude: bool = False
    autopilot_enabled: bool = False

    def initial_state(self, fuel: float = 1.0) -> BodyState:
        """Build the starting BodyState (full tank by default)."""
        return BodyState(
            position=np.array(self.position, dtype=np.float64),
            velocity=np.array(self.velocity, dtype=np.float64),
            orientation=np.array(self.orientation, dtype=np.float64),
            fuel=fuel,
        )


def _circular_orbit(config: LanderConfig) -> tuple[Vector, Vector, Vector]:
    return (
        (1.2 * config.planet_radius, 0.0, 0.0),
        (0.0, -3247.087385863725, 0.0),
        (0.0, 90.0, 0.0),
    )


@beartype
def get_scenario(index: int, config: LanderConfig | None = None) -> Scenario:
    """Look up a canned scenario.

    Args:
        index: Scenario slot, 0 to 9
        config: Planet and vehicle constants used to place the lander

    Returns:
        Scenario definition

    Raises:
        ValueError: If the index is outside 0-9
    """
    if not 0 <= index < N_SCENARIOS:
        raise ValueError(f"Scenario index must be 0-{N_SCENARIOS - 1}, got {index}")

    config = config or DEFAULT_CONFIG
    R = config.planet_radius

    if index == 0:
        # A circular equatorial orbit
        position, velocity, orientation = _circular_orbit(config)
        return Scenario(0, "circular orbit", position, velocity, orientation)

    if index == 1:
        # A descent from rest at 10km altitude
        return Scenario(
            1, "descent from 10km",
            position=(0.0, -(R + 10000.0), 0.0),
            velocity=(0.0, 0.0, 0.0),
            orientation=(0.0, 0.0, 90.0),
            stabilized_attitude=True,
        )

    if index == 2:
        # An elliptical polar orbit
        return Scenario(
            2, "elliptical orbit, thrust changes orbital plane",
            position=(0.0, 0.0, 1.2 * R),
            velocity=(3500.0, 0.0, 0.0),
            orientation=(0.0, 0.0, 90.0),
        )

    if index == 3:
        # Polar surface launch at escape velocity (but drag prevents escape)
        return Scenario(
            3, "polar launch at escape velocity (but drag prevents escape)",
            position=(0.0, 0.0, R + config.lander_size / 2.0),
            velocity=(0.0, 0.0, 5027.0),
            orientation=(0.0, 0.0, 0.0),
        )

    if index == 4:
        # An elliptical orbit that clips the atmosphere each time round, losing energy
        return Scenario(
            4, "elliptical orbit that clips the atmosphere and decays",
            position=(0.0, 0.0, R + 100000.0),
            velocity=(4000.0, 0.0, 0.0),
            orientation=(0.0, 90.0, 0.0),
        )

    if index == 5:
        # A descent from rest at the edge of the exosphere
        return Scenario(
            5, "descent from 200km",
            position=(0.0, -(R + config.exosphere), 0.0),
            velocity=(0.0, 0.0, 0.0),
            orientation=(0.0, 0.0, 90.0),
            stabilized_attitude=True,
        )

    position, velocity, orientation = _circular_orbit(config)
    return Scenario(index, "", position, velocity, orientation)


@beartype
def list_scenarios(config: LanderConfig | None = None) -> list[Scenario]:
    """All ten scenario slots in index order."""
    return [get_scenario(i, config) for i in range(N_SCENARIOS)]
