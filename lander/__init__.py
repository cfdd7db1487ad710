"""Lander - Numerical dynamics engine for a Mars lander.

This package simulates a single lander descending to Mars: point-mass
gravity, an exponential atmosphere with body and parachute drag, a
throttleable engine, fixed-step Euler/Verlet integration and a descent-rate
autopilot.

Example:
    >>> from lander import Simulator
    >>>
    >>> with Simulator.from_scenario(1, autopilot=True) as sim:
    ...     result = sim.run(duration=2000.0)
    >>> print(f"Landed: {result.landed}, crashed: {result.crashed}")
"""

__version__ = "0.1.0"

# Vehicle and planet constants
from lander.config import (
    DEFAULT_CONFIG,
    LanderConfig,
)

# Translational dynamics
from lander.dynamics import (
    BodyState,
    EulerIntegrator,
    ForceModel,
    IntegrationScheme,
    ParachuteStatus,
    VerletIntegrator,
    create_integrator,
)

# Environment
from lander.environment import (
    MarsAtmosphere,
    atmospheric_density,
)

# Errors
from lander.errors import (
    PreconditionError,
    SimulationEndedError,
)

# Control
from lander.gnc import (
    AutopilotController,
    ControllerGains,
    stabilized_orientation,
    throttle_from_command,
)

# Output management
from lander.output import (
    TrajectoryLog,
    read_trajectory_log,
)

# Visualization
from lander.plotting import (
    plot_descent_phase,
    plot_descent_profile,
)

# Propulsion
from lander.propulsion import (
    ThrustModel,
    consume_fuel,
)

# Simulation
from lander.simulation import (
    SimConfig,
    SimulationResult,
    Simulator,
    get_scenario,
    list_scenarios,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "LanderConfig",
    "DEFAULT_CONFIG",
    # Dynamics
    "BodyState",
    "ParachuteStatus",
    "ForceModel",
    "IntegrationScheme",
    "EulerIntegrator",
    "VerletIntegrator",
    "create_integrator",
    # Environment
    "MarsAtmosphere",
    "atmospheric_density",
    # Errors
    "PreconditionError",
    "SimulationEndedError",
    # Control
    "AutopilotController",
    "ControllerGains",
    "throttle_from_command",
    "stabilized_orientation",
    # Output management
    "TrajectoryLog",
    "read_trajectory_log",
    # Plotting
    "plot_descent_profile",
    "plot_descent_phase",
    # Propulsion
    "ThrustModel",
    "consume_fuel",
    # Simulation
    "SimConfig",
    "SimulationResult",
    "Simulator",
    "get_scenario",
    "list_scenarios",
]
