"""Translational force model for the lander.

Sums thrust, aerodynamic drag and point-mass gravity and divides by the
current (fuel-dependent) mass to give the net acceleration.

Drag has two contributions:
- Lander body: 0.5 * rho * Cd_lander * A_lander * |v|^2, opposing velocity
- Parachute (deployed only): 0.5 * rho * Cd_chute * A_chute * |v|, opposing velocity

The parachute term is linear in speed while the body term is quadratic.

Gravity is G*M*m/|r|^2 toward the planet centre. Thrust arrives already
expressed in the planet-centred frame.

Example:
    >>> from lander.dynamics import BodyState, ForceModel, ParachuteStatus
    >>>
    >>> model = ForceModel()
    >>> accel = model.compute_acceleration(
    ...     state,
    ...     ParachuteStatus.NOT_DEPLOYED,
    ...     density=0.01,
    ...     thrust_world=np.zeros(3),
    ... )
"""

import logging

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

from lander.config import DEFAULT_CONFIG, LanderConfig
from lander.dynamics.state import BodyState, ParachuteStatus
from lander.errors import PreconditionError

logger = logging.getLogger(__name__)

# Below this distance from the planet centre gravity is treated as singular [m]
MIN_RADIUS: float = 1.0e-3

# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True)
def _drag(
    vx: float, vy: float, vz: float,
    density: float,
    cd_area_body: float,
    cd_area_chute: float,
    chute_deployed: bool,
) -> tuple[float, float, float]:
    """Total drag force opposing velocity.

    Body:  -v_hat * 0.5*rho*CdA*|v|^2 = -v * 0.5*rho*CdA*|v|
    Chute: -v_hat * 0.5*rho*CdA*|v|   = -v * 0.5*rho*CdA
    """
    speed = np.sqrt(vx*vx + vy*vy + vz*vz)
    if speed == 0.0:
        return (0.0, 0.0, 0.0)

    k = -0.5 * density * cd_area_body * speed
    if chute_deployed:
        k += -0.5 * density * cd_area_chute

    return (k * vx, k * vy, k * vz)


@njit(cache=True)
def _point_mass_gravity(
    x: float, y: float, z: float,
    mass: float,
    mu: float,
) -> tuple[float, float, float]:
    """Gravity force on a point mass.

    F = -mu*m/r^2 * r_hat = -mu*m/r^3 * r
    """
    r_sq = x*x + y*y + z*z
    r = np.sqrt(r_sq)
    f_over_r = -mu * mass / (r_sq * r)
    return (f_over_r * x, f_over_r * y, f_over_r * z)


# =============================================================================
# Force Model
# =============================================================================


@beartype
class ForceModel:
    """Net-acceleration model for the lander.

    Example:
        >>> model = ForceModel(LanderConfig(unloaded_mass=150.0))
        >>> mass = model.effective_mass(fuel=0.5)
        >>> accel = model.compute_acceleration(state, status, density, thrust)
    """

    def __init__(self, config: LanderConfig | None = None) -> None:
        """Initialize force model.

        Args:
            config: Planet and vehicle constants
        """
        self.config = config or DEFAULT_CONFIG
        self._cd_area_body = self.config.drag_coef_lander * self.config.lander_area
        self._cd_area_chute = self.config.drag_coef_chute * self.config.parachute_area
        self._warned_fuel = False

    def _clamp_fuel(self, fuel: float) -> float:
        if 0.0 <= fuel <= 1.0:
            return fuel
        if not self._warned_fuel:
            logger.warning("Fuel fraction %.6g outside [0, 1], clamping", fuel)
            self._warned_fuel = True
        return min(max(fuel, 0.0), 1.0)

    def effective_mass(self, fuel: float) -> float:
        """Lander mass including remaining fuel [kg].

        Fuel fractions outside [0, 1] are clamped.
        """
        fuel = self._clamp_fuel(fuel)
        return self.config.unloaded_mass + self.config.full_fuel_mass * fuel

    def body_drag_magnitude(self, density: float, speed: float) -> float:
        """Drag on the lander body alone [N]."""
        return 0.5 * density * self._cd_area_body * speed * speed

    def chute_drag_magnitude(self, density: float, speed: float) -> float:
        """Additional drag from a deployed parachute [N]."""
        return 0.5 * density * self._cd_area_chute * speed

    def drag_force(
        self,
        velocity: NDArray[np.float64],
        density: float,
        parachute_status: ParachuteStatus,
    ) -> NDArray[np.float64]:
        """Total drag force in the planet-centred frame [N]."""
        return np.array(_drag(
            velocity[0], velocity[1], velocity[2],
            density,
            self._cd_area_body,
            self._cd_area_chute,
            parachute_status is ParachuteStatus.DEPLOYED,
        ))

    def gravity_force(
        self,
        position: NDArray[np.float64],
        mass: float,
    ) -> NDArray[np.float64]:
        """Gravity force in the planet-centred frame [N].

        Raises:
            PreconditionError: If the position is at the planet centre
        """
        r = np.linalg.norm(position)
        if not r > MIN_RADIUS:
            raise PreconditionError(
                f"Position magnitude {r:.3g} m is too close to the planet centre"
            )
        return np.array(_point_mass_gravity(
            position[0], position[1], position[2],
            mass,
            self.config.mu,
        ))

    def compute_acceleration(
        self,
        state: BodyState,
        parachute_status: ParachuteStatus,
        density: float,
        thrust_world: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        """Compute net acceleration.

        Args:
            state: Current lander state (position, velocity, fuel)
            parachute_status: Whether chute drag applies
            density: Atmospheric density at the lander [kg/m^3]
            thrust_world: Thrust force in the planet-centred frame [N]

        Returns:
            Acceleration [m/s^2]

        Raises:
            PreconditionError: If the radius or the effective mass is degenerate
        """
        mass = self.effective_mass(state.fuel)
        if not mass > 0.0:
            raise PreconditionError(f"Effective mass must be positive, got {mass}")

        drag = self.drag_force(state.velocity, density, parachute_status)
        gravity = self.gravity_force(state.position, mass)

        return (thrust_world + drag + gravity) / mass
