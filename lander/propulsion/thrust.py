"""Engine thrust and fuel consumption models.

Turns a throttle command into a thrust vector in the planet-centred frame.
The engine responds to the throttle through:

1. A pure delay of ``engine_delay`` seconds (FIFO of past commands)
2. A first-order lag with time constant ``engine_lag``

The thrust acts along the lander's body +Z axis and is rotated into the
planet-centred frame by the current orientation. No thrust is produced once
the tank is empty.

Example:
    >>> from lander.propulsion import ThrustModel
    >>>
    >>> engine = ThrustModel(dt=0.1)
    >>> thrust = engine.world_thrust(throttle=0.5, orientation=state.orientation,
    ...                              fuel=state.fuel)
    >>> fuel = consume_fuel(state.fuel, engine.effective_throttle, dt=0.1)
"""

from collections import deque

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from lander.config import DEFAULT_CONFIG, LanderConfig
from lander.dynamics.state import euler_xyz_to_dcm

# =============================================================================
# Thrust Model
# =============================================================================


@beartype
class ThrustModel:
    """Delayed, lagged engine with thrust along body +Z.

    Attributes:
        config: Vehicle constants (max thrust, delay, lag)
        dt: Simulation time step the delay buffer is sized for [s]
    """

    def __init__(self, dt: float, config: LanderConfig | None = None) -> None:
        """Initialize engine model.

        Args:
            dt: Simulation time step [s]
            config: Vehicle constants
        """
        if dt <= 0:
            raise ValueError(f"Time step must be positive, got {dt}")
        self.config = config or DEFAULT_CONFIG
        self.dt = dt

        self._buffer_length = int(self.config.engine_delay / dt) + 1
        self._buffer: deque[float] = deque(maxlen=self._buffer_length)
        if self.config.engine_lag > 0.0:
            self._lag_constant = float(np.exp(-dt / self.config.engine_lag))
        else:
            self._lag_constant = 0.0
        self._lagged_throttle = 0.0

    @property
    def effective_throttle(self) -> float:
        """Throttle the engine is actually delivering after delay and lag."""
        return self._lagged_throttle

    def reset(self) -> None:
        """Clear the delay buffer and lag state."""
        self._buffer.clear()
        self._lagged_throttle = 0.0

    def update(self, throttle: float) -> float:
        """Push a throttle command through the delay and lag.

        Call once per tick.

        Args:
            throttle: Commanded throttle (0 to 1)

        Returns:
            Effective throttle after delay and lag
        """
        throttle = min(max(throttle, 0.0), 1.0)

        if not self._buffer:
            # Engine starts in steady state at the first command
            self._buffer.extend([throttle] * self._buffer_length)
            self._lagged_throttle = throttle
        else:
            self._buffer.append(throttle)

        delayed = self._buffer[0]
        if self._lag_constant > 0.0:
            self._lagged_throttle = (
                self._lag_constant * self._lagged_throttle
                + (1.0 - self._lag_constant) * delayed
            )
        else:
            self._lagged_throttle = delayed

        return self._lagged_throttle

    def body_thrust(self, throttle: float, fuel: float) -> NDArray[np.float64]:
        """Thrust vector in body frame for an effective throttle [N]."""
        if fuel <= 0.0:
            return np.zeros(3)
        return np.array([0.0, 0.0, self.config.max_thrust * throttle])

    def world_thrust(
        self,
        throttle: float,
        orientation: NDArray[np.float64],
        fuel: float,
    ) -> NDArray[np.float64]:
        """Advance the engine one tick and return thrust in the planet-centred frame.

        Args:
            throttle: Commanded throttle (0 to 1)
            orientation: xyz Euler angles [degrees]
            fuel: Fuel fraction remaining

        Returns:
            Thrust force [N]
        """
        effective = self.update(throttle)
        return euler_xyz_to_dcm(orientation) @ self.body_thrust(effective, fuel)


# =============================================================================
# Fuel Consumption
# =============================================================================


@beartype
def consume_fuel(
    fuel: float,
    throttle: float,
    dt: float,
    config: LanderConfig | None = None,
) -> float:
    """Deplete fuel for one time step of engine operation.

    Args:
        fuel: Fuel fraction remaining
        throttle: Effective throttle over the step (0 to 1)
        dt: Time step [s]
        config: Vehicle constants (tank capacity, burn rate)

    Returns:
        Updated fuel fraction, never below zero
    """
    config = config or DEFAULT_CONFIG
    if fuel <= 0.0:
        return 0.0
    fuel -= dt * config.fuel_rate_at_max_thrust * throttle / config.fuel_capacity
    return max(fuel, 0.0)
