"""Descent autopilot: proportional throttle control on descent rate.

The controller tracks an altitude-scheduled target descent rate:

    h = |r| - R_planet
    e = -(0.5 + Kh * h) - v . r_hat
    p = Kp * e

so the target vertical speed is -0.5 m/s at the surface and steepens with
altitude. The raw command is then mapped onto the throttle with a shifted
saturation (deadband fraction delta):

    p < -delta           -> 0
    -delta <= p < 1-delta -> delta + p
    p >= 1-delta         -> 1

A zero error therefore still produces a throttle of delta.

The controller reads the state produced by the integrator, so its command
takes effect on the following tick.

Example:
    >>> from lander.gnc.control import AutopilotController, ControllerGains
    >>>
    >>> autopilot = AutopilotController(gains=ControllerGains(kh=0.04, kp=1.0, delta=0.1))
    >>> throttle = autopilot.compute_throttle(state.position, state.velocity)
"""

import math
from dataclasses import asdict, dataclass, field, fields
from typing import Any

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from lander.config import DEFAULT_CONFIG
from lander.output import TrajectoryLog

# Target descent rate at zero altitude [m/s]
TOUCHDOWN_DESCENT_RATE = 0.5

# =============================================================================
# Controller Gains
# =============================================================================


@beartype
@dataclass(frozen=True)
class ControllerGains:
    """Autopilot tuning constants.

    Attributes:
        kh: Height feedback gain [1/s]
        kp: Proportional gain on descent-rate error [s/m]
        delta: Deadband fraction, strictly between 0 and 1
    """
    kh: float | int = 0.04
    kp: float | int = 1.0
    delta: float | int = 0.1

    def __post_init__(self) -> None:
        """Coerce gains to float and validate them."""
        for f in fields(self):
            object.__setattr__(self, f.name, float(getattr(self, f.name)))
        if not 0.0 < self.delta < 1.0:
            raise ValueError(f"delta must be strictly between 0 and 1, got {self.delta}")
        if not (math.isfinite(self.kh) and math.isfinite(self.kp)):
            raise ValueError("Gains must be finite")

    def to_dict(self) -> dict[str, float]:
        """Serialize to a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ControllerGains":
        """Build gains from a dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown controller gains: {', '.join(unknown)}")
        return cls(**{key: float(value) for key, value in data.items()})


# =============================================================================
# Control Law
# =============================================================================


@beartype
def throttle_from_command(command: float, delta: float) -> float:
    """Map a raw proportional command onto [0, 1] with a shifted saturation.

    Args:
        command: Raw controller output Kp * e
        delta: Deadband fraction (0 < delta < 1)

    Returns:
        Throttle setting
    """
    if command < -delta:
        return 0.0
    elif command < 1.0 - delta:
        return delta + command
    else:
        return 1.0


@beartype
@dataclass
class AutopilotController:
    """Proportional descent-rate autopilot.

    Attributes:
        planet_radius: Surface radius used to compute altitude [m]
        gains: Controller tuning constants
        log: Optional trajectory sink, one record per call
        last_error: Descent-rate error from the most recent call [m/s]
        last_command: Raw command Kp * e from the most recent call
    """
    planet_radius: float = DEFAULT_CONFIG.planet_radius
    gains: ControllerGains = field(default_factory=ControllerGains)
    log: TrajectoryLog | None = None

    last_error: float | None = field(default=None, init=False)
    last_command: float | None = field(default=None, init=False)

    def altitude_error(
        self,
        position: NDArray[np.float64],
        velocity: NDArray[np.float64],
    ) -> float:
        """Descent-rate error e = -0.5 - Kh*h - v.r_hat [m/s]."""
        radius = float(np.linalg.norm(position))
        h = radius - self.planet_radius
        radial_velocity = float(np.dot(velocity, position / radius))
        return -TOUCHDOWN_DESCENT_RATE - self.gains.kh * h - radial_velocity

    def compute_throttle(
        self,
        position: NDArray[np.float64],
        velocity: NDArray[np.float64],
        elapsed_time: float | None = None,
    ) -> float:
        """Compute the throttle for the next tick.

        Args:
            position: Post-step position [m]
            velocity: Post-step velocity [m/s]
            elapsed_time: Simulation time, stamped on the log record [s]

        Returns:
            Throttle in [0, 1]
        """
        error = self.altitude_error(position, velocity)
        command = self.gains.kp * error
        throttle = throttle_from_command(command, self.gains.delta)

        self.last_error = error
        self.last_command = command

        if self.log is not None and elapsed_time is not None:
            radius = float(np.linalg.norm(position))
            self.log.write(
                elapsed_time,
                radius - self.planet_radius,
                float(np.dot(velocity, position / radius)),
            )

        return throttle
