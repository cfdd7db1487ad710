"""Fixed-step integration schemes for the lander's translational motion.

Two schemes are available, chosen once per run:

- Euler: explicit forward Euler, position then velocity, no memory.
- Verlet: position-form Verlet. The first call bootstraps with a single
  Euler step because the recurrence needs a previous position. Afterwards

      x[n+1] = 2*x[n] - x[n-1] + a[n]*dt^2
      v[n+1] = (x[n+1] - x[n]) / dt

  so velocity is always a finite difference of positions and never
  accumulates acceleration directly.

Example:
    >>> from lander.dynamics import IntegrationScheme, create_integrator
    >>>
    >>> integrator = create_integrator(IntegrationScheme.VERLET)
    >>> state = integrator.step(state, accel, dt=0.1)
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from lander.dynamics.state import BodyState

# =============================================================================
# Integrator Protocol
# =============================================================================


class IntegrationScheme(Enum):
    """Available integration schemes."""

    EULER = auto()
    VERLET = auto()


class Integrator(Protocol):
    """Protocol for fixed-step integrators."""

    def step(
        self,
        state: BodyState,
        acceleration: NDArray[np.float64],
        dt: float,
    ) -> BodyState:
        """Advance position and velocity by one step."""
        ...

    def reset(self) -> None:
        """Forget any history so the next step starts a new run."""
        ...


def _check_dt(dt: float) -> None:
    if not dt > 0.0:
        raise ValueError(f"Time step must be positive, got {dt}")


# =============================================================================
# Euler
# =============================================================================


@beartype
class EulerIntegrator:
    """Explicit forward Euler."""

    scheme = IntegrationScheme.EULER

    def step(
        self,
        state: BodyState,
        acceleration: NDArray[np.float64],
        dt: float,
    ) -> BodyState:
        _check_dt(dt)
        return BodyState(
            position=state.position + dt * state.velocity,
            velocity=state.velocity + dt * acceleration,
            orientation=state.orientation.copy(),
            fuel=state.fuel,
        )

    def reset(self) -> None:
        pass


# =============================================================================
# Verlet
# =============================================================================


class IntegratorPhase(Enum):
    """Whether the Verlet history has been established."""

    UNINITIALIZED = auto()
    BOOTSTRAPPED = auto()


@beartype
@dataclass
class IntegratorMemory:
    """Position history carried between Verlet steps.

    Attributes:
        phase: UNINITIALIZED until the bootstrap step has run
        previous_position: Position one step back [m], None before bootstrap
    """
    phase: IntegratorPhase = IntegratorPhase.UNINITIALIZED
    previous_position: NDArray[np.float64] | None = None


@beartype
@dataclass
class VerletIntegrator:
    """Position Verlet with an Euler bootstrap step.

    The bootstrap branch runs exactly once per run, selected by the
    memory phase rather than by comparing simulation time to zero.
    """
    memory: IntegratorMemory = field(default_factory=IntegratorMemory)

    scheme = IntegrationScheme.VERLET

    @property
    def bootstrapped(self) -> bool:
        """True once the first step has run."""
        return self.memory.phase is IntegratorPhase.BOOTSTRAPPED

    def step(
        self,
        state: BodyState,
        acceleration: NDArray[np.float64],
        dt: float,
    ) -> BodyState:
        """Advance one step.

        Args:
            state: Current state
            acceleration: Net acceleration at the current state [m/s^2]
            dt: Time step [s]

        Returns:
            State at t + dt (orientation and fuel copied through)
        """
        _check_dt(dt)

        if self.memory.phase is IntegratorPhase.UNINITIALIZED:
            self.memory.previous_position = state.position.copy()
            new_position = state.position + dt * state.velocity
            new_velocity = state.velocity + dt * acceleration
            self.memory.phase = IntegratorPhase.BOOTSTRAPPED
        else:
            new_position = (
                state.position * 2.0
                - self.memory.previous_position
                + acceleration * dt * dt
            )
            self.memory.previous_position = state.position.copy()
            new_velocity = (new_position - self.memory.previous_position) / dt

        return BodyState(
            position=new_position,
            velocity=new_velocity,
            orientation=state.orientation.copy(),
            fuel=state.fuel,
        )

    def reset(self) -> None:
        """Drop the position history; the next step bootstraps again."""
        self.memory = IntegratorMemory()


# =============================================================================
# Factory
# =============================================================================


@beartype
def create_integrator(scheme: IntegrationScheme) -> EulerIntegrator | VerletIntegrator:
    """Create a fresh integrator for the given scheme."""
    if scheme is IntegrationScheme.EULER:
        return EulerIntegrator()
    if scheme is IntegrationScheme.VERLET:
        return VerletIntegrator()
    raise ValueError(f"Unknown integration scheme: {scheme}")
