"""Fixed-step lander simulation.

Each tick runs, in order:

1. Parachute check: a deployed chute is lost if drag or speed is excessive
2. Force model: thrust (from the previous tick's throttle), drag, gravity
3. Integrator: advance position and velocity
4. Autopilot (optional): new throttle from the post-step state
5. Attitude stabilization (optional): point the base at the planet
6. Fuel depletion, clock advance, surface contact check

Because the autopilot runs after the integrator, a throttle it commands on
tick N first changes the acceleration on tick N+1.

Example:
    >>> from lander.simulation import Simulator, SimConfig
    >>>
    >>> with Simulator.from_scenario(1, autopilot=True) as sim:
    ...     result = sim.run(duration=2000.0)
    >>> print(result.landed, result.crashed)
    >>> df = result.to_dataframe()
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, NamedTuple

import numpy as np
from beartype import beartype
from numpy.typing import NDArray
from tqdm import tqdm

from lander.config import DEFAULT_CONFIG, LanderConfig
from lander.dynamics.forces import ForceModel
from lander.dynamics.integrators import IntegrationScheme, create_integrator
from lander.dynamics.state import BodyState, ParachuteStatus
from lander.environment.atmosphere import MarsAtmosphere
from lander.errors import SimulationEndedError
from lander.gnc.control.attitude import stabilized_orientation
from lander.gnc.control.autopilot import AutopilotController, ControllerGains
from lander.output import TrajectoryLog
from lander.propulsion.thrust import ThrustModel, consume_fuel
from lander.simulation.scenarios import get_scenario

logger = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass
class SimConfig:
    """Simulation configuration.

    Attributes:
        dt: Fixed time step [s]
        integration_scheme: Euler or Verlet, fixed for the run
        gains: Autopilot tuning constants
        trajectory_log: Autopilot diagnostic file, None to disable
        record_history: Keep a per-tick trajectory record
        max_time: Default run duration [s]
    """
    dt: float = 0.1
    integration_scheme: IntegrationScheme = IntegrationScheme.VERLET
    gains: ControllerGains = field(default_factory=ControllerGains)
    trajectory_log: Path | None = None
    record_history: bool = True
    max_time: float = 100000.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.dt > 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if not self.max_time > 0:
            raise ValueError(f"max_time must be positive, got {self.max_time}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        data = asdict(self)
        data["integration_scheme"] = self.integration_scheme.name.lower()
        data["trajectory_log"] = str(self.trajectory_log) if self.trajectory_log else None
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SimConfig":
        """Build a config from a dictionary.

        Raises:
            ValueError: On unknown keys or an unknown integration scheme
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown simulation settings: {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        if "dt" in data:
            kwargs["dt"] = float(data["dt"])
        if "max_time" in data:
            kwargs["max_time"] = float(data["max_time"])
        if "record_history" in data:
            kwargs["record_history"] = bool(data["record_history"])
        if "integration_scheme" in data:
            name = str(data["integration_scheme"]).upper()
            try:
                kwargs["integration_scheme"] = IntegrationScheme[name]
            except KeyError:
                raise ValueError(
                    f"Unknown integration scheme: {data['integration_scheme']!r}"
                ) from None
        if "gains" in data:
            kwargs["gains"] = ControllerGains.from_dict(data["gains"])
        if data.get("trajectory_log") is not None:
            kwargs["trajectory_log"] = Path(data["trajectory_log"])
        return cls(**kwargs)

    @classmethod
    def from_json(cls, path: str | Path) -> "SimConfig":
        """Load settings from a JSON file."""
        with open(path) as f:
            return cls.from_dict(json.load(f))


# =============================================================================
# Simulation State
# =============================================================================


@beartype
@dataclass
class SimulationContext:
    """Everything that changes during a run.

    Attributes:
        state: Lander position, velocity, orientation and fuel
        parachute_status: Parachute state
        throttle: Commanded throttle for the next tick (0 to 1)
        time: Elapsed simulation time [s]
        tick: Number of completed ticks
        stabilized_attitude: Hold the base pointing down
        autopilot_enabled: Let the autopilot own the throttle
        landed: Surface contact has occurred
        crashed: Surface contact exceeded the survivable speeds
    """
    state: BodyState
    parachute_status: ParachuteStatus = ParachuteStatus.NOT_DEPLOYED
    throttle: float = 0.0
    time: float = 0.0
    tick: int = 0
    stabilized_attitude: bool = False
    autopilot_enabled: bool = False
    landed: bool = False
    crashed: bool = False


class TrajectoryPoint(NamedTuple):
    """State recorded at the end of a tick."""
    time: float                          # Elapsed time [s]
    position: NDArray[np.float64]        # [m]
    velocity: NDArray[np.float64]        # [m/s]
    acceleration: NDArray[np.float64]    # Acceleration used this tick [m/s^2]
    fuel: float                          # Fuel fraction
    throttle: float                      # Throttle commanded for the next tick
    altitude: float                      # [m]
    radial_velocity: float               # [m/s]
    parachute_status: ParachuteStatus


# =============================================================================
# Simulator
# =============================================================================


@beartype
class Simulator:
    """Single-body, fixed-step lander simulator.

    Owns the simulation context and the force, integration, engine and
    control models. Stepping is driven by the caller (``step``) or by
    ``run``.

    Example:
        >>> sim = Simulator.from_scenario(5, autopilot=True)
        >>> sim.deploy_parachute()
        >>> while not sim.landed:
        ...     sim.step()
        >>> sim.close()
    """

    def __init__(
        self,
        context: SimulationContext,
        config: SimConfig | None = None,
        lander: LanderConfig | None = None,
    ) -> None:
        """Initialize simulator.

        Args:
            context: Initial state and flags
            config: Simulation settings
            lander: Planet and vehicle constants
        """
        self.context = context
        self.config = config or SimConfig()
        self.lander = lander or DEFAULT_CONFIG

        self.force_model = ForceModel(self.lander)
        self.integrator = create_integrator(self.config.integration_scheme)
        self.thrust_model = ThrustModel(self.config.dt, self.lander)
        self.atmosphere = MarsAtmosphere(self.lander)

        self._log = (
            TrajectoryLog(self.config.trajectory_log)
            if self.config.trajectory_log is not None
            else None
        )
        self.autopilot = AutopilotController(
            planet_radius=self.lander.planet_radius,
            gains=self.config.gains,
            log=self._log,
        )

        self._last_acceleration = np.zeros(3)
        self._fuel_exhausted = context.state.fuel <= 0.0
        self._history: list[TrajectoryPoint] = []

    @classmethod
    def from_scenario(
        cls,
        index: int,
        config: SimConfig | None = None,
        lander: LanderConfig | None = None,
        autopilot: bool | None = None,
    ) -> "Simulator":
        """Create a simulator from one of the canned scenarios.

        Args:
            index: Scenario slot (0-9)
            config: Simulation settings; dt defaults to the scenario's
            lander: Planet and vehicle constants
            autopilot: Override the scenario's autopilot flag
        """
        lander = lander or DEFAULT_CONFIG
        scenario = get_scenario(index, lander)
        if config is None:
            config = SimConfig(dt=scenario.dt)

        context = SimulationContext(
            state=scenario.initial_state(),
            parachute_status=scenario.parachute_status,
            stabilized_attitude=scenario.stabilized_attitude,
            autopilot_enabled=scenario.autopilot_enabled if autopilot is None else autopilot,
        )
        logger.info("Scenario %d: %s", index, scenario.description or "(unused slot)")
        return cls(context, config, lander)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def state(self) -> BodyState:
        """Current lander state (live object)."""
        return self.context.state

    def get_state(self) -> BodyState:
        """Copy of the current lander state."""
        return self.context.state.copy()

    @property
    def time(self) -> float:
        """Elapsed simulation time [s]."""
        return self.context.time

    @property
    def altitude(self) -> float:
        """Current altitude [m]."""
        return self.context.state.altitude(self.lander.planet_radius)

    @property
    def throttle(self) -> float:
        """Throttle that the next tick will apply."""
        return self.context.throttle

    @property
    def parachute_status(self) -> ParachuteStatus:
        return self.context.parachute_status

    @property
    def landed(self) -> bool:
        return self.context.landed

    @property
    def crashed(self) -> bool:
        return self.context.crashed

    @property
    def last_acceleration(self) -> NDArray[np.float64]:
        """Net acceleration computed on the most recent tick [m/s^2]."""
        return self._last_acceleration.copy()

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def set_throttle(self, throttle: float) -> None:
        """Manually command the throttle, clamped to [0, 1].

        Ignored in effect while the autopilot is enabled, since the
        autopilot overwrites the throttle every tick.
        """
        self.context.throttle = min(max(throttle, 0.0), 1.0)

    def parachute_drag(self) -> float:
        """Drag the lander would feel with the chute deployed [N]."""
        state = self.context.state
        density = self.atmosphere.at_position(state.position)
        cd_area = (
            self.lander.drag_coef_chute * self.lander.parachute_area
            + self.lander.drag_coef_lander * self.lander.lander_area
        )
        return 0.5 * density * cd_area * state.speed * state.speed

    def safe_to_deploy_parachute(self) -> bool:
        """Whether a parachute would survive the current flight conditions."""
        if self.parachute_drag() > self.lander.max_parachute_drag:
            return False
        if (
            self.context.state.speed > self.lander.max_parachute_speed
            and self.altitude < self.lander.exosphere
        ):
            return False
        return True

    def deploy_parachute(self) -> ParachuteStatus:
        """Deploy the parachute if it has not been used yet.

        Deploying in unsafe conditions loses the chute immediately.

        Returns:
            The resulting parachute status
        """
        if self.context.parachute_status is ParachuteStatus.NOT_DEPLOYED:
            if self.safe_to_deploy_parachute():
                self.context.parachute_status = ParachuteStatus.DEPLOYED
                logger.info("Parachute deployed at t=%.1f s", self.context.time)
            else:
                self.context.parachute_status = ParachuteStatus.LOST
                logger.warning("Parachute deployed unsafely and lost at t=%.1f s",
                               self.context.time)
        return self.context.parachute_status

    # -------------------------------------------------------------------------
    # Stepping
    # -------------------------------------------------------------------------

    def _check_parachute(self) -> None:
        if (
            self.context.parachute_status is ParachuteStatus.DEPLOYED
            and not self.safe_to_deploy_parachute()
        ):
            self.context.parachute_status = ParachuteStatus.LOST
            logger.warning("Parachute lost at t=%.1f s", self.context.time)

    def _ground_speed(self, state: BodyState) -> float:
        """Horizontal speed relative to the rotating surface [m/s]."""
        omega = np.array([0.0, 0.0, self.lander.planet_rotation_rate])
        relative = state.velocity - np.cross(omega, state.position)
        r_hat = state.radial_unit
        horizontal = relative - np.dot(relative, r_hat) * r_hat
        return float(np.linalg.norm(horizontal))

    def _check_surface(self) -> None:
        state = self.context.state
        if state.altitude(self.lander.planet_radius) >= self.lander.lander_size / 2.0:
            return

        ground_speed = self._ground_speed(state)
        descent_rate = -state.radial_velocity
        self.context.landed = True
        self.context.crashed = (
            ground_speed > self.lander.max_impact_ground_speed
            or descent_rate > self.lander.max_impact_descent_rate
        )
        state.velocity = np.zeros(3)

        if self.context.crashed:
            logger.warning(
                "Crashed at t=%.1f s: descent rate %.3f m/s, ground speed %.3f m/s",
                self.context.time, descent_rate, ground_speed,
            )
        else:
            logger.info(
                "Landed at t=%.1f s: descent rate %.3f m/s, ground speed %.3f m/s",
                self.context.time, descent_rate, ground_speed,
            )

    def step(self) -> BodyState:
        """Advance the simulation by one tick.

        Returns:
            The new lander state

        Raises:
            SimulationEndedError: If the lander has already touched down
            PreconditionError: If the dynamics become singular
        """
        ctx = self.context
        if ctx.landed:
            raise SimulationEndedError("Lander is on the surface; the run has ended")

        dt = self.config.dt
        self._check_parachute()

        state = ctx.state
        density = self.atmosphere.at_position(state.position)
        thrust = self.thrust_model.world_thrust(ctx.throttle, state.orientation, state.fuel)
        acceleration = self.force_model.compute_acceleration(
            state, ctx.parachute_status, density, thrust,
        )
        state = self.integrator.step(state, acceleration, dt)
        ctx.state = state
        self._last_acceleration = acceleration

        if ctx.autopilot_enabled:
            ctx.throttle = self.autopilot.compute_throttle(
                state.position, state.velocity, ctx.time,
            )

        if ctx.stabilized_attitude:
            state.orientation = stabilized_orientation(state.position)

        state.fuel = consume_fuel(
            state.fuel, self.thrust_model.effective_throttle, dt, self.lander,
        )
        if state.fuel <= 0.0 and not self._fuel_exhausted:
            self._fuel_exhausted = True
            logger.info("Fuel exhausted at t=%.1f s", ctx.time)

        ctx.time += dt
        ctx.tick += 1
        self._check_surface()

        if self.config.record_history:
            self._history.append(self._record(acceleration))

        return state

    def _record(self, acceleration: NDArray[np.float64]) -> TrajectoryPoint:
        ctx = self.context
        state = ctx.state
        return TrajectoryPoint(
            time=ctx.time,
            position=state.position.copy(),
            velocity=state.velocity.copy(),
            acceleration=acceleration.copy(),
            fuel=state.fuel,
            throttle=ctx.throttle,
            altitude=state.altitude(self.lander.planet_radius),
            radial_velocity=state.radial_velocity,
            parachute_status=ctx.parachute_status,
        )

    def run(self, duration: float | None = None, progress: bool = False) -> "SimulationResult":
        """Step until touchdown or until ``duration`` seconds have elapsed.

        Args:
            duration: Run length [s], defaults to ``config.max_time``
            progress: If True, show a tqdm progress bar

        Returns:
            SimulationResult for the whole run so far
        """
        duration = self.config.max_time if duration is None else duration
        n_steps = int(round(duration / self.config.dt))

        logger.info("Running %d ticks (dt=%.3f s)", n_steps, self.config.dt)
        iterator: Any = range(n_steps)
        if progress:
            iterator = tqdm(iterator, desc="Simulating", unit="tick")

        for _ in iterator:
            if self.context.landed:
                break
            self.step()

        if self._log is not None:
            self._log.flush()
        return SimulationResult.from_simulator(self)

    def get_history(self) -> list[TrajectoryPoint]:
        """Get recorded trajectory points."""
        return self._history.copy()

    def close(self) -> None:
        """Release the trajectory log."""
        if self._log is not None:
            self._log.close()

    def __enter__(self) -> "Simulator":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


# =============================================================================
# Results and Analysis
# =============================================================================


@beartype
@dataclass
class SimulationResult:
    """Results from a simulation run.

    Provides convenient access to trajectory data.
    """
    points: list[TrajectoryPoint]
    landed: bool = False
    crashed: bool = False

    @property
    def time(self) -> NDArray[np.float64]:
        """Time array [s]."""
        return np.array([p.time for p in self.points])

    @property
    def position(self) -> NDArray[np.float64]:
        """Position history [m], shape (N, 3)."""
        return np.array([p.position for p in self.points]).reshape(-1, 3)

    @property
    def velocity(self) -> NDArray[np.float64]:
        """Velocity history [m/s], shape (N, 3)."""
        return np.array([p.velocity for p in self.points]).reshape(-1, 3)

    @property
    def altitude(self) -> NDArray[np.float64]:
        """Altitude history [m]."""
        return np.array([p.altitude for p in self.points])

    @property
    def radial_velocity(self) -> NDArray[np.float64]:
        """Radial velocity history [m/s]."""
        return np.array([p.radial_velocity for p in self.points])

    @property
    def fuel(self) -> NDArray[np.float64]:
        """Fuel fraction history."""
        return np.array([p.fuel for p in self.points])

    @property
    def throttle(self) -> NDArray[np.float64]:
        """Throttle command history."""
        return np.array([p.throttle for p in self.points])

    @classmethod
    def from_simulator(cls, sim: Simulator) -> "SimulationResult":
        """Create result from simulator history."""
        return cls(points=sim.get_history(), landed=sim.landed, crashed=sim.crashed)

    def to_dataframe(self):
        """Convert to Polars DataFrame."""
        import polars as pl

        position = self.position
        velocity = self.velocity
        return pl.DataFrame({
            "time": self.time,
            "altitude": self.altitude,
            "radial_velocity": self.radial_velocity,
            "fuel": self.fuel,
            "throttle": self.throttle,
            "x": position[:, 0],
            "y": position[:, 1],
            "z": position[:, 2],
            "vx": velocity[:, 0],
            "vy": velocity[:, 1],
            "vz": velocity[:, 2],
            "parachute": [p.parachute_status.name for p in self.points],
        })
