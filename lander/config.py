"""Physical constants for the Mars lander and its planet.

All quantities are SI unless noted. The defaults describe a small lander
descending to Mars and can be overridden from a JSON file, e.g.::

    {
        "engine_delay": 0.2,
        "engine_lag": 0.5,
        "unloaded_mass": 120.0
    }

Example:
    >>> from lander.config import LanderConfig
    >>>
    >>> config = LanderConfig.from_json("heavy_lander.json")
    >>> print(f"Max thrust: {config.max_thrust:.0f} N")
"""

import json
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from beartype import beartype


@beartype
@dataclass(frozen=True)
class LanderConfig:
    """Planet and vehicle constants, fixed for the duration of a run.

    Attributes:
        planet_radius: Mean planet radius [m]
        planet_mass: Planet mass [kg]
        gravitational_constant: Newton's constant [m^3/(kg*s^2)]
        planet_day: Sidereal day, used for surface rotation [s]
        exosphere: Altitude above which the atmosphere vanishes [m]
        unloaded_mass: Lander mass without fuel [kg]
        fuel_capacity: Tank volume [l]
        fuel_rate_at_max_thrust: Fuel consumption at full throttle [l/s]
        fuel_density: Fuel density [kg/l]
        engine_lag: First-order engine response time constant [s]
        engine_delay: Pure delay between throttle command and thrust [s]
        drag_coef_chute: Parachute drag coefficient
        drag_coef_lander: Lander body drag coefficient
        max_parachute_drag: Drag load at which the parachute tears away [N]
        max_parachute_speed: Fastest safe parachute deployment speed [m/s]
        lander_size: Lander radius [m]
        max_impact_ground_speed: Survivable horizontal touchdown speed [m/s]
        max_impact_descent_rate: Survivable vertical touchdown speed [m/s]
    """
    planet_radius: float = 3386000.0
    planet_mass: float = 6.42e23
    gravitational_constant: float = 6.673e-11
    planet_day: float = 88642.65
    exosphere: float = 200000.0
    unloaded_mass: float = 100.0
    fuel_capacity: float = 100.0
    fuel_rate_at_max_thrust: float = 0.5
    fuel_density: float = 1.0
    engine_lag: float = 0.0
    engine_delay: float = 0.0
    drag_coef_chute: float = 2.0
    drag_coef_lander: float = 1.0
    max_parachute_drag: float = 20000.0
    max_parachute_speed: float = 500.0
    lander_size: float = 1.0
    max_impact_ground_speed: float = 1.0
    max_impact_descent_rate: float = 1.0

    def __post_init__(self) -> None:
        """Validate constants."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value):
                raise ValueError(f"{f.name} must be finite, got {value}")
            if f.name in ("engine_lag", "engine_delay"):
                if value < 0:
                    raise ValueError(f"{f.name} must be non-negative, got {value}")
            elif value <= 0:
                raise ValueError(f"{f.name} must be positive, got {value}")

    # -------------------------------------------------------------------------
    # Derived quantities
    # -------------------------------------------------------------------------

    @property
    def mu(self) -> float:
        """Gravitational parameter G*M [m^3/s^2]."""
        return self.gravitational_constant * self.planet_mass

    @property
    def surface_gravity(self) -> float:
        """Gravitational acceleration at the surface [m/s^2]."""
        return self.mu / (self.planet_radius * self.planet_radius)

    @property
    def full_fuel_mass(self) -> float:
        """Mass of a full tank [kg]."""
        return self.fuel_capacity * self.fuel_density

    @property
    def max_thrust(self) -> float:
        """Engine thrust at full throttle [N].

        Sized to give a thrust-to-weight ratio of 1.5 at the surface
        with a full tank.
        """
        return 1.5 * (self.full_fuel_mass + self.unloaded_mass) * self.surface_gravity

    @property
    def lander_area(self) -> float:
        """Lander cross-sectional area [m^2]."""
        return math.pi * self.lander_size * self.lander_size

    @property
    def parachute_area(self) -> float:
        """Deployed parachute area [m^2]."""
        return math.pi * (2.0 * self.lander_size) * (2.0 * self.lander_size)

    @property
    def planet_rotation_rate(self) -> float:
        """Planet angular rate about +Z [rad/s]."""
        return 2.0 * math.pi / self.planet_day

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, float]:
        """Serialize to a plain dictionary."""
        return asdict(self)

    def to_json(self) -> str:
        """Serialize to JSON."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LanderConfig":
        """Build a config from a dictionary, overriding defaults.

        Raises:
            ValueError: If a key is not a known constant or a value is invalid
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown lander constants: {', '.join(unknown)}")
        return cls(**{key: float(value) for key, value in data.items()})

    @classmethod
    def from_json(cls, path: str | Path) -> "LanderConfig":
        """Load constants from a JSON file."""
        with open(path) as f:
            return cls.from_dict(json.load(f))


DEFAULT_CONFIG = LanderConfig()
