"""Exponential Mars atmosphere model.

Density falls off exponentially with a single scale height and vanishes
above the exosphere:

    rho(h) = RHO_SURFACE * exp(-h / SCALE_HEIGHT)   for h <= exosphere
    rho(h) = 0                                      for h >  exosphere

Example:
    >>> from lander.environment import MarsAtmosphere
    >>>
    >>> atm = MarsAtmosphere()
    >>> rho = atm.density(10000)  # Density at 10 km
    >>> rho = atm.at_position(state.position)
"""

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from lander.config import DEFAULT_CONFIG, LanderConfig

# =============================================================================
# Constants
# =============================================================================

RHO_SURFACE = 0.017  # Surface density [kg/m^3]
SCALE_HEIGHT = 11000.0  # Density scale height [m]


# =============================================================================
# Atmosphere Model
# =============================================================================


@beartype
class MarsAtmosphere:
    """Exponential atmosphere truncated at the exosphere.

    Example:
        >>> atm = MarsAtmosphere()
        >>> atm.density(0.0)
        0.017
        >>> atm.density(250000.0)
        0.0
    """

    def __init__(
        self,
        config: LanderConfig | None = None,
        surface_density: float = RHO_SURFACE,
        scale_height: float = SCALE_HEIGHT,
    ) -> None:
        """Initialize atmosphere model.

        Args:
            config: Planet constants (radius and exosphere altitude)
            surface_density: Density at zero altitude [kg/m^3]
            scale_height: Exponential scale height [m]
        """
        if scale_height <= 0:
            raise ValueError(f"Scale height must be positive, got {scale_height}")
        self.config = config or DEFAULT_CONFIG
        self.surface_density = surface_density
        self.scale_height = scale_height

    def density(self, altitude: float) -> float:
        """Get density at altitude.

        Args:
            altitude: Height above the surface [m]

        Returns:
            Density [kg/m^3]
        """
        if altitude > self.config.exosphere:
            return 0.0
        return float(self.surface_density * np.exp(-altitude / self.scale_height))

    def at_position(self, position: NDArray[np.float64]) -> float:
        """Get density at a planet-centred position [kg/m^3]."""
        altitude = float(np.linalg.norm(position)) - self.config.planet_radius
        return self.density(altitude)

    def dynamic_pressure(self, altitude: float, speed: float) -> float:
        """Get dynamic pressure (q = 0.5 * rho * v^2) [Pa]."""
        return 0.5 * self.density(altitude) * speed ** 2

    def profile(
        self,
        altitudes: NDArray[np.float64] | list[float],
    ) -> dict[str, NDArray[np.float64]]:
        """Get density over a range of altitudes.

        Args:
            altitudes: Array of altitudes [m]

        Returns:
            Dictionary with altitude and density arrays
        """
        altitudes = np.asarray(altitudes, dtype=np.float64)

        return {
            "altitude": altitudes,
            "density": np.array([self.density(float(h)) for h in altitudes]),
        }


# =============================================================================
# Convenience Functions
# =============================================================================


_default_atmosphere = MarsAtmosphere()


@beartype
def atmospheric_density(
    position: NDArray[np.float64],
    config: LanderConfig | None = None,
) -> float:
    """Density at a planet-centred position [kg/m^3]."""
    if config is None:
        return _default_atmosphere.at_position(position)
    return MarsAtmosphere(config).at_position(position)
