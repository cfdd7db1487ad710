"""Environment models for the lander simulation.

Example:
    >>> from lander.environment import MarsAtmosphere
    >>>
    >>> atm = MarsAtmosphere()
    >>> rho = atm.density(altitude=10000)  # kg/m^3
"""

from lander.environment.atmosphere import (
    MarsAtmosphere,
    atmospheric_density,
)

__all__ = [
    "MarsAtmosphere",
    "atmospheric_density",
]
