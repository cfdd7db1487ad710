"""Propulsion module: engine thrust and fuel consumption.

Example:
    >>> from lander.propulsion import ThrustModel, consume_fuel
    >>>
    >>> engine = ThrustModel(dt=0.1)
    >>> thrust = engine.world_thrust(0.8, orientation, fuel)
"""

from lander.propulsion.thrust import (
    ThrustModel,
    consume_fuel,
)

__all__ = [
    "ThrustModel",
    "consume_fuel",
]
