"""Control algorithms for the lander.

Provides the descent-rate throttle autopilot and attitude stabilization.
"""

from lander.gnc.control.attitude import (
    stabilized_orientation,
)
from lander.gnc.control.autopilot import (
    AutopilotController,
    ControllerGains,
    throttle_from_command,
)

__all__ = [
    "AutopilotController",
    "ControllerGains",
    "throttle_from_command",
    "stabilized_orientation",
]
