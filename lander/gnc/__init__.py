"""GNC (Guidance, Navigation, Control) module for the lander.

Example:
    >>> from lander.gnc import AutopilotController, ControllerGains
    >>>
    >>> autopilot = AutopilotController(gains=ControllerGains(kh=0.04, kp=1.0, delta=0.1))
"""

from lander.gnc.control import (
    AutopilotController,
    ControllerGains,
    stabilized_orientation,
    throttle_from_command,
)

__all__ = [
    # Control
    "AutopilotController",
    "ControllerGains",
    "throttle_from_command",
    "stabilized_orientation",
]
