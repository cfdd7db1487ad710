"""Three-axis attitude stabilization.

Keeps the lander's base pointing at the planet: the body +Z (thrust) axis is
aligned with the outward local vertical. Applied instantaneously, with no
rotational dynamics.

Example:
    >>> from lander.gnc.control import stabilized_orientation
    >>>
    >>> state.orientation = stabilized_orientation(state.position)
"""

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from lander.dynamics.state import body_axis_to_euler_xyz


@beartype
def stabilized_orientation(position: NDArray[np.float64]) -> NDArray[np.float64]:
    """Euler angles that point the thrust axis radially outward.

    Args:
        position: Planet-centred position [m]

    Returns:
        xyz Euler angles [degrees]
    """
    return body_axis_to_euler_xyz(position)
