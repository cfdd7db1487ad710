"""Body state representation for the lander simulation.

The state vector contains:
- Position (3): [x, y, z] in the planet-centred frame [m]
- Velocity (3): [vx, vy, vz] in the planet-centred frame [m/s]
- Orientation (3): xyz Euler angles [degrees], consumed by the thrust transform
- Fuel (1): fraction of a full tank remaining [0, 1]

Coordinate frames:
- Planet-centred: origin at the planet centre, Z along the rotation axis
- Body: Z axis along the engine thrust line (out of the lander's top)

Euler convention:
- xyz angles (a, b, c) build R = Rx(a) @ Ry(b) @ Rz(c)
- R transforms body-frame vectors into the planet-centred frame
"""

from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

# =============================================================================
# Orientation Utilities
# =============================================================================


@beartype
def euler_xyz_to_dcm(angles_deg: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert xyz Euler angles to a body-to-world direction cosine matrix.

    Args:
        angles_deg: Euler angles [a, b, c] about X, Y, Z [degrees]

    Returns:
        3x3 DCM that transforms body vectors into the planet-centred frame
    """
    a, b, c = np.radians(angles_deg)
    ca, sa = np.cos(a), np.sin(a)
    cb, sb = np.cos(b), np.sin(b)
    cc, sc = np.cos(c), np.sin(c)

    rx = np.array([
        [1.0, 0.0, 0.0],
        [0.0, ca, -sa],
        [0.0, sa, ca],
    ])
    ry = np.array([
        [cb, 0.0, sb],
        [0.0, 1.0, 0.0],
        [-sb, 0.0, cb],
    ])
    rz = np.array([
        [cc, -sc, 0.0],
        [sc, cc, 0.0],
        [0.0, 0.0, 1.0],
    ])
    return rx @ ry @ rz


@beartype
def body_axis_to_euler_xyz(axis: NDArray[np.float64]) -> NDArray[np.float64]:
    """Euler angles that point the body +Z axis along a world direction.

    The roll about the body Z axis is left at zero.

    Args:
        axis: Desired direction of body +Z in the planet-centred frame

    Returns:
        Euler angles [a, b, 0] [degrees]
    """
    norm = np.linalg.norm(axis)
    if norm < 1e-12:
        raise ValueError("Cannot align body axis with a zero vector")
    u = axis / norm

    b = np.arcsin(np.clip(u[0], -1.0, 1.0))
    a = np.arctan2(-u[1], u[2])
    return np.degrees(np.array([a, b, 0.0]))


# =============================================================================
# Parachute Status
# =============================================================================


class ParachuteStatus(Enum):
    """Parachute deployment state."""

    NOT_DEPLOYED = auto()
    DEPLOYED = auto()
    LOST = auto()  # Torn away by excessive drag, cannot be redeployed


# =============================================================================
# Body State
# =============================================================================


@beartype
@dataclass
class BodyState:
    """Translational state of the lander.

    Attributes:
        position: [x, y, z] position in the planet-centred frame [m]
        velocity: [vx, vy, vz] velocity in the planet-centred frame [m/s]
        orientation: xyz Euler angles [degrees]
        fuel: fraction of fuel remaining [0, 1]
    """
    position: NDArray[np.float64]
    velocity: NDArray[np.float64]
    orientation: NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))
    fuel: float = 1.0

    def __post_init__(self) -> None:
        """Validate shapes."""
        self.position = np.asarray(self.position, dtype=np.float64)
        self.velocity = np.asarray(self.velocity, dtype=np.float64)
        self.orientation = np.asarray(self.orientation, dtype=np.float64)

        if self.position.shape != (3,):
            raise ValueError(f"Position must be shape (3,), got {self.position.shape}")
        if self.velocity.shape != (3,):
            raise ValueError(f"Velocity must be shape (3,), got {self.velocity.shape}")
        if self.orientation.shape != (3,):
            raise ValueError(f"Orientation must be shape (3,), got {self.orientation.shape}")

    def copy(self) -> "BodyState":
        """Create a copy of this state."""
        return BodyState(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            orientation=self.orientation.copy(),
            fuel=self.fuel,
        )

    @property
    def radius(self) -> float:
        """Distance from the planet centre [m]."""
        return float(np.linalg.norm(self.position))

    def altitude(self, planet_radius: float) -> float:
        """Height above the planet surface [m]."""
        return self.radius - planet_radius

    @property
    def radial_unit(self) -> NDArray[np.float64]:
        """Outward unit vector along the position."""
        r = self.radius
        if r == 0.0:
            return np.zeros(3)
        return self.position / r

    @property
    def radial_velocity(self) -> float:
        """Velocity component along the outward radial (positive = climbing) [m/s]."""
        return float(np.dot(self.velocity, self.radial_unit))

    @property
    def speed(self) -> float:
        """Speed magnitude [m/s]."""
        return float(np.linalg.norm(self.velocity))

    @property
    def dcm_body_to_world(self) -> NDArray[np.float64]:
        """DCM transforming body vectors into the planet-centred frame."""
        return euler_xyz_to_dcm(self.orientation)

    def to_array(self) -> NDArray[np.float64]:
        """Flatten to [position, velocity, orientation, fuel]."""
        return np.concatenate([
            self.position,
            self.velocity,
            self.orientation,
            [self.fuel],
        ])

    @classmethod
    def from_array(cls, arr: NDArray[np.float64]) -> "BodyState":
        """Create state from a flat array produced by ``to_array``."""
        return cls(
            position=arr[0:3].copy(),
            velocity=arr[3:6].copy(),
            orientation=arr[6:9].copy(),
            fuel=float(arr[9]),
        )
