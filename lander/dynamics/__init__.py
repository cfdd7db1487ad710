"""Dynamics module for the lander's translational motion.

Provides the body state, the force model and the fixed-step integrators.

Example:
    >>> from lander.dynamics import BodyState, ForceModel, create_integrator
    >>> import numpy as np
    >>>
    >>> state = BodyState(position=np.array([0.0, -3396000.0, 0.0]),
    ...                   velocity=np.zeros(3))
    >>> model = ForceModel()
    >>> accel = model.compute_acceleration(state, ParachuteStatus.NOT_DEPLOYED,
    ...                                    0.01, np.zeros(3))
    >>> state = create_integrator(IntegrationScheme.VERLET).step(state, accel, 0.1)
"""

from lander.dynamics.forces import (
    ForceModel,
)
from lander.dynamics.integrators import (
    EulerIntegrator,
    IntegrationScheme,
    Integrator,
    IntegratorMemory,
    IntegratorPhase,
    VerletIntegrator,
    create_integrator,
)
from lander.dynamics.state import (
    BodyState,
    ParachuteStatus,
    body_axis_to_euler_xyz,
    euler_xyz_to_dcm,
)

__all__ = [
    # State
    "BodyState",
    "ParachuteStatus",
    # Orientation utilities
    "euler_xyz_to_dcm",
    "body_axis_to_euler_xyz",
    # Forces
    "ForceModel",
    # Integration
    "Integrator",
    "IntegrationScheme",
    "IntegratorMemory",
    "IntegratorPhase",
    "EulerIntegrator",
    "VerletIntegrator",
    "create_integrator",
]
