"""Exceptions raised by the lander simulation."""


class PreconditionError(ValueError):
    """A physical precondition of the dynamics was violated.

    Raised when the body sits at (or numerically near) the planet centre or the
    effective mass collapses to zero. Both would produce non-finite
    accelerations, so the step is aborted instead.
    """


class SimulationEndedError(RuntimeError):
    """Raised when stepping a simulation that has already touched down."""
