"""Exception taxonomy for the downtime-cost simulator.

Every error surfaces synchronously to the caller.  The engine never retries
and never hands back a partial result: a run either completes or raises one
of these.
"""


class SimulationError(Exception):
    """Base class for all simulator errors."""
    pass


class InvalidInputError(SimulationError):
    """Raised for negative downtime, malformed parameters or unknown sweep keys."""
    pass


class InvalidConfigurationError(SimulationError):
    """Raised when a ``SimulationConfig`` cannot drive a run (e.g. iterations <= 0)."""
    pass


class EmptyDatasetError(SimulationError):
    """Raised when statistics are requested over zero trials."""
    pass


class NotFoundError(SimulationError):
    """Raised when the equipment collaborator has no record for an id."""
    pass


class SimulationTimeoutError(SimulationError):
    """Raised when a run exceeds its configured wall-clock budget."""
    pass
