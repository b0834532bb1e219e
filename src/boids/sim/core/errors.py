from __future__ import annotations


class BoidsError(Exception):
    """Base class for every error raised by the simulation core."""


class ConfigurationError(BoidsError, ValueError):
    """Invalid parameters or configuration.

    Not recoverable for the current session: the boundary layer reports the
    message and stops instead of continuing with bad state.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotEnoughAgents(BoidsError, RuntimeError):
    """A steering rule was evaluated against fewer than two boids."""


class InsufficientData(BoidsError, RuntimeError):
    """Too few entries to compute a statistic or draw a histogram."""
