"""
Exception types raised by minituna.
"""


class MinitunaError(Exception):
    """Base class for all minituna errors."""
    pass


class InvalidDistributionError(MinitunaError, ValueError):
    """Raised when a distribution is constructed with malformed bounds or choices."""
    pass


class TrialNotFoundError(MinitunaError, KeyError):
    """Raised when a trial number does not exist in the storage."""
    pass


class TrialFinishedError(MinitunaError, RuntimeError):
    """Raised when a finished (completed or failed) trial is mutated."""
    pass


class InvalidTransitionError(MinitunaError, RuntimeError):
    """Raised on an illegal trial state transition."""
    pass


class NoCompletedTrialsError(MinitunaError, ValueError):
    """Raised when the best trial is requested but no trial has completed."""
    pass
