# minituna/__init__.py

__version__ = "0.1.0"

# Expose the core user-facing classes
from ._logging import get_verbosity, set_verbosity
from .config import StudyConfig
from .core.study import Study, Trial, create_study
from .core.trial import FrozenTrial, TrialOutcome, TrialState
from .distributions import (
    CategoricalDistribution,
    IntUniformDistribution,
    LogUniformDistribution,
    UniformDistribution,
)
from .exceptions import (
    InvalidDistributionError,
    InvalidTransitionError,
    MinitunaError,
    NoCompletedTrialsError,
    TrialFinishedError,
    TrialNotFoundError,
)
from .samplers import BaseSampler, RandomSampler
from .storage import BaseStorage, InMemoryStorage

__all__ = [
    "Study",
    "Trial",
    "create_study",
    "FrozenTrial",
    "TrialOutcome",
    "TrialState",
    "StudyConfig",
    "UniformDistribution",
    "LogUniformDistribution",
    "IntUniformDistribution",
    "CategoricalDistribution",
    "BaseSampler",
    "RandomSampler",
    "BaseStorage",
    "InMemoryStorage",
    "MinitunaError",
    "InvalidDistributionError",
    "InvalidTransitionError",
    "NoCompletedTrialsError",
    "TrialFinishedError",
    "TrialNotFoundError",
    "get_verbosity",
    "set_verbosity",
]
