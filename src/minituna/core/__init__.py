from .study import Study, Trial, create_study
from .trial import FrozenTrial, TrialOutcome, TrialState

__all__ = ["Study", "Trial", "create_study", "FrozenTrial", "TrialOutcome", "TrialState"]
