from abc import ABC, abstractmethod
from typing import List

from ..core.trial import FrozenTrial, TrialState
from ..distributions import Distribution
from ..exceptions import NoCompletedTrialsError


class BaseStorage(ABC):
    """
    Abstract base class for storage backends.

    A storage is the single source of truth for trial state. Trials are
    identified by a number assigned in creation order starting at 0; numbers
    are never reused. Every mutation goes through the storage, which rejects
    changes to finished trials.
    """

    @abstractmethod
    def create_new_trial(self) -> int:
        """
        Creates a new trial in the RUNNING state.

        Returns:
            The number of the newly created trial.
        """
        pass

    @abstractmethod
    def get_trial(self, trial_id: int) -> FrozenTrial:
        """
        Retrieves a snapshot of a trial.

        Raises:
            TrialNotFoundError: If no trial with the given number exists.
        """
        pass

    @abstractmethod
    def get_all_trials(self) -> List[FrozenTrial]:
        """Returns snapshots of all trials, ordered by trial number."""
        pass

    @abstractmethod
    def set_trial_value(self, trial_id: int, value: float) -> None:
        """
        Sets the objective value of a running trial.

        Raises:
            TrialFinishedError: If the trial is already finished.
        """
        pass

    @abstractmethod
    def set_trial_state(self, trial_id: int, state: TrialState) -> None:
        """
        Moves a running trial into a terminal state.

        Raises:
            TrialFinishedError: If the trial is already finished.
            InvalidTransitionError: If the transition is not allowed.
        """
        pass

    @abstractmethod
    def set_trial_param(
        self, trial_id: int, name: str, distribution: Distribution, internal_value: float
    ) -> None:
        """
        Records a sampled parameter on a running trial. An existing entry with
        the same name is overwritten.

        Raises:
            TrialFinishedError: If the trial is already finished.
            ValueError: If the value lies outside the distribution.
        """
        pass

    @abstractmethod
    def set_trial_fail_reason(self, trial_id: int, reason: str) -> None:
        """
        Attaches a failure description to a running trial.

        Raises:
            TrialFinishedError: If the trial is already finished.
        """
        pass

    def get_n_trials(self) -> int:
        return len(self.get_all_trials())

    def get_best_trial(self, direction: str = "minimize") -> FrozenTrial:
        """
        Returns the best completed trial. Ties go to the lowest trial number.

        Raises:
            NoCompletedTrialsError: If no trial has completed.
        """
        completed = [t for t in self.get_all_trials() if t.state == TrialState.COMPLETE]
        if not completed:
            raise NoCompletedTrialsError("No trials are completed yet.")
        if direction == "maximize":
            return min(completed, key=lambda t: (-t.value, t.number))
        return min(completed, key=lambda t: (t.value, t.number))
