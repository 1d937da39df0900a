import copy
import datetime
import threading
from typing import List

from .._logging import get_logger
from ..core.trial import FrozenTrial, TrialState
from ..distributions import Distribution
from ..exceptions import InvalidTransitionError, TrialFinishedError, TrialNotFoundError
from .base import BaseStorage

logger = get_logger(__name__)


class InMemoryStorage(BaseStorage):
    """
    Storage that keeps all trials in a list indexed by trial number.

    Nothing is persisted; the trials live as long as the storage object. A
    reentrant lock serialises number assignment and mutation so the storage may
    be shared between threads.
    """

    def __init__(self):
        self._trials: List[FrozenTrial] = []
        self._lock = threading.RLock()

    def create_new_trial(self) -> int:
        with self._lock:
            trial_id = len(self._trials)
            self._trials.append(
                FrozenTrial(
                    number=trial_id,
                    state=TrialState.RUNNING,
                    datetime_start=datetime.datetime.now(),
                )
            )
            return trial_id

    def get_trial(self, trial_id: int) -> FrozenTrial:
        with self._lock:
            return copy.deepcopy(self._get_record(trial_id))

    def get_all_trials(self) -> List[FrozenTrial]:
        with self._lock:
            return copy.deepcopy(self._trials)

    def get_n_trials(self) -> int:
        with self._lock:
            return len(self._trials)

    def set_trial_value(self, trial_id: int, value: float) -> None:
        with self._lock:
            trial = self._get_updatable_record(trial_id)
            trial.value = float(value)

    def set_trial_state(self, trial_id: int, state: TrialState) -> None:
        with self._lock:
            trial = self._get_updatable_record(trial_id)
            if state == TrialState.RUNNING:
                raise InvalidTransitionError(f"Trial {trial_id} is already running.")
            if state == TrialState.COMPLETE and trial.value is None:
                raise InvalidTransitionError(
                    f"Trial {trial_id} cannot complete without an objective value."
                )
            if state == TrialState.FAIL:
                trial.value = None
            trial.state = state
            trial.datetime_complete = datetime.datetime.now()

    def set_trial_param(
        self, trial_id: int, name: str, distribution: Distribution, internal_value: float
    ) -> None:
        with self._lock:
            trial = self._get_updatable_record(trial_id)
            if not distribution.contains(internal_value):
                raise ValueError(
                    f"Value {internal_value!r} for parameter '{name}' is outside {distribution}."
                )
            if name in trial.internal_params:
                logger.debug("Trial %d overwrites parameter '%s'.", trial_id, name)
            trial.internal_params[name] = float(internal_value)
            trial.distributions[name] = distribution

    def set_trial_fail_reason(self, trial_id: int, reason: str) -> None:
        with self._lock:
            self._get_updatable_record(trial_id).fail_reason = reason

    def _get_record(self, trial_id: int) -> FrozenTrial:
        # Negative indices would silently address from the end of the list.
        if isinstance(trial_id, bool) or not isinstance(trial_id, int) \
                or not 0 <= trial_id < len(self._trials):
            raise TrialNotFoundError(f"No trial with number {trial_id!r}.")
        return self._trials[trial_id]

    def _get_updatable_record(self, trial_id: int) -> FrozenTrial:
        trial = self._get_record(trial_id)
        if trial.is_finished:
            raise TrialFinishedError(
                f"Trial {trial_id} has already finished with state {trial.state.name} "
                "and cannot be updated."
            )
        return trial
