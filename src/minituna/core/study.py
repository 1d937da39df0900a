import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import pandas as pd

from .._logging import get_logger
from ..config import StudyConfig
from ..distributions import (
    CategoricalChoiceType,
    CategoricalDistribution,
    Distribution,
    IntUniformDistribution,
    LogUniformDistribution,
    UniformDistribution,
    distribution_to_json,
)
from ..exceptions import TrialFinishedError
from ..samplers.base import BaseSampler
from ..samplers.random import RandomSampler
from ..storage.base import BaseStorage
from ..storage.in_memory import InMemoryStorage
from .trial import FrozenTrial, TrialOutcome, TrialState

logger = get_logger(__name__)

ObjectiveFuncType = Callable[["Trial"], Union[float, TrialOutcome]]


class Trial:
    """
    The object passed to the objective function for one trial.

    It lets the objective suggest parameter values. Each suggestion is sampled
    by the study's sampler and recorded in the study's storage. A Trial is only
    valid while the objective runs; once the trial is finished every suggestion
    raises ``TrialFinishedError``.
    """
    def __init__(self, study: "Study", trial_id: int):
        self._study = study
        self._trial_id = trial_id

    @property
    def number(self) -> int:
        return self._trial_id

    @property
    def params(self) -> Dict[str, Any]:
        """Returns the parameters suggested so far in this trial."""
        return self._study.get_storage().get_trial(self._trial_id).params

    @property
    def distributions(self) -> Dict[str, Distribution]:
        return self._study.get_storage().get_trial(self._trial_id).distributions

    def suggest_float(self, name: str, low: float, high: float, *, log: bool = False) -> float:
        """
        Suggests a float from ``[low, high)``, or from a log-uniform range if ``log``.

        Raises:
            InvalidDistributionError: If the bounds are malformed.
        """
        if log:
            return self.suggest_log_float(name, low, high)
        return self._suggest(name, UniformDistribution(low=low, high=high))

    def suggest_log_float(self, name: str, low: float, high: float) -> float:
        """Suggests a float whose logarithm is uniform over ``[log(low), log(high))``."""
        return self._suggest(name, LogUniformDistribution(low=low, high=high))

    def suggest_int(self, name: str, low: int, high: int) -> int:
        """Suggests an integer from ``[low, high]``, both ends included."""
        return self._suggest(name, IntUniformDistribution(low=low, high=high))

    def suggest_categorical(
        self, name: str, choices: Sequence[CategoricalChoiceType]
    ) -> CategoricalChoiceType:
        """Suggests one of ``choices``, each with equal probability."""
        return self._suggest(name, CategoricalDistribution(choices=tuple(choices)))

    def _suggest(self, name: str, distribution: Distribution) -> Any:
        storage = self._study.get_storage()
        trial = storage.get_trial(self._trial_id)
        if trial.is_finished:
            raise TrialFinishedError(
                f"Trial {self._trial_id} has already finished; cannot suggest '{name}'."
            )

        internal_value = self._study.sample_independent(trial, name, distribution)
        storage.set_trial_param(self._trial_id, name, distribution, internal_value)
        return distribution.to_external_repr(internal_value)

    def __repr__(self):
        return f"Trial(number={self._trial_id})"


class Study:
    """
    Runs the optimization loop and answers best-trial queries.

    A study owns one storage and one sampler for its whole lifetime. Each trial
    is evaluated to completion before the next one starts; a failing objective
    only fails its own trial.

    Args:
        storage: The storage backend. Defaults to a new ``InMemoryStorage``.
        sampler: The sampler. Defaults to a new ``RandomSampler``.
        direction: ``'minimize'`` or ``'maximize'``. Defaults to ``config.direction``,
            or ``'minimize'`` without a config.
        config: Optional settings; supplies ``n_trials`` and verbosity.
    """
    def __init__(
        self,
        storage: Optional[BaseStorage] = None,
        sampler: Optional[BaseSampler] = None,
        direction: Optional[str] = None,
        config: Optional[StudyConfig] = None,
    ):
        if direction is None:
            direction = config.direction if config is not None else "minimize"
        if direction not in ("minimize", "maximize"):
            raise ValueError(f"direction must be 'minimize' or 'maximize', got {direction!r}")
        self._storage = storage if storage is not None else InMemoryStorage()
        self._sampler = sampler if sampler is not None else RandomSampler()
        self.direction = direction
        self.config = config if config is not None else StudyConfig(direction=direction)
        self._progress_level = logging.INFO if self.config.verbose else logging.DEBUG

    @property
    def sampler(self) -> BaseSampler:
        return self._sampler

    def get_storage(self) -> BaseStorage:
        return self._storage

    def sample_independent(self, trial: FrozenTrial, name: str, distribution: Distribution) -> float:
        return self._sampler.sample_independent(self, trial, name, distribution)

    def optimize(self, objective: ObjectiveFuncType, n_trials: Optional[int] = None) -> None:
        """
        Runs ``n_trials`` trials of ``objective`` one after another.

        Args:
            objective: A callable that takes a :class:`Trial` and returns a float
                or a :class:`TrialOutcome`. Raising an exception fails the trial.
            n_trials: The number of trials. Defaults to ``config.n_trials``.
        """
        if n_trials is None:
            n_trials = self.config.n_trials
        if isinstance(n_trials, bool) or not isinstance(n_trials, int):
            raise ValueError(f"n_trials must be an integer, got {n_trials!r}")
        if n_trials < 0:
            raise ValueError(f"n_trials must be non-negative, got {n_trials}")

        logger.debug("Starting optimization with %d trials.", n_trials)
        for _ in range(n_trials):
            self._run_trial(objective)

    def _run_trial(self, objective: ObjectiveFuncType) -> int:
        trial_id = self._storage.create_new_trial()
        logger.debug("Trial %d is created.", trial_id)
        trial = Trial(self, trial_id)

        try:
            outcome = TrialOutcome.from_return_value(objective(trial))
        except Exception as e:
            outcome = TrialOutcome.failure(e)
        except BaseException as e:
            # Interrupts still leave the trial in a terminal state.
            self._finish(trial_id, TrialOutcome.failure(e))
            raise

        self._finish(trial_id, outcome)
        return trial_id

    def _finish(self, trial_id: int, outcome: TrialOutcome) -> None:
        if outcome.ok:
            self._storage.set_trial_value(trial_id, outcome.value)
            self._storage.set_trial_state(trial_id, TrialState.COMPLETE)
            logger.log(
                self._progress_level,
                "Trial %d finished with value: %s and parameters: %s.",
                trial_id, outcome.value, self._storage.get_trial(trial_id).params,
            )
            return

        if outcome.error is not None:
            reason = f"{type(outcome.error).__name__}: {outcome.error}"
        else:
            reason = f"The objective returned an invalid value: {outcome.value!r}."
        self._storage.set_trial_fail_reason(trial_id, reason)
        self._storage.set_trial_state(trial_id, TrialState.FAIL)
        logger.warning("Trial %d failed because of the following error: %s", trial_id, reason)
        if outcome.error is not None:
            logger.debug("Traceback of trial %d:", trial_id, exc_info=outcome.error)

    @property
    def trials(self) -> List[FrozenTrial]:
        """Snapshots of all trials, ordered by trial number."""
        return self._storage.get_all_trials()

    @property
    def best_trial(self) -> FrozenTrial:
        """
        The completed trial with the best value. Ties go to the earliest trial.

        Raises:
            NoCompletedTrialsError: If no trial has completed.
        """
        return self._storage.get_best_trial(self.direction)

    @property
    def best_value(self) -> float:
        return self.best_trial.value

    @property
    def best_params(self) -> Dict[str, Any]:
        return self.best_trial.params

    def trials_dataframe(self) -> pd.DataFrame:
        """
        Returns all trials as a pandas DataFrame, one row per trial.

        Each parameter gets a ``params_<name>`` column with its value and a
        ``distributions_<name>`` column with its distribution encoded as JSON.
        """
        all_trials = self._storage.get_all_trials()
        if not all_trials:
            return pd.DataFrame()

        data = []
        for trial in all_trials:
            row = {
                'number': trial.number,
                'value': trial.value,
                'state': trial.state.value,
                'datetime_start': trial.datetime_start,
                'datetime_complete': trial.datetime_complete,
                'duration': trial.duration,
                'fail_reason': trial.fail_reason,
            }
            for name, value in trial.params.items():
                row[f'params_{name}'] = value
            for name, distribution in trial.distributions.items():
                row[f'distributions_{name}'] = distribution_to_json(distribution)
            data.append(row)

        return pd.DataFrame(data)


def create_study(
    storage: Optional[BaseStorage] = None,
    sampler: Optional[BaseSampler] = None,
    direction: Optional[str] = None,
    seed: Optional[int] = None,
    config: Optional[StudyConfig] = None,
) -> Study:
    """
    Creates a new study.

    ``direction`` and ``seed`` fall back to ``config`` when given. ``seed`` is
    only used when no sampler is passed.
    """
    if config is not None:
        direction = direction if direction is not None else config.direction
        seed = seed if seed is not None else config.seed
    if direction is None:
        direction = "minimize"
    if sampler is None:
        sampler = RandomSampler(seed=seed)
    return Study(storage=storage, sampler=sampler, direction=direction, config=config)
