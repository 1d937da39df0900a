import datetime
import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from ..distributions import Distribution


class TrialState(Enum):
    """
    Represents the state of a trial.

    RUNNING is the initial state. COMPLETE and FAIL are terminal.
    """
    RUNNING = "RUNNING"
    COMPLETE = "COMPLETE"
    FAIL = "FAIL"

    def is_finished(self) -> bool:
        return self != TrialState.RUNNING


@dataclass
class FrozenTrial:
    """
    A snapshot of a single trial in an optimization study.

    Instances handed out by a storage are copies; the storage is the only
    place a trial record is ever updated.

    Attributes:
        number: The unique, sequential identifier of the trial, starting at 0.
        state: The current state of the trial.
        value: The objective value. Only defined once the trial is COMPLETE.
        internal_params: Sampled values in their internal (float) representation.
        distributions: The distribution each parameter was sampled from.
        datetime_start: The time when the trial was created.
        datetime_complete: The time when the trial finished.
        fail_reason: A description of the error that failed the trial, if any.
    """
    number: int
    state: TrialState = TrialState.RUNNING
    value: Optional[float] = None
    internal_params: Dict[str, float] = field(default_factory=dict)
    distributions: Dict[str, Distribution] = field(default_factory=dict)
    datetime_start: Optional[datetime.datetime] = None
    datetime_complete: Optional[datetime.datetime] = None
    fail_reason: Optional[str] = None

    @property
    def params(self) -> Dict[str, Any]:
        """Parameter values as the objective function saw them."""
        return {
            name: self.distributions[name].to_external_repr(internal)
            for name, internal in self.internal_params.items()
        }

    @property
    def is_finished(self) -> bool:
        return self.state.is_finished()

    @property
    def duration(self) -> Optional[datetime.timedelta]:
        if self.datetime_start is None or self.datetime_complete is None:
            return None
        return self.datetime_complete - self.datetime_start


@dataclass(frozen=True)
class TrialOutcome:
    """
    The result of evaluating an objective: either a value or the error that failed it.

    Objective functions may return one explicitly; plain return values and raised
    exceptions are converted with :meth:`from_return_value` and :meth:`failure`.
    """
    value: Optional[float] = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, value: float) -> "TrialOutcome":
        return cls(value=float(value))

    @classmethod
    def failure(cls, error: BaseException) -> "TrialOutcome":
        return cls(error=error)

    @classmethod
    def from_return_value(cls, returned: Any) -> "TrialOutcome":
        if isinstance(returned, TrialOutcome):
            return returned
        if isinstance(returned, bool) or not isinstance(returned, numbers.Real):
            return cls.failure(
                TypeError(f"The objective returned {returned!r}, which is not a number.")
            )
        value = float(returned)
        if math.isnan(value):
            return cls.failure(ValueError("The objective returned NaN."))
        return cls.success(value)

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None and not math.isnan(self.value)
