"""
Parameter distributions and the codec between user-facing and internal values.

Every distribution maps a user-facing ("external") value to a float ("internal")
representation that samplers and storage operate on:

- UniformDistribution / LogUniformDistribution: internal == external float.
  Log-uniform stores the value itself; the logarithm only appears while sampling.
- IntUniformDistribution: internal float, external int rounded into [low, high].
- CategoricalDistribution: internal index into ``choices``, external the choice.
"""
from __future__ import annotations

import json
import math
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

from .exceptions import InvalidDistributionError

CategoricalChoiceType = Union[bool, int, float, str]

# Largest magnitude at which every integer is exactly representable as a float.
_MAX_EXACT_INT = 2 ** 53


def _as_finite_float(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidDistributionError(f"{name} must be a real number, got {value!r}.")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidDistributionError(f"{name} must be finite, got {value!r}.")
    return value


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidDistributionError(f"{name} must be an integer, got {value!r}.")
    return int(value)


@dataclass(frozen=True)
class UniformDistribution:
    """A continuous range sampled uniformly from ``[low, high)``."""
    low: float
    high: float

    def __post_init__(self):
        low = _as_finite_float("low", self.low)
        high = _as_finite_float("high", self.high)
        if low > high:
            raise InvalidDistributionError(
                f"low <= high must hold, but got low={low} and high={high}."
            )
        object.__setattr__(self, "low", low)
        object.__setattr__(self, "high", high)

    def to_internal_repr(self, external_repr: Any) -> float:
        return float(external_repr)

    def to_external_repr(self, internal_repr: float) -> float:
        return float(internal_repr)

    def single(self) -> bool:
        return self.low == self.high

    def contains(self, internal_repr: float) -> bool:
        if self.single():
            return internal_repr == self.low
        return self.low <= internal_repr < self.high


@dataclass(frozen=True)
class LogUniformDistribution:
    """A positive continuous range whose logarithm is sampled uniformly."""
    low: float
    high: float

    def __post_init__(self):
        low = _as_finite_float("low", self.low)
        high = _as_finite_float("high", self.high)
        if low <= 0.0:
            raise InvalidDistributionError(
                f"low must be strictly positive for a log-uniform distribution, got {low}."
            )
        if low > high:
            raise InvalidDistributionError(
                f"low <= high must hold, but got low={low} and high={high}."
            )
        object.__setattr__(self, "low", low)
        object.__setattr__(self, "high", high)

    def to_internal_repr(self, external_repr: Any) -> float:
        return float(external_repr)

    def to_external_repr(self, internal_repr: float) -> float:
        return float(internal_repr)

    def single(self) -> bool:
        return self.low == self.high

    def contains(self, internal_repr: float) -> bool:
        return self.low <= internal_repr <= self.high


@dataclass(frozen=True)
class IntUniformDistribution:
    """
    An integer range sampled uniformly; both ``low`` and ``high`` are included.

    Values travel as floats internally, so bounds are limited to +/- 2**53.
    """
    low: int
    high: int

    def __post_init__(self):
        low = _as_int("low", self.low)
        high = _as_int("high", self.high)
        if abs(low) > _MAX_EXACT_INT or abs(high) > _MAX_EXACT_INT:
            raise InvalidDistributionError(
                f"Integer bounds must lie within [-2**53, 2**53], got low={low} and high={high}."
            )
        if low > high:
            raise InvalidDistributionError(
                f"low <= high must hold, but got low={low} and high={high}."
            )
        object.__setattr__(self, "low", low)
        object.__setattr__(self, "high", high)

    def to_internal_repr(self, external_repr: Any) -> float:
        return float(external_repr)

    def to_external_repr(self, internal_repr: float) -> int:
        value = int(round(internal_repr))
        return min(max(value, self.low), self.high)

    def single(self) -> bool:
        return self.low == self.high

    def contains(self, internal_repr: float) -> bool:
        return self.low <= internal_repr <= self.high


@dataclass(frozen=True)
class CategoricalDistribution:
    """
    A finite, ordered set of choices.

    The internal representation is the index of a choice, so the order given
    at construction time is significant and preserved exactly.
    """
    choices: Tuple[CategoricalChoiceType, ...]

    def __post_init__(self):
        choices = tuple(self.choices)
        if len(choices) == 0:
            raise InvalidDistributionError("The `choices` must contain one or more elements.")
        for choice in choices:
            if not isinstance(choice, (bool, int, float, str)):
                raise InvalidDistributionError(
                    f"Choices must be bool, int, float or str, got {choice!r} "
                    f"of type {type(choice).__name__}."
                )
        object.__setattr__(self, "choices", choices)

    def to_internal_repr(self, external_repr: Any) -> float:
        # bool is a subclass of int, so match on the exact type as well.
        for index, choice in enumerate(self.choices):
            if type(choice) is type(external_repr) and choice == external_repr:
                return float(index)
        raise ValueError(f"{external_repr!r} is not one of {list(self.choices)!r}.")

    def to_external_repr(self, internal_repr: float) -> CategoricalChoiceType:
        return self.choices[int(internal_repr)]

    def single(self) -> bool:
        return len(self.choices) == 1

    def contains(self, internal_repr: float) -> bool:
        index = int(internal_repr)
        return index == internal_repr and 0 <= index < len(self.choices)


Distribution = Union[
    UniformDistribution,
    LogUniformDistribution,
    IntUniformDistribution,
    CategoricalDistribution,
]

DISTRIBUTION_CLASSES = (
    UniformDistribution,
    LogUniformDistribution,
    IntUniformDistribution,
    CategoricalDistribution,
)


def _attributes(distribution: Distribution) -> Dict[str, Any]:
    if isinstance(distribution, CategoricalDistribution):
        return {"choices": list(distribution.choices)}
    if isinstance(distribution, DISTRIBUTION_CLASSES):
        return {"low": distribution.low, "high": distribution.high}
    raise TypeError(f"Unknown distribution type: {type(distribution).__name__}")


def distribution_to_json(distribution: Distribution) -> str:
    """Serializes a distribution to ``{"name": ..., "attributes": {...}}``."""
    return json.dumps(
        {"name": distribution.__class__.__name__, "attributes": _attributes(distribution)}
    )


def json_to_distribution(json_str: str) -> Distribution:
    loaded = json.loads(json_str)
    for cls in DISTRIBUTION_CLASSES:
        if loaded["name"] == cls.__name__:
            return cls(**loaded["attributes"])
    raise ValueError(f"Unknown distribution class: {loaded['name']}")
