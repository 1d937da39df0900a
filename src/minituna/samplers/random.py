"""
A simple random sampling strategy.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

from ..distributions import (
    CategoricalDistribution,
    Distribution,
    IntUniformDistribution,
    LogUniformDistribution,
    UniformDistribution,
)
from .base import BaseSampler

if TYPE_CHECKING:
    from ..core.study import Study
    from ..core.trial import FrozenTrial


class RandomSampler(BaseSampler):
    """
    A sampler that draws every parameter independently and uniformly at random.

    It keeps no memory of previous trials; its only state is the random number
    generator. Two samplers built with the same ``seed`` produce the same
    sequence of values. Without a seed the sequence is not reproducible.

    Args:
        seed: Seed for the underlying ``numpy.random.RandomState``.
    """
    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.RandomState(seed)

    def sample_independent(
        self,
        study: Study,
        trial: FrozenTrial,
        name: str,
        distribution: Distribution,
    ) -> float:
        return self.sample(distribution)

    def sample(self, distribution: Distribution) -> float:
        """Draws one value from ``distribution`` in internal representation."""
        if isinstance(distribution, UniformDistribution):
            if distribution.single():
                return distribution.low
            low, high = distribution.low, distribution.high
            if np.isfinite(high - low):
                value = float(self._rng.uniform(low, high))
            else:
                # The width overflows; draw on half scale and double back.
                u = self._rng.random_sample()
                value = float(2.0 * (low / 2.0 + (high / 2.0 - low / 2.0) * u))
            # The half-open range excludes ``high`` even under float rounding.
            if value >= distribution.high:
                value = float(np.nextafter(distribution.high, distribution.low))
            return value

        if isinstance(distribution, LogUniformDistribution):
            if distribution.single():
                return distribution.low
            log_low = np.log(distribution.low)
            log_high = np.log(distribution.high)
            value = float(np.exp(self._rng.uniform(log_low, log_high)))
            # exp(log(x)) can drift outside the bounds by one ulp.
            return min(max(value, distribution.low), distribution.high)

        if isinstance(distribution, IntUniformDistribution):
            # randint excludes its upper bound.
            return float(self._rng.randint(distribution.low, distribution.high + 1))

        if isinstance(distribution, CategoricalDistribution):
            return float(self._rng.randint(0, len(distribution.choices)))

        raise TypeError(f"Unknown distribution type: {type(distribution).__name__}")
