"""
Defines the base interface for all samplers.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..distributions import Distribution

if TYPE_CHECKING:
    from ..core.study import Study
    from ..core.trial import FrozenTrial


class BaseSampler(ABC):
    """
    Abstract base class for all samplers.

    A sampler draws a single parameter value from a distribution. The value is
    returned in the distribution's internal representation; the caller converts
    it with ``distribution.to_external_repr``.
    """

    @abstractmethod
    def sample_independent(
        self,
        study: Study,
        trial: FrozenTrial,
        name: str,
        distribution: Distribution,
    ) -> float:
        """
        Samples one parameter without regard to other parameters or trials.

        Args:
            study: The study the trial belongs to.
            trial: A snapshot of the trial being evaluated.
            name: The parameter name.
            distribution: The distribution to draw from.

        Returns:
            The sampled value in internal representation.
        """
        pass
