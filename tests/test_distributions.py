import json

import pytest

from minituna.distributions import (
    CategoricalDistribution,
    IntUniformDistribution,
    LogUniformDistribution,
    UniformDistribution,
    distribution_to_json,
    json_to_distribution,
)
from minituna.exceptions import InvalidDistributionError


@pytest.mark.parametrize("cls", [UniformDistribution, LogUniformDistribution, IntUniformDistribution])
def test_low_greater_than_high_is_rejected(cls):
    """
    Tests that every range distribution rejects low > high at construction.
    """
    with pytest.raises(InvalidDistributionError):
        cls(low=5, high=1)


def test_invalid_distribution_error_is_a_value_error():
    with pytest.raises(ValueError):
        UniformDistribution(low=1.0, high=0.0)


@pytest.mark.parametrize("low", [0.0, -1.0])
def test_log_uniform_requires_positive_low(low):
    """
    Tests that log-uniform bounds must be strictly positive.
    """
    with pytest.raises(InvalidDistributionError):
        LogUniformDistribution(low=low, high=1.0)


@pytest.mark.parametrize("bound", [float("nan"), float("inf"), "1.0", True])
def test_uniform_rejects_non_finite_or_non_numeric_bounds(bound):
    with pytest.raises(InvalidDistributionError):
        UniformDistribution(low=bound, high=10.0)


def test_int_uniform_rejects_float_bounds():
    with pytest.raises(InvalidDistributionError):
        IntUniformDistribution(low=0.5, high=3)


def test_equal_bounds_are_allowed():
    assert UniformDistribution(low=2.0, high=2.0).single()
    assert LogUniformDistribution(low=2.0, high=2.0).single()
    assert IntUniformDistribution(low=1, high=1).single()
    assert not IntUniformDistribution(low=1, high=2).single()


def test_categorical_rejects_empty_choices():
    """
    Tests that a categorical distribution needs at least one choice.
    """
    with pytest.raises(InvalidDistributionError):
        CategoricalDistribution(choices=())


def test_categorical_rejects_unsupported_choice_types():
    with pytest.raises(InvalidDistributionError):
        CategoricalDistribution(choices=("a", None))
    with pytest.raises(InvalidDistributionError):
        CategoricalDistribution(choices=([1, 2],))


def test_categorical_preserves_choice_order():
    """
    Tests that the order of choices defines the index mapping.
    """
    dist = CategoricalDistribution(choices=["c", "a", "b"])
    assert dist.choices == ("c", "a", "b")
    assert dist.to_internal_repr("c") == 0.0
    assert dist.to_internal_repr("b") == 2.0
    assert dist.to_external_repr(1.0) == "a"


def test_categorical_distinguishes_bool_from_int():
    dist = CategoricalDistribution(choices=(1, True, 1.5, "x"))
    assert dist.to_internal_repr(True) == 1.0
    assert dist.to_internal_repr(1) == 0.0
    assert dist.to_external_repr(1.0) is True
    with pytest.raises(ValueError):
        dist.to_internal_repr("missing")


def test_int_uniform_external_repr_is_int_clamped_to_range():
    dist = IntUniformDistribution(low=1, high=5)
    assert dist.to_external_repr(3.0) == 3
    assert isinstance(dist.to_external_repr(3.0), int)
    assert dist.to_external_repr(2.6) == 3
    assert dist.to_external_repr(7.0) == 5
    assert dist.to_external_repr(-2.0) == 1


def test_log_uniform_internal_repr_is_the_value_itself():
    """
    Tests that log-uniform values are stored as-is, not as logarithms.
    """
    dist = LogUniformDistribution(low=1e-3, high=1.0)
    assert dist.to_internal_repr(0.01) == 0.01
    assert dist.to_external_repr(0.01) == 0.01


def test_contains():
    assert UniformDistribution(0.0, 1.0).contains(0.0)
    assert not UniformDistribution(0.0, 1.0).contains(1.0)
    assert IntUniformDistribution(0, 3).contains(3.0)
    assert CategoricalDistribution(("a", "b")).contains(1.0)
    assert not CategoricalDistribution(("a", "b")).contains(2.0)


def test_distribution_json_encoding():
    """
    Tests the JSON layout of a distribution and that decoding restores it.
    """
    dist = CategoricalDistribution(choices=(True, 2, 3.5, "four"))
    encoded = distribution_to_json(dist)
    assert json.loads(encoded) == {
        "name": "CategoricalDistribution",
        "attributes": {"choices": [True, 2, 3.5, "four"]},
    }
    assert json_to_distribution(encoded) == dist

    log_dist = LogUniformDistribution(low=1e-4, high=1e-1)
    assert json_to_distribution(distribution_to_json(log_dist)) == log_dist


def test_json_to_distribution_rejects_unknown_name():
    with pytest.raises(ValueError):
        json_to_distribution('{"name": "NormalDistribution", "attributes": {}}')


def test_distributions_are_immutable():
    dist = UniformDistribution(0.0, 1.0)
    with pytest.raises(AttributeError):
        dist.low = 0.5


@pytest.mark.parametrize("low, high", [(2**60, 2**60 + 3), (-(2**53) - 1, 0), (0, 2**53 + 1)])
def test_int_uniform_rejects_bounds_beyond_exact_float_range(low, high):
    """
    Tests that integer bounds must stay where neighbouring integers are distinct floats.
    """
    with pytest.raises(InvalidDistributionError):
        IntUniformDistribution(low=low, high=high)


def test_int_uniform_accepts_bounds_at_exact_float_limit():
    dist = IntUniformDistribution(low=-(2**53), high=2**53)
    assert dist.to_external_repr(float(2**53)) == 2**53
