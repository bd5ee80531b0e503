"""Unit tests for dualkit.conditioning."""

from fractions import Fraction

import numpy as np
import pytest

from dualkit.conditioning import (
    exact_hilbert_condition_number,
    hilbert_condition_number,
    relative_condition_number,
)
from dualkit.dual.functions import exp
from dualkit.errors import DivisionByZero


@pytest.mark.parametrize("x0", [-3.0, 0.5, 2.0])
def test_relative_condition_of_exp_is_abs_x(x0):
    """kappa_exp(x) = |x|."""
    assert relative_condition_number(exp, x0) == pytest.approx(abs(x0))


def test_relative_condition_of_power():
    """kappa of x^k is |k|."""
    assert relative_condition_number(lambda x: x**5, 1.7) == pytest.approx(5.0)


def test_relative_condition_at_root_raises():
    """The relative condition number is undefined where f vanishes."""
    with pytest.raises(DivisionByZero):
        relative_condition_number(lambda x: x - 1, 1.0)


def test_exact_hilbert_condition_number_small():
    """Known exact values of the 1-norm condition number."""
    assert exact_hilbert_condition_number(1) == 1
    assert exact_hilbert_condition_number(2) == Fraction(27)
    assert exact_hilbert_condition_number(3) == Fraction(748)


def test_exact_hilbert_condition_number_inf_norm_matches_one_norm():
    """H_n is symmetric, so the 1- and inf-norm condition numbers agree."""
    assert exact_hilbert_condition_number(5, p=np.inf) == exact_hilbert_condition_number(5, p=1)


def test_float_condition_number_close_to_exact():
    """Double precision recovers the exact value for moderate n."""
    for n in (3, 6, 8):
        exact = float(exact_hilbert_condition_number(n))
        assert hilbert_condition_number(n) == pytest.approx(exact, rel=1e-4)


def test_condition_number_grows_with_n():
    """Hilbert matrices get worse conditioned as n grows."""
    values = [exact_hilbert_condition_number(n) for n in range(1, 8)]
    assert all(b > a for a, b in zip(values, values[1:]))


@pytest.mark.parametrize("n", [0, -2, 2.5])
def test_invalid_order_raises(n):
    """n must be a positive integer."""
    with pytest.raises(ValueError):
        hilbert_condition_number(n)
    with pytest.raises(ValueError):
        exact_hilbert_condition_number(n)


def test_invalid_norm_raises():
    """Only the 1- and inf-norms are supported."""
    with pytest.raises(ValueError):
        hilbert_condition_number(3, p=2)
    with pytest.raises(ValueError):
        exact_hilbert_condition_number(3, p="fro")
