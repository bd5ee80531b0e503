"""Unit tests for the elementary functions in dualkit.dual.functions."""

import math

import numpy as np
import pytest

from dualkit.dual import functions as F
from dualkit.dual.number import DualNumber
from dualkit.errors import DivisionByZero, DomainError

X0 = 0.7


@pytest.mark.parametrize(
    "func, value, slope",
    [
        (F.sin, math.sin, math.cos),
        (F.cos, math.cos, lambda a: -math.sin(a)),
        (F.tan, math.tan, lambda a: 1 / math.cos(a) ** 2),
        (F.exp, math.exp, math.exp),
        (F.log, math.log, lambda a: 1 / a),
        (F.sqrt, math.sqrt, lambda a: 0.5 / math.sqrt(a)),
        (F.tanh, math.tanh, lambda a: 1 - math.tanh(a) ** 2),
        (F.absolute, abs, lambda a: 1.0),
        (F.square, lambda a: a * a, lambda a: 2 * a),
    ],
)
def test_function_value_and_slope(func, value, slope):
    """Each function returns (f(a), f'(a) * a') for a seeded argument."""
    y = func(DualNumber(X0, 3.0))
    assert y.value == pytest.approx(value(X0), rel=1e-12)
    assert y.derivative == pytest.approx(3.0 * slope(X0), rel=1e-12)


def test_functions_accept_plain_reals():
    """Plain reals give plain values."""
    assert F.exp(0.0) == 1.0
    assert F.sin(0) == 0.0
    assert F.square(3) == 9


def test_functions_keep_numpy_precision():
    """numpy scalars are evaluated with numpy."""
    y = F.exp(DualNumber(np.float32(1.0), np.float32(1.0)))
    assert y.value.dtype == np.float32
    assert y.derivative.dtype == np.float32


def test_functions_compose_with_chain_rule():
    """log(x^2 + exp(sin x)) differentiates in closed form."""
    a = 1.0
    y = F.log(DualNumber(a, 1.0) ** 2 + F.exp(F.sin(DualNumber(a, 1.0))))
    inner = a**2 + math.exp(math.sin(a))
    expected = (2 * a + math.exp(math.sin(a)) * math.cos(a)) / inner
    assert y.value == pytest.approx(math.log(inner))
    assert y.derivative == pytest.approx(expected)


def test_domain_errors():
    """Arguments outside the domain raise DomainError."""
    with pytest.raises(DomainError):
        F.log(DualNumber(-1.0, 1.0))
    with pytest.raises(DomainError):
        F.sqrt(DualNumber(-1.0, 1.0))
    with pytest.raises(DivisionByZero):
        F.sqrt(DualNumber(0.0, 1.0))
