"""Unit tests for dualkit.forward.derivative."""

import math
from fractions import Fraction

import numpy as np
import pytest

from dualkit.dual.functions import cos, exp, log, sin
from dualkit.dual.number import DualNumber
from dualkit.errors import DivisionByZero, DomainError, UnsupportedOperation
from dualkit.forward.derivative import derivative, value_and_derivative
from dualkit.utils.sandbox import heron


def test_identity_has_derivative_one():
    """d/dx x = 1."""
    assert derivative(lambda x: x, 3.0) == 1.0


def test_affine_function():
    """d/dx (a x + b) = a."""
    assert derivative(lambda x: 4.5 * x - 2.0, -1.3) == pytest.approx(4.5)


def test_polynomial_stays_integer():
    """Integer inputs give exact integer derivatives for polynomials."""
    result = derivative(lambda x: 3 * x**2 + 4 * x + 5, 2)
    assert result == 16
    assert isinstance(result, int)


def test_product_rule():
    """d/dx x sin(x) = sin(x) + x cos(x)."""
    a = 0.8
    expected = math.sin(a) + a * math.cos(a)
    assert derivative(lambda x: x * sin(x), a) == pytest.approx(expected, rel=1e-14)


def test_chain_rule():
    """d/dx exp(sin(x)) = exp(sin(x)) cos(x)."""
    a = 1.3
    expected = math.exp(math.sin(a)) * math.cos(a)
    assert derivative(lambda x: exp(sin(x)), a) == pytest.approx(expected, rel=1e-14)


def test_log_exp_sin_matches_closed_form():
    """d/dx log(x^2 + exp(sin x)) at x = 1."""
    a = 1.0
    s = math.exp(math.sin(a))
    expected = (2 * a + s * math.cos(a)) / (a * a + s)
    value, slope = value_and_derivative(lambda x: log(x**2 + exp(sin(x))), a)
    assert value == pytest.approx(math.log(a * a + s), rel=1e-14)
    assert slope == pytest.approx(expected, rel=1e-14)


def test_derivative_without_point_returns_function():
    """derivative(f) is the function x -> f'(x)."""
    df = derivative(lambda x: x**3)
    assert df(2.0) == pytest.approx(12.0)
    assert df(-1.0) == pytest.approx(3.0)


def test_constant_function_has_zero_derivative():
    """A function that ignores its input has derivative zero."""
    value, slope = value_and_derivative(lambda x: 5.0, 2.0)
    assert value == 5.0
    assert slope == 0.0


def test_heron_iteration_derivative():
    """Differentiating through ten Heron steps gives 1 / (2 sqrt(x))."""
    value, slope = value_and_derivative(heron, 100.0)
    assert value == pytest.approx(10.0, rel=1e-12)
    assert slope == pytest.approx(0.05, rel=1e-10)


def test_exact_rational_derivative():
    """Fraction inputs give exact Fraction derivatives."""
    result = derivative(lambda x: 1 / (1 + x**2), Fraction(1, 2))
    assert result == Fraction(-16, 25)


def test_difference_quotients_converge_to_dual_derivative():
    """Forward differences approach the exact derivative as the step shrinks."""
    f = lambda x: exp(sin(x))  # noqa: E731
    a = 0.4
    exact = derivative(f, a)
    errors = []
    for h in (1e-1, 1e-2, 1e-3, 1e-4):
        approx = (f(a + h) - f(a)) / h
        errors.append(abs(approx - exact))
    assert all(later < earlier for earlier, later in zip(errors, errors[1:]))
    assert errors[-1] < 1e-3


def test_curve_output_differentiates_componentwise():
    """A function returning an array gives an array of derivatives."""
    def curve(t):
        out = np.empty(2, dtype=object)
        out[0] = cos(t)
        out[1] = sin(t)
        return out

    value, slope = value_and_derivative(curve, 0.0)
    np.testing.assert_allclose(value, [1.0, 0.0])
    np.testing.assert_allclose(slope, [0.0, 1.0], atol=1e-15)


@pytest.mark.parametrize("container", [list, tuple])
def test_list_and_tuple_curves_differentiate_componentwise(container):
    """A curve returned as a list or tuple gives an array of derivatives."""
    def curve(t):
        return container([cos(t), sin(t), 2.0])

    value, slope = value_and_derivative(curve, 0.0)
    assert isinstance(slope, np.ndarray)
    np.testing.assert_allclose(value, [1.0, 0.0, 2.0])
    np.testing.assert_allclose(slope, [0.0, 1.0, 0.0], atol=1e-15)
    np.testing.assert_allclose(derivative(curve, 0.0), [0.0, 1.0, 0.0], atol=1e-15)


def test_vector_point_is_rejected():
    """Scalar derivatives need a scalar point."""
    with pytest.raises(TypeError):
        derivative(lambda x: x, [1.0, 2.0])
    with pytest.raises(TypeError):
        derivative(lambda x: x, DualNumber(1.0, 1.0))


@pytest.mark.parametrize(
    "function, x0, error",
    [
        (lambda x: log(x), -1.0, DomainError),
        (lambda x: 1 / x, 0.0, DivisionByZero),
        (lambda x: math.sin(x), 1.0, UnsupportedOperation),
    ],
)
def test_errors_propagate(function, x0, error):
    """Domain, division and unsupported-operation errors reach the caller."""
    with pytest.raises(error):
        derivative(function, x0)
