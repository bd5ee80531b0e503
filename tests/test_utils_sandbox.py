"""Tests for dualkit.utils.sandbox."""

import math

import pytest

from dualkit.forward.derivative import derivative, value_and_derivative
from dualkit.utils.sandbox import generate_test_function, graph_value_and_derivative, heron


def test_heron_converges_to_sqrt():
    """Tests that ten Heron steps give sqrt(x) to machine precision."""
    assert heron(100.0) == pytest.approx(10.0, rel=1e-14)
    assert heron(2.0) == pytest.approx(math.sqrt(2.0), rel=1e-14)


def test_heron_single_step_is_initial_guess():
    """Tests that n_iter=1 returns (1 + x) / 2."""
    assert heron(9.0, n_iter=1) == 5.0


def test_heron_rejects_nonpositive_iterations():
    """Tests that n_iter must be at least 1."""
    with pytest.raises(ValueError):
        heron(4.0, n_iter=0)


def test_graph_matches_forward_pass():
    """Tests that the hand-written trace agrees with dual numbers."""
    f, _ = generate_test_function("log_exp_sin")
    for x in (-0.5, 1.0, 2.3):
        value, slope = graph_value_and_derivative(x)
        dual_value, dual_slope = value_and_derivative(f, x)
        assert value == pytest.approx(dual_value, rel=1e-14)
        assert slope == pytest.approx(dual_slope, rel=1e-14)


@pytest.mark.parametrize("name", ["sin", "exp_sin", "log_exp_sin", "heron"])
def test_generated_derivative_matches_dual_derivative(name):
    """Tests that each closed-form derivative matches the forward pass."""
    f, df = generate_test_function(name)
    x = 2.0
    assert derivative(f, x) == pytest.approx(df(x), rel=1e-10)


def test_generate_test_function_unknown_name():
    """Tests that an unknown name raises ValueError."""
    with pytest.raises(ValueError):
        generate_test_function("gamma")
