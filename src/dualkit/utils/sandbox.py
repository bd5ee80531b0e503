"""Sandbox utilities for experimentation and testing.

The functions here are written with :mod:`dualkit.dual.functions`, so they
accept plain reals as well as dual numbers.
"""

from __future__ import annotations

from collections.abc import Callable

from dualkit.dual.functions import cos, exp, log, sin, sqrt
from dualkit.utils.types import Scalar

__all__ = [
    "heron",
    "graph_value_and_derivative",
    "generate_test_function",
]


def heron(x: Scalar, n_iter: int = 10) -> Scalar:
    """Approximates ``sqrt(x)`` with the Heron (Newton) iteration.

    Starts from ``t = (1 + x) / 2`` (one step from ``t = 1``) and applies
    ``t <- (t + x / t) / 2`` another ``n_iter - 1`` times. Passing a dual
    number differentiates straight through the loop.

    Args:
        x: Radicand (real or DualNumber).
        n_iter: Total number of Heron steps, at least 1.

    Returns:
        The approximation after ``n_iter`` steps.
    """
    if n_iter < 1:
        raise ValueError("n_iter must be at least 1.")
    t = (1 + x) / 2
    for _ in range(n_iter - 1):
        t = (t + x / t) / 2
    return t


def graph_value_and_derivative(x: float) -> tuple[float, float]:
    """Evaluates ``log(x**2 + exp(sin(x)))`` and its derivative by hand.

    This is the computational graph of the function with the chain rule
    applied node by node, i.e. what a forward pass with dual numbers does.

    Args:
        x: Evaluation point.

    Returns:
        Tuple ``(value, derivative)``.
    """
    c1 = x**2
    c1_eps = 2 * x
    c2 = sin(x)
    c2_eps = cos(x)
    c3 = exp(c2)
    c3_eps = c3 * c2_eps
    c4 = c1 + c3
    c4_eps = c1_eps + c3_eps
    c5 = log(c4)
    c5_eps = c4_eps / c4
    return c5, c5_eps


def _log_exp_sin(x):
    return log(x**2 + exp(sin(x)))


def _log_exp_sin_derivative(x):
    return (2 * x + exp(sin(x)) * cos(x)) / (x**2 + exp(sin(x)))


def generate_test_function(name: str = "sin") -> tuple[Callable, Callable]:
    """Returns ``(f, f')`` for a named test function.

    Args:
        name: One of ``"sin"``, ``"exp_sin"``, ``"log_exp_sin"``, ``"heron"``.

    Returns:
        Tuple of callables ``(f, df)``, where ``df`` is the closed-form
        derivative.

    Raises:
        ValueError: If ``name`` is unknown.
    """
    if name == "sin":
        return sin, cos
    if name == "exp_sin":
        return (lambda x: exp(sin(x))), (lambda x: exp(sin(x)) * cos(x))
    if name == "log_exp_sin":
        return _log_exp_sin, _log_exp_sin_derivative
    if name == "heron":
        return heron, (lambda x: 1 / (2 * sqrt(x)))
    raise ValueError(f"Unknown test function: {name!r}")
