"""Numerical utilities.

Difference quotients here serve as a reference for the exact derivatives
computed with dual numbers: they carry a truncation error of order
``step`` (forward) or ``step**2`` (central) plus a rounding error of order
``eps / step``.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

__all__ = [
    "default_step",
    "forward_difference",
    "central_difference",
    "relative_error",
]


def default_step(x: float, order: int = 1) -> float:
    """Returns a step size balancing truncation and rounding error.

    Uses ``sqrt(eps)`` for forward differences and ``cbrt(eps)`` for
    central differences, scaled by ``max(1, |x|)``.

    Args:
        x: Evaluation point.
        order: Accuracy order of the difference quotient (1 or 2).

    Returns:
        The step size.
    """
    if order not in (1, 2):
        raise ValueError("order must be 1 or 2.")
    eps = np.finfo(float).eps
    base = np.sqrt(eps) if order == 1 else np.cbrt(eps)
    return float(base * max(1.0, abs(x)))


def forward_difference(
    function: Callable[[float], float],
    x: float,
    step: float | None = None,
) -> float:
    """Computes the forward difference quotient ``(f(x + h) - f(x)) / h``.

    Args:
        function: Scalar function of one variable.
        x: Evaluation point.
        step: Step size ``h``. Defaults to :func:`default_step`.

    Returns:
        The difference quotient.
    """
    h = default_step(x, 1) if step is None else float(step)
    if h == 0:
        raise ValueError("step must be non-zero.")
    return (function(x + h) - function(x)) / h


def central_difference(
    function: Callable[[float], float],
    x: float,
    step: float | None = None,
) -> float:
    """Computes the central difference quotient ``(f(x + h) - f(x - h)) / (2h)``.

    Args:
        function: Scalar function of one variable.
        x: Evaluation point.
        step: Step size ``h``. Defaults to :func:`default_step`.

    Returns:
        The difference quotient.
    """
    h = default_step(x, 2) if step is None else float(step)
    if h == 0:
        raise ValueError("step must be non-zero.")
    return (function(x + h) - function(x - h)) / (2 * h)


def relative_error(a: np.ndarray, b: np.ndarray) -> float:
    """Computes the relative error metric between a and b.

    This metric is defined as the maximum over all components of a and b of
    the absolute difference divided by the maximum of 1.0 and the absolute values of
    a and b.

    Args:
        a: First array-like input.
        b: Second array-like input.

    Returns:
        The relative error metric as a float.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    denom = np.maximum(1.0, np.maximum(np.abs(a), np.abs(b)))
    return float(np.max(np.abs(a - b) / denom))
