"""Core utilities shared by the multivariate forward-mode builders.

A forward pass over ``R^n`` seeds every coordinate of the expansion point
with one component of a direction vector ``v``. The derivative part of the
output is then the Jacobian-vector product ``J(x0) v``. Gradients and
Jacobians repeat this pass once per unit vector ``e_i``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Sequence

import numpy as np

from dualkit.dual.number import DualNumber
from dualkit.logger import dualkit_logger
from dualkit.utils.types import ObjectArray

__all__ = [
    "seed_vector",
    "unit_direction",
    "forward_pass",
    "as_output",
    "report_nonfinite",
]


def seed_vector(theta: np.ndarray, direction: Sequence[Any]) -> ObjectArray:
    """Builds the dual input vector of a forward pass.

    Args:
        theta: 1D expansion point.
        direction: Seed direction, one entry per coordinate.

    Returns:
        Object array of DualNumbers ``(theta[i], direction[i])``.
    """
    x = np.empty(theta.size, dtype=object)
    for i, (t, v) in enumerate(zip(theta, direction)):
        x[i] = DualNumber(t, v)
    return x


def unit_direction(size: int, i: int) -> list[int]:
    """Returns the ``i``-th unit vector of length ``size`` as a list of ints.

    Integer entries adopt the numeric type of the expansion point when
    seeded, so exact inputs stay exact.
    """
    return [1 if j == i else 0 for j in range(size)]


def as_output(y: Any) -> Any:
    """Converts list or tuple outputs to object arrays; other outputs pass through."""
    if isinstance(y, (list, tuple)):
        return np.asarray(y, dtype=object)
    return y


def forward_pass(
    function: Callable[[np.ndarray], Any],
    theta: np.ndarray,
    direction: Sequence[Any],
) -> Any:
    """Evaluates ``function`` on the point ``theta`` seeded with ``direction``.

    Args:
        function: Function of a 1D array.
        theta: 1D expansion point.
        direction: Seed direction.

    Returns:
        The (dual) output of the function.
    """
    return as_output(function(seed_vector(theta, direction)))


def report_nonfinite(values: np.ndarray, where: str) -> None:
    """Logs a warning if a floating-point result contains NaN or inf.

    Args:
        values: Derivative values.
        where: Name of the calling routine.
    """
    if values.dtype.kind == "f" and not np.isfinite(values).all():
        dualkit_logger.warning("Non-finite values encountered in %s.", where)
