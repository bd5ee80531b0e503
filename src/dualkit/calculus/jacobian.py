"""Contains functions used to construct the Jacobian of vector-valued functions.

Forward mode fills the Jacobian column by column: the pass seeded with the
``i``-th unit vector yields the partial derivatives of all outputs with
respect to coordinate ``i``.
"""

from collections.abc import Callable
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from dualkit.calculus.calculus_core import forward_pass, report_nonfinite, unit_direction
from dualkit.dual.number import derivative_of
from dualkit.utils.concurrency import parallel_execute, resolve_workers
from dualkit.utils.validate import as_point_vector


def build_jacobian(function: Callable[[np.ndarray], Any],
                   x0: ArrayLike,
                   n_workers: int | None = None,
                   ) -> np.ndarray:
    """Returns the Jacobian of a function f: R^n -> R^m.

    Args:
        function: The function to be differentiated. Array outputs are
            flattened in C order; a scalar output counts as ``m = 1``.
        x0: The point at which the Jacobian is evaluated.
        n_workers: Number of threads for the forward passes. If None, the
            configured default is used.

    Returns:
        A 2D array of shape ``(m, n)``.

    Raises:
        ValueError: If ``x0`` is empty or not 1D, or if the output size
            changes between passes.
    """
    theta = as_point_vector(x0)
    tasks = [(function, theta, i) for i in range(theta.size)]
    columns = parallel_execute(_jac_column, tasks, n_workers=resolve_workers(n_workers))
    jac = np.stack(columns, axis=1)
    report_nonfinite(jac, "build_jacobian")
    return jac


def _jac_column(
        function: Callable[[np.ndarray], Any],
        theta: np.ndarray,
        i: int,
) -> np.ndarray:
    """Returns column ``i`` of the Jacobian as a 1D array."""
    y = forward_pass(function, theta, unit_direction(theta.size, i))
    return np.asarray(derivative_of(y)).reshape(-1)
