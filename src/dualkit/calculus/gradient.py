"""Contains functions used to construct the gradient of scalar-valued functions."""

from collections.abc import Callable
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from dualkit.calculus.calculus_core import forward_pass, report_nonfinite, unit_direction
from dualkit.dual.number import derivative_of
from dualkit.utils.concurrency import parallel_execute, resolve_workers
from dualkit.utils.validate import as_point_vector, check_scalar_valued


def build_gradient(function: Callable[[np.ndarray], Any],
                   x0: ArrayLike,
                   n_workers: int | None = None,
                   ) -> np.ndarray:
    """Returns the gradient of a scalar-valued function.

    Runs one forward pass per coordinate, each seeding that coordinate with
    derivative 1. The cost therefore grows linearly with the dimension of
    ``x0``.

    Args:
        function: The function to be differentiated. It receives a 1D object
            array of dual numbers and must be built from operations they
            support.
        x0: The point at which the gradient is evaluated.
        n_workers: Number of threads for the forward passes. If None, the
            configured default is used (see :mod:`dualkit.utils.concurrency`).

    Returns:
        A 1D array representing the gradient.

    Raises:
        TypeError: If ``function`` does not return a scalar value.
        ValueError: If ``x0`` is empty or not 1D.
    """
    theta = as_point_vector(x0)
    tasks = [(function, theta, i) for i in range(theta.size)]
    vals = parallel_execute(_grad_component, tasks, n_workers=resolve_workers(n_workers))
    grad = np.asarray(vals)
    report_nonfinite(grad, "build_gradient")
    return grad


def _grad_component(
        function: Callable[[np.ndarray], Any],
        theta: np.ndarray,
        i: int,
) -> Any:
    """Returns one entry of the gradient for a scalar-valued function.

    Args:
        function: A function that returns a single value.
        theta: The parameter values where the derivative is evaluated.
        i: The index of the seeded coordinate.

    Returns:
        The partial derivative with respect to coordinate ``i``.
    """
    y = forward_pass(function, theta, unit_direction(theta.size, i))
    return derivative_of(check_scalar_valued(y, "build_gradient"))
