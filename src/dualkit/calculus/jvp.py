"""Contains the Jacobian-vector product of a function f: R^n -> R^m."""

from collections.abc import Callable
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from dualkit.calculus.calculus_core import forward_pass
from dualkit.dual.number import derivative_of
from dualkit.utils.validate import as_point_vector, check_direction


def jacobian_vector_product(
    function: Callable[[np.ndarray], Any],
    x0: ArrayLike,
    direction: ArrayLike,
) -> Any:
    """Returns ``J(x0) v`` from a single forward pass.

    For a scalar-valued function this is the directional derivative of
    ``function`` along ``direction``.

    Args:
        function: Function of a 1D array returning a scalar or an array.
        x0: Point at which to differentiate.
        direction: Seed direction ``v``, same length as ``x0``.

    Returns:
        A scalar for scalar-valued functions, otherwise an array with the
        shape of the output.

    Raises:
        ValueError: If ``x0`` is empty or ``direction`` has the wrong length.
    """
    theta = as_point_vector(x0)
    v = check_direction(direction, theta.size)
    return derivative_of(forward_pass(function, theta, v))
