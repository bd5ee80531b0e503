"""Validation utilities for DualKit."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from dualkit.dual.number import DualNumber
from dualkit.dual.promotion import is_real

__all__ = [
    "check_scalar_point",
    "as_point_vector",
    "check_direction",
    "check_scalar_valued",
]


def check_scalar_point(x0: Any) -> Any:
    """Checks that a derivative is requested at a real scalar.

    Args:
        x0: Point at which to differentiate.

    Returns:
        ``x0`` unchanged.

    Raises:
        TypeError: If ``x0`` is not a real scalar.
    """
    if not is_real(x0):
        raise TypeError(
            f"x0 must be a real scalar; got {type(x0).__name__}. "
            "Use build_gradient/build_jacobian for vector inputs."
        )
    return x0


def as_point_vector(x0: ArrayLike) -> np.ndarray:
    """Converts an expansion point to a non-empty 1D array.

    Numeric input keeps its dtype; integer and boolean input is converted
    to float. Object arrays (e.g. of ``Fraction``) are kept as they are.

    Args:
        x0: Array-like point.

    Returns:
        A 1D array.

    Raises:
        ValueError: If ``x0`` is empty or has more than one dimension.
        TypeError: If ``x0`` contains non-real entries.
    """
    theta = np.asarray(x0)
    if theta.ndim > 1:
        raise ValueError(f"x0 must be 1D; got shape {theta.shape}.")
    theta = theta.reshape(-1)
    if theta.size == 0:
        raise ValueError("x0 must be a non-empty 1D array.")
    if theta.dtype.kind in "biu":
        theta = theta.astype(float)
    elif theta.dtype.kind == "O":
        bad = [v for v in theta if not is_real(v)]
        if bad:
            raise TypeError(f"x0 must contain real scalars; got {type(bad[0]).__name__}.")
    elif theta.dtype.kind != "f":
        raise TypeError(f"x0 must contain real scalars; got dtype {theta.dtype}.")
    return theta


def check_direction(direction: ArrayLike, size: int) -> np.ndarray:
    """Checks a seed direction against the size of the expansion point.

    Args:
        direction: Array-like seed direction.
        size: Expected length.

    Returns:
        The direction as a 1D array.

    Raises:
        ValueError: If the length does not match ``size``.
    """
    v = np.asarray(direction).reshape(-1)
    if v.size != size:
        raise ValueError(
            f"direction must have the same length as x0 ({size}); got {v.size}."
        )
    return v


def check_scalar_valued(output: Any, where: str) -> Any:
    """Checks that a forward pass produced a scalar.

    Args:
        output: Result of the forward pass.
        where: Name of the calling routine, used in the error message.

    Returns:
        The scalar output (a 0D or single-element array is unwrapped).

    Raises:
        TypeError: If the output is not scalar.
    """
    if isinstance(output, DualNumber) or is_real(output):
        return output
    arr = np.asarray(output, dtype=object)
    if arr.size != 1:
        raise TypeError(
            f"{where}() expects a scalar-valued function; got output of shape {arr.shape}."
        )
    return arr.reshape(-1)[0]
