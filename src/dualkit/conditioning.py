r"""Condition numbers of scalar functions and of Hilbert matrices.

The relative condition number of a differentiable function :math:`f` at
:math:`x` is

.. math::

    \kappa_f(x) = \left| \frac{x f'(x)}{f(x)} \right|,

which is evaluated here with the dual-number derivative.

Hilbert matrices :math:`(H_n)_{ij} = 1 / (i + j - 1)` are the standard example
of badly conditioned matrices. Their inverse is known exactly (it has
integer entries), so the exact condition number can be compared with the
one computed in floating point, which is itself affected by the bad
conditioning it is measuring:

    >>> from dualkit.conditioning import exact_hilbert_condition_number
    >>> exact_hilbert_condition_number(3, p=1)
    Fraction(748, 1)
"""

from __future__ import annotations

from fractions import Fraction
from typing import Any, Callable, Sequence

import numpy as np
from numpy.typing import DTypeLike
from scipy.linalg import hilbert, invhilbert

from dualkit.errors import DivisionByZero
from dualkit.forward.derivative import value_and_derivative
from dualkit.utils.validate import check_scalar_valued

__all__ = [
    "relative_condition_number",
    "hilbert_condition_number",
    "exact_hilbert_condition_number",
]


def relative_condition_number(function: Callable[[Any], Any], x0: Any) -> Any:
    """Computes ``|x0 f'(x0) / f(x0)|`` with a forward pass.

    Args:
        function: Scalar function of one real variable.
        x0: Evaluation point.

    Returns:
        The relative condition number.

    Raises:
        DivisionByZero: If ``f(x0) == 0``.
        TypeError: If ``function`` is not scalar-valued.
    """
    value, slope = value_and_derivative(function, x0)
    value = check_scalar_valued(value, "relative_condition_number")
    if value == 0:
        raise DivisionByZero(
            f"the relative condition number is undefined where f(x0) = 0 (x0 = {x0!r})."
        )
    return abs(x0 * slope) / abs(value)


def _check_order(n: int) -> int:
    if int(n) != n or n < 1:
        raise ValueError(f"n must be a positive integer; got {n!r}.")
    return int(n)


def _check_norm(p: Any) -> float:
    if p == 1 or p == np.inf:
        return p
    raise ValueError(f"p must be 1 or inf; got {p!r}.")


def hilbert_condition_number(n: int, p: Any = 1, dtype: DTypeLike = np.float64) -> float:
    """Computes the condition number of ``H_n`` in floating point.

    Args:
        n: Size of the Hilbert matrix.
        p: Norm, ``1`` or ``numpy.inf``.
        dtype: Floating-point type in which ``H_n`` is stored and inverted.

    Returns:
        ``cond_p(H_n)`` as computed by ``numpy.linalg.cond``.

    Raises:
        ValueError: If ``n`` is not a positive integer or ``p`` is unsupported.
    """
    n = _check_order(n)
    p = _check_norm(p)
    matrix = hilbert(n).astype(dtype)
    return float(np.linalg.cond(matrix, p))


def _exact_norm(rows: Sequence[Sequence[Any]], p: Any) -> Any:
    """Returns the induced 1- or inf-norm of a matrix of exact numbers."""
    if p == 1:
        return max(sum(abs(v) for v in column) for column in zip(*rows))
    return max(sum(abs(v) for v in row) for row in rows)


def exact_hilbert_condition_number(n: int, p: Any = 1) -> Fraction:
    """Computes ``||H_n||_p * ||H_n^{-1}||_p`` in exact rational arithmetic.

    Args:
        n: Size of the Hilbert matrix.
        p: Norm, ``1`` or ``numpy.inf``.

    Returns:
        The exact condition number.

    Raises:
        ValueError: If ``n`` is not a positive integer or ``p`` is unsupported.
    """
    n = _check_order(n)
    p = _check_norm(p)
    matrix = [[Fraction(1, i + j + 1) for j in range(n)] for i in range(n)]
    inverse = [[int(v) for v in row] for row in invhilbert(n, exact=True).tolist()]
    return Fraction(_exact_norm(matrix, p) * _exact_norm(inverse, p))
