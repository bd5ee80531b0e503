r"""Forward- vs. reverse-mode evaluation order of the chain rule.

For a composition :math:`x \mapsto f(g(h(x)))` the chain rule gives

.. math::

    (f \circ g \circ h)'(x) = f'(g(h(x))) \cdot g'(h(x)) \cdot h'(x).

Forward mode multiplies the factors from right to left, in the same order
as the values are computed. Reverse mode first computes and caches the
intermediate values :math:`h(x)` and :math:`g(h(x))` and then multiplies
from left to right. Both orders give the same result; they differ in cost.
For :math:`f: \mathbb{R}^n \to \mathbb{R}` reverse mode only ever multiplies
a row vector with a matrix, while forward mode carries full ``m x n``
matrices through every stage.

The stages are hand-differentiated: each derivative callable returns the
Jacobian of its stage (a scalar, a row vector or a matrix). Products use
``numpy.dot`` so that scalar and matrix stages share one implementation.

Example:
    >>> import numpy as np
    >>> from dualkit.evaluation_order import forward, least_squares_stages, reverse
    >>> rng = np.random.default_rng(0)
    >>> A, b = rng.standard_normal((10, 100)), rng.standard_normal(10)
    >>> stages = least_squares_stages(A, b)
    >>> x = rng.standard_normal(100)
    >>> fwd = forward(*stages, x)
    >>> rev = reverse(*stages, x)
    >>> bool(np.allclose(fwd[1], rev[1]))
    True
"""

from __future__ import annotations

from typing import Any, Callable, NamedTuple

import numpy as np
from numpy.typing import ArrayLike

from dualkit.utils.types import FloatArray

__all__ = [
    "ChainStages",
    "forward",
    "reverse",
    "least_squares_stages",
    "least_squares_gradient",
    "gram_first",
    "residual_first",
]


class ChainStages(NamedTuple):
    """The three stages of ``f(g(h(x)))`` with their derivatives.

    The field order matches the argument order of :func:`forward` and
    :func:`reverse`, so a ``ChainStages`` can be unpacked into either.
    """
    f: Callable[[Any], Any]
    df: Callable[[Any], Any]
    g: Callable[[Any], Any]
    dg: Callable[[Any], Any]
    h: Callable[[Any], Any]
    dh: Callable[[Any], Any]


def forward(f, df, g, dg, h, dh, x) -> tuple[Any, Any]:
    """Evaluates ``f(g(h(x)))`` and its derivative in forward order.

    Every derivative factor is applied as soon as the corresponding value
    is known, i.e. right to left in the chain rule.

    Args:
        f: Outer stage.
        df: Derivative of ``f``.
        g: Middle stage.
        dg: Derivative of ``g``.
        h: Inner stage.
        dh: Derivative of ``h``.
        x: Evaluation point.

    Returns:
        Tuple ``(value, derivative)``.
    """
    h_x = h(x)
    dh_x = dh(x)
    gh_x = g(h_x)
    dgh_x = np.dot(dg(h_x), dh_x)
    fgh_x = f(gh_x)
    dfgh_x = np.dot(df(gh_x), dgh_x)
    return fgh_x, dfgh_x


def reverse(f, df, g, dg, h, dh, x) -> tuple[Any, Any]:
    """Evaluates ``f(g(h(x)))`` and its derivative in reverse order.

    All intermediate values are computed and kept first; the derivative
    factors are then multiplied from the outermost stage inwards, i.e. left
    to right in the chain rule.

    Args:
        f: Outer stage.
        df: Derivative of ``f``.
        g: Middle stage.
        dg: Derivative of ``g``.
        h: Inner stage.
        dh: Derivative of ``h``.
        x: Evaluation point.

    Returns:
        Tuple ``(value, derivative)``.
    """
    h_x = h(x)
    gh_x = g(h_x)
    fgh_x = f(gh_x)
    df_ghx = df(gh_x)
    dfg_hx = np.dot(df_ghx, dg(h_x))
    dfgh_x = np.dot(dfg_hx, dh(x))
    return fgh_x, dfgh_x


def least_squares_stages(A: ArrayLike, b: ArrayLike) -> ChainStages:
    """Splits ``x -> ||A x - b||^2`` into three differentiable stages.

    The stages are ``h(x) = A x`` with ``h' = A``, ``g(r) = r - b`` with
    ``g' = I``, and ``f(r) = sum(r**2)`` with ``f'(r) = 2 r^T``.

    Args:
        A: Matrix of shape ``(m, n)``.
        b: Vector of length ``m``.

    Returns:
        The stages as a :class:`ChainStages`.

    Raises:
        ValueError: If the shapes of ``A`` and ``b`` do not match.
    """
    A = np.asarray(A, dtype=float)
    b = np.asarray(b, dtype=float).reshape(-1)
    if A.ndim != 2:
        raise ValueError(f"A must be 2D; got shape {A.shape}.")
    if b.size != A.shape[0]:
        raise ValueError(
            f"b must have length {A.shape[0]} to match A of shape {A.shape}; got {b.size}."
        )
    identity = np.eye(A.shape[0])

    def h(x):
        return A @ x

    def dh(x):
        return A

    def g(ax):
        return ax - b

    def dg(ax):
        return identity

    def f(r):
        return float(np.sum(r**2))

    def df(r):
        return 2 * r

    return ChainStages(f, df, g, dg, h, dh)


def least_squares_gradient(A: ArrayLike, b: ArrayLike, x: ArrayLike) -> FloatArray:
    """Returns the closed-form gradient ``2 A^T (A x - b)`` of ``||A x - b||^2``."""
    A = np.asarray(A, dtype=float)
    return 2 * A.T @ (A @ np.asarray(x, dtype=float) - np.asarray(b, dtype=float))


def gram_first(A: ArrayLike, x: ArrayLike) -> FloatArray:
    """Computes ``A^T A x`` as ``(A^T A) x``.

    Forms the ``n x n`` Gram matrix first, which is what forward mode does
    for ``x -> ||A x||^2``.
    """
    A = np.asarray(A, dtype=float)
    return (A.T @ A) @ np.asarray(x, dtype=float)


def residual_first(A: ArrayLike, x: ArrayLike) -> FloatArray:
    """Computes ``A^T A x`` as ``A^T (A x)``.

    Only matrix-vector products are needed, which is what reverse mode does
    for ``x -> ||A x||^2``.
    """
    A = np.asarray(A, dtype=float)
    return A.T @ (A @ np.asarray(x, dtype=float))
