"""Derivatives of scalar functions by a single forward pass.

The input is seeded with derivative ``1``; the derivative of the result is
then ``f'(x)``, exact up to rounding:

    >>> from dualkit.forward.derivative import derivative
    >>> derivative(lambda x: 3 * x**2 + 4 * x + 5, 2)
    16
    >>> df = derivative(lambda x: x**3)
    >>> df(2.0)
    12.0
"""

from __future__ import annotations

from functools import partial
from typing import Any

from dualkit.dual.number import derivative_of, seed, value_of
from dualkit.utils.types import ScalarFunction
from dualkit.utils.validate import check_scalar_point

__all__ = [
    "derivative",
    "value_and_derivative",
]


def value_and_derivative(function: ScalarFunction, x0: Any) -> tuple[Any, Any]:
    """Evaluates a function and its derivative in one forward pass.

    Args:
        function: Function of one real variable built from operations
            supported by :class:`~dualkit.dual.number.DualNumber`. It may
            return a scalar or an array (a curve).
        x0: Real point at which to differentiate.

    Returns:
        Tuple ``(f(x0), f'(x0))``. A function that ignores its input has
        derivative zero.

    Raises:
        TypeError: If ``x0`` is not a real scalar.
        DomainError: If an elementary function is evaluated outside its domain.
        DivisionByZero: If a denominator is exactly zero.
        UnsupportedOperation: If no derivative rule exists for an operation.
    """
    check_scalar_point(x0)
    y = function(seed(x0))
    return value_of(y), derivative_of(y)


def derivative(function: ScalarFunction, x0: Any = None) -> Any:
    """Computes ``f'(x0)``, or returns ``f'`` as a function.

    Args:
        function: Function of one real variable.
        x0: Point at which to differentiate. If None, the derivative
            function ``x -> derivative(function, x)`` is returned instead.

    Returns:
        The derivative at ``x0``, or the derivative function.
    """
    if x0 is None:
        return partial(derivative, function)
    return value_and_derivative(function, x0)[1]
