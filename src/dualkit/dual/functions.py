"""Elementary functions acting on dual numbers and plain reals.

Each function applies the chain rule when given a
:class:`~dualkit.dual.number.DualNumber` and simply evaluates the function
for a plain real, so one function body serves both ordinary evaluation and
differentiation:

    >>> from dualkit.dual.functions import exp, log, sin
    >>> def f(x):
    ...     return log(x**2 + exp(sin(x)))
    >>> round(f(1.0), 4)
    1.1999

Numpy ufuncs (``np.sin`` etc.) work on dual numbers as well.
"""

from __future__ import annotations

from typing import Any

from dualkit.dual.number import apply_rule

__all__ = [
    "sin",
    "cos",
    "tan",
    "exp",
    "log",
    "sqrt",
    "tanh",
    "absolute",
    "square",
]


def sin(x: Any) -> Any:
    """Sine."""
    return apply_rule("sin", x)


def cos(x: Any) -> Any:
    """Cosine."""
    return apply_rule("cos", x)


def tan(x: Any) -> Any:
    """Tangent."""
    return apply_rule("tan", x)


def exp(x: Any) -> Any:
    """Exponential function."""
    return apply_rule("exp", x)


def log(x: Any) -> Any:
    """Natural logarithm.

    Raises:
        DomainError: If the value of ``x`` is not positive.
    """
    return apply_rule("log", x)


def sqrt(x: Any) -> Any:
    """Square root.

    Raises:
        DomainError: If the value of ``x`` is negative.
        DivisionByZero: If ``x`` is a dual number with value ``0`` and a
            non-zero derivative.
    """
    return apply_rule("sqrt", x)


def tanh(x: Any) -> Any:
    """Hyperbolic tangent."""
    return apply_rule("tanh", x)


def absolute(x: Any) -> Any:
    """Absolute value.

    Raises:
        DomainError: If ``x`` is a dual number with value ``0`` and a
            non-zero derivative.
    """
    return apply_rule("abs", x)


def square(x: Any) -> Any:
    """Square."""
    return apply_rule("square", x)
