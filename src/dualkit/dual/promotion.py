"""Promotion of real scalars to a common numeric type.

Both components of a :class:`~dualkit.dual.number.DualNumber` always share
one numeric type. The rules follow the Python numeric tower, with numpy
scalars taking precedence so that single precision stays single precision:

- ``bool`` (and ``numpy.bool_``) is treated as ``int``;
- if either input is a numpy scalar, both are cast to
  ``numpy.result_type`` of the pair (a ``Fraction`` paired with a numpy
  scalar falls back to ``float``);
- two integers stay ``int``;
- two rationals (``int`` or ``Fraction``) become ``Fraction``;
- anything else becomes ``float``.
"""

from __future__ import annotations

import numbers
from fractions import Fraction
from typing import Any

import numpy as np

__all__ = [
    "is_real",
    "as_real",
    "promote",
]


def is_real(x: Any) -> bool:
    """Returns ``True`` if ``x`` is a real scalar (Python or numpy)."""
    return isinstance(x, (numbers.Real, np.bool_))


def as_real(x: Any, *, name: str = "value") -> numbers.Real:
    """Validates a real scalar and maps booleans to integers.

    Args:
        x: Candidate scalar.
        name: Name of the argument, used in the error message.

    Returns:
        ``x`` itself, or ``int(x)`` for booleans.

    Raises:
        TypeError: If ``x`` is not a real scalar.
    """
    if isinstance(x, (bool, np.bool_)):
        return int(x)
    if not isinstance(x, numbers.Real):
        raise TypeError(
            f"{name} must be a real scalar; got {type(x).__name__}."
        )
    return x


def promote(a: Any, b: Any) -> tuple[numbers.Real, numbers.Real]:
    """Casts two real scalars to a common numeric type.

    Args:
        a: First scalar.
        b: Second scalar.

    Returns:
        The pair ``(a, b)`` converted to their common type.

    Raises:
        TypeError: If either input is not a real scalar.
    """
    a = as_real(a, name="value")
    b = as_real(b, name="derivative")

    if isinstance(a, np.generic) or isinstance(b, np.generic):
        if isinstance(a, Fraction) or isinstance(b, Fraction):
            return float(a), float(b)
        dtype = np.result_type(a, b)
        return dtype.type(a), dtype.type(b)

    if isinstance(a, numbers.Integral) and isinstance(b, numbers.Integral):
        return int(a), int(b)
    if isinstance(a, numbers.Rational) and isinstance(b, numbers.Rational):
        return Fraction(a), Fraction(b)
    return float(a), float(b)
