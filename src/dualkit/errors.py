"""Exception types raised while propagating derivatives.

Each error aborts the evaluation it occurs in. A derivative computation is
all-or-nothing, so there is no partial result to recover.
"""

from __future__ import annotations

__all__ = [
    "DualKitError",
    "DomainError",
    "DivisionByZero",
    "UnsupportedOperation",
]


class DualKitError(Exception):
    """Base class for errors raised by DualKit."""


class DomainError(DualKitError, ValueError):
    """Raises when an elementary function is evaluated outside its real domain."""


class DivisionByZero(DualKitError, ZeroDivisionError):
    """Raises when a denominator is exactly zero."""


class UnsupportedOperation(DualKitError, TypeError):
    """Raises when no derivative rule exists for the requested operation."""
