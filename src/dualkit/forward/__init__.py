"""Forward-mode derivatives of scalar functions."""

from .derivative import derivative, value_and_derivative

__all__ = ["derivative", "value_and_derivative"]
