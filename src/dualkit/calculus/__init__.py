"""Calculus utilities.

Provides forward-mode constructors for gradients, Jacobians and
Jacobian-vector products.
"""

from .gradient import build_gradient
from .jacobian import build_jacobian
from .jvp import jacobian_vector_product

__all__ = ["build_gradient", "build_jacobian", "jacobian_vector_product"]
