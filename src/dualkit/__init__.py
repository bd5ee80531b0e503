"""Provides forward-mode automatic differentiation with dual numbers."""

from importlib.metadata import PackageNotFoundError, version

from dualkit.calculus import build_gradient, build_jacobian, jacobian_vector_product
from dualkit.dual import DualNumber, lift, register_rule, seed
from dualkit.dual_kit import DualKit
from dualkit.errors import DivisionByZero, DomainError, DualKitError, UnsupportedOperation
from dualkit.forward import derivative, value_and_derivative

try:
    __version__ = version("dualkit")
except PackageNotFoundError:
    pass

__all__ = [
    "DivisionByZero",
    "DomainError",
    "DualKit",
    "DualKitError",
    "DualNumber",
    "UnsupportedOperation",
    "build_gradient",
    "build_jacobian",
    "derivative",
    "jacobian_vector_product",
    "lift",
    "register_rule",
    "seed",
    "value_and_derivative",
]
