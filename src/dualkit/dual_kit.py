"""Provides the DualKit class.

A light wrapper around the forward-mode helpers that binds a function to
an expansion point and exposes derivative, gradient, Jacobian and
Jacobian-vector product computations.

Typical usage examples:

>>> import numpy as np
>>> from dualkit.dual_kit import DualKit
>>> from dualkit.dual.functions import exp, log, sin
>>>
>>> kit = DualKit(lambda x: log(x**2 + exp(sin(x))), x0=1.0)
>>> d = kit.derivative()
>>>
>>> def g(x):
...     # scalar-valued function: g(x) = x0^2 * x1
...     return x[0] ** 2 * x[1]
>>>
>>> grad = DualKit(g, x0=[1.0, 2.0]).gradient()
>>> jvp = DualKit(g, x0=[1.0, 2.0]).jvp([1.0, 0.0])
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from dualkit.calculus import build_gradient, build_jacobian, jacobian_vector_product
from dualkit.dual.promotion import is_real
from dualkit.forward.derivative import derivative, value_and_derivative
from dualkit.utils.types import ArrayLike1D, ScalarFunction
from dualkit.utils.validate import as_point_vector


class DualKit:
    """Provides access to forward-mode derivatives at a fixed point."""

    def __init__(
        self,
        function: ScalarFunction,
        x0: float | ArrayLike1D,
    ):
        """Initialise with function and expansion point.

        Args:
            function: For a scalar ``x0``, a function of one real variable;
                otherwise a function of a 1D array. It must be built from
                operations supported by dual numbers.
            x0: Point at which to evaluate derivatives. A real scalar is kept
                as it is; anything else is converted to a 1D array.
        """
        self.function = function
        self.x0 = x0 if is_real(x0) else as_point_vector(x0)

    def _require_scalar(self, what: str) -> None:
        if not is_real(self.x0):
            raise TypeError(f"{what} needs a scalar x0; use gradient/jacobian for vector input.")

    def _as_vector(self) -> np.ndarray:
        if is_real(self.x0):
            return as_point_vector([self.x0])
        return self.x0

    def derivative(self) -> Any:
        """Returns ``f'(x0)`` for a scalar expansion point."""
        self._require_scalar("derivative")
        return derivative(self.function, self.x0)

    def value_and_derivative(self) -> tuple[Any, Any]:
        """Returns ``(f(x0), f'(x0))`` for a scalar expansion point."""
        self._require_scalar("value_and_derivative")
        return value_and_derivative(self.function, self.x0)

    def gradient(self, *, n_workers: int | None = None) -> NDArray:
        """Returns the gradient of a scalar-valued function of a vector."""
        return build_gradient(self.function, self._as_vector(), n_workers=n_workers)

    def jacobian(self, *, n_workers: int | None = None) -> NDArray:
        """Returns the Jacobian of a vector-valued function of a vector."""
        return build_jacobian(self.function, self._as_vector(), n_workers=n_workers)

    def jvp(self, direction: ArrayLike1D) -> Any:
        """Returns the Jacobian-vector product along ``direction``."""
        return jacobian_vector_product(self.function, self._as_vector(), direction)
