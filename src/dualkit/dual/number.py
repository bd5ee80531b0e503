"""Provides the :class:`DualNumber` type.

A dual number ``a + εa'`` with ``ε² = 0`` carries a value and its
derivative through a computation. Arithmetic on dual numbers is exactly
the sum, product and quotient rule, and elementary functions apply the
chain rule through the registry in :mod:`dualkit.dual.rules`:

    >>> from dualkit.dual.number import DualNumber
    >>> x = DualNumber(1.0, 1.0)
    >>> y = x * x + 3 * x
    >>> y.value, y.derivative
    (4.0, 5.0)

Plain real numbers mixed into an expression are lifted to constants
``(c, 0)``. Both components of every result share a common numeric type
(see :mod:`dualkit.dual.promotion`).
"""

from __future__ import annotations

import numbers
import operator
from dataclasses import dataclass
from functools import partial
from typing import Any

import numpy as np

from dualkit.dual.promotion import as_real, is_real, promote
from dualkit.dual.rules import resolve_rule
from dualkit.errors import DivisionByZero, DomainError, UnsupportedOperation

__all__ = [
    "DualNumber",
    "lift",
    "seed",
    "apply_rule",
    "value_of",
    "derivative_of",
]


@dataclass(frozen=True, eq=False, slots=True)
class DualNumber:
    """Value/derivative pair of the dual-number algebra.

    Attributes:
        value: The primal value.
        derivative: The tangent (derivative) component. Defaults to ``0``,
            i.e. a constant.
    """
    value: numbers.Real
    derivative: numbers.Real = 0

    def __post_init__(self):
        value, derivative = promote(self.value, self.derivative)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "derivative", derivative)

    def __str__(self) -> str:
        return f"{self.value} + {self.derivative}ε"

    # Arithmetic

    def __add__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return DualNumber(self.value + other.value, self.derivative + other.derivative)

    def __radd__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other + self

    def __sub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return DualNumber(self.value - other.value, self.derivative - other.derivative)

    def __rsub__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return DualNumber(
            self.value * other.value,
            self.value * other.derivative + self.derivative * other.value,
        )

    def __rmul__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other * self

    def __truediv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return _divide(self, other)

    def __rtruediv__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return _divide(other, self)

    def __pow__(self, exponent):
        if isinstance(exponent, DualNumber):
            return _dual_power(self, exponent)
        if is_real(exponent):
            return _real_power(self, as_real(exponent, name="exponent"))
        return NotImplemented

    def __rpow__(self, base):
        if not is_real(base):
            return NotImplemented
        return _dual_power(DualNumber(base, 0), self)

    def __neg__(self):
        return DualNumber(-self.value, -self.derivative)

    def __pos__(self):
        return self

    def __abs__(self):
        return apply_rule("abs", self)

    # Comparisons. Equality is equality of both components; ordering only
    # looks at the value so that piecewise definitions work.

    def __eq__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.value == other.value and self.derivative == other.derivative

    def __hash__(self):
        if self.derivative == 0:
            return hash(self.value)
        return hash((self.value, self.derivative))

    def __lt__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.value < other.value

    def __le__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.value >= other.value

    # Conversions would silently drop the derivative, e.g. in ``math.sin(x)``.

    def __float__(self):
        raise UnsupportedOperation(
            "Converting a DualNumber to float drops its derivative. "
            "Use dualkit functions or numpy ufuncs instead of the math module."
        )

    def __int__(self):
        raise UnsupportedOperation("Converting a DualNumber to int drops its derivative.")

    def __bool__(self):
        return bool(self.value)

    # Elementary functions, used by numpy ufuncs on object arrays.

    def sin(self) -> DualNumber:
        return apply_rule("sin", self)

    def cos(self) -> DualNumber:
        return apply_rule("cos", self)

    def tan(self) -> DualNumber:
        return apply_rule("tan", self)

    def exp(self) -> DualNumber:
        return apply_rule("exp", self)

    def log(self) -> DualNumber:
        return apply_rule("log", self)

    def sqrt(self) -> DualNumber:
        return apply_rule("sqrt", self)

    def tanh(self) -> DualNumber:
        return apply_rule("tanh", self)

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if method != "__call__" or kwargs or ufunc.nout != 1:
            raise UnsupportedOperation(
                f"numpy ufunc {ufunc.__name__}.{method} is not supported for DualNumber."
            )
        if any(isinstance(x, np.ndarray) for x in inputs):
            elementwise = np.frompyfunc(partial(_apply_ufunc, ufunc), ufunc.nin, 1)
            return elementwise(*[_as_object_operand(x) for x in inputs])
        return _apply_ufunc(ufunc, *inputs)


_ARITHMETIC_UFUNCS = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": operator.truediv,
    "true_divide": operator.truediv,
    "power": operator.pow,
    "negative": operator.neg,
    "positive": operator.pos,
    "equal": operator.eq,
    "not_equal": operator.ne,
    "less": operator.lt,
    "less_equal": operator.le,
    "greater": operator.gt,
    "greater_equal": operator.ge,
}


def _apply_ufunc(ufunc: np.ufunc, *args: Any) -> Any:
    """Evaluates a numpy ufunc on scalar arguments, at least one of them dual."""
    if not any(isinstance(a, DualNumber) for a in args):
        return ufunc(*args)
    name = ufunc.__name__
    if name in _ARITHMETIC_UFUNCS:
        # numpy scalars would route the operator back through the ufunc
        return _ARITHMETIC_UFUNCS[name](*(lift(a) for a in args))
    if ufunc.nin == 1:
        return apply_rule(name, args[0])
    raise UnsupportedOperation(f"No derivative rule for numpy ufunc '{name}'.")


def _as_object_operand(x: Any) -> Any:
    """Wraps a DualNumber in a 0D object array so that numpy does not dispatch back to it."""
    if isinstance(x, DualNumber):
        arr = np.empty((), dtype=object)
        arr[()] = x
        return arr
    return x


def _coerce(other: Any) -> DualNumber | None:
    """Returns ``other`` as a DualNumber, or None if it is not a real scalar."""
    if isinstance(other, DualNumber):
        return other
    if is_real(other):
        return DualNumber(other, 0)
    return None


def _divide(x: DualNumber, y: DualNumber) -> DualNumber:
    if y.value == 0:
        raise DivisionByZero(f"division by a dual number with zero value: {y!r}.")
    return DualNumber(
        x.value / y.value,
        (x.derivative * y.value - x.value * y.derivative) / (y.value * y.value),
    )


def _is_integer(c: numbers.Real) -> bool:
    if isinstance(c, numbers.Integral):
        return True
    return float(c).is_integer()


def _real_power(base: DualNumber, c: numbers.Real) -> DualNumber:
    """Computes ``base ** c`` for a constant real exponent."""
    a, da = base.value, base.derivative
    if c == 0:
        return DualNumber(a ** c, 0)
    if a == 0 and c < 0:
        raise DivisionByZero(f"0 cannot be raised to the negative power {c!r}.")
    if a < 0 and not _is_integer(c):
        raise DomainError(
            f"a negative base {a!r} cannot be raised to the non-integer power {c!r}."
        )
    if a == 0 and c < 1:
        if da != 0:
            raise DivisionByZero(f"the derivative of x**{c!r} is unbounded at 0.")
        return DualNumber(a ** c, 0)
    return DualNumber(a ** c, c * a ** (c - 1) * da)


def _dual_power(base: DualNumber, exponent: DualNumber) -> DualNumber:
    """Computes ``base ** exponent`` for a dual exponent."""
    if exponent.derivative == 0:
        return _real_power(base, exponent.value)
    a, b = base.value, exponent.value
    if a <= 0:
        raise DomainError(
            f"a power with a varying exponent needs a positive base; got {a!r}."
        )
    fa = a ** b
    log_a = resolve_rule("log").value(a)
    return DualNumber(fa, fa * (exponent.derivative * log_a + b * base.derivative / a))


def lift(x: Any) -> DualNumber:
    """Lifts a real scalar to the constant dual number ``(x, 0)``.

    Dual numbers are returned unchanged.

    Args:
        x: Real scalar or DualNumber.

    Returns:
        A DualNumber.

    Raises:
        TypeError: If ``x`` is neither a real scalar nor a DualNumber.
    """
    dual = _coerce(x)
    if dual is None:
        raise TypeError(f"Cannot lift {type(x).__name__} to a DualNumber.")
    return dual


def seed(x: Any, direction: Any = 1) -> DualNumber:
    """Creates the input variable ``(x, direction)`` of a forward pass.

    Args:
        x: Point at which to differentiate.
        direction: Seed of the derivative component. Defaults to ``1``.

    Returns:
        The seeded DualNumber.
    """
    return DualNumber(x, direction)


def apply_rule(name: str, x: Any) -> Any:
    """Applies the elementary function ``name`` to a dual or real scalar.

    For a DualNumber the chain rule is applied. A zero tangent stays zero
    without evaluating the derivative, so constants may sit where the
    derivative does not exist (e.g. ``sqrt`` at ``0``). For a plain real
    the value is returned.

    Args:
        name: Function name registered in :mod:`dualkit.dual.rules`.
        x: Argument.

    Returns:
        A DualNumber for dual input, otherwise a plain real.

    Raises:
        UnsupportedOperation: If no rule is registered for ``name``.
        DomainError: If ``x`` lies outside the domain of the function.
        TypeError: If ``x`` is neither a DualNumber nor a real scalar.
    """
    rule = resolve_rule(name)
    if not isinstance(x, DualNumber):
        return rule.value(as_real(x, name="argument"))
    fa = rule.value(x.value)
    if x.derivative == 0:
        return DualNumber(fa, 0)
    return DualNumber(fa, rule.slope(x.value, fa) * x.derivative)


def value_of(y: Any) -> Any:
    """Returns the value part of a result.

    Args:
        y: DualNumber, plain real, or array, list or tuple of either.

    Returns:
        The value (arrays, lists and tuples map element-wise to arrays).
    """
    if isinstance(y, (list, tuple)):
        y = np.asarray(y, dtype=object)
    if isinstance(y, DualNumber):
        return y.value
    if isinstance(y, np.ndarray):
        if y.dtype == object:
            return np.asarray([value_of(v) for v in y.ravel()]).reshape(y.shape)
        return y
    return y


def derivative_of(y: Any) -> Any:
    """Returns the derivative part of a result.

    Plain reals are constants and have derivative zero.

    Args:
        y: DualNumber, plain real, or array, list or tuple of either.

    Returns:
        The derivative (arrays, lists and tuples map element-wise to arrays).
    """
    if isinstance(y, (list, tuple)):
        y = np.asarray(y, dtype=object)
    if isinstance(y, DualNumber):
        return y.derivative
    if isinstance(y, np.ndarray):
        if y.dtype == object:
            return np.asarray([derivative_of(v) for v in y.ravel()]).reshape(y.shape)
        return np.zeros_like(y)
    return y * 0
