"""Shared typing aliases for DualKit."""

from __future__ import annotations

import numbers
from typing import Any, Callable, Sequence, TypeAlias

import numpy as np
from numpy.typing import NDArray

from dualkit.dual.number import DualNumber

Scalar: TypeAlias = numbers.Real | DualNumber
FloatArray: TypeAlias = NDArray[np.float64]
ObjectArray: TypeAlias = NDArray[np.object_]

ArrayLike1D: TypeAlias = Sequence[float] | NDArray[np.floating]
ScalarFunction: TypeAlias = Callable[[Any], Any]
