"""Unit tests for dualkit.dual.promotion."""

from fractions import Fraction

import numpy as np
import pytest

from dualkit.dual.number import DualNumber
from dualkit.dual.promotion import as_real, is_real, promote


@pytest.mark.parametrize(
    "a, b, expected_type",
    [
        (1, 2, int),
        (True, 2, int),
        (Fraction(1, 2), 3, Fraction),
        (1, 2.0, float),
        (Fraction(1, 2), 0.5, float),
    ],
)
def test_promote_python_scalars(a, b, expected_type):
    """Python scalars promote along the numeric tower."""
    pa, pb = promote(a, b)
    assert type(pa) is expected_type
    assert type(pb) is expected_type
    assert pa == a
    assert pb == b


def test_promote_keeps_numpy_precision():
    """numpy scalars promote with numpy.result_type."""
    pa, pb = promote(np.float32(1.5), np.float32(2.0))
    assert pa.dtype == np.float32
    assert pb.dtype == np.float32
    pa, pb = promote(np.float32(1.5), np.float64(2.0))
    assert pa.dtype == np.float64
    assert pb.dtype == np.float64


def test_promote_fraction_with_numpy_gives_float():
    """Fraction and numpy scalars meet at float."""
    pa, pb = promote(Fraction(1, 4), np.float64(2.0))
    assert type(pa) is float
    assert pa == 0.25
    assert pb == 2.0


def test_promote_rejects_non_real():
    """Complex numbers and strings are not real scalars."""
    with pytest.raises(TypeError):
        promote(1j, 0)
    with pytest.raises(TypeError):
        promote(1.0, "0")


def test_is_real_and_as_real():
    """is_real accepts Python and numpy reals; as_real maps bools to int."""
    assert is_real(1)
    assert is_real(np.float32(1.0))
    assert is_real(np.bool_(True))
    assert not is_real(1j)
    assert not is_real(DualNumber(1.0, 0.0))
    assert as_real(True) == 1
    assert type(as_real(True)) is int
    assert type(as_real(np.bool_(False))) is int
    with pytest.raises(TypeError, match="x must be a real scalar"):
        as_real("1", name="x")


def test_dual_components_share_one_type():
    """Constructing a dual promotes its two components."""
    x = DualNumber(1, 0.5)
    assert type(x.value) is float
    assert type(x.derivative) is float
    y = DualNumber(Fraction(1, 3), 1)
    assert type(y.derivative) is Fraction
    z = DualNumber(np.float32(1.0), 1)
    assert z.value.dtype == np.float32
    assert z.derivative.dtype == np.float32
