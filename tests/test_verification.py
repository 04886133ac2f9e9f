import numpy as np
from sympy import Abs, cos, exp, log, sin

from symint.debug.test_utils import x, y
from symint.verification import RADIUS, is_antiderivative, is_numerically_zero, sample_points


def test_is_antiderivative():
    assert is_antiderivative(x**2, 2 * x, x)
    assert is_antiderivative(sin(x) ** 2, sin(2 * x), x)
    assert is_antiderivative(x * exp(x) - exp(x), x * exp(x), x)
    # ln|x| and ln(x) both count
    assert is_antiderivative(log(Abs(x)), 1 / x, x)
    assert is_antiderivative(x * y, y, x)

    assert not is_antiderivative(x**2, x, x)
    assert not is_antiderivative(cos(x), sin(x), x)


def test_is_numerically_zero():
    assert is_numerically_zero(sin(x) ** 2 + cos(x) ** 2 - 1, x)
    assert is_numerically_zero(exp(2 * log(x)) - x**2, x)
    assert not is_numerically_zero(x, x)
    assert not is_numerically_zero(sin(x) - x, x)


def test_sample_points():
    points = sample_points(50)
    assert points.shape == (50,)
    assert np.all(np.abs(points) <= RADIUS)
    # deterministic for a given seed
    assert np.array_equal(sample_points(5, seed=3), sample_points(5, seed=3))
    assert not np.array_equal(sample_points(5, seed=3), sample_points(5, seed=4))
