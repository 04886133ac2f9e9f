import numpy as np
import pytest
from sympy import Integer, sin

from symint.debug.test_utils import x, y
from symint.polynomial import (
    degree,
    integrate_polynomial,
    polynomial_divide,
    polynomial_to_expr,
    rid_ending_zeros,
    to_const_polynomial,
)


def test_to_const_polynomial():
    assert np.array_equal(to_const_polynomial(3 * x**2 + 1, x), [1, 0, 3])
    assert np.array_equal(to_const_polynomial((x + 1) ** 2, x), [1, 2, 1])
    # other symbols are fine as coefficients
    assert np.array_equal(to_const_polynomial(x * y + 1, x), [1, y])
    with pytest.raises(AssertionError):
        to_const_polynomial(sin(x), x)


def test_polynomial_to_expr():
    assert polynomial_to_expr(np.array([1, 0, 3], dtype=object), x) == 3 * x**2 + 1


def test_rid_ending_zeros():
    assert np.array_equal(rid_ending_zeros(np.array([1, 2, 0, 0], dtype=object)), [1, 2])
    assert degree(np.array([1, 2, 0], dtype=object)) == 1
    assert degree(np.array([Integer(0)], dtype=object)) == -1


def test_polynomial_divide():
    numerator = to_const_polynomial(x**4, x)
    denominator = to_const_polynomial(1 + x**2, x)
    quotient, remainder = polynomial_divide(numerator, denominator)
    assert np.array_equal(quotient, [-1, 0, 1])
    assert np.array_equal(remainder, [1])

    # numerator of lower degree comes back as the remainder
    quotient, remainder = polynomial_divide(to_const_polynomial(x + 1, x), denominator)
    assert np.array_equal(quotient, [0])
    assert np.array_equal(remainder, [1, 1])

    with pytest.raises(ZeroDivisionError):
        polynomial_divide(numerator, np.array([0], dtype=object))


def test_integrate_polynomial():
    assert integrate_polynomial(np.array([1, 0, 3], dtype=object), x) == x + x**3
