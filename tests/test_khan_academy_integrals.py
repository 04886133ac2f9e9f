"""
integral questions from https://www.khanacademy.org/math/integral-calculus/ic-integration/ic-integration-proofs/test/ic-integration-unit-
and make sure symint can do them
"""

from sympy import E, Rational, acos, asin, atan, cos, cot, csc, exp, log, pi, sec, sin, sqrt, tan

from symint.debug.test_utils import assert_definite_integral, assert_eq_plusc, assert_integral, x
from symint.integration import integrate


def test_ex():
    integrand = 6 * exp(x)
    ans = integrate(integrand, (x, 6, 12))
    assert_eq_plusc(ans, 6 * E**12 - 6 * E**6)


def test_xcosx():
    """Uses integration by parts"""
    integrand = x * cos(x)
    ans = integrate(integrand, (x, 3 * pi / 2, pi))
    assert_eq_plusc(ans, 3 * pi / 2 - 1)


def test_partial_fractions():
    integrand = (x + 8) / (x * (x + 6))
    expected_ans = Rational(4, 3) * log(abs(x)) - Rational(1, 3) * log(abs(x + 6))
    assert_integral(integrand, expected_ans)

    integrand = (18 - 12 * x) / (4 * x - 1) / (x - 4)
    expected_ans = -log(abs(4 * x - 1)) - 2 * log(abs(x - 4))
    assert_integral(integrand, expected_ans)
    integrand = (2 * x + 3) / (x - 3) / (x + 3)
    expected_ans = 3 * log(abs(x - 3)) / 2 + log(abs(x + 3)) / 2
    assert_integral(integrand, expected_ans)
    integrand = (x - 2) / (2 * x + 1) / (x + 3)
    expected_ans = -log(abs(2 * x + 1)) / 2 + log(abs(x + 3))
    assert_integral(integrand, expected_ans)


def test_integration_by_parts():
    integrand = x * exp(-x)
    expected = -exp(-x) * (x + 1)
    assert_integral(integrand, expected)

    integrand = log(x) / x**2
    expected = -log(x) / x - 1 / x
    assert_integral(integrand, expected)

    integrand = x * exp(4 * x)
    assert_definite_integral(integrand, (0, 2), Rational(7, 16) * E**8 + Rational(1, 16))

    assert_definite_integral(-x * cos(x), (pi / 2, pi), 1 + pi / 2)

    # Challenge questions
    integrand = exp(x) * sin(x)
    expected = exp(x) / 2 * (sin(x) - cos(x))
    assert_integral(integrand, expected)

    integrand = x**2 * sin(pi * x)
    expected = -(x**2) * cos(pi * x) / pi + 2 * x * sin(pi * x) / pi**2 + 2 * cos(pi * x) / pi**3
    assert_integral(integrand, expected)


def test_arcsin():
    ans = integrate(asin(x), x)
    expected_ans = x * asin(x) + sqrt(1 - x**2)
    assert_eq_plusc(ans, expected_ans)

    ans = integrate(acos(x), x)
    expected_ans = x * acos(x) - sqrt(1 - x**2)
    assert_eq_plusc(ans, expected_ans)

    ans = integrate(atan(x), x)
    expected_ans = x * atan(x) - log(abs(1 + x**2)) / 2
    assert_eq_plusc(ans, expected_ans)


def test_sec2x_tan2x():
    integrand = sec(2 * x) * tan(2 * x)
    assert_definite_integral(integrand, (0, pi / 6), Rational(1, 2))


def test_misc():
    assert_integral(4 * sec(x) ** 2, 4 * tan(x))
    assert_integral(sec(x) ** 2 * tan(x) ** 2, tan(x) ** 3 / 3)
    assert_integral(5 / x - 3 * exp(x), 5 * log(abs(x)) - 3 * exp(x))
    assert_integral(sec(x), log(sec(x) + tan(x)))
    assert_integral(2 * cos(2 * x - 5), sin(2 * x - 5))
    assert_integral(3 * x**5 - x**3 + 6, 6 * x - x**4 / 4 + x**6 / 2)
    assert_integral(x**3 * exp(x**4), (exp(x**4) / 4))

    assert_definite_integral(8 * x / sqrt(1 - 4 * x**2), (0, Rational(1, 4)), 2 - sqrt(3))
    assert_definite_integral(sin(4 * x), (0, pi / 4), Rational(1, 2))
    assert_integral(exp(x) / (1 + exp(2 * x)), atan(exp(x)))


def test_usub():
    assert_definite_integral(exp(x) / (1 + exp(x)), (log(2), log(8)), log(9) - log(3))


def test_csc_x_squared():
    integrand = 5 * csc(x) ** 2
    expected_ans = -5 * cot(x)
    assert_integral(integrand, expected_ans)


def test_csc_x_cot_x():
    integrand = 2 * csc(x) * cot(x)
    expected = -2 * csc(x)
    assert_integral(integrand, expected)


def test_expanding_big_power():
    integrand = (2 * x - 5) ** 10
    expected_ans = (2 * x - 5) ** 11 / 22
    assert_integral(integrand, expected_ans)


def test_polynomial_div_integrals():
    expr = (x - 5) / (-2 * x + 2)
    expected = -x / 2 + 2 * log(abs(1 - x))
    assert_integral(expr, expected)
    assert_integral((x**3 - 1) / (x + 2), x**3 / 3 - x**2 + 4 * x - 9 * log(abs(2 + x)))
    assert_integral((x - 1) / (2 * x + 4), x / 2 - Rational(3, 2) * log(abs(x + 2)))

    integrand = (2 * x**3 + 4 * x**2 - 5) / (x + 3)
    expected = 2 * x**3 / 3 - x**2 + 6 * x - 23 * log(abs(x + 3))
    assert_integral(integrand, expected)


def test_complete_the_square_integrals():
    assert_integral(1 / (3 * x**2 + 6 * x + 78), atan((1 + x) / 5) / 15)
    assert_integral(1 / (x**2 - 8 * x + 65), atan((-4 + x) / 7) / 7)
    assert_integral(1 / sqrt(-(x**2) - 6 * x + 40), asin((3 + x) / 7))

    assert_definite_integral(1 / (1 + 9 * x**2), (-Rational(1, 3), Rational(1, 3)), expected=pi / 6)


def test_bigger_power_trig():
    # power reduction on bigger powers:
    expr = sin(x) ** 4
    expected = (sin(4 * x) - 8 * sin(2 * x) + 12 * x) / 32
    assert_integral(expr, expected)


def test_bigger_power_trig_2():
    # both e1 and e2 are correct answers.
    e1 = sin(2 * x) ** 3 / 48 + 3 * sin(4 * x) / 64 - sin(2 * x) / 4 + 5 * x / 16
    e2 = (9 * sin(4 * x) - sin(6 * x) - 45 * sin(2 * x) + 60 * x) / 192
    assert_integral(sin(x) ** 6, (e1, e2))


def test_rewrite_pythag():
    expr = sin(x) ** 2 * cos(x) ** 3
    expected_ans = sin(x) ** 3 / 3 - sin(x) ** 5 / 5
    assert_integral(expr, expected_ans)


def test_rewrite_pythag_2():
    assert_integral(sin(x) ** 3, cos(x) ** 3 / 3 - cos(x))
    assert_integral(cos(x) ** 5, sin(x) ** 5 / 5 - 2 * sin(x) ** 3 / 3 + sin(x))
