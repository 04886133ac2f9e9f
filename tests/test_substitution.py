from sympy import cos, exp, log, sin, sqrt, tan

from symint.debug.test_utils import assert_closed, assert_eq_plusc, assert_integral, x
from symint.integration import Integration
from symint.substitution import MAX_CANDIDATES, Substitution, substitution_candidates


def test_candidates():
    assert substitution_candidates(x * sin(x**2), x) == [sin(x**2), x**2]
    # linear inner expressions are the table's job
    assert substitution_candidates(sin(2 * x + 1), x) == []
    # power bases and sums sitting in a product count
    assert (x**2 + 1) in substitution_candidates(x * (x**2 + 1) ** 5, x)
    assert (x**2 + 1) in substitution_candidates(x * (x**2 + 1), x)
    assert len(substitution_candidates(exp(sin(x**2) + cos(x**3) + log(x**4 + 1) + tan(x**5)), x)) <= MAX_CANDIDATES


def test_chain_rule():
    assert_integral(2 * x * sin(x**2), -cos(x**2))
    assert_integral(x**2 * exp(x**3), exp(x**3) / 3)
    assert_integral(cos(x) * exp(sin(x)), exp(sin(x)))
    assert_integral(x**2 / sqrt(1 - x**3), -2 * sqrt(1 - x**3) / 3)


def test_substitution_layer():
    layer = Substitution(Integration())

    answer = layer.try_integrate(x * (x**2 + 1) ** 5, x, 0)
    assert_eq_plusc(answer, (x**2 + 1) ** 6 / 12)

    # no inner expression whose derivative is also there
    assert layer.try_integrate(exp(x**2), x, 0) is None
    assert layer.try_integrate(sin(x) / x, x, 0) is None


def test_exponential_inner():
    answer = assert_closed(exp(x) / (exp(x) + 1), x)
    assert_eq_plusc(answer, log(exp(x) + 1))
