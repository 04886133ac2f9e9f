import pytest
import sympy
from sympy import Poly, cos, exp, log, sin, sqrt

from symint.debug.test_utils import assert_eq_plusc, x
from symint.result import Closed, NonElementary, Unknown
from symint.risch import (
    DifferentialExtension,
    RischProblem,
    UnsupportedExtension,
    hermite_reduce,
    integrate_rational_function,
    recognise_special_function,
    residue_reduce,
    risch_integrate,
    solve_rde_base,
)
from symint.risch.hermite import diophantine
from symint.risch.rde import is_weakly_normalized
from symint.risch.tower import EXP, LOG

D = lambda e: sympy.diff(e, x)


def test_tower_reuses_generators():
    tower = DifferentialExtension.build(exp(2 * x) + exp(x), x)
    assert len(tower.generators) == 1
    (gen,) = tower.generators
    assert gen.kind == EXP
    assert gen.expr_in_var == exp(x)
    assert tower.integrand == gen.symbol**2 + gen.symbol


def test_tower_rebase():
    # exp(x) was added first, then exp(x/2) shows up and exp(x) has to become s**2
    tower = DifferentialExtension.build(exp(x) + exp(x / 2), x)
    assert len(tower.generators) == 1
    (gen,) = tower.generators
    assert gen.expr_in_var == exp(x / 2)
    assert tower.integrand == gen.symbol**2 + gen.symbol
    assert tower.to_expr(tower.integrand) == exp(x) + exp(x / 2)


def test_tower_rebase_only_touches_dependents():
    tower = DifferentialExtension.build(exp(x) + exp(x**3) + exp(x / 2), x)
    assert len(tower.generators) == 2
    s, t = tower.generators
    assert s.expr_in_var == exp(x / 2)
    assert t.expr_in_var == exp(x**3)
    assert t.depends_on == ()
    assert t.derivative == 3 * x**2 * t.symbol

    # exp(exp(x)) is built on exp(x), so it has to follow it onto s**2
    tower = DifferentialExtension.build(exp(x) + exp(exp(x)), x)
    tower._add(exp(x / 2))
    s, t = tower.generators
    assert t.depends_on == (0,)
    assert t.argument == s.symbol**2
    assert tower.to_expr(tower.to_field(exp(exp(x)))) == exp(exp(x))


def test_tower_logs():
    tower = DifferentialExtension.build(log(2 * x) + log(x), x)
    assert len(tower.generators) == 1
    (gen,) = tower.generators
    assert gen.kind == LOG
    assert gen.derivative == 1 / x
    assert tower.integrand == 2 * gen.symbol + log(2)

    t = gen.symbol
    assert tower.derivative(x * t) == t + 1
    assert tower.is_constant(log(2))
    assert not tower.is_constant(t)


def test_tower_unsupported():
    with pytest.raises(UnsupportedExtension):
        DifferentialExtension.build(exp(sqrt(x)), x)
    with pytest.raises(UnsupportedExtension):
        DifferentialExtension.build(sqrt(x), x)


def test_diophantine():
    s, t = diophantine(Poly(x + 1, x, field=True), Poly(x - 1, x, field=True), Poly(2, x, field=True))
    assert s.as_expr() == 1
    assert t.as_expr() == -1

    with pytest.raises(ValueError):
        diophantine(Poly(x, x, field=True), Poly(x**2, x, field=True), Poly(1, x, field=True))


def test_hermite_reduce():
    result = hermite_reduce(1, x**2, x, D)
    assert result.rational_part == -1 / x
    assert result.numerator == 0

    numerator = x**2 + 1
    denominator = (x - 1) ** 3 * (x + 2)
    result = hermite_reduce(numerator, sympy.expand(denominator), x, D)
    # f = Dg + h + polynomial part
    assert sympy.cancel(D(result.rational_part) + result.remaining_integrand + result.polynomial_part - numerator / denominator) == 0
    # what's left has a squarefree denominator
    assert Poly(result.denominator, x).sqf_part() == Poly(result.denominator, x)


def test_weak_normalization():
    assert not is_weakly_normalized(1 / x, x)
    assert is_weakly_normalized(-1 / x, x)
    assert is_weakly_normalized(2 * x, x)


def test_rde_base():
    # y' + 2xy = 1 is what ∫exp(x**2) needs
    assert isinstance(solve_rde_base(RischProblem(1, 2 * x, 1), x), NonElementary)
    assert sympy.expand(solve_rde_base(RischProblem(1, 1, x), x)) == x - 1
    assert solve_rde_base(RischProblem(1, 1, 0), x) == 0
    # y' + y = 1/x is what ∫exp(x)/x needs
    assert isinstance(solve_rde_base(RischProblem(1, 1, 1 / x), x), NonElementary)


def test_residue_reduce():
    logs = residue_reduce(1, x**2 - 1, x, D, lambda e: not e.has(x))
    assert set(logs) == {(sympy.Rational(1, 2), x - 1), (-sympy.Rational(1, 2), x + 1)}

    # 1/log(x): the residues depend on x, so no elementary antiderivative
    tower = DifferentialExtension.build(1 / log(x), x)
    t = tower.generators[0].symbol
    result = residue_reduce(1, t, t, tower.derivative, tower.is_constant)
    assert isinstance(result, NonElementary)


def test_rational_function():
    assert_eq_plusc(integrate_rational_function(1 / (x**2 - 1), x), (log(x - 1) - log(x + 1)) / 2)
    assert_eq_plusc(integrate_rational_function(x**3 / (x**2 + 1), x), x**2 / 2 - log(x**2 + 1) / 2)


def test_recognise_special_function():
    assert recognise_special_function(exp(-(x**2)), x) == "erf"
    assert recognise_special_function(exp(x**2), x) == "erfi"
    assert recognise_special_function(exp(2 * x) / x, x) == "Ei"
    assert recognise_special_function(sin(x) / x, x) == "Si"
    assert recognise_special_function(cos(3 * x) / x, x) == "Ci"
    assert recognise_special_function(1 / log(x), x) == "li"
    assert recognise_special_function(x**2, x) is None


def test_risch_integrate():
    result = risch_integrate(exp(x) / (exp(x) + 1), x)
    assert isinstance(result, Closed)
    assert_eq_plusc(result.expr, log(exp(x) + 1))

    assert_eq_plusc(risch_integrate(x * log(x), x).expr, x**2 * log(x) / 2 - x**2 / 4)
    assert_eq_plusc(risch_integrate(log(x), x).expr, x * log(x) - x)
    assert_eq_plusc(risch_integrate(x * exp(x), x).expr, (x - 1) * exp(x))


def test_risch_non_elementary():
    result = risch_integrate(exp(x**2), x)
    assert isinstance(result, NonElementary)
    assert result.special_function == "erfi"

    assert isinstance(risch_integrate(sin(x) / x, x), NonElementary)
    assert isinstance(risch_integrate(exp(x) / x, x), NonElementary)


def test_risch_unknown():
    # algebraic extensions aren't handled, that's not a proof of anything
    assert isinstance(risch_integrate(sqrt(x), x), Unknown)
    assert isinstance(risch_integrate(exp(sqrt(x)), x), Unknown)
