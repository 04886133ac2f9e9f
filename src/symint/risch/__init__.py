"""Risch algorithm for transcendental elementary integrands (exp and log extensions only).

integrand -> tower C(x)(t_1)...(t_n) -> integrate in the top field by recursing down:
  - exp t: split off the Laurent part, Hermite + Rothstein-Trager on the rest, one RDE per power of t
  - log t: polynomial part, Hermite + Rothstein-Trager on the rest, then the polynomial in t top down
  - C(x): rational function integration

NonElementary only ever comes out of a mechanized argument (RDE over C(x), limited integration over
C(x), or the residue criterion); everything else inconclusive is Unknown.
"""

from typing import Optional, Tuple, Union

import sympy
from sympy import Expr, Integer, Poly, Symbol, cos, log
from sympy.polys.polyerrors import BasePolynomialError

from ..rational import integrate_rational
from ..result import Closed, IntegrationResult, NonElementary, Unknown
from ..strategy import Strategy
from ..verification import is_antiderivative
from .hermite import HermiteReductionResult, hermite_reduce
from .nonelementary import log_part, real_log_part, recognise_special_function, residue_reduce
from .rde import RischProblem, solve_rde, solve_rde_base
from .tower import EXP, DifferentialExtension, Generator, UnsupportedExtension

__all__ = [
    "DifferentialExtension",
    "Generator",
    "HermiteReductionResult",
    "Risch",
    "RischProblem",
    "UnsupportedExtension",
    "hermite_reduce",
    "integrate_in_field",
    "integrate_rational_function",
    "recognise_special_function",
    "residue_reduce",
    "risch_integrate",
    "solve_rde",
    "solve_rde_base",
]


def _combine(value: Expr, result: IntegrationResult) -> IntegrationResult:
    if isinstance(result, Closed):
        return Closed(value + result.expr)
    return result


def integrate_rational_function(expr: Expr, var: Symbol) -> Optional[Expr]:
    """Hermite reduction + Rothstein-Trager over C(x). Handles denominators that don't split into linear
    and quadratic factors. Complex residues come in conjugate pairs and are written as real logs and atans.
    """
    numerator, denominator = sympy.fraction(sympy.cancel(sympy.together(expr)))
    q, r = Poly(numerator, var, field=True).div(Poly(denominator, var, field=True))
    answer = q.integrate().as_expr()
    if r.is_zero:
        return answer

    D = lambda e: sympy.diff(e, var)
    hermite = hermite_reduce(r.as_expr(), denominator, var, D)
    logs = residue_reduce(hermite.numerator, hermite.denominator, var, D, lambda e: not e.has(var))
    if not isinstance(logs, list):
        return None
    return answer + hermite.rational_part + real_log_part(logs, var)


def _integrate_base(f: Expr, var: Symbol) -> IntegrationResult:
    f = sympy.cancel(f)
    if not f.has(var):
        return Closed(f * var)
    if f.is_polynomial(var):
        return Closed(Poly(f, var).integrate().as_expr())
    answer = integrate_rational(f, var)
    if answer is None:
        return Unknown(f"rational integration failed on {f}")
    return Closed(answer)


def _split_reduce(
    numerator: Expr, denominator: Expr, tower: DifferentialExtension, level: int
) -> Union[Tuple[Expr, Expr], IntegrationResult]:
    """Hermite reduction then Rothstein-Trager on a proper fraction with a normal denominator.

    Returns (resolved part of the integral, what's left) where what's left has no denominator in t,
    or a result if it's settled/stuck.
    """
    t = tower.generators[level - 1].symbol
    D = lambda e: tower.derivative(e, level)

    hermite = hermite_reduce(numerator, denominator, t, D)
    logs = residue_reduce(hermite.numerator, hermite.denominator, t, D, tower.is_constant)
    if not isinstance(logs, list):
        return logs

    resolved = hermite.rational_part + log_part(logs)
    rest = hermite.remaining_integrand - sum((c * D(v) / v for c, v in logs), Integer(0))
    return resolved, sympy.cancel(rest)


def _integrate_hyperexponential(f: Expr, tower: DifferentialExtension, level: int) -> IntegrationResult:
    gen = tower.generators[level - 1]
    t = gen.symbol
    numerator, denominator = sympy.fraction(f)
    A = Poly(numerator, t, field=True)
    den = Poly(denominator, t, field=True)

    # denominator = t**m * (normal part)
    m = min(monom[0] for monom in den.monoms())
    tm = Poly(t**m, t, field=True)
    dn = den.quo(tm)

    value = Integer(0)
    laurent = f
    if dn.degree() > 0:
        s, r, _ = tm.gcdex(dn)
        q, normal = (A * s).div(dn)
        laurent = q.as_expr() + (A * r).as_expr() / t**m
        reduced = _split_reduce(normal.as_expr(), dn.as_expr(), tower, level)
        if not isinstance(reduced, tuple):
            return reduced
        resolved, rest = reduced
        value += resolved
        laurent += rest

    laurent_num, laurent_den = sympy.fraction(sympy.cancel(laurent))
    laurent_den = Poly(laurent_den, t)
    if not laurent_den.is_monomial:
        return Unknown(f"{laurent} is not a Laurent polynomial in {gen}")
    shift = laurent_den.degree()
    scale = laurent_den.LC()

    Dg = tower.derivative(gen.argument, level - 1)
    for (i,), coeff in Poly(laurent_num, t).terms():
        k = i - shift
        coeff = sympy.cancel(coeff / scale)
        if k == 0:
            sub = integrate_in_field(coeff, tower, level - 1)
            if not isinstance(sub, Closed):
                return sub
            value += sub.expr
            continue

        # D(y t^k) = (Dy + k Dg y) t^k
        y = solve_rde(RischProblem(Integer(1), k * Dg, coeff), tower, level - 1)
        if isinstance(y, NonElementary):
            return y
        if y is None:
            return Unknown(f"couldn't solve the RDE for the t^{k} coefficient of {gen}")
        value += y * t**k

    return Closed(value)


def _limited_integrate_base(a: Expr, dt: Expr, var: Symbol) -> Union[Tuple[Expr, Expr], NonElementary]:
    """b in C(x) and a constant c with a = Db + c*dt"""
    numerator, denominator = sympy.fraction(sympy.cancel(a))
    q, r = Poly(numerator, var, field=True).div(Poly(denominator, var, field=True))
    b = q.integrate().as_expr()
    if r.is_zero:
        return b, Integer(0)

    hermite = hermite_reduce(r.as_expr(), denominator, var, lambda e: sympy.diff(e, var))
    b += hermite.rational_part
    remaining = sympy.cancel(hermite.remaining_integrand)
    if remaining == 0:
        return b, Integer(0)
    # both sides only have simple poles, so this has to be exact
    c = sympy.cancel(remaining / dt)
    if c.has(var):
        return NonElementary(f"∫{a} is not in C(x) + C*log")
    return b, c


def _limited_integrate(
    a: Expr, gen: Generator, tower: DifferentialExtension, level: int
) -> Union[Tuple[Expr, Expr], IntegrationResult]:
    if level == 0:
        return _limited_integrate_base(a, gen.derivative, tower.var)

    sub = integrate_in_field(a, tower, level)
    if isinstance(sub, Closed) and not sub.expr.has(log):
        return sub.expr, Integer(0)
    c = sympy.cancel(a / gen.derivative)
    if tower.is_constant(c):
        return Integer(0), c
    return Unknown(f"limited integration of {a} w.r.t. {gen}")


def integrate_primitive_polynomial(p: Expr, tower: DifferentialExtension, level: int) -> IntegrationResult:
    """∫p for p in K[t], t = log(g). Works down from the leading term:
    a t^m -> (c t^(m+1) / (m+1) + b t^m) where a = Db + c Dt
    """
    gen = tower.generators[level - 1]
    t = gen.symbol
    value = Integer(0)
    p = sympy.cancel(p)
    while True:
        P = Poly(p, t)
        m = P.degree()
        if m <= 0:
            return _combine(value, integrate_in_field(P.as_expr(), tower, level - 1))

        limited = _limited_integrate(P.LC(), gen, tower, level - 1)
        if not isinstance(limited, tuple):
            return limited
        b, c = limited
        q0 = c * t ** (m + 1) / (m + 1) + b * t**m
        value += q0
        p = sympy.cancel(p - tower.derivative(q0, level))
        if p.has(t) and Poly(p, t).degree() >= m:
            return Unknown(f"leading term of {P.as_expr()} didn't cancel")


def _integrate_primitive(f: Expr, tower: DifferentialExtension, level: int) -> IntegrationResult:
    gen = tower.generators[level - 1]
    t = gen.symbol
    numerator, denominator = sympy.fraction(f)
    q, r = Poly(numerator, t, field=True).div(Poly(denominator, t, field=True))

    value = Integer(0)
    polynomial = q.as_expr()
    if not r.is_zero:
        reduced = _split_reduce(r.as_expr(), denominator, tower, level)
        if not isinstance(reduced, tuple):
            return reduced
        resolved, rest = reduced
        if sympy.fraction(rest)[1].has(t):
            return Unknown(f"{rest} still has a denominator in {gen}")
        value += resolved
        polynomial += rest

    return _combine(value, integrate_primitive_polynomial(polynomial, tower, level))


def integrate_in_field(f: Expr, tower: DifferentialExtension, level: int) -> IntegrationResult:
    """∫f for f in the field with the first `level` generators. Results are in terms of the generators."""
    if level == 0:
        return _integrate_base(f, tower.var)

    f = sympy.cancel(f)
    gen = tower.generators[level - 1]
    if not f.has(gen.symbol):
        return integrate_in_field(f, tower, level - 1)
    if gen.kind == EXP:
        return _integrate_hyperexponential(f, tower, level)
    return _integrate_primitive(f, tower, level)


def risch_integrate(expr: Expr, var: Symbol) -> IntegrationResult:
    try:
        tower = DifferentialExtension.build(expr, var)
        result = integrate_in_field(tower.integrand, tower, len(tower.generators))
    except UnsupportedExtension as e:
        return Unknown(str(e))
    except (BasePolynomialError, NotImplementedError) as e:
        return Unknown(f"{type(e).__name__}: {e}")

    if isinstance(result, NonElementary):
        return NonElementary(result.reason, recognise_special_function(expr, var))
    if isinstance(result, Unknown):
        return result

    answer = tower.to_expr(result.expr)
    if tower.rewrote_trig:
        answer = sympy.simplify(answer.rewrite(cos))
    if not is_antiderivative(answer, expr, var):
        return Unknown(f"{answer} doesn't differentiate back to {expr}")
    return Closed(answer, "Risch")


class Risch(Strategy):
    """Risch algorithm"""

    def try_integrate(self, expr: Expr, var: Symbol, depth: int) -> Optional[Expr]:
        result = risch_integrate(expr, var)
        if isinstance(result, NonElementary):
            self.non_elementary = result
        if isinstance(result, Closed):
            return result.expr
        return None
