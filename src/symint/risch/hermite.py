from dataclasses import dataclass
from typing import Callable, Tuple

import sympy
from sympy import Expr, Integer, Poly, Rational, Symbol

Derivation = Callable[[Expr], Expr]


@dataclass(frozen=True)
class HermiteReductionResult:
    rational_part: Expr
    # what's left to integrate: numerator / denominator with a squarefree denominator
    numerator: Expr
    denominator: Expr
    polynomial_part: Expr = Integer(0)

    @property
    def remaining_integrand(self) -> Expr:
        return self.numerator / self.denominator


def diophantine(a: Poly, b: Poly, c: Poly) -> Tuple[Poly, Poly]:
    """s, t such that s*a + t*b == c and deg(s) < deg(b). a and b have to be coprime."""
    s, _, g = a.gcdex(b)
    if g.degree() > 0:
        raise ValueError(f"{a} and {b} are not coprime")
    s = (s * c).rem(b)
    t = (c - s * a).quo(b)
    return s, t


def hermite_reduce(numerator: Expr, denominator: Expr, t: Symbol, derivation: Derivation) -> HermiteReductionResult:
    """Hermite reduction of numerator/denominator in K(t) (quadratic version).

    Finds g and h with f = Dg + h where h has a squarefree denominator. denominator must be normal
    w.r.t. the derivation, ex: not divisible by t when t = exp(...).
    """
    d = Poly(denominator, t, field=True)
    lc = d.LC()
    d = d.monic()
    a = Poly(sympy.cancel(numerator / lc), t, field=True)

    def D(p: Poly) -> Poly:
        return Poly(sympy.cancel(derivation(p.as_expr())), t, field=True)

    g = Integer(0)
    _, factors = d.sqf_list()
    for v, i in factors:
        if i < 2 or v.degree() <= 0:
            continue
        u = d.quo(v**i)
        for j in range(i - 1, 0, -1):
            b, c = diophantine(u * D(v), v, a * (-Rational(1, j)))
            g += b.as_expr() / v.as_expr() ** j
            a = c * (-j) - u * D(b)
        d = u * v

    q, r = a.div(d)
    return HermiteReductionResult(g, r.as_expr(), d.as_expr(), q.as_expr())
