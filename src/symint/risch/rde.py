"""Risch differential equations: a*Dy + b*y = c, solved for y in the field.

Over C(x) the solver is complete: denominator bound (weak normalization + normal denominator), degree
bound, then coefficient matching. If any of those shows there's no solution, that's a proof.

Higher up the tower we only try a bounded ansatz and give up (None) when it fails.
"""

import itertools
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Union

import sympy
from sympy import Dummy, Expr, Integer, Poly, Symbol

from ..linalg import coefficient_equations, solve_linear
from ..result import NonElementary

if TYPE_CHECKING:
    from .tower import DifferentialExtension

# don't build ansatzes bigger than this
MAX_RDE_DEGREE = 30
MAX_ANSATZ_TERMS = 120

RDESolution = Union[Expr, NonElementary, None]


@dataclass(frozen=True)
class RischProblem:
    """a*Dy + b*y = c"""

    a: Expr
    b: Expr
    c: Expr

    def __post_init__(self):
        # plain ints would turn b / a into float division
        for name in ("a", "b", "c"):
            object.__setattr__(self, name, sympy.sympify(getattr(self, name)))


def _degree(p: Poly) -> Union[int, float]:
    return -float("inf") if p.is_zero else p.degree()


def is_weakly_normalized(f: Expr, var: Symbol) -> bool:
    """True if no simple pole of f has a positive integer residue.

    Conservative: returns False when the residues can't be found.
    """
    fn, fd = sympy.fraction(sympy.cancel(f))
    if not fd.has(var):
        return True
    _, factors = Poly(fd, var).sqf_list()
    simple = [p for p, k in factors if k == 1 and p.degree() > 0]
    if not simple:
        return True
    d1 = Poly(sympy.Mul(*[p.as_expr() for p in simple]), var)

    z = Dummy("z")
    resultant = sympy.resultant(d1.as_expr(), fn - z * sympy.diff(fd, var), var)
    resultant = Poly(sympy.cancel(resultant), z)
    if resultant.degree() <= 0:
        return True
    residues = sympy.roots(resultant)
    if sum(residues.values()) < resultant.degree():
        return False
    return not any(r.is_Integer and r > 0 for r in residues)


def _degree_bound(A: Poly, B: Poly, C: Poly) -> Union[int, float]:
    da, db, dc = _degree(A), _degree(B), _degree(C)
    if db > da - 1:
        return dc - db
    if db < da - 1:
        return dc - da + 1
    n = dc - db
    m = sympy.simplify(-B.LC() / A.LC())
    if m.is_Integer and m >= 0:
        n = max(n, int(m))
    return n


def solve_rde_base(problem: RischProblem, var: Symbol) -> RDESolution:
    """a*y' + b*y = c over C(x)."""
    if problem.c == 0:
        return Integer(0)
    f = sympy.cancel(problem.b / problem.a)
    g = sympy.cancel(problem.c / problem.a)

    # y = q/h, where h bounds the denominator of any solution. only valid for weakly normalized f
    if not is_weakly_normalized(f, var):
        return None

    fn, fd = sympy.fraction(f)
    _, gd = sympy.fraction(g)
    fd, gd = Poly(fd, var, field=True), Poly(gd, var, field=True)
    p = fd.gcd(gd)
    h = gd.gcd(gd.diff(var)).quo(p.gcd(p.diff(var)))

    A = fd * h
    B = Poly(sympy.cancel(fn * h.as_expr() - fd.as_expr() * h.diff(var).as_expr()), var, field=True)
    C = sympy.cancel(fd.as_expr() * h.as_expr() ** 2 * g)
    if sympy.fraction(C)[1].has(var):
        return NonElementary(f"{problem.a}*Dy + ({problem.b})*y = {problem.c} has no solution: denominator bound")
    C = Poly(C, var, field=True)

    n = _degree_bound(A, B, C)
    if n < 0:
        return NonElementary(f"{problem.a}*Dy + ({problem.b})*y = {problem.c} has no solution: degree bound {n}")
    if n > MAX_RDE_DEGREE:
        return None

    # A q' + B q = C for a polynomial q of degree <= n
    unknowns = [Dummy(f"q{i}") for i in range(int(n) + 1)]
    q = sum(u * var**i for i, u in enumerate(unknowns))
    identity = A.as_expr() * sympy.diff(q, var) + B.as_expr() * q - C.as_expr()
    solution = solve_linear(coefficient_equations(identity, [var]), unknowns)
    if solution is None:
        return NonElementary(f"{problem.a}*Dy + ({problem.b})*y = {problem.c} has no solution of degree <= {n}")
    return sympy.cancel(q.subs(solution) / h.as_expr())


def _solve_bounded(problem: RischProblem, tower: "DifferentialExtension", level: int) -> RDESolution:
    """Guess y = P / denominator(c/a) with a small polynomial P and match coefficients."""
    gens: List[Symbol] = [tower.var, *tower.symbols[:level]]
    b = sympy.cancel(problem.b / problem.a)
    c = sympy.cancel(problem.c / problem.a)
    if c == 0:
        return Integer(0)

    cn, cd = sympy.fraction(c)
    cn_poly = Poly(cn, *gens)
    ranges = [range(cn_poly.degree(gen) + 2) for gen in gens]
    monomials = list(itertools.product(*ranges))
    if len(monomials) > MAX_ANSATZ_TERMS:
        return None

    unknowns = [Dummy(f"p{i}") for i in range(len(monomials))]
    P = sum(u * sympy.Mul(*[gen**k for gen, k in zip(gens, monomial)]) for u, monomial in zip(unknowns, monomials))
    y = P / cd
    identity = tower.derivative(y, level) + b * y - c
    solution = solve_linear(coefficient_equations(identity, gens), unknowns)
    if solution is None:
        return None
    return sympy.cancel(y.subs(solution))


def solve_rde(problem: RischProblem, tower: "DifferentialExtension", level: int) -> RDESolution:
    """y in the field with the first `level` generators.

    Returns y, a NonElementary proof that there is no solution, or None if we can't tell.
    """
    if level == 0:
        return solve_rde_base(problem, tower.var)
    return _solve_bounded(problem, tower, level)
