"""Integration by parts: ∫u dv = uv - ∫v du

u is picked with LIATE (Logarithmic > Inverse trig > Algebraic > Trigonometric > Exponential).
"""

from typing import List, Optional, Tuple

import sympy
from sympy import (
    Expr,
    Function,
    Mul,
    Pow,
    Symbol,
    acos,
    acot,
    acoth,
    acsc,
    asec,
    asin,
    asinh,
    acosh,
    atan,
    atanh,
    cos,
    cosh,
    cot,
    coth,
    csc,
    csch,
    exp,
    log,
    sec,
    sech,
    sin,
    sinh,
    tan,
    tanh,
)

from .expr import split_constant, strip_log_abs
from .strategy import Strategy

LOGARITHMIC, INVERSE_TRIG, ALGEBRAIC, TRIGONOMETRIC, EXPONENTIAL, OTHER = range(6)

INVERSE_FUNCTIONS = (asin, acos, atan, acot, asec, acsc, asinh, acosh, atanh, acoth)
TRIG_FUNCTIONS = (sin, cos, tan, cot, sec, csc, sinh, cosh, tanh, coth, sech, csch)

# How many extra by-parts steps we take looking for the original integral to come back,
# ex: ∫e^x sin(x) -> ∫e^x cos(x) -> -∫e^x sin(x)
MAX_UNROLL = 2


def liate_rank(expr: Expr, var: Symbol) -> int:
    if isinstance(expr, Pow) and not expr.exp.has(var):
        return liate_rank(expr.base, var)
    if isinstance(expr, log):
        return LOGARITHMIC
    if isinstance(expr, INVERSE_FUNCTIONS):
        return INVERSE_TRIG
    if isinstance(expr, TRIG_FUNCTIONS):
        return TRIGONOMETRIC
    if isinstance(expr, exp) or (isinstance(expr, Pow) and not expr.base.has(var)):
        return EXPONENTIAL
    if all(not f.has(var) for f in expr.atoms(Function)):
        return ALGEBRAIC
    return OTHER


def split_parts(expr: Expr, var: Symbol) -> List[Tuple[Expr, Expr]]:
    """(u, dv) assignments to try, best first. The second one is the opposite assignment."""
    factors = [f for f in Mul.make_args(expr) if f.has(var)]
    if len(factors) < 2:
        return []
    u = min(factors, key=lambda f: (liate_rank(f, var), str(f)))
    dv = expr / u
    return [(u, dv), (dv, u)]


def _reduces(u: Expr, var: Symbol) -> bool:
    """Does differentiating u make progress? If not, recursing on ∫v du just goes around in circles."""
    rank = liate_rank(u, var)
    if rank in (LOGARITHMIC, INVERSE_TRIG):
        return True
    if rank == ALGEBRAIC:
        return u.is_polynomial(var) and sympy.degree(u, var) >= 1
    return False


def _solve_recurring(
    strategy: Strategy, expr: Expr, uv: Expr, integrand2: Expr, var: Symbol, depth: int
) -> Optional[Expr]:
    """∫expr = uv + ∫integrand2.

    if -v du (maybe after one more round of by parts) comes back to k * expr for a constant k,
    you get ∫expr = uv + k∫expr  =>  ∫expr = uv / (1 - k) and you can jump directly to the solution wheeee
    """
    acc = uv
    current = integrand2
    for step in range(MAX_UNROLL):
        factor = sympy.simplify(current / expr)
        if not factor.has(var):
            if factor == 1:
                # ∫expr = uv + ∫expr tells us nothing
                return None
            return acc / (1 - factor)
        if step == MAX_UNROLL - 1:
            break

        const, rest = split_constant(current, var)
        parts = split_parts(rest, var)
        if not parts:
            return None
        u2, dv2 = parts[0]
        v2 = strategy._integrate_without_heuristics(dv2, var, depth)
        if v2 is None:
            return None
        acc = acc + const * u2 * v2
        current = sympy.simplify(-const * v2 * sympy.diff(strip_log_abs(u2), var))

    return None


def integrate_by_parts(strategy: Strategy, u: Expr, dv: Expr, var: Symbol, depth: int) -> Optional[Expr]:
    """∫u dv. v = ∫dv must be found by the cheap layers; ∫v du goes through the full dispatcher one level deeper."""
    v = strategy._integrate_without_heuristics(dv, var, depth)
    if v is None:
        return None

    du = sympy.diff(strip_log_abs(u), var)
    expr = u * dv
    integrand2 = sympy.simplify(-v * du)
    if integrand2 == 0:
        return u * v

    recurring = _solve_recurring(strategy, expr, u * v, integrand2, var, depth)
    if recurring is not None:
        return recurring

    if not _reduces(u, var):
        return None

    rest = strategy._integrate(integrand2, var, depth)
    if rest is None:
        return None
    return u * v + rest


class ByParts(Strategy):
    """Integration by parts"""

    def try_integrate(self, expr: Expr, var: Symbol, depth: int) -> Optional[Expr]:
        const, rest = split_constant(expr, var)
        for u, dv in split_parts(rest, var):
            answer = integrate_by_parts(self, u, dv, var, depth)
            if answer is not None:
                return const * answer
        return None
