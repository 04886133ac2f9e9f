from typing import Dict, List, Optional, Sequence

import sympy
from sympy import Expr, Poly, Symbol


def coefficient_equations(identity: Expr, gens: Sequence[Symbol]) -> List[Expr]:
    """Turns `identity == 0` (a polynomial in gens) into one linear equation per monomial."""
    numerator, _ = sympy.fraction(sympy.together(sympy.expand(identity)))
    numerator = sympy.expand(numerator)
    if numerator == 0:
        return []
    return [c for c in Poly(numerator, *gens).coeffs() if c != 0]


def solve_linear(equations: List[Expr], unknowns: List[Symbol]) -> Optional[Dict[Symbol, Expr]]:
    """
    Input: linear equations (each expr == 0) in the unknowns.
    Output: one solution as a dict, or None if the system is inconsistent.

    If the system is underdetermined, free unknowns are set to 0 -- every caller here only needs
    *a* solution.
    """
    if not equations:
        return {u: sympy.Integer(0) for u in unknowns}

    solutions = sympy.linsolve(equations, unknowns)
    if solutions is sympy.S.EmptySet or not isinstance(solutions, sympy.FiniteSet):
        return None

    (solution,) = solutions
    free = {s for value in solution for s in value.free_symbols if s in unknowns}
    zeroed = {s: sympy.Integer(0) for s in free}
    return {u: sympy.simplify(value.subs(zeroed)) for u, value in zip(unknowns, solution)}
