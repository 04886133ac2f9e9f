"""u-substitution: ∫h(g(x)) g'(x) dx = ∫h(u) du with u = g(x)"""

from typing import List, Optional

import sympy
from sympy import Add, Expr, Function, Mul, Pow, Symbol, preorder_traversal

from .expr import generate_intermediate_var, linear_coefficients, nesting, strip_log_abs
from .strategy import Strategy
from .verification import is_antiderivative

# don't try more than this many inner expressions per integrand
MAX_CANDIDATES = 8


def substitution_candidates(expr: Expr, var: Symbol) -> List[Expr]:
    """Inner expressions worth trying as u, most deeply nested first.

    Function arguments, the functions themselves, bases and exponents of powers, and sums sitting
    in a product.
    """
    found = set()
    for node in preorder_traversal(expr):
        if isinstance(node, Function):
            found.update(node.args)
            found.add(node)
        elif isinstance(node, Pow):
            found.update(node.args)
            found.add(node)
        elif isinstance(node, Mul):
            found.update(arg for arg in node.args if isinstance(arg, Add))

    candidates = [
        c
        for c in found
        if isinstance(c, Expr) and c.has(var) and c != var and c != expr and linear_coefficients(c, var) is None
    ]
    candidates.sort(key=lambda c: (-nesting(c, var), str(c)))
    return candidates[:MAX_CANDIDATES]


class Substitution(Strategy):
    """Chain rule in reverse"""

    def try_integrate(self, expr: Expr, var: Symbol, depth: int) -> Optional[Expr]:
        for g in substitution_candidates(expr, var):
            answer = self._try_candidate(expr, g, var, depth)
            if answer is not None:
                return answer
        return None

    def _try_candidate(self, expr: Expr, g: Expr, var: Symbol, depth: int) -> Optional[Expr]:
        dg = sympy.diff(g, var)
        if dg == 0:
            return None

        ratio = sympy.simplify(expr / dg)
        u = generate_intermediate_var()
        in_u = sympy.simplify(ratio.subs(g, u))
        if in_u.has(var):
            return None
        if in_u.xreplace({u: var}) == expr:
            # same integrand in a new variable
            return None

        answer = self._integrate(in_u, u, depth)
        if answer is None:
            return None
        back = answer.subs(u, g)
        if back.has(sympy.re, sympy.im):
            # log(Abs(u)) with u = exp(x) evaluates to re(x)
            back = strip_log_abs(answer).subs(u, g)
        answer = back

        # false positives aren't allowed, so check the substitution back in x
        if not is_antiderivative(answer, expr, var):
            return None
        return answer
