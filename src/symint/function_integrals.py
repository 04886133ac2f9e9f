"""Integration of single elementary function applications using the function registry."""

from typing import Optional

from sympy import Expr, Function, Integer, Symbol

from .by_parts import integrate_by_parts
from .expr import linear_coefficients, split_constant
from .registry import ByParts, LinearSubstitution, Simple, lookup_antiderivative
from .strategy import Strategy


class FunctionRegistry(Strategy):
    """f(a*x + b) for any f with a registered antiderivative rule."""

    def try_integrate(self, expr: Expr, var: Symbol, depth: int) -> Optional[Expr]:
        const, fn = split_constant(expr, var)
        if not isinstance(fn, Function) or len(fn.args) != 1:
            return None

        rule = lookup_antiderivative(fn.func.__name__)
        if rule is None:
            return None

        arg = fn.args[0]
        if isinstance(rule, Simple):
            if arg != var:
                return None
            return const * rule.antiderivative(var)

        if isinstance(rule, LinearSubstitution):
            coeffs = linear_coefficients(arg, var)
            if coeffs is None:
                return None
            return const * rule.antiderivative(arg) / coeffs[0]

        if isinstance(rule, ByParts):
            # u = f(x), dv = dx
            answer = integrate_by_parts(self, fn, Integer(1), var, depth)
            if answer is None:
                return None
            return const * answer

        raise ValueError(f"Unknown antiderivative rule {rule} for {fn.func.__name__}")
