"""sin^m(θ) cos^n(θ) for integer m, n and a linear θ, and products of sines and cosines of different angles.

tan, cot, sec and csc are rewritten in terms of sin and cos first.

- m or n odd: peel one factor off the smaller odd power, u = the other function.
- both even, both >= 0: power reduction, sin^2 = (1 - cos 2θ)/2, cos^2 = (1 + cos 2θ)/2
- both even, one negative: u = tan(θ)
- different angles: product-to-sum
"""

from typing import Optional, Tuple

import sympy
from sympy import Expr, Mul, Symbol, cos, cot, csc, sec, sin, tan

from .expr import generate_intermediate_var, linear_coefficients, split_constant
from .integral_table import check_integral_table
from .polynomial import integrate_polynomial, to_const_polynomial
from .rational import integrate_rational
from .simplify import product_to_sum_unit
from .strategy import Strategy


def rewrite_sin_cos(expr: Expr) -> Expr:
    return expr.replace(tan, lambda a: sin(a) / cos(a)).replace(cot, lambda a: cos(a) / sin(a)).replace(
        sec, lambda a: 1 / cos(a)
    ).replace(csc, lambda a: 1 / sin(a))


def sin_cos_powers(expr: Expr, var: Symbol) -> Optional[Tuple[Expr, Expr, int, int]]:
    """(const, θ, m, n) if expr == const * sin(θ)**m * cos(θ)**n, None otherwise."""
    const, rest = split_constant(expr, var)
    arg = None
    m = n = 0
    for factor in Mul.make_args(rest):
        base, exponent = factor.as_base_exp()
        if not isinstance(base, (sin, cos)) or not exponent.is_Integer:
            return None
        if arg is None:
            arg = base.args[0]
        elif base.args[0] != arg:
            return None
        if isinstance(base, sin):
            m += int(exponent)
        else:
            n += int(exponent)

    if arg is None or linear_coefficients(arg, var) is None:
        return None
    return const, arg, m, n


class Trigonometric(Strategy):
    """Powers and products of sin and cos"""

    def try_integrate(self, expr: Expr, var: Symbol, depth: int) -> Optional[Expr]:
        rewritten = rewrite_sin_cos(expr)
        powers = sin_cos_powers(rewritten, var)
        if powers is not None:
            const, arg, m, n = powers
            answer = self._integrate_sin_cos(m, n, arg, var, depth)
            if answer is not None:
                return const * answer
            return None

        return self._product_to_sum(rewritten, var)

    def _integrate_sin_cos(self, m: int, n: int, arg: Expr, var: Symbol, depth: int) -> Optional[Expr]:
        """∫sin(arg)**m * cos(arg)**n"""
        a, _ = linear_coefficients(arg, var)
        if m == 0 and n == 0:
            return var

        odd = [e for e in (m, n) if e % 2 == 1]
        if odd:
            # smaller odd power, positive ones first
            peel = min(odd, key=lambda e: (e < 0, e))
            return self._odd_power(m, n, peel == m, arg, a, depth)

        if m >= 0 and n >= 0:
            return self._power_reduction(m, n, arg, var, depth)

        return self._tan_substitution(m, n, arg, a, depth)

    def _odd_power(self, m: int, n: int, peel_sin: bool, arg: Expr, a: Expr, depth: int) -> Optional[Expr]:
        u = generate_intermediate_var()
        if peel_sin:
            # u = cos(θ), du = -a sin(θ) dθ, sin^(m-1) = (1 - u^2)^((m-1)/2)
            in_u = -(1 - u**2) ** ((m - 1) // 2) * u**n / a
            back = cos(arg)
        else:
            # u = sin(θ), du = a cos(θ) dθ
            in_u = u**m * (1 - u**2) ** ((n - 1) // 2) / a
            back = sin(arg)

        answer = self._integrate_in_u(in_u, u, depth)
        if answer is None:
            return None
        return answer.subs(u, back)

    def _tan_substitution(self, m: int, n: int, arg: Expr, a: Expr, depth: int) -> Optional[Expr]:
        """sin^m cos^n = tan^m cos^(m+n) and cos^2 = 1/(1 + tan^2), dθ = du / (1 + u^2)"""
        u = generate_intermediate_var()
        in_u = u**m * (1 + u**2) ** (-(m + n) // 2 - 1) / a
        answer = self._integrate_in_u(in_u, u, depth)
        if answer is None:
            return None
        return answer.subs(u, tan(arg))

    def _power_reduction(self, m: int, n: int, arg: Expr, var: Symbol, depth: int) -> Optional[Expr]:
        # Done here instead of going back through the dispatcher: simplify would fold (1 - cos 2θ)/2
        # right back into sin^2.
        c = generate_intermediate_var()
        reduced = sympy.Poly(sympy.expand(((1 - c) / 2) ** (m // 2) * ((1 + c) / 2) ** (n // 2)), c)

        answer = sympy.Integer(0)
        for (k,), coeff in reduced.terms():
            if k == 0:
                answer += coeff * var
                continue
            term = self._integrate_sin_cos(0, k, 2 * arg, var, depth)
            if term is None:
                return None
            answer += coeff * term
        return answer

    def _integrate_in_u(self, in_u: Expr, u: Symbol, depth: int) -> Optional[Expr]:
        """The substituted integrands are polynomial or rational in u. Try those directly first."""
        in_u = sympy.cancel(in_u)
        if in_u.is_polynomial(u):
            return integrate_polynomial(to_const_polynomial(in_u, u), u)
        answer = integrate_rational(in_u, u)
        if answer is not None:
            return answer
        return self._integrate(in_u, u, depth)

    @staticmethod
    def _product_to_sum(expr: Expr, var: Symbol) -> Optional[Expr]:
        const, rest = split_constant(expr, var)
        terms = product_to_sum_unit(rest)
        if terms is None:
            return None

        answer = sympy.Integer(0)
        for term in terms:
            integral = check_integral_table(term, var)
            if integral is None:
                return None
            answer += integral
        return const * answer
