"""Rational functions P(x)/Q(x): long division, then partial fractions over the factors of Q.

Q is factored over the rationals. Linear and quadratic factors are integrated here; anything with an
irreducible factor of degree 3 or more goes to the Risch base case (Hermite + Rothstein-Trager).
"""

from typing import Dict, List, Optional, Tuple

import sympy
from sympy import Dummy, Expr, Symbol, atan, log, sqrt

from .expr import log_abs
from .linalg import coefficient_equations, solve_linear
from .polynomial import (
    degree,
    integrate_polynomial,
    polynomial_divide,
    polynomial_to_expr,
    to_const_polynomial,
)
from .strategy import Strategy

# (factor, multiplicity)
Factor = Tuple[Expr, int]


def _split_fraction(expr: Expr, var: Symbol) -> Optional[Tuple[Expr, Expr]]:
    if not expr.is_rational_function(var):
        return None
    numerator, denominator = sympy.fraction(sympy.cancel(sympy.together(expr)))
    if not denominator.has(var):
        return None
    return numerator, denominator


def _partial_fraction_terms(factors: List[Factor], var: Symbol) -> List[Tuple[Expr, Expr, int]]:
    """One (numerator ansatz, factor, power) per term of the decomposition. numerators are in terms of
    fresh unknowns: A for linear factors, B*x + C for quadratic ones.
    """
    terms = []
    for f, multiplicity in factors:
        for j in range(1, multiplicity + 1):
            if sympy.degree(f, var) == 1:
                numerator = Dummy("A")
            else:
                numerator = Dummy("B") * var + Dummy("C")
            terms.append((numerator, f, j))
    return terms


def _decompose(
    remainder: Expr, lead: Expr, factors: List[Factor], var: Symbol
) -> Optional[List[Tuple[Expr, Expr, int]]]:
    """remainder / (lead * Π f**m) == Σ numerator / f**j. Solves for the numerators."""
    terms = _partial_fraction_terms(factors, var)
    unknowns = [s for n, _, _ in terms for s in sorted(n.free_symbols, key=str) if isinstance(s, Dummy)]

    full = sympy.Mul(*[f**m for f, m in factors])
    identity = remainder / lead
    for numerator, f, j in terms:
        identity -= numerator * sympy.cancel(full / f**j)

    equations = coefficient_equations(identity, [var])
    solution = solve_linear(equations, unknowns)
    if solution is None:
        return None
    return [(sympy.simplify(n.subs(solution)), f, j) for n, f, j in terms]


def _integrate_linear_term(A: Expr, f: Expr, j: int, var: Symbol) -> Expr:
    """A / (a*x + b)**j"""
    a = sympy.Poly(f, var).LC()
    if j == 1:
        return A * log_abs(f) / a
    return A * f ** (1 - j) / (a * (1 - j))


def _reciprocal_quadratic(alpha: Expr, beta: Expr, delta: Expr, f: Expr, j: int, var: Symbol) -> Expr:
    """∫1 / f**j for f = alpha*x**2 + beta*x + gamma, delta = 4*alpha*gamma - beta**2 != 0

    I_j = (2αx + β) / ((j-1) Δ f^(j-1)) + (2j - 3) 2α / ((j-1) Δ) * I_(j-1)
    """
    linear = 2 * alpha * var + beta
    if j == 1:
        if delta.is_negative:
            s = sqrt(-delta)
            return log_abs((linear - s) / (linear + s)) / s
        s = sqrt(delta)
        return 2 * atan(linear / s) / s
    return linear / ((j - 1) * delta * f ** (j - 1)) + (2 * j - 3) * 2 * alpha / ((j - 1) * delta) * _reciprocal_quadratic(
        alpha, beta, delta, f, j - 1, var
    )


def _integrate_quadratic_term(numerator: Expr, f: Expr, j: int, var: Symbol) -> Expr:
    """(B*x + C) / f**j

    B*x + C = B/(2α) * f' + (C - Bβ/(2α)): the first half is a logarithmic derivative (or a power of f),
    the second half is the reduction formula.
    """
    alpha, beta, gamma = sympy.Poly(f, var).all_coeffs()
    numerator_poly = sympy.Poly(numerator, var)
    B = numerator_poly.coeff_monomial(var)
    C = numerator_poly.coeff_monomial(1)
    delta = sympy.simplify(4 * alpha * gamma - beta**2)

    derivative_coeff = B / (2 * alpha)
    if j == 1:
        # positive definite quadratic: no absolute value needed
        log_part = log(f) if (delta.is_positive and alpha.is_positive) else log_abs(f)
        answer = derivative_coeff * log_part
    else:
        answer = derivative_coeff * f ** (1 - j) / (1 - j)

    rest = sympy.simplify(C - B * beta / (2 * alpha))
    if rest != 0:
        answer += rest * _reciprocal_quadratic(alpha, beta, delta, f, j, var)
    return answer


def integrate_rational(expr: Expr, var: Symbol) -> Optional[Expr]:
    """∫P/Q. Returns None if expr isn't a rational function in var with var in the denominator."""
    fraction = _split_fraction(expr, var)
    if fraction is None:
        return None
    numerator, denominator = fraction

    try:
        quotient, remainder = polynomial_divide(
            to_const_polynomial(numerator, var), to_const_polynomial(denominator, var)
        )
    except AssertionError:
        return None

    answer = integrate_polynomial(quotient, var)
    if degree(remainder) < 0:
        return answer
    remainder_expr = polynomial_to_expr(remainder, var)

    _, factors = sympy.factor_list(denominator, var)
    factors = [(f, m) for f, m in factors if f.has(var)]
    if any(sympy.degree(f, var) > 2 for f, _ in factors):
        from .risch import integrate_rational_function

        rest = integrate_rational_function(remainder_expr / denominator, var)
        if rest is None:
            return None
        return answer + rest

    # constant factors that factor_list split off without var
    lead = sympy.cancel(denominator / sympy.Mul(*[f**m for f, m in factors]))

    terms = _decompose(remainder_expr, lead, factors, var)
    if terms is None:
        return None

    for term_numerator, f, j in terms:
        if term_numerator == 0:
            continue
        if sympy.degree(f, var) == 1:
            answer += _integrate_linear_term(term_numerator, f, j, var)
        else:
            answer += _integrate_quadratic_term(term_numerator, f, j, var)
    return answer


def partial_fractions(expr: Expr, var: Symbol) -> Optional[Dict[Tuple[Expr, int], Expr]]:
    """{(factor, power): numerator} for the proper part of expr. Only for linear and quadratic factors."""
    fraction = _split_fraction(expr, var)
    if fraction is None:
        return None
    numerator, denominator = fraction
    _, remainder = polynomial_divide(to_const_polynomial(numerator, var), to_const_polynomial(denominator, var))
    if degree(remainder) < 0:
        return {}

    _, factors = sympy.factor_list(denominator, var)
    factors = [(f, m) for f, m in factors if f.has(var)]
    if any(sympy.degree(f, var) > 2 for f, _ in factors):
        return None
    lead = sympy.cancel(denominator / sympy.Mul(*[f**m for f, m in factors]))
    terms = _decompose(polynomial_to_expr(remainder, var), lead, factors, var)
    if terms is None:
        return None
    return {(f, j): n for n, f, j in terms if n != 0}


class RationalFunctions(Strategy):
    """P(x) / Q(x) by partial fractions"""

    def try_integrate(self, expr: Expr, var: Symbol, depth: int) -> Optional[Expr]:
        return integrate_rational(expr, var)
