"""Small helpers around sympy expressions.

sympy owns the expression tree, the simplifier and differentiation. Everything in here is glue
that the integration layers share: casting inputs, pulling out constants, recognising linear
arguments, and the ln|u| convention for logarithms.
"""

from functools import wraps
from typing import Optional, Tuple

import sympy
from sympy import Abs, Expr, Poly, Symbol, log

from .utils import random_id


def _cast(x):
    if isinstance(x, (tuple, list)):
        return type(x)(_cast(el) for el in x)
    if isinstance(x, (bool, dict, type)) or x is None:
        return x
    return sympy.sympify(x)


def cast(func):
    """Decorator to cast all arguments to sympy expressions."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        return func(*map(_cast, args), **{k: _cast(v) for k, v in kwargs.items()})

    return wrapper


def nesting(expr: Expr, var: Optional[Symbol] = None) -> int:
    """
    Compute the nesting amount (complexity) of an expression
    If var is provided, only count the nesting of the subexpression containing var

    >>> nesting(x**2, x)
    2
    >>> nesting(x * y**2, x)
    2
    """
    if var is not None and not expr.has(var):
        return 0
    if not expr.args:
        return 1
    return 1 + max(nesting(arg, var) for arg in expr.args)


def split_constant(expr: Expr, var: Symbol) -> Tuple[Expr, Expr]:
    """Returns (constant factor, rest) such that constant * rest == expr."""
    return expr.as_independent(var, as_Add=False)


def linear_coefficients(expr: Expr, var: Symbol) -> Optional[Tuple[Expr, Expr]]:
    """Returns (a, b) if expr == a*var + b with a != 0, None otherwise."""
    if not expr.has(var):
        return None
    try:
        poly = Poly(expr, var)
    except (sympy.PolynomialError, AttributeError):
        return None
    if poly.degree() != 1 or any(c.has(var) for c in poly.all_coeffs()):
        return None
    a, b = poly.all_coeffs()
    return a, b


def quadratic_coefficients(expr: Expr, var: Symbol) -> Optional[Tuple[Expr, Expr, Expr]]:
    """Returns (a, b, c) if expr == a*var**2 + b*var + c with a != 0, None otherwise."""
    if not expr.has(var):
        return None
    try:
        poly = Poly(expr, var)
    except (sympy.PolynomialError, AttributeError):
        return None
    if poly.degree() != 2 or any(c.has(var) for c in poly.all_coeffs()):
        return None
    a, b, c = poly.all_coeffs()
    return a, b, c


def log_abs(expr: Expr) -> Expr:
    """ln|expr|. Real-valued antiderivatives are written with absolute values inside logs."""
    if expr.is_positive:
        return log(expr)
    return log(Abs(expr))


def strip_log_abs(expr: Expr) -> Expr:
    """Replaces ln|u| with ln(u). They have the same derivative wherever u != 0."""
    return expr.replace(
        lambda e: isinstance(e, log) and isinstance(e.args[0], Abs),
        lambda e: log(e.args[0].args[0]),
    )


def generate_intermediate_var() -> Symbol:
    return Symbol(f"u_{random_id(10)}")
