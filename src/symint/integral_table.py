"""Integration table

Each integrand is reduced to a shape signature (function name + what kind of argument it has) and
looked up in TABLE. Arguments may be any linear a*x + b: the rule is written for the bare argument u
and divided by a.
"""

from typing import Callable, Dict, Hashable, Optional, Tuple

from sympy import (
    Expr,
    Function,
    Integer,
    Mul,
    Pow,
    Rational,
    Symbol,
    acos,
    asin,
    atan,
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
    simplify,
    sin,
    sinh,
    sqrt,
    tan,
    tanh,
)

from .expr import linear_coefficients, log_abs, quadratic_coefficients, split_constant
from .utils import ExprFn

TableRule = Callable[[Expr, Symbol], Optional[Expr]]

# f(u) -> F(u)
STANDARD_INTEGRALS: Dict[type, ExprFn] = {
    sin: lambda u: -cos(u),
    cos: sin,
    tan: lambda u: -log_abs(cos(u)),
    cot: lambda u: log_abs(sin(u)),
    sec: lambda u: log_abs(sec(u) + tan(u)),
    csc: lambda u: -log_abs(csc(u) + cot(u)),
    exp: exp,
    sinh: cosh,
    cosh: sinh,
    tanh: lambda u: log(cosh(u)),
    coth: lambda u: log_abs(sinh(u)),
    sech: lambda u: atan(sinh(u)),
    csch: lambda u: log_abs(tanh(u / 2)),
    log: lambda u: u * log(u) - u,
    asin: lambda u: u * asin(u) + sqrt(1 - u**2),
    acos: lambda u: u * acos(u) - sqrt(1 - u**2),
    atan: lambda u: u * atan(u) - log(u**2 + 1) / 2,
}

# f(u)**n -> F(u)
POWER_INTEGRALS: Dict[Tuple[type, int], ExprFn] = {
    (sin, 2): lambda u: u / 2 - sin(2 * u) / 4,
    (cos, 2): lambda u: u / 2 + sin(2 * u) / 4,
    (tan, 2): lambda u: tan(u) - u,
    (cot, 2): lambda u: -cot(u) - u,
    (sec, 2): tan,
    (csc, 2): lambda u: -cot(u),
    (sinh, 2): lambda u: sinh(2 * u) / 4 - u / 2,
    (cosh, 2): lambda u: sinh(2 * u) / 4 + u / 2,
    (tanh, 2): lambda u: u - tanh(u),
    (coth, 2): lambda u: u - coth(u),
    (sech, 2): tanh,
    (csch, 2): lambda u: -coth(u),
    (sin, -1): lambda u: log_abs(tan(u / 2)),
    (cos, -1): lambda u: log_abs(sec(u) + tan(u)),
    (tan, -1): lambda u: log_abs(sin(u)),
    (cot, -1): lambda u: -log_abs(cos(u)),
    (sinh, -1): lambda u: log_abs(tanh(u / 2)),
    (cosh, -1): lambda u: atan(sinh(u)),
    (sin, -2): lambda u: -cot(u),
    (cos, -2): tan,
    (sinh, -2): lambda u: -coth(u),
    (cosh, -2): tanh,
}

# f(u) * g(u) -> F(u)
PRODUCT_INTEGRALS: Dict[frozenset, ExprFn] = {
    frozenset((sec, tan)): sec,
    frozenset((csc, cot)): lambda u: -csc(u),
    frozenset((sech, tanh)): lambda u: -sech(u),
    frozenset((csch, coth)): lambda u: -csch(u),
    frozenset((sin, cos)): lambda u: sin(u) ** 2 / 2,
    frozenset((sinh, cosh)): lambda u: sinh(u) ** 2 / 2,
}

QUADRATIC_EXPONENTS = (Integer(-1), Rational(-1, 2), Rational(1, 2))


def _is_unary_of_linear(expr: Expr, var: Symbol) -> bool:
    return isinstance(expr, Function) and len(expr.args) == 1 and linear_coefficients(expr.args[0], var) is not None


def _var_exponent(expr: Expr, var: Symbol) -> Optional[Expr]:
    """n if expr == var**n for a constant n"""
    if expr == var:
        return Integer(1)
    if isinstance(expr, Pow) and expr.base == var and not expr.exp.has(var):
        return expr.exp
    return None


def shape_signature(expr: Expr, var: Symbol) -> Optional[Tuple[Hashable, ...]]:
    """A hashable description of the integrand's shape, or None if it has no table shape."""
    if expr == var:
        return ("linear-pow",)

    if isinstance(expr, Pow):
        base, exponent = expr.args
        if not exponent.has(var):
            if linear_coefficients(base, var) is not None:
                return ("linear-pow",)
            if _is_unary_of_linear(base, var) and exponent.is_Integer:
                return ("fn-pow", base.func, int(exponent))
            if exponent in QUADRATIC_EXPONENTS and quadratic_coefficients(base, var) is not None:
                return ("quadratic-pow", exponent)
            return None
        if not base.has(var) and linear_coefficients(exponent, var) is not None:
            return ("exp-base",)
        return None

    if _is_unary_of_linear(expr, var):
        return ("fn", expr.func)

    if isinstance(expr, Mul) and len(expr.args) == 2:
        f, g = expr.args
        if _is_unary_of_linear(f, var) and _is_unary_of_linear(g, var) and f.args[0] == g.args[0]:
            return ("fn-product", frozenset((f.func, g.func)))
        for a, b in ((f, g), (g, f)):
            if b == log(var) and _var_exponent(a, var) is not None:
                return ("power-log",)
            if _var_exponent(a, var) == -1 and b == 1 / log(var):
                return ("log-reciprocal",)

    return None


def _linear_rule(F: ExprFn) -> TableRule:
    def rule(expr: Expr, var: Symbol) -> Expr:
        inner = expr.args[0]
        a, _ = linear_coefficients(inner, var)
        return F(inner) / a

    return rule


def _power_rule(F: ExprFn) -> TableRule:
    def rule(expr: Expr, var: Symbol) -> Expr:
        inner = expr.base.args[0]
        a, _ = linear_coefficients(inner, var)
        return F(inner) / a

    return rule


def _product_rule(F: ExprFn) -> TableRule:
    def rule(expr: Expr, var: Symbol) -> Expr:
        inner = expr.args[0].args[0]
        a, _ = linear_coefficients(inner, var)
        return F(inner) / a

    return rule


def _linear_power(expr: Expr, var: Symbol) -> Expr:
    if expr == var:
        return var**2 / 2
    base, n = expr.args
    a, _ = linear_coefficients(base, var)
    if n == -1:
        return log_abs(base) / a
    return base ** (n + 1) / (a * (n + 1))


def _exponential(expr: Expr, var: Symbol) -> Expr:
    base, exponent = expr.args
    a, _ = linear_coefficients(exponent, var)
    return expr / (a * log(base))


def _quadratic_power(expr: Expr, var: Symbol) -> Optional[Expr]:
    """1/q, 1/sqrt(q) and sqrt(q) for a quadratic q. Completes the square first:
    q = a*(x + h)**2 + k
    """
    base, n = expr.args
    a, b, c = quadratic_coefficients(base, var)
    h = b / (2 * a)
    k = simplify(c - b**2 / (4 * a))
    X = var + h

    if n == -1:
        if k == 0:
            return -1 / (a * X)
        ratio = k / a
        if ratio.is_positive:
            s = sqrt(ratio)
            return atan(X / s) / (a * s)
        if ratio.is_negative:
            s = sqrt(-ratio)
            return log_abs((X - s) / (X + s)) / (2 * a * s)
        return None

    if k == 0:
        return None
    if n == Rational(-1, 2):
        if a.is_negative and k.is_positive:
            return asin(X * sqrt(-a / k)) / sqrt(-a)
        if a.is_positive:
            return log_abs(sqrt(a) * X + sqrt(base)) / sqrt(a)
        return None

    # n == 1/2
    if a.is_negative and k.is_positive:
        return X * sqrt(base) / 2 + k / (2 * sqrt(-a)) * asin(X * sqrt(-a / k))
    if a.is_positive:
        return X * sqrt(base) / 2 + k / (2 * sqrt(a)) * log_abs(sqrt(a) * X + sqrt(base))
    return None


def _power_log(expr: Expr, var: Symbol) -> Expr:
    """x**n * ln(x)"""
    (n,) = [_var_exponent(f, var) for f in expr.args if f != log(var)]
    if n == -1:
        return log(var) ** 2 / 2
    return var ** (n + 1) * (log(var) / (n + 1) - 1 / (n + 1) ** 2)


def _log_reciprocal(expr: Expr, var: Symbol) -> Expr:
    """1 / (x ln(x))"""
    return log_abs(log(var))


TABLE: Dict[Hashable, TableRule] = {
    ("linear-pow",): _linear_power,
    ("exp-base",): _exponential,
    ("power-log",): _power_log,
    ("log-reciprocal",): _log_reciprocal,
    **{("quadratic-pow", n): _quadratic_power for n in QUADRATIC_EXPONENTS},
    **{("fn", f): _linear_rule(F) for f, F in STANDARD_INTEGRALS.items()},
    **{("fn-pow", f, n): _power_rule(F) for (f, n), F in POWER_INTEGRALS.items()},
    **{("fn-product", fs): _product_rule(F) for fs, F in PRODUCT_INTEGRALS.items()},
}


def check_integral_table(integrand: Expr, var: Symbol) -> Optional[Expr]:
    """Checks if integrand is directly solveable from the lookup table.

    Returns None if not solveable and returns the integral otherwise.
    """
    if not integrand.has(var):
        return integrand * var

    const, expr = split_constant(integrand, var)
    signature = shape_signature(expr, var)
    if signature is None:
        return None
    rule = TABLE.get(signature)
    if rule is None:
        return None
    answer = rule(expr, var)
    if answer is None:
        return None
    return const * answer
