from typing import List, Optional, Union

from sympy import Expr, Integer, Mul, Pow, Rational, cos, sin


def _perform_on_terms(
    a: Union[sin, cos], b: Union[sin, cos], *, multiplier: Optional[Expr] = None
) -> List[Expr]:
    """Returns the result of applying product-to-sum on a and b"""
    c = Rational(1, 2) if multiplier is None else multiplier / 2
    u, v = a.args[0], b.args[0]

    if isinstance(a, sin) and isinstance(b, cos):
        return [sin(u + v) * c, sin(u - v) * c]
    elif isinstance(a, cos) and isinstance(b, sin):
        return [sin(u + v) * c, -sin(u - v) * c]
    elif isinstance(a, cos) and isinstance(b, cos):
        return [cos(u + v) * c, cos(u - v) * c]
    else:
        return [cos(u - v) * c, -cos(u + v) * c]


def _is_valid_power(expr: Expr) -> bool:
    return isinstance(expr, Pow) and isinstance(expr.base, (sin, cos)) and expr.exp.is_Integer and expr.exp > 1


def _trig_factors(expr: Expr) -> Optional[List[Union[sin, cos]]]:
    """sin(x)**2 * cos(3x) -> [sin(x), sin(x), cos(3x)]. None if expr has any other kind of factor."""
    factors = []
    for factor in Mul.make_args(expr):
        if isinstance(factor, (sin, cos)):
            factors.append(factor)
        elif _is_valid_power(factor):
            factors.extend([factor.base] * int(factor.exp))
        else:
            return None
    return factors


def product_to_sum_unit(expr: Expr) -> Optional[List[Expr]]:
    """Returns the result of applying product-to-sum on expr, if possible.

    expr is a (constant times a) product of 2 or more sines and cosines, counting powers.
    Returns the terms of a sum: each one is a constant or a constant times a single sin/cos.
    """
    const, new_expr = expr.as_coeff_Mul()
    trig = _trig_factors(new_expr)
    if trig is None or len(trig) < 2:
        return None

    # fold the factors in one at a time
    terms = [const * trig[0]]
    for factor in trig[1:]:
        new_terms = []
        for term in terms:
            coeff, t = term.as_coeff_Mul()
            if isinstance(t, (sin, cos)):
                new_terms.extend(_perform_on_terms(t, factor, multiplier=coeff))
            else:
                # cos(0) came out as 1
                new_terms.append(term * factor)
        terms = [t for t in new_terms if t != 0]

    return terms or [Integer(0)]
