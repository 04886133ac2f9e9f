"""Dense univariate polynomials as numpy object arrays.

The i-th entry is the coefficient of var**i (ascending order). Entries are sympy expressions so
coefficients can be exact rationals or symbols other than var.
"""

from typing import Tuple

import numpy as np
import sympy
from sympy import Expr, Poly, Symbol

Polynomial = np.ndarray  # has to be 1-D array


def to_const_polynomial(expr: Expr, var: Symbol) -> Polynomial:
    try:
        poly = Poly(sympy.expand(expr), var)
    except sympy.PolynomialError as e:
        raise AssertionError(f"Not allowed expr for polynomial: {expr}") from e
    coeffs = poly.all_coeffs()
    assert not any(c.has(var) for c in coeffs), f"Not allowed expr for polynomial: {expr}"
    return np.array(list(reversed(coeffs)), dtype=object)


def polynomial_to_expr(poly: Polynomial, var: Symbol) -> Expr:
    final = sympy.Integer(0)
    for i, element in enumerate(poly):
        final += element * var**i
    return final


def rid_ending_zeros(lis: Polynomial) -> Polynomial:
    num_zeros = 0
    for i in reversed(range(len(lis))):
        if sympy.simplify(lis[i]) == 0:
            num_zeros += 1
        else:
            break
    new_list = lis[: len(lis) - num_zeros]
    return np.array(new_list, dtype=object)


def degree(poly: Polynomial) -> int:
    """Degree of the polynomial. The zero polynomial has degree -1."""
    return len(rid_ending_zeros(poly)) - 1


def polynomial_divide(numerator: Polynomial, denominator: Polynomial) -> Tuple[Polynomial, Polynomial]:
    """Long division. Returns (quotient, remainder) with deg remainder < deg denominator."""
    numerator = rid_ending_zeros(numerator.copy())
    denominator = rid_ending_zeros(denominator)
    if denominator.size == 0:
        raise ZeroDivisionError("polynomial division by zero")

    if numerator.size < denominator.size:
        return np.array([sympy.Integer(0)], dtype=object), numerator

    quotient = np.array([sympy.Integer(0)] * (len(numerator) - len(denominator) + 1), dtype=object)
    while numerator.size >= denominator.size:
        quotient_degree = len(numerator) - len(denominator)
        quotient_coeff = sympy.cancel(numerator[-1] / denominator[-1])
        quotient[quotient_degree] = quotient_coeff
        shifted = np.concatenate(([sympy.Integer(0)] * quotient_degree, denominator * quotient_coeff))
        numerator = np.array([sympy.expand(c) for c in numerator - shifted], dtype=object)
        numerator = rid_ending_zeros(numerator)

    if numerator.size == 0:
        numerator = np.array([sympy.Integer(0)], dtype=object)
    return quotient, numerator


def integrate_polynomial(poly: Polynomial, var: Symbol) -> Expr:
    """Power rule, term by term."""
    final = sympy.Integer(0)
    for i, element in enumerate(poly):
        final += element * var ** (i + 1) / (i + 1)
    return final
