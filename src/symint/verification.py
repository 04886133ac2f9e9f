"""Checks that a candidate antiderivative actually differentiates back to the integrand.

The symbolic check (simplify(F' - f) == 0) is tried first. sympy's simplify is not complete, so when
it can't decide we evaluate F' - f at random complex points with numpy.
"""

from typing import Optional

import numpy as np
import sympy
from sympy import Expr, Symbol

from .expr import strip_log_abs

NUM_TEST_POINTS = 12
RADIUS = 2.0
ABSTOL = 1e-8
RELTOL = 1e-6


def sample_points(n: int, radius: float = RADIUS, seed: Optional[int] = 0) -> np.ndarray:
    """n random points uniformly distributed inside a disk in the complex plane."""
    rng = np.random.default_rng(seed)
    r = radius * np.sqrt(rng.random(n))
    theta = 2 * np.pi * rng.random(n)
    return r * np.exp(1j * theta)


def derivative_difference(antiderivative: Expr, integrand: Expr, var: Symbol) -> Expr:
    return sympy.diff(strip_log_abs(antiderivative), var) - strip_log_abs(integrand)


def is_antiderivative(antiderivative: Expr, integrand: Expr, var: Symbol) -> bool:
    """True if d/dvar antiderivative == integrand, up to removable differences."""
    diff = derivative_difference(antiderivative, integrand, var)
    if diff == 0:
        return True
    try:
        if sympy.simplify(diff) == 0:
            return True
    except (TypeError, ValueError, NotImplementedError, RecursionError):
        pass
    return is_numerically_zero(diff, var)


def is_numerically_zero(expr: Expr, var: Symbol, n: int = NUM_TEST_POINTS) -> bool:
    """Evaluates expr at n random complex points. Other free symbols get random real values."""
    others = sorted(expr.free_symbols - {var}, key=str)
    rng = np.random.default_rng(1)
    if others:
        expr = expr.subs({s: sympy.Float(v) for s, v in zip(others, 0.5 + rng.random(len(others)))})

    try:
        fn = sympy.lambdify(var, expr, modules="numpy")
    except Exception:
        # lambdify can't print some nodes, ex: unevaluated Derivative or re of a non-real
        return False

    valid = 0
    with np.errstate(all="ignore"):
        for point in sample_points(n):
            try:
                value = complex(fn(point))
            except Exception:
                continue
            if not np.isfinite(value):
                continue
            if abs(value) > ABSTOL + RELTOL * max(1.0, abs(point)):
                return False
            valid += 1

    # most of the points need to be usable for this to mean anything
    return valid >= n // 2
