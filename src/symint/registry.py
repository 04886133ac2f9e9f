"""Known antiderivatives of the elementary functions, by function name.

The registry is built once at import time and is read-only afterwards; integration only ever calls
`lookup_antiderivative`.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Union

from sympy import (
    acos,
    acot,
    acosh,
    asin,
    asinh,
    atan,
    atanh,
    cos,
    cosh,
    cot,
    coth,
    csc,
    csch,
    erf,
    exp,
    log,
    pi,
    sec,
    sech,
    sin,
    sinh,
    sqrt,
    tan,
    tanh,
)

from .expr import log_abs
from .utils import ExprFn


@dataclass(frozen=True)
class Simple:
    """F(x), valid only when the function is applied to the variable itself."""

    antiderivative: ExprFn


@dataclass(frozen=True)
class LinearSubstitution:
    """F(u) for f(u). Applied to a*x + b, the integral is F(a*x + b) / a."""

    antiderivative: ExprFn


@dataclass(frozen=True)
class ByParts:
    """Integrate f(x) * 1 by parts with u = f(x), dv = dx."""


AntiderivativeRule = Union[Simple, LinearSubstitution, ByParts]


_REGISTRY: Mapping[str, AntiderivativeRule] = MappingProxyType(
    {
        "sin": LinearSubstitution(lambda u: -cos(u)),
        "cos": LinearSubstitution(sin),
        "tan": LinearSubstitution(lambda u: -log_abs(cos(u))),
        "cot": LinearSubstitution(lambda u: log_abs(sin(u))),
        "sec": LinearSubstitution(lambda u: log_abs(sec(u) + tan(u))),
        "csc": LinearSubstitution(lambda u: -log_abs(csc(u) + cot(u))),
        "exp": LinearSubstitution(exp),
        "sinh": LinearSubstitution(cosh),
        "cosh": LinearSubstitution(sinh),
        "tanh": LinearSubstitution(lambda u: log(cosh(u))),
        "coth": LinearSubstitution(lambda u: log_abs(sinh(u))),
        "sech": LinearSubstitution(lambda u: atan(sinh(u))),
        "csch": LinearSubstitution(lambda u: log_abs(tanh(u / 2))),
        "log": ByParts(),
        "asin": ByParts(),
        "acos": ByParts(),
        "atan": ByParts(),
        "acot": ByParts(),
        "asinh": ByParts(),
        "acosh": ByParts(),
        "atanh": ByParts(),
        "erf": Simple(lambda x: x * erf(x) + exp(-(x**2)) / sqrt(pi)),
    }
)


def lookup_antiderivative(function_name: str) -> Optional[AntiderivativeRule]:
    return _REGISTRY.get(function_name)


def registered_functions():
    return list(_REGISTRY.keys())

