"""Integration outcomes.

Closed: a verified antiderivative.
NonElementary: a proof that no elementary antiderivative exists.
Unknown: the procedure was inconclusive; callers fall back to an unevaluated integral.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Union

from sympy import Expr


@dataclass(frozen=True)
class Closed:
    expr: Expr
    strategy: Optional[str] = None

    def __repr__(self):
        return f"Closed({self.expr})"


@dataclass(frozen=True)
class NonElementary:
    # which argument settled it, ex: "RDE y' + 2*x*y = 1 has no solution in C(x)"
    reason: str = ""
    # the special function the integral is usually written with, when we recognise it
    special_function: Optional[str] = None

    def __repr__(self):
        return "NonElementary()"


@dataclass(frozen=True)
class Unknown:
    reason: str = ""

    def __repr__(self):
        return "Unknown()"


IntegrationResult = Union[Closed, NonElementary, Unknown]


class Step(NamedTuple):
    """One successful layer application, recorded for debugging."""

    depth: int
    integrand: Expr
    strategy: str
    answer: Expr
