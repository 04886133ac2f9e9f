# structures shared by all the integration layers

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Sequence

import sympy
from sympy import Add, Expr, Symbol

from .integral_table import check_integral_table
from .result import Closed, NonElementary

if TYPE_CHECKING:
    from .integration import Integration


class Strategy(ABC):
    "An integration layer -- base class"
    # try_integrate never raises for a shape it doesn't handle; it returns None and the
    # dispatcher moves on to the next layer.

    # Only the Risch layer ever sets this: a proof that there is no elementary antiderivative.
    non_elementary: Optional[NonElementary] = None

    def __init__(self, integration: "Integration"):
        self._integration = integration

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def try_integrate(self, expr: Expr, var: Symbol, depth: int) -> Optional[Expr]:
        raise NotImplementedError("Not implemented")

    def _integrate(self, expr: Expr, var: Symbol, depth: int) -> Optional[Expr]:
        """Integrates a sub-problem one level deeper.

        Always goes back through the dispatcher, which simplifies expr and enforces the depth bound.
        """
        result = self._integration.integrate_at_depth(expr, var, depth + 1)
        if isinstance(result, Closed):
            return result.expr
        return None

    def _integrate_without_heuristics(self, expr: Expr, var: Symbol, depth: int) -> Optional[Expr]:
        """Like _integrate but only with the cheap layers. used for finding v = ∫dv in by parts."""
        result = self._integration.integrate_without_heuristics(expr, var, depth + 1)
        if isinstance(result, Closed):
            return result.expr
        return None


class TableLookup(Strategy):
    """Standard integrals from the integration table"""

    def try_integrate(self, expr: Expr, var: Symbol, depth: int) -> Optional[Expr]:
        return check_integral_table(expr, var)


class Linearity(Strategy):
    """∫(f + g) = ∫f + ∫g

    Products that expand into sums get expanded first, ex: x * (x + e^x).
    """

    @staticmethod
    def _terms(expr: Expr) -> Optional[Sequence[Expr]]:
        if isinstance(expr, Add):
            return expr.args
        expanded = sympy.expand(expr)
        if isinstance(expanded, Add):
            return expanded.args
        return None

    def try_integrate(self, expr: Expr, var: Symbol, depth: int) -> Optional[Expr]:
        terms = self._terms(expr)
        if terms is None:
            return None

        answers = []
        for term in terms:
            answer = self._integrate(term, var, depth)
            if answer is None:
                return None
            answers.append(answer)
        return Add(*answers)
