"""Strategy dispatch.

Layers are tried cheapest first; the first one that returns an answer wins, and every answer is
checked by differentiating it before it's accepted. Layers that need to integrate a sub-problem go
back through `integrate_at_depth` with depth + 1, so recursion is bounded by MAX_DEPTH.
"""

import time
import warnings
from typing import Dict, List, Optional, Sequence, Set, Tuple, Type, Union

import sympy
from sympy import Dummy, Expr, Integral, Symbol

from .by_parts import ByParts
from .debug.utils import print_trace
from .expr import cast, split_constant
from .function_integrals import FunctionRegistry
from .rational import RationalFunctions
from .result import Closed, IntegrationResult, NonElementary, Step, Unknown
from .risch import Risch
from .strategy import Linearity, Strategy, TableLookup
from .substitution import Substitution
from .trigonometric import Trigonometric
from .verification import is_antiderivative

# fixed priority order: fast & high confidence first, Risch last
STRATEGIES: List[Type[Strategy]] = [
    TableLookup,
    RationalFunctions,
    FunctionRegistry,
    ByParts,
    Substitution,
    Trigonometric,
    Linearity,
    Risch,
]

# no layer in here can blow up, used for v = ∫dv in by parts
SAFE_STRATEGIES: List[Type[Strategy]] = [TableLookup, RationalFunctions, FunctionRegistry, Linearity]

# cache and cycle keys are written in terms of this, so the same integrand in a fresh u_ variable is a hit
_KEY_VAR = Dummy("var")


def _find_var(expr: Expr) -> Symbol:
    symbols = expr.free_symbols
    if len(symbols) != 1:
        raise ValueError(f"Please specify the variable of integration for {expr}")
    return list(symbols)[0]


@cast
def integrate(
    expr: Expr,
    bounds: Optional[Union[Symbol, Tuple[Expr, Expr], Tuple[Symbol, Expr, Expr]]] = None,
    **kwargs,
) -> Expr:
    """
    Integrates an expression.

    Args:
        expr: the integrand
        bounds: (var, a, b) where var is the variable of integration and a, b are the integration bounds.
            can omit var if integrand contains exactly one symbol. omit a, b for an indefinite integral.
    kwargs:
        debug: prints the trace of layers used + enables the python debugger right before returning.
            also makes a wrong answer from any layer fail loudly instead of being skipped.
        max_depth: recursion bound for sub-integrals (default Integration.MAX_DEPTH)

        Examples of valid uses:
            integrate(x**2)
            integrate(x*y, x)
            integrate(3*x + tan(x), (2, pi))
            integrate(x*y+3*x, (x, 3, 4))

    Returns:
        The antiderivative (without + C), or the definite integral.
        An unevaluated sympy Integral if no antiderivative can be found or none exists.
    """
    # If variable of integration isn't specified, set it.
    if bounds is None:
        bounds = _find_var(expr)
    elif isinstance(bounds, tuple) and len(bounds) == 2:
        bounds = (_find_var(expr), bounds[0], bounds[1])

    integration = Integration(**kwargs)
    if isinstance(bounds, Symbol):
        result = integration.integrate(expr, bounds)
        if isinstance(result, Closed):
            return result.expr
        return Integral(expr, bounds)
    if isinstance(bounds, tuple) and len(bounds) == 3:
        return integration.integrate_bounds(expr, bounds)
    raise ValueError(f"Invalid bounds: {bounds}")


@cast
def integrate_result(expr: Expr, var: Symbol, **kwargs) -> IntegrationResult:
    """Like integrate, but returns the Closed / NonElementary / Unknown result itself."""
    return Integration(**kwargs).integrate(expr, var)


@cast
def definite_integrate(expr: Expr, var: Symbol, lower: Expr, upper: Expr, **kwargs) -> Expr:
    """F(upper) - F(lower). Discontinuities between the bounds are the caller's problem."""
    return Integration(**kwargs).integrate_bounds(expr, (var, lower, upper))


class Integration:
    """
    Keeps track of integration work as we go
    """

    logger = None

    # tweakable params
    MAX_DEPTH = 20

    def __init__(
        self,
        *,
        debug: bool = False,
        max_depth: Optional[int] = None,
        strategies: Optional[Sequence[Type[Strategy]]] = None,
    ):
        self._debug = debug
        self._max_depth = self.MAX_DEPTH if max_depth is None else max_depth
        self._strategies = STRATEGIES if strategies is None else list(strategies)
        # only settled results are cached: a closed form or a proof
        self._cache: Dict[Expr, IntegrationResult] = {}
        self._in_progress: Set[Expr] = set()
        self.steps: List[Step] = []

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def integrate(self, integrand: Expr, var: Symbol) -> IntegrationResult:
        """Performs indefinite integral."""
        start = time.time()
        result = self.integrate_at_depth(integrand, var, 0)
        if isinstance(result, Closed):
            result = Closed(sympy.simplify(result.expr), result.strategy)

        if self.logger is not None:
            self.logger.log(integrand, time.time() - start, self.steps, result)

        if not isinstance(result, Closed):
            message = f"Failed to integrate {integrand} wrt {var}"
            if isinstance(result, NonElementary):
                message = f"{integrand} has no elementary antiderivative wrt {var}"
                if result.special_function:
                    message += f" (it's usually written with {result.special_function})"
            warnings.warn(message)
            if self._debug:
                print_trace(self.steps)
                breakpoint()
            return result

        if self._debug:
            print_trace(self.steps)
            breakpoint()
        return result

    def integrate_bounds(self, expr: Expr, bounds: Tuple[Symbol, Expr, Expr]) -> Expr:
        """Performs definite integral."""
        x, a, b = bounds
        result = self.integrate(expr, x)
        if not isinstance(result, Closed):
            return Integral(expr, (x, a, b))
        integral = result.expr
        return sympy.simplify(_evaluate_at(integral, x, b) - _evaluate_at(integral, x, a))

    def integrate_at_depth(self, expr: Expr, var: Symbol, depth: int) -> IntegrationResult:
        """The depth-bounded entry point every layer recurses through."""
        return self._integrate(expr, var, depth, self._strategies)

    def integrate_without_heuristics(self, expr: Expr, var: Symbol, depth: int) -> IntegrationResult:
        """Only the cheap layers. used for byparts checking if dv is integrateable."""
        return self._integrate(expr, var, depth, SAFE_STRATEGIES)

    def _integrate(
        self, expr: Expr, var: Symbol, depth: int, strategies: Sequence[Type[Strategy]]
    ) -> IntegrationResult:
        # an un-simplified product of powers won't match anything later on
        expr = sympy.simplify(expr)
        if not expr.has(var):
            return Closed(expr * var, "Constant")
        if depth >= self._max_depth:
            return Unknown(f"recursion depth {depth} reached on {expr}")

        key = expr.xreplace({var: _KEY_VAR})
        if key in self._cache:
            return _from_key_var(self._cache[key], var)
        if key in self._in_progress:
            # came back around to something we're already integrating further up, ex: by parts cycles or
            # a substitution that maps the integrand onto itself in a new variable
            return Unknown(f"{expr} is already being integrated")

        # pull the constant out
        const, rest = split_constant(expr, var)
        self._in_progress.add(key)
        try:
            result = self._dispatch(rest, var, depth, strategies)
        finally:
            self._in_progress.discard(key)
        if isinstance(result, Closed):
            result = Closed(const * result.expr, result.strategy)

        if not isinstance(result, Unknown):
            self._cache[key] = _to_key_var(result, var)
        return result

    def _dispatch(
        self, expr: Expr, var: Symbol, depth: int, strategies: Sequence[Type[Strategy]]
    ) -> IntegrationResult:
        for strategy in strategies:
            tr = strategy(self)
            try:
                answer = tr.try_integrate(expr, var, depth)
            except Exception as e:
                # a layer blowing up on a shape it doesn't understand is a bug in the layer, not an answer
                if self._debug:
                    raise
                warnings.warn(f"{tr.name} raised {type(e).__name__} on {expr} wrt {var}: {e}")
                continue
            if tr.non_elementary is not None:
                return tr.non_elementary
            if answer is None:
                continue

            if not is_antiderivative(answer, expr, var):
                message = f"{tr.name} gave {answer} for {expr} wrt {var}, which doesn't differentiate back"
                if self._debug:
                    raise AssertionError(message)
                warnings.warn(message)
                continue

            self.steps.append(Step(depth, expr, tr.name, answer))
            return Closed(answer, tr.name)

        return Unknown(f"no layer could integrate {expr} wrt {var}")


def _to_key_var(result: IntegrationResult, var: Symbol) -> IntegrationResult:
    if isinstance(result, Closed):
        return Closed(result.expr.xreplace({var: _KEY_VAR}), result.strategy)
    return result


def _from_key_var(result: IntegrationResult, var: Symbol) -> IntegrationResult:
    if isinstance(result, Closed):
        return Closed(result.expr.xreplace({_KEY_VAR: var}), result.strategy)
    return result


def _evaluate_at(expr: Expr, var: Symbol, point: Expr) -> Expr:
    value = expr.subs(var, point)
    if value.has(sympy.nan, sympy.zoo):
        # removable singularity at the bound, ex: x*log(x) at 0
        value = sympy.limit(expr, var, point)
    return value
