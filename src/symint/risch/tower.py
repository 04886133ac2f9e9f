"""Differential extension towers C(x)(t_1)...(t_n)

Every t_i is either exp(g) (Dt = Dg * t) or log(g) (Dt = Dg / g) for some g in the field below it.
Generators refer to each other by index only.

Building a tower follows the structure theorems: before adding a new generator we check whether the
new exp/log is already expressible with the ones we have (ex: exp(2x) = exp(x)**2, log(2x) = log(2) + log(x)).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import sympy
from sympy import (
    Dummy,
    Expr,
    Integer,
    Pow,
    Symbol,
    cos,
    cosh,
    cot,
    coth,
    csc,
    csch,
    exp,
    log,
    preorder_traversal,
    sec,
    sech,
    sin,
    sinh,
    tan,
    tanh,
)

from ..expr import nesting
from ..linalg import coefficient_equations, solve_linear

EXP = "exp"
LOG = "log"

_TRIG = (sin, cos, tan, cot, sec, csc)
_HYPERBOLIC = (sinh, cosh, tanh, coth, sech, csch)


class UnsupportedExtension(Exception):
    """The integrand needs something other than exp/log extensions (roots, inverse trig, special functions...)"""


@dataclass
class Generator:
    index: int
    kind: str
    # g, in terms of var and earlier generators
    argument: Expr
    symbol: Symbol
    # Dt in terms of var, earlier generators, and t itself for exps
    derivative: Expr
    depends_on: Tuple[int, ...]
    # what t stands for, in terms of var
    expr_in_var: Expr

    def __repr__(self):
        return f"{self.symbol} = {self.expr_in_var}"


def prepare(expr: Expr, var: Symbol) -> Tuple[Expr, bool]:
    """Rewrites expr with exp and log only. Returns (rewritten, whether there were trig functions)."""
    has_trig = expr.has(*_TRIG)
    if has_trig or expr.has(*_HYPERBOLIC):
        expr = expr.rewrite(exp)
    # a**g(x) = exp(g(x) log(a))
    expr = expr.replace(
        lambda e: isinstance(e, Pow) and e.exp.has(var),
        lambda e: exp(e.exp * log(e.base)),
    )
    return expr, has_trig


@dataclass
class DifferentialExtension:
    var: Symbol
    generators: List[Generator] = field(default_factory=list)
    # integrand after trig/hyperbolic functions are rewritten
    prepared: Optional[Expr] = None
    rewrote_trig: bool = False
    _replacements: Dict[Expr, Expr] = field(default_factory=dict)

    @classmethod
    def build(cls, expr: Expr, var: Symbol) -> "DifferentialExtension":
        prepared, has_trig = prepare(expr, var)
        tower = cls(var, prepared=prepared, rewrote_trig=has_trig)

        nodes = {n for n in preorder_traversal(prepared) if isinstance(n, (exp, log)) and n.has(var)}
        # inner ones first
        for node in sorted(nodes, key=lambda n: (nesting(n, var), str(n))):
            tower._add(node)

        tower._check_in_field(tower.to_field(prepared))
        return tower

    @property
    def symbols(self) -> List[Symbol]:
        return [g.symbol for g in self.generators]

    @property
    def integrand(self) -> Expr:
        return self.to_field(self.prepared)

    def to_field(self, expr: Expr) -> Expr:
        """x-expression -> element of C(x, t_1, ..., t_n)"""
        return expr.xreplace(self._replacements)

    def to_expr(self, expr: Expr) -> Expr:
        """element of the field -> x-expression"""
        return expr.xreplace({g.symbol: g.expr_in_var for g in self.generators})

    def derivative(self, expr: Expr, level: Optional[int] = None) -> Expr:
        """D(expr) in the field with the first `level` generators."""
        if level is None:
            level = len(self.generators)
        result = sympy.diff(expr, self.var)
        for g in self.generators[:level]:
            if expr.has(g.symbol):
                result += sympy.diff(expr, g.symbol) * g.derivative
        return result

    def is_constant(self, expr: Expr) -> bool:
        return not expr.has(self.var, *self.symbols)

    def log_derivative(self, g: Generator) -> Expr:
        """Dt/t for exps (= Dg), Dt for logs. The structure theorems are stated in these."""
        if g.kind == EXP:
            return self.derivative(g.argument, g.index)
        return g.derivative

    def _check_in_field(self, expr: Expr):
        if not expr.is_rational_function(self.var, *self.symbols):
            raise UnsupportedExtension(f"{expr} is not in a tower of exp/log extensions")

    def _add(self, node: Expr):
        if node in self._replacements:
            return
        argument = self.to_field(node.args[0])
        self._check_in_field(argument)
        if self.is_constant(argument):
            return

        if isinstance(node, exp):
            self._add_exp(node, argument)
        else:
            self._add_log(node, argument)

    def _dependence(self, target: Expr) -> Optional[Dict[int, Expr]]:
        """Rational r_i with target == Σ r_i * log_derivative(t_i), or None."""
        if not self.generators:
            return None
        unknowns = [Dummy(f"r{g.index}") for g in self.generators]
        identity = target - sum(r * self.log_derivative(g) for r, g in zip(unknowns, self.generators))
        equations = coefficient_equations(identity, [self.var, *self.symbols])
        solution = solve_linear(equations, unknowns)
        if solution is None:
            return None
        if not all(solution[r].is_Rational for r in unknowns):
            return None
        return {g.index: solution[r] for r, g in zip(unknowns, self.generators) if solution[r] != 0}

    def _add_exp(self, node: Expr, argument: Expr):
        deps = self._dependence(self.derivative(argument))
        if deps is None:
            self._new_generator(EXP, node, argument)
            return

        # exp(g) = exp(const) * Π t_i^r_i * Π g_j^r_j for exps t_i and logs t_j = log(g_j)
        for i, r in deps.items():
            if self.generators[i].kind == LOG and not r.is_Integer:
                raise UnsupportedExtension(f"{node} is algebraic over the tower")
        for i, r in list(deps.items()):
            if self.generators[i].kind == EXP and not r.is_Integer:
                self._rebase(i, r.q)
                deps[i] = r * r.q

        combination = sum(
            r * (self.generators[i].argument if self.generators[i].kind == EXP else self.generators[i].symbol)
            for i, r in deps.items()
        )
        const = sympy.simplify(argument - combination)
        if not self.is_constant(const):
            self._new_generator(EXP, node, argument)
            return

        value = exp(const)
        for i, r in deps.items():
            g = self.generators[i]
            value *= g.symbol**r if g.kind == EXP else g.argument**r
        self._replacements[node] = value

    def _add_log(self, node: Expr, argument: Expr):
        deps = self._dependence(sympy.cancel(self.derivative(argument) / argument))
        if deps is None:
            self._new_generator(LOG, node, argument)
            return

        # log(g) = const + Σ r_i g_i + Σ r_j t_j for exps t_i = exp(g_i) and logs t_j
        in_var = sum(
            r * (self.generators[i].expr_in_var.args[0] if self.generators[i].kind == EXP else self.generators[i].expr_in_var)
            for i, r in deps.items()
        )
        const = sympy.simplify(sympy.expand_log(node - in_var, force=True))
        if const.has(self.var):
            raise UnsupportedExtension(f"can't find the constant relating {node} to the tower")

        in_field = sum(
            r * (self.generators[i].argument if self.generators[i].kind == EXP else self.generators[i].symbol)
            for i, r in deps.items()
        )
        self._replacements[node] = const + in_field

    def _new_generator(self, kind: str, node: Expr, argument: Expr):
        index = len(self.generators)
        symbol = Dummy(f"t{index}")
        if kind == EXP:
            derivative = self.derivative(argument) * symbol
        else:
            derivative = sympy.cancel(self.derivative(argument) / argument)
        depends_on = tuple(g.index for g in self.generators if argument.has(g.symbol))
        self.generators.append(Generator(index, kind, argument, symbol, derivative, depends_on, node))
        self._replacements[node] = symbol

    def _depends_on(self, g: Generator, index: int) -> bool:
        """True if generator index shows up in g, directly or through the generators g is built from."""
        return any(i == index or self._depends_on(self.generators[i], index) for i in g.depends_on)

    def _rebase(self, index: int, q: Integer):
        """Replaces t_i = exp(g) with s = exp(g/q), t_i = s**q. Needed when exp(g/q) shows up after exp(g)."""
        old = self.generators[index]
        symbol = Dummy(f"t{index}")
        argument = old.argument / q

        swap = {old.symbol: symbol**q}
        for g in self.generators[index + 1 :]:
            if not self._depends_on(g, index):
                continue
            g.argument = g.argument.xreplace(swap)
            g.derivative = g.derivative.xreplace(swap)
        self._replacements = {k: v.xreplace(swap) for k, v in self._replacements.items()}

        self.generators[index] = Generator(
            index,
            EXP,
            argument,
            symbol,
            self.derivative(argument, index) * symbol,
            old.depends_on,
            exp(old.expr_in_var.args[0] / q),
        )
