"""The logarithmic part of an integral (Rothstein-Trager), and naming integrals that aren't elementary.

For a/d with d squarefree and normal, ∫a/d is elementary only if the roots of
    R(z) = resultant_t(d, a - z*Dd)
are all constants. The log part is then Σ c * log(gcd(d, a - c*Dd)) over the roots c.
"""

from typing import Callable, List, Optional, Tuple, Union

import sympy
from sympy import Dummy, Expr, Poly, Symbol, Wild, atan, cos, cosh, exp, log, sin, sinh

from ..result import NonElementary, Unknown
from .hermite import Derivation

LogTerms = List[Tuple[Expr, Expr]]


def residue_reduce(
    numerator: Expr,
    denominator: Expr,
    t: Symbol,
    derivation: Derivation,
    is_constant: Callable[[Expr], bool],
) -> Union[LogTerms, NonElementary, Unknown]:
    """[(c, v)] such that ∫numerator/denominator = Σ c*log(v) + (something without a denominator in t)."""
    a = Poly(numerator, t, field=True)
    d = Poly(denominator, t, field=True)
    if a.is_zero or d.degree() <= 0:
        return []

    z = Dummy("z")
    Dd = Poly(sympy.cancel(derivation(d.as_expr())), t, field=True)
    resultant = Poly(sympy.cancel(sympy.resultant(d.as_expr(), a.as_expr() - z * Dd.as_expr(), t)), z)
    if resultant.degree() <= 0:
        return []

    lc = resultant.LC()
    monic = [sympy.cancel(c / lc) for c in resultant.all_coeffs()]
    if not all(is_constant(c) for c in monic):
        return NonElementary(f"the residues of {numerator}/({denominator}) are not constants")

    R = Poly(monic, z)
    residues = sympy.roots(R)
    if sum(residues.values()) < R.degree():
        return Unknown(f"couldn't find the roots of {R.as_expr()}")

    logs = []
    for c in residues:
        v = d.gcd(Poly(a.as_expr() - c * Dd.as_expr(), t, field=True))
        if v.degree() <= 0:
            return Unknown(f"gcd for the residue {c} came out trivial")
        logs.append((c, v.monic().as_expr()))
    return logs


def log_part(logs: LogTerms) -> Expr:
    return sum((c * log(v) for c, v in logs), sympy.Integer(0))


def _real_imag(c: Expr) -> Tuple[Expr, Expr]:
    real, imag = sympy.expand_complex(c).as_real_imag()
    return sympy.simplify(real), sympy.simplify(imag)


def _has_conjugate(c: Expr, logs: LogTerms) -> bool:
    target = complex(sympy.N(c)).conjugate()
    return any(other.is_number and abs(complex(sympy.N(other)) - target) < 1e-9 for other, _ in logs)


def real_log_part(logs: LogTerms, var: Symbol) -> Expr:
    """log_part, with each conjugate pair of residues folded into a real log and an atan.

    c log(v) + conj(c) log(conj(v)) = a log(P**2 + Q**2) - 2 b atan(Q/P) for c = a + ib, v = P + iQ.
    Terms whose partner isn't there, or whose residue isn't a number, are left as they are.
    """
    real_var = Dummy("x", real=True)
    total = sympy.Integer(0)
    for c, v in logs:
        if not c.is_number or v.free_symbols - {var}:
            total += c * log(v)
            continue
        a, b = _real_imag(c)
        if b == 0 or b.is_positive is None or not _has_conjugate(c, logs):
            total += c * log(v)
            continue
        if b.is_negative:
            # the positive one of the pair writes both
            continue
        P, Q = sympy.expand_complex(v.xreplace({var: real_var})).as_real_imag()
        P, Q = P.xreplace({real_var: var}), Q.xreplace({real_var: var})
        total += a * log(P**2 + Q**2) - 2 * b * atan(Q / P)
    return total


def recognise_special_function(expr: Expr, var: Symbol) -> Optional[str]:
    """The special function the integral of expr is usually written in terms of, if it's a textbook one."""
    a = Wild("a", exclude=[var, 0])
    b = Wild("b", exclude=[var])

    match = expr.match(b * exp(a * var**2))
    if match is not None and match[b] != 0:
        return "erf" if match[a].is_negative else "erfi"

    patterns = [
        (b * exp(a * var) / var, "Ei"),
        (b * sin(a * var) / var, "Si"),
        (b * cos(a * var) / var, "Ci"),
        (b * sinh(a * var) / var, "Shi"),
        (b * cosh(a * var) / var, "Chi"),
        (b / log(var), "li"),
    ]
    for pattern, name in patterns:
        match = expr.match(pattern)
        if match is not None and match.get(b, 0) != 0:
            return name
    return None
