import pytest
from sympy import asinh, atan, erf, exp, gamma, log, pi, sqrt, tanh

from symint.debug.test_utils import assert_eq_plusc, assert_integral, x
from symint.function_integrals import FunctionRegistry
from symint.integration import Integration
from symint.registry import (
    _REGISTRY,
    ByParts,
    LinearSubstitution,
    Simple,
    lookup_antiderivative,
    registered_functions,
)


def test_lookup():
    assert isinstance(lookup_antiderivative("sin"), LinearSubstitution)
    assert isinstance(lookup_antiderivative("log"), ByParts)
    assert isinstance(lookup_antiderivative("erf"), Simple)
    assert lookup_antiderivative("gamma") is None
    assert "tanh" in registered_functions()


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        _REGISTRY["gamma"] = Simple(gamma)


def test_function_registry_layer():
    layer = FunctionRegistry(Integration())

    # LinearSubstitution: F(a*x + b) / a
    assert_eq_plusc(layer.try_integrate(tanh(3 * x + 2), x, 0), log(exp(6 * x + 4) + 1) / 3 - x)
    # ByParts with u = f(x), dv = dx
    assert_eq_plusc(layer.try_integrate(log(x), x, 0), x * log(x) - x)
    assert_eq_plusc(layer.try_integrate(atan(x), x, 0), x * atan(x) - log(x**2 + 1) / 2)
    # Simple only applies to the bare variable
    assert layer.try_integrate(erf(2 * x), x, 0) is None
    # not a single function application
    assert layer.try_integrate(x * log(x), x, 0) is None
    assert layer.try_integrate(gamma(x), x, 0) is None


def test_registry_integrals():
    assert_integral(erf(x), x * erf(x) + exp(-(x**2)) / sqrt(pi))
    assert_integral(asinh(x), x * asinh(x) - sqrt(x**2 + 1))
