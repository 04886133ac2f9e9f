from sympy import symbols

from symint.debug.test_utils import x
from symint.linalg import coefficient_equations, solve_linear

a, b, c = symbols("a b c")


def test_coefficient_equations():
    assert set(coefficient_equations(a * x**2 + (b - 1) * x + c, [x])) == {a, b - 1, c}
    assert coefficient_equations(x - x, [x]) == []


def test_solve_linear():
    assert solve_linear([a + b - 3, a - b - 1], [a, b]) == {a: 2, b: 1}
    # inconsistent
    assert solve_linear([a - 1, a - 2], [a]) is None
    # underdetermined: free unknowns are set to 0
    assert solve_linear([a + b - 2], [a, b]) == {a: 2, b: 0}
    assert solve_linear([], [a, b]) == {a: 0, b: 0}
