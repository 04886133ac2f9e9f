from sympy import E, Rational, asin, cos, cot, csc, exp, log, pi, sec, sin, sqrt, symbols, tan

x, w, phi = symbols("x w phi")

# ALl are taken from tests.
BENCHMARKING_SUITE = [
    x**2 / sqrt(1 - x**3),
    (Rational(1, 15) - Rational(1, 360) * (x - 6)) * (1 - (40 - x) ** 2 / 875),
    cos(w * x - phi) * cos(w * x),
    sin(2 * x) / cos(2 * x),
    cos(x) ** 2,
    sin(x) ** 2,
    sin(w * x) * cos(w * x),
    1 / sqrt(-(x**2) + 10 * x + 11),
    log(x + 6) / x**2,
    sin(x) * cos(2 * x) * sin(2 * x),
    6 * E**x,
    x * cos(x),
    asin(x),
    (x + 8) / (x * (x + 6)),
    x * E ** (-x),
    x**2 * sin(pi * x),
    sec(2 * x) * tan(2 * x),
    E**x / (1 + E**x),
    5 * csc(x) ** 2,
    2 * csc(x) * cot(x),
    (2 * x - 5) ** 10,
    (x - 5) / (-2 * x + 2),
    tan(x) ** 5 * sec(x) ** 4,
    tan(x) ** 4,
    sin(x) ** 2 * cos(x) ** 3,
    sin(x) ** 5,
    # no elementary antiderivative
    exp(x**2),
    sin(x) / x,
]
