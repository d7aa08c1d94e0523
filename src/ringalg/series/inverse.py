# -----------------------------------------------------------------------------
#  inverse.py
#  Inverse circular and hyperbolic functions. All are odd, so every even
#  coefficient is zero.
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Any

import sympy as sp

from ringalg.combinatorics import alternate, factorial, power
from ringalg.fraction import fraction_field, make_fraction
from ringalg.registry import coefficients


def _central(T: Any, i: int):
    """i · 4^n · (n!)^2 with n = i // 2."""
    n = i // 2
    fn = factorial(T, n)
    return T.mul(T.inject_constant(i), T.mul(power(T, 4, n), T.mul(fn, fn)))


@coefficients(
    label="atan",
    description="arctan(x) = sum (-1)^n x^(2n+1) / (2n+1)",
    parity="odd",
    aliases=("arctan",),
    reference=sp.atan,
)
def atan(T: Any, i: int):
    if i % 2 == 0:
        return fraction_field(T).zero
    return make_fraction(T, alternate(T, i // 2), i)


@coefficients(
    label="asin",
    description="arcsin(x) = sum (2n)! x^(2n+1) / (4^n (n!)^2 (2n+1))",
    parity="odd",
    aliases=("arcsin",),
    reference=sp.asin,
)
def asin(T: Any, i: int):
    if i % 2 == 0:
        return fraction_field(T).zero
    return make_fraction(T, factorial(T, i - 1), _central(T, i))


@coefficients(
    label="asinh",
    description="arsinh(x), the arcsin coefficients with alternating signs",
    parity="odd",
    aliases=("arcsinh",),
    reference=sp.asinh,
)
def asinh(T: Any, i: int):
    if i % 2 == 0:
        return fraction_field(T).zero
    num = T.mul(alternate(T, i // 2), factorial(T, i - 1))
    return make_fraction(T, num, _central(T, i))


@coefficients(
    label="atanh",
    description="artanh(x) = sum x^(2n+1) / (2n+1)",
    parity="odd",
    aliases=("arctanh",),
    reference=sp.atanh,
)
def atanh(T: Any, i: int):
    if i % 2 == 0:
        return fraction_field(T).zero
    return make_fraction(T, T.one, i)
