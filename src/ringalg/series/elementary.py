# -----------------------------------------------------------------------------
#  elementary.py
#  Taylor coefficients of exp, log(1+x), the circular and hyperbolic sine and
#  cosine, and the geometric series.
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Any

import sympy as sp

from ringalg.combinatorics import alternate, factorial
from ringalg.fraction import fraction_field, make_fraction
from ringalg.polynomial import Polynomial
from ringalg.registry import coefficients, derived
from ringalg.taylor import taylor


@coefficients(
    label="exp",
    description="e^x = sum x^i / i!",
    reference=sp.exp,
)
def exp(T: Any, i: int):
    return make_fraction(T, T.one, factorial(T, i))


@derived(
    label="expm1",
    description="e^x - 1, the exp series without its constant term",
    reference=lambda x: sp.exp(x) - 1,
)
def expm1(T: Any, degree: int) -> Polynomial:
    p = taylor(T, exp, degree)
    return p.ring.sub(p, p.ring.one)


@coefficients(
    label="lnp1",
    description="log(1 + x) = sum (-1)^(i+1) x^i / i",
    aliases=("log1p",),
    reference=lambda x: sp.log(1 + x),
)
def lnp1(T: Any, i: int):
    if i == 0:
        return fraction_field(T).zero
    return make_fraction(T, alternate(T, i + 1), i)


@coefficients(
    label="sin",
    description="sin(x), odd powers with alternating signs",
    parity="odd",
    reference=sp.sin,
)
def sin(T: Any, i: int):
    if i % 2 == 0:
        return fraction_field(T).zero
    return make_fraction(T, alternate(T, i // 2), factorial(T, i))


@coefficients(
    label="cos",
    description="cos(x), even powers with alternating signs",
    parity="even",
    reference=sp.cos,
)
def cos(T: Any, i: int):
    if i % 2 == 1:
        return fraction_field(T).zero
    return make_fraction(T, alternate(T, i // 2), factorial(T, i))


@coefficients(
    label="sinh",
    description="sinh(x), odd powers of 1 / i!",
    parity="odd",
    aliases=("sh",),
    reference=sp.sinh,
)
def sinh(T: Any, i: int):
    if i % 2 == 0:
        return fraction_field(T).zero
    return make_fraction(T, T.one, factorial(T, i))


@coefficients(
    label="cosh",
    description="cosh(x), even powers of 1 / i!",
    parity="even",
    aliases=("ch",),
    reference=sp.cosh,
)
def cosh(T: Any, i: int):
    if i % 2 == 1:
        return fraction_field(T).zero
    return make_fraction(T, T.one, factorial(T, i))


@coefficients(
    label="geometric_sum",
    description="1 / (1 - x), every coefficient is one",
    aliases=("geometric",),
    reference=lambda x: 1 / (1 - x),
)
def geometric_sum(T: Any, i: int):
    return fraction_field(T).one
