# -----------------------------------------------------------------------------
#  tangent.py
#  tan and tanh from the Bernoulli numbers:
#
#      tan(x)  = sum_k (-1)^(k-1) 4^k (4^k - 1) B_2k / (2k)! · x^(2k-1)
#      tanh(x) = sum_k            4^k (4^k - 1) B_2k / (2k)! · x^(2k-1)
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Any

import sympy as sp

from ringalg.combinatorics import alternate, bernoulli, factorial, power
from ringalg.fraction import fraction_field, inject
from ringalg.registry import coefficients


def _bernoulli_term(T: Any, i: int):
    F = fraction_field(T)
    four_k = inject(T, power(T, 4, (i + 1) // 2))
    dividend = F.mul(four_k, F.mul(F.sub(four_k, F.one), bernoulli(T, i + 1)))
    return F.div(dividend, inject(T, factorial(T, i + 1)))


@coefficients(
    label="tan",
    description="tan(x), odd powers from the Bernoulli numbers",
    parity="odd",
    reference=sp.tan,
)
def tan(T: Any, i: int):
    F = fraction_field(T)
    if i % 2 == 0:
        return F.zero
    return F.mul(inject(T, alternate(T, (i - 1) // 2)), _bernoulli_term(T, i))


@coefficients(
    label="tanh",
    description="tanh(x), odd powers from the Bernoulli numbers",
    parity="odd",
    aliases=("th",),
    reference=sp.tanh,
)
def tanh(T: Any, i: int):
    if i % 2 == 0:
        return fraction_field(T).zero
    return _bernoulli_term(T, i)
