# -----------------------------------------------------------------------------
#  known_polynomials.py
#  Classical orthogonal polynomials built by their three-term recurrences.
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import cache
from typing import Any

from ringalg.fraction import fraction_field
from ringalg.integers import i64
from ringalg.polynomial import Polynomial, polynomial


def _ring(T: Any):
    return polynomial(fraction_field(T))


@cache
def chebyshev(n: int, T: Any = i64) -> Polynomial:
    """
    Chebyshev polynomial of the first kind:
    T_0 = 1, T_1 = x, T_n = 2x·T_{n-1} - T_{n-2}.
    """
    if n < 0:
        raise ValueError(f"chebyshev: degree must be non-negative, got {n}")
    P = _ring(T)
    if n == 0:
        return P.one
    if n == 1:
        return P.X
    two_x = P.mul(P.inject_constant(2), P.X)
    return P.sub(P.mul(two_x, chebyshev(n - 1, T)), chebyshev(n - 2, T))


@cache
def hermite(n: int, T: Any = i64) -> Polynomial:
    """
    Physicists' Hermite polynomial:
    H_0 = 1, H_1 = 2x, H_n = 2x·H_{n-1} - 2(n-1)·H_{n-2}.
    """
    if n < 0:
        raise ValueError(f"hermite: degree must be non-negative, got {n}")
    P = _ring(T)
    two_x = P.mul(P.inject_constant(2), P.X)
    if n == 0:
        return P.one
    if n == 1:
        return two_x
    return P.sub(P.mul(two_x, hermite(n - 1, T)),
                 P.mul(P.inject_constant(2 * (n - 1)), hermite(n - 2, T)))


KNOWN = {
    "chebyshev": chebyshev,
    "hermite": hermite,
}
