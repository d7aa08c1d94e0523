# src/ringalg/combinatorics.py
from __future__ import annotations

from functools import cache
from typing import Any

from ringalg.algebra import RingValue
from ringalg.fraction import fraction_field, inject, make_fraction


def _check_non_negative(name: str, **args: int) -> None:
    for key, value in args.items():
        if value < 0:
            raise ValueError(f"{name}: {key} must be non-negative, got {value}")


@cache
def factorial(T: Any, n: int) -> RingValue:
    """n! computed in T (wraps on fixed-width overflow)."""
    _check_non_negative("factorial", n=n)
    acc = T.one
    for k in range(2, n + 1):
        acc = T.mul(T.inject_constant(k), acc)
    return acc


@cache
def _binomial_fraction(T: Any, k: int, n: int) -> RingValue:
    F = fraction_field(T)
    if k == 0:
        return F.one
    if k > n // 2:
        return _binomial_fraction(T, n - k, n)
    return F.mul(_binomial_fraction(T, k - 1, n - 1), make_fraction(T, n, k))


def _pascal_row(T: Any, k: int, n: int) -> RingValue:
    # additive rule C(j, m) = C(j-1, m-1) + C(j, m-1), no division needed
    row = [T.one]
    for m in range(1, n + 1):
        prev = row
        row = [T.one]
        for j in range(1, min(m, k) + 1):
            right = prev[j] if j < len(prev) else T.zero
            row.append(T.add(prev[j - 1], right))
    return row[k]


@cache
def binomial(T: Any, k: int, n: int) -> RingValue:
    """
    C(k, n): number of k-subsets of an n-set.

    Over a Euclidean domain it is built with Pascal's reduction
    C(k, n) = C(k-1, n-1) · n/k in the fraction field, using the symmetry
    C(k, n) = C(n-k, n) to keep k <= n/2. Over a field, where n/k may not
    exist (k divisible by p in zpz<p>), it is summed along Pascal's triangle.
    """
    _check_non_negative("binomial", k=k, n=n)
    if k > n:
        return T.zero
    if T.is_field:
        return _pascal_row(T, min(k, n - k), n)
    return _binomial_fraction(T, k, n).x


def alternate(T: Any, k: int) -> RingValue:
    """(-1)^k in T."""
    return T.one if k % 2 == 0 else T.neg(T.one)


@cache
def power(T: Any, p: int, n: int) -> RingValue:
    """p^n in T."""
    _check_non_negative("power", n=n)
    base = T.inject_constant(p)
    acc = T.one
    for _ in range(n):
        acc = T.mul(base, acc)
    return acc


@cache
def bernoulli(T: Any, m: int) -> RingValue:
    """
    Bernoulli number B_m in fraction_field(T), with the B_1 = -1/2 convention.

        B_0 = 1
        B_m = -1/(m+1) · sum_{k=0}^{m-1} C(k, m+1) · B_k
    """
    _check_non_negative("bernoulli", m=m)
    F = fraction_field(T)
    if m == 0:
        return F.one
    acc = F.zero
    for k in range(m):
        acc = F.add(acc, F.mul(inject(T, binomial(T, k, m + 1)), bernoulli(T, k)))
    return F.mul(acc, make_fraction(T, -1, m + 1))
