# tests/test_combinatorics.py
from __future__ import annotations

import math

import pytest
import sympy as sp

from ringalg.combinatorics import alternate, bernoulli, binomial, factorial, power
from ringalg.fraction import q64
from ringalg.integers import i32, i64, zpz
from ringalg.symbolic import to_sympy


@pytest.mark.parametrize("n", [0, 1, 2, 5, 10, 12, 20])
def test_factorial(n):
    assert factorial(i64, n).v == math.factorial(n)


def test_factorial_wraps_on_overflow():
    assert factorial(i32, 13).v == i32.wrap(math.factorial(13))


def test_factorial_modular():
    assert factorial(zpz(7), 6) == 6       # Wilson: (p-1)! = -1 mod p
    assert factorial(zpz(7), 7).is_zero()


def test_binomial_matches_math_comb():
    for n in range(0, 25):
        for k in range(0, n + 1):
            assert binomial(i64, k, n).v == math.comb(n, k), (k, n)


def test_binomial_out_of_range():
    assert binomial(i64, 5, 3).is_zero()
    with pytest.raises(ValueError):
        binomial(i64, -1, 3)
    with pytest.raises(ValueError):
        factorial(i64, -1)


def test_binomial_modulo_a_prime_when_k_is_a_multiple_of_p():
    assert binomial(zpz(5), 5, 10) == math.comb(10, 5) % 5
    Z7 = zpz(7)
    for n in range(0, 20):
        for k in range(0, n + 1):
            assert binomial(Z7, k, n).v == math.comb(n, k) % 7, (k, n)


def test_binomial_over_the_rationals():
    assert binomial(q64, 3, 7) == 35


def test_alternate_and_power():
    assert alternate(i32, 0) == 1 and alternate(i32, 1) == -1 and alternate(i32, 6) == 1
    assert power(i64, 4, 5) == 1024
    assert power(i64, 7, 0) == 1
    assert power(zpz(5), 2, 4) == 1


@pytest.mark.parametrize("m,num,den", [(0, 1, 1), (1, -1, 2), (2, 1, 6), (3, 0, 1), (4, -1, 30)])
def test_bernoulli_scenario(m, num, den):
    assert bernoulli(i64, m) == q64.make(num, den)


def test_bernoulli_against_sympy():
    # sympy uses B_1 = +1/2; every other index agrees
    for m in range(0, 15):
        if m == 1:
            continue
        assert to_sympy(bernoulli(i64, m)) == sp.bernoulli(m), m


def test_bernoulli_odd_indices_vanish():
    for m in range(3, 15, 2):
        assert bernoulli(i64, m).is_zero()
