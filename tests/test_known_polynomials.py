# tests/test_known_polynomials.py
from __future__ import annotations

import math

import pytest
import sympy as sp

from ringalg.fraction import q64
from ringalg.integers import i32
from ringalg.known_polynomials import KNOWN, chebyshev, hermite
from ringalg.polynomial import polynomial
from ringalg.symbolic import to_sympy

x = sp.Symbol("x")


@pytest.mark.parametrize("n", range(0, 11))
def test_chebyshev_matches_sympy(n):
    assert sp.expand(to_sympy(chebyshev(n), x) - sp.chebyshevt(n, x)) == 0


@pytest.mark.parametrize("n", range(0, 11))
def test_hermite_matches_sympy(n):
    assert sp.expand(to_sympy(hermite(n), x) - sp.hermite(n, x)) == 0


def test_low_degrees():
    P = polynomial(q64)
    assert chebyshev(0) == P.one
    assert chebyshev(1) == P.X
    assert chebyshev(2) == P.make(2, 0, -1)
    assert hermite(2) == P.make(4, 0, -2)
    assert chebyshev(5).degree == 5
    assert hermite(6).degree == 6


@pytest.mark.parametrize("n", [2, 3, 6])
def test_chebyshev_trigonometric_identity(n):
    for t in (0.1, 0.7, 2.0):
        assert chebyshev(n).eval(math.cos(t)) == pytest.approx(math.cos(n * t), abs=1e-12)


def test_other_base_ring():
    p = chebyshev(4, i32)
    assert p.ring.base.domain == i32
    assert p.eval(1) == 1


def test_negative_degree_rejected():
    with pytest.raises(ValueError):
        chebyshev(-1)
    with pytest.raises(ValueError):
        hermite(-2)


def test_known_table():
    assert set(KNOWN) == {"chebyshev", "hermite"}
    assert KNOWN["hermite"](3) == hermite(3)
