# tests/test_symbolic.py
from __future__ import annotations

import pytest
import sympy as sp

from ringalg.fraction import fpq64, q64
from ringalg.integers import i64, zpz
from ringalg.polynomial import polynomial, with_variable
from ringalg.series import elementary
from ringalg.symbolic import reference_series, series_matches, to_sympy
from ringalg.taylor import taylor

x = sp.Symbol("x")


def test_scalars():
    assert to_sympy(i64.val(-7)) == -7
    assert to_sympy(zpz(5).val(12)) == 2
    assert to_sympy(q64.make(6, -4)) == sp.Rational(-3, 2)


def test_polynomial_uses_ring_variable():
    P = polynomial(i64)
    assert to_sympy(P.make(1, 2, 3)) == x**2 + 2 * x + 3
    t = sp.Symbol("t")
    assert to_sympy(with_variable(P.make(1, 0), "t")) == t
    assert to_sympy(P.make(1, 0), symbol=t) == t


def test_rational_function():
    Q = polynomial(q64)
    f = fpq64.make(Q.make(1, 0, -1), Q.make(1, -1))
    assert sp.simplify(to_sympy(f) - (x + 1)) == 0


def test_unsupported_value():
    with pytest.raises(TypeError):
        to_sympy(1.5)


def test_reference_series_truncates():
    assert reference_series(sp.exp, 2) == 1 + x + x**2 / 2


def test_series_matches():
    p = taylor(i64, elementary.cos, 6)
    assert series_matches(p, sp.cos)
    assert not series_matches(p, sp.sin)
