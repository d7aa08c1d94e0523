# tests/test_taylor.py
from __future__ import annotations

import math
from fractions import Fraction

import pytest

from ringalg.fraction import fraction_field, q64
from ringalg.integers import i32, i64, zpz
from ringalg.registry import build_series, discover
from ringalg.series import elementary, inverse
from ringalg.symbolic import series_matches
from ringalg.taylor import taylor

HOST = {
    "exp": math.exp,
    "expm1": math.expm1,
    "lnp1": math.log1p,
    "sin": math.sin,
    "cos": math.cos,
    "sinh": math.sinh,
    "cosh": math.cosh,
    "geometric_sum": lambda x: 1 / (1 - x),
    "atan": math.atan,
    "asin": math.asin,
    "asinh": math.asinh,
    "atanh": math.atanh,
    "tan": math.tan,
    "tanh": math.tanh,
}


@pytest.fixture(scope="session")
def index():
    return discover(None)


def test_exp_scenario():
    p = taylor(i32, elementary.exp, 8)
    assert p.degree == 8
    assert p.eval(Fraction(0)) == 1
    assert p.eval(0.1) == pytest.approx(math.exp(0.1), abs=1e-7)


def test_coefficient_layout_is_highest_power_first():
    d = 6
    p = taylor(i64, elementary.exp, d)
    for i in range(d + 1):
        assert p.coeffs[d - i] == elementary.exp(i64, i)
        assert p.coeff_at(i) == q64.make(1, math.factorial(i))


def test_output_is_not_canonicalized():
    p = taylor(i64, elementary.sin, 4)      # x^4 coefficient of sin is zero
    assert p.degree == 4
    assert p.aN.is_zero()


def test_negative_degree():
    with pytest.raises(ValueError):
        taylor(i64, elementary.exp, -1)


def test_every_packaged_series_is_registered(index):
    assert set(HOST) <= set(index.labels())


@pytest.mark.parametrize("label", sorted(HOST))
def test_series_match_sympy(index, label):
    p = index.build(label, i64, 9)
    assert series_matches(p, index.get(label).reference)


@pytest.mark.parametrize("label", sorted(HOST))
def test_series_approximate_host_functions(index, label):
    p = index.build(label, i64, 9)
    for x in (-0.1, 0.05, 0.1):
        assert p.eval(x) == pytest.approx(HOST[label](x), abs=1e-8)


@pytest.mark.parametrize("label", sorted(HOST))
def test_parity(index, label):
    fn = index.get(label)
    p = index.build(label, i64, 9)
    skip = {"odd": 0, "even": 1}.get(fn.parity)
    if skip is None:
        return
    for i in range(skip, 10, 2):
        assert p.coeff_at(i).is_zero(), (label, i)


def test_atanh_uses_reciprocal_of_index():
    assert inverse.atanh(i64, 3) == q64.make(1, 3)
    assert inverse.atanh(i64, 5) == q64.make(1, 5)
    assert inverse.asinh(i64, 3) == q64.make(-1, 6)


def test_expm1_drops_the_constant_term():
    e = build_series("exp", i64, 6)
    m = build_series("expm1", i64, 6)
    assert m.coeff_at(0).is_zero()
    for i in range(1, 7):
        assert m.coeff_at(i) == e.coeff_at(i)


def test_aliases_resolve(index):
    assert index.resolve("log1p") == "lnp1"
    assert index.resolve("GEOMETRIC") == "geometric_sum"
    with pytest.raises(ValueError):
        index.resolve("nope")


def test_series_over_a_prime_field():
    Z13 = zpz(13)
    p = taylor(Z13, elementary.exp, 5)
    assert p.ring.base is fraction_field(Z13) is Z13
    for i in range(6):
        assert Z13.mul(p.coeff_at(i), Z13.val(math.factorial(i))) == Z13.one


def test_tan_coefficients():
    p = build_series("tan", i64, 7)
    assert p.coeff_at(1) == 1
    assert p.coeff_at(3) == q64.make(1, 3)
    assert p.coeff_at(5) == q64.make(2, 15)
    assert p.coeff_at(7) == q64.make(17, 315)
