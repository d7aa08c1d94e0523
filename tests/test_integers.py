# tests/test_integers.py
from __future__ import annotations

import itertools

import gmpy2
import pytest

from ringalg.algebra import CapabilityError
from ringalg.integers import IntegerRing, i32, i64, is_prime, zpz

# ---------- primality ---------------------------------------------------------


@pytest.mark.parametrize("n", [2, 3, 5, 7, 31])
def test_is_prime_true(n):
    assert is_prime(n)


@pytest.mark.parametrize("n", [1, 4, 6, 8, 9, 10, 100])
def test_is_prime_false(n):
    assert not is_prime(n)


def test_is_prime_agrees_with_gmpy2():
    for n in range(-5, 5000):
        assert is_prime(n) == (n > 1 and bool(gmpy2.is_prime(n))), n


# ---------- fixed-width integers ---------------------------------------------

GCD_CASES = [
    (i32, 12, 6, 6),
    (i32, 5, 3, 1),
    (i32, -12, 8, 4),
    (i64, 0, 7, 7),
    (i64, 7, 0, 7),
    (i64, 2**40, 2**35 * 3, 2**35),
]


@pytest.mark.parametrize("ring,a,b,expected", GCD_CASES)
def test_gcd(ring, a, b, expected):
    assert ring.gcd(ring.val(a), ring.val(b)) == expected


def test_gcd_divides_both_operands():
    for a, b in itertools.product([12, 18, -30, 7, 1, 0], [4, 9, -6, 35]):
        g = i64.gcd(i64.val(a), i64.val(b))
        assert (i64.val(a) % g).is_zero()
        assert (i64.val(b) % g).is_zero()


@pytest.mark.parametrize("a,b,q,r", [
    (7, 2, 3, 1),
    (-7, 2, -3, -1),
    (7, -2, -3, 1),
    (-7, -2, 3, -1),
])
def test_division_truncates_toward_zero(a, b, q, r):
    x, y = i32.val(a), i32.val(b)
    assert (x // y).v == q
    assert (x % y).v == r
    assert divmod(x, y) == (i32.val(q), i32.val(r))


def test_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        i32.val(1) // 0


def test_two_complement_wrap():
    assert i32.val(2**31).v == -(2**31)
    assert (i32.val(i32.max_value) + 1).v == i32.min_value
    assert (i64.val(i64.min_value) - 1).v == i64.max_value
    assert IntegerRing(8).val(200).v == -56


def test_operators_accept_host_ints():
    x = i64.val(5)
    assert x + 2 == 7
    assert 2 - x == -3
    assert 3 * x == 15
    assert -x == -5


def test_truediv_requires_a_field():
    with pytest.raises(CapabilityError):
        i32.val(1) / i32.val(2)


def test_mixing_rings_is_rejected():
    with pytest.raises(CapabilityError):
        i32.val(1) + i64.val(1)


def test_ordering_and_hashing():
    assert i64.pos(i64.val(1)) and not i64.pos(i64.zero)
    assert i64.lt(i64.val(-3), i64.val(2))
    assert i64.gt(i64.val(3), i64.val(2))
    assert len({i64.val(3), i64.val(3), i64.val(4)}) == 2
    assert str(i32) == "i32" and str(i64.val(-4)) == "-4"


def test_bit_width_must_be_sane():
    with pytest.raises(ValueError):
        IntegerRing(1)


# ---------- modular integers --------------------------------------------------


def test_modular_representatives():
    Z7 = zpz(7)
    assert Z7.val(-1).v == 6
    assert Z7.val(15).v == 1
    assert Z7.val(7).is_zero()
    assert zpz(7) is Z7
    assert str(Z7) == "zpz<7>"


@pytest.mark.parametrize("p,field", [(2, True), (7, True), (8, False), (91, False), (97, True)])
def test_modular_field_flag(p, field):
    assert zpz(p).is_field is field


@pytest.mark.parametrize("p", [1, 0, -5])
def test_modulus_below_two(p):
    with pytest.raises(ValueError):
        zpz(p)


def test_prime_modulus_division_uses_inverse():
    Z7 = zpz(7)
    for a in range(7):
        for b in range(1, 7):
            q = Z7.val(a) / Z7.val(b)
            assert q * b == a
            assert (Z7.val(a) % Z7.val(b)).is_zero()


def test_modular_inverse_of_zero():
    with pytest.raises(ZeroDivisionError):
        zpz(7).inverse(zpz(7).zero)
    with pytest.raises(ZeroDivisionError):
        zpz(7).one / 0


def test_composite_modulus_has_no_field_division():
    with pytest.raises(CapabilityError):
        zpz(8).val(3) / zpz(8).val(2)
    assert (zpz(8).val(7) // zpz(8).val(2)).v == 3


# ---------- ring axioms on samples -------------------------------------------

SAMPLES = {
    "i32": (i32, [-7, -1, 0, 1, 2, 5, 1000]),
    "i64": (i64, [-(2**40), -3, 0, 1, 17, 2**33]),
    "zpz13": (zpz(13), [0, 1, 5, 12, 7]),
}


@pytest.mark.parametrize("name", sorted(SAMPLES))
def test_ring_axioms(name):
    ring, raw = SAMPLES[name]
    vals = [ring.val(v) for v in raw]
    for a, b, c in itertools.product(vals, repeat=3):
        assert a + b == b + a
        assert (a + b) + c == a + (b + c)
        assert a * (b + c) == a * b + a * c
        assert a + ring.zero == a
        assert a * ring.one == a
