# tests/test_continued_fraction.py
from __future__ import annotations

import math

import pytest

from ringalg.continued_fraction import (
    CONSTANTS,
    E_FRACTION,
    PI_FRACTION,
    SQRT2_FRACTION,
    SQRT3_FRACTION,
    continued_fraction,
)
from ringalg.fraction import q64


def test_convergents_of_pi():
    assert continued_fraction(3, 7) == q64.make(22, 7)
    assert continued_fraction(3, 7, 15, 1) == q64.make(355, 113)


def test_single_term_is_an_integer():
    f = continued_fraction(5)
    assert f == 5
    assert f.is_integer


def test_result_is_in_lowest_terms():
    f = continued_fraction(1, 2, 2, 2)      # 17/12
    assert f.x == 17 and f.y == 12


@pytest.mark.parametrize("value,expected", [
    (PI_FRACTION, math.pi),
    (E_FRACTION, math.e),
    (SQRT2_FRACTION, math.sqrt(2)),
    (SQRT3_FRACTION, math.sqrt(3)),
])
def test_constants(value, expected):
    assert value.get(float) == pytest.approx(expected, abs=1e-12)


def test_constant_table_is_consistent():
    for terms, value in CONSTANTS.values():
        assert continued_fraction(*terms) == value


def test_empty_input():
    with pytest.raises(ValueError):
        continued_fraction()
