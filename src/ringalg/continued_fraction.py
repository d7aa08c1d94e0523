# src/ringalg/continued_fraction.py
from __future__ import annotations

from ringalg.fraction import FractionValue, q64


def continued_fraction(*terms: int) -> FractionValue:
    """
    Exact value of the simple continued fraction [a0; a1, ..., an] in q64,
    folded from the innermost term outward:

        value(an)          = an
        value(ai, ..., an) = ai + 1 / value(ai+1, ..., an)
    """
    if not terms:
        raise ValueError("a continued fraction needs at least one term")
    *rest, last = terms
    acc = q64.inject_constant(last)
    for a in reversed(rest):
        acc = q64.add(q64.inject_constant(a), q64.div(q64.one, acc))
    return acc


PI_TERMS = (3, 7, 15, 1, 292, 1, 1, 1, 2, 1, 3, 1, 14, 2, 1, 1, 2, 2, 2, 2, 1)
E_TERMS = (2, 1, 2, 1, 1, 4, 1, 1, 6, 1, 1, 8, 1, 1, 10, 1, 1, 12, 1, 1, 14, 1, 1)
SQRT2_TERMS = (1,) + (2,) * 21
SQRT3_TERMS = (1,) + (1, 2) * 15

PI_FRACTION = continued_fraction(*PI_TERMS)
E_FRACTION = continued_fraction(*E_TERMS)
SQRT2_FRACTION = continued_fraction(*SQRT2_TERMS)
SQRT3_FRACTION = continued_fraction(*SQRT3_TERMS)

CONSTANTS = {
    "pi": (PI_TERMS, PI_FRACTION),
    "e": (E_TERMS, E_FRACTION),
    "sqrt2": (SQRT2_TERMS, SQRT2_FRACTION),
    "sqrt3": (SQRT3_TERMS, SQRT3_FRACTION),
}
