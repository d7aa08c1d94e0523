# -----------------------------------------------------------------------------
#  symbolic.py
#  Export of ring values to sympy expressions and sympy reference series.
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import sympy as sp

from ringalg.fraction import FractionValue
from ringalg.integers import IntValue
from ringalg.polynomial import Polynomial


def to_sympy(value: Any, symbol: sp.Symbol | None = None) -> sp.Expr:
    """
    Exact sympy expression of an integer, fraction or polynomial value.
    Polynomials use `symbol`, or a symbol named after the ring's variable.
    """
    if isinstance(value, IntValue):
        return sp.Integer(value.v)
    if isinstance(value, FractionValue):
        x, y = to_sympy(value.x, symbol), to_sympy(value.y, symbol)
        if isinstance(value.x, IntValue) and isinstance(value.y, IntValue):
            return sp.Rational(x, y)
        return sp.cancel(x / y)
    if isinstance(value, Polynomial):
        s = symbol if symbol is not None else sp.Symbol(value.ring.variable)
        return sp.expand(sum((to_sympy(c, s) * s**k
                              for k, c in enumerate(reversed(value.coeffs))), sp.Integer(0)))
    raise TypeError(f"cannot convert {type(value).__name__} to sympy")


def reference_series(reference: Callable[[sp.Symbol], sp.Expr], degree: int,
                     symbol: sp.Symbol | None = None) -> sp.Expr:
    """Maclaurin polynomial of reference(x) up to and including x^degree."""
    s = symbol if symbol is not None else sp.Symbol("x")
    return sp.expand(sp.series(reference(s), s, 0, degree + 1).removeO())


def series_matches(poly: Polynomial, reference: Callable[[sp.Symbol], sp.Expr]) -> bool:
    """True when `poly` equals the exact Maclaurin polynomial of `reference`."""
    s = sp.Symbol(poly.ring.variable)
    diff = to_sympy(poly, s) - reference_series(reference, poly.degree, s)
    return sp.simplify(diff) == 0
