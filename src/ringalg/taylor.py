# src/ringalg/taylor.py
from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ringalg.fraction import fraction_field
from ringalg.polynomial import Polynomial, polynomial
from ringalg.seq import Seq

CoeffAt = Callable[[Any, int], Any]


def taylor(T: Any, coeff_at: CoeffAt, degree: int) -> Polynomial:
    """
    Degree-`degree` Taylor polynomial over fraction_field(T).

    coeff_at(T, i) supplies the coefficient of x^i. The result is stored
    highest power first and is not canonicalized, so its degree is exactly
    `degree` even when the top coefficient is zero.
    """
    if degree < 0:
        raise ValueError(f"series degree must be non-negative, got {degree}")
    F = fraction_field(T)
    P = polynomial(F)
    coeffs = Seq.from_iterable(coeff_at(T, i) for i in range(degree, -1, -1))
    for c in coeffs:
        if c.ring != F:
            raise TypeError(f"{getattr(coeff_at, '__name__', coeff_at)} returned a value of {c.ring}, expected {F}")
    return Polynomial(P, coeffs)
