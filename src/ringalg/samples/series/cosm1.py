# -----------------------------------------------------------------------------
#  cosm1.py
#  Example workspace series. Files in <workspace>/series are discovered before
#  the packaged ones, so a label defined here overrides the built-in series.
# -----------------------------------------------------------------------------

from __future__ import annotations

import sympy as sp

from ringalg.registry import derived
from ringalg.series.elementary import cos
from ringalg.taylor import taylor


@derived(
    label="cosm1",
    description="cos(x) - 1, the cos series without its constant term",
    reference=lambda x: sp.cos(x) - 1,
)
def cosm1(T, degree):
    p = taylor(T, cos, degree)
    return p.ring.sub(p, p.ring.one)
