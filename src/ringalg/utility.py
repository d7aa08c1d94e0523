# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from fractions import Fraction
from typing import Any

import gmpy2

from ringalg.fraction import q32, q64
from ringalg.integers import i32, i64, zpz


class UserInputError(Exception):
    pass


# --- Ring specifications -----------------------------------------------------

_NAMED_RINGS = {
    "i32": i32,
    "i64": i64,
    "q32": q32,
    "q64": q64,
}

_ZPZ_RE = re.compile(r"^(?:zpz|z/|mod)[:<(]?\s*(\d+)\s*[>)]?$", re.IGNORECASE)


def parse_ring(spec: str) -> Any:
    """
    Resolve a ring name as written on the command line or in a profile.

    Accepted: i32, i64, q32, q64, zpz:P (also zpz<P>, mod:P).
    """
    s = str(spec).strip()
    ring = _NAMED_RINGS.get(s.lower())
    if ring is not None:
        return ring
    m = _ZPZ_RE.match(s)
    if m:
        try:
            return zpz(int(m.group(1)))
        except ValueError as e:
            raise UserInputError(f"invalid ring '{spec}': {e}") from None
    known = ", ".join([*_NAMED_RINGS, "zpz:P"])
    raise UserInputError(f"unknown ring '{spec}' (expected one of: {known})")


def series_base(spec: str) -> Any:
    """Base ring for series construction: the integer ring under a fraction field."""
    ring = parse_ring(spec)
    if ring in (q32, q64):
        return ring.domain
    return ring


# --- Numbers -----------------------------------------------------------------

_FRACTION_RE = re.compile(r"^\s*([+-]?\d+)\s*/\s*(\d+)\s*$")


def parse_number(text: str, *, digits: int | None = None) -> Any:
    """
    Parse an evaluation point: '3' -> int, '1/3' -> Fraction, '0.1' -> float.
    With `digits`, decimals become gmpy2.mpfr at that many significant digits.
    """
    s = str(text).strip()
    if re.fullmatch(r"[+-]?\d+", s):
        return int(s)
    m = _FRACTION_RE.match(s)
    if m:
        den = int(m.group(2))
        if den == 0:
            raise UserInputError(f"invalid number '{text}': zero denominator")
        return Fraction(int(m.group(1)), den)
    try:
        if digits:
            return gmpy2.mpfr(s, precision_bits(digits))
        return float(s)
    except ValueError:
        raise UserInputError(f"invalid number '{text}'") from None


def precision_bits(digits: int) -> int:
    """Binary precision needed for `digits` significant decimal digits."""
    if digits <= 0:
        raise UserInputError(f"digits must be positive, got {digits}")
    # log2(10) ~ 3.3219; keep a few guard bits
    return int(digits * 3.3219280948873626) + 8


def to_high_precision(x: Any, digits: int) -> Any:
    """Convert an exact evaluation point to gmpy2.mpfr."""
    bits = precision_bits(digits)
    if isinstance(x, Fraction):
        return gmpy2.mpfr(gmpy2.mpq(x.numerator, x.denominator), bits)
    return gmpy2.mpfr(x, bits)


@contextmanager
def high_precision(digits: int) -> Iterator[int]:
    """Raise the gmpy2 context precision for the duration of the block."""
    ctx = gmpy2.get_context()
    saved = ctx.precision
    ctx.precision = precision_bits(digits)
    try:
        yield ctx.precision
    finally:
        ctx.precision = saved


# --- Settings helpers --------------------------------------------------------

def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out


def get_terminal_width(default=80):
    """
    Return the terminal's character width if detected, else the default
    value (80 by default).
    """
    try:
        return shutil.get_terminal_size().columns
    except Exception:
        return default
