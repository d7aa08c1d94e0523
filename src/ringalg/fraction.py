# -----------------------------------------------------------------------------
#  fraction.py
#  Field of fractions over any Euclidean domain.
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from functools import cache, cached_property, reduce
from typing import Any

from ringalg.algebra import CapabilityError, Field, RingValue, require_euclidean
from ringalg.integers import i32, i64
from ringalg.polynomial import PolynomialRing, polynomial


@dataclass(frozen=True, eq=False, repr=False)
class FractionValue(RingValue):
    """x / y with x, y in the underlying domain. Not simplified until asked."""
    ring: Any
    x: RingValue
    y: RingValue

    @property
    def numerator(self) -> RingValue:
        return self.x

    @property
    def denominator(self) -> RingValue:
        return self.y

    @property
    def is_integer(self) -> bool:
        s = self.ring.simplify(self)
        return self.ring.domain.eq(s.y, self.ring.domain.one)

    def is_zero(self) -> bool:
        return self.x.is_zero()

    def get(self, kind: type = float) -> Any:
        return self.x.get(kind) / self.y.get(kind)

    def eval(self, v: Any) -> Any:
        return self.x.eval(v) / self.y.eval(v)

    def to_string(self) -> str:
        return self.ring.to_string(self)

    def _key(self) -> tuple:
        s = self.ring.simplify(self)
        return (s.x._key(), s.y._key())


@dataclass(frozen=True)
class FractionField(Field):
    domain: Any

    def __post_init__(self) -> None:
        require_euclidean(self.domain, "fraction field")

    def __str__(self) -> str:
        if self.domain == i32:
            return "q32"
        if self.domain == i64:
            return "q64"
        return f"FractionField<{self.domain}>"

    # --- construction ---

    def _part(self, v: Any) -> RingValue:
        if isinstance(v, RingValue):
            if v.ring != self.domain:
                raise CapabilityError(f"{v!r} does not belong to {self.domain}")
            return v
        return self.domain.inject_constant(v)

    def val(self, x: Any, y: Any = 1) -> FractionValue:
        """Raw fraction x/y, kept exactly as given."""
        return FractionValue(self, self._part(x), self._part(y))

    def make(self, x: Any, y: Any = 1) -> FractionValue:
        return self.simplify(self.val(x, y))

    @cached_property
    def zero(self) -> FractionValue:
        return FractionValue(self, self.domain.zero, self.domain.one)

    @cached_property
    def one(self) -> FractionValue:
        return FractionValue(self, self.domain.one, self.domain.one)

    def inject(self, v: RingValue) -> FractionValue:
        return FractionValue(self, self._part(v), self.domain.one)

    def inject_constant(self, x: int) -> FractionValue:
        return FractionValue(self, self.domain.inject_constant(x), self.domain.one)

    def inject_ring(self, v: Any) -> FractionValue:
        return FractionValue(self, self.domain.inject_ring(v), self.domain.one)

    # --- canonical form ---

    def simplify(self, f: FractionValue) -> FractionValue:
        """
        Reduce by the gcd and make the denominator positive. A zero
        numerator gives zero, except 0/0 which gives one. Over polynomials
        with field coefficients the denominator is also made monic, so that
        constant factors cancel.
        """
        d = self.domain
        if f.x.is_zero():
            return self.one if f.y.is_zero() else self.zero
        if f.y.is_zero():
            raise ZeroDivisionError(f"{self}: {f.x} / 0")
        g = d.gcd(f.x, f.y)
        x, y = d.div(f.x, g), d.div(f.y, g)
        if isinstance(d, PolynomialRing) and d.base.is_field:
            lead = d.val(y.aN)
            x, y = d.div(x, lead), d.div(y, lead)
        if not d.pos(y):
            x, y = d.neg(x), d.neg(y)
        return FractionValue(self, x, y)

    # --- field operations ---

    def add(self, a: FractionValue, b: FractionValue) -> FractionValue:
        d = self.domain
        num = d.add(d.mul(a.x, b.y), d.mul(b.x, a.y))
        return self.simplify(FractionValue(self, num, d.mul(a.y, b.y)))

    def sub(self, a: FractionValue, b: FractionValue) -> FractionValue:
        d = self.domain
        num = d.sub(d.mul(a.x, b.y), d.mul(b.x, a.y))
        return self.simplify(FractionValue(self, num, d.mul(a.y, b.y)))

    def mul(self, a: FractionValue, b: FractionValue) -> FractionValue:
        d = self.domain
        return self.simplify(FractionValue(self, d.mul(a.x, b.x), d.mul(a.y, b.y)))

    def div(self, a: FractionValue, b: FractionValue) -> FractionValue:
        if a.is_zero() and b.is_zero():
            return self.one
        d = self.domain
        return self.simplify(FractionValue(self, d.mul(a.x, b.y), d.mul(a.y, b.x)))

    def mod(self, a: FractionValue, b: FractionValue) -> FractionValue:
        return self.zero

    def gcd(self, a: FractionValue, b: FractionValue) -> FractionValue:
        return a

    def eq(self, a: FractionValue, b: FractionValue) -> bool:
        d = self.domain
        sa, sb = self.simplify(a), self.simplify(b)
        return d.eq(sa.x, sb.x) and d.eq(sa.y, sb.y)

    def pos(self, a: FractionValue) -> bool:
        d = self.domain
        return d.pos(a.x) == d.pos(a.y)

    def lt(self, a: FractionValue, b: FractionValue) -> bool:
        return self.pos(self.sub(b, a))

    def gt(self, a: FractionValue, b: FractionValue) -> bool:
        return self.lt(b, a)

    def vadd(self, *values: FractionValue) -> FractionValue:
        return reduce(self.add, values, self.zero)

    def vmul(self, *values: FractionValue) -> FractionValue:
        return reduce(self.mul, values, self.one)

    # --- rendering ---

    def to_string(self, f: FractionValue) -> str:
        xs = f.x.to_string()
        if self.domain.eq(f.y, self.domain.one):
            return xs
        ys = f.y.to_string()
        if " " in xs or " " in ys:
            return f"({xs}) / ({ys})"
        return f"{xs}/{ys}"


@cache
def fraction_field(ring: Any) -> Any:
    """Field of fractions of `ring`; a field is returned unchanged."""
    require_euclidean(ring, "fraction field")
    if ring.is_field:
        return ring
    return FractionField(ring)


def make_fraction(ring: Any, x: Any, y: Any = 1) -> RingValue:
    """The simplified fraction x/y in fraction_field(ring)."""
    field = fraction_field(ring)
    if field is ring:
        num = x if isinstance(x, RingValue) else ring.inject_constant(x)
        den = y if isinstance(y, RingValue) else ring.inject_constant(y)
        return ring.div(num, den)
    return field.make(x, y)


def inject(ring: Any, v: RingValue) -> RingValue:
    """Embed a value of `ring` into fraction_field(ring)."""
    field = fraction_field(ring)
    return v if field is ring else field.inject(v)


q32 = fraction_field(i32)
q64 = fraction_field(i64)
fpq32 = fraction_field(polynomial(q32))
fpq64 = fraction_field(polynomial(q64))
