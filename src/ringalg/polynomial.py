# -----------------------------------------------------------------------------
#  polynomial.py
#  Univariate polynomials over any Euclidean domain. The polynomial ring is
#  itself a Euclidean domain (degree as size measure).
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from functools import cache, cached_property
from typing import Any

from ringalg.algebra import (
    CapabilityError,
    EuclideanDomain,
    InexactDivisionError,
    RingValue,
    euclid_gcd,
    numeric_kind,
    require_euclidean,
)
from ringalg.seq import Seq


@dataclass(frozen=True, eq=False, repr=False)
class Polynomial(RingValue):
    """
    Coefficients are stored highest degree first: coeffs[0] is aN.
    Values built with `PolynomialRing.val` are kept as given; arithmetic
    results are canonical (no leading zeros except the constant).
    """
    ring: Any
    coeffs: Seq

    @property
    def degree(self) -> int:
        return len(self.coeffs) - 1

    @property
    def aN(self) -> RingValue:
        return self.coeffs[0]

    leading = aN

    @property
    def strip(self) -> Polynomial:
        """Same polynomial without its highest coefficient."""
        if self.degree == 0:
            return self
        _, tail = self.coeffs.pop_front()
        return Polynomial(self.ring, tail)

    @property
    def coefficients(self) -> tuple[RingValue, ...]:
        return self.coeffs.items

    def coeff_at(self, index: int) -> RingValue:
        if 0 <= index <= self.degree:
            return self.coeffs[self.degree - index]
        return self.ring.base.zero

    def is_zero(self) -> bool:
        return self.degree == 0 and self.aN.is_zero()

    def to_string(self) -> str:
        return self.ring.to_string(self)

    def eval(self, x: Any) -> Any:
        return self.ring.eval(self, x)

    __call__ = eval

    def derive(self) -> Polynomial:
        return self.ring.derive(self)

    def _key(self) -> tuple:
        return tuple(c._key() for c in self.ring.simplify(self).coeffs)


@dataclass(frozen=True)
class PolynomialRing(EuclideanDomain):
    base: Any
    variable: str = "x"

    def __post_init__(self) -> None:
        require_euclidean(self.base, "polynomial ring")

    def __str__(self) -> str:
        if self.variable == "x":
            return f"polynomial<{self.base}>"
        return f"polynomial<{self.base}, {self.variable}>"

    # --- construction ---

    def _coeff(self, c: Any) -> RingValue:
        if isinstance(c, RingValue):
            if c.ring != self.base:
                raise CapabilityError(f"coefficient {c!r} does not belong to {self.base}")
            return c
        return self.base.inject_constant(c)

    def val(self, *coeffs: Any) -> Polynomial:
        """Raw polynomial from coefficients, highest degree first."""
        if not coeffs:
            raise ValueError("a polynomial needs at least one coefficient")
        return Polynomial(self, Seq.from_iterable(self._coeff(c) for c in coeffs))

    def make(self, *coeffs: Any) -> Polynomial:
        return self.simplify(self.val(*coeffs))

    @cached_property
    def zero(self) -> Polynomial:
        return self.val(self.base.zero)

    @cached_property
    def one(self) -> Polynomial:
        return self.val(self.base.one)

    @cached_property
    def X(self) -> Polynomial:
        return self.val(self.base.one, self.base.zero)

    def inject_constant(self, x: int) -> Polynomial:
        return self.val(self.base.inject_constant(x))

    def inject_ring(self, v: Any) -> Polynomial:
        return self.val(v)

    def monomial(self, coeff: Any, deg: int) -> Polynomial:
        """coeff · x^deg"""
        coeffs = Seq.of(self._coeff(coeff))
        for _ in range(deg):
            coeffs = coeffs.push_back(self.base.zero)
        return Polynomial(self, coeffs)

    # --- canonical form ---

    def simplify(self, p: Polynomial) -> Polynomial:
        coeffs = p.coeffs
        while len(coeffs) > 1 and coeffs[0].is_zero():
            _, coeffs = coeffs.pop_front()
        return p if coeffs is p.coeffs else Polynomial(self, coeffs)

    # --- ring operations ---

    def add(self, a: Polynomial, b: Polynomial) -> Polynomial:
        n = max(a.degree, b.degree)
        coeffs = (self.base.add(a.coeff_at(i), b.coeff_at(i)) for i in range(n, -1, -1))
        return self.simplify(Polynomial(self, Seq.from_iterable(coeffs)))

    def sub(self, a: Polynomial, b: Polynomial) -> Polynomial:
        n = max(a.degree, b.degree)
        coeffs = (self.base.sub(a.coeff_at(i), b.coeff_at(i)) for i in range(n, -1, -1))
        return self.simplify(Polynomial(self, Seq.from_iterable(coeffs)))

    def mul(self, a: Polynomial, b: Polynomial) -> Polynomial:
        base = self.base
        coeffs = []
        for k in range(a.degree + b.degree, -1, -1):
            acc = base.zero
            for i in range(max(0, k - b.degree), min(k, a.degree) + 1):
                acc = base.add(acc, base.mul(a.coeff_at(i), b.coeff_at(k - i)))
            coeffs.append(acc)
        # a zero factor leaves a run of zero coefficients
        return self.simplify(Polynomial(self, Seq.from_iterable(coeffs)))

    def eq(self, a: Polynomial, b: Polynomial) -> bool:
        a, b = self.simplify(a), self.simplify(b)
        if a.degree != b.degree:
            return False
        return all(self.base.eq(x, y) for x, y in zip(a.coeffs, b.coeffs))

    def pos(self, a: Polynomial) -> bool:
        return self.base.pos(self.simplify(a).aN)

    def lt(self, a: Polynomial, b: Polynomial) -> bool:
        a, b = self.simplify(a), self.simplify(b)
        if a.degree != b.degree:
            return a.degree < b.degree
        return self.base.lt(a.aN, b.aN)

    def gt(self, a: Polynomial, b: Polynomial) -> bool:
        return self.lt(b, a)

    # --- Euclidean structure ---

    def divmod(self, a: Polynomial, b: Polynomial) -> tuple[Polynomial, Polynomial]:
        """Schoolbook long division; base-ring divisions must be exact."""
        b = self.simplify(b)
        if b.is_zero():
            raise ZeroDivisionError(f"{self}: division by the zero polynomial")
        q = self.zero
        r = self.simplify(a)
        while r.degree >= b.degree and not r.is_zero():
            t = self.monomial(self.base.div(r.aN, b.aN), r.degree - b.degree)
            if t.aN.is_zero():
                raise InexactDivisionError(
                    f"{self}: leading coefficient {r.aN} is not divisible by {b.aN}"
                )
            q = self.add(q, t)
            r = self.sub(r, self.mul(t, b))
        return q, r

    def div(self, a: Polynomial, b: Polynomial) -> Polynomial:
        return self.divmod(a, b)[0]

    def mod(self, a: Polynomial, b: Polynomial) -> Polynomial:
        return self.divmod(a, b)[1]

    def make_unit(self, p: Polynomial) -> Polynomial:
        """Divide through by the leading coefficient."""
        p = self.simplify(p)
        if p.is_zero():
            return p
        return self.div(p, self.val(p.aN))

    def gcd(self, a: Polynomial, b: Polynomial) -> Polynomial:
        return self.make_unit(euclid_gcd(self, a, b))

    # --- calculus / evaluation / rendering ---

    def derive(self, p: Polynomial) -> Polynomial:
        if p.degree == 0:
            return self.zero
        base = self.base
        coeffs = (base.mul(p.coeff_at(k), base.inject_constant(k)) for k in range(p.degree, 0, -1))
        return self.simplify(Polynomial(self, Seq.from_iterable(coeffs)))

    def eval(self, p: Polynomial, x: Any) -> Any:
        """Horner scheme; each coefficient is converted to the type of x."""
        kind = numeric_kind(x)
        acc = None
        for c in p.coeffs:
            cv = c.get(kind)
            acc = cv if acc is None else acc * x + cv
        return acc

    def to_string(self, p: Polynomial) -> str:
        base = self.base
        terms: list[str] = []
        for idx, c in enumerate(p.coeffs):
            power = p.degree - idx
            if c.is_zero():
                continue
            if power == 0:
                terms.append(c.to_string())
                continue
            var = self.variable if power == 1 else f"{self.variable}^{power}"
            if base.eq(c, base.one):
                terms.append(var)
            else:
                terms.append(f"{c.to_string()} {var}")
        return " + ".join(terms) or "0"


@cache
def polynomial(base: EuclideanDomain, variable: str = "x") -> PolynomialRing:
    return PolynomialRing(base, variable)


def with_variable(p: Polynomial, variable: str) -> Polynomial:
    """Same coefficients, viewed in the polynomial ring over `variable`."""
    if p.ring.variable == variable:
        return p
    return Polynomial(polynomial(p.ring.base, variable), p.coeffs)
