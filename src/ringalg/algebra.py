# -----------------------------------------------------------------------------
#  algebra.py
#  Capability contracts (Ring ⊂ EuclideanDomain ⊂ Field), the shared value
#  base class and the generic Euclidean gcd.
# -----------------------------------------------------------------------------

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from typing import Any, ClassVar


class CapabilityError(TypeError):
    """A structure was composed with something that lacks a required capability."""


class InexactDivisionError(ArithmeticError):
    """A division that must be exact could not make progress."""


def numeric_kind(x: Any) -> type:
    """
    Host numeric type coefficients are converted into when evaluating at x.
    Non-scalar arguments (arrays, symbols, ...) get float coefficients and
    rely on broadcasting.
    """
    if isinstance(x, bool):
        return int
    if isinstance(x, numbers.Number):
        return type(x)
    return float


# --- Values ----------------------------------------------------------------


class RingValue:
    """
    Base class of every element. Subclasses are frozen dataclasses carrying a
    `ring` field; arithmetic operators delegate to that ring.
    """
    ring: Ring

    # --- introspection ---

    def is_zero(self) -> bool:
        raise NotImplementedError

    def to_string(self) -> str:
        raise NotImplementedError

    def get(self, kind: type = float) -> Any:
        raise NotImplementedError

    def eval(self, x: Any) -> Any:
        raise NotImplementedError

    def _key(self) -> tuple:
        """Hashable canonical key; equal values must produce equal keys."""
        raise NotImplementedError

    # --- operators ---

    def _coerce(self, other: Any) -> RingValue | None:
        if isinstance(other, RingValue):
            if other.ring != self.ring:
                raise CapabilityError(f"cannot combine values of {self.ring} and {other.ring}")
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return self.ring.inject_constant(other)
        return None

    def __add__(self, other: Any) -> Any:
        o = self._coerce(other)
        return NotImplemented if o is None else self.ring.add(self, o)

    def __radd__(self, other: Any) -> Any:
        o = self._coerce(other)
        return NotImplemented if o is None else self.ring.add(o, self)

    def __sub__(self, other: Any) -> Any:
        o = self._coerce(other)
        return NotImplemented if o is None else self.ring.sub(self, o)

    def __rsub__(self, other: Any) -> Any:
        o = self._coerce(other)
        return NotImplemented if o is None else self.ring.sub(o, self)

    def __mul__(self, other: Any) -> Any:
        o = self._coerce(other)
        return NotImplemented if o is None else self.ring.mul(self, o)

    def __rmul__(self, other: Any) -> Any:
        o = self._coerce(other)
        return NotImplemented if o is None else self.ring.mul(o, self)

    def __neg__(self) -> Any:
        return self.ring.neg(self)

    def __floordiv__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return require_euclidean(self.ring, "//").div(self, o)

    def __mod__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return require_euclidean(self.ring, "%").mod(self, o)

    def __divmod__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return require_euclidean(self.ring, "divmod").divmod(self, o)

    def __truediv__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return require_field(self.ring, "/").div(self, o)

    def __rtruediv__(self, other: Any) -> Any:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return require_field(self.ring, "/").div(o, self)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, int) and not isinstance(other, bool):
            other = self.ring.inject_constant(other)
        if not isinstance(other, RingValue) or other.ring != self.ring:
            return NotImplemented
        return self.ring.eq(self, other)

    def __hash__(self) -> int:
        return hash((self.ring, self._key()))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<{self.ring}: {self.to_string()}>"


# --- Contracts -------------------------------------------------------------


class Ring(ABC):
    """Closed under add/sub/mul, with `zero` and `one`."""
    is_euclidean_domain: ClassVar[bool] = False
    is_field: ClassVar[bool] = False

    @property
    @abstractmethod
    def zero(self) -> RingValue: ...

    @property
    @abstractmethod
    def one(self) -> RingValue: ...

    @abstractmethod
    def add(self, a: Any, b: Any) -> Any: ...

    @abstractmethod
    def sub(self, a: Any, b: Any) -> Any: ...

    @abstractmethod
    def mul(self, a: Any, b: Any) -> Any: ...

    @abstractmethod
    def eq(self, a: Any, b: Any) -> bool: ...

    @abstractmethod
    def inject_constant(self, x: int) -> Any:
        """Embed a host integer."""

    def inject_ring(self, v: Any) -> Any:
        """Embed a value of the underlying ring (identity for leaf rings)."""
        return v

    def neg(self, a: Any) -> Any:
        return self.sub(self.zero, a)


class EuclideanDomain(Ring):
    """Ring plus exact quotient, remainder, gcd and an ordering predicate."""
    is_euclidean_domain: ClassVar[bool] = True

    @abstractmethod
    def div(self, a: Any, b: Any) -> Any: ...

    @abstractmethod
    def mod(self, a: Any, b: Any) -> Any: ...

    @abstractmethod
    def pos(self, a: Any) -> bool:
        """Ordering predicate used for sign normalization."""

    def gcd(self, a: Any, b: Any) -> Any:
        return euclid_gcd(self, a, b)

    def divmod(self, a: Any, b: Any) -> tuple[Any, Any]:
        return self.div(a, b), self.mod(a, b)


class Field(EuclideanDomain):
    """Euclidean domain where every nonzero element is invertible."""
    is_field: ClassVar[bool] = True


def euclid_gcd(ring: EuclideanDomain, a: Any, b: Any) -> Any:
    """
    gcd(a, 0) = a normalized to be positive; gcd(a, b) = gcd(b, a mod b).

    Terminates only if the domain's size measure (absolute value, degree, ...)
    strictly decreases under `mod`.
    """
    while not b.is_zero():
        a, b = b, ring.mod(a, b)
    return a if ring.pos(a) else ring.neg(a)


# --- Capability checks -----------------------------------------------------


def require_ring(obj: Any, what: str = "operation") -> Ring:
    if not isinstance(obj, Ring):
        raise CapabilityError(f"{what} requires a Ring, got {type(obj).__name__}")
    return obj


def require_euclidean(obj: Any, what: str = "operation") -> EuclideanDomain:
    require_ring(obj, what)
    if not (isinstance(obj, EuclideanDomain) and obj.is_euclidean_domain):
        raise CapabilityError(f"{what} requires a Euclidean domain, {obj} is not one")
    return obj


def require_field(obj: Any, what: str = "operation") -> EuclideanDomain:
    ring = require_euclidean(obj, what)
    if not ring.is_field:
        raise CapabilityError(f"{what} requires a field, {obj} is not one")
    return ring
