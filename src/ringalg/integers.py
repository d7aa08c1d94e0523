# -----------------------------------------------------------------------------
#  integers.py
#  Leaf rings: fixed-width signed integers and integers modulo p.
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from functools import cache, cached_property
from typing import Any

from ringalg.algebra import EuclideanDomain, RingValue, numeric_kind


def is_prime(n: int) -> bool:
    """Deterministic trial division over 6k±1 candidates up to √n."""
    if n in (2, 3):
        return True
    if n <= 1 or n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


@dataclass(frozen=True, eq=False, repr=False)
class IntValue(RingValue):
    """An integer constant tagged with its ring (fixed-width or modular)."""
    ring: Any
    v: int

    def is_zero(self) -> bool:
        return self.v == 0

    def to_string(self) -> str:
        return str(self.v)

    def get(self, kind: type = int) -> Any:
        return kind(self.v)

    def eval(self, x: Any) -> Any:
        return numeric_kind(x)(self.v)

    def _key(self) -> tuple:
        return (self.v,)

    def __int__(self) -> int:
        return self.v


# --- Fixed-width integers --------------------------------------------------


@dataclass(frozen=True)
class IntegerRing(EuclideanDomain):
    """
    Signed two's-complement integers of a fixed bit width.

    Results wrap around silently like host machine integers; division
    truncates toward zero and the remainder takes the sign of the dividend.
    """
    bits: int = 64

    def __post_init__(self) -> None:
        if self.bits < 2:
            raise ValueError(f"bit width must be at least 2, got {self.bits}")

    def __str__(self) -> str:
        return f"i{self.bits}"

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1))

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1

    def wrap(self, x: int) -> int:
        x &= (1 << self.bits) - 1
        if x >> (self.bits - 1):
            x -= 1 << self.bits
        return x

    def val(self, x: int) -> IntValue:
        return IntValue(self, self.wrap(int(x)))

    @cached_property
    def zero(self) -> IntValue:
        return self.val(0)

    @cached_property
    def one(self) -> IntValue:
        return self.val(1)

    def inject_constant(self, x: int) -> IntValue:
        return self.val(x)

    def add(self, a: IntValue, b: IntValue) -> IntValue:
        return self.val(a.v + b.v)

    def sub(self, a: IntValue, b: IntValue) -> IntValue:
        return self.val(a.v - b.v)

    def mul(self, a: IntValue, b: IntValue) -> IntValue:
        return self.val(a.v * b.v)

    def div(self, a: IntValue, b: IntValue) -> IntValue:
        if b.v == 0:
            raise ZeroDivisionError(f"{self}: division by zero")
        q = abs(a.v) // abs(b.v)
        return self.val(q if (a.v < 0) == (b.v < 0) else -q)

    def mod(self, a: IntValue, b: IntValue) -> IntValue:
        q = self.div(a, b)
        return self.val(a.v - b.v * q.v)

    def eq(self, a: IntValue, b: IntValue) -> bool:
        return a.v == b.v

    def pos(self, a: IntValue) -> bool:
        return a.v > 0

    def gt(self, a: IntValue, b: IntValue) -> bool:
        return a.v > b.v

    def lt(self, a: IntValue, b: IntValue) -> bool:
        return a.v < b.v


i32 = IntegerRing(32)
i64 = IntegerRing(64)


# --- Integers modulo p -----------------------------------------------------


@dataclass(frozen=True)
class ModularRing(EuclideanDomain):
    """
    Congruence classes modulo p, represented by 0 <= v < p.

    A field exactly when p is prime; division then multiplies by the modular
    inverse. For composite p, division is plain division of representatives
    and is undefined as a field operation.
    """
    p: int

    def __post_init__(self) -> None:
        if self.p < 2:
            raise ValueError(f"modulus must be at least 2, got {self.p}")

    def __str__(self) -> str:
        return f"zpz<{self.p}>"

    @cached_property
    def is_field(self) -> bool:  # type: ignore[override]
        return is_prime(self.p)

    def val(self, x: int) -> IntValue:
        return IntValue(self, int(x) % self.p)

    @cached_property
    def zero(self) -> IntValue:
        return self.val(0)

    @cached_property
    def one(self) -> IntValue:
        return self.val(1)

    def inject_constant(self, x: int) -> IntValue:
        return self.val(x)

    def add(self, a: IntValue, b: IntValue) -> IntValue:
        return self.val(a.v + b.v)

    def sub(self, a: IntValue, b: IntValue) -> IntValue:
        return self.val(a.v - b.v)

    def mul(self, a: IntValue, b: IntValue) -> IntValue:
        return self.val(a.v * b.v)

    def inverse(self, a: IntValue) -> IntValue:
        if a.v == 0:
            raise ZeroDivisionError(f"{self}: zero has no inverse")
        return self.val(pow(a.v, -1, self.p))

    def div(self, a: IntValue, b: IntValue) -> IntValue:
        if self.is_field:
            return self.mul(a, self.inverse(b))
        return self.val(a.v // b.v)

    def mod(self, a: IntValue, b: IntValue) -> IntValue:
        if b.v == 0:
            raise ZeroDivisionError(f"{self}: modulo by zero")
        if self.is_field:
            return self.zero
        return self.val(a.v % b.v)

    def eq(self, a: IntValue, b: IntValue) -> bool:
        return a.v == b.v

    def pos(self, a: IntValue) -> bool:
        return a.v > 0

    def gt(self, a: IntValue, b: IntValue) -> bool:
        return a.v > b.v

    def lt(self, a: IntValue, b: IntValue) -> bool:
        return a.v < b.v


@cache
def zpz(p: int) -> ModularRing:
    return ModularRing(p)
