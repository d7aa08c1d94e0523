# src/ringalg/seq.py
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Seq(Generic[T]):
    """
    Immutable, fixed-length ordered list.

    Positional helpers never mutate: split/insert/remove/concat all return new
    sequences, and concat(*split(i)) gives back the original.
    """
    items: tuple[T, ...] = ()

    @classmethod
    def of(cls, *items: T) -> Seq[T]:
        return cls(tuple(items))

    @classmethod
    def from_iterable(cls, items: Iterable[T]) -> Seq[T]:
        return cls(tuple(items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __getitem__(self, index: int) -> T:
        return self.items[index]

    def __reversed__(self) -> Iterator[T]:
        return reversed(self.items)

    @property
    def length(self) -> int:
        return len(self.items)

    def at(self, index: int) -> T:
        if index < 0 or index >= len(self.items):
            raise IndexError(f"index {index} out of range for Seq of length {len(self.items)}")
        return self.items[index]

    def push_front(self, item: T) -> Seq[T]:
        return Seq((item, *self.items))

    def push_back(self, item: T) -> Seq[T]:
        return Seq((*self.items, item))

    def pop_front(self) -> tuple[T, Seq[T]]:
        """Return (head, tail)."""
        if not self.items:
            raise IndexError("pop_front on empty Seq")
        return self.items[0], Seq(self.items[1:])

    def split(self, index: int) -> tuple[Seq[T], Seq[T]]:
        """Return (head, tail) where head holds the first `index` items."""
        if index < 0 or index > len(self.items):
            raise IndexError(f"split index {index} out of range for Seq of length {len(self.items)}")
        return Seq(self.items[:index]), Seq(self.items[index:])

    def concat(self, other: Seq[T]) -> Seq[T]:
        return Seq(self.items + other.items)

    def insert(self, index: int, item: T) -> Seq[T]:
        head, tail = self.split(index)
        return head.push_back(item).concat(tail)

    def remove(self, index: int) -> Seq[T]:
        head, tail = self.split(index)
        _, rest = tail.pop_front()
        return head.concat(rest)
