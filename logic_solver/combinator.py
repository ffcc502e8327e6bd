"""Deterministic k-combinations of an ordered sequence, used by tuple and gridlock searches."""

# combinator.py
# 5C3 walks the index tuples
#   0 1 2, 0 1 3, 0 1 4, 0 2 3, 0 2 4, 0 3 4, 1 2 3, 1 2 4, 1 3 4, 2 3 4
# and then starts again at 0 1 2.

from __future__ import annotations

from math import comb
from typing import Generic, Iterator, Sequence, TypeVar

T = TypeVar("T")


class Combinator(Generic[T]):
    def __init__(self, items: Sequence[T], choose: int):
        if not 0 <= choose <= len(items):
            raise ValueError(f"cannot choose {choose} from {len(items)} items")
        self.items = list(items)
        self.choose = choose
        self._indexes: list[int] = []

    def size(self) -> int:
        """nCr"""
        return comb(len(self.items), self.choose)

    def first(self) -> list[T]:
        self._indexes = list(range(self.choose))
        return self._current()

    def next(self) -> list[T]:
        if not self._indexes or self._exhausted():
            return self.first()

        n = len(self.items)
        r = self.choose
        # Right-most index that has not reached its maximum (n - r + position).
        pos = r - 1
        while self._indexes[pos] == n - r + pos:
            pos -= 1
        self._indexes[pos] += 1
        for k in range(pos + 1, r):
            self._indexes[k] = self._indexes[k - 1] + 1
        return self._current()

    def __iter__(self) -> Iterator[list[T]]:
        self._indexes = []
        for _ in range(self.size()):
            yield self.next()

    def __len__(self) -> int:
        return self.size()

    def _exhausted(self) -> bool:
        n = len(self.items)
        r = self.choose
        return all(idx == n - r + pos for pos, idx in enumerate(self._indexes))

    def _current(self) -> list[T]:
        return [self.items[i] for i in self._indexes]
