"""Per-project recency ranks for recently used files."""

from __future__ import annotations

from typing import Callable, Generic, Hashable, Iterable, TypeVar

from .text import Messages

T = TypeVar("T", bound=Hashable)

MISSING_RANK = -1


class RecencyCache(Generic[T]):
    """Bounded set of keys carrying dense recency ranks.

    Ranks always cover ``0 .. len(self) - 1``; the highest rank is the key put
    most recently. Reading a rank never changes it. The backing dict keeps
    keys in ascending rank order, which is also the serialization order.
    """

    def __init__(self, capacity: int, keys: Iterable[T] | None = None) -> None:
        if capacity <= 0:
            raise ValueError(Messages.ERROR_CAPACITY.format(name="capacity"))
        self.capacity = capacity
        self._ranks: dict[T, int] = {}
        for key in keys or ():
            self.put(key)

    def __len__(self) -> int:
        return len(self._ranks)

    def __contains__(self, key: object) -> bool:
        return key in self._ranks

    def get(self, key: T) -> int:
        return self._ranks.get(key, MISSING_RANK)

    def put(self, key: T) -> None:
        if key in self._ranks:
            self._remove(key)
        elif len(self._ranks) >= self.capacity:
            oldest = next(iter(self._ranks))
            self._remove(oldest)
        self._ranks[key] = len(self._ranks)

    def _remove(self, key: T) -> None:
        removed = self._ranks.pop(key)
        for other, rank in self._ranks.items():
            if rank > removed:
                self._ranks[other] = rank - 1

    def get_data(self) -> dict[T, int]:
        return dict(self._ranks)

    def keys(self) -> list[T]:
        """Keys ordered from least to most recent."""
        return list(self._ranks)

    def compare(self, a: T, b: T) -> int:
        """Comparator placing the more recently put key first."""
        return self.get(b) - self.get(a)

    def sort(self, items: Iterable[object], key: Callable[[object], T]) -> list:
        """Return *items* ordered most-recent-first; unranked items keep their order."""
        return sorted(items, key=lambda item: self.get(key(item)), reverse=True)
