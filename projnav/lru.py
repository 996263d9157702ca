"""Bounded, access-ordered maps used for the project list and file lookups."""

from __future__ import annotations

from typing import Generic, Hashable, Iterator, TypeVar

from .items import FileDescriptor, FileType
from .text import Messages

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_HEAD = 0
_TAIL = 1


class BoundedOrderedMap(Generic[K, V]):
    """LRU map with O(1) get/set/delete.

    Nodes live in an arena of parallel lists addressed by integer slot; the
    index maps each key to its slot. Slots 0 and 1 are the head and tail
    sentinels. The node right after the head is the most recently touched.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError(Messages.ERROR_CAPACITY.format(name="capacity"))
        self._capacity = capacity
        self._index: dict[K, int] = {}
        self._keys: list[K | None] = [None, None]
        self._values: list[V | None] = [None, None]
        self._prev: list[int] = [_HEAD, _HEAD]
        self._next: list[int] = [_TAIL, _TAIL]
        self._free: list[int] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[K]:
        return iter(self.keys())

    def has(self, key: K) -> bool:
        return key in self._index

    def get(self, key: K, default: V | None = None) -> V | None:
        slot = self._index.get(key)
        if slot is None:
            return default
        self._unlink(slot)
        self._link_front(slot)
        return self._values[slot]

    def peek(self, key: K, default: V | None = None) -> V | None:
        """Return the value for *key* without promoting it."""
        slot = self._index.get(key)
        if slot is None:
            return default
        return self._values[slot]

    def set(self, key: K, value: V) -> K | None:
        """Insert or promote *key*; return the key evicted to make room, if any."""
        slot = self._index.get(key)
        if slot is not None:
            self._values[slot] = value
            self._unlink(slot)
            self._link_front(slot)
            return None
        slot = self._allocate(key, value)
        self._index[key] = slot
        self._link_front(slot)
        if len(self._index) > self._capacity:
            return self._evict_oldest()
        return None

    def delete(self, key: K) -> bool:
        slot = self._index.pop(key, None)
        if slot is None:
            return False
        self._unlink(slot)
        self._release(slot)
        return True

    def clear(self) -> None:
        self._index.clear()
        self._keys = [None, None]
        self._values = [None, None]
        self._prev = [_HEAD, _HEAD]
        self._next = [_TAIL, _TAIL]
        self._free = []

    def keys(self) -> list[K]:
        return [self._keys[slot] for slot in self._walk()]  # type: ignore[misc]

    def values(self) -> list[V]:
        return [self._values[slot] for slot in self._walk()]  # type: ignore[misc]

    def items(self) -> list[tuple[K, V]]:
        return [(self._keys[slot], self._values[slot]) for slot in self._walk()]  # type: ignore[misc]

    entries = items

    def oldest(self) -> K | None:
        slot = self._prev[_TAIL]
        if slot == _HEAD:
            return None
        return self._keys[slot]

    def _walk(self) -> Iterator[int]:
        slot = self._next[_HEAD]
        while slot != _TAIL:
            yield slot
            slot = self._next[slot]

    def _allocate(self, key: K, value: V) -> int:
        if self._free:
            slot = self._free.pop()
            self._keys[slot] = key
            self._values[slot] = value
            return slot
        self._keys.append(key)
        self._values.append(value)
        self._prev.append(_HEAD)
        self._next.append(_TAIL)
        return len(self._keys) - 1

    def _release(self, slot: int) -> None:
        self._keys[slot] = None
        self._values[slot] = None
        self._free.append(slot)

    def _unlink(self, slot: int) -> None:
        before, after = self._prev[slot], self._next[slot]
        self._next[before] = after
        self._prev[after] = before

    def _link_front(self, slot: int) -> None:
        first = self._next[_HEAD]
        self._prev[slot] = _HEAD
        self._next[slot] = first
        self._prev[first] = slot
        self._next[_HEAD] = slot

    def _evict_oldest(self) -> K:
        slot = self._prev[_TAIL]
        key = self._keys[slot]
        self._unlink(slot)
        del self._index[key]  # type: ignore[arg-type]
        self._release(slot)
        return key  # type: ignore[return-value]


class FileItemCache:
    """Bounded map of absolute file path to its FileDescriptor."""

    def __init__(self, capacity: int = 200) -> None:
        self._items: BoundedOrderedMap[str, FileDescriptor] = BoundedOrderedMap(capacity)

    def __len__(self) -> int:
        return len(self._items)

    def has(self, path: str) -> bool:
        return self._items.has(path)

    def get(self, path: str) -> FileDescriptor | None:
        return self._items.get(path)

    def set(self, path: str, item: FileDescriptor) -> None:
        self._items.set(path, item)

    def attach(
        self,
        path: str,
        project_root: str,
        file_type: FileType = FileType.FILE,
    ) -> FileDescriptor:
        """Return the cached descriptor for *path*, recording *project_root* as an owner."""
        item = self._items.get(path)
        if item is None:
            item = FileDescriptor(path, file_type)
        item.add_project(project_root)
        self._items.set(path, item)
        return item

    def paths(self) -> list[str]:
        return self._items.keys()
