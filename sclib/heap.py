"""Binary min-heap keyed by integers, each entry carrying arbitrary data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_MAX_ITEMS = ((1 << 64) - 1) // 16


@dataclass(frozen=True)
class HeapItem:
    """A key and the data stored with it."""

    key: int
    data: Any = None


class Heap:
    """Min-heap; the entry with the smallest key comes out first.

    For a max-heap, negate keys on the way in and out.
    """

    def __init__(self, capacity: int = 0, max_items: int = DEFAULT_MAX_ITEMS) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        if capacity > max_items:
            raise ValueError("capacity exceeds the maximum number of items")
        # Slot 0 is unused so that children of i are at 2i and 2i + 1.
        self._elems: list[HeapItem | None] = [None]
        self._cap = capacity
        self._max = max_items

    def __len__(self) -> int:
        return len(self._elems) - 1

    def clear(self) -> None:
        """Remove every entry; the capacity is kept."""
        self._elems.clear()
        self._elems.append(None)

    def add(self, key: int, data: Any = None) -> bool:
        """Insert an entry. Returns False if the heap cannot grow further."""
        size = len(self) + 1
        if size >= self._cap:
            if self._cap >= self._max // 2:
                return False
            self._cap = self._cap * 2 if self._cap else 4

        elems = self._elems
        elems.append(None)
        i = size
        while i != 1 and key < elems[i // 2].key:
            elems[i] = elems[i // 2]
            i //= 2
        elems[i] = HeapItem(key, data)
        return True

    def peek(self) -> HeapItem | None:
        """Return the smallest entry without removing it, or None if empty."""
        if len(self) == 0:
            return None
        return self._elems[1]

    def pop(self) -> HeapItem | None:
        """Remove and return the smallest entry, or None if empty."""
        if len(self) == 0:
            return None
        elems = self._elems
        top = elems[1]
        last = elems.pop()
        size = len(self)
        if size == 0:
            return top

        i, child = 1, 2
        while child <= size:
            if child < size and elems[child].key > elems[child + 1].key:
                child += 1
            if last.key <= elems[child].key:
                break
            elems[i] = elems[child]
            i = child
            child *= 2
        elems[i] = last
        return top