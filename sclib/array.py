"""Dynamic array with bounded doubling growth and an out-of-memory flag."""

from __future__ import annotations

import sys
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")

_INITIAL_CAP = 8


class Array(Generic[T]):
    """Ordered sequence that grows by doubling up to ``max_items`` slots.

    ``add`` never raises on growth failure. It returns False and sets
    ``oom``, which stays set until the next successful ``add`` or ``clear``.
    """

    def __init__(self, max_items: int = sys.maxsize) -> None:
        if max_items < 0:
            raise ValueError("max_items must not be negative")
        self._items: list[T] = []
        self._cap = 0
        self._max = max_items
        self.oom = False

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    @property
    def capacity(self) -> int:
        """Number of slots reserved; kept across ``clear``."""
        return self._cap

    def add(self, item: T) -> bool:
        """Append ``item``. Returns False and sets ``oom`` if it cannot grow."""
        if self._cap == len(self._items):
            if self._cap > self._max // 2:
                self.oom = True
                return False
            self._cap = _INITIAL_CAP if self._cap == 0 else self._cap * 2
        self.oom = False
        self._items.append(item)
        return True

    def clear(self) -> None:
        """Remove all items, keeping the capacity, and reset ``oom``."""
        self._items.clear()
        self.oom = False

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise IndexError("array index out of range")

    def delete(self, index: int) -> None:
        """Remove the item at ``index``, keeping the order of the rest."""
        self._check_index(index)
        del self._items[index]

    def delete_unordered(self, index: int) -> None:
        """Remove the item at ``index`` by moving the last item into its place."""
        self._check_index(index)
        last = self._items.pop()
        if index < len(self._items):
            self._items[index] = last

    def delete_last(self) -> None:
        """Remove the last item."""
        if not self._items:
            raise IndexError("delete from empty array")
        self._items.pop()

    def sort(self, key: Optional[Callable[[T], Any]] = None) -> None:
        """Sort the items in place."""
        self._items.sort(key=key)

    def last(self) -> T:
        """Return the last item."""
        if not self._items:
            raise IndexError("empty array has no last item")
        return self._items[-1]