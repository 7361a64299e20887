"""Circular doubly linked list of nodes around a sentinel.

Nodes are added by the caller and can be moved between positions; adding a
node that is already linked first unlinks it, so a node appears at most
once. Iteration is safe against removing the current node.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional


class ListNode:
    """A list link carrying a value."""

    def __init__(self, value: Any = None) -> None:
        self.value = value
        self.next: ListNode = self
        self.prev: ListNode = self

    def _unlink(self) -> None:
        self.prev.next = self.next
        self.next.prev = self.prev
        self.next = self
        self.prev = self

    def __repr__(self) -> str:
        return f"ListNode({self.value!r})"


class LinkedList:
    """Doubly linked list of ``ListNode`` objects."""

    def __init__(self) -> None:
        self._root = ListNode()

    def _walk(self, forward: bool) -> Iterator[ListNode]:
        root = self._root
        node = root.next if forward else root.prev
        while node is not root:
            following = node.next if forward else node.prev
            yield node
            if following is not root and following.next is following:
                # The upcoming node was unlinked while iterating.
                return
            node = following

    def __len__(self) -> int:
        return sum(1 for _ in self._walk(True))

    def __iter__(self) -> Iterator[ListNode]:
        return self._walk(True)

    def __reversed__(self) -> Iterator[ListNode]:
        return self._walk(False)

    def clear(self) -> None:
        """Unlink every node."""
        for node in self._walk(True):
            node._unlink()

    def is_empty(self) -> bool:
        """True if the list holds no nodes."""
        return self._root.next is self._root

    def head(self) -> Optional[ListNode]:
        """First node, or None if empty."""
        node = self._root.next
        return None if node is self._root else node

    def tail(self) -> Optional[ListNode]:
        """Last node, or None if empty."""
        node = self._root.prev
        return None if node is self._root else node

    @staticmethod
    def _link(node: ListNode, prev: ListNode, next_node: ListNode) -> None:
        prev.next = node
        node.prev = prev
        node.next = next_node
        next_node.prev = node

    def add_head(self, node: ListNode) -> None:
        """Put ``node`` first."""
        node._unlink()
        self._link(node, self._root, self._root.next)

    def add_tail(self, node: ListNode) -> None:
        """Put ``node`` last."""
        node._unlink()
        self._link(node, self._root.prev, self._root)

    def pop_head(self) -> Optional[ListNode]:
        """Unlink and return the first node, or None if empty."""
        node = self.head()
        if node is not None:
            node._unlink()
        return node

    def pop_tail(self) -> Optional[ListNode]:
        """Unlink and return the last node, or None if empty."""
        node = self.tail()
        if node is not None:
            node._unlink()
        return node

    def add_after(self, prev: ListNode, node: ListNode) -> None:
        """Put ``node`` right after ``prev``."""
        node._unlink()
        self._link(node, prev, prev.next)

    def add_before(self, next_node: ListNode, node: ListNode) -> None:
        """Put ``node`` right before ``next_node``."""
        node._unlink()
        self._link(node, next_node.prev, next_node)

    def remove(self, node: ListNode) -> None:
        """Unlink ``node``; unlinked nodes are left as they are."""
        node._unlink()