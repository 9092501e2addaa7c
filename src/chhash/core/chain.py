from __future__ import annotations

from typing import Callable, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class _Node(Generic[T]):
    __slots__ = ("data", "next")

    def __init__(self, data: T) -> None:
        self.data = data
        self.next: Optional[_Node[T]] = None


class Chain(Generic[T]):
    """Singly linked ordered sequence used as a hash bucket chain."""

    __slots__ = ("_head", "_tail", "_len")

    def __init__(self) -> None:
        self._head: Optional[_Node[T]] = None
        self._tail: Optional[_Node[T]] = None
        self._len = 0

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[T]:
        node = self._head
        while node is not None:
            yield node.data
            node = node.next

    def __repr__(self) -> str:
        return f"Chain({list(self)!r})"

    def append(self, item: T) -> None:
        node = _Node(item)
        if self._tail is None:
            self._head = node
        else:
            self._tail.next = node
        self._tail = node
        self._len += 1

    def each(self, visitor: Callable[[T, int], bool]) -> bool:
        """Visit items in order until ``visitor`` returns True.

        Returns True when traversal stopped early, False when every item was
        visited.
        """

        node = self._head
        index = 0
        while node is not None:
            if visitor(node.data, index):
                return True
            node = node.next
            index += 1
        return False

    def remove_first(self, predicate: Callable[[T], bool]) -> Optional[T]:
        """Unlink and return the first item matching ``predicate``."""

        prev: Optional[_Node[T]] = None
        node = self._head
        while node is not None:
            if predicate(node.data):
                if prev is None:
                    self._head = node.next
                else:
                    prev.next = node.next
                if node is self._tail:
                    self._tail = prev
                self._len -= 1
                return node.data
            prev = node
            node = node.next
        return None


__all__ = ["Chain"]
