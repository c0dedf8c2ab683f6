from __future__ import annotations

from typing import Generic, Iterator, List, Optional, TypeVar


HISTORY_SIZE = 6

T = TypeVar("T")


class HistoryStack(Generic[T]):
    """Fixed-capacity stack with ring-buffer semantics.

    Pushing onto a full stack silently drops the oldest entry, so at most
    ``capacity`` entries can ever be popped back.
    """

    def __init__(self, capacity: int = HISTORY_SIZE) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._capacity = capacity
        self._items: List[Optional[T]] = [None] * capacity
        self._start = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def is_full(self) -> bool:
        return self._size == self._capacity

    def push(self, item: T) -> None:
        offset = (self._start + self._size) % self._capacity
        self._items[offset] = item
        if self.is_full():
            # Overwrote the oldest entry
            self._start = (self._start + 1) % self._capacity
        else:
            self._size += 1

    def pop(self) -> T:
        """Remove and return the most recent entry.

        Raises:
            IndexError: If the stack is empty.
        """
        if self._size == 0:
            raise IndexError("pop from empty history")
        self._size -= 1
        offset = (self._start + self._size) % self._capacity
        item = self._items[offset]
        self._items[offset] = None
        return item  # type: ignore[return-value]

    def peek(self) -> Optional[T]:
        if self._size == 0:
            return None
        return self._items[(self._start + self._size - 1) % self._capacity]

    def clear(self) -> None:
        self._items = [None] * self._capacity
        self._start = 0
        self._size = 0

    def __iter__(self) -> Iterator[T]:
        """Iterate oldest to newest."""
        for i in range(self._size):
            yield self._items[(self._start + i) % self._capacity]  # type: ignore[misc]

    def copy(self) -> "HistoryStack[T]":
        clone: HistoryStack[T] = HistoryStack(self._capacity)
        for item in self:
            clone.push(item)
        return clone
