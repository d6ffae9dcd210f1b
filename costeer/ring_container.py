"""A bounded first-in first-out container backed by a fixed ring of slots."""

from __future__ import annotations

from typing import Any, Iterator


class RingContainer:
    """Fixed-capacity FIFO queue that reuses its slots in a ring."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("ring container capacity must be positive")
        self.capacity = capacity
        self._slots: list[Any] = [None] * capacity
        self._head = 0
        self._size = 0

    def push_back(self, value: Any) -> None:
        """Append a value at the tail."""
        if self._size == self.capacity:
            raise OverflowError("ring container is full")
        self._slots[(self._head + self._size) % self.capacity] = value
        self._size += 1

    def pop_front(self) -> Any:
        """Remove and return the value at the head."""
        if not self._size:
            raise IndexError("pop from empty ring container")
        value = self._slots[self._head]
        self._slots[self._head] = None
        self._head = (self._head + 1) % self.capacity
        self._size -= 1
        return value

    def front(self) -> Any:
        """Return the value at the head without removing it."""
        if not self._size:
            raise IndexError("front of empty ring container")
        return self._slots[self._head]

    def back(self) -> Any:
        """Return the most recently pushed value."""
        if not self._size:
            raise IndexError("back of empty ring container")
        return self._slots[(self._head + self._size - 1) % self.capacity]

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size != 0

    def __iter__(self) -> Iterator[Any]:
        for offset in range(self._size):
            yield self._slots[(self._head + offset) % self.capacity]

    def __repr__(self) -> str:
        return f"RingContainer(capacity={self.capacity}, items={list(self)!r})"