"""Single-owner work-stealing deque used to distribute frames among workers."""

from __future__ import annotations

import threading
from typing import Any


class RingBuffer:
    """Power-of-two ring of slots addressed by unbounded indices."""

    def __init__(self, capacity: int) -> None:
        if capacity < 2 or capacity & (capacity - 1):
            raise ValueError("ring buffer capacity must be a power of two >= 2")
        self.capacity = capacity
        self._mask = capacity - 1
        self._storage: list[Any] = [None] * capacity

    def store(self, index: int, item: Any) -> None:
        """Place an item in the slot for the given index."""
        self._storage[index & self._mask] = item

    def load(self, index: int) -> Any:
        """Return the item in the slot for the given index."""
        return self._storage[index & self._mask]

    def resize(self, bottom: int, top: int) -> RingBuffer:
        """Return a buffer of twice the capacity holding indices top..bottom-1."""
        grown = RingBuffer(2 * self.capacity)
        for index in range(top, bottom):
            grown.store(index, self.load(index))
        return grown


class WorkStealingDeque:
    """Deque whose owner pushes and pops at the bottom while others steal from the top."""

    _INITIAL_CAPACITY = 1024

    def __init__(self) -> None:
        self._top = 0
        self._bottom = 0
        self._buffer = RingBuffer(self._INITIAL_CAPACITY)
        self._lock = threading.Lock()

    def push(self, item: Any) -> None:
        """Push an item at the bottom, growing the buffer when it is full."""
        with self._lock:
            if self._buffer.capacity < (self._bottom - self._top) + 1:
                self._buffer = self._buffer.resize(self._bottom, self._top)
            self._buffer.store(self._bottom, item)
            self._bottom += 1

    def try_pop(self) -> Any | None:
        """Take the most recently pushed item, or None when empty."""
        with self._lock:
            if self._bottom <= self._top:
                return None
            self._bottom -= 1
            item = self._buffer.load(self._bottom)
            self._buffer.store(self._bottom, None)
            return item

    def try_steal(self) -> Any | None:
        """Take the oldest item, or None when empty."""
        with self._lock:
            if self._top >= self._bottom:
                return None
            item = self._buffer.load(self._top)
            self._buffer.store(self._top, None)
            self._top += 1
            return item

    def __len__(self) -> int:
        with self._lock:
            return max(self._bottom - self._top, 0)