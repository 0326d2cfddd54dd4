"""Fixed-capacity, thread-safe FIFO queue used for message passing."""

from __future__ import annotations

import queue
import threading
from collections import deque
from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class BoundedQueue(Generic[T]):
    """FIFO queue that refuses new items once it holds ``capacity`` of them."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._items: deque[T] = deque()
        self._lock = threading.Lock()

    def push(self, item: T) -> None:
        """Append an item; raise queue.Full if the queue is at capacity."""
        with self._lock:
            if len(self._items) >= self.capacity:
                raise queue.Full(f"queue full ({self.capacity} items)")
            self._items.append(item)

    def pop(self) -> T | None:
        """Remove and return the oldest item, or None if the queue is empty."""
        with self._lock:
            return self._items.popleft() if self._items else None

    def drain(self) -> Iterator[T]:
        """Yield items oldest first until the queue is empty."""
        while True:
            with self._lock:
                if not self._items:
                    return
                item = self._items.popleft()
            yield item

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)