from __future__ import annotations

from typing import Generic, List, Optional, TypeVar


T = TypeVar("T")


class RingBuffer(Generic[T]):
    """Fixed-capacity circular buffer backed by a list and a write cursor.

    Writes never shift elements: the oldest slot is overwritten in place and
    chronological order is recovered by rotating around the cursor. Not
    thread-safe; callers that share one instance provide their own lock.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity: int = capacity
        self._slots: List[Optional[T]] = [None] * capacity
        self._cursor: int = 0
        self._size: int = 0

    def write(self, item: T) -> Optional[T]:
        """Store `item` at the cursor and return the item it displaced, if any."""
        evicted = self.peek_evictee()
        self._slots[self._cursor] = item
        self._cursor = (self._cursor + 1) % self._capacity
        if self._size < self._capacity:
            self._size += 1
        return evicted

    def peek_evictee(self) -> Optional[T]:
        """The item the next write would displace (None until full)."""
        return self._slots[self._cursor] if self.full() else None

    def size(self) -> int:
        return self._size

    def cursor(self) -> int:
        return self._cursor

    def full(self) -> bool:
        return self._size == self._capacity

    def slots(self) -> List[Optional[T]]:
        """Physical storage order, unset slots included."""
        return list(self._slots)

    def ordered(self) -> List[T]:
        """Stored items oldest-to-newest."""
        if not self.full():
            return list(self._slots[: self._size])  # type: ignore[arg-type]
        return self._slots[self._cursor :] + self._slots[: self._cursor]  # type: ignore[operator]

    def latest(self, count: int) -> List[T]:
        """The `count` most recent items, oldest first. Copies only those items."""
        count = min(count, self._size)
        if count <= 0:
            return []
        start = (self._cursor - count) % self._capacity
        end = start + count
        if end <= self._capacity:
            return self._slots[start:end]  # type: ignore[return-value]
        return self._slots[start:] + self._slots[: end - self._capacity]  # type: ignore[operator]
