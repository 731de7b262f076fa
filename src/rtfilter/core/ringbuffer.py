from __future__ import annotations

import operator
from collections.abc import Iterator


class RingBuffer:
    """
    Fixed-capacity history of floats, indexed newest first.

    Storage is allocated once; pushing into a full buffer overwrites the
    oldest value. ``buf[0]`` is the most recent push, ``buf[-1]`` the oldest
    value still held.
    """

    __slots__ = ("_capacity", "_data", "_head", "_size")

    def __init__(self, capacity: int) -> None:
        capacity = operator.index(capacity)
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._data: list[float] = [0.0] * self._capacity
        # slot of the newest value
        self._head = -1
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return self._size == self._capacity

    def push(self, value: float) -> None:
        """Store ``value`` as the newest entry, evicting the oldest when full."""
        self._head = (self._head + 1) % self._capacity
        self._data[self._head] = value
        if self._size < self._capacity:
            self._size += 1

    def clear(self) -> None:
        for i in range(self._capacity):
            self._data[i] = 0.0
        self._head = -1
        self._size = 0

    def snapshot(self) -> tuple[float, ...]:
        """Return the logical contents as a tuple, newest first."""
        return tuple(self)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return self._size

    def __getitem__(self, index: int) -> float:
        """Support buf[i] (i-th newest) and buf[-1] (oldest) indexing."""
        size = self._size
        if size == 0:
            raise IndexError("RingBuffer is empty")

        if index < 0:
            index += size

        if index < 0 or index >= size:
            raise IndexError("RingBuffer index out of range")

        return self._data[(self._head - index) % self._capacity]

    def __iter__(self) -> Iterator[float]:
        for i in range(self._size):
            yield self._data[(self._head - i) % self._capacity]
