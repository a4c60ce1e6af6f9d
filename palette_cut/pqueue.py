# palette_cut/pqueue.py
from __future__ import annotations

"""
Lazily sorted priority queue of colour boxes.

Inserts never sort; any ordered read (pop, get, contents, iteration) sorts
first if something changed since the last sort. The driver relies on this:
it pushes a batch of children and then pops once per iteration.
"""

from typing import Callable, Generic, Iterator, List, TypeVar

T = TypeVar("T")

PriorityKey = Callable[[T], int]


class PQueue(Generic[T]):
    """
    Items ordered by descending key(item). The key is fixed for the queue's
    lifetime; re-ranking under another key means a new queue plus extend().

    Sorting is stable, and push() inserts at the front, so among equal keys
    the most recently pushed item comes first.
    """

    def __init__(self, key: PriorityKey) -> None:
        self.key = key
        self._contents: List[T] = []
        self._sorted = False

    def _sort(self) -> None:
        self._contents.sort(key=self.key, reverse=True)
        self._sorted = True

    def _ensure_sorted(self) -> None:
        if not self._sorted:
            self._sort()

    def push(self, item: T) -> None:
        """Insert at the front without sorting."""
        self._contents.insert(0, item)
        self._sorted = False

    def pop(self) -> T:
        """Remove and return the highest-priority item."""
        self._ensure_sorted()
        if not self._contents:
            raise IndexError("pop from empty PQueue")
        return self._contents.pop(0)

    def get(self, index: int) -> T:
        self._ensure_sorted()
        return self._contents[index]

    def contents(self) -> List[T]:
        """Ordered snapshot of the queue."""
        self._ensure_sorted()
        return list(self._contents)

    def extend(self, other: PQueue[T]) -> None:
        """Append every item of another queue; ranks them under this queue's key."""
        self._contents.extend(other._contents)
        self._sorted = False

    def __len__(self) -> int:
        return len(self._contents)

    def __bool__(self) -> bool:
        return bool(self._contents)

    def __iter__(self) -> Iterator[T]:
        return iter(self.contents())


__all__ = ["PQueue", "PriorityKey"]
