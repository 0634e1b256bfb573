"""
Array-backed binary heap with item position tracking.

The heap lives in a 1-indexed list (slot 0 is an unused sentinel), so the
parent of slot i is i // 2 and its children are 2i and 2i + 1. Each
resident item's slot is tracked by identity, which makes membership tests,
removal and re-prioritisation of an arbitrary item O(log n).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from functools import cmp_to_key
from typing import Any


Compare = Callable[[Any, Any], int]


def natural_compare(a: Any, b: Any) -> int:
    """Three-way compare using the items' own ordering (smaller ranks first)."""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


class BinaryHeap:
    """
    Min-heap under a three-way comparator.

    compare(a, b) < 0 means a ranks ahead of b and is extracted first. An
    item may be resident at most once; adding it again repositions it.
    None is never stored.
    """

    def __init__(self, compare: Compare | None = None) -> None:
        self._compare: Compare = compare or natural_compare
        self._a: list[Any] = [None]
        self._positions: dict[int, int] = {}

    # =========================================================================
    # Size
    # =========================================================================

    @property
    def length(self) -> int:
        """Number of items in the heap."""
        return len(self._a) - 1

    def __len__(self) -> int:
        return len(self._a) - 1

    def is_empty(self) -> bool:
        return len(self._a) == 1

    # =========================================================================
    # Queue Operations
    # =========================================================================

    def add_item(self, item: Any) -> None:
        """Insert item and sift it up, O(log n). Re-sifts an already resident item."""
        if item is None:
            return
        if self.contains(item):
            self.update_item(item)
            return
        self._a.append(item)
        i = len(self._a) - 1
        self._positions[id(item)] = i
        self._upheap(i)

    def first_item(self) -> Any | None:
        """Peek at the highest-priority item without removing it."""
        return self._a[1] if len(self._a) > 1 else None

    def remove_first_item(self) -> Any | None:
        """Remove and return the highest-priority item, or None if empty."""
        if len(self._a) == 1:
            return None
        return self._remove_at(1)

    def remove_last_item(self) -> Any | None:
        """
        Remove and return the lowest-priority item, or None if empty.

        The lowest-priority item is always a leaf, so only slots
        n // 2 + 1 .. n are scanned: O(n) worst case, plus O(log n) for the
        removal itself.
        """
        n = len(self._a) - 1
        if n == 0:
            return None

        worst = n // 2 + 1
        for i in range(worst + 1, n + 1):
            if self._compare(self._a[i], self._a[worst]) > 0:
                worst = i
        return self._remove_at(worst)

    def remove_item(self, item: Any) -> bool:
        """Remove a specific resident item. Returns False if it is not in the heap."""
        if not self.contains(item):
            return False
        self._remove_at(self._positions[id(item)])
        return True

    def update_item(self, item: Any) -> bool:
        """
        Restore heap order after item's sort fields changed in place.

        Returns:
            False if item is not in the heap
        """
        if not self.contains(item):
            return False
        self._upheap(self._positions[id(item)])
        self._downheap(self._positions[id(item)])
        return True

    def contains(self, item: Any) -> bool:
        position = self._positions.get(id(item))
        return position is not None and position < len(self._a) and self._a[position] is item

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    # =========================================================================
    # Bulk Operations
    # =========================================================================

    def set_data(self, items: Iterable[Any] | None) -> None:
        """Replace the contents with items and heapify bottom-up, O(n)."""
        if items is None:
            return
        self._a = [None]
        self._positions = {}
        for item in items:
            if item is None or id(item) in self._positions:
                continue
            self._positions[id(item)] = len(self._a)
            self._a.append(item)
        self.repair()

    def repair(self) -> None:
        """Re-heapify the whole array (after the ordering itself changed)."""
        for i in range((len(self._a) - 1) // 2, 0, -1):
            self._downheap(i)

    def clear(self) -> None:
        self._a = [None]
        self._positions = {}

    def __iter__(self) -> Iterator[Any]:
        """Iterate resident items in array (not priority) order."""
        return iter(self._a[1:])

    def to_list(self) -> list[Any]:
        return self._a[1:]

    def sorted_items(self) -> list[Any]:
        """Resident items in extraction order, without modifying the heap."""
        return sorted(self._a[1:], key=cmp_to_key(self._compare))

    def is_valid(self) -> bool:
        """Check that no item ranks ahead of its parent."""
        for i in range(2, len(self._a)):
            if self._compare(self._a[i], self._a[i >> 1]) < 0:
                return False
        return True

    # =========================================================================
    # Sifting
    # =========================================================================

    def _place(self, item: Any, i: int) -> None:
        self._a[i] = item
        self._positions[id(item)] = i

    def _remove_at(self, i: int) -> Any:
        item = self._a[i]
        last = self._a.pop()
        del self._positions[id(item)]
        if i < len(self._a):
            self._place(last, i)
            self._downheap(i)
            self._upheap(self._positions[id(last)])
        return item

    def _upheap(self, i: int) -> None:
        item = self._a[i]
        p = i >> 1
        while p > 0:
            parent = self._a[p]
            if self._compare(item, parent) < 0:
                self._place(parent, i)
                i = p
                p >>= 1
            else:
                break
        self._place(item, i)

    def _downheap(self, i: int) -> None:
        item = self._a[i]
        n = len(self._a) - 1
        c = i << 1
        while c <= n:
            if c < n and self._compare(self._a[c + 1], self._a[c]) < 0:
                c += 1
            child = self._a[c]
            if self._compare(child, item) < 0:
                self._place(child, i)
                i = c
                c <<= 1
            else:
                break
        self._place(item, i)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(length={self.length})"
