"""
Priority queue ordered by a list of named sort fields.

The most common field is 'priority', a plain number where lower means
more urgent. A second field such as a timestamp lets equal-priority items
be served first-created, first-served:

    queue = PriorityQueue(["priority", "timestamp"])
    queue.set_data(jobs)
    job = queue.remove_first_item()

Records may be mappings (fields read with item[key]) or plain objects
(fields read with getattr).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from gridsearch.config import DEFAULT_SORT_CRITERIA
from gridsearch.heap.binary_heap import BinaryHeap

logger = logging.getLogger(__name__)

_MISSING = object()


def _field(item: Any, key: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(key, _MISSING)
    return getattr(item, key, _MISSING)


class PriorityQueue(BinaryHeap):
    """
    Binary-heap priority queue with multi-key ordering.

    Items are compared on sort_criteria[0]; on a tie, on sort_criteria[1];
    and so on. Values rank ascending (lowest first) unless descending=True.
    A record missing a sort field always ranks behind one that has it.
    Without a secondary key, equal items come out in an unspecified order.
    """

    def __init__(
        self,
        sort_criteria: Sequence[str] | None = None,
        descending: bool = False,
    ) -> None:
        """
        Initialize an empty queue.

        Args:
            sort_criteria: Ordered field names (default: ['priority'])
            descending: Rank higher values first instead of lower
        """
        super().__init__(compare=self._compare_records)
        self._sort_criteria: list[str] = list(sort_criteria or DEFAULT_SORT_CRITERIA)
        self._descending = bool(descending)

    @property
    def sort_criteria(self) -> list[str]:
        return list(self._sort_criteria)

    @property
    def descending(self) -> bool:
        return self._descending

    def set_sort_criteria(self, criteria: Sequence[str] | None) -> None:
        """
        Assign the ordered sort fields and re-heapify any loaded data.

        An empty or None list is ignored and the current criteria remain.
        """
        if not criteria:
            logger.debug("Ignoring empty sort criteria")
            return
        self._sort_criteria = list(criteria)
        self.repair()

    def set_descending(self, value: bool) -> None:
        self._descending = bool(value)
        self.repair()

    def set_data(self, items: Iterable[Any] | None) -> None:
        """Load items (copying the sequence) and heapify in O(n)."""
        super().set_data(items)
        logger.debug(f"Loaded {self.length} items sorted by {self._sort_criteria}")

    def _compare_records(self, a: Any, b: Any) -> int:
        for key in self._sort_criteria:
            va = _field(a, key)
            vb = _field(b, key)
            if va is _MISSING or vb is _MISSING:
                if va is vb:
                    continue
                return 1 if va is _MISSING else -1
            if va == vb:
                continue
            if self._descending:
                return -1 if va > vb else 1
            return -1 if va < vb else 1
        return 0

    def __repr__(self) -> str:
        return f"PriorityQueue(length={self.length}, sort_criteria={self._sort_criteria})"
