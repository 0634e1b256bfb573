"""
Search engine base class shared by the grid and waypoint A* engines.

Subclasses adapt a concrete structure (a Grid2D, a waypoint Graph) to the
common best-first loop in SearchEngine._run by supplying the start and
target nodes, a neighbor function and a heuristic.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any

from gridsearch.config import MAX_ITERATIONS, OPEN_SET_CRITERIA, TIME_BUDGET
from gridsearch.heap.priority_queue import PriorityQueue
from gridsearch.search.state import (
    SearchResult,
    SearchStatus,
    VisitRecord,
    reconstruct_path,
)

logger = logging.getLogger(__name__)

Neighbors = Callable[[Any], Iterable[tuple[Any, float]]]
Heuristic = Callable[[Any, Any], float]


class SearchEngine(ABC):
    """
    A* best-first search with an optional expansion and time budget.

    The open set is a PriorityQueue of VisitRecords ordered by lowest f,
    ties broken by lowest h. A search runs synchronously to completion; the
    engine is not re-entrant while a search is in progress.
    """

    def __init__(
        self,
        heuristic: Heuristic | None = None,
        max_iterations: int | None = MAX_ITERATIONS,
        time_budget: float | None = TIME_BUDGET,
    ) -> None:
        """
        Initialize the engine.

        Args:
            heuristic: Function (node, target) -> estimated remaining cost;
                None selects the subclass default
            max_iterations: Maximum node expansions before TIMEOUT (None = unbounded)
            time_budget: Maximum seconds before TIMEOUT (None = unbounded)
        """
        self._heuristic = heuristic
        self._max_iterations = max_iterations
        self._time_budget = time_budget
        self._open = PriorityQueue(OPEN_SET_CRITERIA)
        self.status = SearchStatus.IDLE
        self.last_result: SearchResult | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier for the engine."""
        ...

    @property
    def heuristic(self) -> Heuristic | None:
        return self._heuristic

    def set_heuristic(self, heuristic: Heuristic | None) -> None:
        """Replace the heuristic; None is ignored."""
        if heuristic is not None:
            self._heuristic = heuristic

    def _run(
        self,
        start: Any,
        target: Any,
        neighbors: Neighbors,
        heuristic: Heuristic,
    ) -> SearchResult:
        """
        Run A* from start until target is extracted or the open set empties.

        Args:
            start: Start node
            target: Target node (compared by identity)
            neighbors: Function node -> iterable of (neighbor, step cost)
            heuristic: Function (node, target) -> estimated remaining cost

        Returns:
            SearchResult; path includes both endpoints on success
        """
        self.status = SearchStatus.RUNNING
        start_ms = time.time() * 1000
        self._open.clear()
        try:
            return self._search(start, target, neighbors, heuristic, start_ms)
        finally:
            self._open.clear()
            if self.status == SearchStatus.RUNNING:
                self.status = SearchStatus.IDLE

    def _search(
        self,
        start: Any,
        target: Any,
        neighbors: Neighbors,
        heuristic: Heuristic,
        start_ms: float,
    ) -> SearchResult:
        deadline_ms = None if self._time_budget is None else start_ms + self._time_budget * 1000
        records: dict[Any, VisitRecord] = {}

        origin = VisitRecord(start, g=0.0, h=heuristic(start, target))
        records[start] = origin
        self._open.add_item(origin)
        expanded = 0

        while not self._open.is_empty():
            if deadline_ms is not None and time.time() * 1000 > deadline_ms:
                logger.warning(f"{self.name}: time budget of {self._time_budget}s exceeded")
                return self._finish(SearchStatus.TIMEOUT, start_ms, expanded, records)

            current = self._open.remove_first_item()

            if current.node is target:
                path = reconstruct_path(current, len(records))
                return self._finish(
                    SearchStatus.SUCCEEDED, start_ms, expanded, records, path, current.g
                )

            # Reaching the target costs no expansion
            if self._max_iterations is not None and expanded >= self._max_iterations:
                logger.warning(f"{self.name}: stopped after {expanded} expansions")
                return self._finish(SearchStatus.TIMEOUT, start_ms, expanded, records)

            current.closed = True
            expanded += 1

            for node, cost in neighbors(current.node):
                record = records.get(node)
                if record is not None and record.closed:
                    continue

                tentative_g = current.g + cost
                if record is None:
                    record = VisitRecord(
                        node, g=tentative_g, h=heuristic(node, target), parent=current
                    )
                    records[node] = record
                    self._open.add_item(record)
                elif tentative_g < record.g:
                    record.g = tentative_g
                    record.parent = current
                    self._open.update_item(record)

        return self._finish(SearchStatus.FAILED, start_ms, expanded, records)

    def _finish(
        self,
        status: SearchStatus,
        start_ms: float,
        expanded: int,
        records: dict[Any, VisitRecord],
        path: list[Any] | None = None,
        cost: float | None = None,
    ) -> SearchResult:
        self._open.clear()
        self.status = status
        self.last_result = SearchResult(
            status=status,
            path=path or [],
            cost=cost,
            expanded=expanded,
            elapsed_ms=time.time() * 1000 - start_ms,
            records=records,
        )

        if status == SearchStatus.SUCCEEDED:
            logger.info(
                f"{self.name}: found path of {len(self.last_result.path)} nodes "
                f"(cost {cost:.3f}) after {expanded} expansions"
            )
        else:
            logger.info(f"{self.name}: no path ({status.value}) after {expanded} expansions")
        return self.last_result

    def _fail(self, reason: str) -> SearchResult:
        """Finish immediately as FAILED (missing endpoints and similar)."""
        logger.warning(f"{self.name}: {reason}")
        return self._finish(SearchStatus.FAILED, time.time() * 1000, 0, {})

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, status={self.status.value!r})"
