"""
Search state dataclasses shared by the A* engines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SearchStatus(str, Enum):
    """Lifecycle of one search: IDLE -> RUNNING -> SUCCEEDED | FAILED | TIMEOUT."""

    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMEOUT = "timeout"


@dataclass(eq=False)
class VisitRecord:
    """
    Per-search bookkeeping for one node.

    Records are created on first touch and belong to a single search, so the
    searched structure itself is never written to.

    Attributes:
        node: The Cell or GraphNode this record describes
        g: Cost of the best known path from the start
        h: Heuristic estimate of the remaining cost to the target
        parent: Record of the predecessor on the best known path
        closed: Whether the node has been expanded
    """

    node: Any
    g: float = 0.0
    h: float = 0.0
    parent: VisitRecord | None = None
    closed: bool = False

    @property
    def f(self) -> float:
        """Total score g + h."""
        return self.g + self.h


@dataclass
class SearchResult:
    """
    Outcome of a finished search.

    Attributes:
        status: Final status (SUCCEEDED, FAILED or TIMEOUT)
        path: Nodes from start to target inclusive (empty unless SUCCEEDED)
        cost: Total path cost (None unless SUCCEEDED)
        expanded: Number of nodes expanded
        elapsed_ms: Wall-clock time spent searching
        records: Visit records keyed by node
    """

    status: SearchStatus
    path: list[Any] = field(default_factory=list)
    cost: float | None = None
    expanded: int = 0
    elapsed_ms: float = 0.0
    records: dict[Any, VisitRecord] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status == SearchStatus.SUCCEEDED

    def record(self, node: Any) -> VisitRecord | None:
        """Visit record of node, or None if the search never touched it."""
        return self.records.get(node)


def reconstruct_path(record: VisitRecord, limit: int) -> list[Any]:
    """
    Follow parent links from record back to the start, then reverse.

    Raises:
        RuntimeError: If the chain is longer than limit (a parent cycle)
    """
    path = []
    walker: VisitRecord | None = record
    while walker is not None:
        if len(path) > limit:
            raise RuntimeError(f"Parent chain exceeds {limit} records; cycle detected")
        path.append(walker.node)
        walker = walker.parent
    path.reverse()
    return path
