"""
Restartable iterators over a Graph.

Both iterators are lazy and forward-only. They remember the graph's
structural version when created (or reset) and refuse to continue once a
node or arc has been added or removed, the same way Python's own
containers refuse mutation during iteration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gridsearch.graph.graph import Arc, Graph, GraphNode


class _GraphIterator:
    def __init__(self, graph: Graph) -> None:
        self._graph = graph
        self._version = graph.version

    def __iter__(self):
        return self

    def _check_version(self) -> None:
        if self._graph.version != self._version:
            raise RuntimeError("Graph changed structure during iteration")


class NodeIterator(_GraphIterator):
    """Yields each node's payload exactly once, in graph order."""

    def __init__(self, graph: Graph) -> None:
        super().__init__(graph)
        self._nodes: Iterator[GraphNode] = graph.walk_nodes()

    def reset(self) -> None:
        """Restart from the first node."""
        self._version = self._graph.version
        self._nodes = self._graph.walk_nodes()

    def __next__(self) -> Any:
        self._check_version()
        return next(self._nodes).value


class ArcIterator(_GraphIterator):
    """
    Yields every arc in the graph as one flat sequence.

    Starting from a node (default: the first), the iterator walks that
    node's adjacency list, then moves on to the next node in graph order
    and continues over its arcs. Meant for bulk inspection such as
    serialization; use Graph.neighbors for adjacency lookups.
    """

    def __init__(self, graph: Graph, start: GraphNode | None = None) -> None:
        super().__init__(graph)
        self._start = start
        self._arcs: Iterator[Arc] = graph.edges(start)

    def reset(self) -> None:
        self._version = self._graph.version
        self._arcs = self._graph.edges(self._start)

    def __next__(self) -> Arc:
        self._check_version()
        return next(self._arcs)
