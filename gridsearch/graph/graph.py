"""
Weighted directed graph stored as an arena of nodes and arcs.

Nodes and arcs live in flat lists and refer to each other by integer
handles (their slot index). Removed slots go on a free-list and are reused
by later insertions, so handles stay stable for the lifetime of an item
and nothing ever points at a freed object. Node order is a doubly-linked
list threaded through the slots (prev/next handles), giving O(1) append
and removal while preserving insertion order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from gridsearch.config import DEFAULT_ARC_COST
from gridsearch.graph.iterators import ArcIterator, NodeIterator

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class GraphNode:
    """
    A node of a Graph.

    Attributes:
        value: Payload carried by the node
        id: String identifier used by Graph.find_node
        handle: Slot index in the owning graph (None while detached)
        prev: Handle of the previous node in graph order
        next: Handle of the next node in graph order
        arcs: Handles of outgoing arcs, in insertion order
        inbound: Handles of arcs pointing at this node
    """

    value: Any = None
    id: str = ""
    handle: int | None = None
    prev: int | None = None
    next: int | None = None
    arcs: list[int] = field(default_factory=list)
    inbound: list[int] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"GraphNode(id={self.id!r}, handle={self.handle})"


@dataclass(eq=False)
class Arc:
    """
    A directed, weighted edge.

    Attributes:
        source: Handle of the node whose adjacency list owns this arc
        target: Handle of the destination node
        cost: Traversal cost
        handle: Slot index in the owning graph
    """

    source: int
    target: int
    cost: float = DEFAULT_ARC_COST
    handle: int | None = None


class Graph:
    """
    Mutable collection of nodes and directed, costed arcs.

    Arbitrary topologies are allowed: no duplicate detection, parallel arcs
    and self-loops are fine. Lookups of absent nodes or arcs return None
    (or False) rather than raising. Not thread-safe; one writer at a time.
    """

    def __init__(self) -> None:
        self._nodes: list[GraphNode | None] = []
        self._arcs: list[Arc | None] = []
        self._free_nodes: list[int] = []
        self._free_arcs: list[int] = []
        self._head: int | None = None
        self._tail: int | None = None
        self._size = 0
        self._version = 0

    # =========================================================================
    # Core Accessors
    # =========================================================================

    @property
    def size(self) -> int:
        """Number of nodes in the graph."""
        return self._size

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    @property
    def version(self) -> int:
        """Structural modification counter (bumped by every add/remove)."""
        return self._version

    @property
    def first_node(self) -> GraphNode | None:
        return self.node(self._head)

    def node(self, handle: int | None) -> GraphNode | None:
        """Get the node stored under handle, or None."""
        if handle is None or not 0 <= handle < len(self._nodes):
            return None
        return self._nodes[handle]

    def arc(self, handle: int | None) -> Arc | None:
        """Get the arc stored under handle, or None."""
        if handle is None or not 0 <= handle < len(self._arcs):
            return None
        return self._arcs[handle]

    def source_of(self, arc: Arc) -> GraphNode | None:
        return self.node(arc.source)

    def target_of(self, arc: Arc) -> GraphNode | None:
        return self.node(arc.target)

    def owns(self, node: GraphNode | None) -> bool:
        """Whether node is currently attached to this graph."""
        return node is not None and self.node(node.handle) is node

    def arc_count(self, node: GraphNode | None = None) -> int:
        """Outgoing arcs of node, or of the whole graph when node is None."""
        if node is None:
            return len(self._arcs) - len(self._free_arcs)
        return len(node.arcs) if self.owns(node) else 0

    # =========================================================================
    # Nodes
    # =========================================================================

    def create_node(self, value: Any, id: str | None = None) -> GraphNode:
        """Create a detached node (id defaults to str(value))."""
        return GraphNode(value=value, id=str(value) if id is None else str(id))

    def add_node(self, node: GraphNode | None) -> GraphNode | None:
        """
        Append node to the end of the node order, O(1).

        Returns:
            The node, or None if it is still attached to another graph
        """
        if node is None:
            return None
        if self.owns(node):
            return node
        if node.handle is not None:
            logger.debug(f"add_node ignored: {node!r} belongs to another graph")
            return None

        if self._free_nodes:
            handle = self._free_nodes.pop()
            self._nodes[handle] = node
        else:
            handle = len(self._nodes)
            self._nodes.append(node)

        node.handle = handle
        node.prev = self._tail
        node.next = None
        node.arcs = []
        node.inbound = []

        if self._tail is None:
            self._head = handle
        else:
            self._nodes[self._tail].next = handle
        self._tail = handle

        self._size += 1
        self._version += 1
        return node

    def add(self, value: Any, id: str | None = None) -> GraphNode:
        """Create a node for value and append it."""
        return self.add_node(self.create_node(value, id))

    def remove_node(self, node: GraphNode | None) -> bool:
        """
        Detach node and every arc into or out of it.

        Returns:
            False if node is not in this graph
        """
        if not self.owns(node):
            return False

        for handle in list(node.arcs) + list(node.inbound):
            arc = self.arc(handle)
            if arc is not None:
                self._free_arc(arc)

        if node.prev is None:
            self._head = node.next
        else:
            self._nodes[node.prev].next = node.next
        if node.next is None:
            self._tail = node.prev
        else:
            self._nodes[node.next].prev = node.prev

        self._nodes[node.handle] = None
        self._free_nodes.append(node.handle)
        node.handle = node.prev = node.next = None

        self._size -= 1
        self._version += 1
        return True

    def find_node(self, id: str) -> GraphNode | None:
        """Find the first node with the given identifier (linear scan)."""
        for node in self._walk(self._head):
            if node.id == id:
                return node
        return None

    def contains(self, value: Any) -> bool:
        """Whether any node carries value as its payload."""
        return any(node.value == value for node in self._walk(self._head))

    def __contains__(self, value: Any) -> bool:
        return self.contains(value)

    def clear(self) -> None:
        """Remove all nodes and arcs."""
        for node in self._nodes:
            if node is not None:
                node.handle = node.prev = node.next = None
                node.arcs = []
                node.inbound = []
        self._nodes = []
        self._arcs = []
        self._free_nodes = []
        self._free_arcs = []
        self._head = self._tail = None
        self._size = 0
        self._version += 1

    def to_list(self) -> list[Any]:
        """Node payloads in node order."""
        return [node.value for node in self._walk(self._head)]

    # =========================================================================
    # Arcs
    # =========================================================================

    def add_single_arc(
        self,
        source: GraphNode | None,
        target: GraphNode | None,
        cost: float | None = DEFAULT_ARC_COST,
    ) -> Arc | None:
        """
        Append a source -> target arc to source's adjacency list.

        Returns:
            The new Arc, or None if either node is not in this graph
        """
        if not self.owns(source) or not self.owns(target):
            logger.debug(f"add_single_arc ignored: {source!r} -> {target!r} not in graph")
            return None

        arc = Arc(
            source=source.handle,
            target=target.handle,
            cost=DEFAULT_ARC_COST if cost is None else cost,
        )
        if self._free_arcs:
            arc.handle = self._free_arcs.pop()
            self._arcs[arc.handle] = arc
        else:
            arc.handle = len(self._arcs)
            self._arcs.append(arc)

        source.arcs.append(arc.handle)
        target.inbound.append(arc.handle)
        self._version += 1
        return arc

    def add_mutual_arc(
        self,
        source: GraphNode | None,
        target: GraphNode | None,
        cost: float | None = DEFAULT_ARC_COST,
    ) -> tuple[Arc, Arc] | None:
        """Install arcs in both directions with the same cost."""
        if not self.owns(source) or not self.owns(target):
            return None
        return (
            self.add_single_arc(source, target, cost),
            self.add_single_arc(target, source, cost),
        )

    def get_arc(self, source: GraphNode | None, target: GraphNode | None) -> Arc | None:
        """First arc source -> target, or None."""
        if not self.owns(source) or not self.owns(target):
            return None
        for handle in source.arcs:
            arc = self._arcs[handle]
            if arc.target == target.handle:
                return arc
        return None

    def remove_arc(self, source: GraphNode | None, target: GraphNode | None) -> bool:
        """Remove the first arc source -> target. Returns False if there is none."""
        arc = self.get_arc(source, target)
        if arc is None:
            return False
        self._free_arc(arc)
        return True

    def is_connected(self, source: GraphNode | None, target: GraphNode | None) -> bool:
        return self.get_arc(source, target) is not None

    def is_mutually_connected(self, a: GraphNode | None, b: GraphNode | None) -> bool:
        return self.get_arc(a, b) is not None and self.get_arc(b, a) is not None

    def arcs_of(self, node: GraphNode | None) -> list[Arc]:
        """Outgoing arcs of node in insertion order (empty if not in graph)."""
        if not self.owns(node):
            return []
        return [self._arcs[handle] for handle in node.arcs]

    def neighbors(self, node: GraphNode | None) -> list[tuple[GraphNode, float]]:
        """(destination node, cost) for each outgoing arc of node."""
        return [(self._nodes[arc.target], arc.cost) for arc in self.arcs_of(node)]

    def _free_arc(self, arc: Arc) -> None:
        source = self._nodes[arc.source]
        target = self._nodes[arc.target]
        source.arcs.remove(arc.handle)
        target.inbound.remove(arc.handle)

        self._arcs[arc.handle] = None
        self._free_arcs.append(arc.handle)
        arc.handle = None
        self._version += 1

    # =========================================================================
    # Iteration
    # =========================================================================

    def _walk(self, handle: int | None) -> Iterator[GraphNode]:
        while handle is not None:
            node = self._nodes[handle]
            yield node
            handle = node.next

    def walk_nodes(self, start: GraphNode | None = None) -> Iterator[GraphNode]:
        """Nodes in graph order, from start (default: first node) to the end."""
        if start is None:
            return self._walk(self._head)
        if not self.owns(start):
            return iter(())
        return self._walk(start.handle)

    def edges(self, start: GraphNode | None = None) -> Iterator[Arc]:
        """
        All arcs flattened across nodes.

        Yields every outgoing arc of start, then of each following node in
        graph order, until the last node's arcs are exhausted.
        """
        for node in self.walk_nodes(start):
            for handle in list(node.arcs):
                yield self._arcs[handle]

    def nodes(self) -> NodeIterator:
        """Fresh iterator over node payloads."""
        return NodeIterator(self)

    def __iter__(self) -> NodeIterator:
        return NodeIterator(self)

    def arcs(self, start: GraphNode | None = None) -> ArcIterator:
        """Fresh iterator over all arcs, starting from start's adjacency list."""
        return ArcIterator(self, start)

    def __repr__(self) -> str:
        return f"Graph(nodes={self._size}, arcs={self.arc_count()})"
