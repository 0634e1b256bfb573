"""
A* over a Graph of planar waypoints.

Nodes carry Waypoint payloads with x/y coordinates; arcs carry the travel
cost. connect_waypoints() links two waypoints with their straight-line
distance, which keeps the default heuristic admissible.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from gridsearch.graph.graph import Arc, Graph, GraphNode
from gridsearch.search.base import SearchEngine
from gridsearch.search.state import SearchResult

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Waypoint:
    """
    A point in the plane used as a graph node payload.

    Attributes:
        key: Identifier (becomes the node id)
        x: Horizontal coordinate
        y: Vertical coordinate
        latitude: Optional geographic annotation
        longitude: Optional geographic annotation
    """

    key: str
    x: float = 0.0
    y: float = 0.0
    latitude: float = 0.0
    longitude: float = 0.0

    def distance_to(self, other: Waypoint) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


def add_waypoint(graph: Graph, key: str, x: float, y: float) -> GraphNode:
    """Append a node carrying a new Waypoint."""
    return graph.add(Waypoint(key, x, y), id=key)


def connect_waypoints(
    graph: Graph, a: GraphNode, b: GraphNode, mutual: bool = True
) -> Arc | tuple[Arc, Arc] | None:
    """Link two waypoint nodes with an arc costed at their Euclidean distance."""
    cost = straight_line(a, b)
    if mutual:
        return graph.add_mutual_arc(a, b, cost)
    return graph.add_single_arc(a, b, cost)


def straight_line(node: GraphNode, target: GraphNode) -> float:
    """Distance between two waypoint nodes (0.0 if either payload is not a Waypoint)."""
    a: Any = node.value
    b: Any = target.value
    if isinstance(a, Waypoint) and isinstance(b, Waypoint):
        return a.distance_to(b)
    return 0.0


class WaypointSearch(SearchEngine):
    """
    Least-cost path between two nodes of an arbitrary Graph.

    Uses the arc costs as step costs and straight-line distance between
    waypoint payloads as the default heuristic; this is admissible as long
    as no arc is cheaper than the distance it spans.
    """

    @property
    def name(self) -> str:
        return "waypoint-astar"

    def find(self, graph: Graph, source: GraphNode, target: GraphNode) -> list[GraphNode]:
        """Optimal node sequence from source to target, or [] if none exists."""
        return self.search(graph, source, target).path

    def search(self, graph: Graph, source: GraphNode, target: GraphNode) -> SearchResult:
        if not graph.owns(source) or not graph.owns(target):
            return self._fail("source or target is not in the graph")

        logger.info(f"Searching {graph!r}: {source.id!r} -> {target.id!r}")
        heuristic = self._heuristic or straight_line
        return self._run(source, target, graph.neighbors, heuristic)
