"""
Search module.

Provides the A* engines and their supporting types:
- AStarSearch: Least-cost path across a Grid2D
- WaypointSearch: Least-cost path across a Graph of Waypoints
- SearchStatus / SearchResult / VisitRecord: Per-search state
- Heuristics: manhattan, octile, euclidean, zero
"""

from gridsearch.search.astar import AStarSearch
from gridsearch.search.base import SearchEngine
from gridsearch.search.heuristics import (
    HEURISTICS,
    default_heuristic,
    euclidean,
    get_heuristic,
    manhattan,
    octile,
    zero,
)
from gridsearch.search.state import SearchResult, SearchStatus, VisitRecord
from gridsearch.search.waypoint import (
    Waypoint,
    WaypointSearch,
    add_waypoint,
    connect_waypoints,
)

__all__ = [
    "AStarSearch",
    "HEURISTICS",
    "SearchEngine",
    "SearchResult",
    "SearchStatus",
    "VisitRecord",
    "Waypoint",
    "WaypointSearch",
    "add_waypoint",
    "connect_waypoints",
    "default_heuristic",
    "euclidean",
    "get_heuristic",
    "manhattan",
    "octile",
    "zero",
]
