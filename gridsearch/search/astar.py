"""
A* pathfinding across a Grid2D.

Usage:
    grid = Grid2D.from_strings([
        "S..#....",
        ".#.#.##.",
        ".#...#.T",
    ])
    path = AStarSearch().find_path(grid)   # [Cell, ...] or [] if unreachable
"""

from __future__ import annotations

import logging

from gridsearch.grid.cell import Cell
from gridsearch.grid.grid2d import Grid2D
from gridsearch.search.base import SearchEngine
from gridsearch.search.heuristics import default_heuristic
from gridsearch.search.state import SearchResult

logger = logging.getLogger(__name__)


class AStarSearch(SearchEngine):
    """
    Least-cost path between a grid's start and target cells.

    Step costs come from Grid2D.neighbors_of (base step scaled by the
    destination cell's multiplier). Without an explicit heuristic the engine
    uses octile distance on 8-connected grids and Manhattan distance on
    4-connected ones, which never overestimate the remaining cost.
    """

    @property
    def name(self) -> str:
        return "astar"

    def find_path(self, grid: Grid2D) -> list[Cell]:
        """
        Find the optimal path from grid.start_cell() to grid.target_cell().

        Returns:
            Cells from start to target inclusive, or an empty list when the
            target cannot be reached (or the search ran out of budget)
        """
        return self.search(grid).path

    def search(self, grid: Grid2D) -> SearchResult:
        """Run the search and return the full SearchResult."""
        start = grid.start_cell()
        target = grid.target_cell()
        if start is None or target is None:
            return self._fail(f"{grid!r} has no start or target cell")
        if not start.reachable or not target.reachable:
            return self._fail(f"{start!r} -> {target!r}: endpoint is blocked")

        logger.info(f"Searching {grid!r}: {start!r} -> {target!r}")
        heuristic = self._heuristic or default_heuristic(grid)
        return self._run(start, target, grid.neighbors_of, heuristic)
