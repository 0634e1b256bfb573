"""
Distance heuristics for tile-grid A*.

Each heuristic takes two objects with row/col attributes and returns an
estimate of the cost of moving between them. All of them are admissible
for the move set they are named after, as long as every step costs at
least its base cost (multipliers are never below 1.0).
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from gridsearch.config import SQRT2

if TYPE_CHECKING:
    from gridsearch.grid.grid2d import Grid2D

Heuristic = Callable[[Any, Any], float]


def manhattan(node: Any, target: Any) -> float:
    """Sum of row and column offsets (4-connected grids)."""
    return float(abs(node.row - target.row) + abs(node.col - target.col))


def octile(node: Any, target: Any) -> float:
    """Diagonal distance with sqrt(2) diagonal steps (8-connected grids)."""
    dx = abs(node.col - target.col)
    dy = abs(node.row - target.row)
    return (dx + dy) + (SQRT2 - 2.0) * min(dx, dy)


def euclidean(node: Any, target: Any) -> float:
    """Straight-line distance (admissible for both move sets)."""
    return math.hypot(node.col - target.col, node.row - target.row)


def zero(node: Any, target: Any) -> float:
    """No estimate; A* degrades to uniform-cost search."""
    return 0.0


HEURISTICS: dict[str, Heuristic] = {
    "manhattan": manhattan,
    "octile": octile,
    "euclidean": euclidean,
    "zero": zero,
}


def get_heuristic(name: str) -> Heuristic:
    """
    Get a heuristic by name.

    Raises:
        ValueError: If name is unknown
    """
    if name not in HEURISTICS:
        available = ", ".join(HEURISTICS.keys())
        raise ValueError(f"Unknown heuristic '{name}'. Available: {available}")
    return HEURISTICS[name]


def scaled(heuristic: Heuristic, factor: float) -> Heuristic:
    """Multiply a heuristic by factor (e.g. the cheapest multiplier on the grid)."""
    if factor == 1.0:
        return heuristic

    def estimate(node: Any, target: Any) -> float:
        return factor * heuristic(node, target)

    return estimate


def default_heuristic(grid: Grid2D) -> Heuristic:
    """Octile for 8-connected grids, Manhattan for 4-connected ones, scaled by the cheapest cell."""
    base = octile if grid.diagonal else manhattan
    return scaled(base, grid.min_multiplier())
