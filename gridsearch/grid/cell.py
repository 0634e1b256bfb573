"""
Cell record for tile-grid pathfinding.

A Cell only carries static tile attributes. Per-search bookkeeping
(g, h, f, parent) lives in VisitRecord (see gridsearch.search.state) so a
grid can be searched repeatedly without resetting anything.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from gridsearch.config import DEFAULT_MULTIPLIER, MIN_MULTIPLIER


def coerce_index(value: Any) -> int:
    """Return value as a non-negative int, or 0 for negative/non-numeric input."""
    if isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number) or number < 0:
        return 0
    return int(number)


def coerce_multiplier(value: Any) -> float:
    """Return value as a cost multiplier clamped to MIN_MULTIPLIER."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_MULTIPLIER
    if math.isnan(number):
        return DEFAULT_MULTIPLIER
    return max(MIN_MULTIPLIER, number)


@dataclass(eq=False)
class Cell:
    """
    One tile of a Grid2D.

    Attributes:
        row: Row index in the grid
        col: Column index in the grid
        id: String label (the grid assigns "row col")
        value: Opaque payload for the caller
        multiplier: Scale applied to the step cost of entering this cell
        reachable: Whether the cell may be entered at all
        occupied: Occupancy marker (informational, does not block movement)
    """

    row: int = 0
    col: int = 0
    id: str = ""
    value: Any = 0
    multiplier: float = DEFAULT_MULTIPLIER
    reachable: bool = True
    occupied: bool = False

    def __post_init__(self) -> None:
        self.row = coerce_index(self.row)
        self.col = coerce_index(self.col)
        self.multiplier = coerce_multiplier(self.multiplier)

    @property
    def key(self) -> tuple[int, int]:
        """(row, col) coordinates, used to key per-search records."""
        return (self.row, self.col)

    @property
    def is_hazard(self) -> bool:
        return self.multiplier > DEFAULT_MULTIPLIER

    def __repr__(self) -> str:
        flags = "" if self.reachable else ", blocked"
        if self.is_hazard:
            flags += f", x{self.multiplier:g}"
        return f"Cell({self.row}, {self.col}{flags})"
