"""
Grid module.

Provides the tile grid consumed by the A* engine:
- Cell: Static attributes of one tile
- Grid2D: Cell table with reachability, hazards and neighbor queries
"""

from gridsearch.grid.cell import Cell
from gridsearch.grid.grid2d import Grid2D

__all__ = ["Cell", "Grid2D"]
