"""
2-D tile grid consumed by the A* search engine.

The grid owns a rows x cols table of Cells, answers neighbor queries with
step costs, and records the start and target cells of the next search.
Mutations addressed outside the table are ignored, never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence

import numpy as np

from gridsearch.config import (
    DEFAULT_DIAGONAL,
    DEFAULT_MULTIPLIER,
    DIAGONAL_COST,
    MAP_BLOCKED,
    MAP_OPEN,
    MAP_PATH,
    MAP_START,
    MAP_TARGET,
    ORTHOGONAL_COST,
)
from gridsearch.grid.cell import Cell, coerce_index, coerce_multiplier

logger = logging.getLogger(__name__)

# Neighbor offsets (d_row, d_col)
_ORTHOGONAL_STEPS = ((-1, 0), (0, -1), (0, 1), (1, 0))
_DIAGONAL_STEPS = ((-1, -1), (-1, 1), (1, -1), (1, 1))


class Grid2D:
    """
    Rectangular grid of Cells for tile-based pathfinding.

    Every cell is reachable with multiplier 1.0 on construction. Movement is
    8-connected by default; diagonal steps cost sqrt(2) and may not cut the
    corner of an unreachable cell.
    """

    def __init__(self, rows: int, cols: int, diagonal: bool = DEFAULT_DIAGONAL) -> None:
        """
        Build the cell table.

        Args:
            rows: Number of rows (malformed input becomes 0)
            cols: Number of columns (malformed input becomes 0)
            diagonal: Allow diagonal moves (8-connected) if True, else 4-connected
        """
        self._rows = coerce_index(rows)
        self._cols = coerce_index(cols)
        self._diagonal = bool(diagonal)

        self._cells: list[list[Cell]] = [
            [Cell(row=i, col=j, id=f"{i} {j}") for j in range(self._cols)]
            for i in range(self._rows)
        ]

        self._start: Cell | None = None
        self._target: Cell | None = None

    # =========================================================================
    # Construction helpers
    # =========================================================================

    @classmethod
    def from_strings(
        cls, lines: str | Sequence[str], diagonal: bool = DEFAULT_DIAGONAL
    ) -> Grid2D:
        """
        Build a grid from an ASCII map.

        '#' is blocked, '.' open, 'S' the start, 'T' the target and a digit
        2-9 a hazard with that multiplier. Short rows are padded with blocked
        cells; any other character is an open cell.
        """
        if isinstance(lines, str):
            lines = lines.splitlines()
        rows = [line.rstrip("\n") for line in lines if line.strip()]
        width = max((len(line) for line in rows), default=0)

        grid = cls(len(rows), width, diagonal=diagonal)
        for i, line in enumerate(rows):
            for j in range(width):
                symbol = line[j] if j < len(line) else MAP_BLOCKED
                if symbol == MAP_BLOCKED:
                    grid.is_reachable(i, j, False)
                elif symbol == MAP_START:
                    grid.set_start_node(i, j)
                elif symbol == MAP_TARGET:
                    grid.set_target_node(i, j)
                elif symbol.isdigit() and symbol not in "01":
                    grid.is_hazard(i, j, float(symbol))
        return grid

    @classmethod
    def from_array(cls, costs, diagonal: bool = DEFAULT_DIAGONAL) -> Grid2D:
        """
        Build a grid from a 2-D array of cost multipliers.

        Non-finite or non-positive entries mark blocked cells; entries below
        1.0 are clamped to 1.0.

        Raises:
            ValueError: If costs is not two-dimensional
        """
        arr = np.asarray(costs, dtype=np.float64)
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2-D cost array, got shape {arr.shape}")

        grid = cls(arr.shape[0], arr.shape[1], diagonal=diagonal)
        blocked = ~np.isfinite(arr) | (arr <= 0)
        for i, j in zip(*np.nonzero(blocked)):
            grid.is_reachable(int(i), int(j), False)
        for i, j in zip(*np.nonzero(~blocked & (arr > DEFAULT_MULTIPLIER))):
            grid.is_hazard(int(i), int(j), float(arr[i, j]))
        return grid

    # =========================================================================
    # Core Accessors
    # =========================================================================

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def diagonal(self) -> bool:
        return self._diagonal

    def cell(self, row: int, col: int) -> Cell | None:
        """Get the Cell at (row, col), or None if out of range."""
        if isinstance(row, bool) or isinstance(col, bool):
            return None
        if not isinstance(row, (int, np.integer)) or not isinstance(col, (int, np.integer)):
            return None
        if 0 <= row < self._rows and 0 <= col < self._cols:
            return self._cells[row][col]
        return None

    def cells(self) -> Iterator[Cell]:
        """Iterate every cell in row-major order."""
        for row in self._cells:
            yield from row

    def start_cell(self) -> Cell | None:
        return self._start

    def target_cell(self) -> Cell | None:
        return self._target

    # =========================================================================
    # Cell Mutators
    # =========================================================================

    def is_reachable(self, row: int, col: int, value: bool | None = None) -> bool:
        """
        Get or set whether a cell may be entered.

        Args:
            row: Row coordinate
            col: Column coordinate
            value: New reachability, or None to only query

        Returns:
            The cell's reachability after the call (False if out of range)
        """
        tile = self.cell(row, col)
        if tile is None:
            logger.debug(f"is_reachable ignored for out-of-range ({row}, {col})")
            return False
        if value is not None:
            tile.reachable = bool(value)
        return tile.reachable

    def is_occupied(self, row: int, col: int, value: bool | None = None) -> bool:
        """Get or set the occupancy marker of a cell (False if out of range)."""
        tile = self.cell(row, col)
        if tile is None:
            logger.debug(f"is_occupied ignored for out-of-range ({row}, {col})")
            return False
        if value is not None:
            tile.occupied = bool(value)
        return tile.occupied

    def is_hazard(self, row: int, col: int, multiplier: float) -> None:
        """Set the cost multiplier of a cell (clamped to >= 1.0)."""
        tile = self.cell(row, col)
        if tile is None:
            logger.debug(f"is_hazard ignored for out-of-range ({row}, {col})")
            return
        tile.multiplier = coerce_multiplier(multiplier)

    def multiplier(self, row: int, col: int) -> float | None:
        """Get the cost multiplier of a cell, or None if out of range."""
        tile = self.cell(row, col)
        return tile.multiplier if tile is not None else None

    def set_start_node(self, row: int, col: int) -> None:
        """Designate the start cell; unchanged if the indices are invalid."""
        tile = self.cell(row, col)
        if tile is None:
            logger.warning(f"Start ({row}, {col}) is outside the {self._rows}x{self._cols} grid")
            return
        self._start = tile

    def set_target_node(self, row: int, col: int) -> None:
        """Designate the target cell; unchanged if the indices are invalid."""
        tile = self.cell(row, col)
        if tile is None:
            logger.warning(f"Target ({row}, {col}) is outside the {self._rows}x{self._cols} grid")
            return
        self._target = tile

    # =========================================================================
    # Neighbors and Costs
    # =========================================================================

    def neighbors_of(self, cell: Cell) -> list[tuple[Cell, float]]:
        """
        List the cells that can be entered from cell, with their step costs.

        Step cost is 1.0 (orthogonal) or sqrt(2) (diagonal) scaled by the
        destination's multiplier. A diagonal step is only offered when both
        cells it squeezes between are reachable.
        """
        row, col = cell.row, cell.col
        out: list[tuple[Cell, float]] = []

        for d_row, d_col in _ORTHOGONAL_STEPS:
            tile = self.cell(row + d_row, col + d_col)
            if tile is not None and tile.reachable:
                out.append((tile, ORTHOGONAL_COST * tile.multiplier))

        if not self._diagonal:
            return out

        for d_row, d_col in _DIAGONAL_STEPS:
            tile = self.cell(row + d_row, col + d_col)
            if tile is None or not tile.reachable:
                continue
            # No corner cutting
            if not self.is_reachable(row + d_row, col) or not self.is_reachable(row, col + d_col):
                continue
            out.append((tile, DIAGONAL_COST * tile.multiplier))

        return out

    def step_cost(self, source: Cell, dest: Cell) -> float | None:
        """Cost of moving source -> dest, or None if dest is not a neighbor."""
        for tile, cost in self.neighbors_of(source):
            if tile is dest:
                return cost
        return None

    def path_cost(self, path: Iterable[Cell]) -> float | None:
        """Total step cost along path, or None if two consecutive cells are not neighbors."""
        total = 0.0
        previous = None
        for tile in path:
            if previous is not None:
                cost = self.step_cost(previous, tile)
                if cost is None:
                    return None
                total += cost
            previous = tile
        return total

    def min_multiplier(self) -> float:
        """Smallest multiplier among reachable cells (1.0 for an empty grid)."""
        return min(
            (tile.multiplier for tile in self.cells() if tile.reachable),
            default=DEFAULT_MULTIPLIER,
        )

    # =========================================================================
    # Array Views
    # =========================================================================

    def multipliers(self) -> np.ndarray:
        """Cost multipliers as a (rows, cols) float array, inf where blocked."""
        arr = np.full((self._rows, self._cols), np.inf, dtype=np.float64)
        for tile in self.cells():
            if tile.reachable:
                arr[tile.row, tile.col] = tile.multiplier
        return arr

    def reachability(self) -> np.ndarray:
        """Reachable flags as a (rows, cols) bool array."""
        arr = np.zeros((self._rows, self._cols), dtype=bool)
        for tile in self.cells():
            arr[tile.row, tile.col] = tile.reachable
        return arr

    def render(self, path: Iterable[Cell] = ()) -> list[str]:
        """ASCII rendering of the grid with path cells marked."""
        on_path = {tile.key for tile in path}
        lines = []
        for row in self._cells:
            chars = []
            for tile in row:
                if tile is self._start:
                    chars.append(MAP_START)
                elif tile is self._target:
                    chars.append(MAP_TARGET)
                elif not tile.reachable:
                    chars.append(MAP_BLOCKED)
                elif tile.key in on_path:
                    chars.append(MAP_PATH)
                elif tile.is_hazard:
                    chars.append(str(min(9, max(2, int(tile.multiplier)))))
                else:
                    chars.append(MAP_OPEN)
            lines.append("".join(chars))
        return lines

    def __repr__(self) -> str:
        mode = "8-connected" if self._diagonal else "4-connected"
        return f"Grid2D({self._rows}x{self._cols}, {mode})"
