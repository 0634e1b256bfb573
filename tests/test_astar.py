"""
Unit tests for the grid A* engine.
"""

import heapq
import itertools
import random
from types import SimpleNamespace

import pytest

from gridsearch.grid import Grid2D
from gridsearch.search import (
    AStarSearch,
    SearchStatus,
    VisitRecord,
    euclidean,
    get_heuristic,
    manhattan,
    octile,
    zero,
)
from gridsearch.search.state import reconstruct_path


def reference_cost(grid: Grid2D) -> float | None:
    """Least path cost from start to target by plain Dijkstra."""
    start, target = grid.start_cell(), grid.target_cell()
    best = {start.key: 0.0}
    counter = itertools.count()
    frontier = [(0.0, next(counter), start)]
    while frontier:
        dist, _, cell = heapq.heappop(frontier)
        if cell is target:
            return dist
        if dist > best[cell.key]:
            continue
        for neighbor, cost in grid.neighbors_of(cell):
            alt = dist + cost
            if alt < best.get(neighbor.key, float("inf")):
                best[neighbor.key] = alt
                heapq.heappush(frontier, (alt, next(counter), neighbor))
    return None


def random_grid(seed: int, size: int = 12, diagonal: bool = True) -> Grid2D:
    """Random grid with walls and hazards; corners kept open as endpoints."""
    rng = random.Random(seed)
    grid = Grid2D(size, size, diagonal=diagonal)
    for cell in grid.cells():
        roll = rng.random()
        if roll < 0.25:
            cell.reachable = False
        elif roll < 0.45:
            cell.multiplier = rng.choice([2.0, 3.0, 4.0])
    for row, col in [(0, 0), (size - 1, size - 1)]:
        grid.is_reachable(row, col, True)
    grid.set_start_node(0, 0)
    grid.set_target_node(size - 1, size - 1)
    return grid


class TestPathBasics:
    """Test simple searches."""

    def test_straight_corridor(self):
        """An open corridor should be walked end to end."""
        grid = Grid2D.from_strings(["S...T"])
        path = AStarSearch().find_path(grid)
        assert [cell.key for cell in path] == [(0, j) for j in range(5)]

    def test_path_includes_both_endpoints(self, maze):
        """The path should start at the start cell and end at the target."""
        path = AStarSearch().find_path(maze)
        assert path[0] is maze.start_cell()
        assert path[-1] is maze.target_cell()

    def test_start_equals_target(self):
        """Searching from a cell to itself should return just that cell."""
        grid = Grid2D(3, 3)
        grid.set_start_node(1, 1)
        grid.set_target_node(1, 1)
        result = AStarSearch().search(grid)
        assert result.path == [grid.cell(1, 1)]
        assert result.cost == 0.0

    def test_missing_endpoints_fail(self):
        """A grid without start or target should fail without raising."""
        engine = AStarSearch()
        assert engine.find_path(Grid2D(3, 3)) == []
        assert engine.status == SearchStatus.FAILED

    def test_status_lifecycle(self, maze):
        """The engine should go from IDLE to SUCCEEDED."""
        engine = AStarSearch()
        assert engine.status == SearchStatus.IDLE
        engine.find_path(maze)
        assert engine.status == SearchStatus.SUCCEEDED
        assert engine.last_result.found


    def test_failing_heuristic_leaves_engine_reusable(self, maze):
        """An exception from the heuristic should propagate and reset the engine."""
        start = maze.start_cell()

        def broken(node, target):
            if node is not start:
                raise ZeroDivisionError("bad estimate")
            return 0.0

        engine = AStarSearch(heuristic=broken)
        with pytest.raises(ZeroDivisionError):
            engine.search(maze)
        assert engine.status == SearchStatus.IDLE
        assert engine._open.is_empty()

        engine.set_heuristic(octile)
        assert engine.search(maze).found


class TestPathValidity:
    """Test that returned paths are legal and optimal."""

    @pytest.mark.parametrize("seed", range(8))
    @pytest.mark.parametrize("diagonal", [True, False])
    def test_random_grids_match_dijkstra(self, seed, diagonal):
        """A* should find a valid path with the least possible cost."""
        grid = random_grid(seed, diagonal=diagonal)
        expected = reference_cost(grid)
        result = AStarSearch().search(grid)

        if expected is None:
            assert result.status == SearchStatus.FAILED
            assert result.path == []
            return

        assert result.status == SearchStatus.SUCCEEDED
        assert result.cost == pytest.approx(expected)
        assert grid.path_cost(result.path) == pytest.approx(expected)
        assert all(cell.reachable for cell in result.path)
        for a, b in zip(result.path, result.path[1:]):
            assert grid.step_cost(a, b) is not None

    @pytest.mark.parametrize("name", ["euclidean", "zero", "octile"])
    def test_other_admissible_heuristics(self, name):
        """Any admissible heuristic should give the same optimal cost."""
        grid = random_grid(3)
        expected = reference_cost(grid)
        result = AStarSearch(heuristic=get_heuristic(name)).search(grid)
        if expected is None:
            assert not result.found
        else:
            assert result.cost == pytest.approx(expected)

    def test_maze_cost(self, maze):
        """The maze fixture should be solved at the Dijkstra cost."""
        result = AStarSearch().search(maze)
        assert result.cost == pytest.approx(reference_cost(maze))

    def test_deterministic(self, maze):
        """Repeated searches of the same grid should return the same path."""
        engine = AStarSearch()
        first = [cell.key for cell in engine.find_path(maze)]
        second = [cell.key for cell in engine.find_path(maze)]
        third = [cell.key for cell in AStarSearch().find_path(maze)]
        assert first == second == third

    def test_records_keep_f_consistent(self, maze):
        """Every visit record should satisfy f == g + h."""
        result = AStarSearch().search(maze)
        assert result.records
        for record in result.records.values():
            assert record.f == pytest.approx(record.g + record.h)
        assert result.record(maze.target_cell()).g == pytest.approx(result.cost)

    def test_grid_not_mutated(self, maze):
        """Searching should not change any cell attribute."""
        before = maze.multipliers().copy()
        AStarSearch().find_path(maze)
        assert (maze.multipliers() == before).all()


class TestNoPath:
    """Test unreachable targets."""

    def test_enclosed_target(self):
        """A target walled in on all sides should yield an empty path."""
        grid = Grid2D.from_strings(
            [
                "S....",
                ".###.",
                ".#T#.",
                ".###.",
                ".....",
            ]
        )
        engine = AStarSearch()
        assert engine.find_path(grid) == []
        assert engine.status == SearchStatus.FAILED

    def test_unreachable_target_cell(self):
        """A blocked target should never be entered."""
        grid = Grid2D.from_strings(["S..T"])
        grid.is_reachable(0, 3, False)
        assert AStarSearch().find_path(grid) == []

    def test_diagonal_gap_is_not_a_path(self):
        """Two walls touching at a corner should not let the path squeeze through."""
        grid = Grid2D.from_strings(["S#", "#T"])
        assert AStarSearch().find_path(grid) == []

    def test_blocked_start(self):
        """A blocked start cell should never appear in a result."""
        grid = Grid2D.from_strings(["S..T"])
        grid.is_reachable(0, 0, False)
        engine = AStarSearch()
        assert engine.find_path(grid) == []
        assert engine.status == SearchStatus.FAILED

    def test_blocked_start_equals_target(self):
        """Searching from a blocked cell to itself should fail."""
        grid = Grid2D(2, 2)
        grid.set_start_node(1, 1)
        grid.set_target_node(1, 1)
        grid.is_reachable(1, 1, False)
        result = AStarSearch().search(grid)
        assert result.status == SearchStatus.FAILED
        assert result.path == []


class TestMultipliers:
    """Test the effect of hazard multipliers."""

    def test_hazard_forces_detour(self):
        """A costly cell should be routed around when a cheaper detour exists."""
        grid = Grid2D(3, 5, diagonal=False)
        grid.set_start_node(1, 0)
        grid.set_target_node(1, 4)

        before = AStarSearch().search(grid)
        assert before.cost == pytest.approx(4.0)
        assert grid.cell(1, 2) in before.path

        grid.is_hazard(1, 2, 5.0)
        after = AStarSearch().search(grid)
        assert after.cost == pytest.approx(6.0)
        assert after.cost > before.cost
        assert grid.cell(1, 2) not in after.path

    def test_hazard_without_detour(self):
        """With no way around, the hazard cost should be paid."""
        grid = Grid2D.from_strings(["S.5.T"])
        assert AStarSearch().search(grid).cost == pytest.approx(8.0)


class TestBudgets:
    """Test iteration and time budgets."""

    def test_iteration_budget(self):
        """Running out of expansions should end in TIMEOUT with no path."""
        grid = Grid2D(30, 30)
        grid.set_start_node(0, 0)
        grid.set_target_node(29, 29)
        engine = AStarSearch(max_iterations=5)
        result = engine.search(grid)
        assert result.status == SearchStatus.TIMEOUT
        assert result.path == []
        assert result.expanded == 5

    def test_time_budget(self, monkeypatch):
        """Exceeding the wall-clock budget should end in TIMEOUT."""
        clock = itertools.count(0, 10)
        monkeypatch.setattr(
            "gridsearch.search.base.time", SimpleNamespace(time=lambda: next(clock))
        )
        grid = Grid2D(10, 10)
        grid.set_start_node(0, 0)
        grid.set_target_node(9, 9)
        result = AStarSearch(time_budget=5.0).search(grid)
        assert result.status == SearchStatus.TIMEOUT

    def test_budget_exactly_sufficient(self):
        """A budget equal to the expansions needed should still succeed."""
        grid = Grid2D.from_strings(["S...T"], diagonal=False)
        needed = AStarSearch(max_iterations=None).search(grid).expanded
        assert needed == 4

        result = AStarSearch(max_iterations=needed).search(grid)
        assert result.status == SearchStatus.SUCCEEDED
        assert result.expanded == needed
        assert AStarSearch(max_iterations=needed - 1).search(grid).status == SearchStatus.TIMEOUT

    def test_unbounded_by_default(self, maze):
        """No budget should be needed for small grids."""
        assert AStarSearch(max_iterations=None, time_budget=None).search(maze).found


class TestHeuristics:
    """Test the heuristic functions."""

    def test_values(self):
        """Known distances for a 3 x 4 offset."""
        a = SimpleNamespace(row=0, col=0)
        b = SimpleNamespace(row=3, col=4)
        assert manhattan(a, b) == 7.0
        assert euclidean(a, b) == 5.0
        assert octile(a, b) == pytest.approx(1.0 + 3 * 2**0.5)
        assert zero(a, b) == 0.0

    def test_unknown_heuristic(self):
        """Unknown names should raise ValueError."""
        with pytest.raises(ValueError):
            get_heuristic("teleport")

    def test_set_heuristic_ignores_none(self):
        """set_heuristic(None) should keep the current heuristic."""
        engine = AStarSearch(heuristic=manhattan)
        engine.set_heuristic(None)
        assert engine.heuristic is manhattan

    def test_octile_never_overestimates(self):
        """Octile distance should be a lower bound on the true cost."""
        grid = random_grid(5)
        result = AStarSearch(heuristic=zero).search(grid)
        target = grid.target_cell()
        for cell, record in result.records.items():
            if record.closed:
                remaining = Grid2D.from_array(grid.multipliers())
                remaining.set_start_node(*cell.key)
                remaining.set_target_node(*target.key)
                true_cost = reference_cost(remaining)
                if true_cost is not None:
                    assert octile(cell, target) <= true_cost + 1e-9


class TestParentChain:
    """Test reconstruction safeguards."""

    def test_cycle_detected(self):
        """A cyclic parent chain should raise instead of looping forever."""
        a = VisitRecord("a")
        b = VisitRecord("b", parent=a)
        a.parent = b
        with pytest.raises(RuntimeError):
            reconstruct_path(b, limit=5)

    def test_chain_order(self):
        """Reconstruction should run start to end."""
        a = VisitRecord("a")
        b = VisitRecord("b", parent=a)
        c = VisitRecord("c", parent=b)
        assert reconstruct_path(c, limit=3) == ["a", "b", "c"]
