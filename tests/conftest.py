"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

from pathlib import Path

import pytest

from gridsearch.graph import Graph
from gridsearch.grid import Grid2D


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def maze_lines() -> list[str]:
    """Return a small ASCII maze with one hazard."""
    return [
        "S..#....",
        ".#.#.##.",
        ".#...#..",
        ".####.#.",
        "...3...T",
    ]


@pytest.fixture
def maze(maze_lines) -> Grid2D:
    """Return the maze as an 8-connected grid."""
    return Grid2D.from_strings(maze_lines)


@pytest.fixture
def jobs() -> list[dict]:
    """Return equal-priority records that differ only by timestamp."""
    return [
        {"priority": 1, "timestamp": 1050, "value": 75},
        {"priority": 1, "timestamp": 1060, "value": 100},
        {"priority": 1, "timestamp": 1010, "value": 50},
    ]


@pytest.fixture
def six_node_graph() -> Graph:
    """Return the 6-node graph with arcs 1->4, 1->5, 1->6, 2->5, 2->6, 3->6."""
    graph = Graph()
    nodes = {str(i): graph.add(str(i)) for i in range(1, 7)}
    for source, target, cost in [
        ("1", "4", 1.0),
        ("1", "5", 2.0),
        ("1", "6", 3.0),
        ("2", "5", 4.0),
        ("2", "6", 5.0),
        ("3", "6", 6.0),
    ]:
        graph.add_single_arc(nodes[source], nodes[target], cost)
    return graph
