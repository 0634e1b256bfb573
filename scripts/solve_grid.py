#!/usr/bin/env python3
"""
Grid Search CLI - find the least-cost path across an ASCII map.

Usage:
    python scripts/solve_grid.py maps/maze.txt
    python scripts/solve_grid.py maps/maze.txt --four-way --heuristic manhattan
    python scripts/solve_grid.py maps/maze.txt --max-iterations 5000 -v

Map symbols:
    #   blocked cell
    .   open cell
    S   start
    T   target
    2-9 hazard (cost multiplier)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gridsearch.config import (  # noqa: E402
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    LOG_LEVEL,
    MAX_ITERATIONS,
    TIME_BUDGET,
)
from gridsearch.grid import Grid2D  # noqa: E402
from gridsearch.search import HEURISTICS, AStarSearch, get_heuristic  # noqa: E402


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Find the least-cost path across an ASCII grid map",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "map",
        type=Path,
        help="Path to an ASCII map file",
    )
    parser.add_argument(
        "--four-way",
        action="store_true",
        help="Disallow diagonal moves (4-connected grid)",
    )
    parser.add_argument(
        "--heuristic",
        type=str,
        default=None,
        choices=sorted(HEURISTICS.keys()),
        help="Heuristic to use (default: octile, or manhattan with --four-way)",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=MAX_ITERATIONS,
        help="Give up after this many expansions (default: unbounded)",
    )
    parser.add_argument(
        "--time-budget",
        type=float,
        default=TIME_BUDGET,
        help="Give up after this many seconds (default: unbounded)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Set up logging
    log_level = logging.DEBUG if args.verbose else LOG_LEVEL.upper()
    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    if not args.map.exists():
        print(f"Error: map file '{args.map}' not found", file=sys.stderr)
        return 1

    grid = Grid2D.from_strings(args.map.read_text(encoding="utf-8"), diagonal=not args.four_way)
    if grid.start_cell() is None or grid.target_cell() is None:
        print("Error: map needs one 'S' and one 'T' cell", file=sys.stderr)
        return 1

    engine = AStarSearch(
        heuristic=get_heuristic(args.heuristic) if args.heuristic else None,
        max_iterations=args.max_iterations,
        time_budget=args.time_budget,
    )
    result = engine.search(grid)

    print("\n" + "=" * 60)
    print(f"Grid:   {grid.rows} x {grid.cols} ({'4' if args.four_way else '8'}-connected)")
    print(f"Status: {result.status.value}")
    print("=" * 60 + "\n")

    for line in grid.render(result.path):
        print(f"  {line}")

    if result.found:
        print(f"\nPath: {len(result.path)} cells, cost {result.cost:.3f}")
    print(f"Expanded {result.expanded} cells in {result.elapsed_ms:.1f}ms")

    return 0 if result.found else 1


if __name__ == "__main__":
    sys.exit(main())
