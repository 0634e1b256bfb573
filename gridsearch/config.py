"""
Configuration constants for the gridsearch package.

All tunable defaults are defined here. Search budgets and the log level
can be overridden from the environment (or a .env file at the project
root) without touching code.
"""

import math
import os
from pathlib import Path

from dotenv import load_dotenv

# Project root is parent of gridsearch/
PROJECT_ROOT = Path(__file__).parent.parent

load_dotenv(PROJECT_ROOT / ".env")


def _env_number(name: str, cast=float):
    """Read an optional numeric environment variable, None if unset or invalid."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = cast(raw)
    except ValueError:
        return None
    return value if value > 0 else None


# =============================================================================
# Grid Configuration
# =============================================================================

# Step cost between orthogonal neighbors
ORTHOGONAL_COST = 1.0

# Step cost between diagonal neighbors
SQRT2 = math.sqrt(2.0)
DIAGONAL_COST = SQRT2

# Cost multiplier of an ordinary cell; multipliers are never below this
DEFAULT_MULTIPLIER = 1.0
MIN_MULTIPLIER = 1.0

# 8-connected movement unless a grid is built with diagonal=False
DEFAULT_DIAGONAL = True

# ASCII map symbols (Grid2D.from_strings)
MAP_BLOCKED = "#"
MAP_OPEN = "."
MAP_START = "S"
MAP_TARGET = "T"
MAP_PATH = "*"

# =============================================================================
# Graph Configuration
# =============================================================================

# Arc cost used when none is supplied
DEFAULT_ARC_COST = 1.0

# Version tag written into msgpack graph snapshots
SNAPSHOT_VERSION = 1

# =============================================================================
# Priority Queue Configuration
# =============================================================================

# Sort criteria used until a caller supplies its own
DEFAULT_SORT_CRITERIA = ["priority"]

# Open-set ordering for A*: lowest f first, ties broken by lowest h
OPEN_SET_CRITERIA = ["f", "h"]

# =============================================================================
# Search Configuration
# =============================================================================

# Maximum node expansions per search (None = unbounded)
MAX_ITERATIONS = _env_number("GRIDSEARCH_MAX_ITERATIONS", int)

# Wall-clock budget per search in seconds (None = unbounded)
TIME_BUDGET = _env_number("GRIDSEARCH_TIME_BUDGET", float)

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("GRIDSEARCH_LOG_LEVEL", "INFO")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
