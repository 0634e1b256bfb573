"""
Grid Search.

Tile-grid A* pathfinding with its supporting data structures: a
handle-based weighted graph and a multi-key binary-heap priority queue.
"""

__version__ = "0.1.0"
