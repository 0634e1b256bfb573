"""
Heap module.

Provides the ordering structures used by the search engines:
- BinaryHeap: 1-indexed array heap with position tracking
- PriorityQueue: BinaryHeap ordered by a list of named sort fields
"""

from gridsearch.heap.binary_heap import BinaryHeap, natural_compare
from gridsearch.heap.priority_queue import PriorityQueue

__all__ = ["BinaryHeap", "PriorityQueue", "natural_compare"]
