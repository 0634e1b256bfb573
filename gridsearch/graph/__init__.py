"""
Graph module.

Provides a general weighted graph for non-grid topologies:
- Graph: Arena of nodes and directed, costed arcs
- GraphNode / Arc: Handle-addressed node and edge records
- NodeIterator / ArcIterator: Restartable iterators
- dumps_graph / loads_graph: msgpack snapshots
"""

from gridsearch.graph.graph import Arc, Graph, GraphNode
from gridsearch.graph.iterators import ArcIterator, NodeIterator
from gridsearch.graph.serialize import (
    dumps_graph,
    graph_from_dict,
    graph_to_dict,
    load_graph,
    loads_graph,
    save_graph,
)

__all__ = [
    "Arc",
    "ArcIterator",
    "Graph",
    "GraphNode",
    "NodeIterator",
    "dumps_graph",
    "graph_from_dict",
    "graph_to_dict",
    "load_graph",
    "loads_graph",
    "save_graph",
]
