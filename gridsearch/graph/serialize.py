"""
msgpack snapshots of a Graph.

Snapshot layout:

    {
        "version": 1,
        "nodes": [[id, value], ...],        # graph order
        "arcs": [[source, target, cost], ...]  # indices into "nodes"
    }

Arcs are written in ArcIterator order, so a loaded graph has the same node
order and the same per-node arc order as the dumped one. Node payloads must
be msgpack-serializable.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import msgpack

from gridsearch.config import SNAPSHOT_VERSION
from gridsearch.graph.graph import Graph

logger = logging.getLogger(__name__)


def graph_to_dict(graph: Graph) -> dict:
    """Plain-data form of graph (node-order indices instead of handles)."""
    index_of: dict[int, int] = {}
    nodes = []
    for node in graph.walk_nodes():
        index_of[node.handle] = len(nodes)
        nodes.append([node.id, node.value])

    arcs = [
        [index_of[arc.source], index_of[arc.target], arc.cost]
        for arc in graph.arcs()
    ]
    return {"version": SNAPSHOT_VERSION, "nodes": nodes, "arcs": arcs}


def graph_from_dict(data: dict) -> Graph:
    """
    Rebuild a Graph from graph_to_dict output.

    Raises:
        ValueError: If the data is not a valid snapshot
    """
    if not isinstance(data, dict) or "nodes" not in data or "arcs" not in data:
        raise ValueError("Graph snapshot must be a mapping with 'nodes' and 'arcs'")
    version = data.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise ValueError(f"Unsupported graph snapshot version {version}")

    graph = Graph()
    created = []
    for entry in data["nodes"]:
        try:
            node_id, value = entry
        except (TypeError, ValueError) as e:
            raise ValueError(f"Malformed node entry: {entry!r}") from e
        created.append(graph.add(value, id=node_id))

    for entry in data["arcs"]:
        try:
            source, target, cost = entry
        except (TypeError, ValueError) as e:
            raise ValueError(f"Malformed arc entry: {entry!r}") from e
        if not all(isinstance(i, int) and 0 <= i < len(created) for i in (source, target)):
            raise ValueError(f"Arc entry refers to unknown nodes: {entry!r}")
        if isinstance(cost, bool) or not isinstance(cost, (int, float)) or math.isnan(cost):
            raise ValueError(f"Arc entry has a non-numeric cost: {entry!r}")
        graph.add_single_arc(created[source], created[target], cost)

    return graph


def dumps_graph(graph: Graph) -> bytes:
    """Serialize graph to msgpack bytes."""
    return msgpack.packb(graph_to_dict(graph), use_bin_type=True)


def loads_graph(payload: bytes) -> Graph:
    """
    Deserialize a graph from msgpack bytes.

    Raises:
        ValueError: If payload is not a valid msgpack graph snapshot
    """
    try:
        data = msgpack.unpackb(payload, raw=False, strict_map_key=False)
    except (msgpack.UnpackException, ValueError, TypeError) as e:
        raise ValueError(f"Could not decode graph snapshot: {e}") from e
    return graph_from_dict(data)


def save_graph(graph: Graph, path: str | Path) -> None:
    """Write a msgpack snapshot of graph to path."""
    path = Path(path)
    logger.info(f"Saving graph ({graph.size} nodes, {graph.arc_count()} arcs) to {path}...")
    with open(path, "wb") as f:
        f.write(dumps_graph(graph))


def load_graph(path: str | Path) -> Graph:
    """Read a msgpack graph snapshot from path."""
    path = Path(path)
    logger.info(f"Loading graph from {path}...")
    with open(path, "rb") as f:
        graph = loads_graph(f.read())
    logger.info(f"Loaded {graph.size:,} nodes with {graph.arc_count():,} arcs")
    return graph
