"""
Unit tests for msgpack graph snapshots.
"""

import msgpack
import pytest

from gridsearch.graph import (
    Graph,
    dumps_graph,
    graph_to_dict,
    load_graph,
    loads_graph,
    save_graph,
)


class TestGraphSnapshots:
    """Test dumping and loading graphs."""

    def test_snapshot_layout(self, six_node_graph):
        """graph_to_dict should list nodes in order and arcs by node index."""
        data = graph_to_dict(six_node_graph)
        assert data["version"] == 1
        assert [node_id for node_id, _ in data["nodes"]] == ["1", "2", "3", "4", "5", "6"]
        assert data["arcs"][0] == [0, 3, 1.0]
        assert data["arcs"][-1] == [2, 5, 6.0]

    def test_bytes_round_trip(self, six_node_graph):
        """A loaded graph should keep the node and arc order."""
        loaded = loads_graph(dumps_graph(six_node_graph))
        assert loaded.to_list() == six_node_graph.to_list()
        assert graph_to_dict(loaded) == graph_to_dict(six_node_graph)
        assert loaded.find_node("2").id == "2"

    def test_snapshot_after_removal(self, six_node_graph):
        """Freed slots should not leak into the snapshot indices."""
        six_node_graph.remove_node(six_node_graph.find_node("2"))
        data = graph_to_dict(six_node_graph)
        assert [node_id for node_id, _ in data["nodes"]] == ["1", "3", "4", "5", "6"]
        assert data["arcs"] == [[0, 2, 1.0], [0, 3, 2.0], [0, 4, 3.0], [1, 4, 6.0]]

    def test_file_round_trip(self, six_node_graph, tmp_path):
        """save_graph / load_graph should round-trip through a file."""
        path = tmp_path / "graph.msgpack"
        save_graph(six_node_graph, path)
        loaded = load_graph(path)
        assert loaded.size == 6
        assert loaded.arc_count() == 6

    def test_empty_graph(self):
        """An empty graph should survive a round trip."""
        loaded = loads_graph(dumps_graph(Graph()))
        assert loaded.is_empty()

    def test_garbage_bytes_rejected(self):
        """Undecodable bytes should raise ValueError."""
        with pytest.raises(ValueError):
            loads_graph(b"\xc1")

    def test_wrong_shape_rejected(self):
        """Decodable but malformed snapshots should raise ValueError."""
        with pytest.raises(ValueError):
            loads_graph(msgpack.packb([1, 2, 3]))
        with pytest.raises(ValueError):
            loads_graph(msgpack.packb({"nodes": [["a", "a"]], "arcs": [[0, 5, 1.0]]}))
        with pytest.raises(ValueError):
            loads_graph(msgpack.packb({"version": 99, "nodes": [], "arcs": []}))

    @pytest.mark.parametrize("cost", ["cheap", None, True, [1.0]])
    def test_non_numeric_cost_rejected(self, cost):
        """Arc costs that are not real numbers should raise ValueError."""
        payload = msgpack.packb({"nodes": [["a", "a"], ["b", "b"]], "arcs": [[0, 1, cost]]})
        with pytest.raises(ValueError):
            loads_graph(payload)

    def test_integer_cost_accepted(self):
        """Integer costs are valid numbers."""
        payload = msgpack.packb({"nodes": [["a", "a"], ["b", "b"]], "arcs": [[0, 1, 3]]})
        graph = loads_graph(payload)
        assert graph.get_arc(graph.find_node("a"), graph.find_node("b")).cost == 3
