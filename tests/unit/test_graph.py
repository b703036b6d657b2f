"""
Tests for the graph module.
"""

import pytest

from procedural_studio.core.graph import (
    Edge,
    GraphSnapshot,
    Node,
    NodeGraph,
    Point2D,
    new_node_id,
)
from procedural_studio.core.node_types import (
    CombineParams,
    GradientParams,
    NodeKind,
    PerlinNoiseParams,
)


class TestPoint2D:
    """Tests for Point2D dataclass."""

    def test_default_values(self):
        p = Point2D()
        assert p.x == 0.0
        assert p.y == 0.0

    def test_addition(self):
        result = Point2D(10, 20) + Point2D(5, 10)
        assert result == Point2D(15, 30)

    def test_subtraction(self):
        result = Point2D(10, 20) - Point2D(5, 10)
        assert result == Point2D(5, 10)


class TestNode:
    """Tests for Node records."""

    def test_create_node(self):
        node = Node.create(NodeKind.PERLIN_NOISE)
        assert node.kind is NodeKind.PERLIN_NOISE
        assert isinstance(node.id, str)
        assert node.params == PerlinNoiseParams()
        assert node.title == "Perlin Noise"

    def test_create_from_string_kind_and_dict(self):
        node = Node.create("gradient", {"direction": "vertical"}, node_id="g1")
        assert node.id == "g1"
        assert node.get_parameter("direction").value == "vertical"

    def test_params_must_match_kind(self):
        with pytest.raises(TypeError):
            Node(id="x", kind=NodeKind.GRADIENT, params=CombineParams())

    def test_with_parameters_returns_new_record(self):
        node = Node.create(NodeKind.PERLIN_NOISE, {"seed": 1})
        updated = node.with_parameters(seed=2)
        assert updated.get_parameter("seed") == 2
        assert node.get_parameter("seed") == 1
        assert updated.id == node.id
        assert updated.params.scale == node.params.scale

    def test_with_parameters_rejects_unknown(self):
        node = Node.create(NodeKind.DISPLAY)
        with pytest.raises(ValueError):
            node.with_parameters(zoom=2)

    def test_get_parameter_default(self):
        node = Node.create(NodeKind.DISPLAY)
        assert node.get_parameter("missing", "default") == "default"

    def test_node_is_immutable(self):
        node = Node.create(NodeKind.COMBINE)
        with pytest.raises(AttributeError):
            node.params = CombineParams(opacity=0.5)


class TestNodeGraph:
    """Tests for NodeGraph class."""

    def _chain(self):
        graph = NodeGraph()
        node1 = graph.add_node(Node.create(NodeKind.GRADIENT))
        node2 = graph.add_node(Node.create(NodeKind.COMBINE))
        node3 = graph.add_node(Node.create(NodeKind.DISPLAY))
        graph.connect(node1.id, node2.id, "a")
        graph.connect(node2.id, node3.id, "in")
        return graph, node1, node2, node3

    def test_create_empty_graph(self):
        graph = NodeGraph("Test Graph")
        assert graph.name == "Test Graph"
        assert len(graph) == 0
        assert graph.revision == 0

    def test_add_node(self):
        graph = NodeGraph()
        node = graph.add_node(Node.create(NodeKind.GRADIENT))
        assert len(graph) == 1
        assert node.id in graph
        assert graph.get_node(node.id) == node
        assert graph.revision == 1

    def test_remove_node(self):
        graph = NodeGraph()
        node = graph.add_node(Node.create(NodeKind.GRADIENT))
        removed = graph.remove_node(node.id)
        assert removed == node
        assert len(graph) == 0

    def test_remove_missing_node(self):
        graph = NodeGraph()
        assert graph.remove_node(new_node_id()) is None
        assert graph.revision == 0

    def test_remove_node_removes_edges(self):
        graph, node1, node2, node3 = self._chain()
        graph.remove_node(node2.id)
        assert graph.edges == []

    def test_update_parameters(self):
        graph = NodeGraph()
        node = graph.add_node(Node.create(NodeKind.GRADIENT))
        before = graph.revision

        updated = graph.update_parameters(node.id, color_a="#000000")

        assert graph.get_node(node.id) is updated
        assert updated.params == GradientParams(color_a="#000000")
        assert graph.revision == before + 1

    def test_update_parameters_without_change_keeps_revision(self):
        graph = NodeGraph()
        node = graph.add_node(Node.create(NodeKind.PERLIN_NOISE, {"seed": 4}))
        before = graph.revision
        graph.update_parameters(node.id, seed=4)
        assert graph.revision == before

    def test_update_parameters_errors(self):
        graph = NodeGraph()
        node = graph.add_node(Node.create(NodeKind.COMBINE))
        with pytest.raises(KeyError):
            graph.update_parameters("missing", opacity=0.5)
        with pytest.raises(ValueError):
            graph.update_parameters(node.id, mode="dodge")

    def test_move_node_keeps_revision(self):
        graph = NodeGraph()
        node = graph.add_node(Node.create(NodeKind.DISPLAY))
        before = graph.revision
        moved = graph.move_node(node.id, Point2D(40, 50))
        assert moved.position == Point2D(40, 50)
        assert graph.revision == before

    def test_add_edge(self):
        graph = NodeGraph()
        node1 = graph.add_node(Node.create(NodeKind.GRADIENT))
        node2 = graph.add_node(Node.create(NodeKind.DISPLAY))

        result = graph.add_edge(Edge.create(node1.id, node2.id, "in"))

        assert result is True
        assert len(graph.edges) == 1

    def test_add_edge_invalid_source(self):
        graph = NodeGraph()
        node = graph.add_node(Node.create(NodeKind.DISPLAY))
        assert graph.add_edge(Edge.create(new_node_id(), node.id, "in")) is False

    def test_add_edge_unknown_port(self):
        graph = NodeGraph()
        node1 = graph.add_node(Node.create(NodeKind.GRADIENT))
        node2 = graph.add_node(Node.create(NodeKind.COMBINE))
        assert graph.add_edge(Edge.create(node1.id, node2.id, "c")) is False
        assert graph.connect(node2.id, node1.id, "in") is None

    def test_self_connection_prevented(self):
        graph = NodeGraph()
        node = graph.add_node(Node.create(NodeKind.COMBINE))
        assert graph.add_edge(Edge.create(node.id, node.id, "a")) is False

    def test_cycles_are_allowed(self):
        graph = NodeGraph()
        node1 = graph.add_node(Node.create(NodeKind.COMBINE))
        node2 = graph.add_node(Node.create(NodeKind.COMBINE))
        assert graph.connect(node1.id, node2.id, "a") is not None
        assert graph.connect(node2.id, node1.id, "a") is not None

    def test_edge_replaces_existing_port_edge(self):
        graph = NodeGraph()
        node1 = graph.add_node(Node.create(NodeKind.GRADIENT))
        node2 = graph.add_node(Node.create(NodeKind.PERLIN_NOISE))
        display = graph.add_node(Node.create(NodeKind.DISPLAY))

        graph.connect(node1.id, display.id, "in")
        graph.connect(node2.id, display.id, "in")

        assert len(graph.edges) == 1
        assert graph.get_input_edge(display.id, "in").source == node2.id

    def test_remove_edge(self):
        graph, node1, node2, node3 = self._chain()
        edge = graph.get_input_edge(node3.id, "in")
        before = graph.revision

        assert graph.remove_edge(edge.id) == edge
        assert graph.get_input_edge(node3.id, "in") is None
        assert graph.revision == before + 1
        assert graph.remove_edge(edge.id) is None

    def test_get_output_edges(self):
        graph, node1, node2, node3 = self._chain()
        assert [e.target for e in graph.get_output_edges(node1.id)] == [node2.id]

    def test_get_upstream_nodes(self):
        graph, node1, node2, node3 = self._chain()
        upstream = graph.get_upstream_nodes(node3.id)
        assert upstream == {node1.id, node2.id}

    def test_get_downstream_nodes(self):
        graph, node1, node2, node3 = self._chain()
        downstream = graph.get_downstream_nodes(node1.id)
        assert downstream == {node2.id, node3.id}

    def test_snapshot(self):
        graph, node1, node2, node3 = self._chain()
        snapshot = graph.snapshot()

        assert isinstance(snapshot, GraphSnapshot)
        assert snapshot.nodes == (node1, node2, node3)
        assert len(snapshot.edges) == 2
        assert snapshot.revision == graph.revision

        graph.update_parameters(node1.id, size=64)
        assert snapshot.nodes[0].params.size == 256

    def test_from_items_keeps_edges_verbatim(self):
        node1 = Node.create(NodeKind.GRADIENT)
        node2 = Node.create(NodeKind.DISPLAY)
        edges = [
            Edge("e1", node1.id, node2.id, "in"),
            Edge("e2", node1.id, node2.id, "in"),
        ]
        graph = NodeGraph.from_items([node1, node2], edges)
        assert [e.id for e in graph.edges] == ["e1", "e2"]

    def test_clear(self):
        graph, *_ = self._chain()
        graph.clear()
        assert len(graph) == 0
        assert graph.edges == []
