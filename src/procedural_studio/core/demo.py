"""
Demo graph shown when the editor opens.

Gradient and Perlin noise feed a Combine node (ports "a" and "b"), whose
result is shown by a Display node.
"""

from __future__ import annotations

from procedural_studio.core.graph import Edge, Node, NodeGraph, Point2D
from procedural_studio.core.node_types import NodeKind


def build_demo_graph(size: int = 256, seed: int = 0) -> NodeGraph:
    """Build the gradient + noise -> combine -> display graph."""
    graph = NodeGraph("Demo")

    gradient = graph.add_node(Node.create(
        NodeKind.GRADIENT, {"size": size}, position=Point2D(0, 0), node_id="1",
    ))
    noise = graph.add_node(Node.create(
        NodeKind.PERLIN_NOISE, {"size": size, "seed": seed}, position=Point2D(0, 220), node_id="2",
    ))
    combine = graph.add_node(Node.create(
        NodeKind.COMBINE, {"mode": "add", "opacity": 1.0}, position=Point2D(320, 100), node_id="3",
    ))
    display = graph.add_node(Node.create(
        NodeKind.DISPLAY, position=Point2D(640, 80), node_id="4",
    ))

    graph.add_edge(Edge("e1", gradient.id, combine.id, "a"))
    graph.add_edge(Edge("e2", noise.id, combine.id, "b"))
    graph.add_edge(Edge("e3", combine.id, display.id, "in"))
    return graph
