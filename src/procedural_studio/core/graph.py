"""
Node Graph Model - Core data structures for the procedural image graph.

This module defines the fundamental building blocks:
- Node: An immutable record of a node's kind and parameters
- Edge: A link from a node's output to a named input port of another node
- NodeGraph: The editable graph the presentation layer mutates
- GraphSnapshot: Immutable view of a graph handed to the evaluator
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Iterable, TypeAlias
from uuid import uuid4

from procedural_studio.core.node_types import (
    NodeKind,
    NodeParams,
    NodeRegistry,
    PARAMS_BY_KIND,
    kind_of,
    parse_parameters,
)


NodeId: TypeAlias = str
EdgeId: TypeAlias = str


def new_node_id() -> NodeId:
    """Generate a new unique node ID."""
    return uuid4().hex


def new_edge_id() -> EdgeId:
    """Generate a new unique edge ID."""
    return uuid4().hex


@dataclass(frozen=True)
class Point2D:
    """2D point for node positioning on the canvas."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Point2D) -> Point2D:
        return Point2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point2D) -> Point2D:
        return Point2D(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Node:
    """
    A single node in the processing graph.

    Nodes are plain immutable data:
    - A unique ID
    - A kind, fixed at creation
    - The kind's parameter record
    - Title and canvas position (presentation only)

    Outputs are never stored on nodes; every evaluation recomputes them.
    """
    id: NodeId
    kind: NodeKind
    params: NodeParams
    title: str = ""
    position: Point2D = field(default_factory=Point2D)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", NodeKind(self.kind))
        if kind_of(self.params) is not self.kind:
            raise TypeError(
                f"{type(self.params).__name__} does not belong to a {self.kind.value} node"
            )

    @classmethod
    def create(
        cls,
        kind: NodeKind | str,
        params: NodeParams | dict[str, Any] | None = None,
        position: Point2D | None = None,
        node_id: NodeId | None = None,
    ) -> Node:
        """Factory method to create a new node with default parameters."""
        kind = NodeKind(kind)
        if params is None or isinstance(params, dict):
            params = parse_parameters(kind, params)
        node_type = NodeRegistry.instance().get(kind)
        return cls(
            id=node_id or new_node_id(),
            kind=kind,
            params=params,
            title=node_type.name if node_type else kind.value,
            position=position or Point2D(),
        )

    def with_parameters(self, **changes: Any) -> Node:
        """
        Return a copy of this node with some parameters replaced.

        Raises:
            ValueError: On unknown parameter names or invalid values.
        """
        params_class = PARAMS_BY_KIND[self.kind]
        data = {f.name: getattr(self.params, f.name) for f in fields(params_class)}
        data.update(changes)
        return replace(self, params=parse_parameters(self.kind, data))

    def get_parameter(self, name: str, default: Any = None) -> Any:
        """Get a parameter value."""
        return getattr(self.params, name, default)


@dataclass(frozen=True)
class Edge:
    """
    A connection (wire) from one node's output to another node's input port.
    """
    id: EdgeId
    source: NodeId
    target: NodeId
    target_port: str
    source_port: str = "out"

    @classmethod
    def create(
        cls,
        source: NodeId,
        target: NodeId,
        target_port: str,
        source_port: str = "out",
    ) -> Edge:
        """Factory method to create a new edge."""
        return cls(
            id=new_edge_id(),
            source=source,
            target=target,
            target_port=target_port,
            source_port=source_port,
        )


@dataclass(frozen=True)
class GraphSnapshot:
    """Immutable nodes and edges of a graph at one revision."""
    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...]
    revision: int = 0


class NodeGraph:
    """
    The editable node graph.

    Holds nodes and edges in insertion order and a revision counter that
    is bumped by every mutation. Node records are replaced, never mutated,
    so snapshots handed to the evaluator stay valid.
    """

    def __init__(self, name: str = "Untitled"):
        self.name: str = name
        self._nodes: dict[NodeId, Node] = {}
        self._edges: list[Edge] = []
        self._revision: int = 0

    @property
    def revision(self) -> int:
        """Counter incremented on every change to nodes or edges."""
        return self._revision

    def _bump(self) -> None:
        self._revision += 1

    # --- Node operations ---

    @property
    def nodes(self) -> dict[NodeId, Node]:
        """Get all nodes (read-only copy)."""
        return self._nodes.copy()

    def add_node(self, node: Node) -> Node:
        """Add (or replace) a node."""
        self._nodes[node.id] = node
        self._bump()
        return node

    def remove_node(self, node_id: NodeId) -> Node | None:
        """
        Remove a node and all its edges.

        Returns the removed node, or None if not found.
        """
        node = self._nodes.pop(node_id, None)
        if node:
            self._edges = [
                edge for edge in self._edges
                if edge.source != node_id and edge.target != node_id
            ]
            self._bump()
        return node

    def get_node(self, node_id: NodeId) -> Node | None:
        """Get a node by ID."""
        return self._nodes.get(node_id)

    def update_parameters(self, node_id: NodeId, **changes: Any) -> Node:
        """
        Apply a parameter edit to a node.

        Returns the new node record.

        Raises:
            KeyError: If the node does not exist.
            ValueError: If a parameter name or value is invalid.
        """
        node = self._nodes.get(node_id)
        if node is None:
            raise KeyError(node_id)
        updated = node.with_parameters(**changes)
        if updated != node:
            self._nodes[node_id] = updated
            self._bump()
        return updated

    def move_node(self, node_id: NodeId, position: Point2D) -> Node:
        """
        Move a node on the canvas.

        Position is presentation metadata, so the revision is unchanged.
        """
        node = self._nodes.get(node_id)
        if node is None:
            raise KeyError(node_id)
        moved = replace(node, position=position)
        self._nodes[node_id] = moved
        return moved

    # --- Edge operations ---

    @property
    def edges(self) -> list[Edge]:
        """Get all edges (read-only copy)."""
        return self._edges.copy()

    def add_edge(self, edge: Edge) -> bool:
        """
        Add an edge to the graph.

        Returns False if either node doesn't exist, the edge connects a
        node to itself, or the target has no such input port. An edge
        already feeding the same port is replaced (inputs take one edge).
        """
        if edge.source not in self._nodes:
            return False
        target = self._nodes.get(edge.target)
        if target is None:
            return False
        if edge.source == edge.target:
            return False

        node_type = NodeRegistry.instance().get(target.kind)
        if node_type is None or node_type.get_input(edge.target_port) is None:
            return False

        self._edges = [
            e for e in self._edges
            if not (e.target == edge.target and e.target_port == edge.target_port)
        ]
        self._edges.append(edge)
        self._bump()
        return True

    def connect(self, source: NodeId, target: NodeId, target_port: str) -> Edge | None:
        """Create and add an edge. Returns None if it was rejected."""
        edge = Edge.create(source, target, target_port)
        return edge if self.add_edge(edge) else None

    def remove_edge(self, edge_id: EdgeId) -> Edge | None:
        """Remove an edge by ID."""
        for i, edge in enumerate(self._edges):
            if edge.id == edge_id:
                removed = self._edges.pop(i)
                self._bump()
                return removed
        return None

    def get_input_edge(self, node_id: NodeId, port: str) -> Edge | None:
        """Get the edge feeding into a specific input port."""
        for edge in self._edges:
            if edge.target == node_id and edge.target_port == port:
                return edge
        return None

    def get_output_edges(self, node_id: NodeId) -> list[Edge]:
        """Get all edges leaving a node."""
        return [edge for edge in self._edges if edge.source == node_id]

    # --- Graph analysis ---

    def get_upstream_nodes(self, node_id: NodeId) -> set[NodeId]:
        """Get all nodes that this node depends on (directly or indirectly)."""
        upstream: set[NodeId] = set()
        to_visit = [node_id]

        while to_visit:
            current = to_visit.pop()
            for edge in self._edges:
                if edge.target == current and edge.source not in upstream:
                    upstream.add(edge.source)
                    to_visit.append(edge.source)

        upstream.discard(node_id)
        return upstream

    def get_downstream_nodes(self, node_id: NodeId) -> set[NodeId]:
        """Get all nodes that depend on this node (directly or indirectly)."""
        downstream: set[NodeId] = set()
        to_visit = [node_id]

        while to_visit:
            current = to_visit.pop()
            for edge in self._edges:
                if edge.source == current and edge.target not in downstream:
                    downstream.add(edge.target)
                    to_visit.append(edge.target)

        downstream.discard(node_id)
        return downstream

    def snapshot(self) -> GraphSnapshot:
        """Get an immutable view of the current nodes and edges."""
        return GraphSnapshot(
            nodes=tuple(self._nodes.values()),
            edges=tuple(self._edges),
            revision=self._revision,
        )

    @classmethod
    def from_items(
        cls,
        nodes: Iterable[Node],
        edges: Iterable[Edge] = (),
        name: str = "Untitled",
    ) -> NodeGraph:
        """
        Build a graph from existing records without validation.

        Edges are kept as given, including duplicates and cycles.
        """
        graph = cls(name)
        for node in nodes:
            graph._nodes[node.id] = node
        graph._edges = list(edges)
        graph._bump()
        return graph

    # --- Utility ---

    def clear(self) -> None:
        """Remove all nodes and edges."""
        self._nodes.clear()
        self._edges.clear()
        self._bump()

    def __len__(self) -> int:
        """Return the number of nodes."""
        return len(self._nodes)

    def __contains__(self, node_id: NodeId) -> bool:
        """Check if a node exists in the graph."""
        return node_id in self._nodes
