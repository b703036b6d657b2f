"""
Graph Evaluator - Computes every node's output buffer.

Evaluation is a fixed-point sweep: passes over the pending nodes repeat
until a pass makes no progress. A node is ready once every incoming
edge's source has an entry in the output map (a buffer or None). Nodes
left over when the sweep stalls sit on a cycle and get no output.

A failing kernel only affects its own node: the error is logged and
recorded, the node's output is None and evaluation continues.
"""

from __future__ import annotations

import logging
import time
import traceback
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable

from procedural_studio.core.data_types import PixelBuffer
from procedural_studio.core.graph import Edge, GraphSnapshot, Node, NodeGraph, NodeId
from procedural_studio.core.node_types import (
    CombineParams,
    DisplayParams,
    GradientParams,
    PerlinNoiseParams,
    SolidImageParams,
)
from procedural_studio.kernels import combine, gradient, perlin_noise, solid_image

logger = logging.getLogger(__name__)


OutputMapping = dict[NodeId, PixelBuffer | None]


class NodeStatus(Enum):
    """Readiness of a node within one evaluation run."""
    UNVISITED = auto()
    VISITED = auto()


@dataclass
class NodeError:
    """Error information from a failed node evaluation."""
    message: str
    details: str | None = None


@dataclass
class EvaluationReport:
    """Outcome of one full evaluation run."""
    outputs: OutputMapping = field(default_factory=dict)
    errors: dict[NodeId, NodeError] = field(default_factory=dict)
    stalled: list[NodeId] = field(default_factory=list)
    order: list[NodeId] = field(default_factory=list)
    duration: float = 0.0  # Seconds

    @property
    def succeeded(self) -> bool:
        """True when no node failed and nothing was left unresolved."""
        return not self.errors and not self.stalled


def _resolve_port(
    incoming: list[Edge],
    port: str,
    outputs: OutputMapping,
) -> PixelBuffer | None:
    """Get the buffer feeding a port, using the first matching edge."""
    for edge in incoming:
        if edge.target_port == port:
            return outputs.get(edge.source)
    return None


def _execute_node(
    node: Node,
    incoming: list[Edge],
    outputs: OutputMapping,
) -> PixelBuffer | None:
    """Run the kernel for a single node."""
    match node.params:
        case SolidImageParams(color=color, alpha=alpha, size=size):
            return solid_image(size, size, color.r, color.g, color.b, alpha)
        case GradientParams(color_a=color_a, color_b=color_b, direction=direction, size=size):
            return gradient(size, size, color_a, color_b, direction)
        case PerlinNoiseParams(scale=scale, seed=seed, size=size):
            return perlin_noise(size, size, scale, seed)
        case CombineParams(mode=mode, opacity=opacity):
            return combine(
                _resolve_port(incoming, "a", outputs),
                _resolve_port(incoming, "b", outputs),
                mode,
                opacity,
            )
        case DisplayParams():
            image = _resolve_port(incoming, "in", outputs)
            return image.copy() if image is not None else None
        case _:
            logger.debug("No kernel for node %s (%r)", node.id, type(node.params).__name__)
            return None


def evaluate_with_report(
    nodes: Iterable[Node],
    edges: Iterable[Edge],
) -> EvaluationReport:
    """
    Evaluate every node and report failures and unresolved nodes.

    Args:
        nodes: Node records to evaluate
        edges: Edges between them

    Returns:
        EvaluationReport whose outputs hold one entry per node
    """
    started = time.perf_counter()
    nodes = list(nodes)
    report = EvaluationReport()

    incoming: dict[NodeId, list[Edge]] = {}
    for edge in edges:
        incoming.setdefault(edge.target, []).append(edge)

    outputs: OutputMapping = {}
    status: dict[NodeId, NodeStatus] = {node.id: NodeStatus.UNVISITED for node in nodes}

    progress = True
    while progress:
        progress = False
        for node in nodes:
            if status[node.id] is NodeStatus.VISITED:
                continue
            inc = incoming.get(node.id, [])
            if not all(edge.source in outputs for edge in inc):
                continue

            try:
                result = _execute_node(node, inc, outputs)
            except Exception as e:
                logger.warning("Node %s (%s) failed: %s", node.id, node.kind.value, e)
                report.errors[node.id] = NodeError(
                    message=str(e) or type(e).__name__,
                    details=traceback.format_exc(),
                )
                result = None

            outputs[node.id] = result
            status[node.id] = NodeStatus.VISITED
            report.order.append(node.id)
            progress = True

    for node in nodes:
        if status[node.id] is not NodeStatus.VISITED:
            outputs[node.id] = None
            report.stalled.append(node.id)

    if report.stalled:
        logger.debug("Unresolved nodes (cycle or missing source): %s", report.stalled)

    report.outputs = outputs
    report.duration = time.perf_counter() - started
    logger.debug(
        "Evaluated %d nodes in %.3fs (%d failed, %d unresolved)",
        len(report.order),
        report.duration,
        len(report.errors),
        len(report.stalled),
    )
    return report


def evaluate(nodes: Iterable[Node], edges: Iterable[Edge]) -> OutputMapping:
    """
    Evaluate a graph and map every node ID to its buffer or None.

    Never raises for node-level problems: failed kernels, unconnected
    inputs and cycles all produce None for the affected nodes.
    """
    return evaluate_with_report(nodes, edges).outputs


def evaluate_graph(graph: NodeGraph | GraphSnapshot) -> EvaluationReport:
    """Evaluate a NodeGraph (or a snapshot of one)."""
    snapshot = graph.snapshot() if isinstance(graph, NodeGraph) else graph
    return evaluate_with_report(snapshot.nodes, snapshot.edges)
