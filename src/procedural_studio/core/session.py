"""
Preview Session - Pull-based live previews for the editor.

The editor mutates its NodeGraph; every mutation bumps the graph's
revision. The session re-evaluates the whole graph only when asked for
outputs at a revision it has not evaluated yet.
"""

from __future__ import annotations

import logging

from procedural_studio.core.data_types import PixelBuffer
from procedural_studio.core.evaluator import EvaluationReport, OutputMapping, evaluate_graph
from procedural_studio.core.graph import NodeGraph, NodeId

logger = logging.getLogger(__name__)


class PreviewSession:
    """
    Keeps the latest evaluation of a graph.

    Usage:
        session = PreviewSession(graph)
        graph.update_parameters(node_id, seed=7)
        buffer = session.preview(node_id)  # re-evaluates once
    """

    def __init__(self, graph: NodeGraph):
        self.graph = graph
        self._report: EvaluationReport | None = None
        self._revision: int | None = None
        self.evaluations = 0

    @property
    def is_stale(self) -> bool:
        """True when the graph changed since the last evaluation."""
        return self._revision != self.graph.revision

    def report(self) -> EvaluationReport:
        """Get the evaluation report for the current revision."""
        if self._report is None or self.is_stale:
            snapshot = self.graph.snapshot()
            logger.debug("Evaluating %r at revision %d", self.graph.name, snapshot.revision)
            self._report = evaluate_graph(snapshot)
            self._revision = snapshot.revision
            self.evaluations += 1
        return self._report

    def outputs(self) -> OutputMapping:
        """Get the output mapping for the current revision."""
        return self.report().outputs

    def preview(self, node_id: NodeId) -> PixelBuffer | None:
        """Get a single node's buffer, or None."""
        return self.outputs().get(node_id)
