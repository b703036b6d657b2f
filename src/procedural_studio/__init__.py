"""
Procedural Studio - Node-based procedural image generation and compositing.

Usage:
    from procedural_studio import Edge, Node, NodeKind, evaluate
"""

from procedural_studio.core import (
    Edge,
    Node,
    NodeGraph,
    NodeKind,
    PixelBuffer,
    PreviewSession,
    evaluate,
    evaluate_with_report,
)

__version__ = "0.1.0"

__all__ = [
    "Edge",
    "Node",
    "NodeGraph",
    "NodeKind",
    "PixelBuffer",
    "PreviewSession",
    "evaluate",
    "evaluate_with_report",
]
