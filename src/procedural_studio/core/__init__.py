"""
Core module - Data structures and the graph evaluator.

This module provides the fundamental building blocks of Procedural Studio:
- Data Types: Pixel buffers and colors
- Node Types: Node kinds, parameter records and registry
- Graph: Nodes, edges and the editable graph
- Evaluator: Full-graph evaluation into an output mapping
- Session: Pull-based live previews
"""

# data_types must load before anything that imports the kernels
from procedural_studio.core.data_types import (
    Color,
    DataType,
    PixelBuffer,
)

from procedural_studio.core.node_types import (
    CombineParams,
    DisplayParams,
    GradientParams,
    InputDefinition,
    NodeCategory,
    NodeKind,
    NodeParams,
    NodeRegistry,
    NodeType,
    OutputDefinition,
    ParameterDefinition,
    ParameterType,
    PerlinNoiseParams,
    SolidImageParams,
    parse_parameters,
    register_node,
)

from procedural_studio.core.graph import (
    Edge,
    EdgeId,
    GraphSnapshot,
    Node,
    NodeGraph,
    NodeId,
    Point2D,
    new_edge_id,
    new_node_id,
)

from procedural_studio.core.evaluator import (
    EvaluationReport,
    NodeError,
    NodeStatus,
    OutputMapping,
    evaluate,
    evaluate_graph,
    evaluate_with_report,
)

from procedural_studio.core.session import PreviewSession


__all__ = [
    # data_types.py
    "Color",
    "DataType",
    "PixelBuffer",
    # node_types.py
    "CombineParams",
    "DisplayParams",
    "GradientParams",
    "InputDefinition",
    "NodeCategory",
    "NodeKind",
    "NodeParams",
    "NodeRegistry",
    "NodeType",
    "OutputDefinition",
    "ParameterDefinition",
    "ParameterType",
    "PerlinNoiseParams",
    "SolidImageParams",
    "parse_parameters",
    "register_node",
    # graph.py
    "Edge",
    "EdgeId",
    "GraphSnapshot",
    "Node",
    "NodeGraph",
    "NodeId",
    "Point2D",
    "new_edge_id",
    "new_node_id",
    # evaluator.py
    "EvaluationReport",
    "NodeError",
    "NodeStatus",
    "OutputMapping",
    "evaluate",
    "evaluate_graph",
    "evaluate_with_report",
    # session.py
    "PreviewSession",
]
