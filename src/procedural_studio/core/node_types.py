"""
Node Type System - Node kinds, parameter records and type descriptors.

Each node kind carries its own frozen parameter record:
- SolidImageParams, GradientParams, PerlinNoiseParams: generators
- CombineParams: two-input compositing
- DisplayParams: pass-through preview

NodeType descriptors (ports and parameter definitions with UI ranges)
live in the NodeRegistry, which the editor uses to build its widgets.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, TypeAlias

from procedural_studio.core.data_types import Color, DataType
from procedural_studio.kernels.compositing import BlendMode
from procedural_studio.kernels.generators import GradientDirection


class NodeKind(Enum):
    """The fixed operation a node performs."""
    SOLID_IMAGE = "solid_image"
    GRADIENT = "gradient"
    PERLIN_NOISE = "perlin_noise"
    COMBINE = "combine"
    DISPLAY = "display"


class NodeCategory(Enum):
    """Categories for organizing nodes in the library."""
    GENERATION = "generation"
    COMPOSITING = "compositing"
    OUTPUT = "output"


# --- Parameter value coercion ---

def _as_color(value: Any) -> Color:
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        return Color.from_hex(value)
    if isinstance(value, (tuple, list)) and len(value) == 3:
        return Color(*(int(c) for c in value))
    raise ValueError(f"Invalid color: {value!r}")


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"Expected an integer, got {value!r}")
    return int(value)


def _as_number(value: Any) -> float | int:
    if isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    return float(value)


def _coerce(record: Any, name: str, convert) -> None:
    object.__setattr__(record, name, convert(getattr(record, name)))


# --- Parameter records ---

@dataclass(frozen=True)
class SolidImageParams:
    """Parameters of a solid color fill."""
    color: Color = field(default_factory=lambda: Color.from_hex("#4f46e5"))
    alpha: int = 255
    size: int = 256

    def __post_init__(self) -> None:
        _coerce(self, "color", _as_color)
        _coerce(self, "alpha", _as_int)
        _coerce(self, "size", _as_int)


@dataclass(frozen=True)
class GradientParams:
    """Parameters of a two-color linear gradient."""
    color_a: Color = field(default_factory=lambda: Color.from_hex("#7aa2f7"))
    color_b: Color = field(default_factory=lambda: Color.from_hex("#a78bfa"))
    direction: GradientDirection = GradientDirection.HORIZONTAL
    size: int = 256

    def __post_init__(self) -> None:
        _coerce(self, "color_a", _as_color)
        _coerce(self, "color_b", _as_color)
        _coerce(self, "direction", GradientDirection)
        _coerce(self, "size", _as_int)


@dataclass(frozen=True)
class PerlinNoiseParams:
    """Parameters of seeded Perlin noise."""
    scale: float = 16
    seed: int = 0
    size: int = 256

    def __post_init__(self) -> None:
        _coerce(self, "scale", _as_number)
        _coerce(self, "seed", _as_int)
        _coerce(self, "size", _as_int)


@dataclass(frozen=True)
class CombineParams:
    """Parameters of the compositing node. Opacity is clamped by the kernel."""
    mode: BlendMode = BlendMode.ADD
    opacity: float = 1.0

    def __post_init__(self) -> None:
        _coerce(self, "mode", BlendMode)
        _coerce(self, "opacity", _as_number)


@dataclass(frozen=True)
class DisplayParams:
    """The display node has no parameters."""


NodeParams: TypeAlias = (
    SolidImageParams | GradientParams | PerlinNoiseParams | CombineParams | DisplayParams
)

PARAMS_BY_KIND: dict[NodeKind, type] = {
    NodeKind.SOLID_IMAGE: SolidImageParams,
    NodeKind.GRADIENT: GradientParams,
    NodeKind.PERLIN_NOISE: PerlinNoiseParams,
    NodeKind.COMBINE: CombineParams,
    NodeKind.DISPLAY: DisplayParams,
}


def kind_of(params: NodeParams) -> NodeKind:
    """Get the node kind a parameter record belongs to."""
    for kind, params_class in PARAMS_BY_KIND.items():
        if type(params) is params_class:
            return kind
    raise TypeError(f"Not a node parameter record: {type(params).__name__}")


def parse_parameters(kind: NodeKind | str, data: dict[str, Any] | None = None) -> NodeParams:
    """
    Build a parameter record from a loose mapping.

    Missing fields take their defaults. Colors may be hex strings and
    enums may be given by value.

    Raises:
        ValueError: On unknown fields or values that cannot be converted.
    """
    params_class = PARAMS_BY_KIND[NodeKind(kind)]
    data = dict(data or {})
    known = {f.name for f in fields(params_class)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(
            f"Unknown parameters for {params_class.__name__}: {', '.join(unknown)}"
        )
    try:
        return params_class(**data)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid parameters for {params_class.__name__}: {e}") from e


# --- Type descriptors ---

class ParameterType(Enum):
    """Types of node parameters (determines UI widget)."""
    INTEGER = "integer"         # Integer spinner
    FLOAT = "float"             # Float spinner
    ENUM = "enum"               # Dropdown
    SLIDER = "slider"           # Slider with range
    COLOR = "color"             # Color picker
    SEED = "seed"               # Seed input with randomize button


@dataclass
class InputDefinition:
    """
    Definition of an input port on a node.

    Attributes:
        name: Port identifier (the edge's target_port)
        label: Display label in UI
        data_type: Type of data accepted
    """
    name: str
    label: str
    data_type: DataType = DataType.IMAGE
    description: str = ""


@dataclass
class OutputDefinition:
    """Definition of an output port on a node."""
    name: str
    label: str
    data_type: DataType = DataType.IMAGE
    description: str = ""


@dataclass
class EnumOption:
    """A single option in an enum parameter."""
    value: str
    label: str


@dataclass
class ParameterDefinition:
    """
    Definition of a user-editable parameter.

    Ranges are editor hints; the kernels enforce their own validity rules.
    """
    name: str
    label: str
    param_type: ParameterType
    default: Any = None
    min_value: float | None = None
    max_value: float | None = None
    step: float | None = None
    options: list[EnumOption] = field(default_factory=list)
    description: str = ""

    @classmethod
    def integer(
        cls,
        name: str,
        label: str,
        default: int = 0,
        min_value: int | None = None,
        max_value: int | None = None,
        step: int = 1,
        description: str = "",
    ) -> ParameterDefinition:
        """Factory for integer parameter."""
        return cls(
            name=name,
            label=label,
            param_type=ParameterType.INTEGER,
            default=default,
            min_value=min_value,
            max_value=max_value,
            step=step,
            description=description,
        )

    @classmethod
    def slider(
        cls,
        name: str,
        label: str,
        default: float = 0.5,
        min_value: float = 0.0,
        max_value: float = 1.0,
        step: float = 0.01,
        description: str = "",
    ) -> ParameterDefinition:
        """Factory for slider parameter."""
        return cls(
            name=name,
            label=label,
            param_type=ParameterType.SLIDER,
            default=default,
            min_value=min_value,
            max_value=max_value,
            step=step,
            description=description,
        )

    @classmethod
    def enum(
        cls,
        name: str,
        label: str,
        options: list[tuple[str, str]],  # [(value, label), ...]
        default: str | None = None,
        description: str = "",
    ) -> ParameterDefinition:
        """Factory for enum parameter."""
        return cls(
            name=name,
            label=label,
            param_type=ParameterType.ENUM,
            default=default or (options[0][0] if options else None),
            options=[EnumOption(v, l) for v, l in options],
            description=description,
        )

    @classmethod
    def color(
        cls,
        name: str,
        label: str,
        default: str = "#000000",
        description: str = "",
    ) -> ParameterDefinition:
        """Factory for color picker parameter (hex string)."""
        return cls(
            name=name,
            label=label,
            param_type=ParameterType.COLOR,
            default=default,
            description=description,
        )

    @classmethod
    def seed(
        cls,
        name: str = "seed",
        label: str = "Seed",
        default: int = 0,
        max_value: int = 9999,
        description: str = "Noise seed",
    ) -> ParameterDefinition:
        """Factory for seed parameter with randomize button."""
        return cls(
            name=name,
            label=label,
            param_type=ParameterType.SEED,
            default=default,
            min_value=0,
            max_value=max_value,
            step=1,
            description=description,
        )


@dataclass
class NodeType:
    """
    Complete description of a node kind for the editor.

    Actual nodes in a graph reference a NodeType through their kind.
    """
    kind: NodeKind
    name: str
    category: NodeCategory
    description: str = ""

    inputs: list[InputDefinition] = field(default_factory=list)
    outputs: list[OutputDefinition] = field(default_factory=list)
    parameters: list[ParameterDefinition] = field(default_factory=list)

    def get_input(self, name: str) -> InputDefinition | None:
        """Get an input definition by name."""
        for inp in self.inputs:
            if inp.name == name:
                return inp
        return None

    def get_parameter(self, name: str) -> ParameterDefinition | None:
        """Get a parameter definition by name."""
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    def get_default_parameters(self) -> dict[str, Any]:
        """Get default values for all parameters."""
        return {p.name: p.default for p in self.parameters}

    def create_parameters(self, **values: Any) -> NodeParams:
        """Build this kind's parameter record from editor defaults plus overrides."""
        data = self.get_default_parameters()
        data.update(values)
        return parse_parameters(self.kind, data)


class NodeRegistry:
    """
    Global registry of available node types.

    Built-in kinds register themselves when this module is imported.
    """

    _instance: NodeRegistry | None = None

    def __new__(cls) -> NodeRegistry:
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._types = {}
        return cls._instance

    @classmethod
    def instance(cls) -> NodeRegistry:
        """Get the singleton instance."""
        return cls()

    def register(self, node_type: NodeType) -> None:
        """Register a node type."""
        self._types[node_type.kind] = node_type

    def get(self, kind: NodeKind | str) -> NodeType | None:
        """Get a node type by kind."""
        try:
            return self._types.get(NodeKind(kind))
        except ValueError:
            return None

    def get_all(self) -> list[NodeType]:
        """Get all registered node types."""
        return list(self._types.values())

    def list_by_category(self, category: NodeCategory) -> list[NodeType]:
        """Get all node types in a category."""
        return [t for t in self._types.values() if t.category == category]

    def search(self, query: str) -> list[NodeType]:
        """Search node types by name or description."""
        query = query.lower()
        return [
            t for t in self._types.values()
            if query in t.name.lower() or query in t.description.lower()
        ]

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, kind: NodeKind) -> bool:
        return kind in self._types


def register_node(node_type: NodeType) -> NodeType:
    """Register a node type with the global registry."""
    NodeRegistry.instance().register(node_type)
    return node_type


def _size_parameter() -> ParameterDefinition:
    return ParameterDefinition.integer(
        name="size",
        label="Size",
        default=256,
        min_value=64,
        max_value=1024,
        step=32,
        description="Width and height of the generated image",
    )


_IMAGE_OUTPUT = OutputDefinition(name="out", label="Image")


SOLID_IMAGE_NODE = register_node(NodeType(
    kind=NodeKind.SOLID_IMAGE,
    name="Create Image",
    category=NodeCategory.GENERATION,
    description="Fill an image with a single color",
    outputs=[_IMAGE_OUTPUT],
    parameters=[
        ParameterDefinition.color("color", "Color", default="#4f46e5"),
        ParameterDefinition.integer("alpha", "Alpha", default=255, min_value=0, max_value=255),
        _size_parameter(),
    ],
))

GRADIENT_NODE = register_node(NodeType(
    kind=NodeKind.GRADIENT,
    name="Add Gradient",
    category=NodeCategory.GENERATION,
    description="Linear gradient between two colors",
    outputs=[_IMAGE_OUTPUT],
    parameters=[
        ParameterDefinition.color("color_a", "Color A", default="#7aa2f7"),
        ParameterDefinition.color("color_b", "Color B", default="#a78bfa"),
        ParameterDefinition.enum(
            "direction",
            "Direction",
            options=[(d.value, d.value.capitalize()) for d in GradientDirection],
        ),
        _size_parameter(),
    ],
))

PERLIN_NOISE_NODE = register_node(NodeType(
    kind=NodeKind.PERLIN_NOISE,
    name="Perlin Noise",
    category=NodeCategory.GENERATION,
    description="Seeded grayscale gradient noise",
    outputs=[_IMAGE_OUTPUT],
    parameters=[
        ParameterDefinition.integer(
            "scale", "Scale", default=16, min_value=2, max_value=128,
            description="Grid cell size in pixels",
        ),
        ParameterDefinition.seed(),
        _size_parameter(),
    ],
))

COMBINE_NODE = register_node(NodeType(
    kind=NodeKind.COMBINE,
    name="Combine Images",
    category=NodeCategory.COMPOSITING,
    description="Blend image B onto image A",
    inputs=[
        InputDefinition(name="a", label="A", description="Base image"),
        InputDefinition(name="b", label="B", description="Blend image"),
    ],
    outputs=[_IMAGE_OUTPUT],
    parameters=[
        ParameterDefinition.enum(
            "mode",
            "Mode",
            options=[(m.value, m.value.capitalize()) for m in BlendMode],
        ),
        ParameterDefinition.slider("opacity", "Opacity", default=1.0, step=0.05),
    ],
))

DISPLAY_NODE = register_node(NodeType(
    kind=NodeKind.DISPLAY,
    name="Display Image",
    category=NodeCategory.OUTPUT,
    description="Show the connected image",
    inputs=[InputDefinition(name="in", label="Image")],
    outputs=[_IMAGE_OUTPUT],
))
