"""
Image kernels - Pure functions producing or combining RGBA pixel buffers.

- generators: Solid fill and linear gradient
- noise: Seeded Perlin noise
- compositing: Multi-mode blending of two buffers
- prng: Mulberry32 seeded generator

Kernels know nothing about the node graph.
"""

from procedural_studio.kernels.common import ParameterError
from procedural_studio.kernels.generators import (
    GradientDirection,
    gradient,
    solid_image,
)
from procedural_studio.kernels.noise import perlin_noise
from procedural_studio.kernels.compositing import BlendMode, combine
from procedural_studio.kernels.prng import Mulberry32


__all__ = [
    "ParameterError",
    "GradientDirection",
    "gradient",
    "solid_image",
    "perlin_noise",
    "BlendMode",
    "combine",
    "Mulberry32",
]
