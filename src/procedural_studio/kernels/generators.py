"""
Generator kernels - Solid fills and linear gradients.

Both kernels take explicit dimensions and colors and return a freshly
allocated PixelBuffer.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from procedural_studio.core.data_types import Color, PixelBuffer
from procedural_studio.kernels.common import (
    ParameterError,
    require_size,
    round_half_up,
    to_channel,
)


class GradientDirection(Enum):
    """Axis along which a gradient interpolates."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def solid_image(
    width: int,
    height: int,
    r: int,
    g: int,
    b: int,
    a: int = 255,
) -> PixelBuffer:
    """
    Fill every pixel with a single RGBA value.

    Channel values outside 0..255 are clamped.

    Raises:
        ParameterError: If width or height is not positive.
    """
    w, h = require_size(width, height)
    rgba = to_channel(np.array([r, g, b, a], dtype=np.int64))
    pixels = np.empty((h, w, 4), dtype=np.uint8)
    pixels[:, :] = rgba
    return PixelBuffer(pixels)


def gradient(
    width: int,
    height: int,
    color_a: Color,
    color_b: Color,
    direction: GradientDirection | str = GradientDirection.HORIZONTAL,
) -> PixelBuffer:
    """
    Linear interpolation from color_a to color_b along one axis.

    The interpolation parameter is x / (width - 1) for horizontal
    gradients and y / (height - 1) for vertical ones. A one pixel wide
    (or tall) axis uses t = 0 everywhere. Alpha is always 255.

    Raises:
        ParameterError: On invalid size or direction.
    """
    w, h = require_size(width, height)
    try:
        direction = GradientDirection(direction)
    except ValueError:
        raise ParameterError(f"Unknown gradient direction: {direction!r}") from None

    if direction is GradientDirection.HORIZONTAL:
        t = np.arange(w, dtype=np.float64) / (w - 1) if w > 1 else np.zeros(w)
        t = np.broadcast_to(t[np.newaxis, :], (h, w))
    else:
        t = np.arange(h, dtype=np.float64) / (h - 1) if h > 1 else np.zeros(h)
        t = np.broadcast_to(t[:, np.newaxis], (h, w))

    a = np.array(color_a.as_tuple(), dtype=np.float64)
    b = np.array(color_b.as_tuple(), dtype=np.float64)
    t = t[..., np.newaxis]

    pixels = np.empty((h, w, 4), dtype=np.uint8)
    pixels[..., :3] = to_channel(round_half_up(a * (1 - t) + b * t))
    pixels[..., 3] = 255
    return PixelBuffer(pixels)
