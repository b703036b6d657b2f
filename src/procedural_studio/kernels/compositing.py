"""
Compositing Kernel - Blend two RGBA buffers.

The blend result f(A, B) is mixed over A by opacity:
    out = round(A * (1 - opacity) + f(A, B) * opacity)
Alpha takes the larger of the two source alphas.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from procedural_studio.core.data_types import PixelBuffer
from procedural_studio.kernels.common import ParameterError, round_half_up, to_channel


class BlendMode(Enum):
    """Per-channel blend functions."""
    ADD = "add"
    MULTIPLY = "multiply"
    OVERLAY = "overlay"
    SCREEN = "screen"
    DIFFERENCE = "difference"


def _add(a: NDArray, b: NDArray) -> NDArray:
    return np.minimum(255.0, a + b)


def _multiply(a: NDArray, b: NDArray) -> NDArray:
    return round_half_up(a * b / 255)


def _overlay(a: NDArray, b: NDArray) -> NDArray:
    dark = round_half_up(2 * a * b / 255)
    light = 255 - round_half_up(2 * (255 - a) * (255 - b) / 255)
    return np.where(a < 128, dark, light)


def _screen(a: NDArray, b: NDArray) -> NDArray:
    return 255 - round_half_up((255 - a) * (255 - b) / 255)


def _difference(a: NDArray, b: NDArray) -> NDArray:
    return np.abs(a - b)


BLEND_FUNCTIONS: dict[BlendMode, Callable[[NDArray, NDArray], NDArray]] = {
    BlendMode.ADD: _add,
    BlendMode.MULTIPLY: _multiply,
    BlendMode.OVERLAY: _overlay,
    BlendMode.SCREEN: _screen,
    BlendMode.DIFFERENCE: _difference,
}


def _fit(buffer: PixelBuffer, width: int, height: int) -> NDArray:
    """Crop or zero-pad a buffer's pixels to the given size, as float64."""
    out = np.zeros((height, width, 4), dtype=np.float64)
    h = min(height, buffer.height)
    w = min(width, buffer.width)
    out[:h, :w] = buffer.pixels[:h, :w]
    return out


def combine(
    buffer_a: PixelBuffer | None,
    buffer_b: PixelBuffer | None,
    mode: BlendMode | str = BlendMode.ADD,
    opacity: float = 1.0,
) -> PixelBuffer | None:
    """
    Composite buffer_b onto buffer_a.

    Args:
        buffer_a: Base buffer, or None
        buffer_b: Blend buffer, or None
        mode: Blend mode (enum member or its string value)
        opacity: Mix of the blended result over A, clamped to [0, 1]

    Returns:
        A new buffer sized like buffer_a (or buffer_b when A is absent),
        or None when both inputs are absent. A missing or smaller input
        contributes transparent black where it has no pixels.

    Raises:
        ParameterError: On an unknown mode or non-numeric opacity.
    """
    reference = buffer_a if buffer_a is not None else buffer_b
    if reference is None:
        return None

    try:
        mode = BlendMode(mode)
    except ValueError:
        raise ParameterError(f"Unknown blend mode: {mode!r}") from None
    try:
        opacity = float(opacity)
    except (TypeError, ValueError):
        raise ParameterError(f"Invalid opacity: {opacity!r}") from None
    if np.isnan(opacity):
        raise ParameterError("Opacity must be a number")
    opacity = min(1.0, max(0.0, opacity))

    width, height = reference.size

    a = _fit(buffer_a, width, height) if buffer_a is not None else np.zeros((height, width, 4))
    b = _fit(buffer_b, width, height) if buffer_b is not None else np.zeros((height, width, 4))

    blended = BLEND_FUNCTIONS[mode](a[..., :3], b[..., :3])
    alpha = np.maximum(a[..., 3] / 255, b[..., 3] / 255)

    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[..., :3] = to_channel(round_half_up(a[..., :3] * (1 - opacity) + blended * opacity))
    pixels[..., 3] = to_channel(round_half_up(alpha * 255))
    return PixelBuffer(pixels)
