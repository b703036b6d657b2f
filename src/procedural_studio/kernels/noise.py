"""
Perlin Noise Kernel - Seeded gradient noise.

A grid of unit gradient vectors is drawn from a Mulberry32 generator, one
random angle per grid corner, filled row by row. Each pixel interpolates
the dot products of its cell's four corner gradients with the smootherstep
fade curve. The same (width, height, scale, seed) always produces the same
bytes.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from procedural_studio.core.data_types import PixelBuffer
from procedural_studio.kernels.common import ParameterError, require_size, to_channel
from procedural_studio.kernels.prng import Mulberry32


def fade(t: NDArray) -> NDArray:
    """Smootherstep curve 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def lerp(a: NDArray, b: NDArray, t: NDArray) -> NDArray:
    return a + (b - a) * t


def gradient_grid(grid_w: int, grid_h: int, seed: int) -> tuple[NDArray, NDArray]:
    """
    Draw the corner gradient vectors.

    Returns:
        (grad_x, grad_y) arrays of shape (grid_h, grid_w)
    """
    rand = Mulberry32(seed)
    angles = np.array(
        [rand() * math.pi * 2 for _ in range(grid_w * grid_h)],
        dtype=np.float64,
    ).reshape(grid_h, grid_w)
    return np.cos(angles), np.sin(angles)


def perlin_noise(width: int, height: int, scale: float, seed: int) -> PixelBuffer:
    """
    Generate a grayscale Perlin noise buffer.

    Args:
        width: Buffer width in pixels
        height: Buffer height in pixels
        scale: Grid cell size in pixels
        seed: PRNG seed (taken modulo 2**32)

    Raises:
        ParameterError: If the size is invalid or scale is below 1.
    """
    w, h = require_size(width, height)
    try:
        scale = float(scale)
    except (TypeError, ValueError):
        raise ParameterError(f"Invalid noise scale: {scale!r}") from None
    if not math.isfinite(scale) or scale < 1:
        raise ParameterError(f"Noise scale must be at least 1, got {scale}")

    grid_w = math.ceil(w / scale) + 2
    grid_h = math.ceil(h / scale) + 2
    grad_x, grad_y = gradient_grid(grid_w, grid_h, int(seed))

    fx = np.arange(w, dtype=np.float64) / scale
    fy = np.arange(h, dtype=np.float64) / scale
    x0 = np.floor(fx).astype(np.intp)
    y0 = np.floor(fy).astype(np.intp)
    dx = (fx - x0)[np.newaxis, :]
    dy = (fy - y0)[:, np.newaxis]
    xi = x0[np.newaxis, :]
    yi = y0[:, np.newaxis]

    n00 = grad_x[yi, xi] * dx + grad_y[yi, xi] * dy
    n10 = grad_x[yi, xi + 1] * (dx - 1) + grad_y[yi, xi + 1] * dy
    n01 = grad_x[yi + 1, xi] * dx + grad_y[yi + 1, xi] * (dy - 1)
    n11 = grad_x[yi + 1, xi + 1] * (dx - 1) + grad_y[yi + 1, xi + 1] * (dy - 1)

    u = fade(dx)
    v = fade(dy)
    n = lerp(lerp(n00, n10, u), lerp(n01, n11, u), v)

    value = to_channel(np.floor((n * 0.5 + 0.5) * 255))
    pixels = np.empty((h, w, 4), dtype=np.uint8)
    pixels[..., 0] = value
    pixels[..., 1] = value
    pixels[..., 2] = value
    pixels[..., 3] = 255
    return PixelBuffer(pixels)
