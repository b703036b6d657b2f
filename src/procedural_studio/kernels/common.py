"""
Shared helpers for the image kernels.

Kernels round "half up" (floor(x + 0.5)) and clamp every channel into
0..255 before storing it, so results are reproducible byte for byte.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


class ParameterError(ValueError):
    """Invalid parameters passed to a kernel."""
    pass


def round_half_up(values: NDArray) -> NDArray:
    """Round to the nearest integer with ties going towards +inf."""
    return np.floor(values + 0.5)


def to_channel(values: NDArray) -> NDArray[np.uint8]:
    """Clamp float or integer values into a uint8 channel array."""
    return np.clip(values, 0, 255).astype(np.uint8)


def require_size(width: int, height: int) -> tuple[int, int]:
    """
    Validate buffer dimensions.

    Raises:
        ParameterError: If either dimension is not a positive integer.
    """
    try:
        w, h = int(width), int(height)
    except (TypeError, ValueError):
        raise ParameterError(f"Invalid buffer size: {width!r}x{height!r}") from None
    if w <= 0 or h <= 0:
        raise ParameterError(f"Buffer size must be positive, got {w}x{h}")
    return w, h
