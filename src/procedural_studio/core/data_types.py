"""
Data Types - Core data structures for pixel data flowing through the graph.

This module defines:
- DataType: Enum of data types carried by node ports
- Color: An RGB color as edited by the color pickers
- PixelBuffer: Immutable RGBA raster produced by the kernels
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

import numpy as np
from numpy.typing import NDArray


class DataType(Enum):
    """
    Enumeration of data types that can flow through node connections.

    Every port in the current node set carries images; the enum keeps
    connection checks explicit.
    """
    IMAGE = auto()          # RGBA pixel buffer
    ANY = auto()            # Accepts any type

    def is_compatible_with(self, other: DataType) -> bool:
        """Check if this type can connect to another type."""
        if self == DataType.ANY or other == DataType.ANY:
            return True
        return self == other


def _clamp_channel(value: Any) -> int:
    return max(0, min(255, int(value)))


@dataclass(frozen=True)
class Color:
    """RGB color with 8-bit channels."""
    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", _clamp_channel(self.r))
        object.__setattr__(self, "g", _clamp_channel(self.g))
        object.__setattr__(self, "b", _clamp_channel(self.b))

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """
        Parse a "#rrggbb" or "#rgb" hex string.

        Raises:
            ValueError: If the string is not a valid hex color.
        """
        digits = value.strip().lstrip("#")
        if len(digits) == 3:
            digits = "".join(c + c for c in digits)
        if len(digits) != 6:
            raise ValueError(f"Invalid hex color: {value!r}")
        try:
            packed = int(digits, 16)
        except ValueError:
            raise ValueError(f"Invalid hex color: {value!r}") from None
        return cls((packed >> 16) & 255, (packed >> 8) & 255, packed & 255)

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


class PixelBuffer:
    """
    Fixed-size RGBA raster with 8 bits per channel.

    Pixels are stored as a read-only numpy array of shape (H, W, 4) and
    dtype uint8. Kernels always allocate a new buffer for their output;
    consumers read buffers and never modify them.

    Attributes:
        pixels: Read-only uint8 array in HWC layout with 4 channels
    """

    __slots__ = ("_pixels",)

    def __init__(self, pixels: NDArray[np.uint8]):
        if pixels.dtype != np.uint8:
            raise TypeError(f"Expected uint8 pixels, got {pixels.dtype}")
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected (H, W, 4) pixels, got shape {pixels.shape}")
        pixels = np.ascontiguousarray(pixels)
        pixels.flags.writeable = False
        self._pixels = pixels

    @classmethod
    def from_numpy(cls, array: NDArray) -> PixelBuffer:
        """
        Create a buffer from a numpy array (copied).

        Handles:
        - uint8 [0, 255] RGBA or RGB (alpha set to 255)
        - float arrays in [0, 1] (scaled and clipped)
        - HW grayscale (replicated to RGB, alpha 255)
        """
        arr = np.asarray(array)
        if arr.dtype != np.uint8:
            arr = (arr.astype(np.float64) * 255.0).round().clip(0, 255).astype(np.uint8)
        else:
            arr = arr.copy()

        if arr.ndim == 2:
            arr = np.stack([arr, arr, arr], axis=-1)
        if arr.ndim == 3 and arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=-1)
        return cls(arr)

    @classmethod
    def from_pil(cls, image) -> PixelBuffer:
        """Create a buffer from a PIL Image (converted to RGBA)."""
        from PIL import Image

        if not isinstance(image, Image.Image):
            raise TypeError(f"Expected PIL Image, got {type(image)}")
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.array(image, dtype=np.uint8))

    @classmethod
    def empty(cls, width: int, height: int) -> PixelBuffer:
        """Create an all-zero (transparent black) buffer."""
        return cls(np.zeros((height, width, 4), dtype=np.uint8))

    @property
    def pixels(self) -> NDArray[np.uint8]:
        return self._pixels

    @property
    def width(self) -> int:
        """Buffer width in pixels."""
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        """Buffer height in pixels."""
        return self._pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        """Buffer size as (width, height)."""
        return (self.width, self.height)

    @property
    def samples(self) -> bytes:
        """Flat RGBA samples in row-major order."""
        return self._pixels.tobytes()

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Get the (r, g, b, a) value at a position."""
        r, g, b, a = self._pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    def to_numpy(self) -> NDArray[np.uint8]:
        """Return a writable copy of the pixel array."""
        return self._pixels.copy()

    def to_pil(self):
        """Convert to an RGBA PIL Image."""
        from PIL import Image

        return Image.fromarray(self.to_numpy())

    def copy(self) -> PixelBuffer:
        """Create an independent copy of this buffer."""
        return PixelBuffer(self._pixels.copy())

    def __len__(self) -> int:
        return self._pixels.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._pixels, other._pixels)

    def __hash__(self) -> int:
        return hash((self.size, self.samples))

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
