from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest


def pytest_configure() -> None:
    """
    Ensure `src/` is on sys.path so tests can import `procedural_studio`
    without requiring an editable install.
    """
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"
    sys.path.insert(0, str(src_root))


@pytest.fixture
def random_buffer():
    """Factory for reproducible random RGBA buffers."""
    from procedural_studio.core.data_types import PixelBuffer

    def make(width: int = 8, height: int = 6, seed: int = 0) -> PixelBuffer:
        rng = np.random.default_rng(seed)
        pixels = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
        return PixelBuffer(pixels)

    return make
