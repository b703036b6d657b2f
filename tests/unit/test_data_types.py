"""
Tests for the data types module.
"""

import numpy as np
import pytest
from PIL import Image

from procedural_studio.core.data_types import Color, DataType, PixelBuffer


class TestColor:
    """Tests for Color."""

    def test_from_hex(self):
        assert Color.from_hex("#4f46e5") == Color(0x4F, 0x46, 0xE5)

    def test_from_hex_shorthand(self):
        assert Color.from_hex("#fa0") == Color(255, 170, 0)

    def test_from_hex_without_hash(self):
        assert Color.from_hex("A78BFA").to_hex() == "#a78bfa"

    @pytest.mark.parametrize("value", ["", "#12", "#12345", "#gggggg"])
    def test_invalid_hex_raises(self, value):
        with pytest.raises(ValueError, match="Invalid hex color"):
            Color.from_hex(value)

    def test_channels_clamped(self):
        assert Color(-10, 128, 400).as_tuple() == (0, 128, 255)

    def test_is_immutable(self):
        color = Color(1, 2, 3)
        with pytest.raises(AttributeError):
            color.r = 5


class TestPixelBuffer:
    """Tests for PixelBuffer."""

    def test_empty(self):
        buf = PixelBuffer.empty(3, 2)
        assert buf.size == (3, 2)
        assert buf.samples == bytes(3 * 2 * 4)

    def test_sample_count_invariant(self, random_buffer):
        buf = random_buffer(11, 7)
        assert len(buf.samples) == buf.width * buf.height * 4
        assert len(buf) == buf.width * buf.height * 4

    def test_rejects_wrong_dtype(self):
        with pytest.raises(TypeError):
            PixelBuffer(np.zeros((2, 2, 4), dtype=np.float32))

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            PixelBuffer(np.zeros((2, 2, 3), dtype=np.uint8))

    def test_pixels_are_read_only(self, random_buffer):
        buf = random_buffer()
        assert buf.pixels.flags.writeable is False

    def test_to_numpy_is_writable_copy(self, random_buffer):
        buf = random_buffer()
        arr = buf.to_numpy()
        arr[0, 0, 0] = 255 - arr[0, 0, 0]
        assert buf.pixels[0, 0, 0] != arr[0, 0, 0]

    def test_from_numpy_rgb_adds_opaque_alpha(self):
        rgb = np.full((2, 3, 3), 9, dtype=np.uint8)
        buf = PixelBuffer.from_numpy(rgb)
        assert buf.size == (3, 2)
        assert buf.pixel(2, 1) == (9, 9, 9, 255)

    def test_from_numpy_float_grayscale(self):
        gray = np.array([[0.0, 1.0]], dtype=np.float32)
        buf = PixelBuffer.from_numpy(gray)
        assert buf.pixel(0, 0) == (0, 0, 0, 255)
        assert buf.pixel(1, 0) == (255, 255, 255, 255)

    def test_copy_is_equal_but_independent(self, random_buffer):
        buf = random_buffer()
        dup = buf.copy()
        assert dup == buf
        assert dup.pixels is not buf.pixels

    def test_equality(self, random_buffer):
        assert random_buffer(seed=1) == random_buffer(seed=1)
        assert random_buffer(seed=1) != random_buffer(seed=2)
        assert random_buffer(4, 4) != random_buffer(2, 8)

    def test_pil_conversion(self, random_buffer):
        buf = random_buffer(5, 4)
        image = buf.to_pil()
        assert image.mode == "RGBA"
        assert image.size == (5, 4)
        assert PixelBuffer.from_pil(image) == buf

    def test_from_pil_converts_rgb(self):
        image = Image.new("RGB", (2, 2), (1, 2, 3))
        assert PixelBuffer.from_pil(image).pixel(1, 1) == (1, 2, 3, 255)

    def test_from_pil_rejects_other_types(self):
        with pytest.raises(TypeError):
            PixelBuffer.from_pil(np.zeros((2, 2, 4), dtype=np.uint8))


def test_data_type_compatibility():
    assert DataType.IMAGE.is_compatible_with(DataType.IMAGE)
    assert DataType.ANY.is_compatible_with(DataType.IMAGE)
    assert DataType.IMAGE.is_compatible_with(DataType.ANY)
