"""Tests for ImageBuffer decoding, access and cropping."""

import numpy as np
import pytest
from PIL import Image as PILImage

from pixelfind import ImageProcessingError
from pixelfind.model.element import (
    RGBA,
    WILDCARD,
    ImageBuffer,
    Opaque,
    Region,
    as_image_buffer,
    crop_image,
)


@pytest.fixture
def gradient():
    """4 wide, 3 high RGBA image where red encodes x and green encodes y."""
    pixels = np.zeros((3, 4, 4), dtype=np.uint8)
    for y in range(3):
        for x in range(4):
            pixels[y, x] = (x * 10, y * 10, 7, 255)
    pixels[2, 3, 3] = 0
    return pixels


class TestConstruction:
    def test_dimensions(self, gradient):
        image = ImageBuffer(gradient)
        assert image.width == 4
        assert image.height == 3
        assert image.size == (4, 3)
        assert image.bounds == Region(0, 0, 4, 3)

    def test_pixels_are_read_only_copy(self, gradient):
        image = ImageBuffer(gradient)
        gradient[0, 0] = (99, 99, 99, 99)

        assert image.pixel(0, 0) == RGBA(0, 0, 7, 255)
        assert not image.pixels.flags.writeable
        assert image.pixels.flags.c_contiguous
        with pytest.raises(ValueError):
            image.pixels[0, 0, 0] = 1

    @pytest.mark.parametrize(
        "array",
        [
            np.zeros((3, 4, 3), dtype=np.uint8),
            np.zeros((3, 4, 4), dtype=np.int32),
            np.zeros((3, 4), dtype=np.uint8),
        ],
    )
    def test_constructor_requires_rgba_uint8(self, array):
        with pytest.raises(ImageProcessingError):
            ImageBuffer(array)


class TestFromNumpy:
    def test_rgb_gets_opaque_alpha(self):
        image = ImageBuffer.from_numpy(np.full((2, 2, 3), 50, dtype=np.uint8))
        assert image.pixel(1, 1) == RGBA(50, 50, 50, 255)

    def test_grayscale(self):
        image = ImageBuffer.from_numpy(np.array([[0, 200]], dtype=np.uint8))
        assert image.pixel(1, 0) == RGBA(200, 200, 200, 255)

    def test_wider_integer_types_in_range(self):
        image = ImageBuffer.from_numpy(np.full((1, 1, 4), 255, dtype=np.int64))
        assert image.pixel(0, 0) == RGBA(255, 255, 255, 255)

    @pytest.mark.parametrize(
        "array",
        [
            np.full((2, 2, 3), 300, dtype=np.int32),
            np.zeros((2, 2, 3), dtype=np.float32),
            np.zeros((2, 2, 5), dtype=np.uint8),
            np.zeros((2, 2, 2, 2), dtype=np.uint8),
        ],
    )
    def test_rejects_non_pixel_arrays(self, array):
        with pytest.raises(ImageProcessingError):
            ImageBuffer.from_numpy(array)


class TestDecoding:
    def test_from_pil_converts_mode(self):
        pil_image = PILImage.new("RGB", (5, 2), (1, 2, 3))
        image = ImageBuffer.from_pil(pil_image, name="rgb")

        assert image.size == (5, 2)
        assert image.pixel(4, 1) == RGBA(1, 2, 3, 255)
        assert image.name == "rgb"

    def test_file_round_trip_keeps_alpha(self, gradient, tmp_path):
        path = tmp_path / "template.png"
        ImageBuffer(gradient).save(path)

        loaded = ImageBuffer.from_file(path)

        assert loaded == ImageBuffer(gradient)
        assert loaded.name == "template"
        assert loaded.masked_pixel(3, 2) is WILDCARD

    def test_from_bytes(self, gradient, tmp_path):
        path = tmp_path / "image.png"
        ImageBuffer(gradient).save(path)

        assert ImageBuffer.from_bytes(path.read_bytes()) == ImageBuffer(gradient)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ImageProcessingError) as excinfo:
            ImageBuffer.from_file(tmp_path / "missing.png")
        assert excinfo.value.image_path.endswith("missing.png")

    def test_garbage_bytes(self):
        with pytest.raises(ImageProcessingError):
            ImageBuffer.from_bytes(b"\x00\x01\x02")

    def test_as_image_buffer_passes_buffers_through(self, gradient):
        image = ImageBuffer(gradient)
        assert as_image_buffer(image) is image


class TestPixelAccess:
    def test_pixel(self, gradient):
        image = ImageBuffer(gradient)
        assert image.pixel(3, 1) == RGBA(30, 10, 7, 255)

    def test_masked_pixel(self, gradient):
        image = ImageBuffer(gradient)
        assert image.masked_pixel(1, 1) == Opaque(10, 10, 7)
        assert image.masked_pixel(3, 2) is WILDCARD

    @pytest.mark.parametrize("x,y", [(4, 0), (0, 3), (-1, 0)])
    def test_out_of_bounds(self, gradient, x, y):
        with pytest.raises(IndexError):
            ImageBuffer(gradient).pixel(x, y)


class TestCrop:
    def test_crop(self, gradient):
        cropped = ImageBuffer(gradient).crop(Region(1, 1, 2, 2))

        assert cropped.size == (2, 2)
        assert cropped.pixel(0, 0) == RGBA(10, 10, 7, 255)
        assert cropped.pixel(1, 1) == RGBA(20, 20, 7, 255)

    def test_crop_is_clamped(self, gradient):
        assert ImageBuffer(gradient).crop(Region(2, 1, 10, 10)).size == (2, 2)

    def test_crop_outside_is_empty(self, gradient):
        cropped = ImageBuffer(gradient).crop(Region(10, 10, 2, 2))
        assert cropped.is_empty()

    def test_crop_with_negative_origin_keeps_overlap(self, gradient):
        cropped = ImageBuffer(gradient).crop(Region(-2, -1, 4, 3))

        assert cropped.size == (2, 2)
        assert cropped.pixel(1, 1) == RGBA(10, 10, 7, 255)

    def test_crop_with_negative_size_is_empty(self, gradient):
        assert ImageBuffer(gradient).crop(Region(2, 1, -3, 2)).is_empty()

    def test_crop_image_accepts_arrays(self, gradient):
        cropped = crop_image(gradient, Region(0, 0, 1, 1))
        assert cropped.pixel(0, 0) == RGBA(0, 0, 7, 255)


class TestBlank:
    def test_blank(self):
        image = ImageBuffer.blank(3, 2, RGBA(9, 8, 7))
        assert image.size == (3, 2)
        assert image.pixel(2, 1) == RGBA(9, 8, 7, 255)

    def test_equality(self):
        assert ImageBuffer.blank(2, 2) == ImageBuffer.blank(2, 2)
        assert ImageBuffer.blank(2, 2) != ImageBuffer.blank(2, 2, (1, 1, 1, 255))
