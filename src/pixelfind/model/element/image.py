"""ImageBuffer.

Decoded pixel data used by the matcher.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from ...exceptions import ImageProcessingError
from .color import RGBA, MaskedPixel
from .region import Region

logger = logging.getLogger(__name__)

CHANNELS = 4


class ImageBuffer:
    """Immutable grid of RGBA pixels.

    Pixels live in one contiguous, read-only numpy ``uint8`` array of shape
    ``(height, width, 4)`` in row-major order with the origin at the top
    left. Channel order is red, green, blue, alpha.

    ImageBuffer is the bridge between the matcher and the outside world:
    Pillow images, files, encoded bytes and numpy arrays are all decoded
    into this one layout before a match runs.
    """

    __slots__ = ("_pixels", "name")

    def __init__(self, pixels: np.ndarray[Any, Any], name: str | None = None) -> None:
        """Create a buffer from an RGBA array.

        Args:
            pixels: ``uint8`` array of shape (height, width, 4). The data is
                copied, so later changes to ``pixels`` do not leak in.
            name: Optional name used in logs

        Raises:
            ImageProcessingError: If the array is not an RGBA uint8 grid
        """
        if pixels.dtype != np.uint8 or pixels.ndim != 3 or pixels.shape[2] != CHANNELS:
            raise ImageProcessingError(
                f"Expected uint8 array of shape (height, width, 4), "
                f"got {pixels.dtype} array of shape {pixels.shape}"
            )
        data = np.array(pixels, dtype=np.uint8, order="C", copy=True)
        data.setflags(write=False)
        self._pixels = data
        self.name = name

    @classmethod
    def from_numpy(cls, array: np.ndarray[Any, Any], name: str | None = None) -> ImageBuffer:
        """Create a buffer from a numpy array.

        Accepted layouts:
        - (height, width): grayscale, decoded as opaque gray pixels
        - (height, width, 3): RGB, decoded as opaque pixels
        - (height, width, 4): RGBA

        Args:
            array: Integer array with values in 0-255
            name: Optional name

        Returns:
            ImageBuffer instance

        Raises:
            ImageProcessingError: If the shape or values are not a pixel grid
        """
        if not np.issubdtype(array.dtype, np.integer):
            raise ImageProcessingError(f"Expected an integer pixel array, got {array.dtype}")
        if array.size and (array.min() < 0 or array.max() > 255):
            raise ImageProcessingError("Pixel values must be in 0-255")

        data = array.astype(np.uint8, copy=False)

        if data.ndim == 2:
            data = np.repeat(data[:, :, np.newaxis], 3, axis=2)
        if data.ndim != 3 or data.shape[2] not in (3, CHANNELS):
            raise ImageProcessingError(f"Unsupported pixel array shape: {array.shape}")
        if data.shape[2] == 3:
            alpha = np.full(data.shape[:2] + (1,), 255, dtype=np.uint8)
            data = np.concatenate([data, alpha], axis=2)

        return cls(data, name=name)

    @classmethod
    def from_pil(cls, pil_image: PILImage.Image, name: str | None = None) -> ImageBuffer:
        """Create a buffer from a Pillow image.

        Args:
            pil_image: Pillow image in any mode
            name: Optional name

        Returns:
            ImageBuffer instance
        """
        if pil_image.mode != "RGBA":
            pil_image = pil_image.convert("RGBA")
        return cls(np.asarray(pil_image, dtype=np.uint8), name=name)

    @classmethod
    def from_file(cls, filename: str | Path) -> ImageBuffer:
        """Decode an image file.

        Args:
            filename: Path to image file

        Returns:
            ImageBuffer named after the file's stem

        Raises:
            ImageProcessingError: If the file cannot be read or decoded
        """
        path = Path(filename)
        try:
            with PILImage.open(path) as pil_image:
                buffer = cls.from_pil(pil_image, name=path.stem)
        except (OSError, UnidentifiedImageError) as e:
            logger.error(f"Failed to load image from {path}: {e}")
            raise ImageProcessingError(
                "Failed to load image", cause=e, image_path=str(path)
            ) from e

        logger.debug(f"Loaded image {path} ({buffer.width}x{buffer.height})")
        return buffer

    @classmethod
    def from_bytes(cls, data: bytes, name: str | None = None) -> ImageBuffer:
        """Decode an encoded image (PNG, BMP, ...) held in memory.

        Raises:
            ImageProcessingError: If the bytes are not a recognised image
        """
        try:
            with PILImage.open(BytesIO(data)) as pil_image:
                return cls.from_pil(pil_image, name=name)
        except (OSError, UnidentifiedImageError) as e:
            raise ImageProcessingError("Failed to decode image bytes", cause=e) from e

    @classmethod
    def blank(
        cls,
        width: int,
        height: int,
        color: RGBA | tuple[int, int, int, int] = (0, 0, 0, 255),
        name: str | None = None,
    ) -> ImageBuffer:
        """Create a buffer filled with one color."""
        if isinstance(color, RGBA):
            color = color.to_tuple()
        pixels = np.empty((max(0, height), max(0, width), CHANNELS), dtype=np.uint8)
        pixels[:, :] = color
        return cls(pixels, name=name)

    @property
    def pixels(self) -> np.ndarray[Any, Any]:
        """Read-only (height, width, 4) pixel array."""
        return self._pixels

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return (self.width, self.height)

    @property
    def bounds(self) -> Region:
        """Region covering the whole image."""
        return Region(0, 0, self.width, self.height)

    def is_empty(self) -> bool:
        """Check if the image has no pixels."""
        return self.width == 0 or self.height == 0

    def pixel(self, x: int, y: int) -> RGBA:
        """Get the pixel at (x, y).

        Raises:
            IndexError: If the coordinates are outside the image
        """
        if not self.bounds.contains_point(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        r, g, b, a = self._pixels[y, x]
        return RGBA(int(r), int(g), int(b), int(a))

    def masked_pixel(self, x: int, y: int) -> MaskedPixel:
        """Get the pixel at (x, y) in its matching role (Opaque or Wildcard)."""
        return self.pixel(x, y).to_masked()

    def crop(self, region: Region) -> ImageBuffer:
        """Copy the part of this image covered by a region.

        Only the part of the region inside the image is kept; a region that
        does not overlap the image yields a 0x0 buffer.

        Args:
            region: Area to keep

        Returns:
            New ImageBuffer
        """
        area = region.intersection(self.bounds)
        if area is None:
            return ImageBuffer(np.empty((0, 0, CHANNELS), dtype=np.uint8), name=self.name)
        return ImageBuffer(
            self._pixels[area.y : area.bottom, area.x : area.right],
            name=self.name,
        )

    def to_pil(self) -> PILImage.Image:
        """Convert to a Pillow RGBA image."""
        return PILImage.fromarray(self._pixels)

    def save(self, filename: str | Path) -> None:
        """Save image to file.

        Raises:
            ImageProcessingError: If the image cannot be written
        """
        try:
            self.to_pil().save(filename)
        except (OSError, ValueError) as e:
            raise ImageProcessingError(
                "Failed to save image", cause=e, image_path=str(filename)
            ) from e
        logger.debug(f"Saved image to {filename}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageBuffer):
            return NotImplemented
        return bool(np.array_equal(self._pixels, other._pixels))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ImageBuffer(name={self.name!r}, width={self.width}, height={self.height})"


ImageLike = ImageBuffer | PILImage.Image | np.ndarray | str | Path
"""Anything ``as_image_buffer`` can decode."""


def as_image_buffer(image: ImageLike) -> ImageBuffer:
    """Decode any supported image representation into an ImageBuffer.

    Args:
        image: ImageBuffer, Pillow image, numpy array or path to an image file

    Returns:
        ImageBuffer (the same object when one is passed in)

    Raises:
        ImageProcessingError: If the input cannot be decoded
    """
    if isinstance(image, ImageBuffer):
        return image
    if isinstance(image, PILImage.Image):
        return ImageBuffer.from_pil(image)
    if isinstance(image, np.ndarray):
        return ImageBuffer.from_numpy(image)
    if isinstance(image, (str, Path)):
        return ImageBuffer.from_file(image)
    raise ImageProcessingError(f"Unsupported image type: {type(image).__name__}")


def crop_image(image: ImageLike, region: Region) -> ImageBuffer:
    """Crop any supported image representation to a region.

    Args:
        image: Image to crop
        region: Rectangle of the new image

    Returns:
        Cropped ImageBuffer
    """
    return as_image_buffer(image).crop(region)
