"""Model element package.

Value types shared by the matcher: regions, pixels and image buffers.
"""

from .color import RGBA, WILDCARD, MaskedPixel, Opaque, Wildcard, round_alpha
from .image import ImageBuffer, ImageLike, as_image_buffer, crop_image
from .region import Region

__all__ = [
    "Region",
    "RGBA",
    "MaskedPixel",
    "Opaque",
    "Wildcard",
    "WILDCARD",
    "round_alpha",
    "ImageBuffer",
    "ImageLike",
    "as_image_buffer",
    "crop_image",
]
