"""pixelfind: per-pixel template matching for simple UI automation.

Locates a small template image inside a larger source image and returns the
first matching rectangle. Transparent template pixels act as wildcards.

Usage:
    from pixelfind import find_template

    found = find_template("screenshot.png", "ok_button.png", threshold=0.95)
"""

from .base_exceptions import PixelfindException
from .config import PixelfindSettings, get_settings
from .exceptions import ConfigurationError, ImageProcessingError
from .find import (
    ImageMatcher,
    MatchOptions,
    PixelMatcher,
    compare_color_channel,
    compare_colors,
    find_template,
)
from .model.element import (
    RGBA,
    WILDCARD,
    ImageBuffer,
    MaskedPixel,
    Opaque,
    Region,
    Wildcard,
    crop_image,
)

__version__ = "0.1.0"

__all__ = [
    "find_template",
    "compare_colors",
    "compare_color_channel",
    "MatchOptions",
    "ImageMatcher",
    "PixelMatcher",
    "ImageBuffer",
    "crop_image",
    "Region",
    "RGBA",
    "MaskedPixel",
    "Opaque",
    "Wildcard",
    "WILDCARD",
    "PixelfindSettings",
    "get_settings",
    "PixelfindException",
    "ImageProcessingError",
    "ConfigurationError",
]
