"""Image matching components.

- ImageMatcher: Abstract base interface for all matchers
- PixelMatcher: Per-pixel template matching with wildcard transparency
"""

from .image_matcher import ImageMatcher
from .pixel_matcher import PixelMatcher

__all__ = ["ImageMatcher", "PixelMatcher"]
