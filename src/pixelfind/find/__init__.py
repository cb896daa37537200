"""Find package.

Template search over decoded pixel buffers.
"""

from .find_template import find_template
from .match_options import MatchOptions
from .matchers import ImageMatcher, PixelMatcher
from .pixel_comparison import (
    clamp_threshold,
    compare_color_channel,
    compare_colors,
    max_channel_difference,
)

__all__ = [
    "find_template",
    "MatchOptions",
    "ImageMatcher",
    "PixelMatcher",
    "clamp_threshold",
    "compare_color_channel",
    "compare_colors",
    "max_channel_difference",
]
