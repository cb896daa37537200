"""Per-pixel color comparison rules.

A template pixel matches a source pixel when every RGB channel is close
enough under the similarity threshold, or when the template pixel is a
wildcard (alpha below 255).
"""

from functools import lru_cache

from ..model.element.color import RGBA, WILDCARD, MaskedPixel, Opaque, Wildcard, round_alpha

MIN_THRESHOLD = 0.1
MAX_THRESHOLD = 1.0
CHANNEL_MAX = 255.0

PixelLike = RGBA | Opaque | Wildcard | tuple[int, ...]


def clamp_threshold(threshold: float) -> float:
    """Clamp a similarity threshold to [0.1, 1.0]."""
    return max(MIN_THRESHOLD, min(MAX_THRESHOLD, threshold))


def channel_similarity(channel1: int, channel2: int) -> float:
    """Similarity of two channel values, 1.0 for identical and 0.0 for 0 vs 255."""
    return 1 - abs(int(channel1) - int(channel2)) / CHANNEL_MAX


def compare_color_channel(channel1: int, channel2: int, threshold: float) -> bool:
    """Check whether two channel values are similar enough.

    Args:
        channel1: First channel value (0-255)
        channel2: Second channel value (0-255)
        threshold: Required similarity, clamped to [0.1, 1.0]

    Returns:
        True if ``1 - |channel1 - channel2| / 255 >= threshold``
    """
    return channel_similarity(channel1, channel2) >= clamp_threshold(threshold)


@lru_cache(maxsize=256)
def max_channel_difference(threshold: float) -> int:
    """Largest channel difference that still passes ``compare_color_channel``.

    Lets vectorized code compare ``|a - b| <= max_channel_difference(t)``
    with exactly the same outcome as the per-channel rule.
    """
    return max(d for d in range(256) if compare_color_channel(0, d, threshold))


def to_masked_pixel(pixel: PixelLike) -> MaskedPixel:
    """Convert a template pixel to its matching role.

    Args:
        pixel: RGBA, MaskedPixel, (r, g, b) tuple (opaque) or (r, g, b, a) tuple

    Returns:
        Opaque or WILDCARD after collapsing alpha to 0/255
    """
    if isinstance(pixel, (Opaque, Wildcard)):
        return pixel
    if isinstance(pixel, RGBA):
        return pixel.to_masked()
    if len(pixel) == 3:
        return Opaque(*(int(channel) for channel in pixel))
    if len(pixel) == 4:
        red, green, blue, alpha = pixel
        if round_alpha(alpha) == 0:
            return WILDCARD
        return Opaque(int(red), int(green), int(blue))
    raise ValueError(f"Expected 3 or 4 channels, got {len(pixel)}")


def _rgb(pixel: PixelLike) -> tuple[int, int, int]:
    if isinstance(pixel, (RGBA, Opaque)):
        return (pixel.red, pixel.green, pixel.blue)
    if isinstance(pixel, Wildcard):
        raise ValueError("A wildcard has no color to compare against")
    return (int(pixel[0]), int(pixel[1]), int(pixel[2]))


def compare_colors(template_pixel: PixelLike, source_pixel: PixelLike, threshold: float) -> bool:
    """Compare a template pixel against a source pixel.

    The template pixel's alpha is collapsed first: anything other than 255
    makes it a wildcard that matches any source color. Otherwise red, green
    and blue must each pass ``compare_color_channel``. The source pixel's
    alpha is ignored.

    Args:
        template_pixel: Pixel from the template
        source_pixel: Pixel from the source image under it
        threshold: Required per-channel similarity

    Returns:
        True if the pixels match
    """
    masked = to_masked_pixel(template_pixel)
    if isinstance(masked, Wildcard):
        return True

    red, green, blue = _rgb(source_pixel)
    return (
        compare_color_channel(masked.red, red, threshold)
        and compare_color_channel(masked.green, green, threshold)
        and compare_color_channel(masked.blue, blue, threshold)
    )
