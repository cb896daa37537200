"""Top-level template search."""

from ..model.element import ImageLike, Region, as_image_buffer
from .match_options import MatchOptions
from .matchers import PixelMatcher

RegionLike = Region | tuple[int, int, int, int]


def _as_region(region: RegionLike | None) -> Region | None:
    if region is None or isinstance(region, Region):
        return region
    return Region(*region)


def find_template(
    source: ImageLike,
    template: ImageLike,
    search_region: RegionLike | None = None,
    threshold: float | None = None,
    *,
    options: MatchOptions | None = None,
) -> Region | None:
    """Find a template image inside a source image.

    Per pixel searching, no magic. The scan is fast enough for simple
    automation; limiting ``search_region`` and using distinctive templates
    make it faster.

    Args:
        source: Image to search in (eg. a screenshot)
        template: Image to search for. Pixels with alpha below 255 are
            ignored during comparison.
        search_region: Area of the source to scan, as a Region or an
            (x, y, width, height) tuple. Defaults to the whole source.
        threshold: Per-channel similarity threshold (0.1-1.0). Overrides
            the threshold in ``options``.
        options: Matching options. Defaults to the configured settings.

    Returns:
        Region holding the position and size of the found template, or None
        if nothing was found

    Raises:
        ImageProcessingError: If source or template cannot be decoded

    Example:
        found = find_template("screen.png", "button.png", threshold=0.9)
        if found:
            click(found.x + found.width // 2, found.y + found.height // 2)
    """
    options = options or MatchOptions.from_settings()
    if threshold is not None:
        options = options.with_threshold(threshold)

    return PixelMatcher(options).find(
        as_image_buffer(source),
        as_image_buffer(template),
        _as_region(search_region),
    )
