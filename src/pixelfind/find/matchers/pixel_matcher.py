"""Exact and near-exact per-pixel template matching.

Every template pixel is compared against the source pixel beneath it. No
correlation scores, no scaling; just a raster scan that returns the first
position where all opaque template pixels are close enough to the source.
Transparent template pixels are wildcards.

Making the template as distinctive as possible and limiting the search
region are the best ways to keep a scan fast.
"""

import time
from dataclasses import dataclass
from typing import Any

import numpy as np

from ...logging import PerformanceLogger, get_logger
from ...model.element import ImageBuffer, Region
from ...model.element.color import OPAQUE_ALPHA
from ..match_options import MatchOptions
from ..pixel_comparison import max_channel_difference
from .image_matcher import ImageMatcher


@dataclass
class ScanStats:
    """Work done by one scan, reported in the scan log."""

    positions_examined: int = 0
    """Candidate positions covered in raster order, up to and including a match."""

    candidates_verified: int = 0
    """Positions whose first opaque pixel matched and were checked in full."""

    pixels_compared: int = 0
    """Opaque template pixels compared, counting the first-pixel check at each examined position."""


@dataclass(frozen=True)
class _TemplateRow:
    """One template row with at least one opaque pixel."""

    offset: int
    rgb: np.ndarray[Any, Any]
    opaque: np.ndarray[Any, Any]
    opaque_count: int


class _CompiledTemplate:
    """Template split into comparable colors and a wildcard mask."""

    def __init__(self, template: ImageBuffer) -> None:
        pixels = template.pixels
        self.width = template.width
        self.height = template.height
        self.rgb = pixels[:, :, :3].astype(np.int16)
        self.opaque = pixels[:, :, 3] == OPAQUE_ALPHA

        self.rows = [
            _TemplateRow(
                offset=ty,
                rgb=self.rgb[ty],
                opaque=self.opaque[ty],
                opaque_count=int(np.count_nonzero(self.opaque[ty])),
            )
            for ty in range(self.height)
            if self.opaque[ty].any()
        ]

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def is_all_wildcard(self) -> bool:
        return not self.rows

    def anchor(self) -> tuple[int, int]:
        """(x, y) of the first opaque pixel in raster order."""
        row = self.rows[0]
        return int(np.argmax(row.opaque)), row.offset


class PixelMatcher(ImageMatcher):
    """Template matcher comparing pixels one channel at a time.

    Candidate positions are visited top to bottom, left to right. A
    candidate is rejected at its first failing pixel and the first candidate
    where every opaque template pixel passes is returned.

    Candidates are pre-filtered on the template's first opaque pixel and
    then verified row by row, which gives the same result as comparing
    pixel by pixel.

    Attributes:
        options: Matching options used for every call
    """

    def __init__(
        self,
        options: MatchOptions | None = None,
        performance_logger: PerformanceLogger | None = None,
    ) -> None:
        """Initialize pixel matcher.

        Args:
            options: Matching options. Defaults to an exact match.
            performance_logger: Optional sink for scan timings
        """
        self.options = options or MatchOptions()
        self.performance_logger = performance_logger

    def find(
        self,
        source: ImageBuffer,
        template: ImageBuffer,
        search_region: Region | None = None,
    ) -> Region | None:
        """Find the first position where the template matches the source.

        Args:
            source: Image to search in
            template: Image to search for; alpha below 255 marks wildcards
            search_region: Part of the source to scan, clamped to the source

        Returns:
            Region(x, y, template.width, template.height) for the first
            match in raster order, or None
        """
        start = time.perf_counter()
        area = (search_region or source.bounds).clamp_to(source.width, source.height)
        compiled = _CompiledTemplate(template)

        stats = ScanStats()
        result = self._scan(source, compiled, area, stats)

        duration = time.perf_counter() - start
        get_logger(__name__).debug(
            "template_scan_finished",
            source=source.name,
            template=template.name,
            search_region=area.to_tuple(),
            threshold=self.options.effective_threshold,
            positions_examined=stats.positions_examined,
            candidates_verified=stats.candidates_verified,
            pixels_compared=stats.pixels_compared,
            found=result.to_tuple() if result else None,
        )
        if self.performance_logger is not None:
            self.performance_logger.log_timing(
                "find_template", duration, found=result is not None
            )
        return result

    def candidate_ranges(self, area: Region, width: int, height: int) -> tuple[range, range]:
        """Top-left positions scanned for a template of the given size.

        Args:
            area: Search region, already clamped to the source
            width: Template width
            height: Template height

        Returns:
            (x positions, y positions)
        """
        margin = self.options.scan_margin
        xs = range(area.x, area.right - width + 1 - margin)
        ys = range(area.y, area.bottom - height + 1 - margin)
        return xs, ys

    def _scan(
        self,
        source: ImageBuffer,
        template: _CompiledTemplate,
        area: Region,
        stats: ScanStats,
    ) -> Region | None:
        if template.is_empty:
            return None

        xs, ys = self.candidate_ranges(area, template.width, template.height)
        if not xs or not ys:
            return None

        if template.is_all_wildcard:
            stats.positions_examined = 1
            return Region(xs.start, ys.start, template.width, template.height)

        tolerance = max_channel_difference(self.options.effective_threshold)
        source_rgb = source.pixels[
            area.y : area.bottom, area.x : area.right, :3
        ].astype(np.int16)

        anchor_x, anchor_y = template.anchor()
        anchor_color = template.rgb[anchor_y, anchor_x]
        plane = source_rgb[
            anchor_y : anchor_y + len(ys), anchor_x : anchor_x + len(xs)
        ]
        anchor_hits = np.all(np.abs(plane - anchor_color) <= tolerance, axis=2)

        # argwhere yields (row, column) pairs in raster order
        for cy, cx in np.argwhere(anchor_hits):
            cx, cy = int(cx), int(cy)
            stats.candidates_verified += 1
            matched, compared = self._matches_at(source_rgb, template, cx, cy, tolerance)
            stats.pixels_compared += compared
            if matched:
                stats.positions_examined = cy * len(xs) + cx + 1
                stats.pixels_compared += stats.positions_examined
                return Region(area.x + cx, area.y + cy, template.width, template.height)

        stats.positions_examined = len(xs) * len(ys)
        stats.pixels_compared += stats.positions_examined
        return None

    @staticmethod
    def _matches_at(
        source_rgb: np.ndarray[Any, Any],
        template: _CompiledTemplate,
        x: int,
        y: int,
        tolerance: int,
    ) -> tuple[bool, int]:
        """Check every opaque template pixel at one candidate, stopping at the first miss.

        Returns:
            (matched, number of opaque pixels compared)
        """
        compared = 0
        for row in template.rows:
            window = source_rgb[y + row.offset, x : x + template.width]
            close = np.all(np.abs(window - row.rgb) <= tolerance, axis=1)
            passed = close | ~row.opaque
            if not passed.all():
                first_miss = int(np.argmin(passed))
                compared += int(np.count_nonzero(row.opaque[: first_miss + 1]))
                return False, compared
            compared += row.opaque_count
        return True, compared
