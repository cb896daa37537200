"""Region.

Represents a rectangular area of an image.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Region:
    """Represents a rectangular area of an image.

    A Region defines a rectangle using x,y coordinates for the top-left
    corner and width,height dimensions. Regions are used both to limit the
    part of a source image that is scanned and to describe where a
    template was found.

    Regions are immutable; every geometric operation returns a new Region.
    """

    x: int = 0
    """X coordinate of top-left corner."""

    y: int = 0
    """Y coordinate of top-left corner."""

    width: int = 0
    """Width of the region."""

    height: int = 0
    """Height of the region."""

    @classmethod
    def from_bounds(cls, x1: int, y1: int, x2: int, y2: int) -> Region:
        """Create region from its top-left and bottom-right (exclusive) corners.

        Args:
            x1: Left edge
            y1: Top edge
            x2: Right edge (exclusive)
            y2: Bottom edge (exclusive)

        Returns:
            New region
        """
        return cls(x=x1, y=y1, width=x2 - x1, height=y2 - y1)

    @property
    def right(self) -> int:
        """Get the right edge x-coordinate (exclusive)."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Get the bottom edge y-coordinate (exclusive)."""
        return self.y + self.height

    def contains_point(self, x: int, y: int) -> bool:
        """Check if a point lies inside this region.

        Args:
            x: X coordinate
            y: Y coordinate

        Returns:
            True if the point is inside
        """
        return self.x <= x < self.right and self.y <= y < self.bottom

    def overlaps(self, other: Region) -> bool:
        """Check if this region shares at least one pixel with another."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def intersection(self, other: Region) -> Region | None:
        """Get intersection of two regions.

        Args:
            other: Other region

        Returns:
            Intersection region or None if no overlap
        """
        if not self.overlaps(other):
            return None

        return Region.from_bounds(
            max(self.x, other.x),
            max(self.y, other.y),
            min(self.right, other.right),
            min(self.bottom, other.bottom),
        )

    def clamp_to(self, width: int, height: int) -> Region:
        """Clamp this region to an image of the given size.

        Width and height shrink so the region never extends past the right
        or bottom edge; x and y are kept. A negative origin is moved to 0
        and the size reduced by the same amount. A region starting outside
        the image clamps to zero width or height.

        Args:
            width: Image width
            height: Image height

        Returns:
            Clamped region
        """
        x = max(self.x, 0)
        y = max(self.y, 0)
        clamped_width = max(0, min(self.right, width) - x)
        clamped_height = max(0, min(self.bottom, height) - y)
        return Region(x=x, y=y, width=clamped_width, height=clamped_height)

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Convert to an (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    def __str__(self) -> str:
        return f"Region({self.x},{self.y},{self.width}x{self.height})"
