"""Pixel color models.

``RGBA`` is a decoded pixel as it appears in an image. ``MaskedPixel`` is
how a template pixel takes part in matching: either an ``Opaque`` color
that must be close to the source pixel, or a ``Wildcard`` that matches
anything.
"""

from dataclasses import dataclass
from typing import TypeAlias

OPAQUE_ALPHA = 255
"""The only alpha value that counts as opaque."""


def round_alpha(alpha: int) -> int:
    """Collapse an alpha value to 255 (opaque) or 0 (transparent)."""
    return OPAQUE_ALPHA if alpha == OPAQUE_ALPHA else 0


@dataclass(frozen=True)
class Opaque:
    """Template pixel that must match the source color."""

    red: int
    green: int
    blue: int


@dataclass(frozen=True)
class Wildcard:
    """Template pixel ignored during comparison."""


WILDCARD = Wildcard()

MaskedPixel: TypeAlias = Opaque | Wildcard


@dataclass(frozen=True)
class RGBA:
    """RGBA color representation.

    Each component ranges from 0 to 255.
    """

    red: int = 0
    """Red component (0-255)."""

    green: int = 0
    """Green component (0-255)."""

    blue: int = 0
    """Blue component (0-255)."""

    alpha: int = OPAQUE_ALPHA
    """Alpha component (0-255). Only 255 is treated as opaque when matching."""

    def __post_init__(self) -> None:
        """Validate channel values."""
        for name in ("red", "green", "blue", "alpha"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be in 0-255, got {value}")

    def to_tuple(self) -> tuple[int, int, int, int]:
        return (self.red, self.green, self.blue, self.alpha)

    @property
    def is_opaque(self) -> bool:
        return round_alpha(self.alpha) == OPAQUE_ALPHA

    def to_masked(self) -> MaskedPixel:
        """Convert to the pixel's role in matching.

        Returns:
            Opaque with this pixel's color, or WILDCARD for any alpha below 255
        """
        if not self.is_opaque:
            return WILDCARD
        return Opaque(self.red, self.green, self.blue)

    def __str__(self) -> str:
        return f"RGBA({self.red},{self.green},{self.blue},{self.alpha})"
