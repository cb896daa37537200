"""Immutable per-call matching configuration."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..config import PixelfindSettings, get_settings
from .pixel_comparison import clamp_threshold


@dataclass(frozen=True)
class MatchOptions:
    """Options for a single template search.

    Attributes:
        threshold: Per-channel similarity threshold. 1.0 requires exact
            channel values; values outside [0.1, 1.0] are clamped when
            pixels are compared.
        include_last_position: Also scan the last row and column where the
            template still fits. Off by default, which keeps the historical
            scan bound that stops two positions short of the edge.
    """

    threshold: float = 1.0
    include_last_position: bool = False

    @classmethod
    def from_settings(cls, settings: PixelfindSettings | None = None) -> MatchOptions:
        """Build options from configured defaults."""
        settings = settings or get_settings()
        return cls(
            threshold=settings.default_threshold,
            include_last_position=settings.include_last_position,
        )

    @property
    def effective_threshold(self) -> float:
        """Threshold after clamping to [0.1, 1.0]."""
        return clamp_threshold(self.threshold)

    def with_threshold(self, threshold: float) -> MatchOptions:
        return replace(self, threshold=threshold)

    @property
    def scan_margin(self) -> int:
        """Positions left unscanned before the last fitting one, per axis.

        The candidate range is ``[start, start + extent - template + 1 - margin)``.
        """
        return 0 if self.include_last_position else 2
