"""Model package."""

from .element import RGBA, ImageBuffer, MaskedPixel, Opaque, Region, Wildcard

__all__ = ["Region", "RGBA", "MaskedPixel", "Opaque", "Wildcard", "ImageBuffer"]
