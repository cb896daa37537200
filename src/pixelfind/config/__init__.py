"""Configuration package.

Usage:
    from pixelfind.config import get_settings

    settings = get_settings()
    settings.default_threshold
"""

from .settings import PixelfindSettings, TestSettings, get_settings, reset_settings

__all__ = [
    "PixelfindSettings",
    "TestSettings",
    "get_settings",
    "reset_settings",
]
