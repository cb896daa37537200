"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from pixelfind.config import reset_settings
from pixelfind.model.element import ImageBuffer

RED = (255, 0, 0, 255)
GRAY = (128, 128, 128, 255)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Give every test fresh settings unaffected by the developer's environment."""
    for name in (
        "PIXELFIND_DEFAULT_THRESHOLD",
        "PIXELFIND_INCLUDE_LAST_POSITION",
        "PIXELFIND_DEBUG_MODE",
        "PIXELFIND_LOG_LEVEL",
        "PIXELFIND_LOG_FILE",
        "PIXELFIND_STRUCTURED_LOGGING",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PIXELFIND_ENV", "test")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def make_image():
    """Factory for solid-color RGBA images."""

    def _make(width: int, height: int, color=GRAY) -> np.ndarray:
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = color
        return pixels

    return _make


@pytest.fixture
def red_square_scene(make_image):
    """20x20 gray source with a 3x3 red square at (5, 5), and an all-red 3x3 template."""
    source = make_image(20, 20)
    source[5:8, 5:8] = RED
    template = make_image(3, 3, RED)
    return ImageBuffer(source, name="scene"), ImageBuffer(template, name="red-square")


@pytest.fixture
def noise_image():
    """Factory for reproducible random opaque images."""

    def _make(width: int, height: int, seed: int = 0) -> np.ndarray:
        rng = np.random.default_rng(seed)
        pixels = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
        pixels[:, :, 3] = 255
        return pixels

    return _make
