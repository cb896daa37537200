"""Tests for the per-pixel comparison rules."""

import numpy as np
import pytest

from pixelfind.find.pixel_comparison import (
    clamp_threshold,
    compare_color_channel,
    compare_colors,
    max_channel_difference,
    to_masked_pixel,
)
from pixelfind.model.element import RGBA, WILDCARD, ImageBuffer, Opaque


class TestCompareColorChannel:
    """Tests for compare_color_channel."""

    def test_identical_values_pass_at_exact_threshold(self):
        assert compare_color_channel(0, 0, 1.0)
        assert compare_color_channel(200, 200, 1.0)

    def test_any_difference_fails_at_exact_threshold(self):
        assert not compare_color_channel(100, 101, 1.0)

    def test_difference_of_50_passes_at_half_threshold(self):
        # 1 - 50/255 is about 0.80
        assert compare_color_channel(0, 50, 0.5)
        assert compare_color_channel(0, 50, 0.8)
        assert not compare_color_channel(0, 50, 0.81)

    def test_symmetric(self):
        for a in range(0, 256, 15):
            for b in range(0, 256, 17):
                for threshold in (0.1, 0.5, 0.9, 1.0):
                    assert compare_color_channel(a, b, threshold) == compare_color_channel(
                        b, a, threshold
                    )

    def test_numpy_uint8_channels_do_not_wrap(self):
        for a, b in [(0, 50), (50, 0), (0, 255), (200, 10)]:
            expected = compare_color_channel(a, b, 0.5)
            assert compare_color_channel(np.uint8(a), np.uint8(b), 0.5) == expected
            assert compare_color_channel(np.uint8(b), np.uint8(a), 0.5) == expected

    @pytest.mark.parametrize("below", [0.0, -1.0, 0.05, 0.0999])
    def test_thresholds_below_minimum_behave_like_minimum(self, below):
        for diff in range(256):
            assert compare_color_channel(0, diff, below) == compare_color_channel(0, diff, 0.1)

    @pytest.mark.parametrize("above", [1.0001, 1.5, 10.0])
    def test_thresholds_above_maximum_behave_like_exact(self, above):
        for diff in range(256):
            assert compare_color_channel(0, diff, above) == compare_color_channel(0, diff, 1.0)

    def test_minimum_threshold_tolerates_up_to_229(self):
        assert compare_color_channel(0, 229, 0.1)
        assert not compare_color_channel(0, 230, 0.1)


class TestClampThreshold:
    def test_clamps_to_range(self):
        assert clamp_threshold(-3) == 0.1
        assert clamp_threshold(0.5) == 0.5
        assert clamp_threshold(7) == 1.0


class TestMaxChannelDifference:
    """The tolerance table must agree with the per-channel rule."""

    @pytest.mark.parametrize("threshold", [0.1, 0.25, 0.5, 0.8, 0.95, 1.0])
    def test_agrees_with_channel_rule(self, threshold):
        limit = max_channel_difference(threshold)
        for diff in range(256):
            assert (diff <= limit) == compare_color_channel(0, diff, threshold)

    def test_exact_threshold_allows_no_difference(self):
        assert max_channel_difference(1.0) == 0


class TestCompareColors:
    """Tests for compare_colors."""

    def test_identical_opaque_pixels_match(self):
        assert compare_colors(RGBA(10, 20, 30), RGBA(10, 20, 30), 1.0)

    def test_each_channel_must_pass(self):
        template = RGBA(10, 20, 30)
        assert not compare_colors(template, RGBA(11, 20, 30), 1.0)
        assert not compare_colors(template, RGBA(10, 21, 30), 1.0)
        assert not compare_colors(template, RGBA(10, 20, 31), 1.0)

    def test_transparent_template_pixel_matches_anything(self):
        assert compare_colors(RGBA(0, 0, 0, 0), RGBA(255, 255, 255), 1.0)

    @pytest.mark.parametrize("alpha", [0, 1, 128, 254])
    def test_partial_alpha_collapses_to_wildcard(self, alpha):
        assert compare_colors(RGBA(0, 0, 0, alpha), RGBA(255, 255, 255), 1.0)

    def test_source_alpha_is_ignored(self):
        assert compare_colors(RGBA(10, 20, 30), RGBA(10, 20, 30, 0), 1.0)

    def test_accepts_masked_pixels_and_tuples(self):
        assert compare_colors(Opaque(1, 2, 3), (1, 2, 3), 1.0)
        assert compare_colors(WILDCARD, (9, 9, 9), 1.0)
        assert compare_colors((1, 2, 3, 255), (1, 2, 3, 255), 1.0)
        assert compare_colors((1, 2, 3, 100), (200, 200, 200), 1.0)

    def test_threshold_loosens_comparison(self):
        template = RGBA(100, 100, 100)
        source = RGBA(100, 100, 150)
        assert not compare_colors(template, source, 1.0)
        assert compare_colors(template, source, 0.5)


class TestToMaskedPixel:
    def test_rgba_conversion(self):
        assert to_masked_pixel(RGBA(1, 2, 3, 255)) == Opaque(1, 2, 3)
        assert to_masked_pixel(RGBA(1, 2, 3, 254)) is WILDCARD

    def test_rejects_wrong_channel_count(self):
        with pytest.raises(ValueError):
            to_masked_pixel((1, 2))


class TestCompareRawBufferPixels:
    """Pixels read straight from an ImageBuffer array compare like RGBA pixels."""

    def test_raw_rows_match_rgba_comparison(self):
        template = ImageBuffer.blank(1, 1, (100, 100, 100, 255))
        source = ImageBuffer.blank(1, 1, (100, 100, 150, 255))

        raw = compare_colors(tuple(template.pixels[0, 0]), tuple(source.pixels[0, 0]), 0.5)

        assert raw is True
        assert raw == compare_colors(template.pixel(0, 0), source.pixel(0, 0), 0.5)

    def test_raw_rows_reject_distant_colors(self):
        template = ImageBuffer.blank(1, 1, (0, 0, 0, 255))
        source = ImageBuffer.blank(1, 1, (0, 0, 255, 255))

        assert compare_colors(tuple(template.pixels[0, 0]), tuple(source.pixels[0, 0]), 0.5) is False

    def test_raw_transparent_row_is_wildcard(self):
        template = ImageBuffer.blank(1, 1, (0, 0, 0, 10))

        assert to_masked_pixel(tuple(template.pixels[0, 0])) is WILDCARD
