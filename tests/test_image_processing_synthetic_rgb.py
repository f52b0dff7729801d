# -*- coding: utf-8 -*-
"""
Tests for grdscale.image_processing.synthetic_rgb - LUT compositor.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

Created
-------
2026-10-19
"""

import numpy as np
import pytest

from grdscale.exceptions import (
    ConfigurationError,
    ShapeMismatchError,
    ValidationError,
)
from grdscale.image_processing.synthetic_rgb import (
    RgbCompositeConfig,
    build_rgb_luts,
    create_synthetic_rgb,
)


# ---------------------------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------------------------

class TestBuildRgbLuts:
    def test_sizes_and_dtypes(self):
        luts = build_rgb_luts()
        assert luts.red.shape == (256,) and luts.green.shape == (256,)
        assert luts.blue.shape == (65536,)
        for table in (luts.red, luts.green, luts.blue):
            assert table.dtype == np.uint8

    def test_red_green_closed_form(self):
        luts = build_rgb_luts()
        x = np.arange(256) / 255.0
        np.testing.assert_array_equal(luts.red, np.rint(255 * x ** 0.7))
        np.testing.assert_array_equal(luts.green, np.rint(255 * x ** 0.9))
        assert luts.red[0] == 0 and luts.red[255] == 255

    def test_blue_ratio_one(self):
        luts = build_rgb_luts()
        assert luts.blue[255 * 256 + 255] == 61
        assert luts.blue[100 * 256 + 100] == 61

    def test_blue_fallback_column(self):
        luts = build_rgb_luts()
        assert not luts.blue[np.arange(256) * 256].any()

    def test_custom_fallback(self):
        luts = build_rgb_luts(RgbCompositeConfig(blue_fallback=200))
        assert luts.blue[37 * 256] == 200

    def test_blue_saturates(self):
        luts = build_rgb_luts(RgbCompositeConfig(blue_scale=1.0))
        assert luts.blue[255 * 256 + 1] == 255

    def test_tables_read_only(self):
        luts = build_rgb_luts()
        with pytest.raises(ValueError):
            luts.red[0] = 1


# ---------------------------------------------------------------------------
# create_synthetic_rgb
# ---------------------------------------------------------------------------

class TestCreateSyntheticRgb:
    def test_saturated_bands(self):
        full = np.full((2, 3), 255, dtype=np.uint8)
        rgb = create_synthetic_rgb(full, full)
        assert rgb.shape == (2, 3, 3)
        assert rgb.dtype == np.uint8
        np.testing.assert_array_equal(rgb[0, 0], [255, 255, 61])

    def test_zero_green_uses_fallback(self):
        band1 = np.full((1, 2), 200, dtype=np.uint8)
        band2 = np.zeros((1, 2), dtype=np.uint8)
        rgb = create_synthetic_rgb(band1, band2)
        np.testing.assert_array_equal(rgb[..., 2], 0)
        np.testing.assert_array_equal(rgb[..., 1], 0)

    def test_matches_direct_formula(self):
        rng = np.random.default_rng(21)
        band1 = rng.integers(0, 256, size=(17, 19), dtype=np.uint8)
        band2 = rng.integers(1, 256, size=(17, 19), dtype=np.uint8)
        rgb = create_synthetic_rgb(band1, band2)

        r = np.rint(255 * (band1 / 255.0) ** 0.7)
        g = np.rint(255 * (band2 / 255.0) ** 0.9)
        b = np.rint(np.clip(255 * 0.24 * (r / g) ** 0.1, 0, 255))
        np.testing.assert_array_equal(rgb[..., 0], r)
        np.testing.assert_array_equal(rgb[..., 1], g)
        np.testing.assert_array_equal(rgb[..., 2], b)

    def test_shape_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            create_synthetic_rgb(np.zeros((2, 2), dtype=np.uint8),
                                 np.zeros((2, 3), dtype=np.uint8))

    def test_rejects_uint16(self):
        with pytest.raises(ValidationError, match="uint8"):
            create_synthetic_rgb(np.zeros((2, 2), dtype=np.uint16),
                                 np.zeros((2, 2), dtype=np.uint16))


class TestRgbCompositeConfig:
    def test_defaults(self):
        config = RgbCompositeConfig()
        assert (config.red_gamma, config.green_gamma, config.blue_gamma,
                config.blue_scale, config.blue_fallback) == (0.7, 0.9, 0.1,
                                                             0.24, 0)

    @pytest.mark.parametrize("kwargs", [
        {'red_gamma': 0.0},
        {'blue_gamma': -1.0},
        {'blue_scale': 2.0},
        {'blue_fallback': 300},
        {'blue_fallback': 1.5},
        {'red_gamma': float('nan')},
        {'green_gamma': float('inf')},
        {'blue_scale': float('nan')},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigurationError):
            RgbCompositeConfig(**kwargs)

    def test_to_dict(self):
        assert RgbCompositeConfig().to_dict()['blue_scale'] == 0.24
