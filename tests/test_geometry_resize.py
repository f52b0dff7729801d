# -*- coding: utf-8 -*-
"""
Tests for grdscale.geometry.resize - long-side resampling.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

Created
-------
2026-10-19
"""

import logging

import numpy as np
import pytest

from grdscale.exceptions import ValidationError
from grdscale.geometry import (
    GeometryMeta,
    calculate_resize_dimensions,
    resize_image,
)
from grdscale.vocabulary import ResampleFilter


# ---------------------------------------------------------------------------
# calculate_resize_dimensions
# ---------------------------------------------------------------------------

class TestCalculateResizeDimensions:
    def test_wide(self):
        assert calculate_resize_dimensions(300, 1024, 512) == (150, 512)

    def test_tall(self):
        assert calculate_resize_dimensions(1024, 300, 512) == (512, 150)

    def test_none_keeps_native(self):
        assert calculate_resize_dimensions(300, 1024, None) == (300, 1024)

    def test_equal_keeps_native(self):
        assert calculate_resize_dimensions(300, 1024, 1024) == (300, 1024)

    def test_short_side_at_least_one(self):
        assert calculate_resize_dimensions(1, 4000, 100) == (1, 100)

    def test_no_upsampling(self, caplog):
        with caplog.at_level(logging.WARNING, logger='grdscale.geometry.resize'):
            assert calculate_resize_dimensions(100, 200, 400) == (100, 200)
        assert 'larger than the long side' in caplog.text

    @pytest.mark.parametrize("target", [0, -5])
    def test_rejects_non_positive(self, target):
        with pytest.raises(ValidationError, match="target_size"):
            calculate_resize_dimensions(10, 10, target)


# ---------------------------------------------------------------------------
# resize_image
# ---------------------------------------------------------------------------

class TestResizeImage:
    def test_unchanged_returns_same_object(self):
        data = np.zeros((30, 60), dtype=np.uint8)
        result = resize_image(data, 60)
        assert result.data is data
        assert (result.scale_x, result.scale_y) == (1.0, 1.0)

    def test_output_shape_and_dtype(self):
        data = np.zeros((300, 1024), dtype=np.uint8)
        result = resize_image(data, 512)
        assert result.data.shape == (150, 512)
        assert result.data.dtype == np.uint8
        assert result.scale_x == 0.5

    def test_uint16_precision_kept(self):
        data = np.full((100, 200), 40000, dtype=np.uint16)
        result = resize_image(data, 100)
        assert result.data.dtype == np.uint16
        np.testing.assert_array_equal(result.data, 40000)

    def test_ramp_stays_monotonic(self):
        ramp = np.tile(np.arange(0, 256, 2, dtype=np.uint8), (16, 1))
        result = resize_image(ramp, 64)
        assert (np.diff(result.data.astype(int), axis=1) >= 0).all()
        assert result.data.max() <= 255

    def test_nearest_keeps_values(self):
        rng = np.random.default_rng(5)
        data = rng.choice(np.array([10, 200], dtype=np.uint8), size=(40, 80))
        result = resize_image(data, 20, resample=ResampleFilter.NEAREST)
        assert set(np.unique(result.data)) <= {10, 200}

    def test_fine_stripes_do_not_alias(self):
        stripes = np.zeros((300, 300), dtype=np.uint8)
        stripes[:, 1::2] = 255
        result = resize_image(stripes, 100)
        assert result.data.shape == (100, 100)
        assert int(result.data.max()) - int(result.data.min()) <= 6
        assert abs(float(result.data.mean()) - 127.5) < 2.0

    def test_nearest_skips_smoothing(self):
        stripes = np.zeros((300, 300), dtype=np.uint8)
        stripes[:, 1::2] = 255
        result = resize_image(stripes, 100, resample=ResampleFilter.NEAREST)
        assert set(np.unique(result.data)) <= {0, 255}

    def test_coarse_features_survive(self):
        data = np.zeros((200, 200), dtype=np.uint8)
        data[:, 100:] = 200
        result = resize_image(data, 50)
        assert result.data[:, :20].max() == 0
        assert result.data[:, 30:].min() == 200

    def test_channels_preserved(self):
        data = np.full((40, 80, 3), 7, dtype=np.uint8)
        result = resize_image(data, 40)
        assert result.data.shape == (20, 40, 3)
        np.testing.assert_array_equal(result.data, 7)

    def test_geometry_updated(self):
        geometry = GeometryMeta.from_geotransform(
            (100.0, 10.0, 0.0, 200.0, 0.0, -10.0))
        result = resize_image(np.zeros((100, 200), dtype=np.uint8), 100,
                              geometry=geometry)
        assert result.geometry.pixel_size == (20.0, -20.0)
        assert result.geometry.scale_x == 0.5

    def test_geometry_none_passes_through(self):
        result = resize_image(np.zeros((10, 20), dtype=np.uint8), 10)
        assert result.geometry is None

    def test_rejects_float(self):
        with pytest.raises(ValidationError, match="uint8 or uint16"):
            resize_image(np.zeros((4, 4), dtype=np.float32), 2)

    def test_rejects_non_array(self):
        with pytest.raises(TypeError):
            resize_image([[1, 2], [3, 4]], 1)
