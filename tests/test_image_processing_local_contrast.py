# -*- coding: utf-8 -*-
"""
Tests for grdscale.image_processing.local_contrast.

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

from grdscale.exceptions import ShapeMismatchError
from grdscale.image_processing.local_contrast import local_median_range


def _reference(db, mask):
    rows, cols = db.shape
    median = np.full(db.shape, np.nan, dtype=np.float32)
    value_range = np.zeros(db.shape, dtype=np.float32)
    for r in range(rows):
        for c in range(cols):
            if not mask[r, c]:
                continue
            window = db[max(r - 1, 0):r + 2, max(c - 1, 0):c + 2]
            valid = np.sort(window[mask[max(r - 1, 0):r + 2,
                                        max(c - 1, 0):c + 2]])
            median[r, c] = valid[valid.size // 2]
            value_range[r, c] = valid[-1] - valid[0]
    return median, value_range


class TestLocalMedianRange:
    def test_centre_pixel(self):
        db = np.arange(9, dtype=np.float32).reshape(3, 3)
        median, rng = local_median_range(db, np.ones((3, 3), dtype=bool))
        assert median[1, 1] == 4.0
        assert rng[1, 1] == 8.0

    def test_corner_uses_four_neighbours(self):
        db = np.arange(9, dtype=np.float32).reshape(3, 3)
        median, rng = local_median_range(db, np.ones((3, 3), dtype=bool))
        # neighbours of (0, 0): 0, 1, 3, 4 -> element 2 of sorted values
        assert median[0, 0] == 3.0
        assert rng[0, 0] == 4.0

    def test_matches_reference(self):
        rng = np.random.default_rng(11)
        db = rng.normal(-12.0, 4.0, size=(23, 31)).astype(np.float32)
        mask = rng.random(db.shape) > 0.2
        median, value_range = local_median_range(db, mask)
        ref_median, ref_range = _reference(db, mask)
        np.testing.assert_array_equal(np.isnan(median), np.isnan(ref_median))
        np.testing.assert_allclose(median[mask], ref_median[mask])
        np.testing.assert_allclose(value_range, ref_range)

    def test_invalid_neighbours_excluded(self):
        db = np.array([[1.0, 100.0, 1.0],
                       [1.0, 2.0, 1.0],
                       [1.0, 1.0, 1.0]], dtype=np.float32)
        mask = np.ones((3, 3), dtype=bool)
        mask[0, 1] = False
        median, rng = local_median_range(db, mask)
        assert rng[1, 1] == pytest.approx(1.0)
        assert median[1, 1] == 1.0

    def test_invalid_centre_undefined(self):
        db = np.ones((3, 3), dtype=np.float32)
        mask = np.ones((3, 3), dtype=bool)
        mask[1, 1] = False
        median, rng = local_median_range(db, mask)
        assert np.isnan(median[1, 1])
        assert rng[1, 1] == 0.0

    def test_mask_shape_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            local_median_range(np.zeros((3, 3), dtype=np.float32),
                               np.ones((2, 3), dtype=bool))
