# -*- coding: utf-8 -*-
"""
Tests for grdscale.image_processing.intensity - dB conversion and masking.

Author
------
Steven Siebert

Created
-------
2026-10-19
"""

import numpy as np
import pytest

from grdscale.exceptions import ValidationError
from grdscale.image_processing.intensity import (
    DB_SENTINEL,
    ToDecibels,
    to_decibels_masked,
)


# ---------------------------------------------------------------------------
# to_decibels_masked
# ---------------------------------------------------------------------------

class TestToDecibelsMasked:
    def test_valid_values(self):
        source = np.array([[1.0, 10.0, 100.0]], dtype=np.float32)
        db, mask = to_decibels_masked(source)
        np.testing.assert_allclose(db, [[0.0, 10.0, 20.0]], atol=1e-5)
        assert mask.all()

    def test_output_types(self):
        db, mask = to_decibels_masked(np.ones((3, 4), dtype=np.float32))
        assert db.dtype == np.float32
        assert mask.dtype == np.bool_
        assert db.shape == mask.shape == (3, 4)

    def test_invalid_samples_masked(self):
        source = np.array([[0.0, -1.0, np.nan, np.inf, -np.inf, 0.1]])
        db, mask = to_decibels_masked(source)
        np.testing.assert_array_equal(
            mask, [[False, False, False, False, False, True]])
        np.testing.assert_array_equal(db[0, :5], DB_SENTINEL)
        assert db[0, 5] == pytest.approx(-10.0, abs=1e-5)

    def test_sentinel_is_float32_min(self):
        assert DB_SENTINEL == float(np.finfo(np.float32).min)

    def test_float64_input(self):
        db, mask = to_decibels_masked(np.full((2, 2), 1e-3))
        np.testing.assert_allclose(db, -30.0, atol=1e-4)
        assert mask.all()

    def test_strided_matches_contiguous(self):
        rng = np.random.default_rng(7)
        base = rng.exponential(0.05, size=(64, 96)).astype(np.float32)
        base[rng.random(base.shape) < 0.1] = 0.0
        base[5, 7] = np.nan

        fortran = np.asfortranarray(base)
        db_c, mask_c = to_decibels_masked(base)
        db_f, mask_f = to_decibels_masked(fortran)
        np.testing.assert_array_equal(db_c, db_f)
        np.testing.assert_array_equal(mask_c, mask_f)

        sliced = base[::2, ::3]
        db_s, mask_s = to_decibels_masked(sliced)
        db_ref, mask_ref = to_decibels_masked(np.ascontiguousarray(sliced))
        np.testing.assert_array_equal(db_s, db_ref)
        np.testing.assert_array_equal(mask_s, mask_ref)

    def test_input_not_modified(self):
        source = np.array([[1.0, 0.0, np.nan]], dtype=np.float32)
        original = source.copy()
        to_decibels_masked(source)
        np.testing.assert_array_equal(source, original)

    def test_rejects_complex(self):
        with pytest.raises(ValidationError, match="real-valued"):
            to_decibels_masked(np.ones((2, 2), dtype=np.complex64))

    def test_rejects_1d(self):
        with pytest.raises(ValidationError, match="2D"):
            to_decibels_masked(np.ones(5))

    def test_rejects_non_array(self):
        with pytest.raises(TypeError, match="np.ndarray"):
            to_decibels_masked([[1.0, 2.0]])


# ---------------------------------------------------------------------------
# ToDecibels transform
# ---------------------------------------------------------------------------

class TestToDecibels:
    def test_apply(self):
        result = ToDecibels().apply(np.array([[1.0, 10.0]]))
        np.testing.assert_allclose(result, [[0.0, 10.0]], atol=1e-5)

    def test_apply_masked(self):
        db, mask = ToDecibels().apply_masked(np.array([[1.0, 0.0]]))
        np.testing.assert_array_equal(mask, [[True, False]])
        assert db[0, 1] == DB_SENTINEL

    def test_progress_callback(self):
        calls = []
        ToDecibels().apply(np.ones((2, 2)), progress_callback=calls.append)
        assert calls == [1.0]

    def test_processor_metadata(self):
        assert ToDecibels.__processor_version__ == '1.0.0'
        assert ToDecibels.__processor_tags__['description']
