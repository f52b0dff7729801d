# -*- coding: utf-8 -*-
"""
Intensity Transforms - Calibrated intensity to decibels with validity masking.

Converts calibrated radar intensity (sigma0/beta0/gamma0 linear power) to
decibels and flags every sample that is usable for statistics and scaling:

- valid iff the sample is finite and strictly positive,
- ``db = 10 * log10(intensity)`` where valid,
- ``db = DB_SENTINEL`` elsewhere.

The conversion is a single pass writing both outputs; no intermediate
collection of valid values is ever built. Zero, negative, NaN and Inf
samples are no-data, not errors.

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import logging
from typing import Any, Tuple

# Third-party
import numpy as np

# grdscale internal
from grdscale.exceptions import ValidationError
from grdscale.image_processing._arrays import validate_image_2d
from grdscale.image_processing.base import ImageTransform
from grdscale.image_processing.versioning import processor_tags, processor_version
from grdscale.vocabulary import ImageModality, ProcessorCategory

logger = logging.getLogger(__name__)

#: dB value written where the validity mask is False.
DB_SENTINEL = float(np.finfo(np.float32).min)


def _convert_run(src: np.ndarray, db_out: np.ndarray,
                 mask_out: np.ndarray) -> None:
    """Convert one 1D run of samples in place into *db_out* / *mask_out*."""
    np.isfinite(src, out=mask_out)
    np.logical_and(mask_out, src > 0, out=mask_out)
    db_out.fill(DB_SENTINEL)
    np.log10(src, out=db_out, where=mask_out)
    np.multiply(db_out, 10.0, out=db_out, where=mask_out)


def to_decibels_masked(intensity: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Convert an intensity array to dB values and a validity mask.

    C-contiguous inputs are processed as one flat run over the backing
    buffer; any other layout (Fortran order, slices with steps, transposed
    views) is processed row by row over strided views. Both paths produce
    identical values.

    Parameters
    ----------
    intensity : np.ndarray
        2D real-valued intensity array, shape ``(rows, cols)``. Usually
        float32; NaN, Inf, zero and negative values mark no-data.

    Returns
    -------
    db : np.ndarray
        float32 array of ``10 * log10(intensity)``; ``DB_SENTINEL``
        where invalid.
    mask : np.ndarray
        Boolean validity mask, same shape.

    Raises
    ------
    TypeError
        If *intensity* is not a numpy ndarray.
    ValidationError
        If *intensity* is not 2D or is complex-valued.

    Examples
    --------
    >>> db, mask = to_decibels_masked(np.array([[1.0, 10.0, 0.0]]))
    >>> db[0, :2]
    array([ 0., 10.], dtype=float32)
    >>> mask
    array([[ True,  True, False]])
    """
    validate_image_2d(intensity, 'intensity')
    if np.iscomplexobj(intensity):
        raise ValidationError(
            "intensity must be real-valued; detect complex data first"
        )

    db = np.empty(intensity.shape, dtype=np.float32)
    mask = np.empty(intensity.shape, dtype=np.bool_)

    if intensity.flags.c_contiguous:
        _convert_run(intensity.reshape(-1), db.reshape(-1), mask.reshape(-1))
    else:
        logger.debug("Strided intensity layout %s, converting by row",
                     intensity.strides)
        for row in range(intensity.shape[0]):
            _convert_run(intensity[row], db[row], mask[row])

    return db, mask


@processor_version('1.0.0')
@processor_tags(modalities=[ImageModality.SAR], category=ProcessorCategory.MATH,
                description='Intensity to decibels with no-data sentinel')
class ToDecibels(ImageTransform):
    """Convert calibrated intensity imagery to decibels.

    Computes ``10 * log10(source)`` for finite, strictly positive samples
    and writes ``DB_SENTINEL`` elsewhere. Use :meth:`apply_masked` when
    the validity mask is needed as well.

    Examples
    --------
    >>> to_db = ToDecibels()
    >>> db = to_db.apply(sigma0)
    >>> db, mask = to_db.apply_masked(sigma0)
    """

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply dB conversion.

        Parameters
        ----------
        source : np.ndarray
            2D intensity array.

        Returns
        -------
        np.ndarray
            float32 dB array, same shape.
        """
        db, _ = self.apply_masked(source, **kwargs)
        return db

    def apply_masked(
        self, source: np.ndarray, **kwargs: Any
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Apply dB conversion and return the validity mask too.

        Parameters
        ----------
        source : np.ndarray
            2D intensity array.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(db, mask)`` as returned by :func:`to_decibels_masked`.
        """
        result = to_decibels_masked(source)
        self._report_progress(kwargs, 1.0)
        return result
