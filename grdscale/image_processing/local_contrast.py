# -*- coding: utf-8 -*-
"""
Local Contrast - 3x3 neighbourhood median and range over valid dB samples.

For every valid pixel the up-to-nine valid samples of its 3x3
neighbourhood (itself included, truncated at image borders) are ranked;
the median is the element at ``n // 2`` of the ranked values and the range
is ``max - min``. Invalid pixels, and pixels without valid neighbours,
report ``nan`` median and zero range.

None of the autoscale strategies call this; it is a building block for
neighbourhood-aware scalers. Work is done in row strips so temporaries
stay proportional to one strip, never to the image.

Dependencies
------------
numpy

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

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
from typing import Tuple

# Third-party
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

# grdscale internal
from grdscale.image_processing._arrays import (
    BLOCK_PIXELS,
    row_blocks,
    validate_image_2d,
    validate_mask,
)

#: Side length of the neighbourhood window.
WINDOW = 3


def local_median_range(
    db: np.ndarray, mask: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """Median and range of valid samples in each pixel's 3x3 neighbourhood.

    Parameters
    ----------
    db : np.ndarray
        2D dB array.
    mask : np.ndarray
        Validity mask, same shape. Invalid samples never enter a window.

    Returns
    -------
    median : np.ndarray
        float32 array of neighbourhood medians, ``nan`` where undefined.
    value_range : np.ndarray
        float32 array of neighbourhood ``max - min``, 0 where undefined.

    Examples
    --------
    >>> db = np.arange(9, dtype=np.float32).reshape(3, 3)
    >>> median, rng = local_median_range(db, np.ones((3, 3), dtype=bool))
    >>> float(median[1, 1]), float(rng[1, 1])
    (4.0, 8.0)
    """
    validate_image_2d(db, 'db')
    validate_mask(mask, db.shape)
    rows, cols = db.shape
    half = WINDOW // 2

    median = np.full(db.shape, np.nan, dtype=np.float32)
    value_range = np.zeros(db.shape, dtype=np.float32)

    for r0, r1 in row_blocks(db.shape, BLOCK_PIXELS // (WINDOW * WINDOW)):
        lo = max(r0 - half, 0)
        hi = min(r1 + half, rows)
        # +inf marks missing samples and sorts after every real value
        strip = np.where(mask[lo:hi], db[lo:hi], np.inf).astype(np.float32)
        strip = np.pad(
            strip,
            ((half - (r0 - lo), half - (hi - r1)), (half, half)),
            constant_values=np.inf,
        )
        windows = sliding_window_view(strip, (WINDOW, WINDOW))
        ranked = np.sort(windows.reshape(r1 - r0, cols, WINDOW * WINDOW), axis=-1)

        n = np.isfinite(ranked).sum(axis=-1)
        defined = (n > 0) & mask[r0:r1]
        mid = np.take_along_axis(ranked, (n // 2)[..., None], axis=-1)[..., 0]
        top = np.take_along_axis(
            ranked, np.maximum(n - 1, 0)[..., None], axis=-1)[..., 0]

        median[r0:r1][defined] = mid[defined]
        value_range[r0:r1][defined] = top[defined] - ranked[..., 0][defined]

    return median, value_range
