# -*- coding: utf-8 -*-
"""
Resize - Aspect-preserving downsampling of scaled sample arrays.

The long side is brought to a requested size and the short side follows
the same scale. Downsampling with an interpolating filter first smooths
each shrinking axis with ``scipy.ndimage.gaussian_filter`` (sigma
``(1 / zoom - 1) / 2``) so that detail finer than the output grid does
not alias. Resampling runs through ``scipy.ndimage.zoom`` into a
float32 buffer and is rounded back into the input dtype, so 16-bit data
keeps its full precision and never passes through an 8-bit intermediate.

Images are never enlarged: a target above the long side keeps the native
size, and a target equal to the long side returns the input untouched.

Dependencies
------------
scipy

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
import logging
from typing import NamedTuple, Optional, Tuple

# Third-party
import numpy as np
from scipy.ndimage import gaussian_filter, zoom

# grdscale internal
from grdscale.exceptions import ValidationError
from grdscale.geometry.meta import GeometryMeta
from grdscale.vocabulary import BitDepth, ResampleFilter

logger = logging.getLogger(__name__)


class ResizeResult(NamedTuple):
    """Output of :func:`resize_image`.

    Attributes
    ----------
    data : np.ndarray
        Resized samples, same dtype as the input.
    geometry : GeometryMeta or None
        Updated geometry, ``None`` when none was supplied.
    scale_x : float
        ``new_cols / cols``.
    scale_y : float
        ``new_rows / rows``.
    """

    data: np.ndarray
    geometry: Optional[GeometryMeta]
    scale_x: float
    scale_y: float


def calculate_resize_dimensions(
    rows: int, cols: int, target_size: Optional[int]
) -> Tuple[int, int]:
    """Output ``(rows, cols)`` with the long side at *target_size*.

    Parameters
    ----------
    rows, cols : int
        Current image size.
    target_size : int or None
        Requested long side. ``None`` keeps the native size.

    Returns
    -------
    Tuple[int, int]
        ``(new_rows, new_cols)``. Native size when *target_size* is
        ``None`` or not smaller than the long side.

    Raises
    ------
    ValidationError
        If *target_size* is not positive.

    Examples
    --------
    >>> calculate_resize_dimensions(300, 1024, 512)
    (150, 512)
    """
    if target_size is None:
        return rows, cols
    if target_size <= 0:
        raise ValidationError(
            f"target_size must be positive, got {target_size}"
        )
    long_side = max(rows, cols)
    if target_size > long_side:
        logger.warning(
            "Target size %d is larger than the long side %d; "
            "keeping native %dx%d", target_size, long_side, cols, rows)
        return rows, cols
    if target_size == long_side:
        return rows, cols

    scale = target_size / long_side
    if cols >= rows:
        return max(1, int(round(rows * scale))), target_size
    return target_size, max(1, int(round(cols * scale)))


def _check_samples(data: np.ndarray) -> BitDepth:
    if not isinstance(data, np.ndarray):
        raise TypeError(f"data must be np.ndarray, got {type(data).__name__}")
    if data.ndim not in (2, 3):
        raise ValidationError(
            f"data must be 2D (rows, cols) or 3D (rows, cols, channels), "
            f"got {data.ndim}D"
        )
    try:
        return BitDepth.from_dtype(data.dtype)
    except ValueError as exc:
        raise ValidationError(
            f"data must be uint8 or uint16, got {data.dtype}"
        ) from exc


def _antialias_sigma(zoom_factors: Tuple[float, ...]) -> Tuple[float, ...]:
    """Per-axis Gaussian sigma for a zoom; zero on axes that do not shrink."""
    return tuple(max(0.0, (1.0 / z - 1.0) / 2.0) for z in zoom_factors)


def resize_image(
    data: np.ndarray,
    target_size: Optional[int],
    geometry: Optional[GeometryMeta] = None,
    resample: ResampleFilter = ResampleFilter.BILINEAR,
) -> ResizeResult:
    """Resample *data* so its long side equals *target_size*.

    Parameters
    ----------
    data : np.ndarray
        uint8 or uint16 samples, ``(rows, cols)`` or
        ``(rows, cols, channels)``.
    target_size : int or None
        Requested long side; ``None`` keeps the native size.
    geometry : GeometryMeta, optional
        Geometry of *data*; returned updated for the new pixel size.
    resample : ResampleFilter
        Spline order used by ``scipy.ndimage.zoom``. Default bilinear.
        ``NEAREST`` skips the anti-alias smoothing and only picks
        existing sample values.

    Returns
    -------
    ResizeResult
        When no resampling is needed ``data`` is the input object itself.

    Raises
    ------
    TypeError
        If *data* is not a numpy array.
    ValidationError
        If *data* has an unsupported shape or dtype, *target_size* is not
        positive, or *geometry* has already been padded.
    """
    bit_depth = _check_samples(data)
    rows, cols = data.shape[:2]
    new_rows, new_cols = calculate_resize_dimensions(rows, cols, target_size)
    if (new_rows, new_cols) == (rows, cols):
        logger.debug("Resize skipped, image already %dx%d", cols, rows)
        return ResizeResult(data, geometry, 1.0, 1.0)

    logger.info("Resizing %dx%d -> %dx%d (%s)",
                cols, rows, new_cols, new_rows, resample.name.lower())
    zoom_factors = (new_rows / rows, new_cols / cols) + (1.0,) * (data.ndim - 2)
    source = data
    if resample is not ResampleFilter.NEAREST:
        sigma = _antialias_sigma(zoom_factors)
        logger.debug("Anti-alias sigma %s", sigma[:2])
        source = gaussian_filter(data.astype(np.float32), sigma=sigma,
                                 mode='mirror')
    resampled = zoom(
        source, zoom_factors, output=np.float32, order=resample.value,
        mode='nearest', grid_mode=True,
    )
    # zoom's rounding of the output shape can differ by one; pin it
    resampled = resampled[:new_rows, :new_cols]
    if resampled.shape[:2] != (new_rows, new_cols):
        resampled = np.pad(
            resampled,
            ((0, new_rows - resampled.shape[0]),
             (0, new_cols - resampled.shape[1]))
            + ((0, 0),) * (data.ndim - 2),
            mode='edge',
        )

    np.rint(resampled, out=resampled)
    np.clip(resampled, 0, bit_depth.max_value, out=resampled)
    out = resampled.astype(data.dtype)

    scale_x = new_cols / cols
    scale_y = new_rows / rows
    if geometry is not None:
        geometry = geometry.with_resize(scale_x, scale_y)
    return ResizeResult(out, geometry, scale_x, scale_y)
