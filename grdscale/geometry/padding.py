# -*- coding: utf-8 -*-
"""
Padding - Embed an image in a square canvas.

The canvas side is ``max(rows, cols)`` and the content is centred:
``pad_left = (size - cols) // 2`` and ``pad_top = (size - rows) // 2``,
so a 512-wide by 300-high image lands at ``(0, 106)``. Uncovered pixels
hold the background value 0. Content is copied in whole row spans.

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
from typing import NamedTuple, Optional

# Third-party
import numpy as np

# grdscale internal
from grdscale.exceptions import ValidationError
from grdscale.geometry.meta import GeometryMeta
from grdscale.image_processing._arrays import row_blocks

logger = logging.getLogger(__name__)

#: Value written to canvas pixels not covered by the image.
BACKGROUND = 0


class PadResult(NamedTuple):
    """Output of :func:`pad_to_square`.

    Attributes
    ----------
    data : np.ndarray
        Square canvas, same dtype (and channel count) as the input.
    pad_left : int
        Column where the content starts.
    pad_top : int
        Row where the content starts.
    size : int
        Canvas side length.
    geometry : GeometryMeta or None
        Geometry shifted to the canvas corner, ``None`` when none was
        supplied.
    """

    data: np.ndarray
    pad_left: int
    pad_top: int
    size: int
    geometry: Optional[GeometryMeta] = None


def pad_to_square(
    data: np.ndarray, geometry: Optional[GeometryMeta] = None
) -> PadResult:
    """Centre *data* in a square canvas of side ``max(rows, cols)``.

    Parameters
    ----------
    data : np.ndarray
        ``(rows, cols)`` or ``(rows, cols, channels)`` samples.
    geometry : GeometryMeta, optional
        Geometry of *data*.

    Returns
    -------
    PadResult

    Raises
    ------
    TypeError
        If *data* is not a numpy array.
    ValidationError
        If *data* is not 2D or 3D.

    Examples
    --------
    >>> result = pad_to_square(np.ones((300, 512), dtype=np.uint8))
    >>> result.data.shape, result.pad_left, result.pad_top
    ((512, 512), 0, 106)
    """
    if not isinstance(data, np.ndarray):
        raise TypeError(f"data must be np.ndarray, got {type(data).__name__}")
    if data.ndim not in (2, 3):
        raise ValidationError(
            f"data must be 2D (rows, cols) or 3D (rows, cols, channels), "
            f"got {data.ndim}D"
        )

    rows, cols = data.shape[:2]
    size = max(rows, cols)
    pad_left = (size - cols) // 2
    pad_top = (size - rows) // 2
    logger.debug("Padding %dx%d to %dx%d at offset (%d, %d)",
                 cols, rows, size, size, pad_left, pad_top)

    canvas = np.full((size, size) + data.shape[2:], BACKGROUND, dtype=data.dtype)
    for r0, r1 in row_blocks(data.shape):
        canvas[pad_top + r0:pad_top + r1, pad_left:pad_left + cols] = data[r0:r1]

    if geometry is not None:
        geometry = geometry.with_padding(pad_left, pad_top)
    return PadResult(canvas, pad_left, pad_top, size, geometry)
