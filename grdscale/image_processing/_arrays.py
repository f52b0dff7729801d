# -*- coding: utf-8 -*-
"""
Array Helpers - Shared input validation and row-block iteration.

All full-image traversals in the scaling core walk the image in row
blocks so that temporaries stay bounded regardless of scene size. The
helpers here enforce consistent checks on 2D inputs and masks.

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
from typing import Iterator, Tuple

# Third-party
import numpy as np

# grdscale internal
from grdscale.exceptions import ShapeMismatchError, ValidationError

#: Approximate number of pixels processed per row block.
BLOCK_PIXELS = 1 << 20


def validate_image_2d(image: np.ndarray, name: str = 'image') -> None:
    """Validate that *image* is a 2D numpy array.

    Raises
    ------
    TypeError
        If *image* is not a numpy ndarray.
    ValidationError
        If *image* is not 2D.
    """
    if not isinstance(image, np.ndarray):
        raise TypeError(
            f"{name} must be np.ndarray, got {type(image).__name__}"
        )
    if image.ndim != 2:
        raise ValidationError(
            f"{name} must be 2D (rows, cols), got {image.ndim}D"
        )


def validate_mask(mask: np.ndarray, shape: Tuple[int, ...]) -> None:
    """Validate a boolean validity mask against an image shape.

    Raises
    ------
    TypeError
        If *mask* is not a boolean numpy array.
    ShapeMismatchError
        If *mask* does not match *shape*.
    """
    if not isinstance(mask, np.ndarray) or mask.dtype != np.bool_:
        raise TypeError("mask must be a boolean np.ndarray")
    if mask.shape != tuple(shape):
        raise ShapeMismatchError(
            f"mask shape {mask.shape} does not match image shape {tuple(shape)}"
        )


def row_blocks(
    shape: Tuple[int, ...], block_pixels: int = BLOCK_PIXELS
) -> Iterator[Tuple[int, int]]:
    """Yield ``(row_start, row_end)`` bounds covering all rows.

    Each block holds roughly *block_pixels* pixels and at least one row.

    Examples
    --------
    >>> list(row_blocks((5, 4), block_pixels=8))
    [(0, 2), (2, 4), (4, 5)]
    """
    rows, cols = shape[0], shape[1]
    step = max(1, block_pixels // max(cols, 1))
    for start in range(0, rows, step):
        yield start, min(start + step, rows)
