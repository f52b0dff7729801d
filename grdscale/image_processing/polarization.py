# -*- coding: utf-8 -*-
"""
Polarization Arithmetic - Combine co- and cross-polarized intensity bands.

Turns a dual-polarization pair (VV/VH or HH/HV) into one intensity band
before dB conversion:

- ``sum``: ``co + cross``
- ``difference``: ``co - cross``
- ``ratio``: ``co / cross``, 0 where ``|cross| <= 1e-10``
- ``normalized_diff``: ``(co - cross) / (co + cross)``, 0 where
  ``|co + cross| <= 1e-10``
- ``log_ratio``: the linear ratio ``co / cross``; the dB conversion that
  follows makes it ``10 * log10(co / cross)``.

Difference and normalized difference can be zero or negative; those
samples become no-data in the dB step.

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

# Third-party
import numpy as np

# grdscale internal
from grdscale.exceptions import ShapeMismatchError, ValidationError
from grdscale.image_processing._arrays import validate_image_2d
from grdscale.vocabulary import ProcessingOperation

logger = logging.getLogger(__name__)

#: Denominators at or below this magnitude produce 0 instead of a quotient.
DIVISION_EPSILON = 1e-10


def _safe_divide(numerator: np.ndarray, denominator: np.ndarray) -> np.ndarray:
    out = np.zeros(numerator.shape, dtype=np.float32)
    np.divide(numerator, denominator, out=out,
              where=np.abs(denominator) > DIVISION_EPSILON)
    return out


def combine_bands(
    co: np.ndarray,
    cross: np.ndarray,
    operation: ProcessingOperation,
) -> np.ndarray:
    """Combine a co-pol and a cross-pol intensity band element-wise.

    Parameters
    ----------
    co : np.ndarray
        2D co-polarized intensity (VV or HH).
    cross : np.ndarray
        2D cross-polarized intensity (VH or HV), same shape as *co*.
    operation : ProcessingOperation
        One of the arithmetic operations (``SUM``, ``DIFFERENCE``,
        ``RATIO``, ``NORMALIZED_DIFF``, ``LOG_RATIO``).

    Returns
    -------
    np.ndarray
        float32 combined intensity band.

    Raises
    ------
    ShapeMismatchError
        If the bands differ in shape.
    ValidationError
        If *operation* is not an arithmetic operation.
    """
    validate_image_2d(co, 'co')
    validate_image_2d(cross, 'cross')
    if co.shape != cross.shape:
        raise ShapeMismatchError(
            f"band shapes differ: co {co.shape} vs cross {cross.shape}"
        )
    if not operation.is_arithmetic:
        raise ValidationError(
            f"{operation.value} is not a band arithmetic operation"
        )

    a = co.astype(np.float32, copy=False)
    b = cross.astype(np.float32, copy=False)
    logger.info("Combining bands with %s", operation.value)

    if operation is ProcessingOperation.SUM:
        return a + b
    if operation is ProcessingOperation.DIFFERENCE:
        return a - b
    if operation is ProcessingOperation.NORMALIZED_DIFF:
        return _safe_divide(a - b, a + b)
    # RATIO and LOG_RATIO share the linear quotient
    return _safe_divide(a, b)
