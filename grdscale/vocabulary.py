# -*- coding: utf-8 -*-
"""
grdscale Vocabulary - Enumerations shared across the scaling core.

Defines the controlled vocabularies used to tag processors and to select
behaviour in configuration values: image modality and processor category
tags, output bit depth, polarization role of a band, dual-polarization
processing operations, and the resampling filter used by the resize path.

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

from enum import Enum
from typing import Optional

import numpy as np


class ImageModality(Enum):
    """Supported image modalities for processor tagging."""

    SAR = "SAR"


class ProcessorCategory(Enum):
    """Processing categories for processor tagging.

    Each value corresponds to a functional grouping of image processing
    operations.
    """

    ENHANCE = "enhance"
    MATH = "math"


class BitDepth(Enum):
    """Output sample depth of a scaled image.

    The value is the number of bits per sample. ``max_value`` is the
    output ceiling and ``dtype`` the numpy storage type.
    """

    U8 = 8
    U16 = 16

    @property
    def max_value(self) -> int:
        """Largest representable output sample (255 or 65535)."""
        return (1 << self.value) - 1

    @property
    def dtype(self) -> np.dtype:
        """Unsigned integer dtype holding samples of this depth."""
        return np.dtype(np.uint8) if self is BitDepth.U8 else np.dtype(np.uint16)

    @classmethod
    def from_dtype(cls, dtype) -> 'BitDepth':
        """Look up the bit depth matching an unsigned integer dtype.

        Raises
        ------
        ValueError
            If *dtype* is neither ``uint8`` nor ``uint16``.
        """
        dtype = np.dtype(dtype)
        for member in cls:
            if member.dtype == dtype:
                return member
        raise ValueError(f"no bit depth for dtype {dtype}")


class PolarizationRole(Enum):
    """Role of a band within a dual-polarization pair.

    Co-polarized (VV, HH) and cross-polarized (VH, HV) channels have
    different noise floors; the Tamed strategy picks its low cut by role.
    """

    CO_POL = "co_pol"
    CROSS_POL = "cross_pol"


class ProcessingOperation(Enum):
    """How one or two polarization bands become the output product."""

    SINGLE_BAND = "single_band"
    MULTIBAND_VV_VH = "multiband_vv_vh"
    MULTIBAND_HH_HV = "multiband_hh_hv"
    SUM = "sum"
    DIFFERENCE = "difference"
    RATIO = "ratio"
    NORMALIZED_DIFF = "normalized_diff"
    LOG_RATIO = "log_ratio"

    @property
    def label(self) -> Optional[str]:
        """Operation label written to product metadata.

        Single-band products carry no label.
        """
        if self is ProcessingOperation.SINGLE_BAND:
            return None
        return self.value

    @property
    def is_multiband(self) -> bool:
        """Whether both bands are kept as separate output bands."""
        return self in (
            ProcessingOperation.MULTIBAND_VV_VH,
            ProcessingOperation.MULTIBAND_HH_HV,
        )

    @property
    def is_arithmetic(self) -> bool:
        """Whether the two bands are combined into one intensity band."""
        return self not in (
            ProcessingOperation.SINGLE_BAND,
            ProcessingOperation.MULTIBAND_VV_VH,
            ProcessingOperation.MULTIBAND_HH_HV,
        )


class ResampleFilter(Enum):
    """Resampling filter for the resize path.

    The value is the ``scipy.ndimage`` spline order.
    """

    NEAREST = 0
    BILINEAR = 1
    CUBIC = 3
