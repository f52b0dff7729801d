# -*- coding: utf-8 -*-
"""
grdscale - Radar intensity autoscaling for display and analysis products.

Converts calibrated SAR intensity rasters (sigma0, beta0, gamma0) into
8- or 16-bit images: dB conversion with validity masking, constant-memory
histogram statistics, six autoscaling strategies including CLAHE, a
dual-polarization synthetic RGB compositor, and geometry-aware resize and
pad.

Dependencies
------------
numpy
scipy
pyyaml

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from grdscale.exceptions import (
    GrdscaleError,
    ValidationError,
    ShapeMismatchError,
    ConfigurationError,
)
from grdscale.vocabulary import (
    ImageModality,
    ProcessorCategory,
    BitDepth,
    PolarizationRole,
    ProcessingOperation,
    ResampleFilter,
)
from grdscale.geometry import GeometryMeta
from grdscale.pipeline import (
    BandSummary,
    ProcessedImage,
    ProcessingParams,
    process_band,
    process_pair,
)

__all__ = [
    'GrdscaleError',
    'ValidationError',
    'ShapeMismatchError',
    'ConfigurationError',
    'ImageModality',
    'ProcessorCategory',
    'BitDepth',
    'PolarizationRole',
    'ProcessingOperation',
    'ResampleFilter',
    'GeometryMeta',
    'BandSummary',
    'ProcessedImage',
    'ProcessingParams',
    'process_band',
    'process_pair',
]
