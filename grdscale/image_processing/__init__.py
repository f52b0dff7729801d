# -*- coding: utf-8 -*-
"""
Image Processing Module - dB conversion, statistics and scaling.

Turns calibrated radar intensity into display-ready integer samples. All
processors inherit from ``ImageProcessor``, which provides version
checking and tunable parameter validation.

Sub-modules
-----------
intensity.py
    ``to_decibels_masked`` and the ``ToDecibels`` transform.
statistics.py
    Constant-memory range, count, histogram and percentile queries.
autoscale/
    Strategy configurations, the six scaling strategies (including
    CLAHE) and the ``Autoscale`` transform.
local_contrast.py
    3x3 neighbourhood median and range over valid samples.
polarization.py
    Dual-polarization band arithmetic.
synthetic_rgb.py
    Two-band colour composite through lookup tables.
versioning.py
    ``@processor_version`` and ``@processor_tags`` decorators.
params.py
    ``Range``, ``Desc`` constraint markers for tunable
    parameters via ``Annotated`` type hints.

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

from grdscale.image_processing.base import ImageProcessor, ImageTransform
from grdscale.image_processing.params import (
    Desc,
    ParamSpec,
    Range,
)
from grdscale.image_processing.versioning import (
    processor_tags,
    processor_version,
)
from grdscale.image_processing.intensity import (
    DB_SENTINEL,
    ToDecibels,
    to_decibels_masked,
)
from grdscale.image_processing.statistics import (
    HISTOGRAM_BINS,
    DbStatistics,
    compute_stats,
    percentile,
    percentiles,
)
from grdscale.image_processing.autoscale import (
    AdaptiveConfig,
    Autoscale,
    ClaheConfig,
    EqualizedConfig,
    RobustConfig,
    StandardConfig,
    StrategyConfig,
    TamedConfig,
    autoscale,
    scaling_window,
    strategy_from_dict,
)
from grdscale.image_processing.local_contrast import local_median_range
from grdscale.image_processing.polarization import combine_bands
from grdscale.image_processing.synthetic_rgb import (
    RgbCompositeConfig,
    RgbLutSet,
    build_rgb_luts,
    create_synthetic_rgb,
)

__all__ = [
    'ImageProcessor',
    'ImageTransform',
    'Desc',
    'ParamSpec',
    'Range',
    'processor_tags',
    'processor_version',
    'DB_SENTINEL',
    'ToDecibels',
    'to_decibels_masked',
    'HISTOGRAM_BINS',
    'DbStatistics',
    'compute_stats',
    'percentile',
    'percentiles',
    'AdaptiveConfig',
    'Autoscale',
    'ClaheConfig',
    'EqualizedConfig',
    'RobustConfig',
    'StandardConfig',
    'StrategyConfig',
    'TamedConfig',
    'autoscale',
    'scaling_window',
    'strategy_from_dict',
    'local_median_range',
    'combine_bands',
    'RgbCompositeConfig',
    'RgbLutSet',
    'build_rgb_luts',
    'create_synthetic_rgb',
]
