# -*- coding: utf-8 -*-
"""
Autoscale sub-module - dB to 8/16-bit scaling strategies.

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

from grdscale.image_processing.autoscale.config import (
    STRATEGY_CONFIGS,
    AdaptiveConfig,
    ClaheConfig,
    EqualizedConfig,
    RobustConfig,
    StandardConfig,
    StrategyConfig,
    TamedConfig,
    strategy_from_dict,
)
from grdscale.image_processing.autoscale.clahe import (
    autoscale_clahe,
    clahe_tile_luts,
    clip_histogram,
    tile_edges,
)
from grdscale.image_processing.autoscale.strategies import (
    Autoscale,
    autoscale,
    autoscale_equalized,
    mid_level,
    scale_linear,
    scaling_window,
)

__all__ = [
    'STRATEGY_CONFIGS',
    'AdaptiveConfig',
    'ClaheConfig',
    'EqualizedConfig',
    'RobustConfig',
    'StandardConfig',
    'StrategyConfig',
    'TamedConfig',
    'strategy_from_dict',
    'autoscale_clahe',
    'clahe_tile_luts',
    'clip_histogram',
    'tile_edges',
    'Autoscale',
    'autoscale',
    'autoscale_equalized',
    'mid_level',
    'scale_linear',
    'scaling_window',
]
