# -*- coding: utf-8 -*-
"""
Geometry Module - Resize, pad and geotransform bookkeeping.

Sub-modules
-----------
meta.py
    ``GeometryMeta``: affine geotransform, projection, scale and pad
    offsets.
resize.py
    ``calculate_resize_dimensions`` and ``resize_image``.
padding.py
    ``pad_to_square``.

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

from grdscale.geometry.meta import IDENTITY_GEOTRANSFORM, GeometryMeta
from grdscale.geometry.resize import (
    ResizeResult,
    calculate_resize_dimensions,
    resize_image,
)
from grdscale.geometry.padding import BACKGROUND, PadResult, pad_to_square

__all__ = [
    'IDENTITY_GEOTRANSFORM',
    'GeometryMeta',
    'ResizeResult',
    'calculate_resize_dimensions',
    'resize_image',
    'BACKGROUND',
    'PadResult',
    'pad_to_square',
]
