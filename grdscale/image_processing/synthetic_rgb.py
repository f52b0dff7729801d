# -*- coding: utf-8 -*-
"""
Synthetic RGB - Colour composite of two scaled 8-bit polarization bands.

The co-pol band drives red, the cross-pol band drives green, and blue
encodes their ratio:

- ``red[x] = round(255 * (x / 255) ** red_gamma)``
- ``green[x] = round(255 * (x / 255) ** green_gamma)``
- ``blue[r * 256 + g] = round(clip(255 * blue_scale * (r / g) ** blue_gamma,
  0, 255))`` over the gamma-mapped ``r`` and ``g``, and ``blue_fallback``
  where ``g == 0``.

With the default constants (0.7, 0.9, 0.1, scale 0.24) two saturated
bands give ``(255, 255, 61)``. All three tables are built per call from
the configuration, so composing a scene costs three table lookups per
pixel and no power functions.

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
from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, Optional

# Third-party
import numpy as np

# grdscale internal
from grdscale.exceptions import (
    ConfigurationError,
    ShapeMismatchError,
    ValidationError,
)
from grdscale.image_processing._arrays import row_blocks, validate_image_2d
from grdscale.image_processing.params import (
    Desc,
    Range,
    params_to_dict,
    validate_params,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RgbCompositeConfig:
    """Constants of the synthetic RGB tables.

    Attributes
    ----------
    red_gamma : float
        Gamma applied to the co-pol band for red. Default 0.7.
    green_gamma : float
        Gamma applied to the cross-pol band for green. Default 0.9.
    blue_gamma : float
        Exponent on the red/green ratio. Default 0.1.
    blue_scale : float
        Visual scaling of the blue channel. Default 0.24.
    blue_fallback : int
        Blue value where the mapped green is 0. Default 0.
    """

    red_gamma: Annotated[float, Range(min=0.0, max=10.0),
                         Desc('Gamma of the red (co-pol) channel')] = 0.7
    green_gamma: Annotated[float, Range(min=0.0, max=10.0),
                           Desc('Gamma of the green (cross-pol) channel')] = 0.9
    blue_gamma: Annotated[float, Range(min=0.0, max=10.0),
                          Desc('Exponent on the red/green ratio')] = 0.1
    blue_scale: Annotated[float, Range(min=0.0, max=1.0),
                          Desc('Visual scaling of the blue channel')] = 0.24
    blue_fallback: Annotated[int, Range(min=0, max=255),
                             Desc('Blue value where green is zero')] = 0

    def __post_init__(self) -> None:
        validate_params(self)
        for name in ('red_gamma', 'green_gamma', 'blue_gamma'):
            if getattr(self, name) <= 0.0:
                raise ConfigurationError(
                    f"{name} must be positive, got {getattr(self, name)}"
                )

    def to_dict(self) -> Dict[str, Any]:
        return params_to_dict(self)


@dataclass(frozen=True)
class RgbLutSet:
    """Read-only lookup tables of one composite call.

    Attributes
    ----------
    red : np.ndarray
        256-entry uint8 table indexed by the co-pol sample.
    green : np.ndarray
        256-entry uint8 table indexed by the cross-pol sample.
    blue : np.ndarray
        65536-entry uint8 table indexed by ``red[x] * 256 + green[y]``.
    """

    red: np.ndarray = field(repr=False)
    green: np.ndarray = field(repr=False)
    blue: np.ndarray = field(repr=False)


def _gamma_table(gamma: float) -> np.ndarray:
    x = np.arange(256, dtype=np.float64) / 255.0
    table = np.rint(255.0 * np.power(x, gamma))
    return np.clip(table, 0, 255).astype(np.uint8)


def build_rgb_luts(config: Optional[RgbCompositeConfig] = None) -> RgbLutSet:
    """Build the red, green and blue lookup tables.

    Parameters
    ----------
    config : RgbCompositeConfig, optional
        Table constants. Defaults to ``RgbCompositeConfig()``.

    Returns
    -------
    RgbLutSet
    """
    config = config if config is not None else RgbCompositeConfig()
    red = _gamma_table(config.red_gamma)
    green = _gamma_table(config.green_gamma)

    r = np.arange(256, dtype=np.float64)[:, None]
    g = np.arange(256, dtype=np.float64)[None, :]
    ratio = np.zeros((256, 256), dtype=np.float64)
    np.divide(r, g, out=ratio, where=g > 0)
    blue = np.rint(np.clip(
        255.0 * config.blue_scale * np.power(ratio, config.blue_gamma), 0, 255))
    blue[:, 0] = config.blue_fallback
    blue = blue.astype(np.uint8).reshape(-1)

    for table in (red, green, blue):
        table.setflags(write=False)
    return RgbLutSet(red=red, green=green, blue=blue)


def _validate_band(band: np.ndarray, name: str) -> None:
    validate_image_2d(band, name)
    if band.dtype != np.uint8:
        raise ValidationError(
            f"{name} must be uint8 for compositing, got {band.dtype}"
        )


def create_synthetic_rgb(
    band1: np.ndarray,
    band2: np.ndarray,
    config: Optional[RgbCompositeConfig] = None,
) -> np.ndarray:
    """Compose two scaled 8-bit bands into an interleaved RGB image.

    Parameters
    ----------
    band1 : np.ndarray
        2D uint8 co-pol band (red).
    band2 : np.ndarray
        2D uint8 cross-pol band (green), same shape as *band1*.
    config : RgbCompositeConfig, optional
        Table constants.

    Returns
    -------
    np.ndarray
        uint8 array of shape ``(rows, cols, 3)``.

    Raises
    ------
    ShapeMismatchError
        If the bands differ in shape.
    ValidationError
        If a band is not a 2D uint8 array.

    Examples
    --------
    >>> full = np.full((1, 1), 255, dtype=np.uint8)
    >>> create_synthetic_rgb(full, full)[0, 0]
    array([255, 255,  61], dtype=uint8)
    """
    _validate_band(band1, 'band1')
    _validate_band(band2, 'band2')
    if band1.shape != band2.shape:
        raise ShapeMismatchError(
            f"band shapes differ: band1 {band1.shape} vs band2 {band2.shape}"
        )

    luts = build_rgb_luts(config)
    rgb = np.empty(band1.shape + (3,), dtype=np.uint8)
    for r0, r1 in row_blocks(band1.shape):
        red = luts.red[band1[r0:r1]]
        green = luts.green[band2[r0:r1]]
        rgb[r0:r1, :, 0] = red
        rgb[r0:r1, :, 1] = green
        rgb[r0:r1, :, 2] = luts.blue[red.astype(np.intp) * 256 + green]

    logger.debug("Synthetic RGB composite %dx%d", band1.shape[1], band1.shape[0])
    return rgb
