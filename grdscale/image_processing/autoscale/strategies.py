# -*- coding: utf-8 -*-
"""
Autoscale Strategies - Map dB images onto 8- or 16-bit samples.

Implements the global autoscale strategies and the single dispatch point
that selects a strategy from its configuration variant:

- ``StandardConfig``: linear map of ``[min, max]``.
- ``RobustConfig``: linear map of a percentile window (default p02/p98),
  clamping samples outside the window.
- ``AdaptiveConfig``: percentile window (default p10/p90) followed by a
  fixed gamma on the normalized value. No neighbourhood enhancement.
- ``EqualizedConfig``: global histogram equalization from the 4096-bin
  dB histogram.
- ``TamedConfig``: robust window whose low cut depends on the band's
  polarization role (co-pol p02, cross-pol p05).
- ``ClaheConfig``: tile-local equalization, see
  :mod:`grdscale.image_processing.autoscale.clahe`.

Every strategy excludes invalid pixels from fitting and writes 0 there.
Arithmetic stays in floating point until the final rounding; outputs are
always within ``[0, 2**bits - 1]``. A degenerate window (zero width) maps
all valid pixels to the mid level instead of dividing by zero.

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
from typing import Annotated, Any, Callable, Dict, Optional, Tuple, Union

# Third-party
import numpy as np

# grdscale internal
from grdscale.exceptions import ConfigurationError, ValidationError
from grdscale.image_processing._arrays import (
    row_blocks,
    validate_image_2d,
    validate_mask,
)
from grdscale.image_processing.autoscale.clahe import autoscale_clahe
from grdscale.image_processing.autoscale.config import (
    AdaptiveConfig,
    ClaheConfig,
    EqualizedConfig,
    RobustConfig,
    StandardConfig,
    StrategyConfig,
    TamedConfig,
)
from grdscale.image_processing.base import ImageTransform
from grdscale.image_processing.intensity import to_decibels_masked
from grdscale.image_processing.params import Desc
from grdscale.image_processing.statistics import (
    DbStatistics,
    compute_stats,
    percentile,
)
from grdscale.image_processing.versioning import processor_tags, processor_version
from grdscale.vocabulary import (
    BitDepth,
    ImageModality,
    PolarizationRole,
    ProcessorCategory,
)

logger = logging.getLogger(__name__)


def mid_level(bit_depth: BitDepth) -> int:
    """Constant output level for degenerate (zero-width) windows."""
    return (bit_depth.max_value + 1) // 2


def _as_bit_depth(bit_depth: Union[BitDepth, int]) -> BitDepth:
    try:
        return BitDepth(bit_depth)
    except ValueError as exc:
        raise ValidationError(
            f"bit_depth must be 8 or 16, got {bit_depth!r}"
        ) from exc


def scaling_window(
    stats: DbStatistics,
    config: StrategyConfig,
    role: PolarizationRole = PolarizationRole.CO_POL,
) -> Tuple[float, float]:
    """dB window ``(low, high)`` that a strategy maps onto the output range.

    Equalized reports the full ``[min, max]`` range it equalizes over.
    Without valid samples both bounds are ``nan``.

    Parameters
    ----------
    stats : DbStatistics
        Statistics of the band.
    config : StrategyConfig
        Strategy variant.
    role : PolarizationRole
        Band role; only the Tamed strategy depends on it.

    Returns
    -------
    Tuple[float, float]
    """
    if stats.is_empty:
        return float('nan'), float('nan')
    if isinstance(config, (StandardConfig, EqualizedConfig)):
        return stats.min, stats.max
    if isinstance(config, (RobustConfig, AdaptiveConfig, ClaheConfig)):
        return (percentile(stats, config.low_percentile),
                percentile(stats, config.high_percentile))
    if isinstance(config, TamedConfig):
        if role is PolarizationRole.CROSS_POL:
            low_p = config.cross_pol_low_percentile
        else:
            low_p = config.co_pol_low_percentile
        return (percentile(stats, low_p),
                percentile(stats, config.high_percentile))
    raise ConfigurationError(
        f"unknown strategy configuration {type(config).__name__}"
    )


def scale_linear(
    db: np.ndarray,
    mask: np.ndarray,
    low: float,
    high: float,
    bit_depth: BitDepth,
    gamma: float = 1.0,
) -> np.ndarray:
    """Clamp to ``[low, high]``, normalize, apply *gamma*, scale and round.

    Parameters
    ----------
    db : np.ndarray
        2D dB array.
    mask : np.ndarray
        Validity mask; invalid pixels are written as 0.
    low, high : float
        dB window.
    bit_depth : BitDepth
        Output depth.
    gamma : float
        Exponent applied to the normalized ``[0, 1]`` value. Default 1.

    Returns
    -------
    np.ndarray
        uint8 or uint16 image.
    """
    out = np.zeros(db.shape, dtype=bit_depth.dtype)
    if not high > low:
        logger.warning("Degenerate scaling window [%s, %s]; "
                       "valid pixels set to mid level", low, high)
        out[mask] = mid_level(bit_depth)
        return out

    max_out = float(bit_depth.max_value)
    scale = 1.0 / (high - low)
    for r0, r1 in row_blocks(db.shape):
        block = db[r0:r1].astype(np.float64)
        np.clip(block, low, high, out=block)
        block -= low
        block *= scale
        if gamma != 1.0:
            np.power(block, gamma, out=block)
        block *= max_out
        np.rint(block, out=block)
        np.clip(block, 0.0, max_out, out=block)
        np.copyto(out[r0:r1], block, casting='unsafe', where=mask[r0:r1])
    return out


def _linear_strategy(db, mask, stats, bit_depth, config, role):
    low, high = scaling_window(stats, config, role)
    gamma = config.gamma if isinstance(config, AdaptiveConfig) else 1.0
    logger.debug("%s scaling window [%.2f, %.2f] dB, gamma=%.2f",
                 config.name, low, high, gamma)
    return scale_linear(db, mask, low, high, bit_depth, gamma)


def autoscale_equalized(
    db: np.ndarray,
    mask: np.ndarray,
    stats: DbStatistics,
    bit_depth: BitDepth,
) -> np.ndarray:
    """Global histogram equalization using the precomputed dB histogram.

    Each valid pixel maps to its bin's cumulative rank, stretched so the
    lowest occupied bin lands on 0 and the top on the output ceiling.

    Parameters
    ----------
    db : np.ndarray
        2D dB array.
    mask : np.ndarray
        Validity mask.
    stats : DbStatistics
        Statistics of *db* under *mask*.
    bit_depth : BitDepth
        Output depth.

    Returns
    -------
    np.ndarray
        uint8 or uint16 image.
    """
    out = np.zeros(db.shape, dtype=bit_depth.dtype)
    if stats.is_empty:
        return out

    cumulative = stats.cumulative.astype(np.float64)
    first = cumulative[0]
    denom = stats.valid_count - first
    if stats.is_degenerate or denom <= 0:
        logger.warning("Degenerate histogram; valid pixels set to mid level")
        out[mask] = mid_level(bit_depth)
        return out

    max_out = float(bit_depth.max_value)
    lut = np.rint((cumulative - first) / denom * max_out)
    np.clip(lut, 0.0, max_out, out=lut)
    lut = lut.astype(bit_depth.dtype)

    for r0, r1 in row_blocks(db.shape):
        values = lut[stats.bin_index(db[r0:r1])]
        np.copyto(out[r0:r1], values, where=mask[r0:r1])
    return out


_DISPATCH: Dict[type, Callable[..., np.ndarray]] = {
    StandardConfig: _linear_strategy,
    RobustConfig: _linear_strategy,
    AdaptiveConfig: _linear_strategy,
    TamedConfig: _linear_strategy,
    EqualizedConfig: (
        lambda db, mask, stats, bit_depth, config, role:
        autoscale_equalized(db, mask, stats, bit_depth)
    ),
    ClaheConfig: (
        lambda db, mask, stats, bit_depth, config, role:
        autoscale_clahe(db, mask, stats, bit_depth, config)
    ),
}


def autoscale(
    db: np.ndarray,
    mask: np.ndarray,
    stats: DbStatistics,
    bit_depth: Union[BitDepth, int],
    config: StrategyConfig,
    role: PolarizationRole = PolarizationRole.CO_POL,
) -> np.ndarray:
    """Scale a dB image with the strategy selected by *config*.

    Parameters
    ----------
    db : np.ndarray
        2D dB array from :func:`~grdscale.image_processing.intensity.to_decibels_masked`.
    mask : np.ndarray
        Validity mask, same shape.
    stats : DbStatistics
        Statistics from :func:`~grdscale.image_processing.statistics.compute_stats`.
    bit_depth : BitDepth or int
        Output depth, ``BitDepth.U8``/``8`` or ``BitDepth.U16``/``16``.
    config : StrategyConfig
        One strategy configuration variant.
    role : PolarizationRole
        Polarization role of the band (Tamed only).

    Returns
    -------
    np.ndarray
        uint8 or uint16 image, 0 where *mask* is False.

    Raises
    ------
    ConfigurationError
        If *config* is not a strategy configuration.
    ValidationError
        If *bit_depth* is unsupported or *db* is not 2D.
    """
    validate_image_2d(db, 'db')
    validate_mask(mask, db.shape)
    bit_depth = _as_bit_depth(bit_depth)
    handler = _DISPATCH.get(type(config))
    if handler is None:
        raise ConfigurationError(
            f"unknown strategy configuration {type(config).__name__}"
        )
    logger.debug("Autoscale strategy=%s bit_depth=%d valid=%d",
                 config.name, bit_depth.value, stats.valid_count)
    return handler(db, mask, stats, bit_depth, config, role)


@processor_version('1.0.0')
@processor_tags(modalities=[ImageModality.SAR], category=ProcessorCategory.ENHANCE,
                description='Calibrated intensity to scaled 8/16-bit samples')
class Autoscale(ImageTransform):
    """Intensity to scaled integer image in one processor.

    Runs dB conversion, statistics and the configured strategy.

    Parameters
    ----------
    strategy : StrategyConfig, optional
        Strategy variant. Default ``ClaheConfig()``.
    bit_depth : BitDepth
        Output depth. Default ``BitDepth.U8``.
    role : PolarizationRole
        Band role for the Tamed strategy. Default co-pol.

    Examples
    --------
    >>> scaler = Autoscale(RobustConfig(), bit_depth=BitDepth.U16)
    >>> scaled = scaler.apply(sigma0)
    >>> scaled8 = scaler.apply(sigma0, bit_depth=BitDepth.U8)
    """

    bit_depth: Annotated[BitDepth, Desc('Output bit depth')] = BitDepth.U8
    role: Annotated[PolarizationRole, Desc('Polarization role of the band')] = (
        PolarizationRole.CO_POL
    )

    def __init__(
        self,
        strategy: Optional[StrategyConfig] = None,
        bit_depth: Union[BitDepth, int] = BitDepth.U8,
        role: PolarizationRole = PolarizationRole.CO_POL,
    ) -> None:
        self.strategy = strategy if strategy is not None else ClaheConfig()
        if type(self.strategy) not in _DISPATCH:
            raise ConfigurationError(
                f"unknown strategy configuration {type(self.strategy).__name__}"
            )
        self.bit_depth = _as_bit_depth(bit_depth)
        self.role = role

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Scale an intensity image.

        Parameters
        ----------
        source : np.ndarray
            2D calibrated intensity array.
        **kwargs
            ``bit_depth`` / ``role`` overrides and ``progress_callback``.

        Returns
        -------
        np.ndarray
            uint8 or uint16 image.
        """
        params = self._resolve_params(kwargs)
        db, mask = to_decibels_masked(source)
        self._report_progress(kwargs, 0.3)
        stats = compute_stats(db, mask)
        self._report_progress(kwargs, 0.5)
        result = autoscale(db, mask, stats, params['bit_depth'],
                           self.strategy, params['role'])
        self._report_progress(kwargs, 1.0)
        return result
