# -*- coding: utf-8 -*-
"""
Processing Pipeline - From calibrated intensity to final product arrays.

Runs one request end to end:

1. optional polarization arithmetic on a band pair,
2. dB conversion with validity masking,
3. statistics and autoscaling with the configured strategy,
4. optional resize to a long-side target,
5. optional padding to a square canvas,
6. optional synthetic RGB composite of two scaled bands.

Geometry metadata is updated at every geometric step, and each scaled
band reports a ``BandSummary`` for quality-control sidecars. All options
live in one immutable ``ProcessingParams`` value that can be loaded from a
mapping or a YAML file.

Dependencies
------------
numpy
scipy
pyyaml

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
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Any, Dict, List, Mapping, Optional, Tuple, Union

# Third-party
import numpy as np
import yaml

# grdscale internal
from grdscale.exceptions import ConfigurationError, ShapeMismatchError
from grdscale.geometry.meta import GeometryMeta
from grdscale.geometry.padding import pad_to_square
from grdscale.geometry.resize import resize_image
from grdscale.image_processing.autoscale import (
    STRATEGY_CONFIGS,
    ClaheConfig,
    StrategyConfig,
    autoscale,
    scaling_window,
    strategy_from_dict,
)
from grdscale.image_processing.intensity import to_decibels_masked
from grdscale.image_processing.params import Desc, Range, validate_params
from grdscale.image_processing.polarization import combine_bands
from grdscale.image_processing.statistics import compute_stats, percentiles
from grdscale.image_processing.synthetic_rgb import (
    RgbCompositeConfig,
    create_synthetic_rgb,
)
from grdscale.vocabulary import (
    BitDepth,
    PolarizationRole,
    ProcessingOperation,
    ResampleFilter,
)

logger = logging.getLogger(__name__)

#: Percentiles reported in every band summary.
QC_PERCENTILES = (1, 2, 5, 25, 50, 75, 95, 98, 99)

_BAND_NAMES = {
    ProcessingOperation.MULTIBAND_VV_VH: ('VV', 'VH'),
    ProcessingOperation.MULTIBAND_HH_HV: ('HH', 'HV'),
}


# =====================================================================
# Configuration
# =====================================================================

@dataclass(frozen=True)
class ProcessingParams:
    """Every option of a processing request.

    Attributes
    ----------
    bit_depth : BitDepth
        Output depth. Default 8-bit.
    strategy : StrategyConfig
        Autoscale strategy. Default ``ClaheConfig()``.
    target_size : int or None
        Long side of the output; ``None`` keeps the native size.
    pad : bool
        Centre the output in a square canvas.
    resample : ResampleFilter
        Filter used when resizing.
    operation : ProcessingOperation
        How a band pair becomes the product.
    composite : bool
        Build a synthetic RGB from a two-band operation. Always 8-bit.
    rgb : RgbCompositeConfig
        Synthetic RGB table constants.
    """

    bit_depth: Annotated[BitDepth, Desc('Output bit depth')] = BitDepth.U8
    strategy: Annotated[StrategyConfig, Desc('Autoscale strategy')] = field(
        default_factory=ClaheConfig)
    target_size: Annotated[Optional[int], Range(min=1),
                           Desc('Output long side, None for native')] = None
    pad: Annotated[bool, Desc('Pad the output to a square')] = False
    resample: Annotated[ResampleFilter, Desc('Resize filter')] = (
        ResampleFilter.BILINEAR)
    operation: Annotated[ProcessingOperation,
                         Desc('Polarization operation')] = (
        ProcessingOperation.SINGLE_BAND)
    composite: Annotated[bool, Desc('Synthetic RGB of a band pair')] = False
    rgb: Annotated[RgbCompositeConfig, Desc('Synthetic RGB constants')] = field(
        default_factory=RgbCompositeConfig)

    def __post_init__(self) -> None:
        validate_params(self)
        if type(self.strategy) not in STRATEGY_CONFIGS.values():
            raise ConfigurationError(
                f"strategy must be a strategy configuration, "
                f"got {type(self.strategy).__name__}"
            )
        if self.composite and not self.operation.is_multiband:
            raise ConfigurationError(
                f"composite requires a multiband operation, "
                f"got '{self.operation.value}'"
            )

    @property
    def output_bit_depth(self) -> BitDepth:
        """Bit depth actually produced; composites are always 8-bit."""
        return BitDepth.U8 if self.composite else self.bit_depth

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ProcessingParams':
        """Build parameters from plain values.

        Enum fields accept their value (``bit_depth: 16``,
        ``operation: 'ratio'``); ``resample`` accepts a filter name;
        ``strategy`` accepts a name or a mapping for
        :func:`~grdscale.image_processing.autoscale.strategy_from_dict`;
        ``rgb`` accepts a mapping of ``RgbCompositeConfig`` fields.

        Raises
        ------
        ConfigurationError
            On unknown keys or invalid values.
        """
        values = dict(data)
        unknown = set(values) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(
                f"unknown processing parameters: {sorted(unknown)}"
            )
        try:
            if isinstance(values.get('bit_depth'), int):
                values['bit_depth'] = BitDepth(values['bit_depth'])
            if isinstance(values.get('strategy'), (str, Mapping)):
                values['strategy'] = strategy_from_dict(values['strategy'])
            if isinstance(values.get('resample'), str):
                values['resample'] = ResampleFilter[values['resample'].upper()]
            if isinstance(values.get('operation'), str):
                values['operation'] = ProcessingOperation(values['operation'])
            if isinstance(values.get('rgb'), Mapping):
                values['rgb'] = RgbCompositeConfig(**values['rgb'])
        except ConfigurationError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"invalid processing parameters: {exc}"
            ) from exc
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'ProcessingParams':
        """Load parameters from a YAML file.

        The file holds a mapping with the keys accepted by
        :meth:`from_dict`; an empty file gives the defaults.

        Examples
        --------
        .. code-block:: yaml

            bit_depth: 16
            strategy:
              name: tamed
              high_percentile: 99.5
            target_size: 2048
            pad: true
        """
        with open(path) as f:
            data = yaml.safe_load(f)
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"{path}: expected a mapping, got {type(data).__name__}"
            )
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-value form accepted by :meth:`from_dict`."""
        return {
            'bit_depth': self.bit_depth.value,
            'strategy': self.strategy.to_dict(),
            'target_size': self.target_size,
            'pad': self.pad,
            'resample': self.resample.name.lower(),
            'operation': self.operation.value,
            'composite': self.composite,
            'rgb': self.rgb.to_dict(),
        }


# =====================================================================
# Results
# =====================================================================

def _finite_or_none(value: float) -> Optional[float]:
    return None if value is None or math.isnan(value) else float(value)


@dataclass(frozen=True)
class BandSummary:
    """Quality-control statistics of one scaled band.

    Attributes
    ----------
    name : str
        Band label (``'VV'``, ``'ratio'``, ...).
    min, max : float
        Valid dB range, ``nan`` without valid samples.
    valid_count : int
        Number of valid samples.
    percentiles : Dict[str, float]
        QC percentiles keyed ``'p01'`` ... ``'p99'``.
    window : Tuple[float, float]
        dB window the strategy mapped onto the output range.
    degenerate : bool
        True when the band had no valid samples or a zero-width range.
    """

    name: str
    min: float
    max: float
    valid_count: int
    percentiles: Dict[str, float]
    window: Tuple[float, float]
    degenerate: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'min': _finite_or_none(self.min),
            'max': _finite_or_none(self.max),
            'valid_count': self.valid_count,
            'percentiles': {k: _finite_or_none(v)
                            for k, v in self.percentiles.items()},
            'window': [_finite_or_none(v) for v in self.window],
            'degenerate': self.degenerate,
        }


@dataclass
class ProcessedImage:
    """Final arrays, geometry and QC summaries of one request.

    Attributes
    ----------
    bands : List[np.ndarray]
        Scaled single-channel bands at the final geometry.
    geometry : GeometryMeta or None
        Updated geometry, ``None`` when none was supplied.
    bit_depth : BitDepth
        Depth of ``bands`` (and 8-bit for ``rgb``).
    summaries : List[BandSummary]
        One summary per scaled band.
    operation : ProcessingOperation
        Operation that produced the product.
    strategy : str
        Name of the autoscale strategy.
    rgb : np.ndarray or None
        ``(rows, cols, 3)`` uint8 composite, when requested.
    """

    bands: List[np.ndarray]
    geometry: Optional[GeometryMeta]
    bit_depth: BitDepth
    summaries: List[BandSummary]
    operation: ProcessingOperation
    strategy: str
    rgb: Optional[np.ndarray] = None

    @property
    def height(self) -> int:
        return int(self.bands[0].shape[0])

    @property
    def width(self) -> int:
        return int(self.bands[0].shape[1])

    def to_metadata(self) -> Dict[str, Any]:
        """JSON-ready metadata for writer and QC sidecar collaborators."""
        return {
            'width': self.width,
            'height': self.height,
            'bit_depth': self.bit_depth.value,
            'operation': self.operation.label,
            'strategy': self.strategy,
            'synthetic_rgb': self.rgb is not None,
            'geometry': self.geometry.to_dict() if self.geometry else None,
            'bands': [s.to_dict() for s in self.summaries],
        }


# =====================================================================
# Orchestration
# =====================================================================

def _scale_band(
    intensity: np.ndarray,
    strategy: StrategyConfig,
    bit_depth: BitDepth,
    role: PolarizationRole,
    name: str,
) -> Tuple[np.ndarray, BandSummary]:
    logger.info("Processing band %s (%s, %d-bit)",
                name, strategy.name, bit_depth.value)
    db, mask = to_decibels_masked(intensity)
    stats = compute_stats(db, mask)
    scaled = autoscale(db, mask, stats, bit_depth, strategy, role)

    window = scaling_window(stats, strategy, role)
    degenerate = stats.is_degenerate or not window[1] > window[0]
    if degenerate:
        logger.warning("Band %s is degenerate (valid=%d, min=%s, max=%s)",
                       name, stats.valid_count, stats.min, stats.max)
    qc = percentiles(stats, QC_PERCENTILES)
    summary = BandSummary(
        name=name,
        min=stats.min,
        max=stats.max,
        valid_count=stats.valid_count,
        percentiles={f"p{p:02d}": v for p, v in zip(QC_PERCENTILES, qc)},
        window=window,
        degenerate=degenerate,
    )
    return scaled, summary


def _apply_geometry(
    bands: List[np.ndarray],
    params: ProcessingParams,
    geometry: Optional[GeometryMeta],
) -> Tuple[List[np.ndarray], Optional[GeometryMeta]]:
    """Resize then pad every band; geometry is updated once."""
    out = []
    final_geometry = geometry
    for band in bands:
        resized = resize_image(band, params.target_size, geometry,
                               params.resample)
        data, final_geometry = resized.data, resized.geometry
        if params.pad:
            padded = pad_to_square(data, final_geometry)
            data, final_geometry = padded.data, padded.geometry
        out.append(data)
    return out, final_geometry


def process_band(
    intensity: np.ndarray,
    params: Optional[ProcessingParams] = None,
    geometry: Optional[GeometryMeta] = None,
    role: PolarizationRole = PolarizationRole.CO_POL,
    name: str = 'band',
) -> ProcessedImage:
    """Scale, resize and pad one intensity band.

    Parameters
    ----------
    intensity : np.ndarray
        2D calibrated intensity.
    params : ProcessingParams, optional
        Request options. Defaults to ``ProcessingParams()``.
    geometry : GeometryMeta, optional
        Geometry of *intensity*.
    role : PolarizationRole
        Polarization role of the band (Tamed strategy).
    name : str
        Band label for the summary.

    Returns
    -------
    ProcessedImage
    """
    params = params if params is not None else ProcessingParams()
    scaled, summary = _scale_band(intensity, params.strategy,
                                  params.bit_depth, role, name)
    bands, geometry = _apply_geometry([scaled], params, geometry)
    return ProcessedImage(
        bands=bands,
        geometry=geometry,
        bit_depth=params.bit_depth,
        summaries=[summary],
        operation=params.operation,
        strategy=params.strategy.name,
    )


def process_pair(
    co: np.ndarray,
    cross: np.ndarray,
    params: ProcessingParams,
    geometry: Optional[GeometryMeta] = None,
) -> ProcessedImage:
    """Process a co-/cross-polarized band pair.

    Arithmetic operations combine the bands into one intensity band first.
    Multiband operations scale both bands with their polarization roles
    and, when ``params.composite`` is set, compose them into an 8-bit
    synthetic RGB after resize and pad.

    Parameters
    ----------
    co : np.ndarray
        2D co-polarized intensity (VV or HH).
    cross : np.ndarray
        2D cross-polarized intensity (VH or HV).
    params : ProcessingParams
        Request options; ``operation`` must not be ``SINGLE_BAND``.
    geometry : GeometryMeta, optional
        Shared geometry of both bands.

    Returns
    -------
    ProcessedImage

    Raises
    ------
    ShapeMismatchError
        If the bands differ in shape.
    ConfigurationError
        If ``params.operation`` is ``SINGLE_BAND``.
    """
    if co.shape != cross.shape:
        raise ShapeMismatchError(
            f"band shapes differ: co {co.shape} vs cross {cross.shape}"
        )
    operation = params.operation
    if operation is ProcessingOperation.SINGLE_BAND:
        raise ConfigurationError(
            "single_band takes one band; use process_band"
        )

    if operation.is_arithmetic:
        combined = combine_bands(co, cross, operation)
        return process_band(combined, params, geometry, name=operation.value)

    bit_depth = params.output_bit_depth
    co_name, cross_name = _BAND_NAMES[operation]
    scaled_co, co_summary = _scale_band(
        co, params.strategy, bit_depth, PolarizationRole.CO_POL, co_name)
    scaled_cross, cross_summary = _scale_band(
        cross, params.strategy, bit_depth, PolarizationRole.CROSS_POL,
        cross_name)
    bands, geometry = _apply_geometry([scaled_co, scaled_cross], params,
                                      geometry)

    rgb = None
    if params.composite:
        rgb = create_synthetic_rgb(bands[0], bands[1], params.rgb)

    return ProcessedImage(
        bands=bands,
        geometry=geometry,
        bit_depth=bit_depth,
        summaries=[co_summary, cross_summary],
        operation=operation,
        strategy=params.strategy.name,
        rgb=rgb,
    )
