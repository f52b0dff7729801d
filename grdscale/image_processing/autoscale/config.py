# -*- coding: utf-8 -*-
"""
Autoscale Strategy Configuration - Tagged configuration variants.

Each autoscale strategy is selected by exactly one immutable configuration
value carrying that strategy's parameters. The variant type is the tag;
:func:`grdscale.image_processing.autoscale.autoscale` dispatches on it
once per request. All parameters are validated when the value is built,
so an invalid configuration fails before any array is touched.

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
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Dict, Mapping, Type, Union

# grdscale internal
from grdscale.exceptions import ConfigurationError
from grdscale.image_processing.params import (
    Desc,
    Range,
    params_to_dict,
    validate_params,
)


def _check_window(low: float, high: float) -> None:
    if low >= high:
        raise ConfigurationError(
            f"low percentile ({low}) must be less than "
            f"high percentile ({high})"
        )


@dataclass(frozen=True)
class _StrategyConfigBase:
    """Shared validation and serialisation for strategy variants."""

    name: ClassVar[str] = ''

    def __post_init__(self) -> None:
        validate_params(self)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to ``{'name': ..., **params}``."""
        return {'name': self.name, **params_to_dict(self)}


@dataclass(frozen=True)
class StandardConfig(_StrategyConfigBase):
    """Linear map of the full valid range ``[min, max]``."""

    name: ClassVar[str] = 'standard'


@dataclass(frozen=True)
class RobustConfig(_StrategyConfigBase):
    """Linear map of a percentile window, clamping outliers."""

    name: ClassVar[str] = 'robust'

    low_percentile: Annotated[float, Range(min=0.0, max=100.0),
                              Desc('Lower percentile of the window')] = 2.0
    high_percentile: Annotated[float, Range(min=0.0, max=100.0),
                               Desc('Upper percentile of the window')] = 98.0

    def __post_init__(self) -> None:
        super().__post_init__()
        _check_window(self.low_percentile, self.high_percentile)


@dataclass(frozen=True)
class AdaptiveConfig(_StrategyConfigBase):
    """Percentile window followed by a fixed gamma on the normalized value."""

    name: ClassVar[str] = 'adaptive'

    low_percentile: Annotated[float, Range(min=0.0, max=100.0),
                              Desc('Lower percentile of the window')] = 10.0
    high_percentile: Annotated[float, Range(min=0.0, max=100.0),
                               Desc('Upper percentile of the window')] = 90.0
    gamma: Annotated[float, Range(min=0.0, max=10.0),
                     Desc('Gamma exponent on the normalized value')] = 0.8

    def __post_init__(self) -> None:
        super().__post_init__()
        _check_window(self.low_percentile, self.high_percentile)
        if self.gamma <= 0.0:
            raise ConfigurationError(
                f"gamma must be positive, got {self.gamma}"
            )


@dataclass(frozen=True)
class EqualizedConfig(_StrategyConfigBase):
    """Global histogram equalization over the dB histogram."""

    name: ClassVar[str] = 'equalized'


@dataclass(frozen=True)
class TamedConfig(_StrategyConfigBase):
    """Robust window with a low cut chosen by the band's polarization role.

    Cross-polarized channels sit closer to the noise floor and get the
    higher low cut.
    """

    name: ClassVar[str] = 'tamed'

    co_pol_low_percentile: Annotated[
        float, Range(min=0.0, max=100.0),
        Desc('Low cut for co-polarized bands')] = 2.0
    cross_pol_low_percentile: Annotated[
        float, Range(min=0.0, max=100.0),
        Desc('Low cut for cross-polarized bands')] = 5.0
    high_percentile: Annotated[float, Range(min=0.0, max=100.0),
                               Desc('Upper percentile of the window')] = 99.0

    def __post_init__(self) -> None:
        super().__post_init__()
        _check_window(self.co_pol_low_percentile, self.high_percentile)
        _check_window(self.cross_pol_low_percentile, self.high_percentile)


@dataclass(frozen=True)
class ClaheConfig(_StrategyConfigBase):
    """Contrast-limited adaptive histogram equalization."""

    name: ClassVar[str] = 'clahe'

    tile_rows: Annotated[int, Range(min=1, max=1024),
                         Desc('Tile grid rows')] = 8
    tile_cols: Annotated[int, Range(min=1, max=1024),
                         Desc('Tile grid columns')] = 8
    bins: Annotated[int, Range(min=2, max=65536),
                    Desc('Histogram bins per tile')] = 256
    clip_limit: Annotated[float, Range(min=0.0),
                          Desc('Clip level as a multiple of the mean bin count')] = 2.0
    low_percentile: Annotated[float, Range(min=0.0, max=100.0),
                              Desc('Lower percentile of the normalization window')] = 1.0
    high_percentile: Annotated[float, Range(min=0.0, max=100.0),
                               Desc('Upper percentile of the normalization window')] = 99.0

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.clip_limit <= 0.0:
            raise ConfigurationError(
                f"clip_limit must be positive, got {self.clip_limit}"
            )
        _check_window(self.low_percentile, self.high_percentile)


StrategyConfig = Union[
    StandardConfig,
    RobustConfig,
    AdaptiveConfig,
    EqualizedConfig,
    TamedConfig,
    ClaheConfig,
]

STRATEGY_CONFIGS: Dict[str, Type[_StrategyConfigBase]] = {
    cls.name: cls
    for cls in (StandardConfig, RobustConfig, AdaptiveConfig,
                EqualizedConfig, TamedConfig, ClaheConfig)
}


def strategy_from_dict(data: Union[str, Mapping[str, Any]]) -> StrategyConfig:
    """Build a strategy configuration from a name or a mapping.

    Parameters
    ----------
    data : str or Mapping[str, Any]
        Strategy name (defaults for all parameters), or a mapping with a
        ``'name'`` key plus parameter overrides.

    Returns
    -------
    StrategyConfig

    Raises
    ------
    ConfigurationError
        If the name is unknown, a parameter is not recognised, or a value
        is invalid.

    Examples
    --------
    >>> strategy_from_dict({'name': 'clahe', 'tile_rows': 4})
    ClaheConfig(tile_rows=4, tile_cols=8, bins=256, clip_limit=2.0, ...)
    """
    if isinstance(data, str):
        data = {'name': data}
    params = dict(data)
    name = str(params.pop('name', '')).lower()
    if name not in STRATEGY_CONFIGS:
        raise ConfigurationError(
            f"strategy must be one of {tuple(STRATEGY_CONFIGS)}, got '{name}'"
        )
    try:
        return STRATEGY_CONFIGS[name](**params)
    except TypeError as exc:
        raise ConfigurationError(
            f"invalid parameters for strategy '{name}': {exc}"
        ) from exc
