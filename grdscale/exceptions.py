# -*- coding: utf-8 -*-
"""
grdscale Exception Hierarchy - Domain-specific exceptions for scaling requests.

Provides a small exception hierarchy that lets batch orchestrators catch
grdscale errors distinctly from Python built-in exceptions and decide
whether to skip, retry, or abort a request. All grdscale exceptions
subclass both ``GrdscaleError`` and the appropriate built-in exception for
backward compatibility.

Degenerate input (no valid pixels, constant images) and non-positive or
non-finite intensity samples are *not* errors; they are handled by the
validity mask and reported through QC metadata.

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


class GrdscaleError(Exception):
    """Base exception for all grdscale errors."""


class ValidationError(GrdscaleError, ValueError):
    """Invalid input array or call argument.

    Raised for wrong dimensionality, unsupported dtypes, percentile
    queries outside ``[0, 100]`` and non-positive target sizes.
    """


class ShapeMismatchError(ValidationError):
    """Two co-registered bands do not share the same shape.

    Fatal for the current request only; a batch caller may skip the
    product and continue.
    """


class ConfigurationError(GrdscaleError, ValueError):
    """Invalid strategy, compositor, or processing parameter.

    Raised while a configuration value is constructed, before any array
    is touched (e.g. non-positive clip limit, zero tile grid dimension,
    low percentile not below high percentile).
    """
