# -*- coding: utf-8 -*-
"""
Image Processing Base Classes - Abstract interfaces for image processors.

Defines the ``ImageProcessor`` common base class and the ``ImageTransform``
ABC for dense raster transforms. ``ImageProcessor`` provides version
checking at first instantiation and ``typing.Annotated``-based tunable
parameter declarations with runtime resolution through ``**kwargs``.

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
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# Third-party
import numpy as np

# grdscale internal
from grdscale.image_processing.params import ParamSpec, collect_param_specs

logger = logging.getLogger(__name__)


class ImageProcessor(ABC):
    """
    Common base class for all image processors.

    **Version checking**: Concrete subclasses that do not declare a processor
    version via ``@processor_version('x.y.z')`` trigger a ``UserWarning``
    at first instantiation.  The check uses ``__new__`` rather than
    ``__init_subclass__`` so that decorators have been applied by the time
    the check runs.

    **Tunable parameter flow**: Subclasses declare tunable parameters as
    ``typing.Annotated`` class-body fields using constraint markers from
    :mod:`grdscale.image_processing.params` (``Range``, ``Desc``).
    ``__init_subclass__`` collects these into ``__param_specs__``.  At
    runtime, ``_resolve_params(kwargs)`` merges instance values with
    keyword-argument overrides and validates them.
    """

    # Track which classes have been checked to warn only once per class.
    _version_warned_classes: set = set()

    #: Tuple of :class:`~grdscale.image_processing.params.ParamSpec` built
    #: automatically by ``__init_subclass__`` from ``Annotated`` fields.
    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        if cls not in ImageProcessor._version_warned_classes:
            ImageProcessor._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance values with runtime *kwargs* overrides.

        For each declared parameter in ``__param_specs__``:

        1. If present in *kwargs*, use the *kwargs* value.
        2. Otherwise use the instance attribute (``self.<name>``).

        Every resolved value is validated against its spec.

        Parameters
        ----------
        kwargs : Dict[str, Any]
            Runtime keyword arguments.  May contain non-param keys
            (e.g. ``progress_callback``); those are ignored.

        Returns
        -------
        Dict[str, Any]
            ``{param_name: resolved_value}`` for every declared param.

        Raises
        ------
        ConfigurationError
            If a value violates its type, finiteness or range constraints.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            else:
                value = getattr(self, spec.name)
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    def _report_progress(
        self, kwargs: Dict[str, Any], fraction: float
    ) -> None:
        """Report progress to an optional callback.

        If the caller provided a ``progress_callback`` keyword argument,
        it is called with the current fraction (0.0 to 1.0). If no
        callback is provided, this is a no-op.

        Parameters
        ----------
        kwargs : Dict[str, Any]
            The keyword arguments passed to the processor method.
        fraction : float
            Progress fraction in [0.0, 1.0].
        """
        cb = kwargs.get('progress_callback')
        if cb is not None:
            cb(float(fraction))


class ImageTransform(ImageProcessor):
    """
    Abstract base class for image transforms.

    Provides the interface for transforms that take a source image array
    and produce a transformed output array.
    """

    @abstractmethod
    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """
        Apply the transform to a source image array.

        Parameters
        ----------
        source : np.ndarray
            Input image, shape ``(rows, cols)``.

        Returns
        -------
        np.ndarray
            Transformed image.
        """
        ...
