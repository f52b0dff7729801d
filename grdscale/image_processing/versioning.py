# -*- coding: utf-8 -*-
"""
Processor Versioning - Version and capability-tag decorators.

Provides the ``@processor_version`` class decorator for stamping semantic
version strings on processor classes, and ``@processor_tags`` for
attaching modality/category metadata so callers can discover processors
by capability. The processor version is recorded in QC metadata next to
the scaling parameters it produced.

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
import importlib.metadata
from typing import Optional, Sequence, Type, TypeVar

# grdscale internal
from grdscale.vocabulary import ImageModality, ProcessorCategory

T = TypeVar('T')


def processor_version(version: Optional[str] = None):
    """Class decorator that stamps a processor version on a processor class.

    Sets ``__processor_version__`` as a class attribute. If a version is
    not provided it is read from the installed ``grdscale`` distribution
    metadata, falling back to ``'unknown'`` for source checkouts.

    Parameters
    ----------
    version : str, optional
        Semantic version string (e.g., ``'1.0.0'``).

    Returns
    -------
    Callable
        Class decorator that sets ``__processor_version__`` on the class.

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class MyTransform(ImageTransform):
    ...     def apply(self, source, **kwargs):
    ...         return source
    >>> MyTransform.__processor_version__
    '1.0.0'
    """
    def decorator(cls: Type[T]) -> Type[T]:
        if version:
            cls.__processor_version__ = version
        else:
            try:
                cls.__processor_version__ = importlib.metadata.version('grdscale')
            except importlib.metadata.PackageNotFoundError:
                cls.__processor_version__ = "unknown"
        return cls
    return decorator


def processor_tags(
    modalities: Optional[Sequence[ImageModality]] = None,
    category: Optional[ProcessorCategory] = None,
    description: Optional[str] = None,
):
    """Class decorator for processor capability metadata.

    Stamps ``__processor_tags__`` on the class with modality, category,
    and description metadata.

    Parameters
    ----------
    modalities : Sequence[ImageModality], optional
        Imagery modalities this processor is designed for.
    category : ProcessorCategory, optional
        Processing category.
    description : str, optional
        Short human-readable description of the processor's purpose.

    Raises
    ------
    TypeError
        If any element of *modalities* is not an ``ImageModality``, or
        *category* is not a ``ProcessorCategory``.
    """
    if modalities is not None:
        for m in modalities:
            if not isinstance(m, ImageModality):
                raise TypeError(
                    f"modalities must be ImageModality members, got {m!r}"
                )
    if category is not None and not isinstance(category, ProcessorCategory):
        raise TypeError(
            f"category must be a ProcessorCategory member, got {category!r}"
        )

    def decorator(cls: Type[T]) -> Type[T]:
        cls.__processor_tags__ = {
            'modalities': tuple(modalities) if modalities else (),
            'category': category,
            'description': description,
        }
        return cls
    return decorator
