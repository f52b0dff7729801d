# -*- coding: utf-8 -*-
"""
Tunable Parameter Annotations - Declarative parameter constraints via typing.Annotated.

Provides constraint marker types (``Range``, ``Desc``) for use
inside ``typing.Annotated`` annotations, plus the ``ParamSpec`` introspection
class and the collection and validation utilities consumed by processor
classes and by the frozen configuration dataclasses (strategy and
compositor configs, processing parameters).

Usage
-----
Declare tunable parameters as class-body annotations::

    from dataclasses import dataclass
    from typing import Annotated
    from grdscale.image_processing.params import Range, Desc, validate_params

    @dataclass(frozen=True)
    class RobustConfig:
        low_percentile: Annotated[float, Range(min=0.0, max=100.0),
                                  Desc('Lower percentile')] = 2.0

        def __post_init__(self):
            validate_params(self)

Constraint violations raise ``ConfigurationError`` so that a bad
configuration fails before any array is touched.

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
import math
from enum import Enum
from typing import (
    Annotated,
    Any,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# grdscale internal
from grdscale.exceptions import ConfigurationError


# =====================================================================
# Constraint marker types  (used inside Annotated[...])
# =====================================================================

class ParamMeta:
    """Base marker for tunable parameter metadata in ``Annotated`` types.

    Any ``Annotated`` class-body field whose metadata includes at least one
    ``ParamMeta`` subclass instance is treated as a tunable parameter.
    """


class Range(ParamMeta):
    """Inclusive numeric range constraint.

    Parameters
    ----------
    min : int or float, optional
        Minimum allowed value (inclusive).
    max : int or float, optional
        Maximum allowed value (inclusive).
    """

    __slots__ = ('min', 'max')

    def __init__(
        self,
        min: Optional[Union[int, float]] = None,
        max: Optional[Union[int, float]] = None,
    ) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        parts = []
        if self.min is not None:
            parts.append(f"min={self.min!r}")
        if self.max is not None:
            parts.append(f"max={self.max!r}")
        return f"Range({', '.join(parts)})"


class Desc(ParamMeta):
    """Human-readable parameter description.

    Parameters
    ----------
    text : str
        Description text shown in documentation and QC metadata.
    """

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


# =====================================================================
# ParamSpec -- processed introspection data class
# =====================================================================

_SENTINEL = object()


class ParamSpec:
    """Resolved specification for a single tunable parameter.

    Built automatically from ``Annotated`` declarations by
    ``collect_param_specs``.

    Attributes
    ----------
    name : str
        Parameter name (keyword-argument key).
    param_type : type
        Expected Python type (``float``, ``int``, ``bool``, an ``Enum``...).
    default : Any
        Default value, or ``None`` if the parameter is required.
    description : str
        Human-readable description.
    min_value : int, float, or None
        Inclusive minimum (from ``Range``).
    max_value : int, float, or None
        Inclusive maximum (from ``Range``).
    """

    __slots__ = (
        'name', 'param_type', 'default', '_has_default',
        'description', 'min_value', 'max_value',
    )

    def __init__(
        self,
        name: str,
        param_type: type,
        default: Any,
        has_default: bool,
        description: str,
        min_value: Optional[Union[int, float]],
        max_value: Optional[Union[int, float]],
    ) -> None:
        self.name = name
        self.param_type = param_type
        self.default = default
        self._has_default = has_default
        self.description = description
        self.min_value = min_value
        self.max_value = max_value

    @property
    def required(self) -> bool:
        """Whether this parameter is required (has no default)."""
        return not self._has_default

    def validate(self, value: Any) -> None:
        """Validate *value* against this spec's type and constraints.

        * ``int`` is accepted when ``param_type`` is ``float``.
        * ``bool`` is never accepted for a numeric parameter.
        * ``None`` is accepted when the default is ``None``.
        * ``nan`` and ``inf`` are never accepted.
        * Range bounds are inclusive.

        Raises
        ------
        ConfigurationError
            If *value* has the wrong type, is not finite, or violates its
            range.
        """
        if value is None and self._has_default and self.default is None:
            return

        # -- type check --
        if self.param_type in (int, float) and isinstance(value, bool):
            raise ConfigurationError(
                f"Parameter '{self.name}' must be "
                f"{self.param_type.__name__}, got bool"
            )
        if self.param_type is float:
            if not isinstance(value, (int, float)):
                raise ConfigurationError(
                    f"Parameter '{self.name}' must be "
                    f"{self.param_type.__name__}, got {type(value).__name__}"
                )
        elif self.param_type is not object:
            if not isinstance(value, self.param_type):
                raise ConfigurationError(
                    f"Parameter '{self.name}' must be "
                    f"{self.param_type.__name__}, got {type(value).__name__}"
                )

        # -- finiteness check --
        if isinstance(value, float) and not math.isfinite(value):
            raise ConfigurationError(
                f"Parameter '{self.name}' must be finite, got {value!r}"
            )

        # -- range check --
        if self.min_value is not None and value < self.min_value:
            raise ConfigurationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is below minimum {self.min_value!r}"
            )
        if self.max_value is not None and value > self.max_value:
            raise ConfigurationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is above maximum {self.max_value!r}"
            )


    def __repr__(self) -> str:
        parts = (
            f"ParamSpec(name={self.name!r}, "
            f"param_type={self.param_type.__name__}, "
            f"required={self.required!r}"
        )
        if not self.required:
            parts += f", default={self.default!r}"
        if self.min_value is not None:
            parts += f", min_value={self.min_value!r}"
        if self.max_value is not None:
            parts += f", max_value={self.max_value!r}"
        return parts + ")"


# =====================================================================
# Annotation collection
# =====================================================================

def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Parse ``Annotated`` type hints on *cls* into a tuple of ``ParamSpec``.

    Only fields whose ``Annotated`` metadata includes at least one
    ``ParamMeta`` subclass instance are collected.  Fields are ordered by
    MRO (parent-first, preserving declaration order within each class).
    """
    hints = get_type_hints(cls, include_extras=True)

    seen: set = set()
    ordered_names: list = []
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, '__annotations__', {}):
            if name not in seen and name in hints:
                seen.add(name)
                ordered_names.append(name)

    specs: list = []
    for name in ordered_names:
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue

        base_type = hint.__args__[0]
        param_metas = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
        if not param_metas:
            continue

        range_meta: Optional[Range] = None
        desc_meta: Optional[Desc] = None
        for m in param_metas:
            if isinstance(m, Range):
                range_meta = m
            elif isinstance(m, Desc):
                desc_meta = m

        # Optional[X] annotations validate against X
        if get_origin(base_type) is Union:
            non_none = [a for a in base_type.__args__ if a is not type(None)]
            base_type = non_none[0] if len(non_none) == 1 else object

        default = getattr(cls, name, _SENTINEL)
        has_default = default is not _SENTINEL

        specs.append(ParamSpec(
            name=name,
            param_type=base_type,
            default=default if has_default else None,
            has_default=has_default,
            description=desc_meta.text if desc_meta else '',
            min_value=range_meta.min if range_meta else None,
            max_value=range_meta.max if range_meta else None,
        ))

    return tuple(specs)


def validate_params(obj: Any) -> None:
    """Validate every declared tunable parameter on *obj*.

    Intended for ``__post_init__`` of frozen configuration dataclasses.

    Raises
    ------
    ConfigurationError
        On the first parameter that violates its constraints.
    """
    for spec in collect_param_specs(type(obj)):
        spec.validate(getattr(obj, spec.name))


def params_to_dict(obj: Any) -> dict:
    """Serialise declared tunable parameters of *obj* to plain values.

    Enum members are written as their ``value``.
    """
    out = {}
    for spec in collect_param_specs(type(obj)):
        value = getattr(obj, spec.name)
        out[spec.name] = value.value if isinstance(value, Enum) else value
    return out
