# -*- coding: utf-8 -*-
"""
Annotated Tunable Parameter Tests.

Tests for the typing.Annotated-based tunable parameter system: constraint
markers (Range, Desc), ParamSpec introspection, annotation
collection, dataclass validation helpers and _resolve_params runtime
resolution.

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

from dataclasses import dataclass
from typing import Annotated, Optional

import numpy as np
import pytest

from grdscale.exceptions import ConfigurationError
from grdscale.image_processing.base import ImageTransform
from grdscale.image_processing.params import (
    Desc,
    ParamMeta,
    ParamSpec,
    Range,
    collect_param_specs,
    params_to_dict,
    validate_params,
)
from grdscale.image_processing.versioning import processor_version
from grdscale.vocabulary import BitDepth


# ---------------------------------------------------------------------------
# Constraint marker construction
# ---------------------------------------------------------------------------

class TestRange:
    """Test Range constraint marker."""

    def test_basic(self):
        r = Range(min=0.0, max=1.0)
        assert r.min == 0.0
        assert r.max == 1.0

    def test_defaults_none(self):
        r = Range()
        assert r.min is None
        assert r.max is None

    def test_is_param_meta(self):
        assert isinstance(Range(), ParamMeta)

    def test_repr(self):
        assert 'min=0' in repr(Range(min=0, max=1))


class TestDesc:
    def test_basic(self):
        assert Desc('A description').text == 'A description'


# ---------------------------------------------------------------------------
# ParamSpec validation
# ---------------------------------------------------------------------------

class TestParamSpec:
    """Test ParamSpec introspection data class."""

    def test_required_when_no_default(self):
        spec = ParamSpec('mode', str, None, False, '', None, None)
        assert spec.required is True

    def test_int_accepted_as_float(self):
        ParamSpec('x', float, 0.5, True, '', None, None).validate(1)

    def test_bool_rejected_for_numeric(self):
        spec = ParamSpec('x', int, 1, True, '', None, None)
        with pytest.raises(ConfigurationError, match="got bool"):
            spec.validate(True)

    def test_wrong_type(self):
        spec = ParamSpec('x', float, 0.5, True, '', None, None)
        with pytest.raises(ConfigurationError, match="'x'"):
            spec.validate('bad')

    def test_min_boundary(self):
        spec = ParamSpec('x', float, 0.5, True, '', 0.0, None)
        spec.validate(0.0)
        with pytest.raises(ConfigurationError, match="below minimum"):
            spec.validate(-0.1)

    def test_max_boundary(self):
        spec = ParamSpec('x', float, 0.5, True, '', None, 1.0)
        spec.validate(1.0)
        with pytest.raises(ConfigurationError, match="above maximum"):
            spec.validate(1.1)

    @pytest.mark.parametrize("value", [float('nan'), float('inf'),
                                       float('-inf')])
    def test_non_finite_rejected(self, value):
        spec = ParamSpec('x', float, 0.5, True, '', 0.0, 1.0)
        with pytest.raises(ConfigurationError, match="must be finite"):
            spec.validate(value)

    def test_non_finite_rejected_without_range(self):
        spec = ParamSpec('x', float, 0.5, True, '', None, None)
        with pytest.raises(ConfigurationError, match="must be finite"):
            spec.validate(float('nan'))

    def test_none_allowed_when_default_none(self):
        ParamSpec('n', int, None, True, '', 1, None).validate(None)

    def test_enum_type(self):
        spec = ParamSpec('b', BitDepth, BitDepth.U8, True, '', None, None)
        spec.validate(BitDepth.U16)
        with pytest.raises(ConfigurationError):
            spec.validate(16)

    def test_configuration_error_is_value_error(self):
        spec = ParamSpec('x', float, 0.5, True, '', 0.0, None)
        with pytest.raises(ValueError):
            spec.validate(-1.0)


# ---------------------------------------------------------------------------
# collect_param_specs
# ---------------------------------------------------------------------------

class TestCollectParamSpecs:
    def test_plain_annotations_ignored(self):
        class C:
            x: float = 1.0
        assert collect_param_specs(C) == ()

    def test_single_annotated_field(self):
        class C:
            x: Annotated[float, Range(min=0), Desc('test')] = 1.0

        (spec,) = collect_param_specs(C)
        assert spec.name == 'x'
        assert spec.param_type is float
        assert spec.default == 1.0
        assert spec.min_value == 0
        assert spec.description == 'test'

    def test_optional_unwrapped(self):
        class C:
            n: Annotated[Optional[int], Range(min=1)] = None

        (spec,) = collect_param_specs(C)
        assert spec.param_type is int

    def test_inheritance_order(self):
        class Parent:
            a: Annotated[float, Range(min=0)] = 1.0

        class Child(Parent):
            b: Annotated[int, Range(min=1)] = 5

        assert [s.name for s in collect_param_specs(Child)] == ['a', 'b']


# ---------------------------------------------------------------------------
# Dataclass helpers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _Sample:
    level: Annotated[int, Range(min=0, max=10), Desc('level')] = 3
    depth: Annotated[BitDepth, Desc('depth')] = BitDepth.U8

    def __post_init__(self):
        validate_params(self)


class TestDataclassHelpers:
    def test_valid(self):
        assert _Sample(level=10).level == 10

    def test_invalid(self):
        with pytest.raises(ConfigurationError, match="level"):
            _Sample(level=11)

    def test_params_to_dict_writes_enum_values(self):
        assert params_to_dict(_Sample()) == {'level': 3, 'depth': 8}


# ---------------------------------------------------------------------------
# _resolve_params
# ---------------------------------------------------------------------------

@processor_version('1.0.0')
class _Scale(ImageTransform):
    factor: Annotated[float, Range(min=0.0, max=4.0), Desc('factor')] = 1.0

    def __init__(self, factor: float = 1.0):
        self.factor = factor

    def apply(self, source, **kwargs):
        params = self._resolve_params(kwargs)
        return source * params['factor']


class TestResolveParams:
    def test_instance_value(self):
        out = _Scale(2.0).apply(np.ones(3))
        np.testing.assert_array_equal(out, 2.0)

    def test_kwarg_override(self):
        out = _Scale(2.0).apply(np.ones(3), factor=3.0)
        np.testing.assert_array_equal(out, 3.0)

    def test_override_validated(self):
        with pytest.raises(ConfigurationError, match="above maximum"):
            _Scale().apply(np.ones(3), factor=5.0)

    def test_specs_collected(self):
        assert [s.name for s in _Scale.__param_specs__] == ['factor']
