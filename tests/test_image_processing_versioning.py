# -*- coding: utf-8 -*-
"""
Processor Versioning Tests.

Tests for the @processor_version and @processor_tags decorators and the
version warning raised by ImageProcessor at first instantiation.

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

import warnings

import numpy as np
import pytest

from grdscale.image_processing.base import ImageProcessor, ImageTransform
from grdscale.image_processing.versioning import (
    processor_tags,
    processor_version,
)
from grdscale.vocabulary import ImageModality, ProcessorCategory


def _version_warnings(records):
    return [
        x for x in records
        if issubclass(x.category, UserWarning)
        and 'processor version' in str(x.message).lower()
    ]


# ---------------------------------------------------------------------------
# @processor_version decorator
# ---------------------------------------------------------------------------

class TestProcessorVersionDecorator:
    """Test that @processor_version stamps the version correctly."""

    def test_stamps_version_on_class(self):
        @processor_version('2.1.0')
        class _Versioned(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        assert _Versioned.__processor_version__ == '2.1.0'

    def test_class_still_instantiable(self):
        @processor_version('1.0.0')
        class _Inst(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        result = _Inst().apply(np.zeros((2, 2)))
        assert result.shape == (2, 2)

    def test_works_on_plain_class(self):
        @processor_version('3.0.0')
        class _Plain:
            pass

        assert _Plain.__processor_version__ == '3.0.0'

    def test_decorated_class_is_same_class(self):
        class _Original(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        assert processor_version('1.0.0')(_Original) is _Original

    def test_missing_version_falls_back_to_string(self):
        @processor_version()
        class _Installed:
            pass

        assert isinstance(_Installed.__processor_version__, str)
        assert _Installed.__processor_version__


# ---------------------------------------------------------------------------
# Version warning at instantiation
# ---------------------------------------------------------------------------

class TestMissingVersionWarning:
    """Unversioned concrete subclasses warn once at instantiation."""

    def test_warns_for_undecorated_concrete_class(self):
        class _Unversioned(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            _Unversioned()

        found = _version_warnings(w)
        assert len(found) == 1
        assert '_Unversioned' in str(found[0].message)

    def test_warns_only_once(self):
        class _OnceOnly(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            _OnceOnly()
            _OnceOnly()
            _OnceOnly()

        assert len(_version_warnings(w)) == 1

    def test_no_warning_for_decorated_class(self):
        @processor_version('1.0.0')
        class _Versioned(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            _Versioned()

        assert not _version_warnings(w)

    def test_abstract_subclass_not_instantiable(self):
        with pytest.raises(TypeError):
            ImageTransform()

    def test_shipped_transforms_have_versions(self):
        from grdscale.image_processing.autoscale import Autoscale
        from grdscale.image_processing.intensity import ToDecibels

        assert Autoscale.__processor_version__
        assert ToDecibels.__processor_version__
        assert issubclass(Autoscale, ImageProcessor)


# ---------------------------------------------------------------------------
# @processor_tags decorator
# ---------------------------------------------------------------------------

class TestProcessorTagsDecorator:
    """Test capability metadata stamped by @processor_tags."""

    def test_stamps_tags_on_class(self):
        @processor_tags(modalities=[ImageModality.SAR],
                        category=ProcessorCategory.ENHANCE,
                        description='Contrast stretch')
        class _Tagged:
            pass

        tags = _Tagged.__processor_tags__
        assert tags['modalities'] == (ImageModality.SAR,)
        assert tags['category'] is ProcessorCategory.ENHANCE
        assert tags['description'] == 'Contrast stretch'

    def test_empty_tags(self):
        @processor_tags()
        class _Bare:
            pass

        assert _Bare.__processor_tags__ == {
            'modalities': (), 'category': None, 'description': None,
        }

    def test_rejects_string_modality(self):
        with pytest.raises(TypeError, match="ImageModality"):
            processor_tags(modalities=['SAR'])

    def test_rejects_string_category(self):
        with pytest.raises(TypeError, match="ProcessorCategory"):
            processor_tags(category='enhance')

    def test_shipped_transform_tags(self):
        from grdscale.image_processing.autoscale import Autoscale

        tags = Autoscale.__processor_tags__
        assert ImageModality.SAR in tags['modalities']
        assert tags['category'] is ProcessorCategory.ENHANCE
