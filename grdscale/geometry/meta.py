# -*- coding: utf-8 -*-
"""
Geometry Metadata - Affine geotransform bookkeeping across resize and pad.

``GeometryMeta`` carries a GDAL-ordered affine geotransform
``(x0, dx, rx, y0, ry, dy)`` mapping pixel ``(col, row)`` to map
coordinates::

    x = x0 + col * dx + row * rx
    y = y0 + col * ry + row * dy

together with the projection identifier, the cumulative resize scale and
the pad offsets applied so far. Every geometric step returns a new value;
the original top-left map coordinate is always recoverable as
``pixel_to_map(pad_left, pad_top)``.

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
from dataclasses import dataclass, replace
from typing import Any, Dict, Sequence, Tuple

# grdscale internal
from grdscale.exceptions import ValidationError

#: Pixel-unit geotransform used when no georeferencing is supplied.
IDENTITY_GEOTRANSFORM = (0.0, 1.0, 0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class GeometryMeta:
    """Geotransform, projection, resize scale and pad offsets of an image.

    Attributes
    ----------
    geotransform : Tuple[float, ...]
        Six-element affine transform in GDAL order.
    projection : str
        Projection identifier (WKT or an authority code). May be empty.
    scale_x : float
        Cumulative column scale ``new_cols / cols`` applied by resizing.
    scale_y : float
        Cumulative row scale ``new_rows / rows`` applied by resizing.
    pad_left : int
        Column offset of the content inside the padded canvas.
    pad_top : int
        Row offset of the content inside the padded canvas.
    """

    geotransform: Tuple[float, ...] = IDENTITY_GEOTRANSFORM
    projection: str = ''
    scale_x: float = 1.0
    scale_y: float = 1.0
    pad_left: int = 0
    pad_top: int = 0

    def __post_init__(self) -> None:
        gt = tuple(float(v) for v in self.geotransform)
        if len(gt) != 6:
            raise ValidationError(
                f"geotransform must have 6 elements, got {len(gt)}"
            )
        object.__setattr__(self, 'geotransform', gt)
        if self.scale_x <= 0 or self.scale_y <= 0:
            raise ValidationError(
                f"scale factors must be positive, got "
                f"({self.scale_x}, {self.scale_y})"
            )
        if self.pad_left < 0 or self.pad_top < 0:
            raise ValidationError(
                f"pad offsets must be non-negative, got "
                f"({self.pad_left}, {self.pad_top})"
            )

    @classmethod
    def from_geotransform(
        cls, geotransform: Sequence[float], projection: str = ''
    ) -> 'GeometryMeta':
        """Start from a reader's geotransform with no resize or pad yet."""
        return cls(geotransform=tuple(geotransform), projection=projection)

    @property
    def pixel_size(self) -> Tuple[float, float]:
        """``(dx, dy)`` pixel size terms of the geotransform."""
        return self.geotransform[1], self.geotransform[5]

    def pixel_to_map(self, col: float, row: float) -> Tuple[float, float]:
        """Map a pixel ``(col, row)`` corner coordinate to ``(x, y)``."""
        x0, dx, rx, y0, ry, dy = self.geotransform
        return x0 + col * dx + row * rx, y0 + col * ry + row * dy

    def original_origin(self) -> Tuple[float, float]:
        """Map coordinate of the content's top-left corner before padding."""
        return self.pixel_to_map(self.pad_left, self.pad_top)

    def with_resize(self, scale_x: float, scale_y: float) -> 'GeometryMeta':
        """Geometry after resampling by ``(scale_x, scale_y)``.

        Column terms (``dx``, ``ry``) are divided by *scale_x* and row
        terms (``rx``, ``dy``) by *scale_y*; the origin stays put.

        Resizing must come before padding. Pad offsets are counted in
        the pixels of the geometry they were applied to, so a padded
        geometry is rejected here.

        Parameters
        ----------
        scale_x : float
            ``new_cols / cols``.
        scale_y : float
            ``new_rows / rows``.

        Returns
        -------
        GeometryMeta
        """
        if scale_x <= 0 or scale_y <= 0:
            raise ValidationError(
                f"scale factors must be positive, got ({scale_x}, {scale_y})"
            )
        if self.pad_left or self.pad_top:
            raise ValidationError(
                f"cannot resize a padded geometry (pad_left={self.pad_left}, "
                f"pad_top={self.pad_top}); resize before padding"
            )
        x0, dx, rx, y0, ry, dy = self.geotransform
        return replace(
            self,
            geotransform=(x0, dx / scale_x, rx / scale_y,
                          y0, ry / scale_x, dy / scale_y),
            scale_x=self.scale_x * scale_x,
            scale_y=self.scale_y * scale_y,
        )

    def with_padding(self, pad_left: int, pad_top: int) -> 'GeometryMeta':
        """Geometry after embedding the image at ``(pad_left, pad_top)``.

        The origin moves to the canvas corner, ``pad_left`` columns and
        ``pad_top`` rows before the content.

        Parameters
        ----------
        pad_left : int
            Column offset of the content in the canvas.
        pad_top : int
            Row offset of the content in the canvas.

        Returns
        -------
        GeometryMeta
        """
        if pad_left < 0 or pad_top < 0:
            raise ValidationError(
                f"pad offsets must be non-negative, got ({pad_left}, {pad_top})"
            )
        x, y = self.pixel_to_map(-pad_left, -pad_top)
        _, dx, rx, _, ry, dy = self.geotransform
        return replace(
            self,
            geotransform=(x, dx, rx, y, ry, dy),
            pad_left=self.pad_left + pad_left,
            pad_top=self.pad_top + pad_top,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation for sidecar writers."""
        return {
            'geotransform': list(self.geotransform),
            'projection': self.projection,
            'scale_x': self.scale_x,
            'scale_y': self.scale_y,
            'pad_left': self.pad_left,
            'pad_top': self.pad_top,
        }
