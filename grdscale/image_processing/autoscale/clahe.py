# -*- coding: utf-8 -*-
"""
CLAHE - Contrast-limited adaptive histogram equalization on dB images.

The dB image is first normalized through a percentile window (default
p01/p99) onto ``bins`` levels. The image is split into a grid of tiles;
each tile builds a histogram of its valid pixels, clips it at
``clip_limit`` times the mean bin count and spreads the clipped excess
over all bins, then turns the cumulative histogram into a lookup table.
Output values are bilinearly interpolated between the lookup tables of
the four nearest tile centres, clamped to the nearest tile along the
image border.

Processing has two phases. All tile tables are complete before the
interpolation pass reads any of them.

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
from typing import Tuple

# Third-party
import numpy as np

# grdscale internal
from grdscale.exceptions import ValidationError
from grdscale.image_processing._arrays import row_blocks
from grdscale.image_processing.autoscale.config import ClaheConfig
from grdscale.image_processing.statistics import DbStatistics, percentile
from grdscale.vocabulary import BitDepth

logger = logging.getLogger(__name__)


def tile_edges(n: int, tiles: int) -> np.ndarray:
    """Split ``n`` pixels into ``tiles`` contiguous, non-empty spans.

    The tile count is capped at *n*.

    Examples
    --------
    >>> tile_edges(10, 3)
    array([ 0,  3,  6, 10])
    """
    tiles = max(1, min(tiles, n))
    return (np.arange(tiles + 1, dtype=np.intp) * n) // tiles


def clip_histogram(histogram: np.ndarray, clip_limit: float) -> np.ndarray:
    """Clip a tile histogram and redistribute the excess over all bins.

    The clip level is ``max(1, floor(clip_limit * total / bins))``. Counts
    removed above the clip level are added back evenly: every bin gets
    ``excess // bins`` and the first ``excess % bins`` bins get one more.
    The returned histogram has the same total as the input.

    Parameters
    ----------
    histogram : np.ndarray
        Integer counts.
    clip_limit : float
        Clip level as a multiple of the mean bin count.

    Returns
    -------
    np.ndarray
        int64 clipped histogram.
    """
    if clip_limit <= 0:
        raise ValidationError(f"clip_limit must be positive, got {clip_limit}")
    histogram = np.asarray(histogram, dtype=np.int64)
    bins = histogram.size
    total = int(histogram.sum())
    if total == 0:
        return histogram.copy()

    limit = max(1, int(clip_limit * total / bins))
    clipped = np.minimum(histogram, limit)
    excess = total - int(clipped.sum())
    if excess:
        per_bin, remainder = divmod(excess, bins)
        clipped += per_bin
        if remainder:
            clipped[:remainder] += 1
    return clipped


def _normalized_bins(db: np.ndarray, low: float, high: float,
                     bins: int) -> np.ndarray:
    """Map dB values through the window ``[low, high]`` onto bin indices."""
    x = db.astype(np.float64)
    np.clip(x, low, high, out=x)
    x -= low
    x *= bins / (high - low)
    np.floor(x, out=x)
    np.clip(x, 0, bins - 1, out=x)
    return x.astype(np.intp)


def clahe_tile_luts(
    db: np.ndarray,
    mask: np.ndarray,
    low: float,
    high: float,
    config: ClaheConfig,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Build the per-tile lookup tables.

    Parameters
    ----------
    db : np.ndarray
        2D dB array.
    mask : np.ndarray
        Validity mask; only valid pixels enter tile histograms.
    low, high : float
        Normalization window, ``high > low``.
    config : ClaheConfig
        Tile grid, bin count and clip limit.

    Returns
    -------
    luts : np.ndarray
        float64 array ``(tile_rows, tile_cols, bins)`` of values in
        ``[0, 1]``. A tile with no valid pixels gets the identity ramp.
    row_edges, col_edges : np.ndarray
        Tile boundaries along each axis.
    """
    rows, cols = db.shape
    bins = config.bins
    row_edges = tile_edges(rows, config.tile_rows)
    col_edges = tile_edges(cols, config.tile_cols)
    identity = (np.arange(bins, dtype=np.float64) + 0.5) / bins

    luts = np.empty((row_edges.size - 1, col_edges.size - 1, bins),
                    dtype=np.float64)
    for i in range(row_edges.size - 1):
        r0, r1 = row_edges[i], row_edges[i + 1]
        for j in range(col_edges.size - 1):
            c0, c1 = col_edges[j], col_edges[j + 1]
            tile_mask = mask[r0:r1, c0:c1]
            n_valid = int(np.count_nonzero(tile_mask))
            if n_valid == 0:
                luts[i, j] = identity
                continue
            idx = _normalized_bins(db[r0:r1, c0:c1][tile_mask], low, high, bins)
            hist = clip_histogram(np.bincount(idx, minlength=bins),
                                  config.clip_limit)
            luts[i, j] = np.cumsum(hist) / n_valid
    return luts, row_edges, col_edges


def _axis_weights(
    n: int, edges: np.ndarray
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Neighbouring tile indices and interpolation weight per pixel."""
    centers = (edges[:-1] + edges[1:] - 1) / 2.0
    pos = np.arange(n, dtype=np.float64)
    upper = np.searchsorted(centers, pos, side='right')
    i0 = np.clip(upper - 1, 0, centers.size - 1)
    i1 = np.clip(upper, 0, centers.size - 1)
    span = centers[i1] - centers[i0]
    weight = np.zeros(n, dtype=np.float64)
    inside = span > 0
    weight[inside] = (pos[inside] - centers[i0][inside]) / span[inside]
    return i0, i1, weight


def autoscale_clahe(
    db: np.ndarray,
    mask: np.ndarray,
    stats: DbStatistics,
    bit_depth: BitDepth,
    config: ClaheConfig,
) -> np.ndarray:
    """Scale a dB image with contrast-limited adaptive equalization.

    Parameters
    ----------
    db : np.ndarray
        2D dB array.
    mask : np.ndarray
        Validity mask, same shape.
    stats : DbStatistics
        Statistics of *db* under *mask*; supplies the normalization window.
    bit_depth : BitDepth
        Output depth.
    config : ClaheConfig
        Tile grid, bins, clip limit and window percentiles.

    Returns
    -------
    np.ndarray
        uint8 or uint16 image, 0 where *mask* is False.
    """
    out = np.zeros(db.shape, dtype=bit_depth.dtype)
    if stats.is_empty:
        return out
    low = percentile(stats, config.low_percentile)
    high = percentile(stats, config.high_percentile)
    if not high > low:
        logger.warning("Degenerate CLAHE window [%s, %s]; "
                       "valid pixels set to mid level", low, high)
        out[mask] = (bit_depth.max_value + 1) // 2
        return out

    # Phase 1: every tile table is built before any pixel is mapped
    luts, row_edges, col_edges = clahe_tile_luts(db, mask, low, high, config)
    logger.debug("CLAHE grid %dx%d, bins=%d, window [%.2f, %.2f] dB",
                 luts.shape[0], luts.shape[1], config.bins, low, high)

    # Phase 2: bilinear interpolation between tile centres
    rows, cols = db.shape
    ri0, ri1, wr = _axis_weights(rows, row_edges)
    cj0, cj1, wc = _axis_weights(cols, col_edges)
    cj0, cj1, wc = cj0[None, :], cj1[None, :], wc[None, :]
    max_out = float(bit_depth.max_value)

    for r0, r1 in row_blocks(db.shape):
        b = _normalized_bins(db[r0:r1], low, high, config.bins)
        i0 = ri0[r0:r1, None]
        i1 = ri1[r0:r1, None]
        w = wr[r0:r1, None]
        top = (1.0 - wc) * luts[i0, cj0, b] + wc * luts[i0, cj1, b]
        bottom = (1.0 - wc) * luts[i1, cj0, b] + wc * luts[i1, cj1, b]
        value = (1.0 - w) * top + w * bottom
        value *= max_out
        np.rint(value, out=value)
        np.clip(value, 0.0, max_out, out=value)
        np.copyto(out[r0:r1], value, casting='unsafe', where=mask[r0:r1])
    return out
