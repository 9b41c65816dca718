"""Mapping between glyph grids and source image pixels.

Each Braille glyph covers a 2x4 block of output pixels. The functions
here pick a grid size for a source image and map output pixel
coordinates back onto source pixels with a single scale factor per
axis, truncating to the nearest source pixel at or before the mapped
position (no interpolation).
"""

from __future__ import annotations

import numpy as np

from dith.domain.models import OutputSize
from dith.render.codec import CELL_HEIGHT, CELL_WIDTH


def dimensions_to_fit(
    source_width: int,
    source_height: int,
    bound_cols: int,
    bound_rows: int,
) -> OutputSize:
    """Largest glyph grid that shows the whole image within the bounds.

    The source is scaled uniformly by ``max(scale_w, scale_h)``, where
    ``scale_w = source_width / (bound_cols * 2)`` and
    ``scale_h = source_height / (bound_rows * 4)``, so both bounds are
    respected. Both dimensions are at least 1.

    Example::

        >>> dimensions_to_fit(1600, 800, 80, 40)
        OutputSize(cols=80, rows=20)
    """
    _check_source(source_width, source_height)
    bound_cols = max(bound_cols, 1)
    bound_rows = max(bound_rows, 1)
    bound_w = bound_cols * CELL_WIDTH
    bound_h = bound_rows * CELL_HEIGHT

    # Compare scale_w >= scale_h without dividing, then apply the winning
    # scale in integer arithmetic so exact ratios stay exact.
    if source_width * bound_h >= source_height * bound_w:
        cols = bound_cols
        rows = (source_height * bound_w) // (source_width * CELL_HEIGHT)
    else:
        cols = (source_width * bound_h) // (source_height * CELL_WIDTH)
        rows = bound_rows
    return OutputSize(cols=max(cols, 1), rows=max(rows, 1))


def rows_for_cols(source_width: int, source_height: int, target_cols: int) -> int:
    """Rows needed to show the image at ``target_cols`` with square pixels."""
    _check_source(source_width, source_height)
    target_cols = max(target_cols, 1)
    rows = (source_height * target_cols * CELL_WIDTH) // (source_width * CELL_HEIGHT)
    return max(rows, 1)


def sample_scale(
    source_width: int,
    source_height: int,
    cols: int,
    rows: int,
) -> tuple[np.float32, np.float32]:
    """Per-axis factors mapping output pixel coordinates to source pixels."""
    scale_x = np.float32(source_width) / np.float32(cols * CELL_WIDTH)
    scale_y = np.float32(source_height) / np.float32(rows * CELL_HEIGHT)
    return scale_x, scale_y


def source_coordinates(
    source_width: int,
    source_height: int,
    cols: int,
    rows: int,
) -> tuple[np.ndarray, np.ndarray]:
    """Source x for every output pixel column and source y for every row.

    Returns arrays of length ``cols * 2`` and ``rows * 4``.
    """
    scale_x, scale_y = sample_scale(source_width, source_height, cols, rows)
    out_x = np.arange(cols * CELL_WIDTH, dtype=np.float32)
    out_y = np.arange(rows * CELL_HEIGHT, dtype=np.float32)
    return (out_x * scale_x).astype(np.intp), (out_y * scale_y).astype(np.intp)


def _check_source(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"source image must be non-empty, got {width}x{height}")


def sample_points(
    source_width: int,
    source_height: int,
    cols: int,
    rows: int,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Source coordinates of every dot in a ``cols`` x ``rows`` grid.

    Returns ``(ys, xs, in_bounds)``: ``ys`` and ``xs`` are clipped into
    the image so they can index it directly, and ``in_bounds`` is a
    ``(rows * 4, cols * 2)`` mask of dots whose unclipped coordinate was
    inside the image.
    """
    xs, ys = source_coordinates(source_width, source_height, cols, rows)
    in_bounds = (ys < source_height)[:, None] & (xs < source_width)[None, :]
    return (
        np.minimum(ys, source_height - 1),
        np.minimum(xs, source_width - 1),
        in_bounds,
    )
