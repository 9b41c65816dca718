"""Folding binarized pixels into Braille text.

Shared by every threshold-based converter: the converter produces a
0/255 image at source resolution and this module samples it onto the
glyph grid.
"""

from __future__ import annotations

import numpy as np

from dith.render.codec import encode_rows, pack_dots
from dith.render.geometry import sample_points


def render_binary(
    binary: bytes | np.ndarray,
    width: int,
    height: int,
    cols: int,
    rows: int,
    invert: bool = False,
) -> bytes:
    """Render a ``width`` x ``height`` binary image as Braille text.

    Args:
        binary: ``width * height`` bytes (or an array of that size) where
                zero means off and anything else means on.
        width: Source image width.
        height: Source image height.
        cols: Glyphs per output row.
        rows: Output rows.
        invert: Swap on and off for every sampled dot.

    Returns:
        UTF-8 text of exactly ``rows * (cols * 3 + 1)`` bytes.
    """
    if isinstance(binary, (bytes, bytearray, memoryview)):
        pixels = np.frombuffer(binary, dtype=np.uint8)
    else:
        pixels = np.asarray(binary)
    if pixels.size != width * height:
        raise ValueError(
            f"binary buffer has {pixels.size} pixels, expected {width}x{height}"
        )
    pixels = pixels.reshape(height, width)

    ys, xs, in_bounds = sample_points(width, height, cols, rows)
    lit = pixels[np.ix_(ys, xs)] != 0
    return render_dots(lit, in_bounds, invert)


def render_dots(lit: np.ndarray, in_bounds: np.ndarray, invert: bool) -> bytes:
    """Encode a (rows*4, cols*2) dot grid, applying ``invert``.

    Dots outside the source image stay off regardless of ``invert``.
    """
    if invert:
        lit = ~lit
    return encode_rows(pack_dots(lit & in_bounds))
