"""Braille rendering primitives.

Glyph encoding, glyph-grid geometry and the binary-image renderer shared
by the threshold-based converters.
"""

from dith.render.binary import render_binary, render_dots
from dith.render.codec import DOT_POSITIONS, encode, encode_rows
from dith.render.geometry import dimensions_to_fit, rows_for_cols

__all__ = [
    "DOT_POSITIONS",
    "dimensions_to_fit",
    "encode",
    "encode_rows",
    "render_binary",
    "render_dots",
    "rows_for_cols",
]
