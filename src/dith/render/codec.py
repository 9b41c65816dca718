"""Unicode Braille glyph encoding.

A Braille glyph (U+2800 to U+28FF) carries an 8-bit dot pattern in the
low byte of its code point. Dots are laid out in a 2x4 cell::

    0 3     (0x01 0x08)
    1 4     (0x02 0x10)
    2 5     (0x04 0x20)
    6 7     (0x40 0x80)

Every code point in the block lies in the 3-byte UTF-8 range, so each
glyph is always exactly three bytes on the wire.
"""

from __future__ import annotations

import numpy as np

BRAILLE_BASE: int = 0x2800

GLYPH_BYTES: int = 3

CELL_WIDTH: int = 2
CELL_HEIGHT: int = 4

# Dot index -> (dx, dy) within the 2x4 cell
DOT_POSITIONS: tuple[tuple[int, int], ...] = (
    (0, 0),
    (0, 1),
    (0, 2),
    (1, 0),
    (1, 1),
    (1, 2),
    (0, 3),
    (1, 3),
)


def codepoint(pattern: int) -> int:
    """Return the Braille code point for a dot pattern."""
    if not 0 <= pattern <= 0xFF:
        raise ValueError(f"dot pattern must be in 0..255, got {pattern}")
    return BRAILLE_BASE + pattern


def encode(pattern: int) -> bytes:
    """Encode a dot pattern as the 3-byte UTF-8 form of its glyph."""
    cp = codepoint(pattern)
    return bytes((
        0xE0 | ((cp >> 12) & 0x0F),
        0x80 | ((cp >> 6) & 0x3F),
        0x80 | (cp & 0x3F),
    ))


def encode_rows(patterns: np.ndarray) -> bytes:
    """Encode a (rows, cols) grid of dot patterns as newline-terminated text.

    The result is ``rows * (cols * 3 + 1)`` bytes long.
    """
    rows, cols = patterns.shape
    cp = patterns.astype(np.uint32) + BRAILLE_BASE
    out = np.empty((rows, cols * GLYPH_BYTES + 1), dtype=np.uint8)
    out[:, 0:-1:3] = 0xE0 | ((cp >> 12) & 0x0F)
    out[:, 1:-1:3] = 0x80 | ((cp >> 6) & 0x3F)
    out[:, 2:-1:3] = 0x80 | (cp & 0x3F)
    out[:, -1] = ord("\n")
    return out.tobytes()


def pack_dots(dots: np.ndarray) -> np.ndarray:
    """Fold a (rows*4, cols*2) boolean dot grid into (rows, cols) patterns."""
    height, width = dots.shape
    cells = dots.reshape(height // CELL_HEIGHT, CELL_HEIGHT, width // CELL_WIDTH, CELL_WIDTH)
    patterns = np.zeros((cells.shape[0], cells.shape[2]), dtype=np.uint8)
    for bit, (dx, dy) in enumerate(DOT_POSITIONS):
        patterns |= cells[:, dy, :, dx].astype(np.uint8) << bit
    return patterns
