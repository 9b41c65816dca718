"""Bayer ordered dithering.

Fast and deterministic, with the characteristic retro crosshatch.
"""

from __future__ import annotations

import functools

import numpy as np

from dith.converters.ordered import OrderedDitherConverter

BAYER_SIZE: int = 8


@functools.lru_cache(maxsize=None)
def bayer_matrix() -> np.ndarray:
    """The 8x8 Bayer threshold matrix, scaled to 2..254.

    Built by the recursive construction: starting from the 2x2 base
    ``[[0, 2], [3, 1]]``, every entry ``m`` of an n x n matrix becomes a
    2x2 block ``[[4m, 4m+2], [4m+3, 4m+1]]``. The 0..63 result is mapped
    to ``v * 4 + 2``. Computed once and returned read-only.
    """
    matrix = np.array([[0, 2], [3, 1]], dtype=np.uint8)
    while matrix.shape[0] < BAYER_SIZE:
        n = matrix.shape[0]
        base = matrix * 4
        grown = np.empty((n * 2, n * 2), dtype=np.uint8)
        grown[0::2, 0::2] = base
        grown[0::2, 1::2] = base + 2
        grown[1::2, 0::2] = base + 3
        grown[1::2, 1::2] = base + 1
        matrix = grown

    result = matrix * 4 + 2
    result.setflags(write=False)
    return result


class BayerConverter(OrderedDitherConverter):
    """Ordered dithering against the 8x8 Bayer matrix."""

    name = "bayer"

    def threshold_map(self) -> np.ndarray:
        return bayer_matrix()
