"""Ordered (threshold-map) dithering shared by Bayer and blue noise.

Each pixel is compared against a tiled threshold map shifted by the
configured threshold: ``t = clamp(map[y % n][x % n] + threshold - 128,
0, 255)`` and the pixel is on when ``gray > t``. There is no error to
carry, so the whole frame is binarized in one vectorised pass.
"""

from __future__ import annotations

from abc import abstractmethod

import numpy as np

from dith.converters.base import BinarizingConverter
from dith.domain.models import GrayImage


class OrderedDitherConverter(BinarizingConverter):
    """Binarizes against a square, tiled threshold map."""

    @abstractmethod
    def threshold_map(self) -> np.ndarray:
        """The square uint8 threshold map to tile over the image."""
        ...

    def binarize(self, image: GrayImage) -> np.ndarray:
        pixels = image.to_array()
        height, width = pixels.shape
        tile = self.threshold_map()
        size = tile.shape[0]

        reps = (-(-height // size), -(-width // size))
        thresholds = np.tile(tile, reps)[:height, :width].astype(np.int16)
        thresholds += self.threshold - 128
        np.clip(thresholds, 0, 255, out=thresholds)

        return np.where(pixels > thresholds, 255, 0).astype(np.uint8)
