"""Error-diffusion binarization shared by Atkinson and Floyd-Steinberg.

Pixels are visited in raster order. Each one is snapped to 0 or 255 and
the quantization error is pushed onto not-yet-visited neighbours
according to a kernel of ``(dx, dy, weight)`` entries; every neighbour
receives ``trunc(error * weight / divisor)``, computed independently.

Only ``max(dy) + 1`` rows of accumulated error are ever alive, so they
are kept in a small ring of row buffers indexed by ``y % depth``. When a
row is finished its buffer is cleared and reused for the row ``depth``
lines further down.
"""

from __future__ import annotations

import logging

import numpy as np

from dith.converters.base import BinarizingConverter
from dith.domain.models import GrayImage

logger = logging.getLogger(__name__)

DiffusionKernel = tuple[tuple[int, int, int], ...]


def div_trunc(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


class ErrorDiffusionConverter(BinarizingConverter):
    """Binarizes by error diffusion with a fixed kernel.

    Subclasses set ``kernel`` and ``divisor``.
    """

    kernel: DiffusionKernel = ()
    divisor: int = 1

    @classmethod
    def diffusion_ratio(cls) -> float:
        """Fraction of each pixel's quantization error that is passed on."""
        return sum(weight for _, _, weight in cls.kernel) / cls.divisor

    def binarize(self, image: GrayImage) -> np.ndarray:
        width, height = image.size
        pixels = image.to_array()
        binary = np.empty((height, width), dtype=np.uint8)

        depth = max(dy for _, dy, _ in self.kernel) + 1
        errors = [[0] * width for _ in range(depth)]
        threshold = self.threshold
        divisor = self.divisor

        for y in range(height):
            current = errors[y % depth]
            targets = [
                (dx, errors[(y + dy) % depth], weight)
                for dx, dy, weight in self.kernel
                if y + dy < height
            ]
            out = bytearray(width)

            for x, gray in enumerate(pixels[y].tolist()):
                value = gray + current[x]
                if value >= threshold:
                    out[x] = 255
                    error = value - 255
                else:
                    error = value
                if error == 0:
                    continue
                for dx, target, weight in targets:
                    tx = x + dx
                    if 0 <= tx < width:
                        target[tx] += div_trunc(error * weight, divisor)

            binary[y] = np.frombuffer(out, dtype=np.uint8)
            errors[y % depth] = [0] * width

        return binary
