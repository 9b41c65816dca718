"""Blue-noise threshold dithering.

Uses a 64x64 interleaved-gradient-noise texture (Jimenez, 2014). The
texture has little low-frequency energy, so the dot pattern looks
organic instead of showing Bayer's regular crosshatch.
"""

from __future__ import annotations

import functools

import numpy as np

from dith.converters.ordered import OrderedDitherConverter

TEXTURE_SIZE: int = 64


@functools.lru_cache(maxsize=None)
def blue_noise_texture() -> np.ndarray:
    """The 64x64 threshold texture in 0..255, computed once, read-only.

    ``value(x, y) = fract(52.9829189 * fract(0.06711056*x + 0.00583715*y)) * 255``
    evaluated in single precision and truncated.
    """
    ys, xs = np.mgrid[0:TEXTURE_SIZE, 0:TEXTURE_SIZE].astype(np.float32)
    dot = np.float32(0.06711056) * xs + np.float32(0.00583715) * ys
    scaled = np.float32(52.9829189) * (dot - np.floor(dot))
    noise = scaled - np.floor(scaled)

    texture = (noise * np.float32(255.0)).astype(np.uint8)
    texture.setflags(write=False)
    return texture


class BlueNoiseConverter(OrderedDitherConverter):
    """Ordered dithering against the tiled blue-noise texture."""

    name = "blue_noise"

    def threshold_map(self) -> np.ndarray:
        return blue_noise_texture()
