"""Floyd-Steinberg dithering.

The full quantization error is spread over four neighbours::

            X   7
        3   5   1       (/16)

Smoother gradients than Atkinson at the cost of some contrast.
"""

from __future__ import annotations

from dith.converters.diffusion import DiffusionKernel, ErrorDiffusionConverter

FLOYD_STEINBERG_KERNEL: DiffusionKernel = (
    (1, 0, 7),
    (-1, 1, 3),
    (0, 1, 5),
    (1, 1, 1),
)


class FloydSteinbergConverter(ErrorDiffusionConverter):
    """Floyd-Steinberg error diffusion (100% of the error, two rows deep)."""

    name = "floyd_steinberg"
    kernel = FLOYD_STEINBERG_KERNEL
    divisor = 16
