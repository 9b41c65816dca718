"""Atkinson dithering.

Each pixel passes 1/8 of its quantization error to six neighbours::

            X   1   1
        1   1   1
            1

Only 6/8 of the error is diffused; the rest is dropped, which gives a
higher-contrast result than full diffusion and keeps highlights and
shadows clean.
"""

from __future__ import annotations

from dith.converters.diffusion import DiffusionKernel, ErrorDiffusionConverter

ATKINSON_KERNEL: DiffusionKernel = (
    (1, 0, 1),
    (2, 0, 1),
    (-1, 1, 1),
    (0, 1, 1),
    (1, 1, 1),
    (0, 2, 1),
)


class AtkinsonConverter(ErrorDiffusionConverter):
    """Atkinson error diffusion (75% of the error, three rows deep)."""

    name = "atkinson"
    kernel = ATKINSON_KERNEL
    divisor = 8
