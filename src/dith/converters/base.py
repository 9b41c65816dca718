"""Abstract base classes for image-to-Braille converters.

All converters conform to this interface so the render loop can swap
algorithms without knowing which one it is driving. A converter is
configured once at construction and keeps no state between frames:
``convert`` depends only on its arguments and that configuration, so
one instance may be shared or called concurrently.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import numpy as np

from dith.domain.models import ConverterConfig, GrayImage
from dith.render.binary import render_binary

logger = logging.getLogger(__name__)


class Converter(ABC):
    """Abstract interface for turning a grayscale image into Braille text.

    Example usage::

        converter = AtkinsonConverter(threshold=128)
        text = converter.convert(image, cols=80, rows=24)
        sys.stdout.buffer.write(text)
    """

    name: str = ""
    default_threshold: int = 128

    def __init__(self, threshold: int | None = None, invert: bool = False) -> None:
        """Initialize the converter.

        Args:
            threshold: Algorithm threshold in 0..255. If None, the
                       algorithm's default is used.
            invert: Swap lit and unlit dots in the output.

        Raises:
            pydantic.ValidationError: If the threshold is out of range.
        """
        if threshold is None:
            threshold = self.default_threshold
        self._config = ConverterConfig(threshold=threshold, invert=invert)

    @property
    def config(self) -> ConverterConfig:
        return self._config

    @property
    def threshold(self) -> int:
        return self._config.threshold

    @property
    def invert(self) -> bool:
        return self._config.invert

    def convert(self, image: GrayImage, cols: int, rows: int) -> bytes:
        """Render ``image`` as a ``cols`` x ``rows`` grid of Braille glyphs.

        Grid dimensions below 1 are raised to 1.

        Returns:
            UTF-8 text, one newline-terminated line per row, exactly
            ``rows * (cols * 3 + 1)`` bytes long.
        """
        return self._convert(image, max(cols, 1), max(rows, 1))

    @abstractmethod
    def _convert(self, image: GrayImage, cols: int, rows: int) -> bytes:
        """Algorithm-specific conversion; ``cols`` and ``rows`` are >= 1."""
        ...

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(threshold={self.threshold}, "
            f"invert={self.invert})"
        )


class BinarizingConverter(Converter):
    """Converter that binarizes the whole image before sampling glyphs.

    Subclasses only decide which source pixels are on; folding the 0/255
    image onto the glyph grid is shared.
    """

    @abstractmethod
    def binarize(self, image: GrayImage) -> np.ndarray:
        """Return a (height, width) uint8 array of 0 and 255."""
        ...

    def _convert(self, image: GrayImage, cols: int, rows: int) -> bytes:
        binary = self.binarize(image)
        return render_binary(binary, image.width, image.height, cols, rows, self.invert)
