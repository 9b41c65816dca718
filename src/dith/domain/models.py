"""Core domain models for the dith system.

These models represent the data flowing through the system: grayscale
frames produced by a capture source, the configuration a converter is
built with, and the glyph grid size a frame is rendered at.
"""

from __future__ import annotations

import enum

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ConverterMode(str, enum.Enum):
    """Image-to-Braille conversion algorithms."""

    EDGE = "edge"
    ATKINSON = "atkinson"
    FLOYD_STEINBERG = "floyd_steinberg"
    BAYER = "bayer"
    BLUE_NOISE = "blue_noise"


class CaptureStrategy(str, enum.Enum):
    """How the render loop obtains frames from a capture source."""

    DIRECT = "direct"  # Block on the source every frame
    PIPELINED = "pipelined"  # Background thread fills a double buffer


# ---------------------------------------------------------------------------
# Image Models
# ---------------------------------------------------------------------------


class GrayImage(BaseModel):
    """An immutable 8-bit grayscale image.

    Pixels are stored row by row; each row starts ``stride`` bytes after
    the previous one, so ``stride`` may exceed ``width`` when the source
    pads its rows (camera frame buffers usually do).
    """

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(description="Row-major pixel bytes, one byte per pixel")
    width: int = Field(ge=1, description="Image width in pixels")
    height: int = Field(ge=1, description="Image height in pixels")
    stride: int = Field(ge=1, description="Bytes between the starts of consecutive rows")

    @model_validator(mode="after")
    def _check_layout(self) -> GrayImage:
        if self.stride < self.width:
            raise ValueError(
                f"stride ({self.stride}) must be at least width ({self.width})"
            )
        required = self.stride * (self.height - 1) + self.width
        if len(self.data) < required:
            raise ValueError(
                f"{self.width}x{self.height} image with stride {self.stride} "
                f"needs {required} bytes, got {len(self.data)}"
            )
        return self

    @classmethod
    def from_array(cls, array: np.ndarray) -> GrayImage:
        """Build an image from a 2-D uint8 numpy array."""
        if array.ndim != 2:
            raise ValueError(f"expected a 2-D grayscale array, got shape {array.shape}")
        contiguous = np.ascontiguousarray(array, dtype=np.uint8)
        height, width = contiguous.shape
        return cls(data=contiguous.tobytes(), width=width, height=height, stride=width)

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) in pixels."""
        return self.width, self.height

    def pixel(self, x: int, y: int) -> int:
        """Return the gray value at (x, y).

        Raises:
            IndexError: If the coordinate lies outside the image.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"pixel ({x}, {y}) outside {self.width}x{self.height} image"
            )
        return self.data[y * self.stride + x]

    def to_array(self) -> np.ndarray:
        """Return a read-only (height, width) uint8 view of the pixels.

        Row padding is skipped, so the view is only contiguous when
        ``stride == width``.
        """
        flat = np.frombuffer(self.data, dtype=np.uint8)
        return np.lib.stride_tricks.as_strided(
            flat,
            shape=(self.height, self.width),
            strides=(self.stride, 1),
            writeable=False,
        )


class OutputSize(BaseModel):
    """Size of the Braille glyph grid a frame is rendered at."""

    model_config = ConfigDict(frozen=True)

    cols: int = Field(ge=1, description="Glyphs per row")
    rows: int = Field(ge=1, description="Rows of glyphs")

    @property
    def byte_length(self) -> int:
        """Exact size of the rendered UTF-8 text, newlines included."""
        return self.rows * (self.cols * 3 + 1)


# ---------------------------------------------------------------------------
# Converter Models
# ---------------------------------------------------------------------------


class ConverterConfig(BaseModel):
    """Fixed settings a converter is constructed with."""

    model_config = ConfigDict(frozen=True)

    threshold: int = Field(ge=0, le=255, description="Binarization or gradient threshold")
    invert: bool = Field(default=False, description="Swap lit and unlit dots")
