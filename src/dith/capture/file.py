"""Still-image frame source using Pillow.

Decodes a PNG, JPEG or BMP file to grayscale once and hands out the same
frame on every capture.
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from dith.capture.base import CaptureError, CaptureFailure, FrameSource
from dith.domain.models import GrayImage

logger = logging.getLogger(__name__)


class ImageFormat(str, enum.Enum):
    PNG = "png"
    JPEG = "jpeg"
    BMP = "bmp"
    UNKNOWN = "unknown"


# Format -> leading magic bytes
MAGIC_BYTES: dict[ImageFormat, bytes] = {
    ImageFormat.PNG: b"\x89PNG\r\n\x1a\n",
    ImageFormat.JPEG: b"\xff\xd8\xff",
    ImageFormat.BMP: b"BM",
}


def detect_format(header: bytes) -> ImageFormat:
    """Identify an image format from the first bytes of a file."""
    for fmt, magic in MAGIC_BYTES.items():
        if header.startswith(magic):
            return fmt
    return ImageFormat.UNKNOWN


def validate_image_file(path: Path | str) -> ImageFormat:
    """Check that ``path`` exists and starts with a supported signature.

    Raises:
        CaptureError: If the file is missing, unreadable, or not a
                      PNG/JPEG/BMP file.
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            header = f.read(8)
    except FileNotFoundError:
        raise CaptureError(f"File not found: {path}", CaptureFailure.OPEN_FAILED) from None
    except PermissionError:
        raise CaptureError(f"Permission denied: {path}", CaptureFailure.PERMISSION_DENIED) from None
    except OSError as e:
        raise CaptureError(f"Could not read {path}: {e}", CaptureFailure.OPEN_FAILED) from e

    fmt = detect_format(header)
    if fmt is ImageFormat.UNKNOWN:
        raise CaptureError(
            f"Unsupported image format: {path} (use png, jpg, or bmp)",
            CaptureFailure.UNSUPPORTED_FORMAT,
        )
    return fmt


class ImageFileSource(FrameSource):
    """Serves a decoded image file as an endless stream of identical frames."""

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self._path = Path(path)
        self._image: GrayImage | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def description(self) -> str:
        return f"file:{self._path}"

    def open(self) -> None:
        """Validate and decode the image file."""
        if self._is_open:
            return
        fmt = validate_image_file(self._path)
        try:
            with Image.open(self._path) as img:
                gray = np.asarray(img.convert("L"), dtype=np.uint8)
        except (UnidentifiedImageError, OSError) as e:
            raise CaptureError(
                f"Failed to decode {self._path}: {e}", CaptureFailure.OPEN_FAILED
            ) from e
        self._image = GrayImage.from_array(gray)
        self._is_open = True
        logger.info(
            "Loaded %s image %s (%dx%d)",
            fmt.value, self._path, self._image.width, self._image.height,
        )

    def close(self) -> None:
        self._image = None
        self._is_open = False

    def capture_frame(self) -> GrayImage:
        if not self._is_open or self._image is None:
            raise CaptureError("Image file is not open", CaptureFailure.NOT_OPEN)
        self._frame_counter += 1
        return self._image
