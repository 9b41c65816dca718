"""Abstract base class for frame sources.

All capture implementations must conform to this interface, enabling
the frame pipeline to swap between a live webcam and a still image file
without changing the rest of the system.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod

from dith.domain.models import GrayImage

logger = logging.getLogger(__name__)


class CaptureFailure(str, enum.Enum):
    """Why a frame source could not deliver."""

    NO_FRAME = "no_frame"
    PERMISSION_DENIED = "permission_denied"
    DEVICE_BUSY = "device_busy"
    NOT_OPEN = "not_open"
    OPEN_FAILED = "open_failed"
    UNSUPPORTED_FORMAT = "unsupported_format"


class CaptureError(Exception):
    """Raised when a frame source cannot open or deliver a frame."""

    def __init__(self, message: str, reason: CaptureFailure = CaptureFailure.NO_FRAME) -> None:
        super().__init__(message)
        self.reason = reason


class FrameSource(ABC):
    """Abstract interface for producing grayscale frames.

    Implementations handle device initialization, frame capture and
    cleanup. ``capture_frame`` blocks until a frame is available; the
    frame pipeline decides whether that happens on the render thread or
    in the background.

    Example usage::

        with WebcamCapture(device_index=0) as source:
            frame = source.capture_frame()
    """

    def __init__(self) -> None:
        self._frame_counter: int = 0
        self._is_open: bool = False

    @property
    def is_open(self) -> bool:
        """Whether the source is currently open and ready."""
        return self._is_open

    @property
    def frame_count(self) -> int:
        """Number of frames delivered since the source was created."""
        return self._frame_counter

    @property
    def description(self) -> str:
        """Human-readable identifier used in log messages."""
        return type(self).__name__

    @abstractmethod
    def open(self) -> None:
        """Open and initialize the source.

        Raises:
            CaptureError: If the source cannot be opened.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the source. Safe to call multiple times."""
        ...

    @abstractmethod
    def capture_frame(self) -> GrayImage:
        """Capture a single grayscale frame.

        Raises:
            CaptureError: If no frame can be delivered.
        """
        ...

    def __enter__(self) -> FrameSource:
        """Context manager entry -- opens the source."""
        self.open()
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        """Context manager exit -- closes the source."""
        self.close()
