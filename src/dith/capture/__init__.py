"""Frame capture for dith.

Provides grayscale frames from a webcam or an image file. The abstract
base class lets the frame pipeline work with either source.

Public API:
    FrameSource -- Abstract base class
    CaptureError -- Raised when a source cannot deliver
    ImageFileSource -- Pillow-backed still image source
    WebcamCapture -- OpenCV webcam implementation
"""

from dith.capture.base import CaptureError, CaptureFailure, FrameSource

__all__ = [
    "CaptureError",
    "CaptureFailure",
    "FrameSource",
    "ImageFileSource",
    "WebcamCapture",
]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "WebcamCapture":
        from dith.capture.webcam import WebcamCapture
        return WebcamCapture
    if name == "ImageFileSource":
        from dith.capture.file import ImageFileSource
        return ImageFileSource
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
