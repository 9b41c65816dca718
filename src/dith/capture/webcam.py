"""Webcam capture implementation using OpenCV.

Captures frames from a local camera and converts them to 8-bit
grayscale.
"""

from __future__ import annotations

import logging

import cv2
import numpy as np

from dith.capture.base import CaptureError, CaptureFailure, FrameSource
from dith.domain.models import GrayImage

logger = logging.getLogger(__name__)


class WebcamCapture(FrameSource):
    """Captures frames from a webcam using OpenCV.

    ``capture_frame`` blocks on the device; run it behind a pipelined
    frame source to keep camera latency out of the render loop.
    """

    def __init__(
        self,
        device_index: int = 0,
        resolution: tuple[int, int] | None = None,
    ) -> None:
        super().__init__()
        self._device_index = device_index
        self._resolution = resolution
        self._cap: cv2.VideoCapture | None = None

    @property
    def description(self) -> str:
        return f"webcam:{self._device_index}"

    def open(self) -> None:
        """Open the webcam device."""
        if self._is_open:
            return
        self._cap = cv2.VideoCapture(self._device_index)
        if not self._cap.isOpened():
            self._cap = None
            raise CaptureError(
                f"Failed to open webcam device {self._device_index}",
                CaptureFailure.OPEN_FAILED,
            )
        if self._resolution:
            w, h = self._resolution
            self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, w)
            self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, h)
        self._is_open = True
        actual_w = int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        actual_h = int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        logger.info(
            "Opened webcam device %d (%dx%d)",
            self._device_index, actual_w, actual_h,
        )

    def close(self) -> None:
        """Release the webcam device."""
        if self._cap is not None and self._cap.isOpened():
            self._cap.release()
            logger.info("Released webcam device %d", self._device_index)
        self._cap = None
        self._is_open = False

    def capture_frame(self) -> GrayImage:
        """Capture a single frame and convert it to grayscale."""
        if not self._is_open or self._cap is None:
            raise CaptureError("Webcam is not open", CaptureFailure.NOT_OPEN)
        ret, frame = self._cap.read()
        if not ret or frame is None:
            raise CaptureError("Failed to read frame from webcam", CaptureFailure.NO_FRAME)
        self._frame_counter += 1
        return GrayImage.from_array(self._to_gray(frame))

    @staticmethod
    def _to_gray(frame: np.ndarray) -> np.ndarray:
        """Convert an OpenCV frame (BGR, BGRA or already gray) to grayscale."""
        if frame.ndim == 2:
            return frame
        if frame.shape[2] == 4:
            return cv2.cvtColor(frame, cv2.COLOR_BGRA2GRAY)
        return cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
