"""Tests for the WebcamCapture implementation (mocked cv2.VideoCapture)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from dith.capture.base import CaptureError, CaptureFailure
from dith.capture.webcam import WebcamCapture


@pytest.fixture
def mock_cap() -> MagicMock:
    cap = MagicMock()
    cap.isOpened.return_value = True
    cap.get.return_value = 640
    cap.read.return_value = (True, np.full((4, 6, 3), 255, dtype=np.uint8))
    return cap


class TestWebcamCapture:
    def test_init_defaults(self) -> None:
        capture = WebcamCapture()
        assert capture._device_index == 0
        assert capture._resolution is None
        assert capture.is_open is False
        assert capture.description == "webcam:0"

    def test_open_uses_device_index(self, mock_cap: MagicMock) -> None:
        with patch("dith.capture.webcam.cv2.VideoCapture", return_value=mock_cap) as ctor:
            capture = WebcamCapture(device_index=2)
            capture.open()
        ctor.assert_called_once_with(2)
        assert capture.is_open

    def test_open_sets_resolution(self, mock_cap: MagicMock) -> None:
        with patch("dith.capture.webcam.cv2.VideoCapture", return_value=mock_cap):
            WebcamCapture(resolution=(1280, 720)).open()
        assert mock_cap.set.call_count == 2

    def test_open_failure(self, mock_cap: MagicMock) -> None:
        mock_cap.isOpened.return_value = False
        with patch("dith.capture.webcam.cv2.VideoCapture", return_value=mock_cap):
            capture = WebcamCapture()
            with pytest.raises(CaptureError) as exc_info:
                capture.open()
        assert exc_info.value.reason is CaptureFailure.OPEN_FAILED
        assert not capture.is_open

    def test_capture_frame_is_gray(self, mock_cap: MagicMock) -> None:
        with patch("dith.capture.webcam.cv2.VideoCapture", return_value=mock_cap):
            capture = WebcamCapture()
            capture.open()
            frame = capture.capture_frame()
        assert frame.size == (6, 4)
        assert frame.stride == 6
        assert set(frame.data) == {255}
        assert capture.frame_count == 1

    def test_capture_bgra_frame(self, mock_cap: MagicMock) -> None:
        mock_cap.read.return_value = (True, np.zeros((3, 5, 4), dtype=np.uint8))
        with patch("dith.capture.webcam.cv2.VideoCapture", return_value=mock_cap):
            capture = WebcamCapture()
            capture.open()
            assert capture.capture_frame().size == (5, 3)

    def test_capture_read_failure(self, mock_cap: MagicMock) -> None:
        mock_cap.read.return_value = (False, None)
        with patch("dith.capture.webcam.cv2.VideoCapture", return_value=mock_cap):
            capture = WebcamCapture()
            capture.open()
            with pytest.raises(CaptureError) as exc_info:
                capture.capture_frame()
        assert exc_info.value.reason is CaptureFailure.NO_FRAME

    def test_capture_when_closed(self) -> None:
        with pytest.raises(CaptureError) as exc_info:
            WebcamCapture().capture_frame()
        assert exc_info.value.reason is CaptureFailure.NOT_OPEN

    def test_close_releases_device(self, mock_cap: MagicMock) -> None:
        with patch("dith.capture.webcam.cv2.VideoCapture", return_value=mock_cap):
            with WebcamCapture() as capture:
                pass
        mock_cap.release.assert_called_once()
        assert not capture.is_open
