"""Shared test fixtures for the dith test suite.

Provides common fixtures used across the unit tests: sample images,
scripted frame sources and a polling helper for threaded code.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Iterator

import numpy as np
import pytest

from dith.capture.base import CaptureError, CaptureFailure, FrameSource
from dith.domain.models import GrayImage


# ---------------------------------------------------------------------------
# Image Helpers / Fixtures
# ---------------------------------------------------------------------------


def _make_image(width: int, height: int, value: int = 0) -> GrayImage:
    """A uniform image."""
    return GrayImage(data=bytes([value]) * (width * height), width=width, height=height, stride=width)


def _image_from_rows(rows: list[list[int]]) -> GrayImage:
    """An image from a list of pixel rows."""
    return GrayImage.from_array(np.array(rows, dtype=np.uint8))


def _wait_for(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
    """Poll ``predicate`` until it holds or ``timeout`` seconds pass."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


@pytest.fixture
def make_image() -> Callable[..., GrayImage]:
    return _make_image


@pytest.fixture
def image_from_rows() -> Callable[[list[list[int]]], GrayImage]:
    return _image_from_rows


@pytest.fixture
def wait_for() -> Callable[..., bool]:
    return _wait_for


@pytest.fixture
def gradient_image() -> GrayImage:
    """An 8x8 horizontal-then-vertical ramp from 0 to 252."""
    return GrayImage(data=bytes(i * 4 for i in range(64)), width=8, height=8, stride=8)


@pytest.fixture
def striped_image() -> GrayImage:
    """2x4 image of alternating white and black rows."""
    return _image_from_rows([[255, 255], [0, 0], [255, 255], [0, 0]])


# ---------------------------------------------------------------------------
# Frame Source Fixtures
# ---------------------------------------------------------------------------


class ScriptedFrameSource(FrameSource):
    """Frame source that replays a script of frames and errors.

    Once the script is exhausted each capture blocks on ``gate`` (up to
    a few seconds) and then fails with CaptureError, which mimics a
    camera that has stopped delivering.
    """

    def __init__(self, script: list[GrayImage | Exception]) -> None:
        super().__init__()
        self._script = list(script)
        self._lock = threading.Lock()
        self.gate = threading.Event()
        self.calls = 0

    def open(self) -> None:
        self._is_open = True

    def close(self) -> None:
        self._is_open = False

    def capture_frame(self) -> GrayImage:
        with self._lock:
            self.calls += 1
            item = self._script.pop(0) if self._script else None
        if item is None:
            self.gate.wait(timeout=5.0)
            raise CaptureError("script exhausted", CaptureFailure.NO_FRAME)
        if isinstance(item, Exception):
            raise item
        self._frame_counter += 1
        return item


class CyclingFrameSource(FrameSource):
    """Endless source of uniform frames whose value changes every capture."""

    def __init__(self, width: int = 64, height: int = 48) -> None:
        super().__init__()
        self._width = width
        self._height = height

    def open(self) -> None:
        self._is_open = True

    def close(self) -> None:
        self._is_open = False

    def capture_frame(self) -> GrayImage:
        self._frame_counter += 1
        return _make_image(self._width, self._height, self._frame_counter % 256)


@pytest.fixture
def scripted_source() -> Iterator[Callable[..., ScriptedFrameSource]]:
    """Factory for opened ScriptedFrameSource instances, released on teardown."""
    created: list[ScriptedFrameSource] = []

    def factory(*script: GrayImage | Exception) -> ScriptedFrameSource:
        source = ScriptedFrameSource(list(script))
        source.open()
        created.append(source)
        return source

    yield factory
    for source in created:
        source.gate.set()


@pytest.fixture
def cycling_source() -> CyclingFrameSource:
    source = CyclingFrameSource()
    source.open()
    return source
