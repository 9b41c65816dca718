"""Abstract base class for frame pipelines.

A frame pipeline sits between a FrameSource and the render loop and
answers one question: which frame should be rendered next. The direct
pipeline asks the source every time; the pipelined one hands out the
most recent frame captured by a background thread.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from dith.capture.base import FrameSource
from dith.domain.models import GrayImage

logger = logging.getLogger(__name__)


class FramePipeline(ABC):
    """Abstract interface for supplying frames to the render loop.

    The source must already be open. Example usage::

        with WebcamCapture() as source, PipelinedCapture(source) as frames:
            while True:
                render(frames.next_frame())
    """

    def __init__(self, source: FrameSource) -> None:
        self._source = source

    @property
    def source(self) -> FrameSource:
        return self._source

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """Whether ``next_frame`` may be called."""
        ...

    @abstractmethod
    def start(self) -> None:
        """Prepare to deliver frames.

        Raises:
            CaptureError: If the first frame cannot be captured.
        """
        ...

    @abstractmethod
    def next_frame(self) -> GrayImage:
        """Return the frame to render next.

        Raises:
            PipelineError: If the pipeline is not running or has failed.
        """
        ...

    @abstractmethod
    def stop(self) -> None:
        """Stop delivering frames. Safe to call multiple times."""
        ...

    def __enter__(self) -> FramePipeline:
        """Context manager entry -- starts the pipeline."""
        self.start()
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        """Context manager exit -- stops the pipeline."""
        self.stop()


class PipelineError(Exception):
    """Raised when a frame pipeline cannot deliver frames."""


class FrameSizeChangedError(PipelineError):
    """Raised when the source changes resolution after the pipeline started."""

    def __init__(
        self,
        expected: tuple[int, int, int],
        actual: tuple[int, int, int],
    ) -> None:
        super().__init__(
            "Frame layout changed from %dx%d (stride %d) to %dx%d (stride %d)"
            % (*expected, *actual)
        )
        self.expected = expected
        self.actual = actual
