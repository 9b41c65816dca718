"""Double-buffered frame pipeline.

A background thread captures frames continuously into whichever of two
fixed buffers the render loop is not reading. One lock covers the whole
write (copy, metadata, index swap), so the reader only ever sees a
complete frame. Reading never waits for a new frame: the render loop
gets the most recently completed one, possibly the same one twice when
capture is slower than rendering.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from dith.capture.base import CaptureError, FrameSource
from dith.domain.models import GrayImage
from dith.pipeline.base import FramePipeline, FrameSizeChangedError, PipelineError

logger = logging.getLogger(__name__)


@dataclass
class _FrameBuffer:
    data: bytearray
    width: int
    height: int
    stride: int


class PipelinedCapture(FramePipeline):
    """Keeps the latest captured frame ready for the render loop.

    Both buffers are sized from the first frame, which is captured
    synchronously in ``start()`` so that a source that cannot deliver at
    all fails there. Later capture errors are retried by the worker. A
    change of frame layout mid-session stops the worker and is raised
    from the next ``next_frame()`` call.
    """

    def __init__(self, source: FrameSource, retry_delay: float = 0.0) -> None:
        """Initialize the pipeline.

        Args:
            source: An open frame source.
            retry_delay: Seconds to wait after a failed capture attempt
                         before trying again.
        """
        super().__init__(source)
        self._retry_delay = retry_delay
        self._buffers: list[_FrameBuffer] | None = None
        self._write_idx = 0
        self._layout: tuple[int, int, int] | None = None
        self._buffer_size = 0
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._error: PipelineError | None = None
        self._frames_captured = 0
        self._capture_failures = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def frames_captured(self) -> int:
        """Frames stored into the double buffer, the initial one included."""
        return self._frames_captured

    @property
    def capture_failures(self) -> int:
        """Capture attempts the worker had to retry."""
        return self._capture_failures

    def start(self) -> None:
        """Capture the first frame and start the background thread."""
        if self._thread is not None:
            return

        first = self._source.capture_frame()
        buffer_size = first.stride * first.height
        self._buffer_size = buffer_size
        self._layout = (first.width, first.height, first.stride)
        self._buffers = [
            _FrameBuffer(bytearray(buffer_size), first.width, first.height, first.stride)
            for _ in range(2)
        ]
        self._write_idx = 0
        self._error = None
        self._store(first)

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._capture_loop, daemon=True, name="dith-capture"
        )
        self._thread.start()
        logger.info(
            "Pipelined capture started from %s (%dx%d, %d bytes per buffer)",
            self._source.description, first.width, first.height, buffer_size,
        )

    def next_frame(self) -> GrayImage:
        """Return the most recently completed frame without waiting."""
        if self._error is not None:
            raise self._error
        if self._buffers is None:
            raise PipelineError("Pipeline is not running. Call start() first.")

        with self._lock:
            buf = self._buffers[1 - self._write_idx]
            data = bytes(buf.data)
            width, height, stride = buf.width, buf.height, buf.stride
        return GrayImage(data=data, width=width, height=height, stride=stride)

    def stop(self) -> None:
        """Signal the worker, wait for its current capture, free the buffers."""
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join()
        self._thread = None
        self._buffers = None
        logger.info(
            "Pipelined capture stopped (%d frames, %d failed attempts)",
            self._frames_captured, self._capture_failures,
        )

    def _store(self, frame: GrayImage) -> None:
        """Copy a frame into the write buffer and make it the readable one."""
        with self._lock:
            buf = self._buffers[self._write_idx]
            # Bytes past stride*height are not part of the image
            size = min(len(frame.data), self._buffer_size)
            buf.data[:size] = memoryview(frame.data)[:size]
            buf.width = frame.width
            buf.height = frame.height
            buf.stride = frame.stride
            self._write_idx = 1 - self._write_idx
            self._frames_captured += 1

    def _capture_loop(self) -> None:
        """Background thread that continuously captures frames."""
        while not self._stop_event.is_set():
            try:
                frame = self._source.capture_frame()
            except CaptureError as e:
                self._capture_failures += 1
                logger.debug("Capture attempt failed (%s), retrying", e)
                if self._retry_delay > 0:
                    self._stop_event.wait(self._retry_delay)
                continue
            except Exception as e:
                logger.exception("Capture thread crashed")
                self._error = PipelineError(f"Capture thread crashed: {e}")
                self._error.__cause__ = e
                return

            layout = (frame.width, frame.height, frame.stride)
            if layout != self._layout:
                self._error = FrameSizeChangedError(self._layout, layout)
                logger.error("%s; stopping capture", self._error)
                return

            self._store(frame)
