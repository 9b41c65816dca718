"""Render loop: frames in, Braille text out.

Pulls the next frame from a frame pipeline, fits it to the terminal,
converts it and writes the text to a binary stream, capped to a target
frame rate.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import BinaryIO, Callable

from pydantic import BaseModel, Field

from dith.converters.base import Converter
from dith.display.terminal import CLEAR_SCREEN, TermSize, get_terminal_size
from dith.domain.models import GrayImage, OutputSize
from dith.pipeline.base import FramePipeline
from dith.render.geometry import dimensions_to_fit

logger = logging.getLogger(__name__)


class FrameTiming(BaseModel):
    """Timing of one render cycle, in milliseconds."""

    convert_ms: float = Field(ge=0.0)
    render_ms: float = Field(ge=0.0)
    total_ms: float = Field(ge=0.0)

    @property
    def fps(self) -> float:
        return 1000.0 / self.total_ms if self.total_ms > 0 else 0.0

    def summary(self) -> str:
        return (
            f"FPS: {self.fps:.1f} | Convert: {self.convert_ms:.1f}ms | "
            f"Render: {self.render_ms:.1f}ms | Total: {self.total_ms:.1f}ms"
        )


class RenderLoop:
    """Drives a frame pipeline through a converter onto the terminal.

    The loop is single-threaded. With a pipelined frame source it never
    blocks on the camera; with a direct one each cycle includes the full
    capture time.
    """

    def __init__(
        self,
        pipeline: FramePipeline,
        converter: Converter,
        output: BinaryIO | None = None,
        target_fps: float = 60.0,
        show_stats: bool = False,
        terminal_size: Callable[[], TermSize] = get_terminal_size,
    ) -> None:
        self._pipeline = pipeline
        self._converter = converter
        self._output = output if output is not None else sys.stdout.buffer
        self._frame_interval = 1.0 / target_fps
        self._show_stats = show_stats
        self._terminal_size = terminal_size
        self._running = False
        self._frames_rendered = 0

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def frames_rendered(self) -> int:
        return self._frames_rendered

    def stop(self) -> None:
        """Signal the loop to stop after the current frame."""
        self._running = False

    def output_size(self, frame: GrayImage) -> OutputSize:
        """Glyph grid that fits ``frame`` into the terminal."""
        term = self._terminal_size()
        rows = term.rows - 1 if self._show_stats else term.rows
        return dimensions_to_fit(frame.width, frame.height, term.cols, rows)

    def render_frame(self, frame: GrayImage) -> FrameTiming:
        """Convert one frame and write it over the previous one."""
        start = time.perf_counter()
        size = self.output_size(frame)
        text = self._converter.convert(frame, size.cols, size.rows)
        converted = time.perf_counter()

        self._output.write(CLEAR_SCREEN)
        self._output.write(text)
        rendered = time.perf_counter()

        timing = FrameTiming(
            convert_ms=(converted - start) * 1000.0,
            render_ms=(rendered - converted) * 1000.0,
            total_ms=(rendered - start) * 1000.0,
        )
        if self._show_stats:
            self._output.write(timing.summary().encode("utf-8") + b"\n")
        self._output.flush()
        self._frames_rendered += 1
        return timing

    def render_once(self, frame: GrayImage) -> None:
        """Render a single still frame, leaving the cursor below it."""
        size = self.output_size(frame)
        text = self._converter.convert(frame, size.cols, size.rows)
        self._output.write(CLEAR_SCREEN)
        self._output.write(text)
        self._output.write(b"\n")
        self._output.flush()
        self._frames_rendered += 1

    def run(self, max_frames: int | None = None) -> int:
        """Render frames until stopped or ``max_frames`` have been shown.

        Returns:
            The number of frames rendered.
        """
        self._running = True
        rendered = 0
        logger.info(
            "Render loop started (%s, %.0f fps cap)",
            self._converter.name, 1.0 / self._frame_interval,
        )
        try:
            while self._running:
                if max_frames is not None and rendered >= max_frames:
                    break
                cycle_start = time.perf_counter()
                self.render_frame(self._pipeline.next_frame())
                rendered += 1

                elapsed = time.perf_counter() - cycle_start
                if elapsed < self._frame_interval:
                    time.sleep(self._frame_interval - elapsed)
        finally:
            self._running = False
            logger.info("Render loop stopped after %d frames", rendered)
        return rendered
