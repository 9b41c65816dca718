"""Synchronous frame pipeline.

Every call blocks on the source, so the full capture latency lands in
each render cycle. Simple, and the right choice for still images.
"""

from __future__ import annotations

import logging

from dith.capture.base import FrameSource
from dith.domain.models import GrayImage
from dith.pipeline.base import FramePipeline, PipelineError

logger = logging.getLogger(__name__)


class DirectPipeline(FramePipeline):
    """Captures a fresh frame from the source on every request."""

    def __init__(self, source: FrameSource) -> None:
        super().__init__(source)
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True
        logger.debug("Direct capture from %s", self._source.description)

    def next_frame(self) -> GrayImage:
        if not self._running:
            raise PipelineError("Pipeline is not running. Call start() first.")
        return self._source.capture_frame()

    def stop(self) -> None:
        self._running = False
