"""Helpers for building a frame pipeline from configuration."""

from __future__ import annotations

import logging

from dith.capture.base import FrameSource
from dith.domain.models import CaptureStrategy
from dith.pipeline.base import FramePipeline
from dith.pipeline.direct import DirectPipeline
from dith.pipeline.pipelined import PipelinedCapture

logger = logging.getLogger(__name__)


def warm_up(source: FrameSource, count: int) -> None:
    """Capture and discard ``count`` frames.

    Cameras need a few frames to settle exposure and white balance
    before their output is worth rendering.

    Raises:
        CaptureError: If any warm-up capture fails.
    """
    for _ in range(count):
        source.capture_frame()
    if count:
        logger.debug("Discarded %d warm-up frames from %s", count, source.description)


def create_pipeline(
    strategy: CaptureStrategy | str,
    source: FrameSource,
) -> FramePipeline:
    """Build the frame pipeline for ``strategy`` around an open source."""
    strategy = CaptureStrategy(strategy)
    if strategy is CaptureStrategy.PIPELINED:
        return PipelinedCapture(source)
    return DirectPipeline(source)
