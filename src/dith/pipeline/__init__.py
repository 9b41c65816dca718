"""Frame pipeline module for dith.

Supplies the render loop with frames from a capture source, either
synchronously or through a background-thread double buffer.

Public API:
    FramePipeline -- Abstract base class
    DirectPipeline -- Blocking capture on every frame
    PipelinedCapture -- Double-buffered background capture
    create_pipeline -- Build a pipeline from a CaptureStrategy
    warm_up -- Discard a camera's first frames
"""

from dith.pipeline.base import FramePipeline, FrameSizeChangedError, PipelineError
from dith.pipeline.direct import DirectPipeline
from dith.pipeline.factory import create_pipeline, warm_up
from dith.pipeline.pipelined import PipelinedCapture

__all__ = [
    "DirectPipeline",
    "FramePipeline",
    "FrameSizeChangedError",
    "PipelineError",
    "PipelinedCapture",
    "create_pipeline",
    "warm_up",
]
