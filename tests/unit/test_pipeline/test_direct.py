"""Tests for the synchronous frame pipeline."""

from __future__ import annotations

import pytest

from dith.capture.base import CaptureError
from dith.pipeline.base import FramePipeline, PipelineError
from dith.pipeline.direct import DirectPipeline


class TestFramePipelineInterface:
    def test_cannot_instantiate_abstract_class(self, scripted_source) -> None:
        with pytest.raises(TypeError):
            FramePipeline(scripted_source())  # type: ignore[abstract]


class TestDirectPipeline:
    def test_next_frame_before_start(self, scripted_source, make_image) -> None:
        pipeline = DirectPipeline(scripted_source(make_image(4, 4)))
        assert not pipeline.is_running
        with pytest.raises(PipelineError, match="not running"):
            pipeline.next_frame()

    def test_frames_in_capture_order(self, scripted_source, make_image) -> None:
        source = scripted_source(make_image(4, 4, 1), make_image(4, 4, 2))
        with DirectPipeline(source) as pipeline:
            assert pipeline.is_running
            assert pipeline.next_frame().pixel(0, 0) == 1
            assert pipeline.next_frame().pixel(0, 0) == 2
        assert not pipeline.is_running

    def test_capture_errors_propagate(self, scripted_source, make_image) -> None:
        source = scripted_source(CaptureError("no frame"), make_image(4, 4))
        with DirectPipeline(source) as pipeline:
            with pytest.raises(CaptureError):
                pipeline.next_frame()
            assert pipeline.next_frame().size == (4, 4)

    def test_source_property(self, scripted_source) -> None:
        source = scripted_source()
        assert DirectPipeline(source).source is source
