"""Command-line interface for dith.

Provides the main entry point for rendering a live camera feed or a
single image file as Braille text.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dith.domain.models import CaptureStrategy, ConverterMode

logger = logging.getLogger(__name__)

EPILOG = """\
examples:
  dith cam --mode edge
  dith cam --mode blue_noise --strategy direct
  dith file photo.png --mode atkinson --invert
"""


def _threshold(value: str) -> int:
    try:
        threshold = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid threshold {value!r}") from None
    if not 0 <= threshold <= 255:
        raise argparse.ArgumentTypeError(f"threshold must be in 0..255, got {threshold}")
    return threshold


def _add_render_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-m", "--mode",
        choices=[m.value for m in ConverterMode],
        default=None,
        help="Conversion algorithm (default: from config, blue_noise)",
    )
    parser.add_argument(
        "-t", "--threshold",
        type=_threshold,
        default=None,
        help="Threshold 0-255 (default: 2 for edge, 128 otherwise)",
    )
    parser.add_argument(
        "-i", "--invert",
        action="store_true",
        default=None,
        help="Invert output",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="dith",
        description="Render a camera feed or image as Braille text art",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/dith.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Frame sources")

    cam_parser = subparsers.add_parser("cam", help="Render the live camera feed")
    _add_render_options(cam_parser)
    cam_parser.add_argument(
        "--strategy",
        choices=[s.value for s in CaptureStrategy],
        default=None,
        help="Frame capture strategy (default: pipelined)",
    )
    cam_parser.add_argument(
        "--warmup", type=int, default=None,
        help="Frames to discard while the camera settles (default: 3)",
    )
    cam_parser.add_argument(
        "--device", type=int, default=None,
        help="Camera device index (default: 0)",
    )
    cam_parser.add_argument(
        "--stats", action="store_true", default=None,
        help="Show per-frame timing below the image",
    )
    cam_parser.add_argument(
        "--frames", type=int, default=None,
        help="Stop after rendering this many frames",
    )

    file_parser = subparsers.add_parser("file", help="Render an image file once")
    file_parser.add_argument("path", type=Path, help="PNG, JPEG or BMP file")
    _add_render_options(file_parser)

    return parser.parse_args(argv)


def apply_overrides(settings, args: argparse.Namespace) -> None:
    """Copy explicitly given command-line options onto the settings."""
    if args.mode is not None:
        settings.render.mode = ConverterMode(args.mode)
        if args.threshold is None:
            # A threshold from the config belongs to the configured mode
            settings.render.threshold = None
    if args.threshold is not None:
        settings.render.threshold = args.threshold
    if args.invert:
        settings.render.invert = True

    if args.command == "cam":
        if args.strategy is not None:
            settings.capture.strategy = CaptureStrategy(args.strategy)
        if args.warmup is not None:
            settings.capture.warmup = max(args.warmup, 0)
        if args.device is not None:
            settings.capture.device_index = args.device
        if args.stats:
            settings.display.show_stats = True


def _build_converter(settings):
    from dith.converters.registry import create_converter

    render = settings.render
    return create_converter(render.mode, threshold=render.threshold, invert=render.invert)


def _run_camera(settings, max_frames: int | None) -> None:
    """Open the camera and render frames until interrupted."""
    from dith.capture.webcam import WebcamCapture
    from dith.display.loop import RenderLoop
    from dith.pipeline.factory import create_pipeline, warm_up

    converter = _build_converter(settings)
    capture = WebcamCapture(
        device_index=settings.capture.device_index,
        resolution=settings.capture.resolution,
    )

    try:
        with capture:
            warm_up(capture, settings.capture.warmup)
            with create_pipeline(settings.capture.strategy, capture) as pipeline:
                loop = RenderLoop(
                    pipeline,
                    converter,
                    target_fps=settings.display.target_fps,
                    show_stats=settings.display.show_stats,
                )
                loop.run(max_frames=max_frames)
    except KeyboardInterrupt:
        logger.info("Interrupted")


def _render_file(settings, path: Path) -> None:
    """Decode an image file and render it once."""
    from dith.capture.file import ImageFileSource
    from dith.display.loop import RenderLoop
    from dith.pipeline.direct import DirectPipeline

    converter = _build_converter(settings)
    source = ImageFileSource(path)

    with source, DirectPipeline(source) as pipeline:
        loop = RenderLoop(pipeline, converter)
        loop.render_once(pipeline.next_frame())


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the dith CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return 0

    from dith.capture.base import CaptureError
    from dith.config.settings import load_settings
    from dith.pipeline.base import PipelineError
    from dith.utils.logging import setup_logging

    settings = load_settings(args.config)
    apply_overrides(settings, args)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    try:
        if args.command == "cam":
            logger.info("Starting camera render (%s)", settings.render.mode.value)
            _run_camera(settings, args.frames)
        elif args.command == "file":
            logger.info("Rendering %s (%s)", args.path, settings.render.mode.value)
            _render_file(settings, args.path)
    except (CaptureError, PipelineError) as e:
        logger.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
