"""Tests for the command-line interface."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from dith.cli import apply_overrides, main, parse_args
from dith.config.settings import Settings
from dith.display.terminal import CLEAR_SCREEN
from dith.domain.models import CaptureStrategy, ConverterMode


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("dith")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def small_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COLUMNS", "40")
    monkeypatch.setenv("LINES", "20")


@pytest.fixture
def png_file(tmp_path: Path) -> Path:
    path = tmp_path / "photo.png"
    image = Image.new("L", (64, 32), 0)
    image.paste(255, (0, 0, 32, 32))
    image.save(path)
    return path


class TestParseArgs:
    def test_cam_defaults(self) -> None:
        args = parse_args(["cam"])
        assert args.command == "cam"
        assert args.mode is None
        assert args.threshold is None
        assert args.invert is None
        assert args.strategy is None
        assert args.frames is None

    def test_file_options(self) -> None:
        args = parse_args(["-v", "file", "img.png", "-m", "edge", "-t", "10", "-i"])
        assert args.verbose is True
        assert args.path == Path("img.png")
        assert args.mode == "edge"
        assert args.threshold == 10
        assert args.invert is True

    @pytest.mark.parametrize("value", ["256", "-1", "abc"])
    def test_invalid_threshold(self, value: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["cam", "--threshold", value])
        assert exc_info.value.code == 2

    def test_invalid_mode(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["cam", "--mode", "sobel"])


class TestApplyOverrides:
    def test_mode_without_threshold_uses_mode_default(self) -> None:
        settings = Settings()
        settings.render.threshold = 100
        apply_overrides(settings, parse_args(["cam", "--mode", "edge"]))
        assert settings.render.mode is ConverterMode.EDGE
        assert settings.render.threshold is None

    def test_threshold_and_invert(self) -> None:
        settings = Settings()
        apply_overrides(settings, parse_args(["file", "x.png", "-t", "90", "-i"]))
        assert settings.render.threshold == 90
        assert settings.render.invert is True

    def test_camera_options(self) -> None:
        settings = Settings()
        args = parse_args(
            ["cam", "--strategy", "direct", "--warmup", "0", "--device", "2", "--stats"]
        )
        apply_overrides(settings, args)
        assert settings.capture.strategy is CaptureStrategy.DIRECT
        assert settings.capture.warmup == 0
        assert settings.capture.device_index == 2
        assert settings.display.show_stats is True

    def test_absent_flags_keep_config(self) -> None:
        settings = Settings()
        settings.render.invert = True
        apply_overrides(settings, parse_args(["cam"]))
        assert settings.render.invert is True
        assert settings.capture.strategy is CaptureStrategy.PIPELINED


class TestMain:
    def test_no_command_prints_help(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0

    def test_render_file(self, png_file, small_terminal, capsysbinary) -> None:
        assert main(["file", str(png_file), "--mode", "bayer"]) == 0
        out = capsysbinary.readouterr().out
        assert out.startswith(CLEAR_SCREEN)
        text = out[len(CLEAR_SCREEN):].decode("utf-8")
        # 64x32 fits 40x20 as 40 columns by 10 rows
        lines = text.rstrip("\n").split("\n")
        assert len(lines) == 10
        assert all(len(line) == 40 for line in lines)
        assert lines[0][0] == "⣿"
        assert lines[0][-1] == "⠀"

    def test_render_missing_file(self, tmp_path, capsys) -> None:
        assert main(["file", str(tmp_path / "missing.png")]) == 1
        assert "error: File not found" in capsys.readouterr().err

    def test_render_unsupported_file(self, tmp_path, capsys) -> None:
        path = tmp_path / "anim.gif"
        path.write_bytes(b"GIF89a" + bytes(16))
        assert main(["file", str(path)]) == 1
        assert "Unsupported image format" in capsys.readouterr().err

    def test_camera_frames(self, cycling_source, small_terminal, capsysbinary) -> None:
        with patch("dith.capture.webcam.WebcamCapture", return_value=cycling_source) as ctor:
            code = main(["cam", "--frames", "2", "--strategy", "direct", "--warmup", "1"])
        assert code == 0
        ctor.assert_called_once_with(device_index=0, resolution=None)
        assert capsysbinary.readouterr().out.count(CLEAR_SCREEN) == 2
        assert cycling_source.frame_count == 3

    def test_camera_pipelined(self, cycling_source, small_terminal, capsysbinary) -> None:
        with patch("dith.capture.webcam.WebcamCapture", return_value=cycling_source):
            assert main(["cam", "--frames", "3", "--mode", "edge"]) == 0
        assert capsysbinary.readouterr().out.count(CLEAR_SCREEN) == 3

    def test_camera_open_failure(self, capsys) -> None:
        cap = MagicMock()
        cap.isOpened.return_value = False
        with patch("dith.capture.webcam.cv2.VideoCapture", return_value=cap):
            assert main(["cam", "--frames", "1"]) == 1
        assert "error: Failed to open webcam" in capsys.readouterr().err
