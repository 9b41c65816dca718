"""Tests for converter lookup by mode."""

from __future__ import annotations

import pytest

from dith.converters import (
    AtkinsonConverter,
    BayerConverter,
    BlueNoiseConverter,
    EdgeConverter,
    FloydSteinbergConverter,
)
from dith.converters.registry import create_converter, default_threshold
from dith.domain.models import ConverterMode


class TestCreateConverter:
    @pytest.mark.parametrize(
        "mode,expected",
        [
            ("edge", EdgeConverter),
            ("atkinson", AtkinsonConverter),
            ("floyd_steinberg", FloydSteinbergConverter),
            ("bayer", BayerConverter),
            ("blue_noise", BlueNoiseConverter),
        ],
    )
    def test_mode_names(self, mode: str, expected: type) -> None:
        converter = create_converter(mode)
        assert isinstance(converter, expected)
        assert converter.name == mode

    def test_default_thresholds(self) -> None:
        assert create_converter(ConverterMode.EDGE).threshold == 2
        assert create_converter(ConverterMode.ATKINSON).threshold == 128
        assert default_threshold("bayer") == 128
        assert default_threshold(ConverterMode.EDGE) == 2

    def test_explicit_options(self) -> None:
        converter = create_converter(ConverterMode.BLUE_NOISE, threshold=90, invert=True)
        assert converter.threshold == 90
        assert converter.invert is True

    def test_unknown_mode(self) -> None:
        with pytest.raises(ValueError, match="Unknown converter mode"):
            create_converter("sobel")

    def test_threshold_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            create_converter("bayer", threshold=300)
