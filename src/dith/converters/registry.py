"""Lookup from converter mode to converter class."""

from __future__ import annotations

import logging

from dith.converters.atkinson import AtkinsonConverter
from dith.converters.base import Converter
from dith.converters.bayer import BayerConverter
from dith.converters.blue_noise import BlueNoiseConverter
from dith.converters.edge import EdgeConverter
from dith.converters.floyd_steinberg import FloydSteinbergConverter
from dith.domain.models import ConverterMode

logger = logging.getLogger(__name__)

CONVERTERS: dict[ConverterMode, type[Converter]] = {
    ConverterMode.EDGE: EdgeConverter,
    ConverterMode.ATKINSON: AtkinsonConverter,
    ConverterMode.FLOYD_STEINBERG: FloydSteinbergConverter,
    ConverterMode.BAYER: BayerConverter,
    ConverterMode.BLUE_NOISE: BlueNoiseConverter,
}


def default_threshold(mode: ConverterMode | str) -> int:
    """The threshold a mode uses when none is configured."""
    return CONVERTERS[ConverterMode(mode)].default_threshold


def create_converter(
    mode: ConverterMode | str,
    threshold: int | None = None,
    invert: bool = False,
) -> Converter:
    """Build the converter for ``mode``.

    Args:
        mode: A ConverterMode or its string value (e.g. "bayer").
        threshold: 0..255, or None for the mode's default.
        invert: Swap lit and unlit dots.

    Raises:
        ValueError: If ``mode`` is unknown or ``threshold`` is out of range.
    """
    try:
        mode = ConverterMode(mode)
    except ValueError:
        known = ", ".join(m.value for m in ConverterMode)
        raise ValueError(f"Unknown converter mode {mode!r} (expected one of: {known})") from None
    converter = CONVERTERS[mode](threshold=threshold, invert=invert)
    logger.debug("Created %r", converter)
    return converter
