"""Image-to-Braille converters for dith.

Five interchangeable algorithms behind one interface. Each converter is
configured with a threshold and an invert flag at construction and is
stateless across frames.

Public API:
    Converter -- Abstract base class
    create_converter -- Build a converter by mode name
"""

from dith.converters.atkinson import AtkinsonConverter
from dith.converters.base import BinarizingConverter, Converter
from dith.converters.bayer import BayerConverter, bayer_matrix
from dith.converters.blue_noise import BlueNoiseConverter, blue_noise_texture
from dith.converters.edge import EdgeConverter
from dith.converters.floyd_steinberg import FloydSteinbergConverter
from dith.converters.registry import CONVERTERS, create_converter, default_threshold

__all__ = [
    "AtkinsonConverter",
    "BayerConverter",
    "BinarizingConverter",
    "BlueNoiseConverter",
    "CONVERTERS",
    "Converter",
    "EdgeConverter",
    "FloydSteinbergConverter",
    "bayer_matrix",
    "blue_noise_texture",
    "create_converter",
    "default_threshold",
]
