"""Domain models for dith.

Core value objects shared by the converters, capture sources and the
frame pipeline. All models use Pydantic v2 for validation.
"""

from dith.domain.models import (
    CaptureStrategy,
    ConverterConfig,
    ConverterMode,
    GrayImage,
    OutputSize,
)

__all__ = [
    "CaptureStrategy",
    "ConverterConfig",
    "ConverterMode",
    "GrayImage",
    "OutputSize",
]
