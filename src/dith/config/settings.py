"""Configuration management for dith.

Loads settings from an optional YAML configuration file, with
``DITH_``-prefixed environment variables and a .env file filling in
anything the file leaves out. Command-line flags are applied on top by
the CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from dith.domain.models import CaptureStrategy, ConverterMode

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/dith.yaml")


class RenderConfig(BaseModel):
    mode: ConverterMode = Field(default=ConverterMode.BLUE_NOISE)
    threshold: int | None = Field(
        default=None, ge=0, le=255,
        description="Converter threshold; None uses the mode's default",
    )
    invert: bool = Field(default=False)


class CaptureConfig(BaseModel):
    device_index: int = Field(default=0, ge=0, description="OpenCV camera device index")
    warmup: int = Field(default=3, ge=0, description="Frames discarded after opening the camera")
    strategy: CaptureStrategy = Field(default=CaptureStrategy.PIPELINED)
    resolution_width: int | None = Field(default=None, gt=0)
    resolution_height: int | None = Field(default=None, gt=0)

    @property
    def resolution(self) -> tuple[int, int] | None:
        if self.resolution_width and self.resolution_height:
            return self.resolution_width, self.resolution_height
        return None


class DisplayConfig(BaseModel):
    target_fps: float = Field(default=60.0, gt=0)
    show_stats: bool = Field(default=False, description="Print per-frame timing below the image")


class LoggingConfig(BaseModel):
    level: str = Field(default="WARNING")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for dith.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "DITH_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    render: RenderConfig = Field(default_factory=RenderConfig)
    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Values in the YAML file beat environment variables, which beat the
    .env file, which beats the defaults. Command-line flags are applied
    on top of the result by the CLI.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    elif config_path is not None:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)
