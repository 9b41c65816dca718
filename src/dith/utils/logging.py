"""Logging setup utilities for dith.

Configures the ``dith`` logger (and so every module logger beneath it)
from the logging configuration settings. Other loggers, the root logger
included, are left alone. Log output goes to stderr (or a file) so it
never mixes with the Braille frames written to stdout.
"""

from __future__ import annotations

import logging
import sys

from dith.config.settings import LoggingConfig


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure logging for the dith application.

    Sets up the ``dith`` logger with the specified level, format, and
    optional file handler. Calling it again replaces the handlers from
    the previous call.

    Args:
        config: Logging configuration. If None, uses defaults
                (WARNING level, stderr output).
    """
    if config is None:
        config = LoggingConfig()

    root_logger = logging.getLogger("dith")
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler (optional)
    if config.file:
        file_handler = logging.FileHandler(config.file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug("Logging initialized at %s level", config.level)
