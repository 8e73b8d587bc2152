"""
Logging setup for applications embedding hashtree.

The library itself only creates module loggers; handlers are installed
here on request.
"""

from __future__ import annotations

import logging
import sys

from .runtime import RuntimeConfig, get_default_config


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure root logging with a stderr handler and optional file handler."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def setup_logging_from_config(config: RuntimeConfig | None = None) -> None:
    """Apply the logging section of a RuntimeConfig (default config if None)."""
    config = config or get_default_config()
    setup_logging(config.logging.level, config.logging.log_file)
