"""
Runtime Configuration Module

Provides configuration loading and management for hashtree.
"""

from .log import setup_logging, setup_logging_from_config
from .runtime import (
    DEFAULT_HASH_ALGORITHM,
    SUPPORTED_HASH_ALGORITHMS,
    HashingConfig,
    LoggingConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "SUPPORTED_HASH_ALGORITHMS",
    "HashingConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
    "setup_logging",
    "setup_logging_from_config",
]
