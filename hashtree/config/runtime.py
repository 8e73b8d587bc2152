"""
Runtime Configuration

Central configuration for digest computation and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from hashtree.schemas.errors import ConfigurationException

load_dotenv()


# Fixed-length hashlib algorithms usable for Merkle digests.
SUPPORTED_HASH_ALGORITHMS: tuple[str, ...] = (
    "sha3_256",
    "sha3_384",
    "sha3_512",
    "sha224",
    "sha256",
    "sha384",
    "sha512",
    "blake2b",
    "blake2s",
)

DEFAULT_HASH_ALGORITHM = "sha3_256"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class HashingConfig:
    """Configuration for the digest provider."""
    algorithm: str = DEFAULT_HASH_ALGORITHM

    def __post_init__(self):
        self.algorithm = self.algorithm.lower()
        if self.algorithm not in SUPPORTED_HASH_ALGORITHMS:
            raise ConfigurationException(
                f"Unsupported hash algorithm: {self.algorithm}",
                field_path="hashing.algorithm",
                details={"supported": list(SUPPORTED_HASH_ALGORITHMS)},
            )


@dataclass
class LoggingConfig:
    """Configuration for library logging (applied by setup_logging)."""
    level: str = "WARNING"
    log_file: Optional[str] = None

    def __post_init__(self):
        self.level = self.level.upper()
        if self.level not in _LOG_LEVELS:
            raise ConfigurationException(
                f"Unknown log level: {self.level}",
                field_path="logging.level",
            )


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for hashtree.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hashing: HashingConfig = field(default_factory=HashingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - HASHTREE_HASH_ALGORITHM: hashlib algorithm name (default sha3_256)
        - HASHTREE_LOG_LEVEL: log level for setup_logging
        - HASHTREE_LOG_FILE: optional log file for setup_logging
        """
        overrides: dict[str, Any] = {}

        if os.getenv("HASHTREE_HASH_ALGORITHM"):
            overrides.setdefault("hashing", {})["algorithm"] = os.getenv("HASHTREE_HASH_ALGORITHM")

        if os.getenv("HASHTREE_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("HASHTREE_LOG_LEVEL")
        if os.getenv("HASHTREE_LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.getenv("HASHTREE_LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing", {})
        logging_data = data.get("logging", {})

        try:
            hashing = HashingConfig(**hashing_data) if hashing_data else HashingConfig()
            log = LoggingConfig(**logging_data) if logging_data else LoggingConfig()
        except TypeError as e:
            raise ConfigurationException(f"Invalid configuration: {e}") from e

        return cls(hashing=hashing, logging=log)

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        if "hashing" in overrides:
            merged = {**vars(new_config.hashing), **overrides["hashing"]}
            new_config.hashing = HashingConfig(**merged)
        if "logging" in overrides:
            merged = {**vars(new_config.logging), **overrides["logging"]}
            new_config.logging = LoggingConfig(**merged)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hashing": {
                "algorithm": self.hashing.algorithm,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env-derived defaults)."""
    global _default_config
    _default_config = config
