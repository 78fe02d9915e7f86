"""
xivdat Configuration
====================

Library configuration: I/O tuning and CLI defaults. Configuration can
come from:
- Default values (defined here)
- Environment variables

Environment variables (all optional):
    XIVDAT_CHUNK_SIZE: Maximum bytes written per call when padding content
    XIVDAT_LOG_LEVEL: Logging level used by the command-line tool

Copyright (c) 2026 xivdat Contributors
"""

from dataclasses import dataclass
from typing import Optional
import logging
import os


# Largest single padding write; larger regions are written in chunks.
DEFAULT_CHUNK_SIZE = 1024 * 1024


@dataclass
class DATConfig:
    """
    Configuration for DAT file handling.

    Attributes:
        chunk_size: Bytes per write call when padding resized content
            (default: 1 MiB)
        log_level: Level name for CLI logging (default: "WARNING")
    """
    chunk_size: int = DEFAULT_CHUNK_SIZE
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "DATConfig":
        """
        Create DATConfig from environment variables.

        Invalid values are ignored and the default is kept.

        Returns:
            DATConfig with values from environment variables
        """
        config = cls()

        if chunk_size := os.environ.get("XIVDAT_CHUNK_SIZE"):
            try:
                value = int(chunk_size)
            except ValueError:
                value = 0
            if value > 0:
                config.chunk_size = value

        if log_level := os.environ.get("XIVDAT_LOG_LEVEL"):
            level = log_level.upper()
            if isinstance(logging.getLevelName(level), int):
                config.log_level = level

        return config

    def get_log_level(self) -> int:
        """Numeric logging level for `log_level`."""
        return logging.getLevelName(self.log_level.upper())


# Lazily created global configuration
_config: Optional[DATConfig] = None


def get_config() -> DATConfig:
    """
    Get the global configuration.

    Creates it from environment variables on first access.
    """
    global _config
    if _config is None:
        _config = DATConfig.from_env()
    return _config


def set_config(config: Optional[DATConfig]) -> None:
    """Replace the global configuration (None resets to env defaults)."""
    global _config
    _config = config
