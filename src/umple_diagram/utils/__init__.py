"""Utility modules: config loading and structured logging."""

from umple_diagram.utils.config import ConfigError, ConfigLoader, ToolchainConfig
from umple_diagram.utils.logging import StructuredLogger, get_logger, set_log_level

__all__ = [
    "ConfigLoader",
    "ConfigError",
    "ToolchainConfig",
    "StructuredLogger",
    "get_logger",
    "set_log_level",
]
