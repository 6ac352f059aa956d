"""
Runtime Configuration Module

Provides configuration loading and management for txmerkle.
"""

from .runtime import (
    ENV_PREFIX,
    EngineConfig,
    LoggingConfig,
    OutputConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "ENV_PREFIX",
    "EngineConfig",
    "LoggingConfig",
    "OutputConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
