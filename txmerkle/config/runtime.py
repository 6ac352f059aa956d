"""
Runtime Configuration

Central configuration for tree construction limits, logging and output.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

import yaml
from dotenv import load_dotenv

from txmerkle.schemas.errors import ConfigurationException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "TXMERKLE_"

OUTPUT_FORMATS = ("human", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class EngineConfig:
    """Limits applied when building a tree."""
    max_leaves: int = 0  # 0 = unlimited
    allow_duplicates: bool = True

    def __post_init__(self):
        if isinstance(self.max_leaves, bool) or not isinstance(self.max_leaves, int):
            raise ConfigurationException(
                f"max_leaves must be an integer, got {self.max_leaves!r}",
                field_path="engine.max_leaves",
            )
        if not isinstance(self.allow_duplicates, bool):
            raise ConfigurationException(
                f"allow_duplicates must be true or false, got {self.allow_duplicates!r}",
                field_path="engine.allow_duplicates",
            )
        if self.max_leaves < 0:
            raise ConfigurationException(
                f"max_leaves must be >= 0, got {self.max_leaves}",
                field_path="engine.max_leaves",
            )


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.level, str):
            raise ConfigurationException(
                f"Log level must be a string, got {self.level!r}",
                field_path="logging.level",
            )
        if self.file is not None and not isinstance(self.file, str):
            raise ConfigurationException(
                f"Log file must be a path string, got {self.file!r}",
                field_path="logging.file",
            )
        self.level = self.level.upper()
        if self.level not in LOG_LEVELS:
            raise ConfigurationException(
                f"Unknown log level: {self.level}",
                field_path="logging.level",
            )


@dataclass
class OutputConfig:
    """Configuration for CLI output."""
    format: str = "human"

    def __post_init__(self):
        if not isinstance(self.format, str) or self.format not in OUTPUT_FORMATS:
            raise ConfigurationException(
                f"Output format must be one of {OUTPUT_FORMATS}, got {self.format!r}",
                field_path="output.format",
            )


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    engine: EngineConfig = field(default_factory=EngineConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - TXMERKLE_MAX_LEAVES: Leaf limit for construction (0 = unlimited)
        - TXMERKLE_ALLOW_DUPLICATES: Accept repeated leaf ids (true/false)
        - TXMERKLE_LOG_LEVEL: Log level
        - TXMERKLE_LOG_FILE: Also write logs to this file
        - TXMERKLE_OUTPUT_FORMAT: human or json
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}MAX_LEAVES"):
            try:
                max_leaves = int(os.getenv(f"{ENV_PREFIX}MAX_LEAVES", "0"))
            except ValueError as e:
                raise ConfigurationException(
                    f"{ENV_PREFIX}MAX_LEAVES must be an integer",
                    field_path="engine.max_leaves",
                ) from e
            overrides.setdefault("engine", {})["max_leaves"] = max_leaves
        if os.getenv(f"{ENV_PREFIX}ALLOW_DUPLICATES"):
            overrides.setdefault("engine", {})["allow_duplicates"] = _env_bool(
                f"{ENV_PREFIX}ALLOW_DUPLICATES", True
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
            overrides.setdefault("output", {})["format"] = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML (.yaml/.yml) or JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                if path.suffix.lower() in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationException(
                f"Could not parse config file {path}: {e}",
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationException(f"Config file {path} must contain a mapping")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        engine_data = data.get("engine", {}) or {}
        logging_data = data.get("logging", {}) or {}
        output_data = data.get("output", {}) or {}

        try:
            engine = EngineConfig(**engine_data)
            log_config = LoggingConfig(**logging_data)
            output = OutputConfig(**output_data)
        except TypeError as e:
            raise ConfigurationException(f"Invalid configuration: {e}") from e

        return cls(
            engine=engine,
            logging=log_config,
            output=output,
            extra=data.get("extra", {}) or {},
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for section, values in overrides.items():
            target = getattr(new_config, section)
            for key, value in values.items():
                setattr(target, key, value)
            # Re-run section validation on the overridden values
            target.__post_init__()

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "engine": {
                "max_leaves": self.engine.max_leaves,
                "allow_duplicates": self.engine.allow_duplicates,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "output": {
                "format": self.output.format,
            },
            "extra": self.extra,
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
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
