"""
Module 04 - CLI Configuration

Locates and loads the txmerkle configuration for the CLI.
Environment variables override file settings.
"""

from __future__ import annotations

from pathlib import Path

from txmerkle.config.runtime import RuntimeConfig


DEFAULT_CONFIG_NAMES = ("txmerkle.json", "txmerkle.yaml", "txmerkle.yml")


def default_config_paths() -> list[Path]:
    """Locations searched when no --config is given, in priority order."""
    paths = [Path.cwd() / name for name in DEFAULT_CONFIG_NAMES]
    paths.append(Path.home() / ".config" / "txmerkle" / "config.json")
    return paths


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Args:
        config_path: Optional explicit path; must exist when given

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given but missing
        ConfigurationException: If a file or env value is invalid
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = RuntimeConfig.from_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "engine": {
    "max_leaves": 0,
    "allow_duplicates": true
  },
  "logging": {
    "level": "INFO",
    "file": null
  },
  "output": {
    "format": "human"
  }
}
"""
