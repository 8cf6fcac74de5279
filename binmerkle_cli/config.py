"""
CLI Configuration

Configuration management for the binmerkle CLI.
Supports environment variables and JSON configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from binmerkle.config import ENV_PREFIX, TreeConfig


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    # Tree construction
    tree: TreeConfig = field(default_factory=TreeConfig)


def default_config_paths() -> list[Path]:
    return [
        Path.cwd() / "binmerkle.json",
        Path.cwd() / ".binmerkle.json",
        Path.home() / ".config" / "binmerkle" / "config.json",
    ]


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()
    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)
    config.default_output_format = data.get(
        "default_output_format", config.default_output_format
    )
    if "tree" in data:
        config.tree = TreeConfig.from_dict(data["tree"])

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", config.log_level)
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = os.getenv(
            f"{ENV_PREFIX}OUTPUT_FORMAT", config.default_output_format
        )

    config.tree = config.tree.with_env_overrides()
    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "log_level": "WARNING",
  "log_file": null,
  "default_output_format": "human",
  "tree": {
    "odd_level_policy": "strict",
    "hash_algorithm": "sha256"
  }
}
"""
