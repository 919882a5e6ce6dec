"""
Runtime Configuration

Central configuration for tree construction and logging.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from hashtree.crypto.hashing import DEFAULT_HASH_ALGORITHM, Hasher, get_hasher
from hashtree.schemas.errors import ConfigurationException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "HASHTREE_"


@dataclass
class TreeConfig:
    """Configuration for tree construction."""
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    padding_value: Any = 0


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


def _parse_env_value(raw: str) -> Any:
    # "0" -> 0, "null" -> None, anything unparsable stays a string
    try:
        return json.loads(raw)
    except ValueError:
        return raw


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (HASHTREE_* prefix, .env supported)
    - YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - HASHTREE_HASH_ALGORITHM: hasher name (blake2b-64, fnv1a-64, sha256)
        - HASHTREE_PADDING_VALUE: padding sentinel, parsed as JSON
        - HASHTREE_LOG_LEVEL: log level
        - HASHTREE_LOG_FILE: optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides.setdefault("tree", {})["hash_algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}PADDING_VALUE"):
            overrides.setdefault("tree", {})["padding_value"] = _parse_env_value(
                os.getenv(f"{ENV_PREFIX}PADDING_VALUE", "0")
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationException(
                    f"Invalid YAML in config file: {e}", path=str(path)
                ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationException(
                "Config file must contain a mapping at the top level", path=str(path)
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = data.get("tree", {}) or {}
        logging_data = data.get("logging", {}) or {}

        try:
            tree = TreeConfig(**tree_data)
            log = LoggingConfig(**logging_data)
        except TypeError as e:
            raise ConfigurationException(f"Unknown configuration key: {e}") from e

        return cls(
            tree=tree,
            logging=log,
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
        for key, value in overrides.get("tree", {}).items():
            setattr(new_config.tree, key, value)
        for key, value in overrides.get("logging", {}).items():
            setattr(new_config.logging, key, value)
        return new_config

    def get_hasher(self) -> Hasher:
        """Resolve the configured hash algorithm."""
        return get_hasher(self.tree.hash_algorithm)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "hash_algorithm": self.tree.hash_algorithm,
                "padding_value": self.tree.padding_value,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
        }


def get_default_config_template() -> str:
    """Get a template YAML configuration file."""
    return (
        "# hashtree configuration\n"
        "tree:\n"
        f"  hash_algorithm: {DEFAULT_HASH_ALGORITHM}  # blake2b-64, fnv1a-64, sha256\n"
        "  padding_value: 0\n"
        "logging:\n"
        "  level: INFO\n"
        "  file: null\n"
    )


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. Without an explicit path,
    ./hashtree.yaml and ~/.config/hashtree/config.yaml are tried in order.
    """
    if config_path is not None:
        return RuntimeConfig.from_yaml(config_path).with_env_overrides()

    default_paths = [
        Path.cwd() / "hashtree.yaml",
        Path.home() / ".config" / "hashtree" / "config.yaml",
    ]
    for default_path in default_paths:
        if default_path.exists():
            return RuntimeConfig.from_yaml(default_path).with_env_overrides()

    return RuntimeConfig.from_env()


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
