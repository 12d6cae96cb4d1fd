"""Configuration management for the CLI."""

import os
from pathlib import Path
from typing import Annotated, Any

import msgspec
import yaml

from cratecite.citations.renderer import DEFAULT_REGISTRY_SITE
from cratecite.registry.enricher import (
    DEFAULT_REGISTRY_API,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)

TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings(msgspec.Struct, frozen=True, kw_only=True, forbid_unknown_fields=True):
    """Effective settings of one invocation."""

    registry_api: str = DEFAULT_REGISTRY_API
    registry_site: str = DEFAULT_REGISTRY_SITE
    timeout: Annotated[float, msgspec.Meta(gt=0)] = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    key_prefix: str = "rust"
    enrich: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settings":
        """Validate a merged configuration mapping.

        Raises:
            ValueError: Unknown keys or values of the wrong type.
        """
        try:
            return msgspec.convert(data, cls, strict=False)
        except msgspec.ValidationError as e:
            raise ValueError(f"Invalid configuration: {e}")


class Config:
    """Configuration file handling."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")
        except OSError as e:
            raise ValueError(f"Error reading config file: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        # User config
        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "cratecite" / "config.yaml")

        # Project config
        paths.append(Path(".cratecite.yaml"))
        paths.append(Path("cratecite.yaml"))

        return paths

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge multiple configuration dictionaries."""
        result = {}
        for config in configs:
            result = _deep_merge(result, config)
        return result


def get_config_paths() -> list[Path]:
    """Get configuration paths in precedence order."""
    return Config.get_config_paths()


def env_overrides() -> dict[str, Any]:
    """Settings taken from ``CRATECITE_*`` environment variables."""
    overrides: dict[str, Any] = {}
    if registry := os.environ.get("CRATECITE_REGISTRY_URL"):
        overrides["registry_api"] = registry
    if timeout := os.environ.get("CRATECITE_TIMEOUT"):
        overrides["timeout"] = timeout
    if offline := os.environ.get("CRATECITE_OFFLINE"):
        overrides["enrich"] = offline.strip().lower() not in TRUE_VALUES
    return overrides


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from files and environment variables.

    Default locations are read first (last one wins for conflicting
    keys), then the explicit ``path``, then the environment.
    """
    config: dict[str, Any] = {}

    for default_path in get_config_paths():
        if default_path.exists():
            config = Config.merge_configs(config, Config.from_file(default_path))

    if path is not None:
        config = Config.merge_configs(config, Config.from_file(path))

    return Config.merge_configs(config, env_overrides())


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate the effective settings."""
    return Settings.from_dict(load_config(path))


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
