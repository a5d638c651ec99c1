"""
Configuration loader.

Loads configuration from:
1. Default values (built-in)
2. TOML config file (techsignal.toml or ~/.config/techsignal/config.toml)
3. Environment variables

Priority: env vars > config file > defaults
"""

import logging
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .schema import TechsignalConfig

logger = logging.getLogger(__name__)

# Config file search paths (in priority order)
CONFIG_PATHS = [
    Path("techsignal.toml"),                              # Current directory
    Path(".techsignal.toml"),                             # Hidden in current directory
    Path.home() / ".config" / "techsignal" / "config.toml",  # User config
]

# Environment variable prefix
ENV_PREFIX = "TECHSIGNAL_"


class ConfigError(Exception):
    """Configuration error with helpful message."""

    def __init__(self, message: str, source: str | None = None, field: str | None = None):
        self.source = source
        self.field = field
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.source:
            parts.append(f"Source: {self.source}")
        if self.field:
            parts.append(f"Field: {self.field}")
        return " | ".join(parts)


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load TOML file if it exists."""
    if not path.exists():
        return {}

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        logger.info(f"Loaded config from: {path}")
        return data
    except (tomllib.TOMLDecodeError, OSError) as e:
        raise ConfigError(f"Failed to parse TOML: {e}", source=str(path))


def _find_config_file() -> Path | None:
    """Find the first existing config file."""
    for path in CONFIG_PATHS:
        if path.exists():
            return path
    return None


def _load_env_overrides() -> dict[str, Any]:
    """Collect overrides from environment variables."""
    overrides: dict[str, Any] = {}

    if policy := os.environ.get(f"{ENV_PREFIX}POLICY"):
        overrides.setdefault("history", {})["mode"] = policy.strip().lower()
    if min_points := os.environ.get(f"{ENV_PREFIX}MIN_POINTS"):
        overrides.setdefault("history", {})["min_points"] = min_points.strip()
    if currency := os.environ.get(f"{ENV_PREFIX}CURRENCY"):
        overrides["default_currency"] = currency.strip()
    if chart_dirs := os.environ.get(f"{ENV_PREFIX}CHART_DIRS"):
        overrides.setdefault("source", {})["directories"] = chart_dirs.split(os.pathsep)

    return overrides


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Path | str | None = None) -> TechsignalConfig:
    """
    Load and validate configuration.

    Args:
        config_path: Explicit path to config file (optional)

    Returns:
        Validated TechsignalConfig

    Raises:
        ConfigError: If configuration is invalid
    """
    config_data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}", source=str(path))
        config_data = _load_toml_file(path)
    else:
        found_path = _find_config_file()
        if found_path:
            config_data = _load_toml_file(found_path)

    env_overrides = _load_env_overrides()
    if env_overrides:
        config_data = _deep_merge(config_data, env_overrides)
        logger.debug(f"Applied {len(env_overrides)} override(s) from environment")

    try:
        config = TechsignalConfig(**config_data)
    except ValidationError as e:
        errors = e.errors()
        if errors:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get("loc", []))
            msg = first_error.get("msg", "Validation error")
            raise ConfigError(f"Invalid configuration: {msg}", field=field)
        raise ConfigError(f"Invalid configuration: {e}")

    return config


@lru_cache
def get_config() -> TechsignalConfig:
    """
    Get singleton configuration instance.

    Uses LRU cache to ensure config is loaded only once.
    """
    return load_config()


def reload_config(config_path: Path | str | None = None) -> TechsignalConfig:
    """
    Force reload configuration.

    Clears the cache and reloads from file/environment.
    """
    get_config.cache_clear()
    if config_path:
        return load_config(config_path)
    return get_config()
