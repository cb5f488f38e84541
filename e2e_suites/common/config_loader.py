"""
================================================================================
Configuration Loader
================================================================================

Suite settings from config/config.yaml, overridable per key from the
environment: the dot path upper-cased with dots turned into underscores
(ui.base_url -> UI_BASE_URL, ui.headless -> UI_HEADLESS).

Environment values are strings; they are coerced to the type of the default
passed to `get` (bool, int or float) and kept as strings when that fails.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

_TRUTHY = ("true", "1", "yes", "on")


class ConfigurationError(Exception):
    """Raised when the configuration file cannot be parsed."""
    pass


def _env_name(key: str) -> str:
    return key.upper().replace(".", "_")


def _coerce(raw: str, like: Any) -> Any:
    # bool before int: bool is an int subclass
    if isinstance(like, bool):
        return raw.lower() in _TRUTHY
    for kind in (int, float):
        if isinstance(like, kind):
            try:
                return kind(raw)
            except ValueError:
                return raw
    return raw


class ConfigLoader:
    """
    Process-wide settings, read once.

    Usage:
        >>> ConfigLoader().get("ui.base_url", "https://www.way2automation.com")
        'https://www.way2automation.com'
        >>> ConfigLoader().get("ui.headless", True)
        True
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._settings = _read_yaml(Path(config_path or DEFAULT_CONFIG_PATH))
            cls._instance = instance
        return cls._instance

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dot-notation key: environment first, then the file, then default.
        """
        raw = os.environ.get(_env_name(key))
        if raw is not None:
            return _coerce(raw, default)

        node: Any = self._settings
        for part in key.split("."):
            if not isinstance(node, dict) or node.get(part) is None:
                return default
            node = node[part]
        return node

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded settings so the next access re-reads the file."""
        cls._instance = None


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning(f"Configuration file not found: {path}. Using environment and defaults.")
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            settings = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    logger.debug(f"Loaded configuration from: {path}")
    return settings


def get_config(key: str, default: Any = None) -> Any:
    """
    Shortcut for ConfigLoader().get(key, default).

    Example:
        base_url = get_config("ui.base_url", "https://www.way2automation.com")
    """
    return ConfigLoader().get(key, default)


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "get_config",
]
