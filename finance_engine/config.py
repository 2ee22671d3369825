"""Configuration management for the finance engine.

Tunable thresholds and display fallbacks live in ``engine_defaults.json``
next to this module and are read once, then cached.  A different file can
be supplied through the ``FINANCE_ENGINE_CONFIG`` environment variable,
and the default currency through ``FINANCE_ENGINE_CURRENCY``.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

CONFIG_DIR = Path(__file__).parent
DEFAULT_CONFIG_PATH = CONFIG_DIR / "engine_defaults.json"

DEFAULT_CURRENCY = os.getenv("FINANCE_ENGINE_CURRENCY", "IDR")


def get_config_path() -> Path:
    """Path of the active configuration file."""
    return Path(os.getenv("FINANCE_ENGINE_CONFIG", DEFAULT_CONFIG_PATH)).resolve()


@lru_cache(maxsize=8)
def _load_cached(path: str) -> Dict[str, Any]:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    with open(config_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """Load the engine configuration.

    Args:
        path: Explicit config file; defaults to :func:`get_config_path`.

    Returns:
        Dictionary containing the configuration.

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        json.JSONDecodeError: If the configuration file is invalid JSON

    Example:
        >>> load_config()['status']['warning_percent']
        80
    """
    # Keyed on the unresolved path so repeat lookups never touch the disk.
    return _load_cached(str(path) if path else os.getenv("FINANCE_ENGINE_CONFIG", str(DEFAULT_CONFIG_PATH)))


def get_setting(*keys: str, default: Any = None) -> Any:
    """Get a nested configuration value by key path.

    Args:
        *keys: Path to the nested value (e.g., 'alerts', 'weekly_ratio')
        default: Value returned when the file or the key path is missing

    Example:
        >>> get_setting('display', 'default_color')
        '#6B7280'
    """
    try:
        value: Any = load_config()
        for key in keys:
            value = value[key]
        return value
    except (KeyError, TypeError, FileNotFoundError):
        return default


def clear_config_cache() -> None:
    """Forget cached config files so the next read hits disk."""
    _load_cached.cache_clear()
