"""YAML-based configuration for npm-update-interactive.

The config file lives at ~/.config/npm-update-interactive/config.yaml
(honouring XDG_CONFIG_HOME). Values found there are merged over
DEFAULT_CONFIG; command-line flags override both.
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from tree_select.themes import HELP_MODES

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "page_size": 20,
    "latest": False,
    "loop": True,
    "help_mode": "auto",
    "confirm_install": True,
    "debug": False,
}


def get_config_dir() -> Path:
    """Get the npm-update-interactive config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "npm-update-interactive"


def get_config_path() -> Path:
    return get_config_dir() / "config.yaml"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _valid(key: str, value: Any) -> bool:
    if key == "page_size":
        return isinstance(value, int) and not isinstance(value, bool) and value > 0
    if key == "help_mode":
        return value in HELP_MODES
    return isinstance(value, bool)


def _check_values(cfg: dict[str, Any], config_path: Path) -> dict[str, Any]:
    """Replace known settings of the wrong type with their defaults."""
    for key, default in DEFAULT_CONFIG.items():
        if not _valid(key, cfg[key]):
            logger.warning(
                "Ignoring invalid %s %r in %s, using %r", key, cfg[key], config_path, default
            )
            cfg[key] = default
    return cfg


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load the config file, falling back to defaults when missing or invalid."""
    config_path = path or get_config_path()
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return copy.deepcopy(DEFAULT_CONFIG)
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(data, dict):
        return copy.deepcopy(DEFAULT_CONFIG)
    return _check_values(_deep_merge(copy.deepcopy(DEFAULT_CONFIG), data), config_path)


def save_config(cfg: dict[str, Any], path: Path | None = None) -> None:
    """Save the config file."""
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.dump(cfg, f, default_flow_style=False, sort_keys=False)
