from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

APP_NAME = "levelgrid"

logger = logging.getLogger(__name__)

# Defaults for all configurable options
DEFAULT_CONFIG: dict[str, Any] = {
    "editor": {"width": 8, "height": 8, "cell_px": 30},
    "theme": {
        "name": "default",
        "palette": {"background": "#000000", "primary": "#8888aa", "accent": "#ff4444"},
    },
    "validation": {"strict": False},
    "levels_dir": None,  # None: ./levels
    "logging": {"level": "INFO"},
}


def user_config_path() -> Path:
    """Return the platform-specific config file path."""
    return Path(user_config_dir(APP_NAME, APP_NAME)) / "config.json"


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge dictionaries, with override winning on conflicts."""
    merged: dict[str, Any] = deepcopy(base)
    for key, val in override.items():
        if isinstance(val, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], val)
        else:
            merged[key] = val
    return merged


def load_config(path: Path | None = None) -> tuple[dict[str, Any], Path]:
    """Load config from disk, falling back to defaults on errors."""
    config_path = path or user_config_path()
    config: dict[str, Any] = deepcopy(DEFAULT_CONFIG)

    try:
        if config_path.exists():
            loaded = json.loads(config_path.read_text(encoding="utf-8"))
            if isinstance(loaded, dict):
                config = _deep_merge(config, loaded)
            else:
                logger.warning("Ignoring config %s: top level is not an object", config_path)
    except (OSError, ValueError) as exc:
        logger.warning("Failed to load config (%s): %s", config_path, exc)

    _check_editor(config)
    return config, config_path


def _check_editor(config: dict[str, Any]) -> None:
    """Reset editor sizes that could not build a grid (or draw one) back to their defaults."""
    editor = config.get("editor")
    if not isinstance(editor, dict):
        config["editor"] = deepcopy(DEFAULT_CONFIG["editor"])
        return
    for key, default in DEFAULT_CONFIG["editor"].items():
        value = editor.get(key)
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            logger.warning("Invalid editor.%s %r in config, using %d", key, value, default)
            editor[key] = default


def save_config(config: dict[str, Any], path: Path | None = None) -> None:
    """Persist config to disk, creating parent dirs as needed."""
    config_path = path or user_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    except OSError as exc:
        logger.warning("Failed to save config (%s): %s", config_path, exc)


def levels_dir(config: dict[str, Any]) -> Path | None:
    raw = config.get("levels_dir")
    return Path(raw).expanduser() if raw else None
