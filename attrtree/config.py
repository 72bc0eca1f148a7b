"""Read-only JSON config helpers.

Supplies the default root, symlink policy, log level, and color preference.
All access is defensive: malformed or missing config falls back safely.
Nothing here ever writes the file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "attrtree"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    default_root: Path | None = None
    follow_symlinks: bool = True
    log_level: str = DEFAULT_LOG_LEVEL
    color: bool = True


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_bool(data: dict[str, object], key: str, default: bool) -> bool:
    """Only explicit booleans count; any other type falls back to ``default``."""
    value = data.get(key)
    return value if isinstance(value, bool) else default


def normalize_log_level(value: object) -> str | None:
    """Return an upper-case stdlib level name, or ``None`` if unknown."""
    if not isinstance(value, str):
        return None
    name = value.strip().upper()
    if not name or not isinstance(logging.getLevelName(name), int):
        return None
    return name


def load_default_root() -> Path | None:
    """Load the configured start directory when it names an existing directory."""
    value = load_config().get("default_root")
    if not isinstance(value, str) or not value.strip():
        return None
    path = Path(value.strip()).expanduser()
    return path if path.is_dir() else None


def load_settings() -> Settings:
    data = load_config()
    return Settings(
        default_root=load_default_root(),
        follow_symlinks=_load_bool(data, "follow_symlinks", True),
        log_level=normalize_log_level(data.get("log_level")) or DEFAULT_LOG_LEVEL,
        color=_load_bool(data, "color", True),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_CONFIG_PATH",
    "Settings",
    "load_config",
    "load_default_root",
    "load_settings",
    "normalize_log_level",
]
