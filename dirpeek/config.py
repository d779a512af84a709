"""Persistent JSON config helpers.

Reads optional presentation preferences: Pygments style, colour toggle and
editor command. All access is defensive: malformed or missing config falls
back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .highlight import DEFAULT_STYLE

APP_NAME = "dirpeek"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_style() -> str:
    """Return the configured Pygments style name, or the default style."""
    return _load_string("style") or DEFAULT_STYLE


def load_no_color() -> bool:
    """Return persisted colour preference; only explicit booleans count."""
    value = load_config().get("no_color")
    return bool(value) if isinstance(value, bool) else False


def load_editor_command() -> str | None:
    """Return the configured editor command line, if any."""
    return _load_string("editor")


__all__ = [
    "CONFIG_PATH",
    "load_config",
    "load_editor_command",
    "load_no_color",
    "load_style",
]
