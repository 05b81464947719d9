"""Persistent JSON config helpers.

Stores recent directories, the default extension filter and the bundle
highlight style. All access is defensive: malformed or missing config
falls back safely.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "llm-context-builder"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
ROOT_ENV_VAR = "CONTEXTBUILDER_ROOT"
DEFAULT_STYLE = "monokai"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def load_default_extensions() -> frozenset[str]:
    """Return the persisted extension filter; invalid entries are dropped."""
    value = load_config().get("default_extensions")
    if not isinstance(value, list):
        return frozenset()
    return frozenset(item.lower().lstrip(".") for item in value if isinstance(item, str) and item.strip())


def save_default_extensions(extensions: set[str] | frozenset[str]) -> None:
    config = load_config()
    config["default_extensions"] = sorted(extensions)
    save_config(config)


def load_style_name() -> str:
    """Load persisted Pygments style name, falling back to ``DEFAULT_STYLE``."""
    value = load_config().get("style")
    if not isinstance(value, str):
        return DEFAULT_STYLE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_STYLE


def save_style_name(style: str) -> None:
    stripped = str(style).strip()
    if not stripped:
        return
    config = load_config()
    config["style"] = stripped
    save_config(config)


def default_root() -> str | None:
    """Return the default project directory for the CLI from the environment, if set."""
    value = os.environ.get(ROOT_ENV_VAR, "").strip()
    return value or None
