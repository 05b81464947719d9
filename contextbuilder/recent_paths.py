"""Most-recently-used directory list stored in the JSON config."""

from __future__ import annotations

import time
from dataclasses import dataclass

from .config import load_config, save_config

RECENT_PATHS_KEY = "recent_paths"
MAX_RECENT_PATHS = 10


@dataclass(frozen=True)
class RecentPath:
    path: str
    name: str
    last_accessed: int

    def to_json(self) -> dict[str, object]:
        return {"path": self.path, "name": self.name, "lastAccessed": self.last_accessed}


def _display_name(path: str) -> str:
    return path.rstrip("/").rsplit("/", 1)[-1] or path


def _now_millis() -> int:
    return int(time.time() * 1000)


def load_recent_paths() -> list[RecentPath]:
    """Return stored entries, most recent first; malformed entries are dropped."""
    value = load_config().get(RECENT_PATHS_KEY)
    if not isinstance(value, list):
        return []

    entries: list[RecentPath] = []
    for raw in value:
        if not isinstance(raw, dict):
            continue
        path = raw.get("path")
        if not isinstance(path, str) or not path:
            continue
        name = raw.get("name")
        last_accessed = raw.get("lastAccessed")
        if isinstance(last_accessed, bool) or not isinstance(last_accessed, int):
            last_accessed = 0
        entries.append(
            RecentPath(
                path=path,
                name=name if isinstance(name, str) and name else _display_name(path),
                last_accessed=last_accessed,
            )
        )
    entries.sort(key=lambda entry: entry.last_accessed, reverse=True)
    return entries


def _store(entries: list[RecentPath]) -> None:
    config = load_config()
    config[RECENT_PATHS_KEY] = [entry.to_json() for entry in entries]
    save_config(config)


def add_recent_path(path: str, now_millis: int | None = None) -> list[RecentPath]:
    """Move ``path`` to the front with a fresh timestamp, keeping at most ten."""
    timestamp = _now_millis() if now_millis is None else now_millis
    entry = RecentPath(path=path, name=_display_name(path), last_accessed=timestamp)
    remaining = [item for item in load_recent_paths() if item.path != path]
    updated = [entry, *remaining][:MAX_RECENT_PATHS]
    _store(updated)
    return updated


def remove_recent_path(path: str) -> list[RecentPath]:
    updated = [item for item in load_recent_paths() if item.path != path]
    _store(updated)
    return updated


def clear_recent_paths() -> None:
    config = load_config()
    config.pop(RECENT_PATHS_KEY, None)
    save_config(config)
