"""ASCII tree map of selected paths."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_PREFIX = "│   "
SPACE_PREFIX = "    "

_DIGITS_RE = re.compile(r"(\d+)")
_SEPARATOR_RE = re.compile(r"[/\\]")


@dataclass
class MapNode:
    """Mutable node used only while building the map."""

    name: str
    is_dir: bool = False
    children: dict[str, MapNode] = field(default_factory=dict)


def natural_sort_key(name: str) -> tuple[tuple[object, ...], str]:
    """Case-insensitive, numeric-aware key (``file2`` before ``file10``).

    Lowercase sorts before uppercase when names differ only by case.
    """
    chunks: list[object] = []
    for idx, part in enumerate(_DIGITS_RE.split(name)):
        chunks.append(int(part) if idx % 2 else part.casefold())
    return tuple(chunks), name.swapcase()


def build_map_tree(selected_paths: Iterable[str]) -> MapNode:
    """Insert every selected path into a fresh tree of ``MapNode``.

    The last segment of a path is a file unless some other path passes
    through it, in which case it becomes a directory.
    """
    root = MapNode(name="", is_dir=True)
    for raw_path in selected_paths:
        parts = [part for part in _SEPARATOR_RE.split(raw_path) if part]
        current = root
        for idx, part in enumerate(parts):
            is_leaf = idx == len(parts) - 1
            child = current.children.get(part)
            if child is None:
                child = MapNode(name=part, is_dir=not is_leaf)
                current.children[part] = child
            elif not is_leaf:
                child.is_dir = True
            current = child
    return root


def sorted_children(node: MapNode) -> list[MapNode]:
    """Directories first, then natural alphabetical order."""
    return sorted(node.children.values(), key=lambda child: (not child.is_dir, natural_sort_key(child.name)))


def render_map_lines(node: MapNode, prefix: str = "") -> list[str]:
    lines: list[str] = []
    children = sorted_children(node)
    for idx, child in enumerate(children):
        is_last = idx == len(children) - 1
        lines.append(prefix + (LAST_BRANCH if is_last else BRANCH) + child.name)
        if child.is_dir and child.children:
            lines.extend(render_map_lines(child, prefix + (SPACE_PREFIX if is_last else PIPE_PREFIX)))
    return lines


def build_file_map(root_path: str, selected_paths: Iterable[str]) -> str:
    """Render the tree map for ``selected_paths`` under a ``root_path`` header.

    Returns ``""`` when nothing is selected.
    """
    paths = list(selected_paths)
    if not paths:
        return ""
    return "\n".join([root_path, *render_map_lines(build_map_tree(paths))])


__all__ = ["MapNode", "natural_sort_key", "build_map_tree", "render_map_lines", "build_file_map"]
