"""Filesystem scanning and domain-tree construction."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ..errors import ProviderError
from ..gitignore import GITIGNORE_FILENAME, GitIgnoreMatcher, get_gitignore_matcher
from .types import DirectoryNode, FileNode, FileTree, TreeNode, child_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryChild:
    """One visible directory child plus cached metadata."""

    name: str
    path: Path
    rel_path: str
    is_dir: bool
    file_size: int | None


def list_directory_children(
    directory: Path,
    rel_directory: str | None,
    show_hidden: bool = False,
    ignore_matcher: GitIgnoreMatcher | None = None,
) -> tuple[list[DirectoryChild], Exception | None]:
    """List visible children of ``directory`` in sorted order.

    Returns ``(children, scan_error)``. ``scan_error`` is set when the
    directory cannot be scanned. ``.gitignore`` is never listed.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if name == GITIGNORE_FILENAME:
                    continue
                if not show_hidden and name.startswith("."):
                    continue
                rel_path = child_path(rel_directory, name)
                if ignore_matcher is not None and ignore_matcher.is_ignored(rel_path):
                    continue

                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False

                file_size: int | None = None
                if not is_dir:
                    try:
                        file_size = int(child.stat().st_size)
                    except OSError:
                        pass

                children.append(
                    DirectoryChild(
                        name=name,
                        path=Path(child.path),
                        rel_path=rel_path,
                        is_dir=is_dir,
                        file_size=file_size,
                    )
                )
    except (PermissionError, OSError) as exc:
        return [], exc

    children.sort(key=lambda item: (not item.is_dir, item.name.lower()))
    return children, None


def build_file_tree(
    root: Path,
    show_hidden: bool = False,
    ignore_matcher: GitIgnoreMatcher | None = None,
    root_label: str | None = None,
) -> FileTree:
    """Scan ``root`` recursively into a ``FileTree``.

    Raises ``ProviderError`` when ``root`` is missing or cannot be read.
    Unreadable subdirectories are kept with no children.
    """
    if not root.exists():
        raise ProviderError(f"Path not found: {root}")
    if not root.is_dir():
        raise ProviderError(f"Not a directory: {root}")
    if ignore_matcher is None:
        ignore_matcher = get_gitignore_matcher(root)

    visited: set[Path] = set()

    def build_children(directory: Path, rel_directory: str | None) -> tuple[TreeNode, ...]:
        try:
            real = directory.resolve()
        except OSError:
            real = directory
        # Symlinked directory cycles would otherwise recurse forever.
        if real in visited:
            return ()
        visited.add(real)

        children, scan_error = list_directory_children(
            directory,
            rel_directory,
            show_hidden=show_hidden,
            ignore_matcher=ignore_matcher,
        )
        if scan_error is not None:
            if rel_directory is None:
                raise ProviderError("Unable to read directory") from scan_error
            logger.debug("Skipping unreadable directory %s: %s", directory, scan_error)
            return ()

        nodes: list[TreeNode] = []
        for child in children:
            if child.is_dir:
                nodes.append(
                    DirectoryNode(
                        name=child.name,
                        path=child.rel_path,
                        children=build_children(child.path, child.rel_path),
                    )
                )
                continue
            nodes.append(FileNode(name=child.name, path=child.rel_path, size=child.file_size))
        return tuple(nodes)

    label = root_label if root_label is not None else str(root)
    tree = FileTree(root_label=label, children=build_children(root, None))
    logger.info("Loaded %s (%d top-level entries)", root, len(tree.children))
    return tree


__all__ = ["DirectoryChild", "list_directory_children", "build_file_tree"]
