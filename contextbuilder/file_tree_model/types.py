"""Domain datatypes for project file trees."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NodeType(str, Enum):
    """Node kind; values double as the JSON wire strings."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class FileNode:
    """File entry with an optional byte size."""

    name: str
    path: str
    size: int | None = None

    @property
    def type(self) -> NodeType:
        return NodeType.FILE

    @property
    def is_dir(self) -> bool:
        return False


@dataclass(frozen=True)
class DirectoryNode:
    """Directory entry with ordered nested children (empty tuple when empty)."""

    name: str
    path: str
    children: tuple["TreeNode", ...] = ()

    @property
    def type(self) -> NodeType:
        return NodeType.DIRECTORY

    @property
    def is_dir(self) -> bool:
        return True


TreeNode = DirectoryNode | FileNode


@dataclass(frozen=True)
class FileTree:
    """Loaded project tree: a root label plus its top-level children."""

    root_label: str
    children: tuple[TreeNode, ...] = ()

    def root_node(self) -> DirectoryNode:
        """Return the synthetic root directory whose path is the root label."""
        name = self.root_label.rstrip("/").rsplit("/", 1)[-1] or self.root_label
        return DirectoryNode(name=name, path=self.root_label, children=self.children)

    def with_children(self, children: tuple[TreeNode, ...]) -> FileTree:
        return FileTree(root_label=self.root_label, children=children)


def child_path(parent_path: str | None, name: str) -> str:
    """Join ``name`` under ``parent_path``; top-level children use ``name`` alone."""
    if not parent_path:
        return name
    return f"{parent_path}/{name}"


__all__ = [
    "NodeType",
    "FileNode",
    "DirectoryNode",
    "TreeNode",
    "FileTree",
    "child_path",
]
