"""Content-provider interface and per-path read results."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..file_tree_model import FileTree

UNREADABLE_MARKER = "Unable to read"


@dataclass(frozen=True)
class FileContent:
    text: str


@dataclass(frozen=True)
class DirectoryMarker:
    pass


@dataclass(frozen=True)
class Unreadable:
    reason: str = UNREADABLE_MARKER


ContentResult = FileContent | DirectoryMarker | Unreadable


class ContentProvider(ABC):
    """Source of directory listings and file contents.

    One implementation reads the local filesystem directly; the other
    forwards each action as a single HTTP request to a server.
    """

    @abstractmethod
    def list_directory(self, path: str) -> FileTree:
        """Return the gitignore-filtered tree rooted at ``path``.

        Raises ``ProviderError`` for missing/unreadable directories and
        ``TransportError`` when the request cannot be made.
        """

    @abstractmethod
    def read_gitignore(self, root_path: str) -> str | None:
        """Return raw ``.gitignore`` text for ``root_path`` or ``None``."""

    @abstractmethod
    def read_files(self, root_path: str, rel_paths: list[str], include_file_map: bool = True) -> str:
        """Return the finished bundle text for ``rel_paths``."""

    @abstractmethod
    def classify(self, root_path: str, rel_path: str) -> ContentResult:
        """Classify one relative path as file content, directory or unreadable.

        Raises ``TransportError`` when the request cannot be made.
        """


__all__ = [
    "UNREADABLE_MARKER",
    "FileContent",
    "DirectoryMarker",
    "Unreadable",
    "ContentResult",
    "ContentProvider",
]
