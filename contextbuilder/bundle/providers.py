"""Local-filesystem and HTTP-backed content providers."""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from ..errors import ProviderError, TransportError
from ..file_tree_model import FileTree, build_file_tree, nodes_from_json
from ..gitignore import GITIGNORE_FILENAME, GitIgnoreMatcher, matcher_from_gitignore_text
from .builder import build_bundle, parse_entry
from .content import ContentProvider, ContentResult, DirectoryMarker, FileContent, Unreadable

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


def read_text(path: Path) -> str:
    """Decode as UTF-8 (dropping a BOM), falling back to latin-1."""
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError:
        return path.read_text(encoding="latin-1")


class LocalContentProvider(ContentProvider):
    """Reads the filesystem in-process and builds bundles locally."""

    def __init__(self, show_hidden: bool = False) -> None:
        self.show_hidden = show_hidden

    def read_gitignore(self, root_path: str) -> str | None:
        try:
            return (Path(root_path) / GITIGNORE_FILENAME).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None

    def matcher_for(self, root_path: str) -> GitIgnoreMatcher:
        return matcher_from_gitignore_text(self.read_gitignore(root_path))

    def list_directory(self, path: str) -> FileTree:
        root = Path(path).expanduser()
        return build_file_tree(
            root,
            show_hidden=self.show_hidden,
            ignore_matcher=self.matcher_for(str(root)),
            root_label=path,
        )

    def classify(self, root_path: str, rel_path: str) -> ContentResult:
        full_path = Path(root_path) / rel_path
        try:
            if full_path.is_dir():
                return DirectoryMarker()
            if not full_path.is_file():
                return Unreadable()
            return FileContent(read_text(full_path))
        except OSError as exc:
            logger.debug("Unable to read %s: %s", full_path, exc)
            return Unreadable(str(exc))

    def read_files(self, root_path: str, rel_paths: list[str], include_file_map: bool = True) -> str:
        return build_bundle(
            root_path,
            rel_paths,
            self,
            matcher=self.matcher_for(root_path),
            include_file_map=include_file_map,
        )


class RemoteContentProvider(ContentProvider):
    """Forwards listing and bundling requests to a context-builder server."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    def list_directory(self, path: str) -> FileTree:
        try:
            response = self.session.get(
                self._url("/api/list-directory"),
                params={"dirPath": path},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"list-directory request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError("list-directory returned a non-JSON response") from exc

        if not response.ok:
            message = data.get("error") if isinstance(data, dict) else None
            raise ProviderError(message or "Unable to read directory")
        if not isinstance(data, list):
            raise TransportError("list-directory returned an unexpected payload")
        logger.info("Listed %s via %s", path, self.base_url)
        return FileTree(root_label=path, children=nodes_from_json(data))

    def read_gitignore(self, root_path: str) -> str | None:
        # The server applies the real .gitignore itself.
        return None

    def read_files(self, root_path: str, rel_paths: list[str], include_file_map: bool = True) -> str:
        try:
            response = self.session.post(
                self._url("/api/get-files"),
                json={
                    "dirPath": root_path,
                    "selections": list(rel_paths),
                    "includeFileMap": include_file_map,
                },
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"get-files request failed: {exc}") from exc

        if not response.ok:
            raise TransportError(f"get-files failed with HTTP {response.status_code}: {response.text}")
        return response.text

    def classify(self, root_path: str, rel_path: str) -> ContentResult:
        """Fetch one path as a single-entry bundle without a file map."""
        return parse_entry(rel_path, self.read_files(root_path, [rel_path], include_file_map=False))


def get_content_provider(remote_url: str | None = None, show_hidden: bool = False) -> ContentProvider:
    """Pick the provider once at startup: remote when a URL is configured."""
    if remote_url:
        return RemoteContentProvider(remote_url)
    return LocalContentProvider(show_hidden=show_hidden)


__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "read_text",
    "LocalContentProvider",
    "RemoteContentProvider",
    "get_content_provider",
]
