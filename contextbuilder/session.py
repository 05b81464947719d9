"""Single coordinating context for one browsing session.

Owns the loaded tree, the selection engine, the active filters, the
bundle preview and the transient error banner. Every action is a single
synchronous call; a later load simply replaces earlier state.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import unquote

from .bundle import ContentProvider
from .errors import InputError, ProviderError, TransportError
from .file_tree_model import FileTree
from .file_types import FileTypeStats, analyze_file_types
from .gitignore import GitIgnoreMatcher, matcher_from_gitignore_text
from .recent_paths import add_recent_path
from .selection import SelectionEngine
from .shortcuts import FocusContext, KeyComboRegistry, build_default_registry
from .tree_filter import collect_available_files

logger = logging.getLogger(__name__)

ERROR_BANNER_SECONDS = 5.0
MISSING_PATH_MESSAGE = "Please enter a directory path"
LOAD_FAILED_MESSAGE = "Failed to load directory. Please check the path and try again."
COPY_FAILED_MESSAGE = "Failed to copy files. Please try again."
PREVIEW_FAILED_MESSAGE = "Error loading preview"


@dataclass(frozen=True)
class ErrorBanner:
    message: str
    raised_at: float

    def expired(self, now: float) -> bool:
        return now - self.raised_at >= ERROR_BANNER_SECONDS


@dataclass(frozen=True)
class SelectionStats:
    """Counts shown as ``N files (+ M folders)``."""

    total: int
    files: int

    @property
    def folders(self) -> int:
        return self.total - self.files


def clean_pasted_path(text: str) -> str:
    """Normalize a pasted directory path.

    Strips surrounding quotes, converts backslashes and decodes ``file://``
    URLs.
    """
    cleaned = text.strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in {"'", '"'}:
        cleaned = cleaned[1:-1]
    cleaned = cleaned.replace("\\", "/").strip()
    if cleaned.startswith("file://"):
        cleaned = unquote(cleaned[len("file://"):])
    return cleaned


class Session:
    def __init__(
        self,
        provider: ContentProvider,
        clock: Callable[[], float] = time.monotonic,
        remember_recent: bool = True,
    ) -> None:
        self.provider = provider
        self.clock = clock
        self.remember_recent = remember_recent
        self.dir_path = ""
        self.engine: SelectionEngine | None = None
        self.matcher: GitIgnoreMatcher | None = None
        self.query = ""
        self.extensions: frozenset[str] = frozenset()
        self.preview = ""
        self.copied_text: str | None = None
        self.search_focused = False
        self._error: ErrorBanner | None = None
        self.shortcuts: KeyComboRegistry = build_default_registry(
            on_select_all=self.select_all,
            on_copy=self.copy_selection,
            on_search=self.focus_search,
            on_escape=self.escape,
        )

    @property
    def tree(self) -> FileTree | None:
        return self.engine.tree if self.engine is not None else None

    def _require_path(self, path: str | None) -> str:
        candidate = (path if path is not None else self.dir_path).strip()
        if not candidate:
            raise InputError(MISSING_PATH_MESSAGE)
        return candidate

    def set_error(self, message: str) -> None:
        logger.info("Error banner: %s", message)
        self._error = ErrorBanner(message, self.clock())

    def clear_error(self) -> None:
        self._error = None

    @property
    def error(self) -> str | None:
        """Current banner message; banners dismiss themselves after five seconds."""
        if self._error is not None and self._error.expired(self.clock()):
            self._error = None
        return self._error.message if self._error is not None else None

    def load_directory(self, path: str | None = None) -> SelectionEngine | None:
        """Load ``path`` (or the current path) and reset selection state.

        Returns the new engine. On failure the banner is set, prior
        tree/selection state is kept and ``None`` is returned.
        """
        try:
            target = self._require_path(path)
            tree = self.provider.list_directory(target)
            gitignore_text = self.provider.read_gitignore(target)
        except InputError as exc:
            self.set_error(str(exc))
            return None
        except ProviderError as exc:
            self.set_error(str(exc) or "Unable to read directory")
            return None
        except TransportError as exc:
            logger.debug("Directory load transport failure: %s", exc)
            self.set_error(LOAD_FAILED_MESSAGE)
            return None

        self.matcher = matcher_from_gitignore_text(gitignore_text)
        self.engine = SelectionEngine(tree, self.matcher)
        self.engine.set_filter(self.query, self.extensions)
        self.dir_path = target
        self.preview = ""
        self.clear_error()
        if self.remember_recent:
            add_recent_path(target)
        logger.info("Session loaded %s", target)
        return self.engine

    def clear_directory(self) -> None:
        self.dir_path = ""
        self.engine = None
        self.matcher = None
        self.preview = ""

    def set_search(self, query: str) -> None:
        self.query = query
        if self.engine is not None:
            self.engine.set_filter(self.query, self.extensions)

    def set_extensions(self, extensions: set[str] | frozenset[str]) -> None:
        self.extensions = frozenset(extensions)
        if self.engine is not None:
            self.engine.set_filter(self.query, self.extensions)

    def toggle(self, path: str) -> bool:
        if self.engine is None:
            return False
        return self.engine.toggle(path)

    def select_all(self) -> bool:
        if self.engine is None:
            return False
        self.engine.select_all()
        return True

    def clear_selections(self) -> None:
        if self.engine is not None:
            self.engine.clear()

    def expand_all(self) -> None:
        if self.engine is not None:
            self.engine.expand_all()

    def collapse_all(self) -> None:
        if self.engine is not None:
            self.engine.collapse_all()

    def stats(self) -> SelectionStats:
        if self.engine is None:
            return SelectionStats(total=0, files=0)
        return SelectionStats(total=len(self.engine.selected), files=self.engine.selected_file_count())

    def available_file_types(self) -> FileTypeStats:
        if self.engine is None:
            return FileTypeStats()
        return analyze_file_types(collect_available_files(self.engine.tree.children, self.matcher))

    def build_bundle(self, include_file_map: bool = True) -> str | None:
        """Return bundle text, ``""`` when nothing is selected, ``None`` on failure."""
        if self.engine is None or not self.engine.selected:
            return ""
        try:
            return self.provider.read_files(self.dir_path, self.engine.selected_paths(), include_file_map)
        except (ProviderError, TransportError) as exc:
            logger.debug("Bundle request failed: %s", exc)
            self.set_error(COPY_FAILED_MESSAGE)
            return None

    def refresh_preview(self) -> str:
        bundle = self.build_bundle()
        self.preview = PREVIEW_FAILED_MESSAGE if bundle is None else bundle
        return self.preview

    def copy_selection(self) -> bool:
        """Bundle the selection into ``copied_text``; ``False`` when nothing was copied."""
        if self.engine is None or not self.engine.selected:
            return False
        bundle = self.build_bundle()
        if bundle is None:
            return False
        self.copied_text = bundle
        return True

    def focus_search(self) -> bool:
        self.search_focused = True
        return True

    def escape(self) -> bool:
        """Leave the search input if focused, otherwise dismiss the banner."""
        if self.search_focused:
            self.search_focused = False
        else:
            self.clear_error()
        return True

    def handle_key(self, key: str, input_focused: bool | None = None) -> bool | None:
        """Dispatch a shortcut; focus defaults to the search input's state."""
        focused = self.search_focused if input_focused is None else input_focused
        return self.shortcuts.dispatch(key, FocusContext(input_focused=focused))
