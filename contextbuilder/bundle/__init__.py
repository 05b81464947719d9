"""Bundle generation: tree map rendering, bundle assembly, content providers."""

from __future__ import annotations

from .builder import build_bundle, parse_entry, render_entry, should_skip
from .content import (
    UNREADABLE_MARKER,
    ContentProvider,
    ContentResult,
    DirectoryMarker,
    FileContent,
    Unreadable,
)
from .file_map import build_file_map, natural_sort_key
from .providers import LocalContentProvider, RemoteContentProvider, get_content_provider, read_text

__all__ = [
    "UNREADABLE_MARKER",
    "ContentProvider",
    "ContentResult",
    "DirectoryMarker",
    "FileContent",
    "Unreadable",
    "build_bundle",
    "render_entry",
    "parse_entry",
    "should_skip",
    "build_file_map",
    "natural_sort_key",
    "LocalContentProvider",
    "RemoteContentProvider",
    "get_content_provider",
    "read_text",
]
