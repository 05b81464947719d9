"""Bundle assembly: file map plus per-path file/directory elements.

The output is XML-shaped text, not validated XML: file contents are
inserted verbatim without escaping.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..gitignore import GITIGNORE_FILENAME, GitIgnoreMatcher
from .content import UNREADABLE_MARKER, ContentProvider, ContentResult, DirectoryMarker, FileContent, Unreadable
from .file_map import build_file_map

logger = logging.getLogger(__name__)


def render_entry(rel_path: str, result: ContentResult) -> str:
    """Render one bundle element for ``rel_path``."""
    if isinstance(result, FileContent):
        return f'  <file path="{rel_path}">\n{result.text}\n  </file>\n'
    if isinstance(result, DirectoryMarker):
        return f'  <directory path="{rel_path}" />\n'
    return f'  <file path="{rel_path}" error="{UNREADABLE_MARKER}" />\n'


def parse_entry(rel_path: str, bundle_text: str) -> ContentResult:
    """Recover the element for ``rel_path`` from a single-path bundle.

    Paths the bundle left out (ignored or unreadable) come back as
    ``Unreadable``.
    """
    if f'  <directory path="{rel_path}" />\n' in bundle_text:
        return DirectoryMarker()
    opening = f'  <file path="{rel_path}">\n'
    start = bundle_text.find(opening)
    # Contents are not escaped, so the last closing tag ends the element.
    end = bundle_text.rfind("\n  </file>\n")
    if start < 0 or end < start + len(opening):
        return Unreadable()
    return FileContent(bundle_text[start + len(opening) : end])


def should_skip(rel_path: str, matcher: GitIgnoreMatcher | None) -> bool:
    if rel_path == GITIGNORE_FILENAME:
        return True
    return matcher is not None and matcher.is_ignored(rel_path)


def build_bundle(
    root_path: str,
    selected_paths: Iterable[str],
    provider: ContentProvider,
    matcher: GitIgnoreMatcher | None = None,
    include_file_map: bool = True,
) -> str:
    """Build the bundle text for ``selected_paths`` in their given order.

    The map covers every selected path; content elements skip
    ``.gitignore`` and ignored paths. A failure on one path becomes an
    inline error element instead of aborting the bundle.
    """
    paths = list(selected_paths)
    parts: list[str] = ["<files>\n"]

    if include_file_map:
        file_map = build_file_map(root_path, paths)
        if file_map:
            parts.append(f"  <file_map>\n{file_map}\n  </file_map>\n\n")

    for rel_path in paths:
        if should_skip(rel_path, matcher):
            logger.debug("Skipping ignored selection %s", rel_path)
            continue
        try:
            result = provider.classify(root_path, rel_path)
        except OSError as exc:
            logger.debug("Unable to read %s: %s", rel_path, exc)
            result = Unreadable(str(exc))
        parts.append(render_entry(rel_path, result))

    parts.append("</files>")
    bundle = "".join(parts)
    logger.debug("Built bundle for %d selections (%d chars)", len(paths), len(bundle))
    return bundle


__all__ = ["render_entry", "parse_entry", "should_skip", "build_bundle"]
