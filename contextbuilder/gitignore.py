"""Gitignore-style path filtering utilities.

Compiles ``.gitignore`` lines into normalized glob strings and matches
forward-slash relative paths against them. Tree builders, the tree filter
and the bundle generator all share one matcher per directory load.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

GITIGNORE_FILENAME = ".gitignore"
DEFAULT_PATTERNS: tuple[str, ...] = (
    "node_modules/**",
    "dist/**",
    "build/**",
    ".next/**",
    "coverage/**",
    ".git/**",
)


def _looks_like_directory(name: str) -> bool:
    """Heuristic: names without a dot or wildcard are treated as directories."""
    return "." not in name and "*" not in name


def _normalize_line(line: str) -> str:
    """Rewrite one trimmed gitignore line into a matcher glob."""
    if line.startswith("/"):
        pattern = line[1:]
        if pattern.endswith("/") or _looks_like_directory(pattern):
            return f"{pattern.rstrip('/')}/**"
        return pattern

    if "/" not in line:
        if _looks_like_directory(line):
            return f"**/{line}/**"
        return f"**/{line}"

    # ``name/`` has no other separator, so it names a directory at any depth.
    bare = line.rstrip("/")
    if line.endswith("/") and bare and "/" not in bare:
        return f"**/{bare}/**"
    return line


def compile_patterns(raw_content: str) -> list[str]:
    """Parse raw ``.gitignore`` text into normalized glob patterns.

    Blank lines, ``#`` comments and ``!`` negations are dropped; re-inclusion
    is not supported.
    """
    patterns: list[str] = []
    for raw_line in raw_content.split("\n"):
        line = raw_line.strip()
        if not line or line.startswith("#") or line.startswith("!"):
            continue
        patterns.append(_normalize_line(line))
    return patterns


def glob_to_regex(pattern: str) -> str:
    """Translate a normalized glob into an anchored regex source string.

    Only ``.`` is escaped. ``**`` spans separators, ``*`` stays within one
    segment and ``?`` is any single character. A leading ``**/`` also
    matches zero directories and a trailing ``/**`` also matches the
    directory itself.
    """
    normalized = pattern.replace("\\", "/")
    prefix = ""
    suffix = ""
    if normalized.startswith("**/"):
        prefix = "(?:.*/)?"
        normalized = normalized[3:]
    if normalized.endswith("/**"):
        suffix = "(?:/.*)?"
        normalized = normalized[:-3]

    out: list[str] = []
    idx = 0
    while idx < len(normalized):
        ch = normalized[idx]
        if ch == "*":
            if normalized.startswith("**", idx):
                out.append(".*")
                idx += 2
                continue
            out.append("[^/]*")
        elif ch == "?":
            out.append(".")
        elif ch == ".":
            out.append("\\.")
        else:
            out.append(ch)
        idx += 1
    return f"^{prefix}{''.join(out)}{suffix}$"


def _compile_regexes(patterns: list[str] | tuple[str, ...]) -> tuple[re.Pattern[str], ...]:
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(glob_to_regex(pattern)))
        except re.error:
            logger.debug("Skipping unmatchable gitignore pattern %r", pattern)
    return tuple(compiled)


def is_excluded(path: str, patterns: list[str] | tuple[str, ...]) -> bool:
    """Return whether ``path`` matches any of ``patterns``."""
    normalized = path.replace("\\", "/")
    return any(regex.match(normalized) for regex in _compile_regexes(patterns))


@dataclass(frozen=True)
class GitIgnoreMatcher:
    """Compiled pattern snapshot for one directory load.

    ``patterns`` keeps the normalized glob strings for display and for
    shipping to other components; ``regexes`` holds their compiled form.
    """

    patterns: tuple[str, ...]
    regexes: tuple[re.Pattern[str], ...] = field(default=(), compare=False, repr=False)
    from_gitignore: bool = False

    @classmethod
    def from_patterns(cls, patterns: list[str] | tuple[str, ...], from_gitignore: bool = False) -> GitIgnoreMatcher:
        """Build a matcher with regexes compiled once up front."""
        pattern_tuple = tuple(patterns)
        return cls(
            patterns=pattern_tuple,
            regexes=_compile_regexes(pattern_tuple),
            from_gitignore=from_gitignore,
        )

    @classmethod
    def default(cls) -> GitIgnoreMatcher:
        return cls.from_patterns(DEFAULT_PATTERNS)

    def is_ignored(self, path: str) -> bool:
        """Return whether relative ``path`` is excluded by this matcher."""
        normalized = path.replace("\\", "/")
        return any(regex.match(normalized) for regex in self.regexes)


def load_gitignore_patterns(root: Path) -> tuple[list[str], bool]:
    """Read ``root/.gitignore`` and return ``(patterns, found)``.

    Missing or unreadable files fall back to ``DEFAULT_PATTERNS``.
    """
    try:
        content = (root / GITIGNORE_FILENAME).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return list(DEFAULT_PATTERNS), False
    return compile_patterns(content), True


def matcher_from_gitignore_text(content: str | None) -> GitIgnoreMatcher:
    """Build a matcher from raw ``.gitignore`` text, or defaults for ``None``."""
    if content is None:
        return GitIgnoreMatcher.default()
    return GitIgnoreMatcher.from_patterns(compile_patterns(content), from_gitignore=True)


def get_gitignore_matcher(root: Path) -> GitIgnoreMatcher:
    """Return a freshly compiled matcher for ``root``.

    Patterns are recomputed on every call so each directory load observes
    the current ``.gitignore``.
    """
    patterns, found = load_gitignore_patterns(root)
    if not found:
        logger.debug("No readable .gitignore under %s; using default patterns", root)
    return GitIgnoreMatcher.from_patterns(patterns, from_gitignore=found)
