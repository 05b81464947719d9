"""Filename extension classification and extension-set filtering."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class FileTypePreset:
    """Named group of extensions surfaced by the file-type filter."""

    label: str
    extensions: tuple[str, ...]


# Enumeration order decides which preset wins for shared extensions.
FILE_TYPE_PRESETS: dict[str, FileTypePreset] = {
    "frontend": FileTypePreset(
        "Frontend",
        ("tsx", "jsx", "ts", "js", "vue", "svelte", "html", "css", "scss", "sass", "less", "styl"),
    ),
    "backend": FileTypePreset(
        "Backend",
        ("py", "java", "go", "rs", "rb", "php", "cs", "cpp", "c", "kt", "scala", "clj"),
    ),
    "config": FileTypePreset(
        "Config",
        ("json", "yaml", "yml", "toml", "ini", "env", "conf", "config", "xml", "properties"),
    ),
    "docs": FileTypePreset("Documentation", ("md", "txt", "rst", "adoc", "tex", "rtf")),
    "scripts": FileTypePreset("Scripts", ("sh", "bash", "zsh", "fish", "ps1", "bat", "cmd")),
    "data": FileTypePreset("Data", ("csv", "tsv", "json", "xml", "sql", "db", "sqlite")),
}

COMMON_EXTENSIONS: tuple[str, ...] = (
    "tsx", "jsx", "ts", "js", "vue", "svelte", "html", "css", "scss", "sass",
    "py", "java", "go", "rs", "rb", "php", "cs", "cpp", "c",
    "json", "yaml", "yml", "toml", "env", "xml",
    "md", "txt", "rst",
    "sh", "bash", "ps1", "bat",
    "sql", "dockerfile", "gitignore", "lock",
)


def extension_of(filename: str) -> str:
    """Return the lowercase extension of ``filename`` without the dot.

    Single-dot dotfiles such as ``.gitignore`` report the name after the
    dot. Names without a dot return ``""``.
    """
    parts = filename.lower().split(".")
    if len(parts) == 1:
        return ""
    if filename.startswith(".") and len(parts) == 2:
        return parts[1]
    return parts[-1]


def preset_of(extension: str) -> str | None:
    """Return the first preset tag whose extension list contains ``extension``."""
    lowered = extension.lower()
    for tag, preset in FILE_TYPE_PRESETS.items():
        if lowered in preset.extensions:
            return tag
    return None


def include_by_extension(filename: str, allow: set[str] | frozenset[str]) -> bool:
    """Return ``True`` when ``allow`` is empty or contains the file's extension."""
    if not allow:
        return True
    return extension_of(filename) in allow


def extensions_for_preset(tag: str) -> frozenset[str]:
    preset = FILE_TYPE_PRESETS.get(tag)
    if preset is None:
        return frozenset()
    return frozenset(preset.extensions)


@dataclass
class FileTypeStats:
    """Per-extension and per-preset counts over a set of file paths."""

    extensions: Counter[str] = field(default_factory=Counter)
    presets: Counter[str] = field(default_factory=Counter)
    total: int = 0


def analyze_file_types(file_paths: Iterable[str]) -> FileTypeStats:
    """Count extensions and presets for the given relative file paths.

    Files without an extension are not counted.
    """
    stats = FileTypeStats()
    for path in file_paths:
        filename = path.rsplit("/", 1)[-1]
        ext = extension_of(filename)
        if not ext:
            continue
        stats.total += 1
        stats.extensions[ext] += 1
        preset = preset_of(ext)
        if preset is not None:
            stats.presets[preset] += 1
    return stats
