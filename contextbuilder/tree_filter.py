"""Search-query and extension filtered projections of a file tree."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .file_tree_model import DirectoryNode, FileNode, TreeNode
from .file_types import include_by_extension
from .gitignore import GitIgnoreMatcher


@dataclass(frozen=True)
class FilterResult:
    """Pruned tree plus directory paths that must be expanded to show matches."""

    visible: tuple[TreeNode, ...]
    must_expand: frozenset[str] = field(default_factory=frozenset)


def _ignored(node: TreeNode, matcher: GitIgnoreMatcher | None) -> bool:
    return matcher is not None and matcher.is_ignored(node.path)


def prune_ignored(nodes: Iterable[TreeNode], matcher: GitIgnoreMatcher | None) -> tuple[TreeNode, ...]:
    """Drop gitignored nodes recursively without any query filtering."""
    if matcher is None:
        return tuple(nodes)
    kept: list[TreeNode] = []
    for node in nodes:
        if matcher.is_ignored(node.path):
            continue
        if isinstance(node, DirectoryNode):
            node = DirectoryNode(name=node.name, path=node.path, children=prune_ignored(node.children, matcher))
        kept.append(node)
    return tuple(kept)


def filter_tree(
    nodes: Iterable[TreeNode],
    query: str = "",
    extension_allow: set[str] | frozenset[str] = frozenset(),
    matcher: GitIgnoreMatcher | None = None,
) -> FilterResult:
    """Filter ``nodes`` by name substring and extension allow-set.

    Files survive when their name contains ``query`` (case-insensitive) and
    their extension is allowed. Directories survive only through surviving
    descendants; a matching name alone never keeps an empty directory.
    Every surviving directory is reported in ``must_expand``.
    """
    folded_query = query.lower()
    visible: list[TreeNode] = []
    must_expand: set[str] = set()

    for node in nodes:
        if _ignored(node, matcher):
            continue

        name_matches = not query or folded_query in node.name.lower()

        if isinstance(node, DirectoryNode):
            result = filter_tree(node.children, query, extension_allow, matcher)
            if not result.visible:
                continue
            if name_matches and not query and not extension_allow:
                children = prune_ignored(node.children, matcher)
            else:
                children = result.visible
            visible.append(DirectoryNode(name=node.name, path=node.path, children=children))
            must_expand.update(result.must_expand)
            must_expand.add(node.path)
            continue

        type_matches = not extension_allow or include_by_extension(node.name, extension_allow)
        if name_matches and type_matches:
            visible.append(node)

    return FilterResult(visible=tuple(visible), must_expand=frozenset(must_expand))


def collect_available_files(nodes: Iterable[TreeNode], matcher: GitIgnoreMatcher | None = None) -> list[str]:
    """Return every non-ignored file path under ``nodes`` in pre-order."""
    files: list[str] = []
    for node in nodes:
        if _ignored(node, matcher):
            continue
        if isinstance(node, FileNode):
            files.append(node.path)
        else:
            files.extend(collect_available_files(node.children, matcher))
    return files


__all__ = ["FilterResult", "filter_tree", "prune_ignored", "collect_available_files"]
