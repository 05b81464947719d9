"""Tri-state hierarchical selection over a loaded file tree.

The selection set stores plain path strings. A directory is a member only
while its entire (visible) subtree is selected; partial selection is never
stored and is derived on demand as ``SelectionState.INDETERMINATE``.
"""

from __future__ import annotations

import logging
from enum import Enum

from .file_tree_model import DirectoryNode, FileNode, FileTree, TreeIndex, TreeNode, descendant_paths
from .gitignore import GitIgnoreMatcher
from .tree_filter import FilterResult, filter_tree

logger = logging.getLogger(__name__)


class SelectionState(Enum):
    UNSELECTED = "unselected"
    SELECTED = "selected"
    INDETERMINATE = "indeterminate"


class SelectionEngine:
    """Selection and expansion state for one loaded tree.

    Lookups for toggling and select-all go through the currently filtered
    view; selected-file counting uses the full tree. Both indexes are
    rebuilt only when the tree or the filter changes.
    """

    def __init__(self, tree: FileTree, matcher: GitIgnoreMatcher | None = None) -> None:
        self.tree = tree
        self.matcher = matcher
        self.query = ""
        self.extension_allow: frozenset[str] = frozenset()
        self.selected: set[str] = set()
        self.expanded: set[str] = set()
        self._full_index = TreeIndex(tree)
        self.filter_result = FilterResult(visible=())
        self.visible_tree = tree
        self._view_index = self._full_index
        self._apply_filter()

    @property
    def root_label(self) -> str:
        return self.tree.root_label

    @property
    def full_index(self) -> TreeIndex:
        return self._full_index

    @property
    def view_index(self) -> TreeIndex:
        return self._view_index

    def _apply_filter(self) -> None:
        self.filter_result = filter_tree(self.tree.children, self.query, self.extension_allow, self.matcher)
        self.visible_tree = self.tree.with_children(self.filter_result.visible)
        self._view_index = TreeIndex(self.visible_tree)

    def set_filter(self, query: str = "", extension_allow: set[str] | frozenset[str] = frozenset()) -> FilterResult:
        """Narrow the visible tree; the selection itself is left untouched.

        While a query is active, directories holding matches are added to
        the expanded set.
        """
        self.query = query
        self.extension_allow = frozenset(ext.lower().lstrip(".") for ext in extension_allow)
        self._apply_filter()
        if self.query and self.filter_result.must_expand:
            self.expanded.update(self.filter_result.must_expand)
        return self.filter_result

    def toggle(self, path: str) -> bool:
        """Toggle ``path`` and propagate to descendants and ancestors.

        Returns ``False`` without changes when ``path`` is not in the
        visible tree.
        """
        node = self._view_index.get(path)
        if node is None:
            logger.debug("Ignoring toggle for unknown path %r", path)
            return False

        ancestors = self._view_index.ancestors_of(path)
        if path in self.selected:
            self.selected.difference_update(descendant_paths(node))
            self.selected.difference_update(ancestors)
            return True

        self.selected.update(descendant_paths(node))
        for ancestor_path in ancestors:
            ancestor = self._view_index.get(ancestor_path)
            if ancestor is None or not self._all_children_selected(ancestor):
                break
            self.selected.add(ancestor_path)
        return True

    def _all_children_selected(self, node: TreeNode) -> bool:
        if isinstance(node, FileNode):
            return node.path in self.selected
        for child in node.children:
            if child.path not in self.selected:
                return False
            if isinstance(child, DirectoryNode) and not self._all_children_selected(child):
                return False
        return True

    def selection_state(self, node: TreeNode) -> SelectionState:
        """Derive the display state of ``node`` from the selection set."""
        if isinstance(node, FileNode) or not node.children:
            return SelectionState.SELECTED if node.path in self.selected else SelectionState.UNSELECTED

        paths = descendant_paths(node)
        selected_count = sum(1 for item in paths if item in self.selected)
        if selected_count == 0:
            return SelectionState.UNSELECTED
        if selected_count == len(paths):
            return SelectionState.SELECTED
        return SelectionState.INDETERMINATE

    def state_for_path(self, path: str) -> SelectionState:
        node = self._view_index.get(path) or self._full_index.get(path)
        if node is None:
            return SelectionState.SELECTED if path in self.selected else SelectionState.UNSELECTED
        return self.selection_state(node)

    def select_all(self) -> None:
        """Clear a non-empty selection, otherwise select every visible path."""
        if self.selected:
            self.selected.clear()
            return
        self.selected.update(self._view_index.all_paths())

    def clear(self) -> None:
        self.selected.clear()

    def expand_all(self) -> None:
        self.expanded = set(self._full_index.directory_paths())

    def collapse_all(self) -> None:
        self.expanded.clear()

    def toggle_expanded(self, path: str) -> bool:
        """Flip expansion of ``path``; returns the new expanded flag."""
        if path in self.expanded:
            self.expanded.discard(path)
            return False
        self.expanded.add(path)
        return True

    def is_expanded(self, path: str) -> bool:
        return path in self.expanded

    def selected_file_count(self) -> int:
        """Count selected paths that resolve to files in the full tree."""
        return sum(1 for path in self.selected if isinstance(self._full_index.get(path), FileNode))

    def selected_folder_count(self) -> int:
        return len(self.selected) - self.selected_file_count()

    def selected_paths(self) -> list[str]:
        """Return selected relative paths in tree order, excluding the root label.

        Paths no longer present in the tree are appended in sorted order.
        """
        known: list[tuple[int, str]] = []
        unknown: list[str] = []
        for path in self.selected:
            if path == self.root_label:
                continue
            order = self._full_index.order_of(path)
            if order is None:
                unknown.append(path)
            else:
                known.append((order, path))
        known.sort()
        return [path for _order, path in known] + sorted(unknown)


__all__ = ["SelectionEngine", "SelectionState"]
