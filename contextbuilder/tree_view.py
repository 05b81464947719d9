"""Plain-text rows for the selectable tree (checkbox, arrow, name, size)."""

from __future__ import annotations

from .file_tree_model import DirectoryNode, TreeNode
from .file_types import extension_of, preset_of
from .selection import SelectionEngine, SelectionState

TREE_SIZE_LABEL_MIN_BYTES = 10 * 1024

CHECKBOXES = {
    SelectionState.UNSELECTED: "[ ]",
    SelectionState.SELECTED: "[x]",
    SelectionState.INDETERMINATE: "[-]",
}


def highlight_substring(text: str, query: str) -> str:
    """Bracket the first case-insensitive occurrence of ``query`` in ``text``."""
    if not query:
        return text
    idx = text.casefold().find(query.casefold())
    if idx < 0:
        return text
    end = idx + len(query)
    return f"{text[:idx]}[{text[idx:end]}]{text[end:]}"


def format_size(size: int | None) -> str:
    if size is None or size < TREE_SIZE_LABEL_MIN_BYTES:
        return ""
    return f" [{size // 1024} KB]"


def format_tree_row(
    node: TreeNode,
    depth: int,
    engine: SelectionEngine,
    search_query: str = "",
    show_presets: bool = False,
) -> str:
    """Render one row; directories show an expansion arrow."""
    indent = "  " * depth
    checkbox = CHECKBOXES[engine.selection_state(node)]
    name = highlight_substring(node.name, search_query)
    if isinstance(node, DirectoryNode):
        marker = "▾ " if engine.is_expanded(node.path) else "▸ "
        return f"{indent}{checkbox} {marker}{name}/"

    label = ""
    if show_presets:
        preset = preset_of(extension_of(node.name))
        if preset is not None:
            label = f" ({preset})"
    return f"{indent}{checkbox}   {name}{format_size(node.size)}{label}"


def render_tree_rows(
    engine: SelectionEngine,
    search_query: str = "",
    expand_everything: bool = False,
    show_presets: bool = False,
) -> list[str]:
    """Render the visible tree, descending only into expanded directories.

    The synthetic root is the first row at depth zero.
    """
    root = engine.visible_tree.root_node()
    rows: list[str] = []

    def walk(node: TreeNode, depth: int) -> None:
        rows.append(format_tree_row(node, depth, engine, search_query, show_presets))
        if not isinstance(node, DirectoryNode):
            return
        if expand_everything or engine.is_expanded(node.path):
            for child in node.children:
                walk(child, depth + 1)

    walk(root, 0)
    return rows
