"""JSON wire format for tree nodes.

Nodes serialize as ``{"name", "path", "type", "size"?, "children"?}``
dicts, matching the ``/api/list-directory`` response body.
"""

from __future__ import annotations

from collections.abc import Iterable

from .types import DirectoryNode, FileNode, NodeType, TreeNode, child_path


def node_to_json(node: TreeNode) -> dict[str, object]:
    data: dict[str, object] = {"name": node.name, "path": node.path, "type": node.type.value}
    if isinstance(node, DirectoryNode):
        data["children"] = [node_to_json(child) for child in node.children]
    elif node.size is not None:
        data["size"] = node.size
    return data


def nodes_to_json(nodes: Iterable[TreeNode]) -> list[dict[str, object]]:
    return [node_to_json(node) for node in nodes]


def node_from_json(data: object, parent_path: str | None = None) -> TreeNode | None:
    """Decode one node dict, returning ``None`` for malformed entries.

    A missing ``path`` is derived from the parent path and the name.
    """
    if not isinstance(data, dict):
        return None
    name = data.get("name")
    if not isinstance(name, str) or not name:
        return None
    raw_path = data.get("path")
    path = raw_path.replace("\\", "/") if isinstance(raw_path, str) and raw_path else child_path(parent_path, name)

    if data.get("type") == NodeType.DIRECTORY.value:
        return DirectoryNode(name=name, path=path, children=nodes_from_json(data.get("children"), path))

    size = data.get("size")
    if isinstance(size, bool) or not isinstance(size, int):
        size = None
    return FileNode(name=name, path=path, size=size)


def nodes_from_json(data: object, parent_path: str | None = None) -> tuple[TreeNode, ...]:
    if not isinstance(data, list):
        return ()
    nodes: list[TreeNode] = []
    for item in data:
        node = node_from_json(item, parent_path)
        if node is not None:
            nodes.append(node)
    return tuple(nodes)


__all__ = ["node_to_json", "nodes_to_json", "node_from_json", "nodes_from_json"]
