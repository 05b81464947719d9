"""Path-to-node index built once per tree."""

from __future__ import annotations

from collections.abc import Iterator

from .types import DirectoryNode, FileTree, TreeNode


def iter_nodes(nodes: tuple[TreeNode, ...]) -> Iterator[TreeNode]:
    """Yield ``nodes`` and all their descendants in pre-order."""
    stack: list[TreeNode] = list(reversed(nodes))
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, DirectoryNode):
            stack.extend(reversed(node.children))


def descendant_paths(node: TreeNode) -> list[str]:
    """Return ``node.path`` followed by every descendant path in pre-order."""
    if not isinstance(node, DirectoryNode):
        return [node.path]
    return [node.path, *(child.path for child in iter_nodes(node.children))]


class TreeIndex:
    """Lookup table from path to node plus parent links.

    The synthetic root is indexed under the tree's root label, and every
    top-level node records the root label as its parent.
    """

    def __init__(self, tree: FileTree) -> None:
        self.tree = tree
        self.root = tree.root_node()
        self._nodes: dict[str, TreeNode] = {self.root.path: self.root}
        self._parents: dict[str, str] = {}
        self._order: dict[str, int] = {self.root.path: 0}
        self._index(self.root)

    def _index(self, directory: DirectoryNode) -> None:
        stack: list[DirectoryNode] = [directory]
        while stack:
            current = stack.pop()
            for child in current.children:
                self._nodes.setdefault(child.path, child)
                self._parents.setdefault(child.path, current.path)
                if isinstance(child, DirectoryNode):
                    stack.append(child)
        for position, node in enumerate(iter_nodes(self.root.children), start=1):
            self._order.setdefault(node.path, position)

    def __contains__(self, path: object) -> bool:
        return path in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def get(self, path: str) -> TreeNode | None:
        return self._nodes.get(path)

    def parent_of(self, path: str) -> str | None:
        return self._parents.get(path)

    def ancestors_of(self, path: str) -> list[str]:
        """Return strict ancestors of ``path`` from nearest to farthest (root last)."""
        ancestors: list[str] = []
        current = self._parents.get(path)
        while current is not None:
            ancestors.append(current)
            current = self._parents.get(current)
        return ancestors

    def order_of(self, path: str) -> int | None:
        """Return the pre-order position of ``path`` (root is ``0``)."""
        return self._order.get(path)

    def all_paths(self) -> list[str]:
        """Return the root label plus every node path in pre-order."""
        return [self.root.path, *(node.path for node in iter_nodes(self.root.children))]

    def directory_paths(self) -> list[str]:
        return [
            self.root.path,
            *(node.path for node in iter_nodes(self.root.children) if isinstance(node, DirectoryNode)),
        ]


__all__ = ["TreeIndex", "descendant_paths", "iter_nodes"]
