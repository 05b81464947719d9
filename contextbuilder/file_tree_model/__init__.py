"""Domain model for project file/directory trees.

This package contains non-UI tree primitives:
- file/directory node datatypes with nested children
- a path index rebuilt once per loaded tree
- filesystem scanning helpers
- JSON wire (de)serialisation
"""

from __future__ import annotations

from .fs import DirectoryChild, build_file_tree, list_directory_children
from .index import TreeIndex, descendant_paths, iter_nodes
from .serialize import node_from_json, node_to_json, nodes_from_json, nodes_to_json
from .types import DirectoryNode, FileNode, FileTree, NodeType, TreeNode, child_path

__all__ = [
    "NodeType",
    "FileNode",
    "DirectoryNode",
    "TreeNode",
    "FileTree",
    "child_path",
    "TreeIndex",
    "descendant_paths",
    "iter_nodes",
    "DirectoryChild",
    "list_directory_children",
    "build_file_tree",
    "node_to_json",
    "nodes_to_json",
    "node_from_json",
    "nodes_from_json",
]
