"""
Folder/file hierarchy derived from the store's slash-delimited names.

The tree is rebuilt from scratch on every store change. Nodes live in an
arena keyed by ``(path, is_folder)``: a file and a folder may share a path
and are still two distinct nodes. A node's path is its segments joined by
``/`` exactly as they appear in the record name, so empty segments (as in
``"/a"`` or ``"a//b"``) keep paths distinct.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from pyuca import Collator

from .store import FileRecord

NodeKey = Tuple[str, bool]


class NodeNotFound(LookupError):
    pass


@dataclass
class TreeNode:
    name: str
    path: str
    is_folder: bool
    children: List["TreeNode"] = field(default_factory=list)
    file_index: Optional[int] = None

    @property
    def key(self) -> NodeKey:
        return (self.path, self.is_folder)


@lru_cache(maxsize=1)
def _collator() -> Collator:
    return Collator()


def sort_key(name: str, is_folder: bool):
    """Folders first, then Unicode collation order (punctuation before letters, lowercase first)."""
    return (not is_folder, _collator().sort_key(name), name)


class FileTree:
    """Arena of TreeNodes below an unnamed root folder, addressed as path ``None``."""

    def __init__(self):
        self.root = TreeNode(name="", path="", is_folder=True)
        self.nodes: Dict[NodeKey, TreeNode] = {}

    def get(self, path: Optional[str], is_folder: bool) -> TreeNode:
        if path is None and is_folder:
            return self.root
        try:
            return self.nodes[(path, is_folder)]
        except KeyError:
            kind = "folder" if is_folder else "file"
            raise NodeNotFound(f"No {kind} named {path!r} in the tree") from None

    def folder_paths(self) -> FrozenSet[str]:
        return frozenset(path for path, is_folder in self.nodes if is_folder)

    def _child(self, parent: TreeNode, name: str, is_folder: bool) -> Tuple[TreeNode, bool]:
        path = name if parent is self.root else f"{parent.path}/{name}"
        node = self.nodes.get((path, is_folder))
        if node is not None:
            return node, False
        node = TreeNode(name=name, path=path, is_folder=is_folder)
        self.nodes[node.key] = node
        parent.children.append(node)
        return node, True


def _sort_recursive(node: TreeNode) -> None:
    node.children.sort(key=lambda c: sort_key(c.name, c.is_folder))
    for child in node.children:
        if child.is_folder:
            _sort_recursive(child)


def build_tree(records: Iterable[FileRecord]) -> FileTree:
    """
    Walk every record's path segments from the root, creating folders as
    needed; the last segment becomes a file node carrying the store index.
    A file path seen twice keeps the index of its first record.
    """
    tree = FileTree()
    for index, record in enumerate(records):
        parts = record.name.split("/")
        current = tree.root
        for i, part in enumerate(parts):
            is_last = i == len(parts) - 1
            current, created = tree._child(current, part, not is_last)
            if created and is_last:
                current.file_index = index
    _sort_recursive(tree.root)
    return tree


def all_leaf_indices(node: TreeNode) -> List[int]:
    """Store indices of every file under ``node`` (itself, for a file node)."""
    if not node.is_folder:
        return [node.file_index] if node.file_index is not None else []
    out: List[int] = []
    stack = [node]
    while stack:
        current = stack.pop()
        for child in current.children:
            if child.is_folder:
                stack.append(child)
            elif child.file_index is not None:
                out.append(child.file_index)
    return out


# -------------------------------------------------------
# Folder expansion state
# -------------------------------------------------------
def toggle_folder(expanded: FrozenSet[str], path: str) -> FrozenSet[str]:
    if path in expanded:
        return expanded - {path}
    return expanded | {path}


def prune_expanded(expanded: FrozenSet[str], tree: FileTree) -> FrozenSet[str]:
    """Drop expanded paths whose folder no longer exists."""
    return expanded & tree.folder_paths()
