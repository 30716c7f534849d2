"""Tri-state multi-select over the file tree, as pure functions on index sets."""

from enum import Enum
from typing import FrozenSet, Iterable

from .tree import TreeNode, all_leaf_indices


class SelectionStatus(str, Enum):
    CHECKED = "checked"
    UNCHECKED = "unchecked"
    INDETERMINATE = "indeterminate"


EMPTY: FrozenSet[int] = frozenset()


def toggle(selected: FrozenSet[int], node: TreeNode) -> FrozenSet[int]:
    """
    Deselect everything under ``node`` if it is all selected already,
    otherwise select everything under it. A partial selection always
    becomes a full one.
    """
    leaves = all_leaf_indices(node)
    if all(i in selected for i in leaves):
        return selected.difference(leaves)
    return selected.union(leaves)


def status_of(selected: FrozenSet[int], node: TreeNode) -> SelectionStatus:
    leaves = all_leaf_indices(node)
    if not leaves:
        return SelectionStatus.UNCHECKED
    count = sum(1 for i in leaves if i in selected)
    if count == 0:
        return SelectionStatus.UNCHECKED
    if count == len(leaves):
        return SelectionStatus.CHECKED
    return SelectionStatus.INDETERMINATE


def restrict(selected: Iterable[int], length: int) -> FrozenSet[int]:
    """Keep only indices that exist in a store of ``length`` records."""
    return frozenset(i for i in selected if 0 <= i < length)
