"""Deep-merge sibling lists of suite/test nodes keyed by identifier."""

from __future__ import annotations

import dataclasses

from testtree.constants import DEFAULT_ROOT_LABEL, ROOT_ID
from testtree.model import SuiteNode, TreeNode


def merge_nodes(
    destination: list[TreeNode],
    source: list[TreeNode],
) -> list[TreeNode]:
    """Merge *source* into a copy of *destination*.

    For each source node, in order:

    - same id as an existing suite, and the source node is a suite: the
      existing suite is replaced by a copy whose children are the merge of
      both children lists;
    - same id as any other existing node: the source node is dropped (the
      first occurrence of a leaf wins);
    - unseen id: the source node is appended.

    Neither input list is mutated.  Existing nodes keep their positions.
    """
    merged: list[TreeNode] = list(destination)
    positions: dict[str, int] = {}
    for index, node in enumerate(merged):
        positions.setdefault(node.id, index)

    for node in source:
        index = positions.get(node.id)
        if index is None:
            positions[node.id] = len(merged)
            merged.append(node)
            continue

        existing = merged[index]
        if existing.type == "suite" and node.type == "suite":
            merged[index] = dataclasses.replace(
                existing,
                children=merge_nodes(existing.children, node.children),
            )

    return merged


def merge_trees(
    *roots: SuiteNode | None,
    root_label: str = DEFAULT_ROOT_LABEL,
) -> SuiteNode:
    """Merge the children of several root suites under a fresh root.

    ``None`` entries are skipped, so a missing declaration or result tree
    simply contributes nothing.
    """
    children: list[TreeNode] = []
    for root in roots:
        if root is not None:
            children = merge_nodes(children, root.children)
    return SuiteNode(id=ROOT_ID, label=root_label, children=children)
