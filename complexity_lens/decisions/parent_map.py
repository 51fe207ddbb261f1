"""Child-to-parent links for a syntax tree, built in one traversal."""

from __future__ import annotations

from tree_sitter import Node

from complexity_lens.parsing.tree_sitter_wrapper import walk

ParentMap = dict[int, Node]


def build_parent_map(root: Node) -> ParentMap:
    """Map each node id to its parent node. The root has no entry."""
    parents: ParentMap = {}
    for node in walk(root):
        for child in node.children:
            parents[child.id] = node
    return parents


def ancestors(node: Node, parents: ParentMap):
    """Yield the ancestors of ``node``, nearest first."""
    current = parents.get(node.id)
    while current is not None:
        yield current
        current = parents.get(current.id)
