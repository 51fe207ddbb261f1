"""Deciding whether a default-value pattern counts as a default parameter.

A default counts when it sits in a function's parameter list, possibly nested
inside destructuring, or in a destructuring declaration that is a direct
statement of a function body. A destructuring default whose pattern holds
defaults of its own does not count: the nested defaults already do.
"""

from __future__ import annotations

from tree_sitter import Node

from complexity_lens.constants import MAX_PATTERN_DEPTH
from complexity_lens.parsing.node_kinds import is_function_node

from .parent_map import ParentMap

PATTERN_CONTAINERS = frozenset(
    {
        "array_pattern",
        "object_pattern",
        "pair_pattern",
        "rest_pattern",
        "assignment_pattern",
        "object_assignment_pattern",
        "required_parameter",
        "optional_parameter",
        "formal_parameters",
    }
)

DESTRUCTURING_PATTERNS = frozenset({"object_pattern", "array_pattern"})


def is_default_candidate(node: Node) -> bool:
    """Whether ``node`` assigns a default value to a binding."""
    if node.type in ("assignment_pattern", "object_assignment_pattern"):
        return True
    if node.type in ("required_parameter", "optional_parameter"):
        return node.child_by_field_name("value") is not None
    return False


def _default_target(node: Node) -> Node | None:
    if node.type in ("assignment_pattern", "object_assignment_pattern"):
        return node.child_by_field_name("left")
    return node.child_by_field_name("pattern")


def wraps_nested_defaults(node: Node) -> bool:
    """Whether a default's destructuring target contains defaults itself."""
    target = _default_target(node)
    if target is None or target.type not in DESTRUCTURING_PATTERNS:
        return False

    stack = list(target.children)
    while stack:
        current = stack.pop()
        if is_function_node(current):
            continue
        if is_default_candidate(current):
            return True
        stack.extend(current.children)
    return False


def _binding_children(node: Node) -> list[Node]:
    """Children of a pattern node that can hold further bindings."""
    if node.type in ("formal_parameters", "array_pattern", "object_pattern", "rest_pattern"):
        return list(node.named_children)
    if node.type == "pair_pattern":
        return [c for c in (node.child_by_field_name("key"), node.child_by_field_name("value")) if c]
    if node.type in ("assignment_pattern", "object_assignment_pattern"):
        left = node.child_by_field_name("left")
        return [left] if left is not None else []
    if node.type in ("required_parameter", "optional_parameter"):
        pattern = node.child_by_field_name("pattern")
        return [pattern] if pattern is not None else []
    return []


def _reachable(root: Node, target: Node) -> bool:
    stack = [root]
    while stack:
        current = stack.pop()
        if current.id == target.id:
            return True
        stack.extend(_binding_children(current))
    return False


def _in_parameter_list(node: Node, parents: ParentMap) -> bool:
    current = node
    for _ in range(MAX_PATTERN_DEPTH):
        parent = parents.get(current.id)
        if parent is None:
            return False
        if is_function_node(parent):
            params = parent.child_by_field_name("parameters") or parent.child_by_field_name(
                "parameter"
            )
            return params is not None and _reachable(params, node)
        if parent.type not in PATTERN_CONTAINERS:
            return False
        current = parent
    return False


def _is_function_body_statement(declaration: Node, parents: ParentMap) -> bool:
    block = parents.get(declaration.id)
    if block is None or block.type != "statement_block":
        return False
    function = parents.get(block.id)
    if function is None or not is_function_node(function):
        return False
    body = function.child_by_field_name("body")
    return body is not None and body.id == block.id


def _in_body_destructuring(node: Node, parents: ParentMap) -> bool:
    current = node
    for _ in range(MAX_PATTERN_DEPTH):
        parent = parents.get(current.id)
        if parent is None:
            return False
        if parent.type == "variable_declarator":
            name = parent.child_by_field_name("name")
            if name is None or not _reachable(name, node):
                return False
            declaration = parents.get(parent.id)
            return declaration is not None and _is_function_body_statement(declaration, parents)
        if parent.type not in PATTERN_CONTAINERS:
            return False
        current = parent
    return False


def is_default_parameter(node: Node, parents: ParentMap) -> bool:
    """Whether a default-value node counts toward its function's complexity."""
    if not is_default_candidate(node) or wraps_nested_defaults(node):
        return False
    return _in_parameter_list(node, parents) or _in_body_destructuring(node, parents)
