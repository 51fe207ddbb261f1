"""Classifying tree-sitter nodes as decision points.

Counting follows the linter's complexity rule. The switch convention is the
only configurable part: classic counts every ``case`` that has a test,
modified counts each ``switch`` once. The variant decides both which node
types are collected and how they are classified.
"""

from __future__ import annotations

from tree_sitter import Node

from complexity_lens.types.core import Variant

from .params import is_default_parameter
from .parent_map import ParentMap
from .types import DecisionType

_BASE_CANDIDATE_KINDS = frozenset(
    {
        "if_statement",
        "for_statement",
        "for_in_statement",
        "while_statement",
        "do_statement",
        "catch_clause",
        "ternary_expression",
        "binary_expression",
        "member_expression",
        "subscript_expression",
        "assignment_pattern",
        "object_assignment_pattern",
        "required_parameter",
        "optional_parameter",
    }
)

_DIRECT_TYPES: dict[str, DecisionType] = {
    "for_statement": DecisionType.FOR,
    "while_statement": DecisionType.WHILE,
    "do_statement": DecisionType.DO_WHILE,
    "catch_clause": DecisionType.CATCH,
    "ternary_expression": DecisionType.TERNARY,
}

_LOGICAL_OPERATORS: dict[str, DecisionType] = {
    "&&": DecisionType.AND,
    "||": DecisionType.OR,
    "??": DecisionType.NULLISH,
}


def candidate_kinds(variant: Variant) -> frozenset[str]:
    """Node types worth classifying under ``variant``."""
    if Variant.coerce(variant) == Variant.MODIFIED:
        return _BASE_CANDIDATE_KINDS | {"switch_statement"}
    return _BASE_CANDIDATE_KINDS | {"switch_case"}


def _is_else_if(node: Node, parents: ParentMap) -> bool:
    clause = parents.get(node.id)
    if clause is None or clause.type != "else_clause":
        return False
    outer = parents.get(clause.id)
    return outer is not None and outer.type == "if_statement"


def _for_in_type(node: Node) -> DecisionType:
    operator = node.child_by_field_name("operator")
    if operator is None:
        operator = next((c for c in node.children if not c.is_named and c.type in ("in", "of")), None)
    if operator is not None and operator.type == "of":
        return DecisionType.FOR_OF
    return DecisionType.FOR_IN


def logical_operator(node: Node) -> str | None:
    """The operator of a binary expression, as written."""
    operator = node.child_by_field_name("operator")
    return operator.type if operator is not None else None


def is_optional_access(node: Node) -> bool:
    if node.child_by_field_name("optional_chain") is not None:
        return True
    return any(child.type == "optional_chain" for child in node.children)


def classify(node: Node, parents: ParentMap, variant: Variant = Variant.CLASSIC) -> DecisionType | None:
    """Decision type of ``node``, or None if it does not add complexity."""
    kind = node.type
    variant = Variant.coerce(variant)

    if kind == "if_statement":
        return DecisionType.ELSE_IF if _is_else_if(node, parents) else DecisionType.IF
    if kind in _DIRECT_TYPES:
        return _DIRECT_TYPES[kind]
    if kind == "for_in_statement":
        return _for_in_type(node)
    if kind == "switch_case":
        if variant == Variant.MODIFIED or node.child_by_field_name("value") is None:
            return None
        return DecisionType.CASE
    if kind == "switch_statement":
        return DecisionType.SWITCH if variant == Variant.MODIFIED else None
    if kind == "binary_expression":
        return _LOGICAL_OPERATORS.get(logical_operator(node) or "")
    if kind in ("member_expression", "subscript_expression"):
        return DecisionType.OPTIONAL_CHAIN if is_optional_access(node) else None
    if is_default_parameter(node, parents):
        return DecisionType.DEFAULT_PARAMETER
    return None
