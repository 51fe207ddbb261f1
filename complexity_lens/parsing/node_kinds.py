"""Mapping between tree-sitter node types and ESTree function kinds."""

from __future__ import annotations

from tree_sitter import Node

from complexity_lens.types.core import FunctionNodeType

FUNCTION_NODE_KINDS: dict[str, FunctionNodeType] = {
    "function_declaration": FunctionNodeType.FUNCTION_DECLARATION,
    "generator_function_declaration": FunctionNodeType.FUNCTION_DECLARATION,
    "function_expression": FunctionNodeType.FUNCTION_EXPRESSION,
    # Older javascript grammars name the expression form plain `function`.
    "function": FunctionNodeType.FUNCTION_EXPRESSION,
    "generator_function": FunctionNodeType.FUNCTION_EXPRESSION,
    "arrow_function": FunctionNodeType.ARROW_FUNCTION_EXPRESSION,
    "method_definition": FunctionNodeType.METHOD_DEFINITION,
}

# A reported FunctionExpression may be the value of a class method.
_COMPATIBLE_KINDS: dict[FunctionNodeType, frozenset[FunctionNodeType]] = {
    FunctionNodeType.FUNCTION_EXPRESSION: frozenset(
        {FunctionNodeType.FUNCTION_EXPRESSION, FunctionNodeType.METHOD_DEFINITION}
    ),
    FunctionNodeType.METHOD_DEFINITION: frozenset(
        {FunctionNodeType.FUNCTION_EXPRESSION, FunctionNodeType.METHOD_DEFINITION}
    ),
}


def function_kind(node: Node) -> FunctionNodeType | None:
    """ESTree kind of a function node, or None if ``node`` is not a function."""
    if node.type == "function" and not node.is_named:
        # The `function` keyword token
        return None
    return FUNCTION_NODE_KINDS.get(node.type)


def is_function_node(node: Node) -> bool:
    return function_kind(node) is not None


def kinds_compatible(reported: FunctionNodeType, actual: FunctionNodeType) -> bool:
    """Whether an AST function of kind ``actual`` can satisfy a ``reported`` kind."""
    if reported == actual:
        return True
    return actual in _COMPATIBLE_KINDS.get(reported, frozenset())
