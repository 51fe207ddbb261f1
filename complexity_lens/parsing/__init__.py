"""
Tree-sitter parsing layer.

- Grammar selection by file extension
- Cached parsers and a ParsedSource with byte/char position helpers
- ESTree function-kind mapping for tree-sitter nodes
"""

from .node_kinds import (
    FUNCTION_NODE_KINDS,
    function_kind,
    is_function_node,
    kinds_compatible,
)
from .tree_sitter_wrapper import (
    ParsedSource,
    get_parser,
    grammar_for_path,
    parse_source,
    walk,
)

__all__ = [
    "FUNCTION_NODE_KINDS",
    "ParsedSource",
    "function_kind",
    "get_parser",
    "grammar_for_path",
    "is_function_node",
    "kinds_compatible",
    "parse_source",
    "walk",
]
