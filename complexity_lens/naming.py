"""
Display names for reported functions.

Names come from the syntax tree when the file parses: a function's own name,
the variable, property, field or assignment it is bound to, or else its
callback context (``return``, ``onClick handler``, ``map``). Files that do
not parse fall back to regex patterns over the reported line.
"""

from __future__ import annotations

import re

from tree_sitter import Node

from complexity_lens.boundaries.named import NAMED_START_PATTERNS
from complexity_lens.constants import NAMED_START_LOOKBACK, PLACEHOLDER_NAMES
from complexity_lens.decisions.matching import collect_function_nodes
from complexity_lens.decisions.parent_map import ParentMap, ancestors, build_parent_map
from complexity_lens.parsing.node_kinds import is_function_node, kinds_compatible
from complexity_lens.parsing.tree_sitter_wrapper import ParsedSource, parse_source
from complexity_lens.types.core import FunctionNodeType
from complexity_lens.types.errors import SourceParseError
from complexity_lens.utils.logger import logger

UNKNOWN = "unknown"
ANONYMOUS = "anonymous"
ANONYMOUS_ARROW = "anonymous arrow function"

# Names carried by these kinds are used as-is
_OWN_NAME_KINDS = frozenset(
    {"function_declaration", "generator_function_declaration", "method_definition"}
)

_NAME_NODE_KINDS = frozenset(
    {
        "identifier",
        "property_identifier",
        "private_property_identifier",
        "shorthand_property_identifier",
        "type_identifier",
        "number",
    }
)

_FIELD_KINDS = ("public_field_definition", "field_definition")

NAMED_ARROW = re.compile(r"const\s+([a-zA-Z_$][a-zA-Z0-9_$]*)\s*=\s*(?:\([^)]*\)\s*)?=>")
METHOD_CALL = re.compile(r"\.(\w+)\s*\(")
FUNCTION_CALL = re.compile(r"(?!if|for|while|switch)\b(\w+)\s*\(")
ARROW_CALLBACK_PATTERNS = (
    re.compile(r"\.(\w+)\s*\([^)]*\)\s*=>"),
    re.compile(r"\.(\w+)\s*\([^)]*=>"),
    re.compile(r"(\w+)\s*\([^)]*\)\s*=>"),
    re.compile(r"(\w+)\s*\([^)]*=>"),
)

# Declaration shapes used to find the function enclosing a callback
_PARENT_PATTERNS = NAMED_START_PATTERNS[:3]


# ============================================================================
# AST naming
# ============================================================================


def _skip_parentheses_up(node: Node, parents: ParentMap) -> tuple[Node, Node | None]:
    """Climb out of ``( ... )`` wrappers; return (outermost wrapper, its parent)."""
    current = node
    parent = parents.get(current.id)
    while parent is not None and parent.type == "parenthesized_expression":
        current = parent
        parent = parents.get(current.id)
    return current, parent


def _is_field(parent: Node, name: str, child: Node) -> bool:
    field = parent.child_by_field_name(name)
    return field is not None and field.id == child.id


class FunctionNamer:
    """Names functions of one parsed file by their reported line."""

    def __init__(self, parsed: ParsedSource) -> None:
        self.parsed = parsed
        self.functions = collect_function_nodes(parsed)
        self.parents = build_parent_map(parsed.root)

    def find_function(self, line: int, node_type: FunctionNodeType) -> Node | None:
        """The AST function reported at ``line`` with kind ``node_type``."""
        if node_type == FunctionNodeType.FUNCTION_EXPRESSION:
            # Class methods are reported as the FunctionExpression of the method
            for function in self.functions:
                if function.kind == FunctionNodeType.METHOD_DEFINITION and function.start_line == line:
                    return function.node
        for function in self.functions:
            if function.match_line == line and kinds_compatible(node_type, function.kind):
                return function.node
        return None

    def name(self, line: int, node_type: FunctionNodeType | str) -> str | None:
        """Display name for the function at ``line``, or None if none is there."""
        node_type = FunctionNodeType.coerce(node_type)
        node = self.find_function(line, node_type)
        if node is None:
            return None
        name = self.bound_name(node) or self.callback_context(node)
        if name:
            return name
        return ANONYMOUS_ARROW if node.type == "arrow_function" else ANONYMOUS

    def _text(self, node: Node | None) -> str | None:
        if node is None:
            return None
        if node.type in _NAME_NODE_KINDS:
            return self.parsed.text(node)
        if node.type == "string":
            return self.parsed.text(node).strip("'\"`")
        return None

    def bound_name(self, node: Node) -> str | None:
        """Name from the function itself or whatever it is bound to."""
        if node.type in _OWN_NAME_KINDS:
            own = self._text(node.child_by_field_name("name"))
            if own:
                return own

        wrapper, parent = _skip_parentheses_up(node, self.parents)
        if parent is None:
            return None

        if parent.type == "variable_declarator" and _is_field(parent, "value", wrapper):
            return self._text(parent.child_by_field_name("name"))
        if parent.type == "arguments":
            return self._hook_declarator_name(wrapper, parent)
        if parent.type == "pair" and _is_field(parent, "value", wrapper):
            return self._text(parent.child_by_field_name("key"))
        if parent.type in _FIELD_KINDS and _is_field(parent, "value", wrapper):
            return self._text(
                parent.child_by_field_name("name") or parent.child_by_field_name("property")
            )
        if parent.type == "assignment_expression" and _is_field(parent, "right", wrapper):
            left = parent.child_by_field_name("left")
            if left is not None and left.type == "member_expression":
                return self._text(left.child_by_field_name("property"))
            return self._text(left)
        return None

    def _hook_declarator_name(self, argument: Node, arguments: Node) -> str | None:
        """``const onSelect = useCallback(() => ...)`` names the callback ``onSelect``."""
        named = arguments.named_children
        if not named or named[0].id != argument.id:
            return None
        call = self.parents.get(arguments.id)
        if call is None or call.type != "call_expression":
            return None
        callee = call.child_by_field_name("function")
        if callee is None or callee.type != "identifier":
            return None
        declarator = self.parents.get(call.id)
        if declarator is None or declarator.type != "variable_declarator":
            return None
        if not _is_field(declarator, "value", call):
            return None
        return self._text(declarator.child_by_field_name("name"))

    def callback_context(self, node: Node) -> str | None:
        """Name a callback by where it is passed or returned."""
        _, parent = _skip_parentheses_up(node, self.parents)
        if parent is not None and parent.type == "return_statement":
            if any(is_function_node(a) for a in ancestors(parent, self.parents)):
                return "return"

        for ancestor in ancestors(node, self.parents):
            if is_function_node(ancestor):
                break
            if ancestor.type == "jsx_attribute":
                attribute = ancestor.named_children[0] if ancestor.named_children else None
                attribute_name = self.parsed.text(attribute) if attribute is not None else ""
                if attribute_name == "ref":
                    return "ref"
                if attribute_name.startswith("on"):
                    return f"{attribute_name} handler"
                break

        for ancestor in ancestors(node, self.parents):
            if is_function_node(ancestor):
                break
            if ancestor.type == "call_expression":
                return self._callee_name(ancestor.child_by_field_name("function"))
            if ancestor.type == "new_expression":
                return self._callee_name(ancestor.child_by_field_name("constructor"))
        return None

    def _callee_name(self, callee: Node | None) -> str | None:
        if callee is None:
            return None
        if callee.type == "member_expression":
            return self._text(callee.child_by_field_name("property"))
        if callee.type == "identifier":
            return self._text(callee)
        return None


# ============================================================================
# Regex fallback
# ============================================================================


def find_parent_function(lines: list[str], line: int) -> str | None:
    """Closest declaration name in the lines above ``line``."""
    for check in range(line - 1, max(0, line - 1 - NAMED_START_LOOKBACK), -1):
        text = lines[check - 1] if 0 < check <= len(lines) else ""
        for pattern in _PARENT_PATTERNS:
            match = pattern.search(text)
            if match:
                return match.group(1)
    return None


def format_callback_name(callback: str, parent: str | None) -> str:
    """``parent (callback)`` when the parent is a real name, else just ``callback``."""
    if parent and parent not in PLACEHOLDER_NAMES:
        return f"{parent} ({callback})"
    return callback


def _arrow_name_by_regex(lines: list[str], line: int, current: str, previous: str) -> str:
    combined = f"{previous} {current}".strip()
    named = NAMED_ARROW.search(combined)
    if named:
        return named.group(1)

    arrow = current.find("=>")
    if arrow != -1:
        before = current[:arrow]
        match = METHOD_CALL.search(before) or FUNCTION_CALL.search(before)
        if match:
            return format_callback_name(match.group(1), find_parent_function(lines, line))

    for pattern in ARROW_CALLBACK_PATTERNS:
        match = pattern.search(combined)
        if match:
            return format_callback_name(match.group(1), find_parent_function(lines, line))
    return UNKNOWN


def extract_name_by_regex(lines: list[str], line: int, node_type: FunctionNodeType | str) -> str:
    """Best-effort name from the text around ``line`` alone."""
    index = line - 1
    current = lines[index] if 0 <= index < len(lines) else ""
    previous = lines[index - 1] if 1 <= index <= len(lines) else ""

    if FunctionNodeType.coerce(node_type) == FunctionNodeType.ARROW_FUNCTION_EXPRESSION:
        return _arrow_name_by_regex(lines, line, current, previous)

    for text in (current, previous):
        for pattern in NAMED_START_PATTERNS:
            match = pattern.search(text)
            if match:
                return match.group(1)
    return UNKNOWN


def extract_function_name(
    source: str,
    line: int,
    node_type: FunctionNodeType | str = FunctionNodeType.FUNCTION_DECLARATION,
    file_path: str | None = None,
) -> str:
    """
    Name the function reported at ``line``.

    Args:
        source: Full source text.
        line: 1-based reported line.
        node_type: Reported ESTree kind.
        file_path: Used to choose the grammar.

    Returns:
        The best available name; ``unknown`` when nothing matches.
    """
    try:
        name = FunctionNamer(parse_source(source, file_path)).name(line, node_type)
    except SourceParseError as e:
        logger.debug("Naming by regex for {}: {}", file_path or "<source>", e)
        name = None
    return name or extract_name_by_regex(source.split("\n"), line, node_type)
