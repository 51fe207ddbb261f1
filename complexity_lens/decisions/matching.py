"""Matching tree-sitter function nodes to reported functions.

The linter reports arrows at the line of their ``=>`` token and every other
function at its start line, so each AST function gets a *match line* computed
the same way before lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from tree_sitter import Node

from complexity_lens.parsing.node_kinds import function_kind, kinds_compatible
from complexity_lens.parsing.tree_sitter_wrapper import ParsedSource, walk
from complexity_lens.types.core import FunctionDescriptor, FunctionNodeType


@dataclass(frozen=True)
class AstFunction:
    """A function node found in the syntax tree."""

    node: Node
    kind: FunctionNodeType
    match_line: int

    @property
    def span(self) -> tuple[int, int]:
        return self.node.start_byte, self.node.end_byte

    @property
    def start_line(self) -> int:
        return self.node.start_point[0] + 1

    @property
    def end_line(self) -> int:
        return self.node.end_point[0] + 1


def match_line(node: Node, kind: FunctionNodeType) -> int:
    """1-based line a linter would report for this function."""
    if kind == FunctionNodeType.ARROW_FUNCTION_EXPRESSION:
        for child in node.children:
            if child.type == "=>":
                return child.start_point[0] + 1
    return node.start_point[0] + 1


def collect_function_nodes(parsed: ParsedSource) -> list[AstFunction]:
    """All function nodes in document order."""
    functions: list[AstFunction] = []
    for node in walk(parsed.root):
        kind = function_kind(node)
        if kind is not None:
            functions.append(AstFunction(node=node, kind=kind, match_line=match_line(node, kind)))
    return functions


def _line_within(parsed: ParsedSource, line: int, function: AstFunction) -> bool:
    """Whether the whole of a 1-based source line lies inside ``function``."""
    row = line - 1
    if not 0 <= row < parsed.line_count:
        return False
    line_start, line_end = parsed.line_byte_range(row)
    return function.node.start_byte <= line_start and line_end <= function.node.end_byte


def match_functions(
    functions: Sequence[AstFunction],
    descriptors: Sequence[FunctionDescriptor],
    parsed: ParsedSource,
) -> dict[int, int]:
    """
    Map AST function node ids to reported function lines.

    A function whose match line carries descriptors takes the first one of a
    compatible kind, else the first one listed. A function with no descriptor
    on its match line takes the first compatible descriptor whose whole line
    lies inside the function's range.

    Returns:
        ``{node.id: descriptor.line}``
    """
    by_line: dict[int, list[FunctionDescriptor]] = {}
    for descriptor in descriptors:
        by_line.setdefault(descriptor.line, []).append(descriptor)

    matches: dict[int, int] = {}
    for function in functions:
        candidates = by_line.get(function.match_line)
        if candidates:
            chosen = next(
                (d for d in candidates if kinds_compatible(d.node_type, function.kind)),
                candidates[0],
            )
            matches[function.node.id] = chosen.line
            continue

        for descriptor in descriptors:
            if kinds_compatible(descriptor.node_type, function.kind) and _line_within(
                parsed, descriptor.line, function
            ):
                matches[function.node.id] = descriptor.line
                break
    return matches
