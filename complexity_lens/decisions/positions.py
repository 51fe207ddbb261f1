"""Report positions for decision points.

Lines are 1-based; columns are 0-based character offsets, half-open.
"""

from __future__ import annotations

from dataclasses import dataclass

from tree_sitter import Node

from complexity_lens.parsing.tree_sitter_wrapper import ParsedSource

from .types import DecisionType, LineSpan


@dataclass(frozen=True)
class Position:
    line: int
    column: int | None = None
    end_column: int | None = None
    lines: tuple[LineSpan, ...] = ()


def unwrap_parentheses(node: Node | None) -> Node | None:
    """Strip ``( ... )`` wrappers, which the linter's tree does not have."""
    while node is not None and node.type == "parenthesized_expression":
        inner = next((c for c in node.named_children if c.type != "comment"), None)
        if inner is None:
            break
        node = inner
    return node


def _logical_position(node: Node, parsed: ParsedSource) -> Position | None:
    left = unwrap_parentheses(node.child_by_field_name("left"))
    right = unwrap_parentheses(node.child_by_field_name("right"))
    if left is None or right is None:
        return None
    line = left.end_point[0] + 1
    if node.start_point[0] != node.end_point[0]:
        return Position(line=line)
    # The gap between the operands holds the operator
    return Position(
        line=line,
        column=parsed.char_column(left.end_point),
        end_column=parsed.char_column(right.start_point),
    )


def decision_position(node: Node, decision_type: DecisionType, parsed: ParsedSource) -> Position:
    """Where a decision point of ``decision_type`` at ``node`` is reported."""
    if decision_type in (DecisionType.AND, DecisionType.OR, DecisionType.NULLISH):
        position = _logical_position(node, parsed)
        if position is not None:
            return position

    start_row = node.start_point[0]
    line = start_row + 1
    if start_row == node.end_point[0]:
        return Position(
            line=line,
            column=parsed.char_column(node.start_point),
            end_column=parsed.char_column(node.end_point),
        )
    if decision_type == DecisionType.TERNARY:
        span = LineSpan(
            line=line,
            column=parsed.char_column(node.start_point),
            end_column=len(parsed.line_text(start_row)),
        )
        return Position(line=line, lines=(span,))
    return Position(line=line)
