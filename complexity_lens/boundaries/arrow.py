"""Boundaries for arrow functions.

The linter reports an arrow at its ``=>`` line, which for a multi-line
parameter list is not where the declaration starts. The start is recovered by
walking back to the ``= (`` that opens the parameter list; the end is found by
dispatching on the shape of the body that follows the arrow.
"""

from __future__ import annotations

import re

from complexity_lens.constants import NAMED_START_LOOKBACK
from complexity_lens.types.core import FunctionNodeType

from .arrow_bodies import (
    find_jsx_return_end,
    find_single_expression_end,
    has_unmatched_brace_before,
    is_object_literal_return,
    is_single_line_body,
)
from .braces import resolve_body_end, scan_body
from .scanner import scan_line

# `= (` but not `==`, `!=`, `<=` or `>=` followed by a paren
ASSIGNMENT_OPEN_PAREN = re.compile(r"(?<![=!<>])=\s*\(")

# `)`, `})` or `])` closing a parameter list opened on an earlier line
CLOSES_PARAMETER_LIST = re.compile(r"^\s*[}\]]*\)")


def find_arrow_start(lines: list[str], function_line: int) -> int:
    """Line where the declaration of the arrow reported at ``function_line`` starts.

    Only an arrow whose line begins by closing a parameter list walks back;
    any other arrow starts on its own line.
    """
    index = function_line - 1
    if not 0 <= index < len(lines) or "=>" not in lines[index]:
        return function_line
    if not CLOSES_PARAMETER_LIST.match(lines[index]):
        return function_line

    lowest = max(0, index - NAMED_START_LOOKBACK)
    for k in range(index - 1, lowest - 1, -1):
        line = lines[k]
        if not line.strip():
            continue
        if "=>" in line:
            # Another arrow owns everything above
            break
        if ASSIGNMENT_OPEN_PAREN.search(line):
            return k + 1
    return function_line


def _end_from_arrow_line(
    lines: list[str],
    index: int,
    arrow_index: int,
    node_type: FunctionNodeType | None,
) -> int | None:
    line = lines[index]

    if line[arrow_index + 2:].strip().startswith("("):
        end = find_jsx_return_end(lines, index, arrow_index)
        if end is not None:
            return end

    brace_index = line.find("{", arrow_index + 2)
    if brace_index != -1:
        if is_single_line_body(line, arrow_index) or is_object_literal_return(
            line, arrow_index, brace_index
        ):
            return index + 1
        scan = scan_line(line[brace_index:])
        if scan.delta <= 0:
            if scan.closes == 0:
                # The brace was inside a string or comment
                return index + 1
            end = resolve_body_end(lines, index, node_type)
            if end is not None:
                return end
        return scan_body(lines, index + 1, scan.delta, node_type, scan.state)

    if index + 1 < len(lines) and lines[index + 1].strip().startswith("{"):
        return scan_body(lines, index + 1, 0, node_type)
    if has_unmatched_brace_before(line, arrow_index):
        return index + 1
    return find_single_expression_end(lines, index, arrow_index)


def find_arrow_end(
    lines: list[str],
    start: int,
    node_type: FunctionNodeType | None = None,
) -> int | None:
    """End line of the first arrow at or after ``start``, or None if undetermined."""
    for index in range(max(start - 1, 0), len(lines)):
        arrow_index = lines[index].find("=>")
        if arrow_index != -1:
            return _end_from_arrow_line(lines, index, arrow_index, node_type)
    return None
