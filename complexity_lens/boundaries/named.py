"""Boundaries for named functions, plus the shared last-resort fallback."""

from __future__ import annotations

import re

from complexity_lens.constants import FALLBACK_MAX_SPAN, NAMED_START_LOOKBACK
from complexity_lens.types.core import FunctionNodeType

from .braces import resolve_body_end, scan_body
from .scanner import scan_line

# Declaration shapes, in priority order. Group 1 is the declared name.
NAMED_START_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?:export\s+)?function\s+([a-zA-Z_$][a-zA-Z0-9_$]*)\s*[<(]"),
    re.compile(r"const\s+([a-zA-Z_$][a-zA-Z0-9_$]*)\s*=\s*(?:\([^)]*\)\s*)?(?:=>|function)"),
    re.compile(r"export\s+const\s+([a-zA-Z_$][a-zA-Z0-9_$]*)\s*=\s*(?:\([^)]*\)\s*)?(?:=>|function)"),
    re.compile(r"export\s+default\s+function\s+([a-zA-Z_$][a-zA-Z0-9_$]*)\s*[<(]"),
    re.compile(r"(?:export\s+default\s+|const\s+)([A-Z][a-zA-Z0-9_$]*)\s*[:=]\s*(?:\([^)]*\)\s*)?=>"),
)

BODY_OPEN = re.compile(r"\)\s*[:\w\s<>\[\]|'\"]*\s*\{")
FUNCTION_DECLARATION_LINE = re.compile(r"^\s*(?:export\s+)?function\s+\w+")
ARROW_BODY_OPEN = re.compile(r"=>\s*\{")
EXPRESSION_END = re.compile(r"^[;}]")


def find_named_start(lines: list[str], function_line: int, function_name: str) -> int:
    """Walk back from the reported line to the line declaring ``function_name``.

    Returns the reported line itself when no declaration is found.
    """
    lowest = max(0, function_line - NAMED_START_LOOKBACK)
    for index in range(min(function_line, len(lines)) - 1, lowest - 1, -1):
        for pattern in NAMED_START_PATTERNS:
            match = pattern.search(lines[index])
            if match and match.group(1) == function_name:
                return index + 1
    return function_line


def is_function_declaration_line(line: str) -> bool:
    return (
        bool(FUNCTION_DECLARATION_LINE.match(line))
        and "(" in line
        and "{" in line
        and "=>" not in line
    )


def opens_body(line: str) -> bool:
    """Whether a signature line also opens the function body."""
    return (
        bool(BODY_OPEN.search(line))
        or is_function_declaration_line(line)
        or bool(ARROW_BODY_OPEN.search(line))
    )


def body_text(line: str) -> str:
    """The part of a body-opening line that belongs to the body.

    Braces inside the parameter list (destructuring, inline object types)
    are skipped when the last ``{`` follows the last ``)``.
    """
    paren_close = line.rfind(")")
    if paren_close != -1 and line.rfind("{") > paren_close:
        return line[paren_close:]
    return line


def _end_of_expression(lines: list[str], index: int) -> int:
    """End of an arrow with an expression body: the next line starting ``;`` or ``}``."""
    for k in range(index + 1, len(lines)):
        if EXPRESSION_END.match(lines[k].strip()):
            return k + 1
    return len(lines)


def _scan_from_body_line(
    lines: list[str],
    index: int,
    node_type: FunctionNodeType | None,
) -> int | None:
    scan = scan_line(body_text(lines[index]))
    if scan.delta <= 0 and scan.closes > 0:
        end = resolve_body_end(lines, index, node_type)
        if end is not None:
            return end
    return scan_body(lines, index + 1, scan.delta, node_type, scan.state)


def find_named_end(
    lines: list[str],
    start: int,
    node_type: FunctionNodeType | None = None,
) -> int | None:
    """Scan forward from ``start`` for the end of a named function's body.

    Returns:
        The 1-based end line, or None if no body was found.
    """
    type_braces = 0
    for index in range(start - 1, len(lines)):
        line = lines[index]
        if type_braces <= 0 and opens_body(line):
            return _scan_from_body_line(lines, index, node_type)
        if type_braces <= 0 and "=>" in line and "{" not in line:
            return _end_of_expression(lines, index)
        # Braces of an inline type annotation seen before the body
        if "{" in line:
            type_braces += line.count("{") - line.count("}")
    return None


def find_end_fallback(lines: list[str], start: int) -> int:
    """Last-resort end: brace-count from the first ``)...{`` line after ``start``."""
    for index in range(max(start - 1, 0), len(lines)):
        if BODY_OPEN.search(lines[index]):
            end = _scan_from_body_line(lines, index, None)
            if end is not None:
                return end
            break
    return min(start + FALLBACK_MAX_SPAN, len(lines))
