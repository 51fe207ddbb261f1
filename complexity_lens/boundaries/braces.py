"""Body-end detection once a function's braces balance.

A body that closes on ``}`` is not always finished on that line: React hooks
and timers put a dependency array or a delay after the callback, sometimes on
the following line. These helpers decide which line really ends the function.
"""

from __future__ import annotations

import re

from complexity_lens.constants import ASSIGNMENT_GUARD_LOOKBACK, CALLBACK_TAIL_LOOKAHEAD
from complexity_lens.types.core import FunctionNodeType

from .scanner import ScanState, scan_line

DEPENDENCY_ARRAY_TAIL = re.compile(r"}\s*,\s*\[")
TIMER_DELAY_TAIL = re.compile(r"}\s*,\s*\d+")
ASSIGNED_ARROW = re.compile(r"^\s*(const|let|var)\s+\w+\s*=.*=>")


def callback_tail(lines: list[str], index: int) -> tuple[bool, bool]:
    """Detect ``}, [deps]`` and ``}, 1000`` tails after the closing brace.

    The tail may continue on the next line, so the rest of the current line
    (from its first ``}``) is joined to the following line before matching.

    Returns:
        (has_dependency_array, has_timer_delay)
    """
    line = lines[index]
    brace = line.find("}")
    rest = line[brace:] if brace != -1 else line
    following = lines[index + 1] if index + 1 < len(lines) else ""
    combined = f"{rest} {following}"
    return bool(DEPENDENCY_ARRAY_TAIL.search(combined)), bool(TIMER_DELAY_TAIL.search(combined))


def find_dependency_array_end(lines: list[str], index: int) -> int | None:
    """1-based line of the first ``]`` within the lookahead window."""
    for k in range(index, min(index + CALLBACK_TAIL_LOOKAHEAD, len(lines))):
        if "]" in lines[k]:
            return k + 1
    return None


def find_timer_callback_end(lines: list[str], index: int) -> int | None:
    """1-based line closing a ``setTimeout(() => {...}, delay)`` call."""
    for k in range(index, min(index + CALLBACK_TAIL_LOOKAHEAD, len(lines))):
        line = lines[k]
        if ")" in line and (";" in line or k == index + 1):
            return k + 1
    return None


def closes_assignment(lines: list[str], index: int) -> bool:
    """Whether a recent line assigns an arrow to a ``const``/``let``/``var``."""
    window = lines[max(0, index - ASSIGNMENT_GUARD_LOOKBACK):index]
    return any(ASSIGNED_ARROW.match(line.strip()) for line in window)


def resolve_body_end(
    lines: list[str],
    index: int,
    node_type: FunctionNodeType | None = None,
) -> int | None:
    """Decide where a body whose braces just balanced on ``lines[index]`` ends.

    Returns:
        The 1-based end line, or None if scanning should continue.
    """
    has_dependencies, has_delay = callback_tail(lines, index)
    if node_type == FunctionNodeType.FUNCTION_DECLARATION and has_dependencies:
        # A hook callback closing inside a declaration, not the declaration itself
        return None

    trimmed = lines[index].strip()
    if trimmed.endswith("};") and closes_assignment(lines, index):
        return index + 1
    if has_dependencies:
        return find_dependency_array_end(lines, index)
    if has_delay:
        return find_timer_callback_end(lines, index)
    return index + 1


def scan_body(
    lines: list[str],
    first_index: int,
    brace_count: int,
    node_type: FunctionNodeType | None = None,
    state: ScanState | None = None,
) -> int | None:
    """Brace-count ``lines[first_index:]`` until the body closes.

    Args:
        lines: Source lines.
        first_index: 0-based index of the first line to count.
        brace_count: Braces already open when scanning starts.
        node_type: Reported kind of the function being bounded.
        state: Scanner state carried in from the previous line.

    Returns:
        The 1-based end line, or None if the braces never balance.
    """
    for index in range(first_index, len(lines)):
        scan = scan_line(lines[index], state)
        state = scan.state
        brace_count += scan.delta
        if brace_count == 0 and scan.closes > 0:
            end = resolve_body_end(lines, index, node_type)
            if end is not None:
                return end
    return None
