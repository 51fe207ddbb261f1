"""Hierarchical display names from boundary nesting.

A callback nested in another reported function is shown as
``Parent → leaf``, recursively, so ``Component → useEffect → return`` reads
top-down. Nesting comes only from boundaries; names are never re-parsed.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Sequence

from complexity_lens.constants import PLACEHOLDER_NAMES
from complexity_lens.types.core import FunctionBoundary, FunctionDescriptor, coerce_descriptors
from complexity_lens.utils.intervals import find_innermost

SEPARATOR = " → "

_TRAILING_PARENTHETICAL = re.compile(r"\s*\([^)]+\)\s*$")
_TRAILING_SEGMENT = re.compile(r"\s*→\s*[^→]*$")
_LAST_PARENTHETICAL = re.compile(r"\(([^)]+)\)\s*$")


def get_base_function_name(name: str | None) -> str:
    """Strip trailing ``(callback)`` and ``→ child`` segments from a display name."""
    if not name:
        return "unknown"
    base = str(name).strip()
    previous = None
    while previous != base:
        previous = base
        base = _TRAILING_SEGMENT.sub("", _TRAILING_PARENTHETICAL.sub("", base)).strip()
    return base or "unknown"


def leaf_name(display_name: str) -> str:
    """Last parenthetical of a name such as ``render (map)``, else the whole name."""
    match = _LAST_PARENTHETICAL.search(display_name)
    return match.group(1) if match else display_name


def is_valid_segment(name: str | None) -> bool:
    return bool(name) and name not in PLACEHOLDER_NAMES


def is_cleanup_callback(name: str | None) -> bool:
    """Returned callbacks (effect cleanups) never contain other reported functions."""
    return bool(name) and (name == "return" or "return callback" in name)


def find_parent_line(line: int, boundaries: Mapping[int, FunctionBoundary]) -> int | None:
    """Reported line of the closest boundary that encloses the one at ``line``.

    A parent starts strictly before the child and ends at or after it.
    """
    own = boundaries.get(line)
    if own is None:
        return None
    parent = find_innermost(
        (own.start, own.end),
        boundaries.items(),
        lambda item: (item[1].start, item[1].end),
        strict_start=True,
        exclude=lambda item: item[0] == line,
    )
    return parent[0] if parent is not None else None


def _display_name(
    line: int,
    names: Mapping[int, str],
    boundaries: Mapping[int, FunctionBoundary],
    visited: frozenset[int],
) -> str:
    name = names.get(line) or "unknown"
    if line in visited:
        return name

    parent_line = find_parent_line(line, boundaries)
    if parent_line is None or parent_line not in names:
        return name
    if is_cleanup_callback(names[parent_line]):
        return name

    parent_name = _display_name(parent_line, names, boundaries, visited | {line})
    if not is_valid_segment(get_base_function_name(parent_name)):
        return name

    leaf = leaf_name(name)
    if is_valid_segment(leaf):
        return f"{parent_name}{SEPARATOR}{leaf}"
    return name


def build_display_names(
    descriptors: Sequence[FunctionDescriptor] | Sequence[Mapping[str, Any]],
    boundaries: Mapping[int, FunctionBoundary],
) -> dict[int, str]:
    """
    Hierarchical display name per reported line.

    When several descriptors share a line the one with the highest
    complexity names it.
    """
    chosen: dict[int, FunctionDescriptor] = {}
    for descriptor in coerce_descriptors(list(descriptors)):
        existing = chosen.get(descriptor.line)
        if existing is None or (descriptor.complexity or 0) > (existing.complexity or 0):
            chosen[descriptor.line] = descriptor

    names = {line: d.function_name for line, d in chosen.items()}
    return {
        line: _display_name(line, names, boundaries, frozenset())
        for line in sorted(names)
    }
