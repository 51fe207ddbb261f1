"""
Function boundary engine.

Computes the inclusive line span of every function the linter reported.
Works on raw text with line heuristics, so it still produces a span for files
tree-sitter cannot parse cleanly. It never raises for malformed input:
every decodable descriptor line gets exactly one boundary, with ``start <= end``.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from complexity_lens.types.core import FunctionBoundary, FunctionDescriptor, coerce_descriptors
from complexity_lens.utils.logger import logger

from .arrow import find_arrow_end, find_arrow_start
from .named import find_end_fallback, find_named_end, find_named_start


def _resolve_boundary(lines: list[str], descriptor: FunctionDescriptor) -> FunctionBoundary:
    line = descriptor.line
    end: int | None = None

    if descriptor.is_arrow:
        start = find_arrow_start(lines, line)
        end = find_arrow_end(lines, start, descriptor.node_type)
    else:
        start = find_named_start(lines, line, descriptor.function_name)

    if end is None:
        end = find_named_end(lines, start, descriptor.node_type)
    if end is None:
        end = find_end_fallback(lines, start)
        logger.debug(
            "No body found for {} at line {}; fallback end {}",
            descriptor.function_name,
            line,
            end,
        )

    return FunctionBoundary(start=start, end=max(end, start))


def find_function_boundaries(
    source: str,
    descriptors: Sequence[FunctionDescriptor] | Sequence[Mapping[str, Any]],
) -> dict[int, FunctionBoundary]:
    """
    Compute the span of each reported function.

    Args:
        source: Full source text of the file.
        descriptors: Reported functions, as dataclasses or wire dicts.

    Returns:
        Boundaries keyed by reported line. When two descriptors share a
        line the first one listed decides the boundary.
    """
    lines = source.split("\n")
    boundaries: dict[int, FunctionBoundary] = {}
    for descriptor in coerce_descriptors(list(descriptors)):
        if descriptor.line in boundaries:
            continue
        boundaries[descriptor.line] = _resolve_boundary(lines, descriptor)
    return boundaries
