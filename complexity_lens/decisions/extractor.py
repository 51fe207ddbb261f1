"""
Decision-point extractor.

Parses a file with tree-sitter, matches its function nodes to the reported
functions, and attributes every decision point to the innermost reported
function that contains it.

Usage:
    extractor = DecisionPointExtractor(variant=Variant.CLASSIC)
    points = extractor.extract(source, descriptors, "src/app.ts")
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from complexity_lens.parsing.tree_sitter_wrapper import ParsedSource, parse_source, walk
from complexity_lens.types.core import FunctionDescriptor, Variant, coerce_descriptors
from complexity_lens.types.errors import SourceParseError
from complexity_lens.utils.intervals import find_innermost
from complexity_lens.utils.logger import logger

from .classify import candidate_kinds, classify
from .matching import AstFunction, collect_function_nodes, match_functions
from .parent_map import build_parent_map
from .positions import decision_position
from .types import DecisionPoint

Descriptors = Sequence[FunctionDescriptor] | Sequence[Mapping[str, Any]]


class DecisionPointExtractor:
    """Extracts decision points for one switch-counting variant.

    Holds no per-file state; one instance can serve any number of files.
    """

    def __init__(self, variant: Variant | str = Variant.CLASSIC) -> None:
        self.variant = Variant.coerce(variant)

    def extract(
        self,
        source: str,
        descriptors: Descriptors,
        file_path: str | None = None,
    ) -> list[DecisionPoint]:
        """
        Extract decision points in document order.

        Args:
            source: Full source text.
            descriptors: Reported functions, as dataclasses or wire dicts.
            file_path: Used to choose the grammar and in log records.

        Returns:
            Decision points, or an empty list when the source does not parse
            cleanly or no reported function matches an AST function.
        """
        functions_reported = coerce_descriptors(list(descriptors))
        if not functions_reported:
            return []

        try:
            parsed = parse_source(source, file_path)
        except SourceParseError as e:
            logger.warning("Skipping decision points for {}: {}", file_path or "<source>", e)
            return []

        functions = collect_function_nodes(parsed)
        matches = match_functions(functions, functions_reported, parsed)
        if not matches:
            logger.debug("No reported function matched an AST function in {}", file_path or "<source>")
            return []

        return self._collect(parsed, functions, matches)

    def _collect(
        self,
        parsed: ParsedSource,
        functions: list[AstFunction],
        matches: dict[int, int],
    ) -> list[DecisionPoint]:
        parents = build_parent_map(parsed.root)
        kinds = candidate_kinds(self.variant)
        points: list[DecisionPoint] = []

        for node in walk(parsed.root):
            if node.type not in kinds:
                continue
            decision_type = classify(node, parents, self.variant)
            if decision_type is None:
                continue

            owner = find_innermost((node.start_byte, node.end_byte), functions, lambda f: f.span)
            if owner is None:
                continue
            function_line = matches.get(owner.node.id)
            if function_line is None:
                continue

            position = decision_position(node, decision_type, parsed)
            points.append(
                DecisionPoint(
                    type=decision_type,
                    line=position.line,
                    function_line=function_line,
                    column=position.column,
                    end_column=position.end_column,
                    lines=position.lines,
                )
            )
        return points


async def extract_decision_points(
    source: str,
    descriptors: Descriptors,
    file_path: str | None = None,
    variant: Variant | str = Variant.CLASSIC,
) -> list[DecisionPoint]:
    """Async entry point; the work itself never suspends."""
    return DecisionPointExtractor(variant).extract(source, descriptors, file_path)
