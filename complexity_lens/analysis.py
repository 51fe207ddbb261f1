"""
File analysis orchestrator.

Runs the boundary engine and the decision-point extractor side by side on one
file and combines their results with breakdowns and display names. The two
engines consume the same descriptors and never each other's output.

Usage:
    analysis = analyze_source(source, descriptors, "src/App.tsx")
    for line, breakdown in analysis.breakdowns.items():
        print(analysis.display_names[line], breakdown.calculated_total)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from complexity_lens.boundaries.engine import find_function_boundaries
from complexity_lens.breakdown import ComplexityBreakdown, aggregate_all
from complexity_lens.config import AnalysisConfig
from complexity_lens.constants import DEFAULT_COMPLEXITY_THRESHOLD
from complexity_lens.decisions.extractor import DecisionPointExtractor
from complexity_lens.decisions.types import DecisionPoint
from complexity_lens.hierarchy import build_display_names
from complexity_lens.types.core import FunctionBoundary, FunctionDescriptor, coerce_descriptors
from complexity_lens.types.errors import ComplexityLensError
from complexity_lens.utils.logger import logger, with_file_context


@dataclass
class FileAnalysis:
    """Everything computed for one file."""

    file_path: str | None
    descriptors: list[FunctionDescriptor]
    boundaries: dict[int, FunctionBoundary] = field(default_factory=dict)
    decision_points: list[DecisionPoint] = field(default_factory=list)
    breakdowns: dict[int, ComplexityBreakdown] = field(default_factory=dict)
    display_names: dict[int, str] = field(default_factory=dict)
    complexity_threshold: int = DEFAULT_COMPLEXITY_THRESHOLD

    def complexity_of(self, descriptor: FunctionDescriptor) -> int:
        """Reported complexity, or the computed total when none was reported."""
        if descriptor.complexity is not None:
            return descriptor.complexity
        breakdown = self.breakdowns.get(descriptor.line)
        return breakdown.calculated_total if breakdown else 0

    @property
    def functions_above_threshold(self) -> list[FunctionDescriptor]:
        return [d for d in self.descriptors if self.complexity_of(d) > self.complexity_threshold]

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file_path,
            "functions": [
                {
                    **d.to_dict(),
                    "displayName": self.display_names.get(d.line, d.function_name),
                    "boundary": self.boundaries[d.line].to_dict() if d.line in self.boundaries else None,
                    "aboveThreshold": self.complexity_of(d) > self.complexity_threshold,
                }
                for d in self.descriptors
            ],
            "decisionPoints": [p.to_dict() for p in self.decision_points],
            "breakdowns": {str(line): b.to_dict() for line, b in self.breakdowns.items()},
        }


@dataclass(frozen=True)
class SourceFile:
    """One file queued for analysis."""

    source: str
    descriptors: Sequence[FunctionDescriptor] | Sequence[Mapping[str, Any]]
    file_path: str | None = None


def analyze_source(
    source: str,
    descriptors: Sequence[FunctionDescriptor] | Sequence[Mapping[str, Any]],
    file_path: str | None = None,
    config: AnalysisConfig | None = None,
) -> FileAnalysis:
    """Analyse one file. Descriptor dicts that cannot be decoded are skipped."""
    config = config or AnalysisConfig()
    reported = coerce_descriptors(list(descriptors))

    with with_file_context(file_path or "<source>"):
        boundaries = find_function_boundaries(source, reported)
        points = DecisionPointExtractor(config.variant).extract(source, reported, file_path)
        breakdowns = aggregate_all(reported, points, config.base_complexity)
        display_names = build_display_names(reported, boundaries)
        logger.debug(
            "Analysed {} functions, {} decision points",
            len(reported),
            len(points),
        )

    return FileAnalysis(
        file_path=file_path,
        descriptors=reported,
        boundaries=boundaries,
        decision_points=points,
        breakdowns=breakdowns,
        display_names=display_names,
        complexity_threshold=config.complexity_threshold,
    )


def group_by_file(descriptors: Iterable[FunctionDescriptor]) -> dict[str, list[FunctionDescriptor]]:
    """Group descriptors by their file path, keeping report order within a file."""
    grouped: dict[str, list[FunctionDescriptor]] = {}
    for descriptor in descriptors:
        grouped.setdefault(descriptor.file_path or "", []).append(descriptor)
    return grouped


async def analyze_sources(
    items: Iterable[SourceFile],
    config: AnalysisConfig | None = None,
) -> list[FileAnalysis]:
    """
    Analyse many files concurrently, one task per file.

    A file that fails is logged and left out; the others still complete.
    """
    config = config or AnalysisConfig()

    async def _analyze(item: SourceFile) -> FileAnalysis | None:
        try:
            return analyze_source(item.source, item.descriptors, item.file_path, config)
        except ComplexityLensError as e:
            logger.warning("Skipping {}: {}", item.file_path or "<source>", e)
            return None

    results = await asyncio.gather(*(_analyze(item) for item in items))
    return [result for result in results if result is not None]
