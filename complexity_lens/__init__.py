"""
Complexity Lens: function boundaries and decision points for JavaScript and
TypeScript sources.

Given the functions a linter reported (line plus node kind), computes the
line span of each function body and the decision points that make up its
cyclomatic complexity, attributed to the innermost reported function.
"""

from complexity_lens.analysis import FileAnalysis, SourceFile, analyze_source, analyze_sources
from complexity_lens.boundaries import find_function_boundaries
from complexity_lens.breakdown import ComplexityBreakdown, aggregate, aggregate_all
from complexity_lens.config import AnalysisConfig
from complexity_lens.decisions import (
    DecisionPoint,
    DecisionPointExtractor,
    DecisionType,
    LineSpan,
    extract_decision_points,
)
from complexity_lens.types import FunctionBoundary, FunctionDescriptor, FunctionNodeType, Variant

__version__ = "0.1.0"

__all__ = [
    "AnalysisConfig",
    "ComplexityBreakdown",
    "DecisionPoint",
    "DecisionPointExtractor",
    "DecisionType",
    "FileAnalysis",
    "FunctionBoundary",
    "FunctionDescriptor",
    "FunctionNodeType",
    "LineSpan",
    "SourceFile",
    "Variant",
    "aggregate",
    "aggregate_all",
    "analyze_source",
    "analyze_sources",
    "extract_decision_points",
    "find_function_boundaries",
]
