"""
Decision-point extraction.

- DecisionType / DecisionPoint / LineSpan result types
- Function matching between tree-sitter nodes and reported functions
- Classification with the classic/modified switch convention
"""

from .classify import candidate_kinds, classify
from .extractor import DecisionPointExtractor, extract_decision_points
from .matching import AstFunction, collect_function_nodes, match_functions, match_line
from .params import is_default_parameter
from .parent_map import build_parent_map
from .types import DecisionPoint, DecisionType, LineSpan

__all__ = [
    "AstFunction",
    "DecisionPoint",
    "DecisionPointExtractor",
    "DecisionType",
    "LineSpan",
    "build_parent_map",
    "candidate_kinds",
    "classify",
    "collect_function_nodes",
    "extract_decision_points",
    "is_default_parameter",
    "match_functions",
    "match_line",
]
