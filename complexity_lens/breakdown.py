"""Per-function complexity breakdown from decision points."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from complexity_lens.constants import DEFAULT_BASE_COMPLEXITY
from complexity_lens.decisions.types import DecisionPoint, DecisionType
from complexity_lens.types.core import FunctionDescriptor, coerce_descriptors

DecisionPointLike = DecisionPoint | Mapping[str, Any]


def _point_type(point: DecisionPointLike) -> str:
    if isinstance(point, DecisionPoint):
        return point.type.value
    return str(point.get("type", ""))


def _point_function_line(point: DecisionPointLike) -> Any:
    if isinstance(point, DecisionPoint):
        return point.function_line
    return point.get("functionLine", point.get("function_line"))


def empty_breakdown() -> dict[str, int]:
    """One zeroed counter per decision type, in declaration order."""
    return {decision_type.value: 0 for decision_type in DecisionType}


@dataclass
class ComplexityBreakdown:
    """Decision-point counts for one function."""

    function_line: int
    base: int = DEFAULT_BASE_COMPLEXITY
    breakdown: dict[str, int] = field(default_factory=empty_breakdown)
    decision_points: list[DecisionPointLike] = field(default_factory=list)

    @property
    def calculated_total(self) -> int:
        return self.base + sum(self.breakdown.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "breakdown": {"base": self.base, **self.breakdown},
            "calculatedTotal": self.calculated_total,
            "decisionPoints": [
                p.to_dict() if isinstance(p, DecisionPoint) else dict(p) for p in self.decision_points
            ],
        }


def aggregate(
    function_line: int,
    decision_points: Iterable[DecisionPointLike],
    base: int = DEFAULT_BASE_COMPLEXITY,
) -> ComplexityBreakdown:
    """
    Count the decision points attributed to ``function_line`` by type.

    Types outside the sixteen known ones are kept in ``decision_points`` but
    never counted. A falsy ``base`` falls back to 1.
    """
    result = ComplexityBreakdown(function_line=function_line, base=base or DEFAULT_BASE_COMPLEXITY)
    for point in decision_points:
        if _point_function_line(point) != function_line:
            continue
        result.decision_points.append(point)
        point_type = _point_type(point)
        if point_type in result.breakdown:
            result.breakdown[point_type] += 1
    return result


def aggregate_all(
    descriptors: Sequence[FunctionDescriptor] | Sequence[Mapping[str, Any]],
    decision_points: Sequence[DecisionPointLike],
    base: int = DEFAULT_BASE_COMPLEXITY,
) -> dict[int, ComplexityBreakdown]:
    """One breakdown per distinct reported line, in first-seen order."""
    breakdowns: dict[int, ComplexityBreakdown] = {}
    for descriptor in coerce_descriptors(list(descriptors)):
        if descriptor.line not in breakdowns:
            breakdowns[descriptor.line] = aggregate(descriptor.line, decision_points, base)
    return breakdowns
