"""
Core types shared by the boundary engine and the decision-point extractor.

Functions are addressed the way the linter reports them: by the 1-based line
of the report plus the ESTree node kind. Those descriptors are ground truth;
nothing in the analysis re-derives them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Mapping

from complexity_lens.utils.intervals import encloses as span_encloses
from complexity_lens.utils.logger import logger

from .errors import DescriptorError, ErrorContext


class FunctionNodeType(StrEnum):
    """ESTree node kinds a complexity report can point at."""

    FUNCTION_DECLARATION = "FunctionDeclaration"
    FUNCTION_EXPRESSION = "FunctionExpression"
    ARROW_FUNCTION_EXPRESSION = "ArrowFunctionExpression"
    METHOD_DEFINITION = "MethodDefinition"

    @classmethod
    def coerce(cls, value: Any) -> FunctionNodeType:
        """Map a raw node type to a member; missing or unknown kinds are declarations."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return cls.FUNCTION_DECLARATION


class Variant(StrEnum):
    """Switch counting convention.

    classic counts every ``case`` with a test; modified counts each
    ``switch`` statement once.
    """

    CLASSIC = "classic"
    MODIFIED = "modified"

    @classmethod
    def coerce(cls, value: Any) -> Variant:
        """Anything other than ``modified`` means classic."""
        return cls.MODIFIED if str(value) == cls.MODIFIED.value else cls.CLASSIC


@dataclass(frozen=True)
class FunctionDescriptor:
    """A function as reported by the linter."""

    line: int
    function_name: str = "unknown"
    node_type: FunctionNodeType = FunctionNodeType.FUNCTION_DECLARATION
    complexity: int | None = None
    column: int = 1
    file_path: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.line, bool) or not isinstance(self.line, int):
            raise ValueError("line must be an integer")
        if self.line < 1:
            raise ValueError("line must be >= 1")
        object.__setattr__(self, "node_type", FunctionNodeType.coerce(self.node_type))

    @property
    def is_arrow(self) -> bool:
        return self.node_type == FunctionNodeType.ARROW_FUNCTION_EXPRESSION

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FunctionDescriptor:
        """Build a descriptor from the linter's camelCase wire shape.

        Raises:
            DescriptorError: If ``line`` is missing or not a positive integer.
        """
        raw_line = data.get("line")
        try:
            line = int(raw_line)  # type: ignore[arg-type]
            complexity = data.get("complexity")
            return cls(
                line=line,
                function_name=str(data.get("functionName") or data.get("function_name") or "unknown"),
                node_type=FunctionNodeType.coerce(data.get("nodeType") or data.get("node_type")),
                complexity=int(complexity) if complexity is not None else None,
                column=int(data.get("column") or 1),
                file_path=data.get("file") or data.get("file_path"),
            )
        except (TypeError, ValueError) as e:
            raise DescriptorError(
                f"Invalid function descriptor: {dict(data)!r}",
                context=ErrorContext(
                    operation="decode_descriptor",
                    component="types",
                    additional_info={"line": raw_line},
                ),
                original_error=e,
            ) from e

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "line": self.line,
            "functionName": self.function_name,
            "nodeType": self.node_type.value,
        }
        if self.complexity is not None:
            result["complexity"] = self.complexity
        if self.file_path is not None:
            result["file"] = self.file_path
        return result


def coerce_descriptors(
    descriptors: list[FunctionDescriptor] | list[Mapping[str, Any]],
) -> list[FunctionDescriptor]:
    """Accept descriptors as dataclasses or wire dicts.

    A dict that cannot be decoded is logged and dropped; the rest are kept
    in their original order.
    """
    result: list[FunctionDescriptor] = []
    for d in descriptors:
        if isinstance(d, FunctionDescriptor):
            result.append(d)
            continue
        try:
            result.append(FunctionDescriptor.from_dict(d))
        except DescriptorError as e:
            logger.warning("Skipping function descriptor: {}", e)
    return result


@dataclass(frozen=True)
class FunctionBoundary:
    """Line span of a function body, 1-based and inclusive."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 1:
            raise ValueError("start must be >= 1")
        if self.end < self.start:
            raise ValueError("end must be >= start")

    @property
    def line_count(self) -> int:
        """Number of lines in this span."""
        return self.end - self.start + 1

    def contains(self, line: int) -> bool:
        """Check if a line number is within this span (inclusive)."""
        return self.start <= line <= self.end

    def encloses(self, other: FunctionBoundary) -> bool:
        """True when ``other`` starts strictly later and ends no later."""
        return span_encloses((self.start, self.end), (other.start, other.end), strict_start=True)

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}
