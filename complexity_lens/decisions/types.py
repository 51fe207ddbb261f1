"""Decision-point types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class DecisionType(StrEnum):
    """Constructs that add one to cyclomatic complexity."""

    IF = "if"
    ELSE_IF = "else if"
    FOR = "for"
    FOR_OF = "for...of"
    FOR_IN = "for...in"
    WHILE = "while"
    DO_WHILE = "do...while"
    SWITCH = "switch"
    CASE = "case"
    CATCH = "catch"
    TERNARY = "ternary"
    AND = "&&"
    OR = "||"
    NULLISH = "??"
    OPTIONAL_CHAIN = "?."
    DEFAULT_PARAMETER = "default parameter"


@dataclass(frozen=True)
class LineSpan:
    """Column range on one line; columns are 0-based and half-open."""

    line: int
    column: int
    end_column: int

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "column": self.column, "endColumn": self.end_column}


@dataclass(frozen=True)
class DecisionPoint:
    """One decision point attributed to the function reported at ``function_line``."""

    type: DecisionType
    line: int
    function_line: int
    column: int | None = None
    end_column: int | None = None
    lines: tuple[LineSpan, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "type": self.type.value,
            "line": self.line,
            "functionLine": self.function_line,
        }
        if self.column is not None:
            result["column"] = self.column
        if self.end_column is not None:
            result["endColumn"] = self.end_column
        if self.lines:
            result["lines"] = [span.to_dict() for span in self.lines]
        return result
