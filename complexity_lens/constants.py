"""Shared constants and helpers for Complexity Lens.

Centralizes the scan bounds used by the boundary heuristics, the
extension-to-grammar map used by the tree-sitter parser, and
timezone-aware datetime helpers.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


# Lines searched backward from a reported line for a named declaration.
NAMED_START_LOOKBACK: int = 50

# Lines scanned forward when balancing a JSX-returning arrow's parens.
JSX_RETURN_SCAN_LIMIT: int = 50

# Lines scanned for a `}, [deps]` or `}, 1000)` tail after a body closes.
CALLBACK_TAIL_LOOKAHEAD: int = 3

# Lines searched backward for a `const x = ... =>` assignment when a
# body closes with `};`.
ASSIGNMENT_GUARD_LOOKBACK: int = 10

# Last-resort span when no body could be located at all.
FALLBACK_MAX_SPAN: int = 500

# Ancestor hops allowed while walking out of nested destructuring patterns.
MAX_PATTERN_DEPTH: int = 15

DEFAULT_BASE_COMPLEXITY: int = 1
DEFAULT_COMPLEXITY_THRESHOLD: int = 10

# tree-sitter grammar per file extension; anything else is parsed as
# JavaScript, whose grammar already accepts JSX.
GRAMMAR_BY_EXTENSION: dict[str, str] = {
    ".tsx": "tsx",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
}
DEFAULT_GRAMMAR: str = "javascript"

# Placeholder names that never take part in hierarchical display names.
PLACEHOLDER_NAMES: frozenset[str] = frozenset({"unknown", "anonymous"})
