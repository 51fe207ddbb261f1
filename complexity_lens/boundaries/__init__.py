"""
Function boundary detection.

Line-heuristic span detection for reported functions, built on a
comment/string/regex aware character scanner.
"""

from .arrow import find_arrow_end, find_arrow_start
from .engine import find_function_boundaries
from .named import NAMED_START_PATTERNS, find_end_fallback, find_named_end, find_named_start
from .scanner import CharContext, CharStep, LineScan, ScanState, scan_char, scan_line

__all__ = [
    "NAMED_START_PATTERNS",
    "CharContext",
    "CharStep",
    "LineScan",
    "ScanState",
    "find_arrow_end",
    "find_arrow_start",
    "find_end_fallback",
    "find_function_boundaries",
    "find_named_end",
    "find_named_start",
    "scan_char",
    "scan_line",
]
