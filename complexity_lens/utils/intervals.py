"""Innermost-enclosing-interval queries.

Every "which function owns this position" question in the package reduces to
the same query: among candidate intervals containing a target interval, pick
the one that starts last. Decision-point attribution asks it with AST byte
spans, and the display-name hierarchy asks it with line boundaries. Per-file
candidate counts are tens to low hundreds, so a linear scan is enough.
"""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

T = TypeVar("T")

Span = tuple[int, int]


def encloses(outer: Span, inner: Span, *, strict_start: bool = False) -> bool:
    """Whether ``outer`` contains ``inner``.

    The end is always inclusive. With ``strict_start`` the outer span must
    start before ``inner`` does.
    """
    if strict_start:
        return outer[0] < inner[0] and outer[1] >= inner[1]
    return outer[0] <= inner[0] and outer[1] >= inner[1]


def find_innermost(
    target: Span,
    candidates: Iterable[T],
    span_of: Callable[[T], Span],
    *,
    strict_start: bool = False,
    exclude: Callable[[T], bool] | None = None,
) -> T | None:
    """Return the enclosing candidate that starts last.

    For properly nested candidates this is the smallest one. Candidates that
    start on the same position go to the earlier-listed one.

    Args:
        target: (start, end) of the position being attributed.
        candidates: Objects carrying a span.
        span_of: Extracts (start, end) from a candidate.
        strict_start: Require the candidate to start before ``target``.
        exclude: Skip candidates for which this returns True.
    """
    best: T | None = None
    best_start: int | None = None
    for candidate in candidates:
        if exclude is not None and exclude(candidate):
            continue
        span = span_of(candidate)
        if not encloses(span, target, strict_start=strict_start):
            continue
        if best_start is None or span[0] > best_start:
            best = candidate
            best_start = span[0]
    return best
