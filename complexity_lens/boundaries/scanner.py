"""Character scanner: comment, string and regex aware brace counting.

The scanner is an immutable ``ScanState`` plus a pure ``scan_char``
transition, so each transition can be tested on its own. ``scan_line`` folds
the transition over one line of source and reports how many braces it opened
and closed outside strings, regex literals and comments.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

QUOTE_CHARS = ("'", '"', "`")

# A `/` opens a regex literal when the two characters before it, stripped,
# are empty or end with one of these.
REGEX_PRECEDING_CHARS = ("=", "(", "[", ",")


@dataclass(frozen=True)
class ScanState:
    """Lexical state carried from one character to the next."""

    escape_next: bool = False
    in_string: bool = False
    string_char: str | None = None
    in_single_line_comment: bool = False
    in_multi_line_comment: bool = False
    in_regex: bool = False

    @property
    def is_code(self) -> bool:
        """True when braces at this position count."""
        return not (
            self.in_string
            or self.in_regex
            or self.in_single_line_comment
            or self.in_multi_line_comment
        )

    def at_line_end(self) -> ScanState:
        """State carried across a line break.

        Block comments and template literals may span lines; every other
        state ends with its line.
        """
        keep_template = self.in_string and self.string_char == "`"
        return ScanState(
            in_multi_line_comment=self.in_multi_line_comment,
            in_string=keep_template,
            string_char="`" if keep_template else None,
        )


@dataclass(frozen=True)
class CharContext:
    """Neighbourhood of the character being scanned."""

    prev_char: str = ""
    next_char: str = ""
    preceding: str = ""

    @classmethod
    def at(cls, line: str, index: int) -> CharContext:
        return cls(
            prev_char=line[index - 1] if index > 0 else "",
            next_char=line[index + 1] if index + 1 < len(line) else "",
            preceding=line[max(0, index - 2):index],
        )


@dataclass(frozen=True)
class CharStep:
    """Result of scanning one character."""

    state: ScanState
    brace_delta: int = 0
    skip_next: bool = False
    end_of_line: bool = False


def regex_may_start(preceding: str) -> bool:
    """Whether a `/` after ``preceding`` reads as the start of a regex literal."""
    stripped = preceding.strip()
    return stripped == "" or stripped.endswith(REGEX_PRECEDING_CHARS)


def scan_char(state: ScanState, char: str, ctx: CharContext) -> CharStep:
    """Advance the scanner by one character."""
    if state.escape_next:
        return CharStep(replace(state, escape_next=False))
    if char == "\\" and (state.in_string or state.in_regex):
        return CharStep(replace(state, escape_next=True))

    # Comments
    quoted = state.in_string or state.in_regex
    if char == "/" and ctx.next_char == "/" and not quoted and not state.in_multi_line_comment:
        return CharStep(replace(state, in_single_line_comment=True), end_of_line=True)
    if (
        char == "/"
        and ctx.next_char == "*"
        and not quoted
        and not state.in_single_line_comment
        and not state.in_multi_line_comment
    ):
        return CharStep(replace(state, in_multi_line_comment=True), skip_next=True)
    if char == "*" and ctx.next_char == "/" and state.in_multi_line_comment:
        return CharStep(replace(state, in_multi_line_comment=False), skip_next=True)
    if state.in_single_line_comment or state.in_multi_line_comment:
        return CharStep(state)

    # Strings
    if char in QUOTE_CHARS and not state.in_regex:
        if not state.in_string:
            return CharStep(replace(state, in_string=True, string_char=char))
        if char == state.string_char:
            return CharStep(replace(state, in_string=False, string_char=None))
        return CharStep(state)

    # Regex literals
    if char == "/":
        if (
            not state.in_regex
            and not state.in_string
            and ctx.prev_char not in ("/", "*")
            and regex_may_start(ctx.preceding)
        ):
            return CharStep(replace(state, in_regex=True))
        if state.in_regex and ctx.next_char not in ("/", "*"):
            return CharStep(replace(state, in_regex=False))

    if not state.in_regex and not state.in_string:
        if char == "{":
            return CharStep(state, brace_delta=1)
        if char == "}":
            return CharStep(state, brace_delta=-1)
    return CharStep(state)


@dataclass(frozen=True)
class LineScan:
    """Brace totals for one line and the state carried into the next."""

    opens: int
    closes: int
    state: ScanState

    @property
    def delta(self) -> int:
        return self.opens - self.closes


def scan_line(line: str, state: ScanState | None = None) -> LineScan:
    """Count code braces on ``line``, starting from ``state``."""
    current = state or ScanState()
    opens = 0
    closes = 0
    index = 0
    length = len(line)
    while index < length:
        step = scan_char(current, line[index], CharContext.at(line, index))
        current = step.state
        if step.brace_delta > 0:
            opens += 1
        elif step.brace_delta < 0:
            closes += 1
        if step.end_of_line:
            break
        index += 2 if step.skip_next else 1
    return LineScan(opens=opens, closes=closes, state=current.at_line_end())
