"""End-of-body strategies for arrow functions, one per body shape."""

from __future__ import annotations

from complexity_lens.constants import JSX_RETURN_SCAN_LIMIT

SINGLE_LINE_BODY_ENDINGS = ("});", "};", "})")
EXPRESSION_TERMINATORS = (";", "}", ",")


def _jsx_terminator(lines: list[str], index: int, rest: str) -> int | None:
    """Accept a balanced ``)`` as the end of a JSX return, given what follows it."""
    next_char = rest[:1]
    if next_char == ")":
        return index + 1
    if next_char == "}" and index + 1 < len(lines) and lines[index + 1].strip().startswith(")"):
        return index + 2
    if rest.strip() in ("", ";", ","):
        return index + 1
    return None


def find_jsx_return_end(lines: list[str], index: int, arrow_index: int) -> int | None:
    """End of ``=> ( ... )``: the line where the opening paren is balanced."""
    line = lines[index]
    paren = line.find("(", arrow_index + 2)
    if paren == -1:
        return None

    depth = 1
    for j in range(index, min(index + JSX_RETURN_SCAN_LIMIT, len(lines))):
        text = line[paren + 1:] if j == index else lines[j]
        for k, char in enumerate(text):
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth == 0:
                    end = _jsx_terminator(lines, j, text[k + 1:])
                    if end is not None:
                        return end
    return None


def is_single_line_body(line: str, arrow_index: int) -> bool:
    """``=> { ... });`` and friends: the whole body sits on the arrow line."""
    after = line[arrow_index + 2:]
    opens = after.count("{")
    return opens > 0 and opens == after.count("}") and after.strip().endswith(SINGLE_LINE_BODY_ENDINGS)


def is_object_literal_return(line: str, arrow_index: int, brace_index: int) -> bool:
    """``=> ({`` returns an object literal rather than opening a body."""
    return line[arrow_index + 2:brace_index].strip().startswith("(")


def has_unmatched_brace_before(line: str, arrow_index: int) -> bool:
    """An open ``{`` before the arrow, as in ``onClick={() => go()}``."""
    before = line[:arrow_index]
    return before.count("{") > before.count("}")


def find_single_expression_end(lines: list[str], index: int, arrow_index: int) -> int:
    """End of an arrow whose body is a bare expression."""
    line = lines[index]
    rest = line[arrow_index + 2:]
    if any(char in rest for char in ";,)"):
        return index + 1

    before = line[:arrow_index]
    depth = before.count("(") - before.count(")")
    for j in range(index + 1, len(lines)):
        for char in lines[j]:
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth <= 0:
                    return j + 1
        stripped = lines[j].strip()
        if stripped.startswith(EXPRESSION_TERMINATORS):
            return j + 1
        if depth <= 0 and stripped.endswith(";"):
            return j + 1
    return len(lines)
