"""Tree-sitter parsing for JavaScript and TypeScript sources.

Parsers are created lazily per grammar and cached for the life of the
process. ``ParsedSource`` keeps the tree together with the encoded source so
byte offsets reported by tree-sitter can be turned back into 1-based line
numbers and character columns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Iterator

from tree_sitter import Node, Parser, Tree

from complexity_lens.constants import DEFAULT_GRAMMAR, GRAMMAR_BY_EXTENSION
from complexity_lens.types.errors import (
    ErrorContext,
    LanguageUnsupportedError,
    SourceParseError,
)
from complexity_lens.utils.logger import logger

_parsers: dict[str, Parser] = {}


def grammar_for_path(file_path: str | None) -> str:
    """Pick the tree-sitter grammar for a file name.

    ``.tsx`` gets the TSX grammar, ``.ts``/``.mts``/``.cts`` get TypeScript,
    everything else (including no path at all) is JavaScript with JSX.
    """
    if not file_path:
        return DEFAULT_GRAMMAR
    return GRAMMAR_BY_EXTENSION.get(PurePath(file_path).suffix.lower(), DEFAULT_GRAMMAR)


def get_parser(grammar: str) -> Parser:
    """Return the cached parser for ``grammar``, creating it on first use.

    Raises:
        LanguageUnsupportedError: If the grammar cannot be loaded.
    """
    parser = _parsers.get(grammar)
    if parser is not None:
        return parser

    try:
        import tree_sitter_language_pack as tslp

        lang = tslp.get_language(grammar)
        parser = Parser(lang)
    except Exception as e:
        raise LanguageUnsupportedError(
            f"Failed to load tree-sitter grammar '{grammar}': {e}",
            context=ErrorContext(
                operation="get_parser",
                language=grammar,
                component="parsing",
            ),
            original_error=e,
        ) from e

    _parsers[grammar] = parser
    logger.debug("Initialized tree-sitter parser for {}", grammar)
    return parser


@dataclass
class ParsedSource:
    """A parsed file plus the offset tables needed to report positions."""

    source: str
    source_bytes: bytes
    tree: Tree
    grammar: str
    file_path: str | None = None
    line_offsets: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.line_offsets:
            offsets = [0]
            for index, byte in enumerate(self.source_bytes):
                if byte == 0x0A:
                    offsets.append(index + 1)
            self.line_offsets = offsets

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def line_count(self) -> int:
        return len(self.line_offsets)

    def line_bytes(self, row: int) -> bytes:
        """Raw bytes of a 0-based row, without its line terminator."""
        start, end = self.line_byte_range(row)
        return self.source_bytes[start:end]

    def line_byte_range(self, row: int) -> tuple[int, int]:
        """Byte range of a 0-based row, excluding ``\\n`` (and a trailing ``\\r``)."""
        start = self.line_offsets[row]
        if row + 1 < len(self.line_offsets):
            end = self.line_offsets[row + 1] - 1
        else:
            end = len(self.source_bytes)
        if end > start and self.source_bytes[end - 1] == 0x0D:
            end -= 1
        return start, end

    def line_text(self, row: int) -> str:
        """Decoded text of a 0-based row without its terminator."""
        return self.line_bytes(row).decode("utf-8", errors="replace")

    def char_column(self, point: tuple[int, int]) -> int:
        """Convert a tree-sitter (row, byte column) point to a 0-based column.

        Columns count UTF-16 code units, as the linter does, so a character
        outside the Basic Multilingual Plane takes two.
        """
        row, byte_column = point
        prefix = self.source_bytes[self.line_offsets[row]:self.line_offsets[row] + byte_column]
        return len(prefix.decode("utf-8", errors="replace").encode("utf-16-le")) // 2

    def text(self, node: Node) -> str:
        return self.source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def parse_source(source: str, file_path: str | None = None) -> ParsedSource:
    """Parse ``source`` with the grammar chosen by ``file_path``.

    Raises:
        LanguageUnsupportedError: If the grammar cannot be loaded.
        SourceParseError: If tree-sitter fails or the tree contains errors.
    """
    grammar = grammar_for_path(file_path)
    parser = get_parser(grammar)
    source_bytes = source.encode("utf-8")
    context = ErrorContext(
        operation="parse_source",
        file_path=file_path,
        language=grammar,
        component="parsing",
    )

    try:
        tree = parser.parse(source_bytes)
    except Exception as e:
        raise SourceParseError(
            f"tree-sitter failed on {file_path or '<source>'}: {e}",
            context=context,
            original_error=e,
        ) from e

    if tree.root_node.has_error:
        raise SourceParseError(
            f"Syntax errors in {file_path or '<source>'}",
            user_message="Source contains syntax errors; no decision points reported.",
            context=context,
        )

    return ParsedSource(
        source=source,
        source_bytes=source_bytes,
        tree=tree,
        grammar=grammar,
        file_path=file_path,
    )


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and its descendants in document pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))
