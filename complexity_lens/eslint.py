"""
ESLint integration.

Turns ESLint JSON results into function descriptors and reads the complexity
rule's settings from flat-config source text. ESLint itself is not run here;
callers hand over its ``--format=json`` output.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterable, Mapping

from complexity_lens.constants import DEFAULT_COMPLEXITY_THRESHOLD
from complexity_lens.naming import FunctionNamer, extract_name_by_regex
from complexity_lens.parsing.tree_sitter_wrapper import parse_source
from complexity_lens.types.core import FunctionDescriptor, FunctionNodeType, Variant
from complexity_lens.types.errors import SourceParseError
from complexity_lens.utils.logger import logger

CONFIG_NAMES = ("eslint.config.js", "eslint.config.mjs", "eslint.config.cjs")

COMPLEXITY_MESSAGE = re.compile(r"complexity of (\d+)", re.IGNORECASE)
COMPLEXITY_RULE = re.compile(r"complexity:\s*\[[\"'](?:warn|error)[\"'],\s*\{\s*max:\s*(\d+)")
MODIFIED_VARIANT = re.compile(r"variant:\s*[\"']modified[\"']")

WARNING_SEVERITY = 1


# ============================================================================
# Results
# ============================================================================


def relative_path(file_path: str, project_root: str) -> str:
    """``file_path`` relative to ``project_root`` when it lies inside it."""
    prefix = project_root.rstrip("/") + "/"
    return file_path[len(prefix):] if file_path.startswith(prefix) else file_path


class _Namer:
    """Per-file naming with one parse per file."""

    def __init__(self, sources: Mapping[str, str] | None) -> None:
        self.sources = sources or {}
        self._namers: dict[str, FunctionNamer | None] = {}

    def name(self, absolute: str, relative: str, line: int, node_type: FunctionNodeType) -> str:
        source = self.sources.get(relative, self.sources.get(absolute))
        if source is None:
            return "unknown"

        if relative not in self._namers:
            try:
                self._namers[relative] = FunctionNamer(parse_source(source, relative))
            except SourceParseError as e:
                logger.debug("Naming {} by regex: {}", relative, e)
                self._namers[relative] = None

        namer = self._namers[relative]
        name = namer.name(line, node_type) if namer is not None else None
        return name or extract_name_by_regex(source.split("\n"), line, node_type)


def descriptors_from_eslint_results(
    results: Iterable[Mapping[str, Any]],
    project_root: str,
    sources: Mapping[str, str] | None = None,
) -> list[FunctionDescriptor]:
    """
    Extract complexity-reported functions from ESLint results.

    Args:
        results: ESLint JSON results, one entry per file.
        project_root: Prefix stripped from each result's ``filePath``.
        sources: Source text per file (relative or absolute path), used to
            name functions. Files without source are named ``unknown``.

    Returns:
        Descriptors sorted by complexity, highest first. Entries with the
        same file, name and line keep the highest complexity.
    """
    namer = _Namer(sources)
    best: dict[str, FunctionDescriptor] = {}

    for file_result in results:
        absolute = str(file_result.get("filePath", ""))
        file_path = relative_path(absolute, project_root)
        for message in file_result.get("messages") or []:
            if message.get("ruleId") != "complexity" or message.get("severity") != WARNING_SEVERITY:
                continue
            match = COMPLEXITY_MESSAGE.search(str(message.get("message", "")))
            if not match:
                continue
            try:
                line = int(message["line"])
            except (KeyError, TypeError, ValueError):
                logger.debug("Skipping complexity message without a line in {}", file_path)
                continue

            node_type = FunctionNodeType.coerce(message.get("nodeType"))
            name = namer.name(absolute, file_path, line, node_type)
            complexity = int(match.group(1))
            key = f"{file_path}:{name}:{line}"
            existing = best.get(key)
            if existing is not None and complexity <= (existing.complexity or 0):
                continue
            best[key] = FunctionDescriptor(
                line=line,
                function_name=name,
                node_type=node_type,
                complexity=complexity,
                column=int(message.get("column") or 1),
                file_path=file_path,
            )

    return sorted(best.values(), key=lambda d: d.complexity or 0, reverse=True)


# ============================================================================
# Configuration
# ============================================================================


def parse_complexity_threshold(config_text: str, default: int = DEFAULT_COMPLEXITY_THRESHOLD) -> int:
    """Highest ``max`` of all complexity rule entries, or ``default`` if none."""
    values = [int(value) for value in COMPLEXITY_RULE.findall(config_text)]
    if not values:
        logger.warning("Could not find complexity threshold in config, defaulting to {}", default)
        return default
    return max(values)


def parse_complexity_variant(config_text: str) -> Variant:
    """``modified`` when the complexity rule sets that variant, else ``classic``."""
    return Variant.MODIFIED if MODIFIED_VARIANT.search(config_text) else Variant.CLASSIC


def find_eslint_config(project_root: str | Path) -> Path | None:
    """The project's flat config file, in ESLint's lookup order."""
    for name in CONFIG_NAMES:
        path = Path(project_root) / name
        if path.is_file():
            return path
    return None


def get_complexity_level(complexity: int | str) -> str:
    """Grade a complexity score; higher scores get worse grades."""
    value = int(complexity)
    if value >= 20:
        return "low"
    if value >= 15:
        return "medium"
    if value > 10:
        return "high"
    if value > 6:
        return "acceptable"
    return "good"
