"""
Logging utility for Complexity Lens.

The analysis core never prints: parse failures and heuristic fallbacks are
reported through loguru so the caller decides where diagnostics go.

File Context Support:
- Uses contextvars to carry the file currently being analysed
- Use with_file_context() to scope log records to one file
- Works across asyncio tasks, so per-file tasks keep their own context
"""

import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Generator

from loguru import logger as loguru_logger

# ============================================================================
# File Context
# ============================================================================

_current_file: ContextVar[str | None] = ContextVar("current_file", default=None)


def get_current_file() -> str | None:
    """Get the file currently being analysed (if any)."""
    return _current_file.get()


@contextmanager
def with_file_context(file_path: str) -> Generator[str, None, None]:
    """
    Context manager for analysing one file.

    Log records emitted inside the block carry ``file`` in their extras.

    Args:
        file_path: Path of the file under analysis

    Yields:
        The file path
    """
    token = _current_file.set(file_path)
    try:
        with loguru_logger.contextualize(file=file_path):
            yield file_path
    finally:
        _current_file.reset(token)


# ============================================================================
# Logger Configuration
# ============================================================================


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled."""
    return os.environ.get("DEBUG", "").lower() == "true"


def configure_logging(debug: bool | None = None) -> int:
    """
    Route log output to stderr at a level matching the debug flag.

    Args:
        debug: Force debug output on or off; defaults to the DEBUG env var

    Returns:
        The loguru handler id, usable with ``logger.remove``
    """
    if debug is None:
        debug = is_debug_enabled()
    loguru_logger.remove()
    return loguru_logger.add(
        sys.stderr,
        level="DEBUG" if debug else "WARNING",
        format="<level>{level: <8}</level> | {name}:{function} | {message} | {extra}",
    )


# Export loguru logger for direct use
logger = loguru_logger
