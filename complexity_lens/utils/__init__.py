"""
Complexity Lens utility modules.

- Logging (loguru, with per-file context)
- Innermost-interval queries shared by every attribution step
"""

from .intervals import encloses, find_innermost
from .logger import (
    configure_logging,
    get_current_file,
    is_debug_enabled,
    logger,
    with_file_context,
)

__all__ = [
    "configure_logging",
    "encloses",
    "find_innermost",
    "get_current_file",
    "is_debug_enabled",
    "logger",
    "with_file_context",
]
