"""
Complexity Lens type definitions.

This module exports the shared descriptor, boundary and error types.
"""

# Core types
from .core import (
    FunctionBoundary,
    FunctionDescriptor,
    FunctionNodeType,
    Variant,
    coerce_descriptors,
)

# Error types
from .errors import (
    ComplexityLensError,
    ConfigurationError,
    DescriptorError,
    ErrorCode,
    ErrorContext,
    ErrorSeverity,
    LanguageUnsupportedError,
    RecoveryAction,
    SourceParseError,
)

__all__ = [
    # Core types
    "FunctionBoundary",
    "FunctionDescriptor",
    "FunctionNodeType",
    "Variant",
    "coerce_descriptors",
    # Error types
    "ErrorCode",
    "ErrorSeverity",
    "RecoveryAction",
    "ErrorContext",
    "ComplexityLensError",
    "ConfigurationError",
    "DescriptorError",
    "LanguageUnsupportedError",
    "SourceParseError",
]
