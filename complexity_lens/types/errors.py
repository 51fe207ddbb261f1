"""
Structured error handling for Complexity Lens.

Every error carries an internal code, a severity, a user-facing message and
an ErrorContext describing where it happened. The analysis core raises these
only at its edges (parsing, descriptor decoding, configuration); the engines
themselves catch them, log, and degrade to "no information for this item".
"""

import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

from complexity_lens.constants import utcnow


class ErrorCode(IntEnum):
    """Internal error codes for categorization."""

    # Parsing/Analysis Errors (3000-3999)
    LANGUAGE_UNSUPPORTED = 3001
    PARSE_FAILED = 3002

    # Configuration Errors (4000-4999)
    INVALID_CONFIG = 4001

    # User Input Errors (6000-6999)
    VALIDATION_FAILED = 6003


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class RecoveryAction:
    """Suggested action to recover from an error."""

    description: str
    command: str | None = None
    automated: bool = False


@dataclass
class ErrorContext:
    """Context information for an error."""

    operation: str | None = None
    file_path: str | None = None
    language: str | None = None
    component: str | None = None
    timestamp: datetime = field(default_factory=utcnow)
    stack: str | None = None
    additional_info: dict[str, Any] = field(default_factory=dict)


class ComplexityLensError(Exception):
    """Base error class for Complexity Lens."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        user_message: str,
        severity: str = ErrorSeverity.MEDIUM,
        context: ErrorContext | None = None,
        recovery_actions: list[RecoveryAction] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.severity = severity
        self.user_message = user_message
        self.context = context or ErrorContext()
        self.recovery_actions = recovery_actions or []
        self.original_error = original_error

        self.context.timestamp = utcnow()
        if original_error:
            self.context.stack = "".join(traceback.format_exception(original_error))

    def get_formatted_message(self) -> str:
        """Get a formatted error message for display to users."""
        parts = [
            f"[Error] {self.user_message}",
            f"   Code: {self.code.value}",
        ]

        if self.context.operation:
            parts.append(f"   Operation: {self.context.operation}")
        if self.context.file_path:
            parts.append(f"   File: {self.context.file_path}")
        if self.context.language:
            parts.append(f"   Language: {self.context.language}")

        if self.recovery_actions:
            parts.append("")
            parts.append("Suggested actions:")
            for i, action in enumerate(self.recovery_actions, 1):
                parts.append(f"   {i}. {action.description}")
                if action.command:
                    parts.append(f"      Run: {action.command}")

        return "\n".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "name": self.__class__.__name__,
            "code": self.code.value,
            "message": str(self),
            "user_message": self.user_message,
            "severity": self.severity,
            "context": {
                "operation": self.context.operation,
                "file_path": self.context.file_path,
                "language": self.context.language,
                "component": self.context.component,
                "timestamp": self.context.timestamp.isoformat(),
                "additional_info": self.context.additional_info,
            },
            "recovery_actions": [
                {"description": a.description, "command": a.command, "automated": a.automated}
                for a in self.recovery_actions
            ],
            "original_error": str(self.original_error) if self.original_error else None,
        }


class SourceParseError(ComplexityLensError):
    """Source text did not produce a clean syntax tree."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.PARSE_FAILED,
            message=message,
            user_message=user_message or "Source could not be parsed.",
            severity=ErrorSeverity.LOW,
            context=context,
            original_error=original_error,
        )


class LanguageUnsupportedError(ComplexityLensError):
    """No tree-sitter grammar could be loaded for the requested language."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.LANGUAGE_UNSUPPORTED,
            message=message,
            user_message=user_message or "Language is not supported.",
            severity=ErrorSeverity.HIGH,
            context=context,
            recovery_actions=[
                RecoveryAction(
                    description="Install the tree-sitter grammar bundle",
                    command="pip install tree-sitter-language-pack",
                )
            ],
            original_error=original_error,
        )


class DescriptorError(ComplexityLensError):
    """A reported function descriptor is missing required fields."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message=message,
            user_message=user_message or "Function descriptor is invalid.",
            severity=ErrorSeverity.MEDIUM,
            context=context,
            original_error=original_error,
        )


class ConfigurationError(ComplexityLensError):
    """Error related to configuration issues."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: ErrorContext | None = None,
        recovery_actions: list[RecoveryAction] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CONFIG,
            message=message,
            user_message=user_message or "Configuration error occurred.",
            severity=ErrorSeverity.HIGH,
            context=context,
            recovery_actions=recovery_actions,
            original_error=original_error,
        )
