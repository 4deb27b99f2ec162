"""Structured error types with recovery suggestions.

Accessibility failures are never raised; they are returned as
``Violation`` values. These errors only cover the edges of the system:
reading element snapshots and loading configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories of errors for organization and handling."""

    SNAPSHOT = "snapshot"  # Unreadable or malformed element snapshot
    CONFIGURATION = "configuration"  # Invalid config file or values


@dataclass
class A11yGuardError(Exception):
    """Base class for structured errors with recovery suggestions.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to use when this error terminates the CLI.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 3

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        """Return the formatted error message."""
        return self.format(use_color=False)


class SnapshotError(A11yGuardError):
    """Element snapshot could not be read or parsed."""

    def __init__(self, message: str, path: str | None = None, reason: str | None = None):
        details: dict[str, Any] = {}
        if path:
            details["path"] = path
        if reason:
            details["reason"] = reason
        super().__init__(
            category=ErrorCategory.SNAPSHOT,
            message=message,
            suggestion="Export the element tree as JSON: a list of elements or {\"elements\": [...]}",
            details=details,
        )


class ConfigError(A11yGuardError):
    """Configuration file is invalid."""

    def __init__(self, message: str, path: str | None = None, reason: str | None = None):
        details: dict[str, Any] = {}
        if path:
            details["path"] = path
        if reason:
            details["reason"] = reason
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion="Check a11y-guard.config.json against the documented keys",
            details=details,
        )
