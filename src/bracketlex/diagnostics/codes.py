"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (construction options)
        2000-2999: Syntax errors (template parser failures)
        3000-3999: Resolution errors (language tag resolution)
        4000-4999: Loading errors (lexicon resources and inheritance)
        5000-5999: Extension errors (named template functions)
    """

    # Configuration errors (1000-1999)
    LANGUAGES_REQUIRED = 1001
    INVALID_OPTION = 1002
    UNKNOWN_OPTION = 1003

    # Syntax errors (2000-2999)
    UNMATCHED_BRACKET = 2001
    UNKNOWN_CONTEXT = 2002
    UNSUPPORTED_REFERENCE = 2003
    NESTING_DEPTH_EXCEEDED = 2004

    # Resolution errors (3000-3999)
    NO_LANGUAGE_FOUND = 3001

    # Loading errors (4000-4999)
    LOAD_TIMEOUT = 4001
    LOAD_FAILED = 4002
    BASE_LOAD_FAILED = 4003

    # Extension errors (5000-5999)
    UNKNOWN_EXTENSION = 5001
    INVALID_EXTENSION_NAME = 5002


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Pattern location for error reporting.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line or
                column is less than 1.
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics: a stable code, a one-line
    message, and optional location and hint.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Pattern location (None for non-syntax errors)
        hint: Suggestion for fixing the error
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like the Rust compiler.

        Example output:
            error[UNMATCHED_BRACKET]: Unmatched '[': Hello [ <-- HERE --> _1
              --> line 1, column 7
              = help: Close every '[' with ']' or escape it as '~['

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {_escape_control(self.message)}"]
        if self.span is not None:
            lines.append(f"  --> line {self.span.line}, column {self.span.column}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)


def _escape_control(text: str) -> str:
    # Keep each diagnostic on its own lines in logs.
    return text.replace("\r", "\\r").replace("\n", "\\n")
