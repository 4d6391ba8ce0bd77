"""Diagnostic system for bracketlex errors.

Provides structured error diagnostics with codes, spans and hints.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    BracketLexError,
    ConfigurationError,
    LexiconLoadError,
    LoadTimeoutError,
    NoLanguageFoundError,
    TemplateSyntaxError,
    UnknownExtensionError,
)
from .templates import ErrorTemplate

__all__ = [
    "BracketLexError",
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "LexiconLoadError",
    "LoadTimeoutError",
    "NoLanguageFoundError",
    "SourceSpan",
    "TemplateSyntaxError",
    "UnknownExtensionError",
]
