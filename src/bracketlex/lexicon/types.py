"""Type aliases for the lexicon domain.

Provides semantic type aliases used throughout the lexicon package and by
user code when annotating Localizer call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Mapping

__all__ = [
    "DomainName",
    "ErrorCallback",
    "LanguageTag",
    "LexiconData",
    "MessageKey",
    "PatternSource",
    "SuccessCallback",
]

type LanguageTag = str
"""Language tag (e.g., 'en', 'en-GB', 'i-default', '*')."""

type DomainName = str
"""Namespace inside a lexicon; '*' is the default domain."""

type MessageKey = str
"""Entry key within a domain (e.g., 'files.count')."""

type PatternSource = str
"""Raw bracket-notation pattern."""

type LexiconData = Mapping[DomainName, Mapping[MessageKey, PatternSource]]
"""Raw lexicon content: domain → key → pattern."""

type SuccessCallback = Callable[[], object]
"""Called with no arguments once a lexicon is present."""

type ErrorCallback = Callable[[BaseException], object]
"""Called with the failure (LexiconLoadError or LoadTimeoutError)."""
