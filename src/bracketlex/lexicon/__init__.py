"""Lexicon package: storage, language resolution and loading.

Provides the Lexicon and its store, the language resolver, the resource
loader protocol with a filesystem JSON loader, and the load coordinator
that deduplicates concurrent loads.

Python 3.13+.
"""

from .coordinator import LoadCoordinator
from .loading import LexiconResource, PathResourceLoader, ResourceLoader, parse_lexicon_document
from .resolver import language_candidates, resolve_language
from .store import Lexicon, LexiconStore, PendingLoad, validate_lexicon_data
from .types import (
    DomainName,
    ErrorCallback,
    LanguageTag,
    LexiconData,
    MessageKey,
    PatternSource,
    SuccessCallback,
)

__all__ = [
    "DomainName",
    "ErrorCallback",
    "LanguageTag",
    "Lexicon",
    "LexiconData",
    "LexiconResource",
    "LexiconStore",
    "LoadCoordinator",
    "MessageKey",
    "PathResourceLoader",
    "PatternSource",
    "PendingLoad",
    "ResourceLoader",
    "SuccessCallback",
    "language_candidates",
    "parse_lexicon_document",
    "resolve_language",
    "validate_lexicon_data",
]
